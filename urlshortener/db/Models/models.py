from sqlalchemy import BigInteger, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc)


class URLItem(Base):
    __tablename__ = "urls"

    # BigInteger on Postgres, INTEGER on SQLite so autoincrement keeps working there
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)

    # Long enough for the default length plus one extra character per retry
    short_code = Column(String(64), unique=True, index=True, nullable=False)

    original_url = Column(Text, nullable=False)
    access_count = Column(BigInteger, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
