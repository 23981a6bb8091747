from abc import ABC, abstractmethod
from typing import Optional
from sqlalchemy import delete, insert, select, update
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from urlshortener.core.exceptions import RepositoryError
from urlshortener.core.outcomes import Conflict, InsertResult, LookupResult, NotFound, URLRecord
from urlshortener.db.Models.models import URLItem

logger = logging.getLogger(__name__)

urls = URLItem.__table__

# unique index created for short_code by `unique=True, index=True`
SHORT_CODE_INDEX = "ix_urls_short_code"


class URLRepository(ABC):
    """Storage contract for the ``urls`` table.

    Each operation is atomic from the caller's point of view. Expected
    outcomes come back as values (``Conflict``, ``NotFound``); anything
    else is raised as ``RepositoryError``.
    """

    @abstractmethod
    def insert(self, short_code: str, original_url: str) -> InsertResult:
        """Store a new record, or return ``Conflict`` if the code is taken."""

    @abstractmethod
    def read_and_increment(self, short_code: str) -> LookupResult:
        """Bump access_count by one and return the record after the bump."""

    @abstractmethod
    def update(self, short_code: str, original_url: str) -> LookupResult:
        """Replace original_url, leaving access_count as it is."""

    @abstractmethod
    def delete(self, short_code: str) -> Optional[NotFound]:
        """Remove the record. Returns None on success."""

    @abstractmethod
    def read_stats(self, short_code: str) -> LookupResult:
        """Read the record without touching it."""


def _to_record(row) -> URLRecord:
    return URLRecord(**row._mapping)


def _is_short_code_conflict(e: IntegrityError) -> bool:
    # Postgres names the violated index; SQLite only reports table.column
    constraint = getattr(getattr(e.orig, "diag", None), "constraint_name", None)
    if constraint is not None:
        return constraint == SHORT_CODE_INDEX
    error_msg = str(e.orig).lower()
    return SHORT_CODE_INDEX in error_msg or "urls.short_code" in error_msg


class SQLAlchemyURLRepository(URLRepository):

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, op: str, short_code: str, e: Exception):
        self.db.rollback()
        logger.error(f"{op} failed for short_code={short_code}: {e}")
        return RepositoryError(op, short_code)

    def _fetch_one(self, op: str, short_code: str, stmt) -> LookupResult:
        try:
            row = self.db.execute(stmt).first()
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(op, short_code, e) from e
        if row is None:
            return NotFound(short_code)
        return _to_record(row)

    def insert(self, short_code: str, original_url: str) -> InsertResult:
        op = "repository.insert"
        stmt = (
            insert(urls)
            .values(short_code=short_code, original_url=original_url)
            .returning(*urls.c)
        )
        try:
            row = self.db.execute(stmt).one()
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if _is_short_code_conflict(e):
                logger.info(f"Short code already taken: {short_code}")
                return Conflict(short_code)
            logger.error(f"{op} integrity error for short_code={short_code}: {e}")
            raise RepositoryError(op, short_code, "integrity error") from e
        except SQLAlchemyError as e:
            raise self._fail(op, short_code, e) from e
        return _to_record(row)

    def read_and_increment(self, short_code: str) -> LookupResult:
        # One UPDATE ... RETURNING so concurrent resolves never lose a count
        stmt = (
            update(urls)
            .where(urls.c.short_code == short_code)
            .values(access_count=urls.c.access_count + 1)
            .returning(*urls.c)
        )
        return self._fetch_one("repository.read_and_increment", short_code, stmt)

    def update(self, short_code: str, original_url: str) -> LookupResult:
        stmt = (
            update(urls)
            .where(urls.c.short_code == short_code)
            .values(original_url=original_url)
            .returning(*urls.c)
        )
        return self._fetch_one("repository.update", short_code, stmt)

    def delete(self, short_code: str) -> Optional[NotFound]:
        op = "repository.delete"
        try:
            result = self.db.execute(delete(urls).where(urls.c.short_code == short_code))
            affected = result.rowcount
            if affected > 1:
                # short_code is unique; more than one row means the table is corrupt
                self.db.rollback()
                logger.critical(f"{op} matched {affected} rows for short_code={short_code}")
                raise RepositoryError(op, short_code, f"expected 1 affected row, got {affected}")
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail(op, short_code, e) from e
        if affected == 0:
            return NotFound(short_code)
        return None

    def read_stats(self, short_code: str) -> LookupResult:
        stmt = select(*urls.c).where(urls.c.short_code == short_code)
        return self._fetch_one("repository.read_stats", short_code, stmt)
