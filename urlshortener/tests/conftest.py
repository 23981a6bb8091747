import dataclasses
import threading
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from urlshortener.main import app
from urlshortener.core.exceptions import RepositoryError
from urlshortener.core.outcomes import Conflict, NotFound, URLRecord
from urlshortener.db.Models.models import Base
from urlshortener.db.Connection import database
from urlshortener.db.repository import SQLAlchemyURLRepository, URLRepository


# Create in-memory SQLite database for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class InMemoryURLRepository(URLRepository):
    """Dict-backed repository with knobs for forcing short code collisions."""

    def __init__(self, conflicts=0, always_conflict=False):
        self.records = {}
        self.insert_calls = []
        self.conflicts_remaining = conflicts
        self.always_conflict = always_conflict
        self._next_id = 1
        self._lock = threading.Lock()

    def insert(self, short_code, original_url):
        with self._lock:
            self.insert_calls.append(short_code)
            if self.always_conflict or short_code in self.records:
                return Conflict(short_code)
            if self.conflicts_remaining > 0:
                self.conflicts_remaining -= 1
                return Conflict(short_code)
            now = datetime.now(timezone.utc)
            record = URLRecord(
                id=self._next_id,
                short_code=short_code,
                original_url=original_url,
                access_count=0,
                created_at=now,
                updated_at=now,
            )
            self._next_id += 1
            self.records[short_code] = record
            return record

    def _replace(self, short_code, **changes):
        with self._lock:
            record = self.records.get(short_code)
            if record is None:
                return NotFound(short_code)
            record = dataclasses.replace(record, updated_at=datetime.now(timezone.utc), **changes)
            self.records[short_code] = record
            return record

    def read_and_increment(self, short_code):
        with self._lock:
            record = self.records.get(short_code)
            if record is None:
                return NotFound(short_code)
            record = dataclasses.replace(
                record,
                access_count=record.access_count + 1,
                updated_at=datetime.now(timezone.utc),
            )
            self.records[short_code] = record
            return record

    def update(self, short_code, original_url):
        return self._replace(short_code, original_url=original_url)

    def delete(self, short_code):
        with self._lock:
            if self.records.pop(short_code, None) is None:
                return NotFound(short_code)
            return None

    def read_stats(self, short_code):
        with self._lock:
            return self.records.get(short_code, NotFound(short_code))


class FailingURLRepository(InMemoryURLRepository):
    """Every storage call fails as if the database went away."""

    def insert(self, short_code, original_url):
        self.insert_calls.append(short_code)
        raise RepositoryError("repository.insert", short_code)

    def read_and_increment(self, short_code):
        raise RepositoryError("repository.read_and_increment", short_code)


@pytest.fixture
def db_session():
    """Creates a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def repository(db_session):
    return SQLAlchemyURLRepository(db_session)


@pytest.fixture
def memory_repository():
    return InMemoryURLRepository()


@pytest.fixture
def client(db_session):
    """Creates a test client with overridden database dependency."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[database.get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_urls():
    """Provides sample URLs for testing."""
    return [
        "https://example.com/test1",
        "https://google.com/search?q=test",
        "https://github.com/user/repo",
    ]
