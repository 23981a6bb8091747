import pytest
from pydantic import ValidationError

from urlshortener.core.config import Settings

ENV_VARS = [
    "ENV", "LOG_LEVEL", "DATABASE_URL", "POSTGRES_USER", "POSTGRES_PASSWORD",
    "POSTGRES_SERVER", "POSTGRES_PORT", "POSTGRES_DB", "SHORT_CODE_LENGTH",
    "SHORT_CODE_MAX_RETRIES",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = Settings(_env_file=None)
    assert s.ENV == "dev"
    assert s.SHORT_CODE_LENGTH == 7
    assert s.SHORT_CODE_MAX_RETRIES == 5
    assert s.PORT == 8080
    assert s.log_level == "DEBUG"
    assert s.database_url == "postgresql+psycopg2://postgres:@localhost:5432/url_shortener"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("ENV", "PROD")
    monkeypatch.setenv("POSTGRES_USER", "svc")
    monkeypatch.setenv("POSTGRES_PASSWORD", "secret")
    monkeypatch.setenv("POSTGRES_SERVER", "db")
    monkeypatch.setenv("SHORT_CODE_LENGTH", "9")

    s = Settings(_env_file=None)

    assert s.ENV == "prod"
    assert s.log_level == "INFO"
    assert s.SHORT_CODE_LENGTH == 9
    assert s.database_url == "postgresql+psycopg2://svc:secret@db:5432/url_shortener"


def test_database_url_override(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///local.db")
    assert Settings(_env_file=None).database_url == "sqlite:///local.db"


def test_explicit_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert Settings(_env_file=None).log_level == "WARNING"


@pytest.mark.parametrize("name,value", [
    ("ENV", "qa"),
    ("SHORT_CODE_LENGTH", "0"),
    ("SHORT_CODE_MAX_RETRIES", "0"),
])
def test_invalid_values_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
