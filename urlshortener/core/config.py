from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

ENV_DEV = "dev"
ENV_STAGE = "stage"
ENV_PROD = "prod"


class Settings(BaseSettings):
    PROJECT_NAME: str = "URL Shortener"
    ENV: str = ENV_DEV
    LOG_LEVEL: Optional[str] = None

    # Database (DATABASE_URL wins over the POSTGRES_* parts when set)
    DATABASE_URL: Optional[str] = None
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "url_shortener"

    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_RECYCLE: int = 1800
    DB_POOL_TIMEOUT: int = 30

    # Short code generation
    SHORT_CODE_LENGTH: int = Field(7, ge=1)
    SHORT_CODE_MAX_RETRIES: int = Field(5, ge=1)

    REQUEST_TIMEOUT_SECONDS: float = Field(10.0, gt=0)

    # HTTP server
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    TLS_CERT_FILE: Optional[str] = None
    TLS_KEY_FILE: Optional[str] = None

    class Config:
        env_file = ".env"

    @field_validator("ENV")
    def validate_env(cls, v):
        v = v.lower()
        if v not in (ENV_DEV, ENV_STAGE, ENV_PROD):
            raise ValueError(f"ENV must be one of {ENV_DEV}, {ENV_STAGE}, {ENV_PROD}")
        return v

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def log_level(self) -> str:
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()
        return "INFO" if self.ENV == ENV_PROD else "DEBUG"

settings = Settings()
