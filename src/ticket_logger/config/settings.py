from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, blank_to_none


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration
    POSTGRES_DRIVER: str = "psycopg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "ticket_logger"

    # Full URL that wins over the POSTGRES_* parts (e.g. "sqlite+aiosqlite:///./ticket_logger.db")
    DATABASE_URL_OVERRIDE: str | None = None

    # Test database configuration
    TEST_POSTGRES_DB: str | None = None
    TESTING: bool = False

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False
    DB_CREATE_ALL: bool = True

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/ticket-logger")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False
    LOG_USE_QUEUE: bool = False
    LOG_QUEUE_MAX_SIZE: int = 0
    LOG_QUEUE_BLOCKING: bool = False

    # Uploaded region images
    UPLOAD_PATH: Path = Path("uploads")
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_UPLOAD_BYTES: int = 5_000_000

    # i18n
    DEFAULT_LOCALE: Literal["en", "es"] = "en"

    # Signing material (read only; nothing signs tokens yet)
    KEYSTORE_PATH: Path | None = None
    KEYSTORE_PASSWORD: SecretStr | None = None
    KEYSTORE_ALIAS: str | None = None

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the database URL for the current environment.

        - `DATABASE_URL_OVERRIDE` is returned verbatim when set.
        - With `TESTING=True` and `TEST_POSTGRES_DB` set, the test database name is used
          so tests never touch the regular database.
        - Otherwise the URL is built from the POSTGRES_* parts.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        database = self.POSTGRES_DB
        if self.TESTING and self.TEST_POSTGRES_DB:
            database = self.TEST_POSTGRES_DB

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{database}"
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before Literal validation runs,
        so `LOG_LEVEL=debug` in the environment is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", "DEFAULT_LOCALE", mode="before")
    def normalize_lowercase(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    @field_validator(
        "DATABASE_URL_OVERRIDE",
        "TEST_POSTGRES_DB",
        "KEYSTORE_PATH",
        "KEYSTORE_PASSWORD",
        "KEYSTORE_ALIAS",
        mode="before",
    )
    def empty_as_unset(cls, v):
        return blank_to_none(v)

    model_config = SettingsConfigDict(
        # .env at the project root (src/ticket_logger/config/settings.py -> 3 levels up)
        env_file=str(Path(__file__).resolve().parents[3] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() avoids re-reading the environment on every dependency call.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
