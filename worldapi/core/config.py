"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# Placeholder secret for local development; rejected when APP_ENV=prod.
DEFAULT_SESSION_SECRET = "change-me-in-production"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # MySQL connection parts for the world database
    DB_HOSTNAME: str = "localhost"
    DB_PORT: int = 3306
    DB_USERNAME: str = "root"
    DB_PASSWORD: SecretStr = SecretStr("")
    DB_DATABASE: str = "world"
    # Full SQLAlchemy URL; when set it wins over the DB_* parts (e.g. sqlite:// in tests)
    DATABASE_URL: str | None = None

    # Server-side sessions; the cookie carries a signed session id
    SESSION_SECRET: SecretStr = SecretStr(DEFAULT_SESSION_SECRET)
    SESSION_COOKIE_NAME: str = "sessions"
    SESSION_MAX_AGE_DAYS: int = 14
    SESSION_COOKIE_SECURE: bool = False

    BCRYPT_ROUNDS: int = 12

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    @field_validator("DB_HOSTNAME", "DB_USERNAME", "DB_DATABASE")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("database connection settings must be non-empty")
        return v.strip()

    @field_validator("DB_PORT")
    @classmethod
    def validate_db_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("DB_PORT must be between 1 and 65535")
        return v

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("SESSION_SECRET")
    @classmethod
    def validate_session_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("SESSION_SECRET must be set and non-empty")
        return v

    @field_validator("SESSION_COOKIE_NAME")
    @classmethod
    def validate_cookie_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SESSION_COOKIE_NAME must be set and non-empty")
        return v.strip()

    @field_validator("SESSION_MAX_AGE_DAYS")
    @classmethod
    def validate_session_max_age(cls, v: int) -> int:
        if v < 1 or v > 365:
            raise ValueError("SESSION_MAX_AGE_DAYS must be between 1 and 365")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @model_validator(mode="after")
    def reject_default_secret_in_prod(self) -> "Settings":
        if (
            self.APP_ENV == "prod"
            and self.SESSION_SECRET.get_secret_value() == DEFAULT_SESSION_SECRET
        ):
            raise ValueError("SESSION_SECRET must be changed from the default when APP_ENV=prod")
        return self

    @property
    def database_url(self) -> str | URL:
        """SQLAlchemy URL: DATABASE_URL if given, else MySQL (PyMySQL) built from DB_* parts."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "mysql+pymysql",
            username=self.DB_USERNAME,
            password=self.DB_PASSWORD.get_secret_value() or None,
            host=self.DB_HOSTNAME,
            port=self.DB_PORT,
            database=self.DB_DATABASE,
            query={"charset": "utf8mb4"},
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
