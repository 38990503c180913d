"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "sqlite://",
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)

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
    # Empty prefix keeps the public routes at /login and /users.
    API_PREFIX: str = ""
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    DATABASE_URL: str = "sqlite:///./database.sqlite"
    # Drop and recreate the schema on startup. Only honoured when APP_ENV=dev.
    DB_RESET_ON_STARTUP: bool = True

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    BCRYPT_ROUNDS: int = 10

    # Account inserted at startup with role 'admin'
    BOOTSTRAP_ADMIN_USERNAME: str = "haulmatic"
    BOOTSTRAP_ADMIN_PASSWORD: SecretStr = SecretStr("123456")
    BOOTSTRAP_ADMIN_FIRSTNAME: str = "John"
    BOOTSTRAP_ADMIN_LASTNAME: str = "Doe"

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.strip().startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a SQLite or PostgreSQL URL "
                "(e.g. sqlite:///./database.sqlite or postgresql://...)"
            )
        return v.strip()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = (v or "").strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("API_PREFIX")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        prefix = (v or "").strip().rstrip("/")
        if prefix and not prefix.startswith("/"):
            raise ValueError("API_PREFIX must be empty or start with '/' (e.g. /api)")
        return prefix

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("BOOTSTRAP_ADMIN_USERNAME", "BOOTSTRAP_ADMIN_FIRSTNAME", "BOOTSTRAP_ADMIN_LASTNAME")
    @classmethod
    def validate_bootstrap_fields(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Bootstrap admin username, firstname and lastname must be non-empty")
        return v.strip()

    @field_validator("BOOTSTRAP_ADMIN_PASSWORD")
    @classmethod
    def validate_bootstrap_password(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("BOOTSTRAP_ADMIN_PASSWORD must be set and non-empty")
        return v

    @property
    def reset_db_on_startup(self) -> bool:
        """Destructive schema reset applies only to development environments."""
        return self.DB_RESET_ON_STARTUP and self.APP_ENV == "dev"


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
