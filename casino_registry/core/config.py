"""
Application configuration management using Pydantic Settings.
All settings can be overridden via environment variables.
"""

import re
from datetime import timedelta
from functools import lru_cache
from typing import Any, List, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# <integer><unit>, e.g. "15m", "7d"
DURATION_PATTERN = re.compile(r"^(\d+)([smhd])$")

DURATION_UNITS = {
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string such as ``15m`` or ``7d``.

    Args:
        value: Duration in the form <integer><unit>, unit one of s, m, h, d

    Returns:
        The duration as a timedelta

    Raises:
        ValueError: If the string does not match the expected format
    """
    match = DURATION_PATTERN.match(value.strip()) if value else None
    if not match:
        raise ValueError(
            f"Invalid duration {value!r}: expected <integer><unit> with unit one of s, m, h, d"
        )
    amount, unit = match.groups()
    return int(amount) * DURATION_UNITS[unit]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "Casino Registry API"
    VERSION: str = "0.1.0"
    API_PREFIX: str = ""
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./data/casino_registry.db"

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database."""
        return self.DATABASE_URL.startswith("sqlite")

    # Tokens
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_SECRET: str
    ACCESS_TOKEN_EXPIRES_IN: str = "15m"
    REFRESH_TOKEN_SECRET: str
    REFRESH_TOKEN_EXPIRES_IN: str = "7d"
    # Off by default: the same refresh token stays valid until it expires or the user logs out
    REFRESH_TOKEN_ROTATION: bool = False

    # Refresh cookie
    REFRESH_TOKEN_COOKIE_NAME: str = "refreshToken"
    REFRESH_TOKEN_COOKIE_PATH: str = "/"
    REFRESH_TOKEN_COOKIE_SECURE: bool = False
    REFRESH_TOKEN_COOKIE_HTTPONLY: bool = True
    REFRESH_TOKEN_COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "lax"

    # Minimum seconds between two last-seen writes for the same user (0 = every request)
    LAST_SEEN_DEBOUNCE_SECONDS: int = 60

    @field_validator("ACCESS_TOKEN_EXPIRES_IN", "REFRESH_TOKEN_EXPIRES_IN")
    @classmethod
    def validate_duration(cls, v: str) -> str:
        """Reject unparseable or zero token lifetimes at startup."""
        if parse_duration(v) <= timedelta(0):
            raise ValueError(f"Token lifetime must be greater than zero, got {v!r}")
        return v.strip()

    @field_validator("ACCESS_TOKEN_SECRET", "REFRESH_TOKEN_SECRET")
    @classmethod
    def validate_secret(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Token secrets must be set and non-empty")
        return v

    @field_validator("LAST_SEEN_DEBOUNCE_SECONDS")
    @classmethod
    def validate_debounce(cls, v: int) -> int:
        if v < 0:
            raise ValueError("LAST_SEEN_DEBOUNCE_SECONDS must not be negative")
        return v

    @model_validator(mode="after")
    def validate_distinct_secrets(self) -> "Settings":
        """Access and refresh tokens must be signed with different secrets."""
        if self.ACCESS_TOKEN_SECRET == self.REFRESH_TOKEN_SECRET:
            raise ValueError("ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must differ")
        return self

    @property
    def access_token_lifetime(self) -> timedelta:
        return parse_duration(self.ACCESS_TOKEN_EXPIRES_IN)

    @property
    def refresh_token_lifetime(self) -> timedelta:
        return parse_duration(self.REFRESH_TOKEN_EXPIRES_IN)

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> List[str] | str:
        """Parse CORS origins from string or list."""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # First superuser (created on startup)
    DISABLE_BOOTSTRAP_USERS: bool = False  # Set to True to skip superuser creation
    FIRST_SUPERUSER_NAME: str = "Administrator"
    FIRST_SUPERUSER_EMAIL: str = "admin@example.com"
    FIRST_SUPERUSER_PASSWORD: str = "changethis"

    # Attachments
    UPLOAD_DIR: str = "./uploads"
    MAX_UPLOAD_FILES: int = 5
    MAX_UPLOAD_FILE_BYTES: int = 10 * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Return the settings instance built once at startup."""
    return Settings()  # type: ignore[call-arg]


settings = get_settings()
