"""
BrandAgent Backend - Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
       Fails fast if the signing secret is missing instead of silently
       falling back to a guessable default.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a module-level `settings` object.
Who:   Imported by main.py (default settings for the app factory) and by tests.
When:  Loaded once at module import time; validated in the app lifespan.

Design Decision:
    The settings object is handed to create_app() instead of being read
    from module globals deep inside services. Tests build their own
    Settings(...) pointing at a temporary database.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from brandagent.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field has a development default except `jwt_secret`, which must
    be provided. Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: Async SQLAlchemy URL for the relational store
    # Format: sqlite+aiosqlite:///<path> for the default single-file store
    database_url: str = Field(
        default="sqlite+aiosqlite:///./brand.db",
        description="Async SQLAlchemy connection URL",
    )

    # ── Tokens ────────────────────────────────────────────────────────────
    # Required: YES. Empty means startup fails in validate_required().
    jwt_secret: str = Field(default="", description="HMAC secret used to sign session tokens")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expires_hours: int = Field(default=24, ge=1, le=720)

    # ── Password Hashing ──────────────────────────────────────────────────
    # bcrypt cost factor; 4 is the library minimum (used by the test suite)
    bcrypt_rounds: int = Field(default=10, ge=4, le=16)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Startup Behaviour ─────────────────────────────────────────────────
    seed_demo_accounts: bool = Field(default=True)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        # Only symmetric algorithms make sense with a shared secret
        valid = {"HS256", "HS384", "HS512"}
        upper = v.upper()
        if upper not in valid:
            raise ValueError(f"Invalid jwt_algorithm '{v}'. Must be one of: {valid}")
        return upper

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required(self) -> None:
        """
        What:  Validates that security-critical settings are configured.
        When:  Called first thing in the app lifespan.
        Raises ConfigurationError listing every problem found.
        """
        errors = []
        if not self.jwt_secret or not self.jwt_secret.strip():
            errors.append(
                "JWT_SECRET is not set. Generate one with "
                "`python -c 'import secrets; print(secrets.token_urlsafe(48))'`"
            )
        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
