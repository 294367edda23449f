"""
Postboard API: Application Configuration
=========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads environment variables (or a .env file),
       validates types/ranges, and exposes a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; production requirements are
       checked during app startup (see `validate_required_for_production`).

Environment variables:
    ENVIRONMENT    development | test | production
    HOST / PORT    Bind address used by `python -m postboard`
    API_PREFIX     Base path every route is mounted under (default /v1)
    JWT_SECRET     HMAC-SHA256 signing secret for issued tokens
    DATABASE_URL   Nominal only; the stores are in-memory
    CORS_ORIGINS   Comma-separated list of allowed browser origins
    LOG_LEVEL      DEBUG, INFO, WARNING, ERROR or CRITICAL
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "your-super-secret-jwt-key-change-in-production"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults. A production deployment MUST set
    JWT_SECRET and DATABASE_URL explicitly or startup is refused.
    """

    # ── Runtime ───────────────────────────────────────────────────────────
    environment: str = Field(default="development")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Normalizes and restricts the environment name."""
        valid = {"development", "test", "production"}
        lower = v.strip().lower()
        if lower not in valid:
            raise ValueError(f"Invalid environment '{v}'. Must be one of: {sorted(valid)}")
        return lower

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Every route, including docs and health, lives under this prefix
    api_prefix: str = Field(default="/v1")

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        """Forces a leading slash and strips any trailing one ('' allowed)."""
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    # ── Authentication ────────────────────────────────────────────────────
    # Tokens carry no expiry claim, so rotating this secret is the only way
    # to invalidate every issued token.
    jwt_secret: str = Field(
        default=DEFAULT_JWT_SECRET,
        min_length=1,
        description="HMAC-SHA256 secret used to sign and verify bearer tokens",
    )

    # ── Database (nominal) ────────────────────────────────────────────────
    database_url: str = Field(default="sqlite://./dev.db")

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:3000,http://localhost:5173")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into the list CORSMiddleware expects."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Logging ───────────────────────────────────────────────────────────
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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Refuses a production start without an explicit secret and database URL.
        When:  Called during app startup (lifespan) and by `python -m postboard`.
        How:   A field counts as explicitly set only if it came from the
               environment or .env file (pydantic's `model_fields_set`).
        """
        if not self.is_production:
            return

        errors = []
        for field_name in ("jwt_secret", "database_url"):
            if field_name not in self.model_fields_set:
                errors.append(f"{field_name.upper()} must be set when ENVIRONMENT=production")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
