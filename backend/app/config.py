"""
Pokedex Backend — Application Configuration
============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the logging setup and the bootstrap.
When:  Loaded once at module import time; validated before the app starts.

Environment variables (case-insensitive):
    DATA_FILE          Path of the JSON document holding the collection
    ENVIRONMENT        development | production | test
    PORT               Listening port (BACKEND_PORT is also accepted)
    BACKEND_HOST       Listening interface
    CORS_ORIGINS       Comma-separated origins, "*" for any
    LOG_LEVEL          DEBUG | INFO | WARNING | ERROR | CRITICAL
"""

from pathlib import Path
from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

# backend/data/pokemon.json
DEFAULT_DATA_FILE = Path(__file__).resolve().parent.parent / "data" / "pokemon.json"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development. Production
    deployments set ENVIRONMENT=production so that internal error detail
    is never returned in API responses.
    """

    # ── Storage ───────────────────────────────────────────────────────────
    # What: Single JSON file holding the whole Pokemon collection
    # Default is the seed file beside the package, whatever the working
    # directory; a relative DATA_FILE still resolves against the cwd
    data_file: str = Field(
        default=str(DEFAULT_DATA_FILE),
        description="Path of the JSON document backing the Pokemon collection",
    )

    # ── Runtime Mode ──────────────────────────────────────────────────────
    environment: str = Field(default="development")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensures environment is one of the known deployment modes."""
        valid = {"development", "production", "test"}
        lower = v.lower()
        if lower not in valid:
            raise ValueError(f"Invalid environment '{v}'. Must be one of: {valid}")
        return lower

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    # ── Pagination ────────────────────────────────────────────────────────
    default_page_size: int = Field(default=20, ge=1, le=100)
    max_page_size: int = Field(default=100, ge=1, le=1000)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs; "*" allows every origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    port: int = Field(
        default=3001,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("port", "backend_port"),
    )

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
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
        "populate_by_name": True,
        "extra": "ignore",
    }


# Singleton instance used by the module-level app and the bootstrap
settings = Settings()
