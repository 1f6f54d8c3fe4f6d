# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SEED_DATA_PATH)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, catching configuration
# errors early rather than at runtime.
# =============================================================================

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# data/seed.json at the project root
DEFAULT_SEED_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "seed.json"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a development default, so the API starts with no
    .env file at all.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Data Settings
    # -------------------------------------------------------------------------

    SEED_DATA_PATH: Path = Field(
        default=DEFAULT_SEED_DATA_PATH,
        description="JSON file with the initial application records"
    )

    # -------------------------------------------------------------------------
    # Listing Settings
    # -------------------------------------------------------------------------

    DEFAULT_PAGE_SIZE: int = Field(
        default=10,
        ge=1,
        description="Page size used when a request doesn't specify one"
    )

    MAX_PAGE_SIZE: int = Field(
        default=100,
        ge=1,
        description="Largest page size a request may ask for"
    )

    # -------------------------------------------------------------------------
    # Observability
    # -------------------------------------------------------------------------

    METRICS_ENABLED: bool = Field(
        default=True,
        description="Expose Prometheus metrics at /metrics"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Don't fail if .env doesn't exist
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def seed_data_file(self) -> Path:
        """Absolute path of the seed file (relative paths resolve from the CWD)."""
        return self.SEED_DATA_PATH.expanduser().resolve()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
