"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, model_validator
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SUPABASE
    # ===================
    supabase_url: str = Field(
        ...,
        description="Supabase project URL"
    )
    supabase_key: str = Field(
        ...,
        description="Supabase anon/public key"
    )

    # ===================
    # API SECURITY
    # ===================
    api_key: Optional[str] = Field(
        None,
        description="Shared key expected in X-API-Key from the session gateway"
    )

    # ===================
    # IMPORT SETTINGS
    # ===================
    import_max_rows: int = Field(
        default=10000,
        ge=1,
        le=100000,
        description="Maximum rows accepted in a single import request"
    )
    invoice_due_days: int = Field(
        default=30,
        ge=0,
        le=365,
        description="Days between invoice issue date and due date"
    )
    default_country: str = Field(
        default="US",
        min_length=2,
        max_length=2,
        description="Country assigned to imported customers/vendors without one"
    )
    row_error_dump_chars: int = Field(
        default=200,
        ge=20,
        le=2000,
        description="Max characters of the column dump in 'Monto no encontrado' errors"
    )
    import_job_error_limit: int = Field(
        default=100,
        ge=0,
        le=1000,
        description="Row errors kept on each import job record"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Origins allowed by the CORS middleware"
    )

    # ===================
    # VALIDATION
    # ===================
    @model_validator(mode="after")
    def require_api_key_in_production(self) -> "Settings":
        # X-User-Id is trusted as-is, so production must check X-API-Key
        if self.environment == "production" and not self.api_key:
            raise ValueError("API_KEY is required when ENVIRONMENT=production")
        return self

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
