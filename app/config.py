"""
Application configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import List, Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from pathlib import Path

from app.domain.services.file_storage import RECEIPT_CONTENT_TYPES

# Get the base directory
BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_JWT_SECRET = "development-secret-key-change-in-production"
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level when not in debug mode")

    # API Configuration
    api_title: str = Field(default="HR Self-Service Portal")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api/v1")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Entry and user store
    storage_backend: str = Field(default="sqlalchemy", description="sqlalchemy or memory")
    database_url: str = Field(default=f"sqlite:///{BASE_DIR / 'hr_portal.db'}", description="SQLAlchemy database URL")
    database_echo: bool = Field(default=False, description="Log SQL statements")
    auto_create_tables: bool = Field(default=True, description="Create missing tables on startup")
    seed_fixtures: bool = Field(default=False, description="Load demo users and entries on startup")

    # JWT Configuration
    jwt_secret_key: str = Field(default=DEFAULT_JWT_SECRET, description="JWT secret key")
    jwt_algorithm: str = Field(default="HS256")
    jwt_access_token_expire_minutes: int = Field(default=7 * 24 * 60)

    # CORS
    cors_origins: str | List[str] = Field(default=",".join(DEFAULT_CORS_ORIGINS))
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(default=["*"])
    cors_allow_headers: List[str] = Field(default=["*"])

    # File Upload
    file_storage_backend: str = Field(default="local", description="local or supabase")
    upload_dir: str = Field(default=str(BASE_DIR / "uploads"), description="Directory for local uploads")
    upload_base_url: str = Field(default="/uploads", description="URL prefix served for local uploads")
    max_upload_size_mb: int = Field(default=10)
    allowed_receipt_types: str | List[str] = Field(default=",".join(RECEIPT_CONTENT_TYPES))

    # Supabase Storage
    supabase_url: Optional[str] = Field(default=None, description="Supabase project URL")
    supabase_service_key: Optional[str] = Field(default=None, description="Supabase service role key")
    receipts_bucket: str = Field(default="receipts")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return list(DEFAULT_CORS_ORIGINS)
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("allowed_receipt_types", mode="before")
    @classmethod
    def parse_receipt_types(cls, v):
        """Parse receipt MIME types from comma-separated string or list."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return list(RECEIPT_CONTENT_TYPES)
        if isinstance(v, str):
            return [content_type.strip().lower() for content_type in v.split(",") if content_type.strip()]
        return v

    @field_validator("storage_backend", "file_storage_backend", mode="before")
    @classmethod
    def normalize_backend(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment.lower() == "testing"

    @property
    def max_upload_size_bytes(self) -> int:
        """Get max upload size in bytes."""
        return self.max_upload_size_mb * 1024 * 1024

    def validate_environment(self) -> None:
        """Validate that the configuration is usable outside development."""
        problems = []

        if not self.jwt_secret_key or self.jwt_secret_key == DEFAULT_JWT_SECRET:
            problems.append("JWT_SECRET_KEY must be set to a non-default value")

        if self.storage_backend not in ("sqlalchemy", "memory"):
            problems.append(f"STORAGE_BACKEND must be 'sqlalchemy' or 'memory', got '{self.storage_backend}'")

        if self.file_storage_backend not in ("local", "supabase"):
            problems.append(
                f"FILE_STORAGE_BACKEND must be 'local' or 'supabase', got '{self.file_storage_backend}'"
            )

        if self.file_storage_backend == "supabase" and not (self.supabase_url and self.supabase_service_key):
            problems.append("SUPABASE_URL and SUPABASE_SERVICE_KEY are required for supabase file storage")

        if problems:
            raise ValueError(f"Invalid configuration: {'; '.join(problems)}")


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use this function to get settings throughout the application.
    """
    settings = Settings()

    # Validate environment in production
    if settings.is_production:
        settings.validate_environment()

    return settings


# Create a global settings instance
settings = get_settings()
