"""Application configuration with Pydantic Settings.

Settings are loaded from environment variables and .env files and are
validated once, at startup. Every write path shares the same validated
instance instead of re-checking credentials before each call.

Examples:
    >>> from showcase.config import get_settings
    >>> settings = get_settings()
    >>> settings.BLOB_BACKEND
    <BlobBackendType.LOCAL: 'local'>

    >>> settings.storage_config().cdn_host
    'cdn.gridrr.com'

Tests:
    - tests/unit/test_config.py::TestSettings
    - tests/unit/test_config.py::TestStorageConfigProjection
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from showcase.storage.config import (
    DEFAULT_CDN_HOST,
    DEFAULT_USAGE_FOLDERS,
    ESTIMATED_OBJECT_SIZE,
    MAX_VIDEO_BYTES,
    STORAGE_QUOTA_BYTES,
    StorageConfig,
)


class BlobBackendType(str, Enum):
    """Supported blob store backends."""

    LOCAL = "local"
    MINIO = "minio"


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings.

    Attributes:
        DATABASE_URL: Document store connection string (SQLite or PostgreSQL)
        BLOB_BACKEND: Which blob store implementation to use
        BLOB_ROOT: Root directory for the local blob backend
        MINIO_ENDPOINT: S3-compatible endpoint (host:port) for the minio backend
        MINIO_ACCESS_KEY: Access key for the minio backend
        MINIO_SECRET_KEY: Secret key for the minio backend
        MINIO_BUCKET: Bucket holding all showcase blobs
        MINIO_SECURE: Use TLS when talking to the endpoint
        CDN_HOST: Host that serves blobs publicly
        STORAGE_QUOTA_BYTES: Provider quota the usage report is measured against
        ESTIMATED_OBJECT_SIZE: Per-object size assumed by the usage report
        USAGE_FOLDERS: Folders walked by the usage report
        MAX_VIDEO_BYTES: Largest accepted demo video
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Document store
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./showcase.db",
        description="Database connection string",
    )

    # Blob store
    BLOB_BACKEND: BlobBackendType = Field(
        default=BlobBackendType.LOCAL,
        description="Blob store backend",
    )
    BLOB_ROOT: str = Field(
        default="./output/blobs",
        description="Root directory for the local blob backend",
    )
    MINIO_ENDPOINT: str | None = Field(default=None, description="MinIO/S3 endpoint")
    MINIO_ACCESS_KEY: str | None = Field(default=None, description="MinIO access key")
    MINIO_SECRET_KEY: str | None = Field(default=None, description="MinIO secret key")
    MINIO_BUCKET: str = Field(default="showcase", description="MinIO bucket")
    MINIO_SECURE: bool = Field(default=True, description="Use TLS for MinIO")

    # Public delivery
    CDN_HOST: str = Field(
        default=DEFAULT_CDN_HOST,
        description="Host serving uploaded blobs",
    )

    # Usage accounting
    STORAGE_QUOTA_BYTES: int = Field(
        default=STORAGE_QUOTA_BYTES,
        description="Provider storage quota in bytes",
        gt=0,
    )
    ESTIMATED_OBJECT_SIZE: int = Field(
        default=ESTIMATED_OBJECT_SIZE,
        description="Assumed size of each stored object in bytes",
        ge=0,
    )
    USAGE_FOLDERS: list[str] = Field(
        default_factory=lambda: list(DEFAULT_USAGE_FOLDERS),
        description="Folders included in the usage report",
    )

    # Submission limits
    MAX_VIDEO_BYTES: int = Field(
        default=MAX_VIDEO_BYTES,
        description="Maximum demo video size in bytes",
        gt=0,
    )

    # Application Settings
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    DEBUG: bool = Field(
        default=True,
        description="Enable debug mode",
    )

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL format."""
        valid_prefixes = ("sqlite", "postgresql", "postgres")
        if not any(v.startswith(prefix) for prefix in valid_prefixes):
            raise ValueError(
                f"DATABASE_URL must start with one of: {valid_prefixes}"
            )
        return v

    @field_validator("CDN_HOST")
    @classmethod
    def validate_cdn_host(cls, v: str) -> str:
        """CDN_HOST is a bare host; the scheme and path are added by the namer."""
        v = v.strip()
        if not v or "://" in v or "/" in v:
            raise ValueError("CDN_HOST must be a bare host name, e.g. 'cdn.example.com'")
        return v

    @model_validator(mode="after")
    def validate_blob_backend(self) -> "Settings":
        """Ensure the selected blob backend has its credentials."""
        if self.BLOB_BACKEND == BlobBackendType.MINIO:
            missing = [
                name
                for name in ("MINIO_ENDPOINT", "MINIO_ACCESS_KEY", "MINIO_SECRET_KEY")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(
                    f"Blob backend 'minio' requires: {', '.join(missing)}"
                )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database."""
        return self.DATABASE_URL.startswith("sqlite")

    def storage_config(self) -> StorageConfig:
        """Project the storage-related settings into a StorageConfig."""
        return StorageConfig(
            root=self.BLOB_ROOT,
            cdn_host=self.CDN_HOST,
            quota_bytes=self.STORAGE_QUOTA_BYTES,
            estimated_object_size=self.ESTIMATED_OBJECT_SIZE,
            usage_folders=list(self.USAGE_FOLDERS),
            max_video_bytes=self.MAX_VIDEO_BYTES,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: The application settings.
    """
    return Settings()
