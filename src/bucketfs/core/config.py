"""bucketfs configuration.

Settings loaded from environment variables with the BUCKETFS_ prefix.

Example:
    >>> from bucketfs.core.config import get_settings
    >>> settings = get_settings(bucket="assets", log_level="DEBUG")
    >>> settings.log_level
    'DEBUG'
    >>> settings.client_backend
    's3'
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Loads from environment variables with BUCKETFS_ prefix. ``options`` can be
    given as a JSON object, e.g. ``BUCKETFS_OPTIONS='{"CacheControl": "max-age=60"}'``.

    Example:
        >>> from bucketfs.core.config import Settings
        >>> s = Settings(bucket="media", prefix="/uploads")
        >>> s.prefix
        'uploads'
        >>> s.list_page_size
        1000
    """

    model_config = SettingsConfigDict(
        env_prefix="BUCKETFS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Client
    client_backend: str = Field(default="s3", description="Storage client: s3 or memory")
    bucket: str = Field(default="", description="Bucket name")
    prefix: str = Field(default="", description="Root prefix inside the bucket")

    # Connection (s3 backend)
    region: str = Field(default="us-east-1", description="Bucket region")
    endpoint_url: str | None = Field(default=None, description="Custom endpoint for S3-compatible stores")
    access_key_id: str | None = Field(default=None, description="Access key; falls back to the AWS chain")
    secret_access_key: str | None = Field(default=None, description="Secret key; falls back to the AWS chain")

    # Request options
    default_acl: str | None = Field(default=None, description="ACL applied to uploads when none is given")
    options: dict[str, Any] = Field(default_factory=dict, description="Default request options")
    list_page_size: int = Field(default=1000, ge=1, le=1000)

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("prefix")
    @classmethod
    def strip_leading_slashes(cls, v: str) -> str:
        """Keys never start with a slash."""
        return v.lstrip("/")

    def adapter_options(self) -> dict[str, Any]:
        """Default request options for the adapter, including ``default_acl``."""
        options = dict(self.options)
        if self.default_acl and "ACL" not in options:
            options["ACL"] = self.default_acl
        return options


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Example:
        >>> from bucketfs.core.config import get_settings
        >>> s = get_settings(bucket="b", default_acl="public-read")
        >>> s.adapter_options()
        {'ACL': 'public-read'}
    """
    return Settings(**overrides)
