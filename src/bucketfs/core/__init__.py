"""Core configuration and exceptions."""

from bucketfs.core.config import Settings, get_settings
from bucketfs.core.exceptions import (
    BucketFSError,
    ClientFault,
    ConfigurationError,
    InvalidPathError,
    NotFoundError,
    StorageClientError,
)

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Exceptions
    "BucketFSError",
    "ClientFault",
    "ConfigurationError",
    "InvalidPathError",
    "NotFoundError",
    "StorageClientError",
]
