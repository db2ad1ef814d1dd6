"""
bucketfs - Object-Storage Buckets as Hierarchical Filesystems.

bucketfs presents an S3-compatible bucket as a filesystem: paths instead of
keys, directories emulated from key prefixes, one metadata record shape for
every result, and ACLs simplified to public/private visibility.

Key Features:
- Protocol-based design (swap storage clients without code changes)
- Root-prefix support (host several filesystems in one bucket)
- Directory emulation for keys without placeholder objects
- Explicit Success/Failure results for operations that may fail

Quick Start:
    >>> from bucketfs import S3Adapter, MemoryStorageClient
    >>> fs = S3Adapter(MemoryStorageClient(), "my-bucket", prefix="uploads")
    >>> async def main():
    ...     async with fs:
    ...         await fs.write("reports/q1.csv", b"a,b\\n1,2\\n")
    ...         return [r.path for r in await fs.list_contents("", recursive=True)]

Architecture:
    Adapter: S3Adapter
    Storage Clients: MemoryStorageClient, Aioboto3StorageClient (bucketfs.client.s3)
    Models: MetadataRecord, PathVisibility, WriteConfig, Success, Failure
"""

# Adapter
from bucketfs.adapter.emulation import emulate_directories
from bucketfs.adapter.normalizer import ResponseNormalizer
from bucketfs.adapter.s3 import S3Adapter

# Storage clients
from bucketfs.client.memory import MemoryStorageClient

# Configuration and errors
from bucketfs.core.config import Settings, get_settings
from bucketfs.core.exceptions import (
    BucketFSError,
    ClientFault,
    ConfigurationError,
    InvalidPathError,
    NotFoundError,
    StorageClientError,
)
from bucketfs.factory import create_adapter, create_client

# Models
from bucketfs.models import (
    EntryType,
    Failure,
    MetadataRecord,
    PathVisibility,
    Result,
    Success,
    Visibility,
    WriteConfig,
)

# Protocols
from bucketfs.protocols import FilesystemAdapter, ObjectStorageClient
from bucketfs.utils.paths import PathPrefixer

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Adapter
    "S3Adapter",
    "ResponseNormalizer",
    "emulate_directories",
    "PathPrefixer",
    # Clients
    "MemoryStorageClient",
    "create_adapter",
    "create_client",
    # Configuration
    "Settings",
    "get_settings",
    # Errors
    "BucketFSError",
    "StorageClientError",
    "NotFoundError",
    "ClientFault",
    "InvalidPathError",
    "ConfigurationError",
    # Models
    "EntryType",
    "Visibility",
    "MetadataRecord",
    "PathVisibility",
    "WriteConfig",
    "Result",
    "Success",
    "Failure",
    # Protocols
    "FilesystemAdapter",
    "ObjectStorageClient",
]
