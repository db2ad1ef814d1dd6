"""Client and adapter factory.

Builds storage clients and adapters from `Settings`.

Example:
    >>> from bucketfs.core.config import Settings
    >>> from bucketfs.factory import create_adapter
    >>> fs = create_adapter(Settings(client_backend="memory", bucket="assets", prefix="site"))
    >>> type(fs.client).__name__, fs.bucket, fs.prefix
    ('MemoryStorageClient', 'assets', 'site/')
"""

from __future__ import annotations

import logging

from bucketfs.adapter.s3 import S3Adapter
from bucketfs.client.memory import MemoryStorageClient
from bucketfs.core.config import Settings
from bucketfs.core.exceptions import ConfigurationError
from bucketfs.protocols.client import ObjectStorageClient

logger = logging.getLogger(__name__)

CLIENT_BACKENDS = ("s3", "memory")


def create_client(settings: Settings) -> ObjectStorageClient:
    """Instantiate the storage client named by ``settings.client_backend``."""
    backend = settings.client_backend.lower()

    if backend == "memory":
        return MemoryStorageClient(page_size=settings.list_page_size)

    if backend == "s3":
        from bucketfs.client.s3 import Aioboto3StorageClient

        return Aioboto3StorageClient.from_settings(settings)

    raise ConfigurationError(
        f"Unknown client backend '{settings.client_backend}'. Use one of: {', '.join(CLIENT_BACKENDS)}."
    )


def create_adapter(settings: Settings, client: ObjectStorageClient | None = None) -> S3Adapter:
    """Build an adapter for the configured bucket.

    Raises:
        ConfigurationError: No bucket is configured.
    """
    if not settings.bucket:
        raise ConfigurationError("No bucket configured; set BUCKETFS_BUCKET")

    client = client or create_client(settings)
    logger.debug(f"Creating adapter for bucket {settings.bucket!r} (prefix {settings.prefix!r})")
    return S3Adapter(
        client,
        settings.bucket,
        prefix=settings.prefix,
        options=settings.adapter_options(),
    )
