"""Object-storage client implementations.

`Aioboto3StorageClient` lives in `bucketfs.client.s3` and is imported on
demand so the in-memory client works without opening AWS sessions.
"""

from bucketfs.client.memory import MemoryStorageClient, MemoryStream, StoredObject

__all__ = [
    "MemoryStorageClient",
    "MemoryStream",
    "StoredObject",
]
