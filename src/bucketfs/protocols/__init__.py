"""Protocol definitions - the adapter's two seams."""

from bucketfs.protocols.client import (
    ALL_USERS_GROUP_URI,
    ByteStream,
    CommonPrefix,
    DeleteObjectError,
    DeleteObjectsOutput,
    GetObjectOutput,
    Grant,
    Grantee,
    HeadObjectOutput,
    ListObjectsPage,
    ObjectAcl,
    ObjectStorageClient,
    PutObjectOutput,
    S3Object,
)
from bucketfs.protocols.filesystem import FilesystemAdapter

__all__ = [
    # Consumed
    "ObjectStorageClient",
    "ByteStream",
    # Result variants
    "S3Object",
    "CommonPrefix",
    "HeadObjectOutput",
    "GetObjectOutput",
    "PutObjectOutput",
    "ListObjectsPage",
    "DeleteObjectsOutput",
    "DeleteObjectError",
    # ACL
    "ALL_USERS_GROUP_URI",
    "Grant",
    "Grantee",
    "ObjectAcl",
    # Provided
    "FilesystemAdapter",
]
