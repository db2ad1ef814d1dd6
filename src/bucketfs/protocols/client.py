"""Object-storage client protocol.

Defines the capability interface the adapter consumes, and the result shapes
each call returns. Every result is its own dataclass with a fixed field set,
so normalization works from each variant's declared fields.

Example:
    >>> from bucketfs.protocols.client import CommonPrefix, S3Object
    >>> obj = S3Object(key="docs/a.txt", size=12)
    >>> obj.source_key
    'docs/a.txt'
    >>> CommonPrefix(prefix="docs/images/").source_key
    'docs/images/'
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

ALL_USERS_GROUP_URI = "http://acs.amazonaws.com/groups/global/AllUsers"
READ_PERMISSION = "READ"


@runtime_checkable
class ByteStream(Protocol):
    """Async readable body of a fetched object."""

    async def read(self, amt: int | None = None) -> bytes:
        """Read up to ``amt`` bytes, or everything that is left."""
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...


# --- Result variants ---


@dataclass(frozen=True)
class S3Object:
    """One object entry from a listing."""

    key: str
    last_modified: datetime | None = None
    etag: str | None = None
    size: int | None = None
    storage_class: str | None = None

    @property
    def source_key(self) -> str | None:
        return self.key


@dataclass(frozen=True)
class CommonPrefix:
    """A grouped key prefix from a delimited listing: one directory level."""

    prefix: str

    @property
    def source_key(self) -> str | None:
        return self.prefix


@dataclass(frozen=True)
class HeadObjectOutput:
    """Object metadata without the body."""

    content_length: int | None = None
    content_type: str | None = None
    metadata: dict[str, str] | None = None
    storage_class: str | None = None
    etag: str | None = None
    version_id: str | None = None
    last_modified: datetime | None = None

    @property
    def source_key(self) -> str | None:
        return None


@dataclass(frozen=True)
class GetObjectOutput(HeadObjectOutput):
    """Object metadata and its (unconsumed) body."""

    body: ByteStream | None = None


@dataclass(frozen=True)
class PutObjectOutput:
    """Acknowledgement of an upload."""

    etag: str | None = None
    version_id: str | None = None

    @property
    def source_key(self) -> str | None:
        return None


@dataclass(frozen=True)
class ListObjectsPage:
    """One page of a ListObjectsV2 response."""

    contents: Sequence[S3Object] = ()
    common_prefixes: Sequence[CommonPrefix] = ()
    next_continuation_token: str | None = None

    @property
    def is_truncated(self) -> bool:
        return self.next_continuation_token is not None


@dataclass(frozen=True)
class Grantee:
    """Recipient of an ACL grant: a canonical user or a well-known group."""

    type: str
    uri: str | None = None
    id: str | None = None
    display_name: str | None = None
    email_address: str | None = None


@dataclass(frozen=True)
class Grant:
    grantee: Grantee | None
    permission: str | None


@dataclass(frozen=True)
class ObjectAcl:
    """Grants attached to one object.

    Example:
        >>> from bucketfs.protocols.client import ObjectAcl, Grant, Grantee, ALL_USERS_GROUP_URI
        >>> acl = ObjectAcl(grants=(Grant(Grantee("Group", uri=ALL_USERS_GROUP_URI), "READ"),))
        >>> acl.is_public_read()
        True
    """

    grants: Sequence[Grant] = ()
    owner_id: str | None = None

    def is_public_read(self) -> bool:
        """Whether any grant gives READ to the AllUsers group."""
        for grant in self.grants:
            if grant.grantee is None:
                continue
            if grant.grantee.uri == ALL_USERS_GROUP_URI and grant.permission == READ_PERMISSION:
                return True
        return False


@dataclass(frozen=True)
class DeleteObjectError:
    key: str
    code: str | None = None
    message: str | None = None


@dataclass(frozen=True)
class DeleteObjectsOutput:
    deleted: Sequence[str] = ()
    errors: Sequence[DeleteObjectError] = field(default_factory=tuple)


# --- Capability interface ---


@runtime_checkable
class ObjectStorageClient(Protocol):
    """Capability interface over an object store.

    ``options`` mappings are forwarded verbatim to the store. A missing key
    must raise `bucketfs.core.exceptions.NotFoundError`; every other failure
    must raise `bucketfs.core.exceptions.ClientFault`.

    See Also:
        bucketfs.client.memory.MemoryStorageClient: In-memory implementation
        bucketfs.client.s3.Aioboto3StorageClient: S3 via aioboto3
    """

    async def initialize(self) -> None:
        """Open connections."""
        ...

    async def close(self) -> None:
        """Release connections."""
        ...

    async def put_object(
        self,
        bucket: str,
        key: str,
        body: Any,
        options: Mapping[str, Any] | None = None,
    ) -> PutObjectOutput:
        """Upload ``body`` (bytes, str or a binary file-like) under ``key``."""
        ...

    async def get_object(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> GetObjectOutput:
        """Fetch an object; the body is returned unconsumed."""
        ...

    async def head_object(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> HeadObjectOutput:
        """Fetch object metadata."""
        ...

    async def delete_object(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> None:
        """Delete one object. Deleting a missing key is not an error."""
        ...

    async def delete_objects(
        self, bucket: str, keys: Sequence[str], options: Mapping[str, Any] | None = None
    ) -> DeleteObjectsOutput:
        """Delete many objects in one request."""
        ...

    async def copy_object(
        self,
        bucket: str,
        key: str,
        source_bucket: str,
        source_key: str,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        """Server-side copy of ``source_bucket/source_key`` to ``key``."""
        ...

    async def list_objects_v2(
        self,
        bucket: str,
        prefix: str = "",
        delimiter: str | None = None,
        continuation_token: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> ListObjectsPage:
        """Fetch one page of keys under ``prefix``."""
        ...

    async def get_object_acl(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> ObjectAcl:
        """Fetch the object's ACL grants."""
        ...

    async def put_object_acl(
        self, bucket: str, key: str, acl: str, options: Mapping[str, Any] | None = None
    ) -> None:
        """Replace the object's ACL with a canned one."""
        ...

    async def object_exists(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> bool:
        """Whether ``key`` exists."""
        ...
