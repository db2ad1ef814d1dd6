"""In-memory object-storage client.

A complete implementation of `ObjectStorageClient` backed by dictionaries:
objects, canned ACLs, delimiter grouping and paginated listings. Useful for
testing, development, and as the reference for other clients.

Example:
    >>> import asyncio
    >>> from bucketfs.client.memory import MemoryStorageClient
    >>> client = MemoryStorageClient()
    >>> async def example():
    ...     await client.put_object("b", "docs/a.txt", b"hello", {"ContentType": "text/plain"})
    ...     head = await client.head_object("b", "docs/a.txt")
    ...     return head.content_length, head.content_type
    >>> asyncio.run(example())
    (5, 'text/plain')

Note:
    All methods are async. Data is lost when the process exits.
"""

from __future__ import annotations

import hashlib
import io
from collections import defaultdict
from collections.abc import AsyncIterator, Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any

from bucketfs.core.exceptions import ClientFault, NotFoundError
from bucketfs.models.base import PRIVATE_ACL
from bucketfs.protocols.client import (
    ALL_USERS_GROUP_URI,
    READ_PERMISSION,
    CommonPrefix,
    DeleteObjectsOutput,
    GetObjectOutput,
    Grant,
    Grantee,
    HeadObjectOutput,
    ListObjectsPage,
    ObjectAcl,
    PutObjectOutput,
    S3Object,
)

AUTHENTICATED_USERS_GROUP_URI = "http://acs.amazonaws.com/groups/global/AuthenticatedUsers"
OWNER_ID = "memory-owner"
DEFAULT_STORAGE_CLASS = "STANDARD"

CANNED_ACLS = frozenset(
    {
        "private",
        "public-read",
        "public-read-write",
        "authenticated-read",
        "bucket-owner-read",
        "bucket-owner-full-control",
    }
)


class MemoryStream:
    """Async byte stream over an in-memory buffer.

    Example:
        >>> import asyncio
        >>> from bucketfs.client.memory import MemoryStream
        >>> stream = MemoryStream(b"abcdef")
        >>> asyncio.run(stream.read(4)), asyncio.run(stream.read())
        (b'abcd', b'ef')
    """

    def __init__(self, data: bytes) -> None:
        self._buffer = io.BytesIO(data)

    async def read(self, amt: int | None = None) -> bytes:
        return self._buffer.read(-1 if amt is None else amt)

    async def iter_chunks(self, chunk_size: int = 1024) -> AsyncIterator[bytes]:
        while chunk := self._buffer.read(chunk_size):
            yield chunk

    def close(self) -> None:
        self._buffer.close()

    @property
    def closed(self) -> bool:
        return self._buffer.closed

    async def __aenter__(self) -> MemoryStream:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()


@dataclass
class StoredObject:
    """One object held by `MemoryStorageClient`."""

    data: bytes
    content_type: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    storage_class: str = DEFAULT_STORAGE_CLASS
    acl: str = PRIVATE_ACL
    last_modified: datetime = field(default_factory=lambda: datetime.now(UTC).replace(microsecond=0))

    @property
    def etag(self) -> str:
        return f'"{hashlib.md5(self.data).hexdigest()}"'


class MemoryStorageClient:
    """In-memory object store.

    Buckets spring into existence on first use.

    Args:
        page_size: Maximum entries per listing page (``MaxKeys``).

    Example:
        >>> from bucketfs.client.memory import MemoryStorageClient
        >>> MemoryStorageClient(page_size=2).page_size
        2
    """

    def __init__(self, page_size: int = 1000) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        self._buckets: dict[str, dict[str, StoredObject]] = defaultdict(dict)
        self._initialized = False

    async def initialize(self) -> None:
        """No-op for memory storage."""
        self._initialized = True

    async def close(self) -> None:
        """Nothing to release; stored objects are kept."""
        self._initialized = False

    def keys(self, bucket: str) -> list[str]:
        """All keys in ``bucket``, sorted."""
        return sorted(self._buckets[bucket])

    # --- Object Operations ---

    async def put_object(
        self,
        bucket: str,
        key: str,
        body: Any,
        options: Mapping[str, Any] | None = None,
    ) -> PutObjectOutput:
        options = options or {}
        acl = self._check_acl(options.get("ACL", PRIVATE_ACL), key)
        stored = StoredObject(
            data=_read_body(body),
            content_type=options.get("ContentType"),
            metadata=dict(options.get("Metadata") or {}),
            storage_class=options.get("StorageClass", DEFAULT_STORAGE_CLASS),
            acl=acl,
        )
        self._buckets[bucket][key] = stored
        return PutObjectOutput(etag=stored.etag)

    async def get_object(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> GetObjectOutput:
        stored = self._get(bucket, key)
        return GetObjectOutput(
            body=MemoryStream(stored.data),
            **vars(self._head(stored)),
        )

    async def head_object(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> HeadObjectOutput:
        return self._head(self._get(bucket, key))

    async def delete_object(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> None:
        self._buckets[bucket].pop(key, None)

    async def delete_objects(
        self, bucket: str, keys: Sequence[str], options: Mapping[str, Any] | None = None
    ) -> DeleteObjectsOutput:
        if len(keys) > 1000:
            raise ClientFault("DeleteObjects accepts at most 1000 keys", status_code=400, code="MalformedXML")
        objects = self._buckets[bucket]
        for key in keys:
            objects.pop(key, None)
        return DeleteObjectsOutput(deleted=tuple(keys))

    async def copy_object(
        self,
        bucket: str,
        key: str,
        source_bucket: str,
        source_key: str,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        options = options or {}
        source = self._get(source_bucket, source_key)
        acl = self._check_acl(options.get("ACL", PRIVATE_ACL), key)
        self._buckets[bucket][key] = replace(
            source,
            metadata=dict(source.metadata),
            storage_class=options.get("StorageClass", source.storage_class),
            acl=acl,
            last_modified=datetime.now(UTC).replace(microsecond=0),
        )

    async def object_exists(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> bool:
        return key in self._buckets[bucket]

    # --- Listing ---

    async def list_objects_v2(
        self,
        bucket: str,
        prefix: str = "",
        delimiter: str | None = None,
        continuation_token: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> ListObjectsPage:
        objects = self._buckets[bucket]
        entries: list[S3Object | CommonPrefix] = []
        seen_prefixes: set[str] = set()

        for key in sorted(k for k in objects if k.startswith(prefix)):
            if delimiter:
                rest = key[len(prefix) :]
                head, sep, _ = rest.partition(delimiter)
                if sep:
                    common = prefix + head + delimiter
                    if common not in seen_prefixes:
                        seen_prefixes.add(common)
                        entries.append(CommonPrefix(prefix=common))
                    continue
            stored = objects[key]
            entries.append(
                S3Object(
                    key=key,
                    last_modified=stored.last_modified,
                    etag=stored.etag,
                    size=len(stored.data),
                    storage_class=stored.storage_class,
                )
            )

        if continuation_token is not None:
            entries = [e for e in entries if (e.source_key or "") > continuation_token]

        page = entries[: self.page_size]
        next_token = page[-1].source_key if len(entries) > self.page_size else None
        return ListObjectsPage(
            contents=tuple(e for e in page if isinstance(e, S3Object)),
            common_prefixes=tuple(e for e in page if isinstance(e, CommonPrefix)),
            next_continuation_token=next_token,
        )

    # --- ACL ---

    async def get_object_acl(
        self, bucket: str, key: str, options: Mapping[str, Any] | None = None
    ) -> ObjectAcl:
        stored = self._get(bucket, key)
        return ObjectAcl(grants=_grants_for(stored.acl), owner_id=OWNER_ID)

    async def put_object_acl(
        self, bucket: str, key: str, acl: str, options: Mapping[str, Any] | None = None
    ) -> None:
        stored = self._get(bucket, key)
        stored.acl = self._check_acl(acl, key)

    # --- Internal helpers ---

    def _get(self, bucket: str, key: str) -> StoredObject:
        try:
            return self._buckets[bucket][key]
        except KeyError:
            raise NotFoundError(f"No such key: {key}", key=key, code="NoSuchKey") from None

    @staticmethod
    def _head(stored: StoredObject) -> HeadObjectOutput:
        return HeadObjectOutput(
            content_length=len(stored.data),
            content_type=stored.content_type,
            metadata=dict(stored.metadata),
            storage_class=stored.storage_class,
            etag=stored.etag,
            last_modified=stored.last_modified,
        )

    @staticmethod
    def _check_acl(acl: str, key: str) -> str:
        if acl not in CANNED_ACLS:
            raise ClientFault(f"Invalid canned ACL: {acl}", key=key, status_code=400, code="InvalidArgument")
        return acl


def _read_body(body: Any) -> bytes:
    if body is None:
        return b""
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    return body.read()


def _grants_for(acl: str) -> tuple[Grant, ...]:
    owner = Grant(Grantee("CanonicalUser", id=OWNER_ID), "FULL_CONTROL")
    all_users = Grantee("Group", uri=ALL_USERS_GROUP_URI)
    if acl == "public-read":
        return (owner, Grant(all_users, READ_PERMISSION))
    if acl == "public-read-write":
        return (owner, Grant(all_users, READ_PERMISSION), Grant(all_users, "WRITE"))
    if acl == "authenticated-read":
        return (owner, Grant(Grantee("Group", uri=AUTHENTICATED_USERS_GROUP_URI), READ_PERMISSION))
    return (owner,)
