"""S3 filesystem adapter.

Presents a bucket (optionally below a root prefix) as a hierarchical
filesystem. Each operation is a short, strictly sequential composition of
`ObjectStorageClient` calls; the adapter keeps no state between calls beyond
its bucket, prefix and default request options.

Example:
    >>> import asyncio
    >>> from bucketfs.adapter.s3 import S3Adapter
    >>> from bucketfs.client.memory import MemoryStorageClient
    >>> async def example():
    ...     async with S3Adapter(MemoryStorageClient(), "assets", prefix="site") as fs:
    ...         await fs.write("css/app.css", "body {}")
    ...         record = await fs.read("css/app.css")
    ...         return record.contents, record.mimetype
    >>> asyncio.run(example())
    (b'body {}', 'text/css')

Note:
    Failures that the filesystem contract treats as ordinary outcomes
    (write, delete, copy, rename, set_visibility) come back as `Failure`
    values. Reads return ``None`` when the object cannot be fetched; metadata
    lookups return ``None`` for missing paths and let any other storage fault
    propagate.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from types import MappingProxyType
from typing import IO, Any

from bucketfs.adapter.emulation import emulate_directories
from bucketfs.adapter.normalizer import ResponseNormalizer
from bucketfs.core.exceptions import NotFoundError, StorageClientError
from bucketfs.models.base import PRIVATE_ACL, Visibility, acl_for
from bucketfs.models.config import WriteConfig
from bucketfs.models.metadata import MetadataRecord, PathVisibility
from bucketfs.models.result import Failure, Result, Success
from bucketfs.protocols.client import CommonPrefix, ListObjectsPage, ObjectStorageClient, S3Object
from bucketfs.utils.content import content_size, guess_mime_type, stream_size
from bucketfs.utils.paths import SEPARATOR, PathPrefixer, is_dir_path

logger = logging.getLogger(__name__)

# DeleteObjects accepts at most this many keys per request.
DELETE_BATCH_SIZE = 1000


class S3Adapter:
    """Filesystem operations over an object-storage bucket.

    Args:
        client: Storage client implementing `ObjectStorageClient`.
        bucket: Bucket name.
        prefix: Root prefix; every logical path lives below it.
        options: Default request options (``ACL``, ``CacheControl``,
            ``ServerSideEncryption``, ...). Read-only after construction;
            per-call `WriteConfig` values take precedence.

    Example:
        >>> from bucketfs.adapter.s3 import S3Adapter
        >>> from bucketfs.client.memory import MemoryStorageClient
        >>> fs = S3Adapter(MemoryStorageClient(), "assets", prefix="/media/")
        >>> fs.prefix
        'media/'
        >>> fs.apply_path_prefix("logo.png")
        'media/logo.png'
    """

    def __init__(
        self,
        client: ObjectStorageClient,
        bucket: str,
        prefix: str = "",
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self._client = client
        self._bucket = bucket
        self._prefixer = PathPrefixer(prefix)
        self._options: Mapping[str, Any] = MappingProxyType(dict(options or {}))
        self._normalizer = ResponseNormalizer(self._prefixer)

    @property
    def client(self) -> ObjectStorageClient:
        return self._client

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def prefix(self) -> str:
        return self._prefixer.prefix

    @property
    def options(self) -> Mapping[str, Any]:
        return self._options

    # --- Lifecycle ---

    async def initialize(self) -> None:
        """Open the underlying client."""
        await self._client.initialize()

    async def close(self) -> None:
        """Close the underlying client."""
        await self._client.close()

    async def __aenter__(self) -> S3Adapter:
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # --- Paths ---

    def apply_path_prefix(self, path: str) -> str:
        """Storage key for a logical path."""
        return self._prefixer.to_storage_key(path)

    def remove_path_prefix(self, key: str) -> str:
        """Logical path for a storage key."""
        return self._prefixer.to_logical_path(key)

    # --- Writes ---

    async def write(
        self, path: str, contents: bytes | str, config: WriteConfig | None = None
    ) -> Result[MetadataRecord]:
        """Upload ``contents`` to ``path``."""
        return await self._upload(path, contents, config)

    async def update(
        self, path: str, contents: bytes | str, config: WriteConfig | None = None
    ) -> Result[MetadataRecord]:
        """Upload ``contents`` to ``path``, replacing any existing object."""
        return await self._upload(path, contents, config)

    async def write_stream(
        self, path: str, stream: IO[bytes], config: WriteConfig | None = None
    ) -> Result[MetadataRecord]:
        """Upload the remainder of a binary handle to ``path``."""
        return await self._upload(path, stream, config)

    async def update_stream(
        self, path: str, stream: IO[bytes], config: WriteConfig | None = None
    ) -> Result[MetadataRecord]:
        return await self._upload(path, stream, config)

    async def create_dir(
        self, dirname: str, config: WriteConfig | None = None
    ) -> Result[MetadataRecord]:
        """Create a zero-length placeholder object whose key ends in ``/``."""
        return await self._upload(dirname + SEPARATOR, b"", config)

    # --- Reads ---

    async def has(self, path: str) -> bool:
        """Whether ``path`` exists. A failed probe also reports False."""
        try:
            return await self._client.object_exists(
                self._bucket, self.apply_path_prefix(path), self._options
            )
        except StorageClientError as e:
            logger.debug(f"Existence probe for {path!r} failed: {e}")
            return False

    async def read(self, path: str) -> MetadataRecord | None:
        """Fetch a file with its contents loaded into memory."""
        record = await self._read_object(path)
        if record is None:
            return None

        body = record.stream
        if body is None:
            return record
        try:
            data = await body.read()
        finally:
            body.close()
        return record.model_copy(update={"contents": data, "stream": None})

    async def read_stream(self, path: str) -> MetadataRecord | None:
        """Fetch a file with an unconsumed ``stream``; the caller closes it."""
        return await self._read_object(path)

    async def list_contents(self, directory: str = "", recursive: bool = False) -> list[MetadataRecord]:
        """List ``directory``, emulating directories the bucket only implies.

        Non-recursive listings group keys one level deep; recursive listings
        return every key below ``directory``. All pages are fetched before
        returning.
        """
        prefix = self.apply_path_prefix(directory.rstrip(SEPARATOR) + SEPARATOR).lstrip(SEPARATOR)
        delimiter = None if recursive else SEPARATOR

        records: list[MetadataRecord] = []
        async for page in self._paginate(prefix, delimiter):
            entries: list[S3Object | CommonPrefix] = [*page.contents, *page.common_prefixes]
            for entry in entries:
                # The root prefix's own placeholder has no logical path.
                if not self.remove_path_prefix(entry.source_key or ""):
                    continue
                records.append(self._normalizer.normalize(entry))

        logger.debug(f"Listed {len(records)} entries under {prefix!r}")
        return emulate_directories(records)

    async def get_metadata(self, path: str) -> MetadataRecord | None:
        """Head ``path``. Missing objects give None; other faults propagate."""
        try:
            output = await self._client.head_object(
                self._bucket, self.apply_path_prefix(path), self._options
            )
        except NotFoundError:
            return None
        return self._normalizer.normalize(output, path)

    async def get_size(self, path: str) -> MetadataRecord | None:
        return await self.get_metadata(path)

    async def get_mimetype(self, path: str) -> MetadataRecord | None:
        return await self.get_metadata(path)

    async def get_timestamp(self, path: str) -> MetadataRecord | None:
        return await self.get_metadata(path)

    async def get_visibility(self, path: str) -> PathVisibility:
        """Visibility derived from the object's ACL grants."""
        return PathVisibility(path=path, visibility=await self._raw_visibility(path))

    # --- Mutations ---

    async def delete(self, path: str) -> Result[str]:
        """Delete ``path``; succeeds only if it is gone afterwards."""
        try:
            await self._client.delete_object(self._bucket, self.apply_path_prefix(path))
        except StorageClientError as e:
            logger.warning(f"Delete of {path!r} failed: {e}")
            return Failure(f"delete of {path!r} failed", e)

        if await self.has(path):
            return Failure(f"{path!r} still exists after delete")
        return Success(path)

    async def delete_dir(self, dirname: str) -> Result[str]:
        """Delete every object below ``dirname``.

        A directory with nothing in it (or that never existed) is deleted
        successfully.
        """
        prefix = self.apply_path_prefix(dirname.rstrip(SEPARATOR)) + SEPARATOR
        try:
            keys = [obj.key async for page in self._paginate(prefix) for obj in page.contents]
            if not keys:
                return Success(dirname)

            for start in range(0, len(keys), DELETE_BATCH_SIZE):
                batch = keys[start : start + DELETE_BATCH_SIZE]
                output = await self._client.delete_objects(self._bucket, batch)
                if output.errors:
                    failed = ", ".join(error.key for error in output.errors)
                    logger.warning(f"Delete of {dirname!r} left keys behind: {failed}")
                    return Failure(f"could not delete {len(output.errors)} objects below {dirname!r}")
        except StorageClientError as e:
            logger.warning(f"Delete of directory {dirname!r} failed: {e}")
            return Failure(f"delete of directory {dirname!r} failed", e)

        logger.debug(f"Deleted {len(keys)} objects below {dirname!r}")
        return Success(dirname)

    async def copy(self, path: str, newpath: str) -> Result[str]:
        """Copy ``path`` to ``newpath``, keeping the source's visibility."""
        try:
            visibility = await self._raw_visibility(path)
            await self._client.copy_object(
                self._bucket,
                self.apply_path_prefix(newpath),
                self._bucket,
                self.apply_path_prefix(path),
                {**self._options, "ACL": visibility.acl},
            )
        except StorageClientError as e:
            logger.warning(f"Copy of {path!r} to {newpath!r} failed: {e}")
            return Failure(f"copy of {path!r} to {newpath!r} failed", e)
        return Success(newpath)

    async def rename(self, path: str, newpath: str) -> Result[str]:
        """Copy then delete. A failed copy leaves the source untouched."""
        copied = await self.copy(path, newpath)
        if not copied:
            return copied

        deleted = await self.delete(path)
        if not deleted:
            return deleted
        return Success(newpath)

    async def set_visibility(self, path: str, visibility: str) -> Result[PathVisibility]:
        """Replace the ACL: ``public`` grants public read, anything else is private."""
        acl = acl_for(visibility)
        try:
            await self._client.put_object_acl(self._bucket, self.apply_path_prefix(path), acl)
        except StorageClientError as e:
            logger.warning(f"Setting visibility of {path!r} failed: {e}")
            return Failure(f"setting visibility of {path!r} failed", e)
        return Success(PathVisibility(path=path, visibility=Visibility.from_acl(acl)))

    # --- Internal helpers ---

    async def _upload(self, path: str, body: Any, config: WriteConfig | None) -> Result[MetadataRecord]:
        options = (config or WriteConfig()).merge_into(self._options)
        acl = options.get("ACL", PRIVATE_ACL)

        if not is_dir_path(path):
            if "ContentType" not in options:
                options["ContentType"] = guess_mime_type(path, body)
            if "ContentLength" not in options:
                length = content_size(body) if isinstance(body, (bytes, bytearray, str)) else stream_size(body)
                if length is not None:
                    options["ContentLength"] = length

        options["ACL"] = acl
        try:
            output = await self._client.put_object(
                self._bucket, self.apply_path_prefix(path), body, options
            )
        except StorageClientError as e:
            logger.warning(f"Upload of {path!r} failed: {e}")
            return Failure(f"upload of {path!r} failed", e)

        logger.debug(f"Uploaded {path!r} to bucket {self._bucket!r}")
        return Success(self._normalizer.normalize(output, path))

    async def _read_object(self, path: str) -> MetadataRecord | None:
        try:
            output = await self._client.get_object(
                self._bucket, self.apply_path_prefix(path), self._options
            )
        except NotFoundError:
            return None
        except StorageClientError as e:
            logger.warning(f"Read of {path!r} failed: {e}")
            return None
        return self._normalizer.normalize(output, path)

    async def _raw_visibility(self, path: str) -> Visibility:
        acl = await self._client.get_object_acl(self._bucket, self.apply_path_prefix(path))
        return Visibility.PUBLIC if acl.is_public_read() else Visibility.PRIVATE

    async def _paginate(self, prefix: str, delimiter: str | None = None) -> AsyncIterator[ListObjectsPage]:
        """Yield listing pages until the continuation tokens run out."""
        token: str | None = None
        while True:
            page = await self._client.list_objects_v2(
                self._bucket, prefix=prefix, delimiter=delimiter, continuation_token=token
            )
            yield page
            token = page.next_continuation_token
            if token is None:
                return
