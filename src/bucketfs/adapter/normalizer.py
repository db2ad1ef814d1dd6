"""Response normalization.

Turns any storage result variant (listing entry, common prefix, head, get or
put output) into a `MetadataRecord`. Which fields get copied is decided by
the variant's declared dataclass fields, through one translation table.

Example:
    >>> from bucketfs.adapter.normalizer import ResponseNormalizer
    >>> from bucketfs.protocols.client import S3Object
    >>> from bucketfs.utils.paths import PathPrefixer
    >>> normalizer = ResponseNormalizer(PathPrefixer("site"))
    >>> record = normalizer.normalize(S3Object(key="site/css/app.css", size=120))
    >>> record.path, record.type.value, record.size
    ('css/app.css', 'file', 120)
    >>> normalizer.normalize(S3Object(key="site/css/", size=0)).to_dict()
    {'path': 'css', 'type': 'dir', 'dirname': '', 'basename': 'css', 'filename': 'css'}
"""

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any

from bucketfs.core.exceptions import InvalidPathError
from bucketfs.models.base import EntryType
from bucketfs.models.metadata import MetadataRecord
from bucketfs.protocols.client import (
    CommonPrefix,
    GetObjectOutput,
    HeadObjectOutput,
    PutObjectOutput,
    S3Object,
)
from bucketfs.utils.paths import SEPARATOR, PathPrefixer, is_dir_path

StorageOutput = S3Object | CommonPrefix | HeadObjectOutput | GetObjectOutput | PutObjectOutput

# Result field -> record field. The raw body is exposed as a stream; reads
# materialize it into ``contents``.
RESULT_MAP: dict[str, str] = {
    "body": "stream",
    "content_length": "size",
    "content_type": "mimetype",
    "size": "size",
    "metadata": "metadata",
    "storage_class": "storageclass",
    "etag": "etag",
    "version_id": "versionid",
}


class ResponseNormalizer:
    """Builds metadata records from storage results."""

    def __init__(self, prefixer: PathPrefixer) -> None:
        self._prefixer = prefixer

    def normalize(self, output: StorageOutput, path: str | None = None) -> MetadataRecord:
        """Normalize ``output`` into a record.

        Args:
            output: Any storage result variant.
            path: Logical path of the object. When omitted it is taken from
                the result's key or prefix, with the root prefix removed.

        Raises:
            InvalidPathError: Neither ``path`` nor the result yields a path.
        """
        if not path:
            key = output.source_key
            if not key:
                raise InvalidPathError(f"{type(output).__name__} carries no key and no path was given")
            path = self._prefixer.to_logical_path(key)
            if not path:
                raise InvalidPathError(f"key {key!r} is the root prefix itself")

        timestamp = _timestamp(output)

        if is_dir_path(path):
            return MetadataRecord.for_path(
                path.rstrip(SEPARATOR), EntryType.DIR, timestamp=timestamp
            )

        return MetadataRecord.for_path(
            path, EntryType.FILE, timestamp=timestamp, **translate(output)
        )


def translate(output: StorageOutput) -> dict[str, Any]:
    """Copy the fields ``output`` declares and carries, renamed per `RESULT_MAP`.

    Example:
        >>> from bucketfs.protocols.client import PutObjectOutput
        >>> translate(PutObjectOutput(etag='"abc"'))
        {'etag': '"abc"'}
    """
    declared = {f.name for f in dataclasses.fields(output)}
    fields: dict[str, Any] = {}
    for source, target in RESULT_MAP.items():
        if source not in declared:
            continue
        value = getattr(output, source)
        if value is not None:
            fields[target] = value
    return fields


def _timestamp(output: StorageOutput) -> int | None:
    last_modified: datetime | None = getattr(output, "last_modified", None)
    if last_modified is None:
        return None
    return int(last_modified.timestamp())
