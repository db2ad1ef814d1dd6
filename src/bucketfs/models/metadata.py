"""Metadata records - the canonical result shape.

Every read, write, list and stat operation returns `MetadataRecord` instances,
whatever the storage client's raw result looked like.

Example:
    >>> from bucketfs.models.metadata import MetadataRecord
    >>> from bucketfs.models.base import EntryType
    >>> record = MetadataRecord.for_path("docs/report.pdf", EntryType.FILE, size=42)
    >>> record.dirname, record.basename, record.extension, record.filename
    ('docs', 'report.pdf', 'pdf', 'report')
    >>> record.to_dict()["size"]
    42
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, model_validator

from bucketfs.models.base import BucketFSModel, EntryType, Visibility
from bucketfs.utils.paths import pathinfo

# Fields a directory record may never carry.
CONTENT_FIELDS = ("size", "mimetype", "contents", "stream")


class MetadataRecord(BucketFSModel):
    """Normalized description of one file or directory.

    Only the fields a storage result actually carried are populated; use
    `to_dict` to get them without the unset ones.

    Example:
        >>> from bucketfs.models.metadata import MetadataRecord
        >>> from bucketfs.models.base import EntryType
        >>> d = MetadataRecord.for_path("photos/2024", EntryType.DIR)
        >>> d.to_dict()
        {'path': 'photos/2024', 'type': 'dir', 'dirname': 'photos', 'basename': '2024', 'filename': '2024'}
    """

    path: str = Field(..., description="Logical path, no leading or trailing slash")
    type: EntryType = Field(..., description="file or dir")
    dirname: str = Field(default="", description="Parent directory, empty at the root")
    basename: str = Field(default="", description="Final path segment")
    extension: str | None = Field(default=None, description="Text after the last dot of basename")
    filename: str = Field(default="", description="basename without extension")

    size: int | None = Field(default=None, ge=0, description="Length in bytes")
    mimetype: str | None = None
    timestamp: int | None = Field(default=None, description="Last modification, Unix seconds")
    visibility: Visibility | None = None

    contents: bytes | None = Field(default=None, description="Materialized payload (read)")
    stream: Any = Field(default=None, description="Unconsumed payload stream (read_stream)")

    storageclass: str | None = None
    etag: str | None = None
    versionid: str | None = None
    metadata: dict[str, str] | None = None

    @model_validator(mode="after")
    def check_dir_has_no_content(self) -> MetadataRecord:
        """Directory records never carry content metadata."""
        if self.type is EntryType.DIR:
            present = [name for name in CONTENT_FIELDS if getattr(self, name) is not None]
            if present:
                raise ValueError(f"directory record cannot carry {', '.join(present)}")
        return self

    @classmethod
    def for_path(cls, path: str, type: EntryType, **fields: Any) -> MetadataRecord:
        """Build a record whose path components are derived from ``path``."""
        return cls(**pathinfo(path), type=type, **fields)

    @property
    def is_dir(self) -> bool:
        return self.type is EntryType.DIR

    @property
    def is_file(self) -> bool:
        return self.type is EntryType.FILE

    def to_dict(self) -> dict[str, Any]:
        """Populated fields only, enums as plain strings."""
        data = self.model_dump(exclude_none=True)
        data["type"] = self.type.value
        if self.visibility is not None:
            data["visibility"] = self.visibility.value
        return data


class PathVisibility(BucketFSModel):
    """Visibility of one path.

    Example:
        >>> from bucketfs.models.metadata import PathVisibility
        >>> PathVisibility(path="a.txt", visibility="public").visibility
        <Visibility.PUBLIC: 'public'>
    """

    path: str
    visibility: Visibility
