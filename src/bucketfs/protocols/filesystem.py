"""Filesystem adapter protocol.

The operation set a hierarchical-filesystem front end expects from a storage
adapter.

Example:
    >>> from bucketfs.protocols.filesystem import FilesystemAdapter
    >>> hasattr(FilesystemAdapter, "list_contents")
    True
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from bucketfs.models import MetadataRecord, PathVisibility, Result, WriteConfig


@runtime_checkable
class FilesystemAdapter(Protocol):
    """Filesystem operations over a storage backend.

    Operations that can fail as part of their contract return a
    `bucketfs.models.Result`; lookups return ``None`` for missing paths.

    See Also:
        bucketfs.adapter.s3.S3Adapter: Object-storage implementation
    """

    # --- Writes ---

    async def write(
        self, path: str, contents: bytes | str, config: WriteConfig | None = None
    ) -> Result[MetadataRecord]:
        """Create a file."""
        ...

    async def update(
        self, path: str, contents: bytes | str, config: WriteConfig | None = None
    ) -> Result[MetadataRecord]:
        """Overwrite a file."""
        ...

    async def write_stream(
        self, path: str, stream: IO[bytes], config: WriteConfig | None = None
    ) -> Result[MetadataRecord]:
        """Create a file from a binary handle."""
        ...

    async def update_stream(
        self, path: str, stream: IO[bytes], config: WriteConfig | None = None
    ) -> Result[MetadataRecord]:
        """Overwrite a file from a binary handle."""
        ...

    async def create_dir(
        self, dirname: str, config: WriteConfig | None = None
    ) -> Result[MetadataRecord]:
        """Create a directory."""
        ...

    # --- Reads ---

    async def has(self, path: str) -> bool:
        """Check whether a path exists."""
        ...

    async def read(self, path: str) -> MetadataRecord | None:
        """Read a file into memory."""
        ...

    async def read_stream(self, path: str) -> MetadataRecord | None:
        """Open a file as a stream."""
        ...

    async def list_contents(self, directory: str = "", recursive: bool = False) -> list[MetadataRecord]:
        """List a directory."""
        ...

    async def get_metadata(self, path: str) -> MetadataRecord | None:
        """Get file metadata."""
        ...

    async def get_size(self, path: str) -> MetadataRecord | None:
        """Get metadata carrying the size."""
        ...

    async def get_mimetype(self, path: str) -> MetadataRecord | None:
        """Get metadata carrying the MIME type."""
        ...

    async def get_timestamp(self, path: str) -> MetadataRecord | None:
        """Get metadata carrying the modification time."""
        ...

    async def get_visibility(self, path: str) -> PathVisibility:
        """Get a file's visibility."""
        ...

    # --- Mutations ---

    async def rename(self, path: str, newpath: str) -> Result[str]:
        """Move a file."""
        ...

    async def copy(self, path: str, newpath: str) -> Result[str]:
        """Copy a file."""
        ...

    async def delete(self, path: str) -> Result[str]:
        """Delete a file."""
        ...

    async def delete_dir(self, dirname: str) -> Result[str]:
        """Delete a directory and everything below it."""
        ...

    async def set_visibility(self, path: str, visibility: str) -> Result[PathVisibility]:
        """Set a file's visibility."""
        ...
