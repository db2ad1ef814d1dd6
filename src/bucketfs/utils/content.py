"""Content inspection for uploads: MIME type and length.

Example:
    >>> from bucketfs.utils.content import guess_mime_type, content_size
    >>> guess_mime_type("notes.txt", b"hello")
    'text/plain'
    >>> guess_mime_type("blob", b"\\x00\\x01")
    'application/octet-stream'
    >>> content_size("héllo")
    6
"""

from __future__ import annotations

import io
import mimetypes
import os
from typing import IO, Any

DEFAULT_MIME_TYPE = "application/octet-stream"
TEXT_MIME_TYPE = "text/plain"

# Bytes inspected when sniffing content.
SNIFF_LENGTH = 1024

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"%PDF-", "application/pdf"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b", "application/gzip"),
)


def guess_mime_type(path: str, contents: bytes | str | IO[bytes] | None = None) -> str:
    """Guess a MIME type from the content itself, then from the file name.

    Content wins when it identifies a specific type. Empty or plain-text
    content defers to the file name, and names without a known extension
    are ``text/plain``. Streams are not read; only their name is used.
    """
    if isinstance(contents, str):
        detected: str | None = TEXT_MIME_TYPE
    elif isinstance(contents, (bytes, bytearray)):
        detected = _sniff(bytes(contents[:SNIFF_LENGTH]))
    else:
        detected = None
    if detected and detected != TEXT_MIME_TYPE:
        return detected

    by_name, _ = mimetypes.guess_type(path, strict=False)
    return by_name or TEXT_MIME_TYPE


def _sniff(head: bytes) -> str | None:
    if not head:
        return None
    for signature, mime_type in _SIGNATURES:
        if head.startswith(signature):
            return mime_type
    if b"\x00" in head:
        return DEFAULT_MIME_TYPE
    try:
        head.decode("utf-8")
    except UnicodeDecodeError as exc:
        # A multibyte character cut at the sniff boundary is still text.
        if exc.start < len(head) - 3:
            return DEFAULT_MIME_TYPE
    return TEXT_MIME_TYPE


def content_size(contents: bytes | str) -> int:
    """Length in bytes; text is measured as UTF-8."""
    if isinstance(contents, str):
        return len(contents.encode("utf-8"))
    return len(contents)


def stream_size(stream: Any) -> int | None:
    """Unread bytes left in a binary handle, or None when unknown.

    Regular files are measured with ``fstat``; other seekable handles by
    seeking to the end and back.
    """
    try:
        return os.fstat(stream.fileno()).st_size - stream.tell()
    except (AttributeError, OSError, io.UnsupportedOperation):
        pass

    seekable = getattr(stream, "seekable", None)
    if seekable is None or not seekable():
        return None
    position = stream.tell()
    try:
        return stream.seek(0, io.SEEK_END) - position
    finally:
        stream.seek(position)
