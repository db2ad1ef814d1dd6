"""Tests for bucketfs.utils.content.

Tests cover:
- MIME type guessing by name and by content
- Content length of bytes and text
- Stream size detection for files and in-memory handles
"""

import io

from bucketfs.utils.content import (
    DEFAULT_MIME_TYPE,
    content_size,
    guess_mime_type,
    stream_size,
)


class TestGuessMimeType:
    """Tests for guess_mime_type."""

    def test_by_extension(self):
        """Empty or plain-text content defers to the extension."""
        assert guess_mime_type("site/style.css", b"") == "text/css"
        assert guess_mime_type("image.png", b"not really") == "image/png"

    def test_text_content_without_extension(self):
        """Readable bytes without a known extension are text."""
        assert guess_mime_type("README", b"hello world") == "text/plain"

    def test_str_content(self):
        """str content is text."""
        assert guess_mime_type("notes", "hello") == "text/plain"

    def test_binary_signature(self):
        """Magic numbers identify common binary formats."""
        assert guess_mime_type("blob", b"\x89PNG\r\n\x1a\n....") == "image/png"
        assert guess_mime_type("blob", b"%PDF-1.7") == "application/pdf"

    def test_content_beats_extension(self):
        """Specific content types win over the file name."""
        assert guess_mime_type("notes.txt", b"\x89PNG\r\n\x1a\n....") == "image/png"
        assert guess_mime_type("data.json", b"\x00\x01\x02") == DEFAULT_MIME_TYPE

    def test_binary_content(self):
        """Bytes with NULs are opaque."""
        assert guess_mime_type("blob", b"\x00\x01\x02") == DEFAULT_MIME_TYPE

    def test_empty_content(self):
        """Empty content without extension falls back to text."""
        assert guess_mime_type("blob", b"") == "text/plain"

    def test_stream_uses_name_only(self):
        """Streams are never read for sniffing."""
        stream = io.BytesIO(b"hello")
        assert guess_mime_type("blob", stream) == "text/plain"
        assert guess_mime_type("logo.png", stream) == "image/png"
        assert stream.tell() == 0


class TestContentSize:
    """Tests for content_size."""

    def test_bytes(self):
        assert content_size(b"abc") == 3

    def test_text_is_utf8(self):
        assert content_size("é") == 2


class TestStreamSize:
    """Tests for stream_size."""

    def test_bytes_io(self):
        """Seekable handles report their length."""
        assert stream_size(io.BytesIO(b"12345")) == 5

    def test_position_preserved(self):
        """Only the unread remainder counts; position is restored."""
        stream = io.BytesIO(b"12345")
        stream.read(2)
        assert stream_size(stream) == 3
        assert stream.tell() == 2

    def test_real_file(self, tmp_path):
        """Files are measured with fstat."""
        path = tmp_path / "data.bin"
        path.write_bytes(b"x" * 10)
        with path.open("rb") as stream:
            assert stream_size(stream) == 10

    def test_unsized_handle(self):
        """Non-seekable handles have no size."""

        class Pipe:
            def read(self, n=-1):
                return b""

            def seekable(self):
                return False

        assert stream_size(Pipe()) is None
