"""Tests for bucketfs.adapter.normalizer and bucketfs.adapter.emulation.

Tests cover:
- Every result variant normalizes to a MetadataRecord
- Directory detection and trailing-slash stripping
- Prefix removal when the path comes from the result itself
- Directory emulation for implied parents
"""

from datetime import UTC, datetime

import pytest

from bucketfs.adapter.emulation import emulate_directories
from bucketfs.adapter.normalizer import ResponseNormalizer, translate
from bucketfs.core.exceptions import InvalidPathError
from bucketfs.models import EntryType, MetadataRecord
from bucketfs.protocols.client import (
    CommonPrefix,
    GetObjectOutput,
    HeadObjectOutput,
    PutObjectOutput,
    S3Object,
)
from bucketfs.utils.paths import PathPrefixer

MODIFIED = datetime(2024, 3, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def normalizer():
    """Normalizer rooted at prefix 'root'."""
    return ResponseNormalizer(PathPrefixer("root"))


# =============================================================================
# Normalization
# =============================================================================


class TestNormalize:
    """Tests for ResponseNormalizer.normalize."""

    def test_listing_object(self, normalizer):
        """Listing entries take their path from the key."""
        record = normalizer.normalize(
            S3Object(key="root/docs/a.txt", last_modified=MODIFIED, etag='"e"', size=5, storage_class="STANDARD")
        )
        assert record.path == "docs/a.txt"
        assert record.type is EntryType.FILE
        assert record.size == 5
        assert record.timestamp == int(MODIFIED.timestamp())
        assert record.storageclass == "STANDARD"
        assert record.etag == '"e"'

    def test_common_prefix_is_dir(self, normalizer):
        record = normalizer.normalize(CommonPrefix(prefix="root/docs/images/"))
        assert record.type is EntryType.DIR
        assert record.path == "docs/images"
        assert record.dirname == "docs"

    def test_placeholder_object_is_dir(self, normalizer):
        """A zero-length key ending in '/' is a directory without size."""
        record = normalizer.normalize(S3Object(key="root/empty/", size=0, last_modified=MODIFIED))
        assert record.is_dir
        assert record.size is None
        assert record.timestamp == int(MODIFIED.timestamp())

    def test_head_output_uses_given_path(self, normalizer):
        """Outputs without a key use the caller's path unchanged."""
        record = normalizer.normalize(
            HeadObjectOutput(content_length=7, content_type="text/plain", version_id="v1", metadata={"a": "b"}),
            "docs/a.txt",
        )
        assert record.path == "docs/a.txt"
        assert record.size == 7
        assert record.mimetype == "text/plain"
        assert record.versionid == "v1"
        assert record.metadata == {"a": "b"}

    def test_get_output_exposes_stream(self, normalizer):
        body = object()
        record = normalizer.normalize(GetObjectOutput(body=body, content_length=1), "a.bin")
        assert record.stream is body
        assert record.contents is None

    def test_put_output(self, normalizer):
        record = normalizer.normalize(PutObjectOutput(etag='"x"'), "a.txt")
        assert record.to_dict() == {
            "path": "a.txt",
            "type": "file",
            "dirname": "",
            "basename": "a.txt",
            "extension": "txt",
            "filename": "a",
            "etag": '"x"',
        }

    def test_absent_fields_stay_absent(self, normalizer):
        """A missing content type never becomes a default."""
        record = normalizer.normalize(HeadObjectOutput(content_length=3), "a")
        assert record.mimetype is None
        assert "mimetype" not in record.to_dict()

    def test_no_path_anywhere(self, normalizer):
        with pytest.raises(InvalidPathError):
            normalizer.normalize(PutObjectOutput())

    def test_root_prefix_key(self, normalizer):
        """The prefix placeholder itself has no logical path."""
        with pytest.raises(InvalidPathError):
            normalizer.normalize(CommonPrefix(prefix="root/"))

    def test_translate_only_declared_fields(self):
        """Fields a variant does not declare are never probed."""
        assert translate(S3Object(key="k", size=3)) == {"size": 3}


# =============================================================================
# Directory emulation
# =============================================================================


class TestEmulateDirectories:
    """Tests for emulate_directories."""

    def test_adds_implied_parents(self):
        listing = [MetadataRecord.for_path("a/b/c.txt", EntryType.FILE, size=1)]
        paths = [(r.path, r.type.value) for r in emulate_directories(listing)]
        assert paths == [("a/b/c.txt", "file"), ("a/b", "dir"), ("a", "dir")]

    def test_no_duplicates_for_listed_dirs(self):
        """Explicit directory records are not repeated."""
        listing = [
            MetadataRecord.for_path("a", EntryType.DIR),
            MetadataRecord.for_path("a/x.txt", EntryType.FILE, size=1),
            MetadataRecord.for_path("a/y.txt", EntryType.FILE, size=1),
        ]
        result = emulate_directories(listing)
        assert [r.path for r in result].count("a") == 1
        assert len(result) == 3

    def test_shared_parents_emitted_once(self):
        listing = [
            MetadataRecord.for_path("a/b/1.txt", EntryType.FILE),
            MetadataRecord.for_path("a/c/2.txt", EntryType.FILE),
        ]
        dirs = [r.path for r in emulate_directories(listing) if r.is_dir]
        assert sorted(dirs) == ["a", "a/b", "a/c"]

    def test_root_entries_add_nothing(self):
        listing = [MetadataRecord.for_path("top.txt", EntryType.FILE)]
        assert emulate_directories(listing) == listing

    def test_synthesized_records_have_no_metadata(self):
        listing = [MetadataRecord.for_path("a/b.txt", EntryType.FILE, size=1, timestamp=5)]
        implied = emulate_directories(listing)[-1]
        assert implied.path == "a"
        assert implied.timestamp is None
