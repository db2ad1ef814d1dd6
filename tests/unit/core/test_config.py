"""Tests for bucketfs.core.config and bucketfs.core.exceptions."""

from bucketfs.core.config import Settings, get_settings
from bucketfs.core.exceptions import (
    BucketFSError,
    ClientFault,
    NotFoundError,
    StorageClientError,
)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("BUCKETFS_BUCKET", raising=False)
        settings = Settings(_env_file=None)
        assert settings.client_backend == "s3"
        assert settings.bucket == ""
        assert settings.list_page_size == 1000

    def test_env_prefix(self, monkeypatch):
        """Values load from BUCKETFS_ variables."""
        monkeypatch.setenv("BUCKETFS_BUCKET", "media")
        monkeypatch.setenv("BUCKETFS_PREFIX", "/site")
        monkeypatch.setenv("BUCKETFS_OPTIONS", '{"CacheControl": "max-age=60"}')
        settings = Settings(_env_file=None)
        assert settings.bucket == "media"
        assert settings.prefix == "site"
        assert settings.options == {"CacheControl": "max-age=60"}

    def test_overrides(self):
        assert get_settings(bucket="b", region="eu-west-1").region == "eu-west-1"

    def test_adapter_options_include_default_acl(self):
        settings = get_settings(bucket="b", default_acl="public-read", options={"StorageClass": "STANDARD_IA"})
        assert settings.adapter_options() == {"StorageClass": "STANDARD_IA", "ACL": "public-read"}

    def test_explicit_acl_option_wins(self):
        settings = get_settings(bucket="b", default_acl="public-read", options={"ACL": "private"})
        assert settings.adapter_options()["ACL"] == "private"


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_not_found_is_client_error(self):
        error = NotFoundError("missing", key="a.txt")
        assert isinstance(error, StorageClientError)
        assert isinstance(error, BucketFSError)
        assert error.status_code == 404
        assert error.key == "a.txt"

    def test_fault_is_not_not_found(self):
        error = ClientFault("denied", status_code=403, code="AccessDenied")
        assert not isinstance(error, NotFoundError)
        assert error.code == "AccessDenied"
