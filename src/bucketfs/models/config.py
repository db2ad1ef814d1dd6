"""Per-call write configuration.

Example:
    >>> from bucketfs.models.config import WriteConfig
    >>> config = WriteConfig(visibility="public", options={"CacheControl": "max-age=300"})
    >>> config.merge_into({"ACL": "private", "StorageClass": "STANDARD_IA"})
    {'ACL': 'public-read', 'StorageClass': 'STANDARD_IA', 'CacheControl': 'max-age=300'}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field

from bucketfs.models.base import BucketFSModel, acl_for

# Request options a caller may set per write.
WRITE_OPTIONS: frozenset[str] = frozenset(
    {
        "ACL",
        "CacheControl",
        "ContentDisposition",
        "ContentEncoding",
        "ContentLength",
        "ContentType",
        "Expires",
        "GrantFullControl",
        "GrantRead",
        "GrantReadACP",
        "GrantWriteACP",
        "Metadata",
        "RequestPayer",
        "SSECustomerAlgorithm",
        "SSECustomerKey",
        "SSECustomerKeyMD5",
        "SSEKMSKeyId",
        "ServerSideEncryption",
        "StorageClass",
        "Tagging",
        "WebsiteRedirectLocation",
    }
)


class WriteConfig(BucketFSModel):
    """Options for a single write, layered over the adapter's defaults.

    ``visibility`` and ``mimetype`` are shorthands for ``ACL`` and
    ``ContentType``; explicit entries in ``options`` take precedence over
    both. Keys outside `WRITE_OPTIONS` are ignored.
    """

    visibility: str | None = None
    mimetype: str | None = None
    options: dict[str, Any] = Field(default_factory=dict)

    def merge_into(self, defaults: Mapping[str, Any]) -> dict[str, Any]:
        """Return ``defaults`` overridden by this call's values."""
        merged = dict(defaults)
        if self.visibility is not None:
            merged["ACL"] = acl_for(self.visibility)
        if self.mimetype:
            merged["ContentType"] = self.mimetype
        for name, value in self.options.items():
            if name in WRITE_OPTIONS:
                merged[name] = value
        return merged
