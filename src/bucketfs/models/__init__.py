"""Data models."""

from bucketfs.models.base import EntryType, Visibility, acl_for
from bucketfs.models.config import WRITE_OPTIONS, WriteConfig
from bucketfs.models.metadata import MetadataRecord, PathVisibility
from bucketfs.models.result import Failure, Result, Success

__all__ = [
    # Base
    "EntryType",
    "Visibility",
    "acl_for",
    # Records
    "MetadataRecord",
    "PathVisibility",
    # Config
    "WRITE_OPTIONS",
    "WriteConfig",
    # Results
    "Failure",
    "Result",
    "Success",
]
