"""Base models and shared types.

Example:
    >>> from bucketfs.models.base import EntryType, Visibility
    >>> EntryType.DIR.value
    'dir'
    >>> Visibility.from_acl("public-read")
    <Visibility.PUBLIC: 'public'>
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

PUBLIC_READ_ACL = "public-read"
PRIVATE_ACL = "private"


class EntryType(str, Enum):
    """Kind of filesystem entry a storage key represents.

    Example:
        >>> list(EntryType)
        [<EntryType.FILE: 'file'>, <EntryType.DIR: 'dir'>]
    """

    FILE = "file"
    DIR = "dir"


class Visibility(str, Enum):
    """Binary simplification of an object's ACL.

    Example:
        >>> Visibility.PUBLIC.acl
        'public-read'
        >>> Visibility.PRIVATE.acl
        'private'
    """

    PUBLIC = "public"
    PRIVATE = "private"

    @property
    def acl(self) -> str:
        """Canned ACL that grants this visibility."""
        return PUBLIC_READ_ACL if self is Visibility.PUBLIC else PRIVATE_ACL

    @classmethod
    def from_acl(cls, acl: str | None) -> Visibility:
        return cls.PUBLIC if acl == PUBLIC_READ_ACL else cls.PRIVATE


def acl_for(visibility: str | Visibility | None) -> str:
    """Map a requested visibility to a canned ACL.

    Only ``public`` grants public read; every other value is private.

    Example:
        >>> acl_for("public")
        'public-read'
        >>> acl_for("anything-else")
        'private'
    """
    return PUBLIC_READ_ACL if visibility == Visibility.PUBLIC else PRIVATE_ACL


class BucketFSModel(BaseModel):
    """Base model with standard configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        validate_assignment=True,
        extra="forbid",
    )
