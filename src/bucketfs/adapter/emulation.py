"""Directory emulation over flat listings.

Object stores only know keys. A listing that contains ``a/b/c.txt`` implies
directories ``a`` and ``a/b`` even when no placeholder objects exist for them;
`emulate_directories` adds records for those.

Example:
    >>> from bucketfs.adapter.emulation import emulate_directories
    >>> from bucketfs.models import EntryType, MetadataRecord
    >>> listing = [MetadataRecord.for_path("a/b/c.txt", EntryType.FILE, size=3)]
    >>> [(r.path, r.type.value) for r in emulate_directories(listing)]
    [('a/b/c.txt', 'file'), ('a/b', 'dir'), ('a', 'dir')]
"""

from __future__ import annotations

from collections.abc import Iterable

from bucketfs.models.base import EntryType
from bucketfs.models.metadata import MetadataRecord
from bucketfs.utils.paths import dirname


def emulate_directories(records: Iterable[MetadataRecord]) -> list[MetadataRecord]:
    """Return ``records`` followed by a record for every implied directory.

    A directory is implied by the ``dirname`` chain of any entry. Directories
    that already have an explicit ``dir`` record are not duplicated. The
    synthesized records carry path components only.
    """
    listing = list(records)
    implied: dict[str, None] = {}
    listed: set[str] = set()

    for record in listing:
        if record.is_dir:
            listed.add(record.path)
        parent = record.dirname
        while parent and parent not in implied:
            implied[parent] = None
            parent = dirname(parent)

    listing.extend(
        MetadataRecord.for_path(path, EntryType.DIR) for path in implied if path not in listed
    )
    return listing
