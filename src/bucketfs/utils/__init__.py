"""bucketfs utilities.

Path prefixing and decomposition, and content inspection for uploads.
"""

from bucketfs.utils.content import (
    DEFAULT_MIME_TYPE,
    content_size,
    guess_mime_type,
    stream_size,
)
from bucketfs.utils.paths import (
    SEPARATOR,
    PathPrefixer,
    dirname,
    is_dir_path,
    pathinfo,
)

__all__ = [
    # Paths
    "SEPARATOR",
    "PathPrefixer",
    "dirname",
    "is_dir_path",
    "pathinfo",
    # Content
    "DEFAULT_MIME_TYPE",
    "content_size",
    "guess_mime_type",
    "stream_size",
]
