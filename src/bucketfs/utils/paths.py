"""Path helpers: prefixing and decomposition.

Object keys are plain strings; these helpers give them filesystem shape.

Example:
    >>> from bucketfs.utils.paths import PathPrefixer, pathinfo
    >>> prefixer = PathPrefixer("/site/media")
    >>> prefixer.to_storage_key("img/logo.png")
    'site/media/img/logo.png'
    >>> prefixer.to_logical_path("site/media/img/logo.png")
    'img/logo.png'
    >>> pathinfo("img/logo.png")["filename"]
    'logo'
"""

from __future__ import annotations

from dataclasses import dataclass, field

SEPARATOR = "/"


@dataclass(frozen=True)
class PathPrefixer:
    """Maps logical paths to storage keys below a root prefix, and back.

    The prefix is normalized once: leading slashes are dropped and a single
    trailing separator is kept when the prefix is non-empty.

    Example:
        >>> from bucketfs.utils.paths import PathPrefixer
        >>> PathPrefixer("uploads/").prefix
        'uploads/'
        >>> PathPrefixer("").to_storage_key("/a.txt")
        'a.txt'
    """

    raw_prefix: str = ""
    prefix: str = field(init=False)

    def __post_init__(self) -> None:
        prefix = self.raw_prefix.lstrip("/")
        if prefix:
            prefix = prefix.rstrip("\\/") + SEPARATOR
        object.__setattr__(self, "prefix", prefix)

    def to_storage_key(self, path: str) -> str:
        return (self.prefix + path.lstrip("\\/")).lstrip("/")

    def to_logical_path(self, key: str) -> str:
        if self.prefix and key.startswith(self.prefix):
            key = key[len(self.prefix) :]
        return key.lstrip("\\/")


def is_dir_path(path: str) -> bool:
    """Keys ending in a separator name directories."""
    return path.endswith(SEPARATOR)


def dirname(path: str) -> str:
    """Parent of ``path``; empty string at the root.

    Example:
        >>> dirname("a/b/c.txt")
        'a/b'
        >>> dirname("a")
        ''
    """
    parent, sep, _ = path.rstrip(SEPARATOR).rpartition(SEPARATOR)
    return parent if sep else ""


def pathinfo(path: str) -> dict[str, str]:
    """Decompose ``path`` into path, dirname, basename, extension and filename.

    A trailing separator is ignored when splitting, so ``"a/b/"`` has
    dirname ``"a"`` and basename ``"b"``. ``extension`` is only present when
    the basename contains a dot.

    Example:
        >>> pathinfo("archive/data.tar.gz")
        {'path': 'archive/data.tar.gz', 'dirname': 'archive', 'basename': 'data.tar.gz', 'extension': 'gz', 'filename': 'data.tar'}
        >>> pathinfo("README")
        {'path': 'README', 'dirname': '', 'basename': 'README', 'filename': 'README'}
    """
    basename = path.rstrip(SEPARATOR).rpartition(SEPARATOR)[2]
    info = {"path": path, "dirname": dirname(path), "basename": basename}
    filename, dot, extension = basename.rpartition(".")
    if dot:
        info["extension"] = extension
        info["filename"] = filename
    else:
        info["filename"] = basename
    return info
