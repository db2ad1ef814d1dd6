"""Custom exceptions.

bucketfs uses a small hierarchy of exceptions so callers can tell a missing
object apart from any other storage failure:

Example:
    >>> from bucketfs.core.exceptions import ClientFault, NotFoundError
    >>> isinstance(NotFoundError("a.txt"), StorageClientError)
    True
    >>> try:
    ...     raise ClientFault("access denied", status_code=403)
    ... except BucketFSError as e:
    ...     print(f"Caught: {type(e).__name__} ({e.status_code})")
    Caught: ClientFault (403)
"""

from __future__ import annotations


class BucketFSError(Exception):
    """Base exception for bucketfs.

    Example:
        >>> from bucketfs.core.exceptions import BucketFSError
        >>> e = BucketFSError("something went wrong")
        >>> str(e)
        'something went wrong'
    """


class StorageClientError(BucketFSError):
    """The object-storage client failed to complete a request.

    Attributes:
        key: Storage key the request targeted, when known.
        status_code: HTTP status reported by the store, when known.
        code: Store-specific error code (e.g. ``AccessDenied``), when known.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.status_code = status_code
        self.code = code


class NotFoundError(StorageClientError):
    """Target key does not exist.

    Example:
        >>> from bucketfs.core.exceptions import NotFoundError
        >>> e = NotFoundError("no such key", key="docs/a.txt")
        >>> e.status_code
        404
    """

    def __init__(self, message: str, *, key: str | None = None, code: str | None = None) -> None:
        super().__init__(message, key=key, status_code=404, code=code)


class ClientFault(StorageClientError):
    """Any storage failure other than a missing key (auth, network, bad request).

    Example:
        >>> from bucketfs.core.exceptions import ClientFault
        >>> raise ClientFault("connection reset")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ClientFault: connection reset
    """


class InvalidPathError(BucketFSError):
    """No usable path could be determined for a storage result.

    Example:
        >>> from bucketfs.core.exceptions import InvalidPathError
        >>> raise InvalidPathError("path missing")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        InvalidPathError: path missing
    """


class ConfigurationError(BucketFSError):
    """Configuration is invalid.

    Example:
        >>> from bucketfs.core.exceptions import ConfigurationError
        >>> raise ConfigurationError("missing bucket")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigurationError: missing bucket
    """
