"""Operation results for calls that can fail without raising.

Write, delete, copy, rename and visibility changes report failure as a value
instead of an exception. Both variants support truth testing, so
``if await fs.copy(a, b):`` reads naturally.

Example:
    >>> from bucketfs.models.result import Failure, Success
    >>> ok = Success("a.txt")
    >>> bool(ok), ok.value
    (True, 'a.txt')
    >>> failed = Failure("copy failed")
    >>> bool(failed), failed.value
    (False, None)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """The operation completed; ``value`` is its result."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def __bool__(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """The operation did not complete.

    ``error`` keeps the swallowed exception, when there was one, for logging.
    Callers should not branch on it.
    """

    reason: str
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    def __bool__(self) -> bool:
        return False

    def unwrap(self) -> None:
        raise ValueError(f"unwrap() on a failed result: {self.reason}") from self.error


Result = Union[Success[T], Failure]
