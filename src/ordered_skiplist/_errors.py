"""
errors - Exception taxonomy for skip list operations

Every operation validates its arguments and walks the structure before it
mutates anything, so a raised error always leaves the list unchanged.
"""

from typing import Optional


class SkipListError(Exception):
    """Base class for skip list errors."""


class NilKeyError(SkipListError, ValueError):
    """Raised when None is passed where a key is required."""

    def __init__(self, message: str = "Key cannot be None"):
        super().__init__(message)


class NotFoundError(SkipListError, KeyError):
    """Raised by search and delete when the key is not present."""

    def __init__(self, key: object):
        super().__init__(key)
        self.key = key


class IncomparableError(SkipListError, TypeError):
    """Raised when the comparator cannot order two keys."""

    def __init__(self, a: object, b: object, message: Optional[str] = None):
        if message is None:
            message = (
                f"Cannot compare {type(a).__name__} with {type(b).__name__}"
            )
        super().__init__(message)
        self.a = a
        self.b = b
