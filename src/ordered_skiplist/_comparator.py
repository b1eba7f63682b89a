"""
comparator - Total-order comparison for skip list keys

This module provides the comparison dispatch used by SkipList: natural
ordering, strict integer and string orderings selected by a type tag, custom
three-way callables, and key functions. A comparator that cannot order two
keys raises IncomparableError instead of reporting them as equal.
"""

import math
from enum import Enum
from typing import Any, Callable, Optional, Type, Union

from ordered_skiplist._errors import IncomparableError


class ComparatorType(Enum):
    """Comparator implementation type."""
    NATURAL = "natural"
    REVERSE = "reverse"
    INT = "int"
    STRING = "string"
    KEY_FUNC = "key_func"
    PYTHON = "python"


def _is_int(value: Any) -> bool:
    # bool is an int subclass but not part of the integer key domain
    return isinstance(value, int) and not isinstance(value, bool)


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _compare_natural(a: Any, b: Any) -> int:
    """Three-way comparison using natural ordering.

    Returns:
        -1 if a < b, 0 if a == b, 1 if a > b

    Raises:
        IncomparableError: If a and b do not support ordering
    """
    try:
        if a < b:
            return -1
        elif a > b:
            return 1
        unordered = a != a or b != b
    except TypeError as exc:
        raise IncomparableError(a, b) from exc
    if unordered:
        # NaN compares unequal to itself
        raise IncomparableError(a, b, "NaN has no position in a key order")
    return 0


def _compare_reverse(a: Any, b: Any) -> int:
    """Reverse natural ordering."""
    return -_compare_natural(a, b)


def _compare_int(a: Any, b: Any) -> int:
    """Strict comparison for int keys."""
    if not (_is_int(a) and _is_int(b)):
        raise IncomparableError(a, b)
    return (a > b) - (a < b)


def _compare_string(a: Any, b: Any) -> int:
    """Strict lexicographic comparison for str keys."""
    if not (isinstance(a, str) and isinstance(b, str)):
        raise IncomparableError(a, b)
    if a < b:
        return -1
    elif a > b:
        return 1
    return 0


_TYPE_TAGS = {
    int: ComparatorType.INT,
    'int': ComparatorType.INT,
    'integer': ComparatorType.INT,
    str: ComparatorType.STRING,
    'str': ComparatorType.STRING,
    'string': ComparatorType.STRING,
}


class Comparator:
    """Key comparison dispatcher for SkipList.

    Multiple comparison strategies are supported:

    - Natural ordering (default): Uses Python's __lt__ and __gt__
    - Reverse ordering: Inverts natural ordering
    - Integer: int keys only, compared numerically
    - String: str keys only, compared lexicographically
    - Key function: Extracts sort keys (like sorted(key=...))
    - Python callable: Custom three-way comparison function

    Examples:
        # Natural ordering (default)
        s = SkipList()

        # Fixed key domain
        s = SkipList(key_type=int)

        # Key function
        s = SkipList(key=str.lower)

        # Custom Python callable
        def by_length(a, b):
            return len(a) - len(b)
        s = SkipList(cmp=by_length)
    """

    __slots__ = ('_type', '_compare_func', '_key_func')

    def __init__(
        self,
        cmp_type: ComparatorType,
        compare_func: Callable[[Any, Any], int],
        key_func: Optional[Callable[[Any], Any]] = None,
    ):
        """Initialize comparator (internal use - use static methods)."""
        self._type = cmp_type
        self._compare_func = compare_func
        self._key_func = key_func

    @staticmethod
    def natural() -> 'Comparator':
        """Create a comparator using Python's natural ordering.

        This is the default comparator for SkipList. Operands that do
        not support ordering raise IncomparableError.

        Returns:
            Comparator with natural ordering
        """
        return Comparator(ComparatorType.NATURAL, _compare_natural)

    @staticmethod
    def reverse() -> 'Comparator':
        """Create a comparator that reverses natural ordering.

        Returns:
            Comparator with reversed natural ordering
        """
        return Comparator(ComparatorType.REVERSE, _compare_reverse)

    @staticmethod
    def integer() -> 'Comparator':
        """Create a comparator restricted to int keys.

        Returns:
            Comparator for the integer key domain
        """
        return Comparator(ComparatorType.INT, _compare_int)

    @staticmethod
    def string() -> 'Comparator':
        """Create a comparator restricted to str keys.

        This comparison is locale-unaware (code point ordering).

        Returns:
            Comparator for the string key domain
        """
        return Comparator(ComparatorType.STRING, _compare_string)

    @staticmethod
    def for_type(key_type: Union[Type, str]) -> 'Comparator':
        """Resolve a key type tag to a built-in comparator.

        Args:
            key_type: int, str, or one of 'int', 'integer', 'str', 'string'

        Returns:
            integer() or string() comparator

        Raises:
            ValueError: If no built-in comparator exists for key_type
        """
        try:
            cmp_type = _TYPE_TAGS[key_type]
        except (KeyError, TypeError):
            raise ValueError(
                f"No built-in comparator for key type {key_type!r}; "
                "use int or str, or pass cmp="
            ) from None
        if cmp_type is ComparatorType.INT:
            return Comparator.integer()
        return Comparator.string()

    @staticmethod
    def from_callable(func: Callable[[Any, Any], int]) -> 'Comparator':
        """Create a comparator from a Python callable.

        The callable must accept two arguments and return:
        - Negative integer if first < second
        - Zero if first == second
        - Positive integer if first > second

        Args:
            func: Comparison function

        Returns:
            Comparator wrapping the callable

        Raises:
            TypeError: If func is not callable
        """
        if not callable(func):
            raise TypeError("func must be callable")

        def compare_python(a: Any, b: Any) -> int:
            result = func(a, b)
            return (result > 0) - (result < 0)

        return Comparator(ComparatorType.PYTHON, compare_python)

    @staticmethod
    def from_key(key_func: Callable[[Any], Any]) -> 'Comparator':
        """Create a comparator from a key function.

        The key function extracts a comparison key from each element,
        similar to the key parameter in sorted(). Keys are extracted
        at insertion time and compared using natural ordering.

        Args:
            key_func: Function to extract comparison key

        Returns:
            Comparator using key function

        Raises:
            TypeError: If key_func is not callable
        """
        if not callable(key_func):
            raise TypeError("key_func must be callable")
        return Comparator(ComparatorType.KEY_FUNC, _compare_natural, key_func)

    def compare(self, a: Any, b: Any) -> int:
        """Compare two values.

        Args:
            a: First value
            b: Second value

        Returns:
            -1 if a < b, 0 if a == b, 1 if a > b

        Raises:
            IncomparableError: If the values cannot be ordered
        """
        return self._compare_func(a, b)

    def extract_key(self, value: Any) -> Any:
        """Extract comparison key from a value.

        For key function comparators, this extracts the sort key.
        For other comparators, returns the value unchanged.
        """
        if self._key_func is not None:
            return self._key_func(value)
        return value

    def accepts(self, key: Any) -> bool:
        """Check whether key belongs to this comparator's key domain.

        Only the integer and string comparators have a fixed domain.
        Natural and reverse ordering reject a float NaN; every other
        comparator accepts any key.
        """
        if self._type is ComparatorType.INT:
            return _is_int(key)
        if self._type is ComparatorType.STRING:
            return isinstance(key, str)
        if self._type in (ComparatorType.NATURAL, ComparatorType.REVERSE):
            return not _is_nan(key)
        return True

    def check(self, key: Any) -> None:
        """Raise IncomparableError if key is outside the key domain."""
        if not self.accepts(key):
            raise IncomparableError(
                key, None,
                f"{type(key).__name__} key is outside the "
                f"'{self._type.value}' key domain",
            )

    @property
    def type(self) -> str:
        """Get comparator type as string.

        Returns:
            'natural', 'reverse', 'int', 'string', 'key_func', or 'python'
        """
        return self._type.value

    @property
    def comparator_type(self) -> ComparatorType:
        """Get comparator type as enum member."""
        return self._type

    def __repr__(self) -> str:
        return f"Comparator(type='{self.type}')"


def resolve_comparator(
    cmp: Optional[Union[Comparator, Callable[[Any, Any], int]]] = None,
    key: Optional[Callable[[Any], Any]] = None,
    key_type: Optional[Union[Type, str]] = None,
) -> Comparator:
    """Resolve comparator from cmp/key/key_type parameters.

    The SkipList and SkipListMap constructors use this helper to build
    the comparator from user-provided parameters.

    Args:
        cmp: Comparator instance or comparison callable
        key: Key extraction function
        key_type: Type tag for a built-in comparator

    Returns:
        Resolved Comparator

    Raises:
        TypeError: If more than one of cmp, key and key_type is provided
        TypeError: If cmp is not Comparator or callable
        TypeError: If key is not callable
        ValueError: If key_type has no built-in comparator
    """
    given = sum(arg is not None for arg in (cmp, key, key_type))
    if given > 1:
        raise TypeError("Specify at most one of 'cmp', 'key' and 'key_type'")

    if cmp is not None:
        if isinstance(cmp, Comparator):
            return cmp
        if callable(cmp):
            return Comparator.from_callable(cmp)
        raise TypeError("cmp must be a Comparator or callable")

    if key is not None:
        if not callable(key):
            raise TypeError("key must be callable")
        return Comparator.from_key(key)

    if key_type is not None:
        return Comparator.for_type(key_type)

    # Default: natural ordering
    return Comparator.natural()
