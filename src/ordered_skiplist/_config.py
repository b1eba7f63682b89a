"""
config - Runtime configuration for skip list construction

This module provides the tuning parameters read by every SkipList at
construction time: the maximum tower height, the level promotion
probability, an optional default seed, and the comparator statistics toggle.
Defaults can be overridden through ORDERED_SKIPLIST_* environment variables.
"""

import logging
import os
import threading
from typing import Optional


logger = logging.getLogger(__name__)


# The one authoritative cap on tower height (supports ~2^32 elements at p=0.5)
DEFAULT_MAX_LEVEL = 32
# Upper bound accepted for max_level
MAX_LEVEL_LIMIT = 64
# Probability for level promotion (1/2)
DEFAULT_LEVEL_PROBABILITY = 0.5


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Get environment variable with prefix."""
    full_name = f"ORDERED_SKIPLIST_{name}"
    return os.environ.get(full_name, default)


def _get_env_bool(name: str, default: bool = False) -> bool:
    """Get boolean environment variable."""
    value = _get_env(name)
    if value is None:
        return default
    return value.lower() in ('1', 'true', 'yes', 'on')


def _get_env_int(name: str, default: Optional[int]) -> Optional[int]:
    """Get integer environment variable."""
    value = _get_env(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(
            "Ignoring ORDERED_SKIPLIST_%s=%r: not an integer", name, value
        )
        return default


def _get_env_float(name: str, default: float) -> float:
    """Get float environment variable."""
    value = _get_env(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(
            "Ignoring ORDERED_SKIPLIST_%s=%r: not a number", name, value
        )
        return default


def validate_max_level(value: int) -> int:
    """Check a tower height cap.

    Raises:
        ValueError: If value is not an int in [1, MAX_LEVEL_LIMIT]
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"max_level must be an int, got {value!r}")
    if not 1 <= value <= MAX_LEVEL_LIMIT:
        raise ValueError(f"max_level must be in [1, {MAX_LEVEL_LIMIT}]")
    return value


def validate_probability(value: float) -> float:
    """Check a level promotion probability.

    Raises:
        ValueError: If value is not strictly between 0 and 1
    """
    if not 0.0 < value < 1.0:
        raise ValueError("probability must be in (0, 1)")
    return float(value)


class Config:
    """Global configuration for ordered_skiplist.

    Thread Safety:
        All reads are thread-safe. Writes use a lock and affect
        only lists created after the write.
    """

    __slots__ = (
        '_lock',
        '_max_level',
        '_level_probability',
        '_seed',
        '_enable_statistics',
    )

    def __init__(self) -> None:
        """Initialize configuration (called once at module import)."""
        self._lock = threading.Lock()

        max_level = _get_env_int('MAX_LEVEL', DEFAULT_MAX_LEVEL)
        try:
            self._max_level = validate_max_level(max_level)
        except ValueError:
            logger.warning(
                "Ignoring ORDERED_SKIPLIST_MAX_LEVEL=%r: out of range", max_level
            )
            self._max_level = DEFAULT_MAX_LEVEL

        probability = _get_env_float('LEVEL_PROBABILITY', DEFAULT_LEVEL_PROBABILITY)
        try:
            self._level_probability = validate_probability(probability)
        except ValueError:
            logger.warning(
                "Ignoring ORDERED_SKIPLIST_LEVEL_PROBABILITY=%r: out of range",
                probability,
            )
            self._level_probability = DEFAULT_LEVEL_PROBABILITY

        self._seed = _get_env_int('SEED', None)
        self._enable_statistics = _get_env_bool('ENABLE_STATS', False)

    @property
    def max_level(self) -> int:
        """Maximum tower height for new lists."""
        return self._max_level

    @max_level.setter
    def max_level(self, value: int) -> None:
        """Set maximum tower height.

        Raises:
            ValueError: If value is outside [1, MAX_LEVEL_LIMIT]
        """
        value = validate_max_level(value)
        with self._lock:
            self._max_level = value

    @property
    def level_probability(self) -> float:
        """Probability of promoting a new node one more level."""
        return self._level_probability

    @level_probability.setter
    def level_probability(self, value: float) -> None:
        """Set level promotion probability.

        Raises:
            ValueError: If value is not in (0, 1)
        """
        value = validate_probability(value)
        with self._lock:
            self._level_probability = value

    @property
    def seed(self) -> Optional[int]:
        """Default seed for level sampling (None = OS entropy)."""
        return self._seed

    @seed.setter
    def seed(self, value: Optional[int]) -> None:
        """Set default seed.

        Raises:
            ValueError: If value is neither None nor an int
        """
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f"seed must be an int or None, got {value!r}")
        with self._lock:
            self._seed = value

    @property
    def enable_statistics(self) -> bool:
        """Whether new lists report comparisons to the active profiler."""
        return self._enable_statistics

    @enable_statistics.setter
    def enable_statistics(self, value: bool) -> None:
        """Enable or disable comparator statistics."""
        with self._lock:
            self._enable_statistics = bool(value)

    def __repr__(self) -> str:
        """String representation of configuration."""
        return (
            f"Config("
            f"max_level={self.max_level}, "
            f"level_probability={self.level_probability}, "
            f"seed={self.seed!r}, "
            f"enable_statistics={self.enable_statistics})"
        )


# Global configuration instance (initialized at module import)
config = Config()
