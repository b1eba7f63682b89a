"""
ordered_skiplist - In-memory ordered key-value container backed by a skip list

This package provides a single-threaded skip list with upsert, point lookup,
deletion, cursor iteration, min/max queries and sorted snapshots, ordered by
a comparator chosen at construction.
"""

__version__ = "0.1.0"

# Tier 0: Configuration & Errors
from ordered_skiplist._config import (
    config,
    DEFAULT_MAX_LEVEL,
    DEFAULT_LEVEL_PROBABILITY,
)

from ordered_skiplist._errors import (
    SkipListError,
    NilKeyError,
    NotFoundError,
    IncomparableError,
)

# Tier 1: Comparator System
from ordered_skiplist._comparator import (
    Comparator,
    ComparatorType,
    resolve_comparator,
)

from ordered_skiplist._profiler import (
    ComparatorProfiler,
    ProfilerReport,
    OptimizationLevel,
    get_active_profiler,
    set_active_profiler,
)

# Tier 2: Core
from ordered_skiplist._arena import (
    NodeArena,
    SkipListNode,
)

from ordered_skiplist._skiplist import (
    SkipList,
)

from ordered_skiplist._cursor import (
    SkipListCursor,
)

from ordered_skiplist._aggregate import (
    compare_values,
)

# Tier 3: Public API
from ordered_skiplist._skiplistmap import (
    SkipListMap,
)

__all__ = [
    # Version
    "__version__",
    # Tier 0: config
    "config",
    "DEFAULT_MAX_LEVEL",
    "DEFAULT_LEVEL_PROBABILITY",
    # Tier 0: errors
    "SkipListError",
    "NilKeyError",
    "NotFoundError",
    "IncomparableError",
    # Tier 1: comparator
    "Comparator",
    "ComparatorType",
    "resolve_comparator",
    # Tier 1: profiler
    "ComparatorProfiler",
    "ProfilerReport",
    "OptimizationLevel",
    "get_active_profiler",
    "set_active_profiler",
    # Tier 2: core
    "NodeArena",
    "SkipListNode",
    "SkipList",
    "SkipListCursor",
    "compare_values",
    # Tier 3: Public API
    "SkipListMap",
]
