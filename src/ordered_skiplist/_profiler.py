"""
profiler - Comparison timing for skip lists

Lists built while config.enable_statistics is set time every key comparison
and hand the measurement to the active ComparatorProfiler, tagged with the
list's name. The profiler turns those measurements into a ProfilerReport
stating how much of the profiled window went to comparing keys.
"""

import json
import logging
import random
import threading
import time
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union


class OptimizationLevel(Enum):
    """How strongly the comparator cost suggests changing the key setup."""
    NONE_NEEDED = "none_needed"
    CONSIDER_KEY_FUNCTION = "consider_key_function"
    CONSIDER_TYPED = "consider_typed"
    CRITICAL = "critical"


# Upper bound, in percent of wall time, of every level below CRITICAL.
_LEVEL_BOUNDS = (
    (5.0, OptimizationLevel.NONE_NEEDED),
    (20.0, OptimizationLevel.CONSIDER_KEY_FUNCTION),
    (50.0, OptimizationLevel.CONSIDER_TYPED),
)

_ADVICE = {
    OptimizationLevel.NONE_NEEDED:
        "Key comparisons are a negligible part of this workload.",
    OptimizationLevel.CONSIDER_KEY_FUNCTION:
        "A key= function is applied once per insert; prefer it to a cmp= callable.",
    OptimizationLevel.CONSIDER_TYPED:
        "If every key is an int or a str, build the list with key_type=int or key_type=str.",
    OptimizationLevel.CRITICAL:
        "Key comparisons dominate this workload; simplify the keys or the comparator.",
}


@dataclass
class TracedComparison:
    """One recorded comparison, kept for debugging."""
    list_name: Optional[str]
    a_repr: str
    b_repr: str
    result: int
    duration_ns: int


@dataclass
class ListStats:
    """Comparison totals for one named list."""
    name: str
    comparison_count: int = 0
    time_ns: int = 0

    def add(self, duration_ns: int) -> None:
        self.comparison_count += 1
        self.time_ns += duration_ns

    @property
    def avg_ns(self) -> float:
        return self.time_ns / self.comparison_count if self.comparison_count else 0.0


@dataclass
class ProfilerReport:
    """Comparator cost over one profiled window."""
    wall_time_sec: float = 0.0
    comparator_time_sec: float = 0.0
    comparator_time_pct: float = 0.0
    comparison_count: int = 0

    # Latency percentiles in nanoseconds; zero when not tracked
    p50_ns: float = 0.0
    p95_ns: float = 0.0
    p99_ns: float = 0.0
    max_ns: float = 0.0

    lists: Dict[str, ListStats] = field(default_factory=dict)
    traces: List[TracedComparison] = field(default_factory=list)

    @property
    def optimization_level(self) -> OptimizationLevel:
        for bound, level in _LEVEL_BOUNDS:
            if self.comparator_time_pct < bound:
                return level
        return OptimizationLevel.CRITICAL

    def recommendation(self) -> str:
        """One-line advice matching optimization_level."""
        return (
            f"Comparator overhead {self.comparator_time_pct:.1f}%. "
            f"{_ADVICE[self.optimization_level]}"
        )

    def __str__(self) -> str:
        lines = [
            f"ComparatorProfiler Report ({self.wall_time_sec:.3f} sec)",
            f"comparisons: {self.comparison_count:,} taking "
            f"{self.comparator_time_sec:.3f} sec ({self.comparator_time_pct:.1f}%)",
        ]
        if self.max_ns:
            lines.append(
                f"latency ns: p50={self.p50_ns:,.0f} p95={self.p95_ns:,.0f} "
                f"p99={self.p99_ns:,.0f} max={self.max_ns:,.0f}"
            )
        for stats in self.lists.values():
            lines.append(
                f"  {stats.name}: {stats.comparison_count:,} comparisons, "
                f"avg {stats.avg_ns:,.0f} ns"
            )
        lines.append(self.recommendation())
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['optimization_level'] = self.optimization_level.value
        return data

    def to_json(self, path: Optional[Union[str, Path]] = None) -> str:
        """Serialize to JSON, also writing it to path when given."""
        json_str = json.dumps(self.to_dict(), indent=2)
        if path:
            Path(path).write_text(json_str)
        return json_str


def _percentile(ordered: List[int], q: float) -> float:
    return float(ordered[min(int(len(ordered) * q), len(ordered) - 1)])


class ComparatorProfiler:
    """Collect comparison timings from instrumented skip lists.

    Usage:
        config.enable_statistics = True
        s = SkipList(name="orders")

        with ComparatorProfiler() as profiler:
            for order in orders:
                s.insert(order.id, order)
        print(profiler.report)

    start() installs the profiler as the active one; lists created with
    statistics enabled report to it until stop() is called.
    """

    def __init__(
        self,
        *,
        sample_rate: float = 1.0,
        trace_samples: int = 0,
        track_percentiles: bool = True,
        logger: Optional[logging.Logger] = None,
        log_interval: Optional[float] = None,
        threshold_pct: Optional[float] = None,
        on_threshold: Optional[Callable[[ProfilerReport], None]] = None,
        seed: Optional[int] = None,
    ):
        """Initialize profiler.

        Args:
            sample_rate: Fraction of comparisons to record, in (0, 1]
            trace_samples: Number of comparisons to keep as TracedComparison
            track_percentiles: Whether to keep latencies for percentiles
            logger: Logger for running totals and threshold warnings
            log_interval: Minimum seconds between running-total messages
            threshold_pct: Comparator overhead that triggers on_threshold
            on_threshold: Called once per run with the report at that moment
            seed: Seed for the sampling decision
        """
        if not 0.0 < sample_rate <= 1.0:
            raise ValueError("sample_rate must be in (0, 1]")
        self._sample_rate = sample_rate
        self._trace_samples = trace_samples
        self._track_percentiles = track_percentiles
        self._logger = logger
        self._log_interval = log_interval
        self._threshold_pct = threshold_pct
        self._on_threshold = on_threshold
        self._rng = random.Random(seed)

        self._lock = threading.Lock()
        self._start_time: Optional[float] = None
        self._end_time: Optional[float] = None
        self._last_log_time: Optional[float] = None
        self._threshold_fired = False
        self._report: Optional[ProfilerReport] = None
        self._clear_tallies()

    def _clear_tallies(self) -> None:
        self._total = ListStats('*')
        self._lists: Dict[str, ListStats] = {}
        self._latencies: List[int] = []
        self._traces: List[TracedComparison] = []

    def start(self) -> None:
        """Open the profiled window and become the active profiler."""
        with self._lock:
            self._start_time = self._last_log_time = time.perf_counter()
            self._end_time = None
            self._threshold_fired = False
            self._report = None
            self._clear_tallies()
        set_active_profiler(self)

    def stop(self) -> ProfilerReport:
        """Close the window, step down as active profiler and return the report."""
        if get_active_profiler() is self:
            set_active_profiler(None)
        with self._lock:
            self._end_time = time.perf_counter()
            self._report = self._build_report(self._end_time)
            return self._report

    def reset(self) -> None:
        """Discard what has been recorded so far, keeping the window open."""
        with self._lock:
            self._clear_tallies()

    @property
    def report(self) -> ProfilerReport:
        """Final report after stop(), otherwise a snapshot of the running window."""
        with self._lock:
            if self._report is not None:
                return self._report
            return self._build_report(time.perf_counter())

    def record_comparison(
        self,
        duration_ns: int,
        list_name: Optional[str] = None,
        a: Any = None,
        b: Any = None,
        result: int = 0,
    ) -> None:
        """Record one timed comparison made by list_name on (a, b)."""
        if self._sample_rate < 1.0 and self._rng.random() >= self._sample_rate:
            return

        with self._lock:
            self._total.add(duration_ns)
            if list_name:
                self._lists.setdefault(list_name, ListStats(list_name)).add(duration_ns)
            if self._track_percentiles:
                self._latencies.append(duration_ns)
            if len(self._traces) < self._trace_samples:
                self._traces.append(TracedComparison(
                    list_name, repr(a)[:100], repr(b)[:100], result, duration_ns,
                ))

            now = time.perf_counter()
            self._log_running_totals(now)
            alert = self._threshold_report(now)

        if alert is not None:
            if self._logger is not None:
                self._logger.warning(
                    "comparator overhead %.1f%% exceeds threshold %.1f%%",
                    alert.comparator_time_pct, self._threshold_pct,
                )
            if self._on_threshold is not None:
                self._on_threshold(alert)

    def _log_running_totals(self, now: float) -> None:
        if self._logger is None or self._log_interval is None or self._last_log_time is None:
            return
        if now - self._last_log_time >= self._log_interval:
            self._last_log_time = now
            self._logger.info(
                "comparator profile: %d comparisons, %.3f sec in comparator",
                self._total.comparison_count, self._total.time_ns / 1e9,
            )

    def _overhead_pct(self, now: float) -> float:
        wall_time = now - (self._start_time if self._start_time is not None else now)
        return self._total.time_ns / 1e9 / wall_time * 100 if wall_time > 0 else 0.0

    def _threshold_report(self, now: float) -> Optional[ProfilerReport]:
        """Report to alert with, the first time overhead passes threshold_pct."""
        if self._threshold_pct is None or self._threshold_fired or self._start_time is None:
            return None
        if self._overhead_pct(now) <= self._threshold_pct:
            return None
        self._threshold_fired = True
        return self._build_report(now)

    def _build_report(self, now: float) -> ProfilerReport:
        end = self._end_time if self._end_time is not None else now
        report = ProfilerReport(
            wall_time_sec=end - (self._start_time if self._start_time is not None else end),
            comparator_time_sec=self._total.time_ns / 1e9,
            comparator_time_pct=self._overhead_pct(end),
            comparison_count=self._total.comparison_count,
            lists={name: replace(stats) for name, stats in self._lists.items()},
            traces=list(self._traces),
        )
        if self._latencies:
            ordered = sorted(self._latencies)
            report.p50_ns = _percentile(ordered, 0.50)
            report.p95_ns = _percentile(ordered, 0.95)
            report.p99_ns = _percentile(ordered, 0.99)
            report.max_ns = float(ordered[-1])
        return report

    def __enter__(self) -> 'ComparatorProfiler':
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()


_active_profiler: Optional[ComparatorProfiler] = None
_profiler_lock = threading.Lock()


def get_active_profiler() -> Optional[ComparatorProfiler]:
    """Profiler that instrumented lists currently report to, if any."""
    with _profiler_lock:
        return _active_profiler


def set_active_profiler(profiler: Optional[ComparatorProfiler]) -> None:
    global _active_profiler
    with _profiler_lock:
        _active_profiler = profiler
