"""Tests for profiler module (Tier 1)."""

import json
import logging
import time

import pytest

from ordered_skiplist import (
    ComparatorProfiler,
    ProfilerReport,
    OptimizationLevel,
    SkipList,
    config,
    get_active_profiler,
)


@pytest.fixture
def statistics_enabled():
    original = config.enable_statistics
    config.enable_statistics = True
    try:
        yield
    finally:
        config.enable_statistics = original


class TestProfilerReport:
    """Tests for ProfilerReport dataclass."""

    def test_default_values(self):
        """ProfilerReport has reasonable defaults."""
        report = ProfilerReport()
        assert report.wall_time_sec == 0.0
        assert report.comparison_count == 0
        assert report.comparator_time_pct == 0.0

    @pytest.mark.parametrize('pct, level', [
        (3.0, OptimizationLevel.NONE_NEEDED),
        (15.0, OptimizationLevel.CONSIDER_KEY_FUNCTION),
        (35.0, OptimizationLevel.CONSIDER_TYPED),
        (60.0, OptimizationLevel.CRITICAL),
    ])
    def test_optimization_level(self, pct, level):
        """Overhead percentage maps to a recommendation level."""
        assert ProfilerReport(comparator_time_pct=pct).optimization_level == level

    def test_recommendation_string(self):
        """recommendation() returns helpful string."""
        rec = ProfilerReport(comparator_time_pct=25.0).recommendation()
        assert 'key_type' in rec

    def test_str_representation(self):
        """str() returns formatted report."""
        report = ProfilerReport(
            wall_time_sec=1.0,
            comparator_time_sec=0.2,
            comparator_time_pct=20.0,
            comparison_count=1000,
        )
        s = str(report)
        assert 'ComparatorProfiler Report' in s
        assert '1,000' in s

    def test_to_dict(self):
        """to_dict() returns dictionary."""
        d = ProfilerReport(wall_time_sec=1.0, comparison_count=500).to_dict()
        assert d['wall_time_sec'] == 1.0
        assert d['comparison_count'] == 500

    def test_to_json(self, tmp_path):
        """to_json() returns valid JSON and can write a file."""
        path = tmp_path / 'report.json'
        json_str = ProfilerReport(wall_time_sec=1.5).to_json(path)
        assert json.loads(json_str)['wall_time_sec'] == 1.5
        assert json.loads(path.read_text())['wall_time_sec'] == 1.5


class TestComparatorProfiler:
    """Tests for ComparatorProfiler class."""

    def test_start_stop(self):
        """start() and stop() work correctly."""
        profiler = ComparatorProfiler()
        profiler.start()
        time.sleep(0.01)
        report = profiler.stop()

        assert isinstance(report, ProfilerReport)
        assert report.wall_time_sec >= 0.01

    def test_start_installs_active_profiler(self):
        """start() makes the profiler active until stop()."""
        profiler = ComparatorProfiler()
        profiler.start()
        assert get_active_profiler() is profiler
        profiler.stop()
        assert get_active_profiler() is None

    def test_context_manager(self):
        """Context manager works correctly."""
        with ComparatorProfiler() as profiler:
            time.sleep(0.01)

        assert profiler.report.wall_time_sec >= 0.01

    def test_record_comparison(self):
        """record_comparison() updates counts."""
        profiler = ComparatorProfiler()
        profiler.start()
        profiler.record_comparison(1000)
        profiler.record_comparison(2000)
        report = profiler.stop()

        assert report.comparison_count == 2
        assert report.comparator_time_sec > 0

    def test_record_with_list_name(self):
        """record_comparison() tracks per-list stats."""
        profiler = ComparatorProfiler()
        profiler.start()
        profiler.record_comparison(1000, list_name='orders')
        profiler.record_comparison(2000, list_name='orders')
        profiler.record_comparison(1500, list_name='users')
        report = profiler.stop()

        assert report.lists['orders'].comparison_count == 2
        assert report.lists['orders'].avg_ns == 1500
        assert report.lists['users'].comparison_count == 1
        assert 'orders: 2 comparisons' in str(report)
        assert report.to_dict()['lists']['users']['time_ns'] == 1500

    def test_percentile_tracking(self):
        """Profiler tracks latency percentiles."""
        profiler = ComparatorProfiler(track_percentiles=True)
        profiler.start()
        for i in range(100):
            profiler.record_comparison(i * 100)
        report = profiler.stop()

        assert report.p50_ns > 0
        assert report.p95_ns >= report.p50_ns
        assert report.max_ns >= report.p95_ns

    def test_trace_samples(self):
        """Profiler captures at most trace_samples traces."""
        profiler = ComparatorProfiler(trace_samples=5)
        profiler.start()
        for i in range(10):
            profiler.record_comparison(1000, a=i, b=i + 1, result=-1)
        report = profiler.stop()

        assert len(report.traces) == 5
        assert report.traces[0].a_repr == '0'

    def test_sample_rate(self):
        """A sample rate below 1 records a subset of comparisons."""
        profiler = ComparatorProfiler(sample_rate=0.5, seed=3)
        profiler.start()
        for _ in range(1000):
            profiler.record_comparison(10)
        report = profiler.stop()

        assert 300 < report.comparison_count < 700

    def test_invalid_sample_rate(self):
        """sample_rate must be in (0, 1]."""
        with pytest.raises(ValueError):
            ComparatorProfiler(sample_rate=0)

    def test_reset(self):
        """reset() clears counters."""
        profiler = ComparatorProfiler()
        profiler.start()
        profiler.record_comparison(1000)
        profiler.reset()
        report = profiler.stop()

        assert report.comparison_count == 0

    def test_multiple_start_stop(self):
        """Multiple start/stop cycles work."""
        profiler = ComparatorProfiler()
        for _ in range(3):
            profiler.start()
            profiler.record_comparison(1000)
            assert profiler.stop().comparison_count == 1


class TestProfilerAlerts:
    """Tests for logging and threshold callbacks."""

    def test_periodic_logging(self, caplog):
        """Running totals are logged at INFO once log_interval elapses."""
        logger = logging.getLogger('test.profiler')
        profiler = ComparatorProfiler(logger=logger, log_interval=0.0)
        with caplog.at_level(logging.INFO, logger='test.profiler'):
            profiler.start()
            profiler.record_comparison(1000)
            profiler.stop()

        assert 'comparator profile: 1 comparisons' in caplog.text

    def test_threshold_callback_fires_once(self, caplog):
        """on_threshold is called once when overhead exceeds threshold."""
        alerts = []
        logger = logging.getLogger('test.profiler')
        profiler = ComparatorProfiler(
            threshold_pct=50.0, on_threshold=alerts.append, logger=logger,
        )
        with caplog.at_level(logging.WARNING, logger='test.profiler'):
            profiler.start()
            # 10 seconds of reported comparator time dwarfs the wall time
            profiler.record_comparison(10 * 10**9)
            profiler.record_comparison(10 * 10**9)
            profiler.stop()

        assert len(alerts) == 1
        assert alerts[0].comparator_time_pct > 50.0
        assert 'exceeds threshold' in caplog.text


class TestProfiledSkipList:
    """Tests for lists created with statistics enabled."""

    def test_list_reports_comparisons(self, statistics_enabled):
        """Comparisons made by a named list reach the active profiler."""
        s = SkipList(key_type=int, seed=1, name='ints')
        with ComparatorProfiler() as profiler:
            for i in range(50):
                s.insert(i, i)
            s.search(25)
        report = profiler.report

        assert report.comparison_count > 0
        assert report.lists['ints'].comparison_count == report.comparison_count

    def test_list_without_profiler(self, statistics_enabled):
        """An instrumented list works when no profiler is active."""
        s = SkipList(seed=1)
        s.insert('a', 1)
        assert s.search('a') == 1

    def test_statistics_disabled_records_nothing(self):
        """Lists created with statistics off never report."""
        original = config.enable_statistics
        config.enable_statistics = False
        try:
            s = SkipList(seed=1, name='quiet')
        finally:
            config.enable_statistics = original
        with ComparatorProfiler() as profiler:
            s.insert(1, 1)
            s.insert(2, 2)
        assert profiler.report.comparison_count == 0
