"""Tests for performance monitoring"""
import json

import pytest

from src.utils.monitoring import PerformanceMonitor


class TestPerformanceMonitor:
    """Test timing and summary"""

    @pytest.fixture
    def monitor(self, tmp_path):
        return PerformanceMonitor(metrics_dir=tmp_path)

    def test_measure_records_metric(self, monitor):
        with monitor.measure("value_pool", players=10) as metric:
            pass

        assert metric.success
        assert metric.duration is not None
        assert metric.metadata == {"players": 10}
        assert monitor.get_performance_summary()["value_pool"]["count"] == 1

    def test_measure_records_errors(self, monitor):
        with pytest.raises(RuntimeError):
            with monitor.measure("broken"):
                raise RuntimeError("boom")

        summary = monitor.get_performance_summary()
        assert summary["broken"]["error_count"] == 1
        assert monitor.metrics[0].error == "boom"

    def test_measure_function(self, monitor):
        @monitor.measure_function(name="double")
        def double(x):
            return x * 2

        assert double(4) == 8
        assert monitor.get_performance_summary()["double"]["count"] == 1

    def test_empty_summary(self, monitor):
        assert monitor.get_performance_summary() == {"message": "No metrics recorded"}

    def test_export_and_clear(self, monitor):
        with monitor.measure("build"):
            pass

        path = monitor.export_metrics("metrics.json")
        data = json.loads(path.read_text())

        assert data["performance_metrics"][0]["name"] == "build"
        monitor.clear_metrics()
        assert monitor.metrics == []

    def test_history_survives_new_monitor(self, monitor, tmp_path):
        with monitor.measure("build"):
            pass

        assert monitor.save_history() == tmp_path / "history.json"
        assert monitor.metrics == []

        later = PerformanceMonitor(metrics_dir=tmp_path)
        assert later.get_performance_summary() == {"message": "No metrics recorded"}
        assert later.get_performance_summary(include_history=True)["build"]["count"] == 1

    def test_save_history_appends(self, monitor):
        for _ in range(2):
            with monitor.measure("build"):
                pass
            monitor.save_history()

        assert len(monitor.load_history()) == 2
        assert monitor.save_history() is None

    def test_clear_removes_history(self, monitor):
        with monitor.measure("build"):
            pass
        monitor.save_history()

        monitor.clear_metrics()

        assert not monitor.history_file.exists()
        assert monitor.load_history() == []

    def test_unreadable_history(self, monitor, tmp_path):
        (tmp_path / "history.json").write_text("{not json")
        assert monitor.load_history() == []
