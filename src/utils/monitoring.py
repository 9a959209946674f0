"""
Performance monitoring for board builds and CLI commands
"""
import functools
import json
import logging
import os
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import psutil

from config import DATA_DIR


logger = logging.getLogger(__name__)

# Operations slower than this are logged as warnings
SLOW_OPERATION_SECONDS = 2.0

# Most recent metrics kept in the history file across runs
MAX_HISTORY_RECORDS = 1000


@dataclass
class PerformanceMetric:
    """A single timed operation"""
    name: str
    start_time: float
    duration: Optional[float] = None
    success: bool = True
    error: Optional[str] = None
    memory_mb: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def complete(self, success: bool = True, error: Optional[str] = None):
        """Mark this metric as complete"""
        self.duration = time.time() - self.start_time
        self.success = success
        self.error = error


class PerformanceMonitor:
    """Records operation timings and process memory"""

    def __init__(self, metrics_dir: Optional[Path] = None):
        self.metrics: List[PerformanceMetric] = []
        self._lock = threading.Lock()
        self._process = psutil.Process(os.getpid())
        self.metrics_dir = metrics_dir or DATA_DIR / "metrics"

    @property
    def history_file(self) -> Path:
        return self.metrics_dir / "history.json"

    @contextmanager
    def measure(self, name: str, **metadata):
        """Context manager to measure execution time"""
        metric = PerformanceMetric(name=name, start_time=time.time(), metadata=metadata)

        try:
            yield metric
            metric.complete(success=True)
        except Exception as e:
            metric.complete(success=False, error=str(e))
            raise
        finally:
            metric.memory_mb = self._memory_mb()
            with self._lock:
                self.metrics.append(metric)

            if metric.duration and metric.duration > SLOW_OPERATION_SECONDS:
                logger.warning(f"Slow operation: {name} took {metric.duration:.2f}s")

    def measure_function(self, func: Optional[Callable] = None, name: Optional[str] = None):
        """Decorator to measure function execution time"""
        def decorator(f):
            metric_name = name or f"{f.__module__}.{f.__name__}"

            @functools.wraps(f)
            def wrapper(*args, **kwargs):
                with self.measure(metric_name):
                    return f(*args, **kwargs)

            return wrapper

        if func:
            return decorator(func)
        return decorator

    def _memory_mb(self) -> Optional[float]:
        try:
            return self._process.memory_info().rss / (1024 * 1024)
        except psutil.Error as e:
            logger.debug(f"Error reading process memory: {e}")
            return None

    def get_performance_summary(self, include_history: bool = False) -> Dict[str, Any]:
        """Count, errors and duration stats per operation name"""
        with self._lock:
            metrics = list(self.metrics)
        if include_history:
            metrics = self.load_history() + metrics

        if not metrics:
            return {"message": "No metrics recorded"}

        by_name: Dict[str, List[PerformanceMetric]] = {}
        for metric in metrics:
            by_name.setdefault(metric.name, []).append(metric)

        summary = {}
        for name, group in by_name.items():
            durations = [m.duration for m in group if m.duration is not None]
            if not durations:
                continue
            success_count = sum(1 for m in group if m.success)
            summary[name] = {
                'count': len(group),
                'success_count': success_count,
                'error_count': len(group) - success_count,
                'avg_duration': sum(durations) / len(durations),
                'min_duration': min(durations),
                'max_duration': max(durations),
            }

        memory = [m.memory_mb for m in metrics if m.memory_mb is not None]
        if memory:
            summary['system'] = {'max_memory_mb': max(memory), 'last_memory_mb': memory[-1]}

        return summary

    def export_metrics(self, filename: Optional[str] = None, include_history: bool = False) -> Path:
        """Export metrics to JSON file"""
        if not filename:
            filename = f"metrics_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"

        self.metrics_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.metrics_dir / filename

        with self._lock:
            metrics = list(self.metrics)
        if include_history:
            metrics = self.load_history() + metrics

        data = {
            'timestamp': datetime.now().isoformat(),
            'performance_metrics': [asdict(m) for m in metrics],
            'summary': self.get_performance_summary(include_history)
        }

        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

        logger.info(f"Exported metrics to {filepath}")
        return filepath

    def load_history(self) -> List[PerformanceMetric]:
        """Metrics saved by earlier runs, oldest first"""
        if not self.history_file.exists():
            return []

        try:
            with open(self.history_file, 'r') as f:
                records = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable metrics history {self.history_file}: {e}")
            return []

        return [PerformanceMetric(**record) for record in records]

    def save_history(self) -> Optional[Path]:
        """
        Append this run's metrics to the history file.

        Saved metrics leave the in-memory list, so saving twice does not
        duplicate them. Only the newest MAX_HISTORY_RECORDS are kept.
        """
        with self._lock:
            current = list(self.metrics)
            self.metrics.clear()

        if not current:
            return None

        records = [asdict(m) for m in self.load_history() + current][-MAX_HISTORY_RECORDS:]
        self.metrics_dir.mkdir(parents=True, exist_ok=True)
        with open(self.history_file, 'w') as f:
            json.dump(records, f, indent=2)

        logger.debug(f"Saved {len(current)} metrics to {self.history_file}")
        return self.history_file

    def clear_metrics(self):
        """Clear recorded metrics and the saved history"""
        with self._lock:
            self.metrics.clear()
        if self.history_file.exists():
            self.history_file.unlink()

    def log_summary(self):
        """Log performance summary"""
        summary = self.get_performance_summary()

        if summary.get("message") == "No metrics recorded":
            return

        logger.info("Performance Summary:")
        for name, stats in summary.items():
            if name == 'system':
                logger.info(f"  Memory: max={stats['max_memory_mb']:.1f}MB")
                continue
            logger.info(
                f"  {name}: {stats['count']} runs ({stats['error_count']} errors), "
                f"avg={stats['avg_duration']:.3f}s, max={stats['max_duration']:.3f}s"
            )


# Global performance monitor instance
monitor = PerformanceMonitor()


# Decorator for easy use
def measure_performance(name: Optional[str] = None):
    """Decorator to measure function performance"""
    return monitor.measure_function(name=name)
