"""Performance profiler for JSON Compressor operations."""

import json
import logging
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, List, Optional

import psutil


@dataclass
class PerformanceMetrics:
    """Performance metrics for a transform operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    output_size: int
    memory_peak_mb: float
    memory_start_mb: float
    memory_end_mb: float
    cpu_percent: float
    throughput_mbps: float
    compression_ratio: float

    @property
    def duration_ms(self) -> float:
        return self.duration * 1000


@dataclass
class ProfilingSession:
    """State of one profiled operation."""
    operation_name: str
    input_size: int
    start_time: float
    start_memory: float
    peak_memory: float
    output_size: int = 0
    cpu_samples: List[float] = field(default_factory=list)
    metrics: Optional[PerformanceMetrics] = None


class PerformanceProfiler:
    """
    Performance profiler for transform operations.

    Records duration, memory, CPU utilization and throughput of each
    compress or decompress call made through the facade. Each operation gets
    its own session, so concurrent calls do not share profiling state.
    """

    DEFAULT_HISTORY_SIZE = 1000

    def __init__(self, logger: Optional[logging.Logger] = None,
                 history_size: int = DEFAULT_HISTORY_SIZE):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
            history_size: Number of most recent operations kept in metrics_history
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: Deque[PerformanceMetrics] = deque(maxlen=history_size)

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0):
        """
        Context manager for profiling operations.

        Set ``session.output_size`` inside the block; the session is stopped
        on exit unless it was stopped explicitly.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes
        """
        session = self.start_profiling(operation_name, input_size)
        try:
            yield session
        finally:
            if session.metrics is None:
                self.stop_profiling(session)

    def start_profiling(self, operation_name: str, input_size: int = 0) -> ProfilingSession:
        """
        Start profiling an operation.

        Args:
            operation_name: Name of the operation
            input_size: Size of input data in bytes

        Returns:
            ProfilingSession to pass to sample_performance and stop_profiling
        """
        start_memory = self._current_memory_mb()
        session = ProfilingSession(
            operation_name=operation_name,
            input_size=input_size,
            start_time=time.perf_counter(),
            start_memory=start_memory,
            peak_memory=start_memory
        )

        self.logger.debug(f"Started profiling: {operation_name}")
        return session

    def sample_performance(self, session: ProfilingSession):
        """Sample current performance metrics."""
        if session.metrics is not None:
            return

        try:
            process = psutil.Process()
            current_memory = process.memory_info().rss / 1024 / 1024  # MB
            cpu_percent = process.cpu_percent()

            session.peak_memory = max(session.peak_memory, current_memory)
            session.cpu_samples.append(cpu_percent)

        except psutil.Error as e:
            self.logger.warning(f"Performance sampling failed: {e}")

    def stop_profiling(self, session: ProfilingSession, output_size: Optional[int] = None) -> PerformanceMetrics:
        """
        Stop profiling and return metrics.

        Args:
            session: Session returned by start_profiling
            output_size: Size of output data in bytes (defaults to session.output_size)

        Returns:
            PerformanceMetrics object with collected data
        """
        if session.metrics is not None:
            raise ValueError(f"Profiling session {session.operation_name} already stopped")

        if output_size is not None:
            session.output_size = output_size

        end_time = time.perf_counter()
        duration = end_time - session.start_time

        end_memory = self._current_memory_mb()
        peak_memory = max(session.peak_memory, end_memory)
        avg_cpu = sum(session.cpu_samples) / len(session.cpu_samples) if session.cpu_samples else 0

        throughput = (session.input_size / 1024 / 1024) / duration if duration > 0 else 0  # MB/s
        compression_ratio = session.output_size / session.input_size if session.input_size > 0 else 1.0

        metrics = PerformanceMetrics(
            operation_name=session.operation_name,
            start_time=session.start_time,
            end_time=end_time,
            duration=duration,
            input_size=session.input_size,
            output_size=session.output_size,
            memory_peak_mb=peak_memory,
            memory_start_mb=session.start_memory,
            memory_end_mb=end_memory,
            cpu_percent=avg_cpu,
            throughput_mbps=throughput,
            compression_ratio=compression_ratio
        )

        session.metrics = metrics
        self.metrics_history.append(metrics)

        self.logger.debug(f"Performance Summary - {session.operation_name}: "
                          f"{metrics.duration_ms:.2f} ms, {throughput:.2f} MB/s, "
                          f"peak {peak_memory:.1f} MB, ratio {compression_ratio:.2f}")

        return metrics

    def _current_memory_mb(self) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Memory sampling failed: {e}")
            return 0.0

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all performance metrics.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        count = len(self.metrics_history)
        total_duration = sum(m.duration for m in self.metrics_history)
        total_input = sum(m.input_size for m in self.metrics_history)
        total_output = sum(m.output_size for m in self.metrics_history)

        return {
            "total_operations": count,
            "total_duration": total_duration,
            "total_input_mb": total_input / 1024 / 1024,
            "total_output_mb": total_output / 1024 / 1024,
            "average_throughput_mbps": sum(m.throughput_mbps for m in self.metrics_history) / count,
            "average_memory_peak_mb": sum(m.memory_peak_mb for m in self.metrics_history) / count,
            "average_cpu_percent": sum(m.cpu_percent for m in self.metrics_history) / count,
            "overall_compression_ratio": total_output / total_input if total_input > 0 else 1.0,
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "throughput": m.throughput_mbps,
                    "memory_peak": m.memory_peak_mb,
                    "compression_ratio": m.compression_ratio
                }
                for m in self.metrics_history
            ]
        }

    def export_metrics(self, format: str = "json") -> str:
        """
        Export performance metrics in specified format.

        Args:
            format: Export format ("json", "csv", "summary")

        Returns:
            Formatted metrics string
        """
        if format == "json":
            return json.dumps([
                {
                    "operation": m.operation_name,
                    "duration": m.duration,
                    "input_size": m.input_size,
                    "output_size": m.output_size,
                    "memory_peak_mb": m.memory_peak_mb,
                    "throughput_mbps": m.throughput_mbps,
                    "compression_ratio": m.compression_ratio
                }
                for m in self.metrics_history
            ], indent=2)

        elif format == "csv":
            lines = ["operation,duration,input_size,output_size,memory_peak_mb,throughput_mbps,compression_ratio"]
            for m in self.metrics_history:
                lines.append(f"{m.operation_name},{m.duration},{m.input_size},{m.output_size},"
                             f"{m.memory_peak_mb},{m.throughput_mbps},{m.compression_ratio}")
            return "\n".join(lines)

        elif format == "summary":
            summary = self.get_performance_summary()
            if summary["total_operations"] == 0:
                return "Performance Summary:\n  Total Operations: 0"
            lines = [
                "Performance Summary:",
                f"  Total Operations: {summary['total_operations']}",
                f"  Total Duration: {summary['total_duration'] * 1000:.2f} ms",
                f"  Total Input: {summary['total_input_mb']:.2f} MB",
                f"  Total Output: {summary['total_output_mb']:.2f} MB",
                f"  Average Throughput: {summary['average_throughput_mbps']:.2f} MB/s",
                f"  Average Memory Peak: {summary['average_memory_peak_mb']:.1f} MB"
            ]
            return "\n".join(lines)

        else:
            raise ValueError(f"Unsupported export format: {format}")
