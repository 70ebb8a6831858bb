"""System metrics collection for p-monitor.

This module provides collector classes for disk, memory and CPU metrics, and
``SystemInfoCollector`` which runs one full collection cycle and assembles
the results into an immutable snapshot.

Collectors never raise. A failing source is reported as an error string on
its own result so sibling metrics are unaffected, and the failure is logged
separately for troubleshooting.
"""

# Standard library imports
import logging
import math
from datetime import datetime
from typing import Callable, Optional

# Third-party imports
import psutil

# Local imports
from pmonitor.collectors.gpu import GPUCollector
from pmonitor.collectors.thermal import ThermalReader
from pmonitor.core.errors import MetricUnavailableError
from pmonitor.core.models import (
    CPUMetrics,
    DiskMetrics,
    MemoryMetrics,
    SystemSnapshot,
    clamp_percent,
    percent_of,
)

logger = logging.getLogger(__name__)

CPU_SAMPLE_INTERVAL = 1.0


def _used_percent(reported: Optional[float], used: float, total: float) -> float:
    if reported is None or (isinstance(reported, float) and math.isnan(reported)):
        return percent_of(used, total)
    return clamp_percent(reported)


class DiskCollector:
    """Collects disk usage for one mount point.

    Attributes:
        path: Mount point passed to ``psutil.disk_usage``.

    Example:
        >>> disk = DiskCollector("/")
        >>> metrics = disk.collect()
        >>> print(f"Disk: {metrics.used_percent:.1f}% used")
    """

    def __init__(self, path: str = "/"):
        """Initialize disk collector.

        Args:
            path: Mount point to report (default: "/").
        """
        self.path = path

    def collect(self) -> DiskMetrics:
        """Get total, used and used-percent for the mount point.

        Returns:
            Disk metrics, or the unavailable form if the path cannot be queried
            (not mounted, permission denied).
        """
        try:
            usage = psutil.disk_usage(self.path)
        except (PermissionError, OSError, RuntimeError) as e:
            logger.error(f"Failed to get disk usage for {self.path}: {e}")
            return DiskMetrics.unavailable(str(e))

        return DiskMetrics(
            total=int(usage.total),
            used=int(usage.used),
            used_percent=_used_percent(getattr(usage, "percent", None), usage.used, usage.total),
        )


class MemoryCollector:
    """Collects virtual memory usage.

    Example:
        >>> mem = MemoryCollector()
        >>> print(mem.collect().used_percent)
        65.2
    """

    def collect(self) -> MemoryMetrics:
        """Get total, used and used-percent of system memory.

        Returns:
            Memory metrics, or the unavailable form if psutil fails.
        """
        try:
            virtual_mem = psutil.virtual_memory()
        except Exception as e:
            logger.error(f"Failed to get memory usage: {e}")
            return MemoryMetrics.unavailable(str(e))

        return MemoryMetrics(
            total=int(virtual_mem.total),
            used=int(virtual_mem.used),
            used_percent=_used_percent(
                getattr(virtual_mem, "percent", None), virtual_mem.used, virtual_mem.total
            ),
        )


class CPUCollector:
    """Collects CPU usage and temperature.

    Usage is sampled over a fixed window with ``psutil.cpu_percent``, which
    blocks the calling thread for ``sample_interval`` seconds. Each collection
    cycle therefore takes at least that long.

    Attributes:
        thermal: Reader used to locate the CPU temperature sensor.
        sample_interval: Usage sampling window in seconds.

    Example:
        >>> cpu = CPUCollector()
        >>> metrics = cpu.collect()
        >>> print(f"CPU: {metrics.usage_percent}%")
    """

    def __init__(
        self,
        thermal: Optional[ThermalReader] = None,
        sample_interval: float = CPU_SAMPLE_INTERVAL,
    ):
        """Initialize CPU collector.

        Args:
            thermal: Thermal reader (creates a default one if None).
            sample_interval: Usage sampling window in seconds (default: 1.0).
        """
        self.thermal = thermal or ThermalReader()
        self.sample_interval = sample_interval

    def get_usage(self) -> float:
        """Sample overall CPU usage.

        Returns:
            CPU usage as percentage (0-100).

        Raises:
            MetricUnavailableError: If the OS returns no usage data.
        """
        try:
            usage = psutil.cpu_percent(interval=self.sample_interval)
        except Exception as e:
            raise MetricUnavailableError(f"CPU usage sampling failed: {e}") from e

        if usage is None or math.isnan(usage):
            raise MetricUnavailableError("No CPU usage data available")

        return clamp_percent(usage)

    def get_temperature(self) -> Optional[float]:
        """Get CPU temperature in Celsius, or None if no sensor is readable."""
        return self.thermal.read_cpu_temperature()

    def collect(self) -> CPUMetrics:
        """Get CPU usage and, when available, temperature.

        Returns:
            CPU metrics. A usage failure yields the unavailable form; a
            missing temperature leaves ``temperature`` as None without error.
        """
        try:
            usage = self.get_usage()
        except MetricUnavailableError as e:
            logger.error(f"Failed to get CPU usage: {e}")
            return CPUMetrics.unavailable(str(e))

        temperature = self.get_temperature()
        if temperature is None:
            logger.debug("CPU temperature not available")

        return CPUMetrics(usage_percent=usage, temperature=temperature)


class SystemInfoCollector:
    """Runs one collection cycle across all collectors.

    Probes run sequentially on the calling thread and their results are
    assembled into a new ``SystemSnapshot``. The snapshot timestamp is taken
    at the start of the cycle.

    Attributes:
        disk: Disk collector instance.
        memory: Memory collector instance.
        cpu: CPU collector instance.
        gpu: GPU collector instance.

    Example:
        >>> collector = SystemInfoCollector()
        >>> snapshot = collector.collect()
        >>> print(snapshot.cpu.usage_percent)
    """

    def __init__(
        self,
        disk: Optional[DiskCollector] = None,
        memory: Optional[MemoryCollector] = None,
        cpu: Optional[CPUCollector] = None,
        gpu: Optional[GPUCollector] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize all sub-collectors.

        Args:
            disk: Disk collector (default: root filesystem).
            memory: Memory collector.
            cpu: CPU collector.
            gpu: GPU aggregator.
            clock: Callable returning the capture time (default: local now).
        """
        self.disk = disk or DiskCollector()
        self.memory = memory or MemoryCollector()
        self.cpu = cpu or CPUCollector()
        self.gpu = gpu or GPUCollector()
        self._clock = clock or (lambda: datetime.now().astimezone())

    def collect(self) -> SystemSnapshot:
        """Collect all metrics into a new snapshot.

        Returns:
            Snapshot of disk, memory, CPU and GPU results.
        """
        updated = self._clock()

        disk = self.disk.collect()
        memory = self.memory.collect()
        cpu = self.cpu.collect()
        gpus = tuple(self.gpu.collect())

        return SystemSnapshot(
            disk=disk,
            memory=memory,
            cpu=cpu,
            gpus=gpus,
            updated=updated,
        )
