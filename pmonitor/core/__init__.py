"""Core infrastructure modules for p-monitor.

This package provides the data model, configuration and the snapshot store
shared between the sampling thread and the presentation layer.

Modules:
    config: Read-only configuration loading
    errors: Exception types
    models: Metric results and the immutable snapshot
    store: Latest-snapshot store
"""

from .config import MonitorConfig, load_config
from .errors import (
    CommandError,
    ConfigError,
    MetricUnavailableError,
    MonitorError,
    ThermalReadError,
)
from .models import (
    CPUMetrics,
    DiskMetrics,
    GPUMetrics,
    GPUType,
    MemoryMetrics,
    SystemSnapshot,
)
from .store import SnapshotStore

__all__ = [
    "MonitorConfig",
    "load_config",
    "MonitorError",
    "MetricUnavailableError",
    "ThermalReadError",
    "CommandError",
    "ConfigError",
    "DiskMetrics",
    "MemoryMetrics",
    "CPUMetrics",
    "GPUMetrics",
    "GPUType",
    "SystemSnapshot",
    "SnapshotStore",
]
