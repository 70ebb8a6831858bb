"""Data collection classes for p-monitor.

The collectors only gather data. They do not schedule themselves, store
snapshots or format anything for display, which keeps each one testable on
its own.

Modules:
    system: Disk, memory and CPU collectors, and the full collection cycle
    thermal: CPU temperature discovery from sysfs
    gpu: Multi-vendor GPU probing through external tools
"""

from .gpu import (
    AMDGPUCollector,
    GPUCollector,
    IntegratedGPUCollector,
    NvidiaGPUCollector,
)
from .system import CPUCollector, DiskCollector, MemoryCollector, SystemInfoCollector
from .thermal import ThermalReader

__all__ = [
    "CPUCollector",
    "MemoryCollector",
    "DiskCollector",
    "ThermalReader",
    "GPUCollector",
    "NvidiaGPUCollector",
    "AMDGPUCollector",
    "IntegratedGPUCollector",
    "SystemInfoCollector",
]
