"""Monitoring loop implementations for p-monitor.

Modules:
    system: Periodic collection of system metrics into the snapshot store
"""

from .system import SystemMonitor

__all__ = ["SystemMonitor"]
