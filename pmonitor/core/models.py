"""Metric result and snapshot models.

Every result type here is a frozen dataclass. A result is either populated
with values or carries an error message, never both: when ``error`` is set the
value fields are zeroed and must be shown as unavailable rather than as zero.

A ``SystemSnapshot`` groups the results of one collection cycle. It is built
once, handed to the snapshot store, and never mutated afterwards.
"""

# Standard library imports
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


def percent_of(used: float, total: float) -> float:
    """Compute ``used / total * 100`` clamped to the range 0-100.

    Args:
        used: Amount in use.
        total: Total capacity.

    Returns:
        Percentage as a float, or 0.0 when ``total`` is not positive.

    Example:
        >>> percent_of(25, 100)
        25.0
        >>> percent_of(10, 0)
        0.0
    """
    if total <= 0:
        return 0.0
    return clamp_percent(used / total * 100)


def clamp_percent(value: float) -> float:
    """Clamp a percentage to the range 0-100."""
    return max(0.0, min(100.0, float(value)))


def _drop_empty_error(data: Dict[str, Any]) -> Dict[str, Any]:
    if data.get("error") is None:
        data.pop("error", None)
    return data


@dataclass(frozen=True)
class DiskMetrics:
    """Disk usage for one mount point, in bytes."""

    total: int = 0
    used: int = 0
    used_percent: float = 0.0
    error: Optional[str] = None

    @classmethod
    def unavailable(cls, message: str) -> "DiskMetrics":
        return cls(error=message)

    @property
    def available(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_empty_error(
            {
                "total": self.total,
                "used": self.used,
                "used_percent": self.used_percent,
                "error": self.error,
            }
        )


@dataclass(frozen=True)
class MemoryMetrics:
    """Virtual memory usage, in bytes."""

    total: int = 0
    used: int = 0
    used_percent: float = 0.0
    error: Optional[str] = None

    @classmethod
    def unavailable(cls, message: str) -> "MemoryMetrics":
        return cls(error=message)

    @property
    def available(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_empty_error(
            {
                "total": self.total,
                "used": self.used,
                "used_percent": self.used_percent,
                "error": self.error,
            }
        )


@dataclass(frozen=True)
class CPUMetrics:
    """CPU usage and temperature.

    ``temperature`` is optional on its own: a missing reading does not make the
    whole result an error.
    """

    usage_percent: float = 0.0
    temperature: Optional[float] = None
    error: Optional[str] = None

    @classmethod
    def unavailable(cls, message: str) -> "CPUMetrics":
        return cls(error=message)

    @property
    def available(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_empty_error(
            {
                "usage_percent": self.usage_percent,
                "temperature": self.temperature,
                "error": self.error,
            }
        )


class GPUType(str, Enum):
    """Category tag the display layer uses to pick a short GPU label."""

    NVIDIA = "nvidia"
    AMD = "amd"
    INTEGRATED = "integrated"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class GPUMetrics:
    """Usage and temperature for one detected GPU."""

    name: str
    type: GPUType = GPUType.UNKNOWN
    usage_percent: float = 0.0
    temperature: Optional[float] = None
    error: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_empty_error(
            {
                "name": self.name,
                "type": self.type.value,
                "usage_percent": self.usage_percent,
                "temperature": self.temperature,
                "error": self.error,
            }
        )


@dataclass(frozen=True)
class SystemSnapshot:
    """All metric results captured during a single collection cycle."""

    disk: DiskMetrics
    memory: MemoryMetrics
    cpu: CPUMetrics
    gpus: Tuple[GPUMetrics, ...] = field(default_factory=tuple)
    updated: datetime = field(default_factory=lambda: datetime.now().astimezone())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the snapshot to a JSON-compatible dictionary.

        Returns:
            Dictionary with ``disk``, ``memory``, ``cpu``, ``gpus`` and an
            ISO-8601 ``updated`` timestamp.
        """
        return {
            "disk": self.disk.to_dict(),
            "memory": self.memory.to_dict(),
            "cpu": self.cpu.to_dict(),
            "gpus": [gpu.to_dict() for gpu in self.gpus],
            "updated": self.updated.isoformat(timespec="seconds"),
        }
