"""Utility functions and helpers for p-monitor.

Modules:
    platform: Platform detection and external tool invocation
    formatting: Display formatting of snapshot data
    logging_setup: Console and rotating-file logging
"""

from .formatting import (
    format_bytes,
    format_percentage,
    format_snapshot,
    format_temperature,
    gpu_label,
)
from .logging_setup import setup_logging
from .platform import PlatformUtils

__all__ = [
    "PlatformUtils",
    "format_bytes",
    "format_percentage",
    "format_temperature",
    "format_snapshot",
    "gpu_label",
    "setup_logging",
]
