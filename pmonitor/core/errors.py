"""Exception types used across p-monitor.

None of these are allowed to escape a collection cycle. Probe helpers raise
them, and the collectors turn them into error strings on the metric results
so the presentation layer can render "N/A".
"""


class MonitorError(Exception):
    """Base class for all p-monitor errors."""


class MetricUnavailableError(MonitorError):
    """Raised when a metric source returns no usable data."""


class ThermalReadError(MonitorError):
    """Raised when a single thermal sensor candidate cannot be read."""


class CommandError(MonitorError):
    """Raised when an external tool was found but failed to run cleanly.

    Attributes:
        command: Name of the external program.
        returncode: Exit code, or None if the process never completed.
    """

    def __init__(self, command: str, message: str, returncode=None):
        super().__init__(f"{command}: {message}")
        self.command = command
        self.returncode = returncode


class ConfigError(MonitorError):
    """Raised when the configuration file holds an invalid value."""
