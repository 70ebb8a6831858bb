"""Configuration loading for p-monitor.

The monitor only ever reads its configuration. Values come from an INI file
parsed with configparser, with environment variables taking precedence so
the monitor can be driven from scripts and CI without a file on disk.

Configuration Structure:
    [monitor]
        interval: Sampling interval magnitude (default: 5)
        interval_unit: "seconds" or "minutes" (default: seconds)
        disk_path: Mount point whose usage is reported (default: /)

    [display]
        temperature_unit: "celsius" or "fahrenheit" (default: celsius)

    [logging]
        level: Log level name (default: INFO)
        file: Optional path of a rotating log file

Environment Variables:
    PM_INTERVAL: Overrides [monitor] interval
    PM_INTERVAL_UNIT: Overrides [monitor] interval_unit
    PM_DISK_PATH: Overrides [monitor] disk_path

Example:
    >>> config = load_config(Path("data/config.ini"))
    >>> config.interval_seconds
    5
"""

# Standard library imports
import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

# Local imports
from pmonitor.core.errors import ConfigError

logger = logging.getLogger(__name__)


# ----------------------------
# Constants
# ----------------------------

MIN_INTERVAL = 1
INTERVAL_UNITS = ("seconds", "minutes")
TEMPERATURE_UNITS = ("celsius", "fahrenheit")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

BASE_DIR = Path(__file__).resolve().parent.parent.parent
CONFIG_PATH = BASE_DIR / "data" / "config.ini"


# ----------------------------
# Validation Functions
# ----------------------------


def validate_interval(interval: int, unit: str) -> tuple[bool, str]:
    """
    Validate a sampling interval and its unit.

    Returns (is_valid, error_message).
    """
    if unit not in INTERVAL_UNITS:
        return False, f"Interval unit must be one of {', '.join(INTERVAL_UNITS)}, got '{unit}'"

    if interval <= 0:
        return False, f"Interval must be a positive integer, got {interval}"

    return True, ""


def resolve_interval_seconds(interval: int, unit: str) -> int:
    """Resolve an interval magnitude and unit to whole seconds.

    Intervals that resolve to less than ``MIN_INTERVAL`` are clamped so the
    monitor loop can never spin.

    Args:
        interval: Interval magnitude.
        unit: "seconds" or "minutes".

    Returns:
        Total seconds, at least ``MIN_INTERVAL``.

    Example:
        >>> resolve_interval_seconds(2, "minutes")
        120
        >>> resolve_interval_seconds(0, "seconds")
        1
    """
    seconds = interval * 60 if unit == "minutes" else interval
    return max(MIN_INTERVAL, int(seconds))


# ----------------------------
# Configuration
# ----------------------------


@dataclass(frozen=True)
class MonitorConfig:
    """Read-only settings consumed by the monitor and the presentation layer."""

    interval: int = 5
    interval_unit: str = "seconds"
    temperature_unit: str = "celsius"
    disk_path: str = "/"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def interval_seconds(self) -> int:
        """Sampling interval in whole seconds, never below ``MIN_INTERVAL``."""
        return resolve_interval_seconds(self.interval, self.interval_unit)


def _getint(config: configparser.ConfigParser, section: str, option: str, fallback: int) -> int:
    try:
        return config.getint(section, option, fallback=fallback)
    except ValueError as e:
        raise ConfigError(f"[{section}] {option} must be an integer: {e}") from e


def load_config(path: Optional[Union[str, Path]] = None) -> MonitorConfig:
    """
    Load monitor configuration from an INI file.

    A missing file is not an error: defaults are used, with any environment
    overrides applied on top.

    Args:
        path: Path to config.ini (defaults to data/config.ini)

    Returns:
        Loaded MonitorConfig

    Raises:
        ConfigError: If the file cannot be parsed or holds an invalid value.
    """
    config_path = Path(path) if path is not None else CONFIG_PATH
    config = configparser.ConfigParser()

    if config_path.exists():
        try:
            config.read(config_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigError(f"Could not parse {config_path}: {e}") from e
        logger.info(f"Loaded configuration from {config_path}")
    else:
        logger.info(f"No configuration file at {config_path}, using defaults")

    interval = _getint(config, "monitor", "interval", fallback=5)
    interval_unit = config.get("monitor", "interval_unit", fallback="seconds")
    disk_path = config.get("monitor", "disk_path", fallback="/")
    temperature_unit = config.get("display", "temperature_unit", fallback="celsius")
    log_level = config.get("logging", "level", fallback="INFO")
    log_file = config.get("logging", "file", fallback="").strip() or None

    # Environment overrides
    env_interval = os.getenv("PM_INTERVAL")
    if env_interval:
        try:
            interval = int(env_interval)
        except ValueError as e:
            raise ConfigError(f"PM_INTERVAL must be an integer, got '{env_interval}'") from e
    interval_unit = os.getenv("PM_INTERVAL_UNIT", interval_unit)
    disk_path = os.getenv("PM_DISK_PATH", disk_path)

    interval_unit = interval_unit.strip().lower()
    temperature_unit = temperature_unit.strip().lower()
    log_level = log_level.strip().upper()

    is_valid, error = validate_interval(interval, interval_unit)
    if not is_valid:
        raise ConfigError(error)

    if temperature_unit not in TEMPERATURE_UNITS:
        raise ConfigError(
            f"Temperature unit must be one of {', '.join(TEMPERATURE_UNITS)}, got '{temperature_unit}'"
        )

    if log_level not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level '{log_level}'")

    return MonitorConfig(
        interval=interval,
        interval_unit=interval_unit,
        temperature_unit=temperature_unit,
        disk_path=disk_path,
        log_level=log_level,
        log_file=log_file,
    )
