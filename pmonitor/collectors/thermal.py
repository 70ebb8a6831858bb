"""CPU temperature discovery from Linux sysfs.

Temperature sensors are exposed as text files holding an integer in
millidegrees Celsius. The reader first tries a fixed list of well-known
locations, then falls back to scanning every thermal zone and picking the
first one whose ``type`` label looks like a CPU.
"""

# Standard library imports
import glob
import logging
import os
from typing import Optional, Sequence

# Local imports
from pmonitor.core.errors import ThermalReadError

logger = logging.getLogger(__name__)

THERMAL_DIR = "/sys/class/thermal"

# Tried in order; wildcard entries are expanded with glob.
THERMAL_CANDIDATES = (
    "/sys/class/thermal/thermal_zone0/temp",
    "/sys/class/thermal/thermal_zone1/temp",
    "/sys/devices/platform/coretemp.0/hwmon/hwmon*/temp1_input",  # Intel coretemp
    "/sys/devices/virtual/thermal/thermal_zone0/temp",
)

CPU_ZONE_KEYWORDS = ("cpu", "x86", "core")


def read_thermal_file(path: str) -> float:
    """Read a sysfs temperature file.

    Args:
        path: File path, may contain a glob wildcard.

    Returns:
        Temperature in degrees Celsius.

    Raises:
        ThermalReadError: If no file matches, the file cannot be read, or its
            content is not a number.

    Example:
        >>> read_thermal_file("/sys/class/thermal/thermal_zone0/temp")
        45.0
    """
    if "*" in path:
        matches = sorted(glob.glob(path))
        if not matches:
            raise ThermalReadError(f"No thermal files match {path}")
        path = matches[0]

    try:
        with open(path, encoding="utf-8") as f:
            raw = f.read().strip()
    except (IOError, OSError, UnicodeDecodeError) as e:
        raise ThermalReadError(f"Could not read {path}: {e}") from e

    try:
        millidegrees = float(raw)
    except ValueError as e:
        raise ThermalReadError(f"Invalid temperature in {path}: {raw!r}") from e

    return millidegrees / 1000.0


class ThermalReader:
    """Finds and reads the CPU temperature.

    Attributes:
        candidates: Ordered sensor paths tried before zone discovery.
        thermal_dir: Directory holding ``thermal_zone*`` entries.

    Example:
        >>> reader = ThermalReader()
        >>> temp = reader.read_cpu_temperature()
        >>> if temp is not None:
        ...     print(f"CPU temp: {temp}°C")
    """

    def __init__(
        self,
        candidates: Sequence[str] = THERMAL_CANDIDATES,
        thermal_dir: str = THERMAL_DIR,
    ):
        self.candidates = tuple(candidates)
        self.thermal_dir = thermal_dir

    def find_cpu_zone(self) -> float:
        """Scan thermal zones for one whose type names a CPU.

        Zones are visited in name order. A zone counts only if its ``temp``
        file is readable and its ``type`` label contains one of
        ``CPU_ZONE_KEYWORDS`` (case-insensitive).

        Returns:
            Temperature of the first matching zone in degrees Celsius.

        Raises:
            ThermalReadError: If the directory cannot be listed or no zone matches.
        """
        try:
            entries = sorted(os.listdir(self.thermal_dir))
        except OSError as e:
            raise ThermalReadError(f"Could not list {self.thermal_dir}: {e}") from e

        for entry in entries:
            if not entry.startswith("thermal_zone"):
                continue

            zone_dir = os.path.join(self.thermal_dir, entry)
            try:
                temp = read_thermal_file(os.path.join(zone_dir, "temp"))
            except ThermalReadError as e:
                logger.debug(f"Skipping {entry}: {e}")
                continue

            try:
                with open(os.path.join(zone_dir, "type"), encoding="utf-8") as f:
                    zone_type = f.read().strip().lower()
            except (IOError, OSError, UnicodeDecodeError) as e:
                logger.debug(f"Skipping {entry}, no readable type: {e}")
                continue

            if any(keyword in zone_type for keyword in CPU_ZONE_KEYWORDS):
                logger.debug(f"Using {entry} ({zone_type}) for CPU temperature")
                return temp

        raise ThermalReadError("No CPU thermal zone found")

    def read_cpu_temperature(self) -> Optional[float]:
        """Get the CPU temperature in Celsius, if any sensor provides it.

        Returns:
            Temperature in degrees Celsius, or None if unavailable.
        """
        for path in self.candidates:
            try:
                return read_thermal_file(path)
            except ThermalReadError as e:
                logger.debug(f"Thermal candidate failed: {e}")

        try:
            return self.find_cpu_zone()
        except ThermalReadError as e:
            logger.debug(f"CPU temperature not available: {e}")

        return None
