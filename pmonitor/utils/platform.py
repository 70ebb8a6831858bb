"""Platform detection and external tool invocation.

This module centralizes the platform-specific pieces the collectors depend
on: which OS we are on, whether a helper program is on the search path, and
running that program with a bounded timeout.
"""

# Standard library imports
import logging
import shutil
import subprocess
import sys
from typing import Optional, Sequence

# Local imports
from pmonitor.core.errors import CommandError

logger = logging.getLogger(__name__)

COMMAND_TIMEOUT = 10


class PlatformUtils:
    """Utilities for platform detection and running external tools.

    Attributes:
        _platform: Cached platform name ("linux", "windows", "darwin" or "unknown").

    Example:
        >>> utils = PlatformUtils()
        >>> if utils.command_exists("nvidia-smi"):
        ...     output = utils.run_command(["nvidia-smi", "-L"])
    """

    def __init__(self, timeout: float = COMMAND_TIMEOUT):
        """Initialize platform utilities.

        Args:
            timeout: Seconds to wait for an external tool before giving up.
        """
        self.timeout = timeout
        self._platform: Optional[str] = None

    def get_platform(self) -> str:
        """Get the current platform.

        Returns:
            Platform name: "linux", "windows", "darwin", or "unknown".
        """
        if self._platform is None:
            if sys.platform.startswith("linux"):
                self._platform = "linux"
            elif sys.platform.startswith("win"):
                self._platform = "windows"
            elif sys.platform == "darwin":
                self._platform = "darwin"
            else:
                self._platform = "unknown"
                logger.warning(f"Unknown platform: {sys.platform}")
        return self._platform

    def is_linux(self) -> bool:
        """Check if running on Linux."""
        return self.get_platform() == "linux"

    def command_exists(self, command: str) -> bool:
        """Check whether a program is on the command search path.

        Args:
            command: Program name (e.g., "nvidia-smi").

        Returns:
            True if the program can be found on PATH.
        """
        return shutil.which(command) is not None

    def run_command(self, args: Sequence[str]) -> str:
        """Run an external program and return its standard output.

        Args:
            args: Program name followed by its arguments.

        Returns:
            Decoded standard output.

        Raises:
            CommandError: If the program cannot be launched, times out, or
                exits with a non-zero status.

        Example:
            >>> PlatformUtils().run_command(["lspci", "-v"])
            '00:02.0 VGA compatible controller: Intel Corporation ...'
        """
        command = args[0]
        try:
            result = subprocess.run(
                list(args),
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(command, f"timed out after {self.timeout}s") from e
        except OSError as e:
            raise CommandError(command, f"could not be started: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise CommandError(
                command,
                f"exited with status {result.returncode}" + (f": {stderr}" if stderr else ""),
                returncode=result.returncode,
            )

        return result.stdout or ""
