"""Unit tests for platform detection and external tool invocation.

Key Testing Patterns:
    - Patch subprocess.run and shutil.which, never launch real programs
    - Verify every failure mode surfaces as CommandError

Example Run:
    pytest tests/unit/pmonitor/utils/test_platform.py -v
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from pmonitor.core.errors import CommandError
from pmonitor.utils.platform import PlatformUtils


class TestPlatformDetection:
    """Test suite for platform detection."""

    @patch("pmonitor.utils.platform.sys")
    def test_linux(self, mock_sys):
        mock_sys.platform = "linux"

        utils = PlatformUtils()

        assert utils.get_platform() == "linux"
        assert utils.is_linux()

    @patch("pmonitor.utils.platform.sys")
    def test_windows(self, mock_sys):
        mock_sys.platform = "win32"

        assert PlatformUtils().get_platform() == "windows"

    @patch("pmonitor.utils.platform.sys")
    def test_unknown(self, mock_sys):
        mock_sys.platform = "plan9"

        utils = PlatformUtils()

        assert utils.get_platform() == "unknown"
        assert not utils.is_linux()


class TestCommandExists:
    """Test suite for command_exists."""

    @patch("pmonitor.utils.platform.shutil.which")
    def test_found(self, mock_which):
        mock_which.return_value = "/usr/bin/nvidia-smi"

        assert PlatformUtils().command_exists("nvidia-smi")
        mock_which.assert_called_once_with("nvidia-smi")

    @patch("pmonitor.utils.platform.shutil.which")
    def test_missing(self, mock_which):
        mock_which.return_value = None

        assert not PlatformUtils().command_exists("radeontop")


class TestRunCommand:
    """Test suite for run_command."""

    @patch("pmonitor.utils.platform.subprocess.run")
    def test_returns_stdout(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="0, GPU, 1, 2\n", stderr="")

        output = PlatformUtils(timeout=3).run_command(["nvidia-smi", "-L"])

        assert output == "0, GPU, 1, 2\n"
        args, kwargs = mock_run.call_args
        assert args[0] == ["nvidia-smi", "-L"]
        assert kwargs["timeout"] == 3

    @patch("pmonitor.utils.platform.subprocess.run")
    def test_undecodable_output_is_replaced(self, mock_run):
        """Test invalid bytes in tool output are replaced rather than raised."""
        mock_run.return_value = MagicMock(returncode=0, stdout="gpu 12.00%\ufffd", stderr="")

        output = PlatformUtils().run_command(["radeontop", "-l", "1", "-d", "-"])

        assert output.startswith("gpu 12.00%")
        assert mock_run.call_args.kwargs["errors"] == "replace"

    @patch("pmonitor.utils.platform.subprocess.run")
    def test_non_zero_exit(self, mock_run):
        mock_run.return_value = MagicMock(returncode=9, stdout="", stderr="driver not loaded\n")

        with pytest.raises(CommandError) as exc_info:
            PlatformUtils().run_command(["nvidia-smi"])

        assert exc_info.value.returncode == 9
        assert "driver not loaded" in str(exc_info.value)

    @patch("pmonitor.utils.platform.subprocess.run")
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="radeontop", timeout=10)

        with pytest.raises(CommandError, match="timed out"):
            PlatformUtils().run_command(["radeontop", "-l", "1", "-d", "-"])

    @patch("pmonitor.utils.platform.subprocess.run")
    def test_launch_failure(self, mock_run):
        mock_run.side_effect = FileNotFoundError("lspci")

        with pytest.raises(CommandError, match="could not be started"):
            PlatformUtils().run_command(["lspci", "-v"])
