"""Pytest configuration and global fixtures.

This module provides fixtures and configuration that are available to all tests.
Fixtures defined here are automatically discovered by pytest and can be used
by any test function by including them as parameters.

Common Fixtures:
    - mock_psutil: psutil disk/memory/CPU calls returning fixed values
    - thermal_tree: Fake sysfs thermal directory built under tmp_path
    - mock_platform: PlatformUtils mock with no external tools installed
    - sample_snapshot: A fully populated SystemSnapshot
    - temp_config_file: Temporary config.ini for configuration tests

Example:
    def test_something(mock_psutil):
        metrics = MemoryCollector().collect()
        assert metrics.used_percent == 60.0
"""

import configparser
from collections import namedtuple
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from pmonitor.core.models import (
    CPUMetrics,
    DiskMetrics,
    GPUMetrics,
    GPUType,
    MemoryMetrics,
    SystemSnapshot,
)
from pmonitor.utils.platform import PlatformUtils

# Shapes of the psutil named tuples the collectors read
DiskUsage = namedtuple("DiskUsage", ["total", "used", "free", "percent"])
VirtualMemory = namedtuple("VirtualMemory", ["total", "available", "percent", "used", "free"])


@pytest.fixture
def mock_psutil(monkeypatch):
    """Mock psutil functions for testing without real system access.

    Returns:
        dict: The values served by the mocks, for assertions.

    Example:
        def test_disk(mock_psutil):
            assert DiskCollector().collect().used_percent == 75.0
    """
    values = {
        "disk": DiskUsage(
            total=500 * 1024**3, used=375 * 1024**3, free=125 * 1024**3, percent=75.0
        ),
        "memory": VirtualMemory(
            total=16 * 1024**3,
            available=6 * 1024**3,
            percent=60.0,
            used=9 * 1024**3,
            free=7 * 1024**3,
        ),
        "cpu": 12.5,
    }

    monkeypatch.setattr("psutil.disk_usage", lambda path: values["disk"])
    monkeypatch.setattr("psutil.virtual_memory", lambda: values["memory"])
    monkeypatch.setattr("psutil.cpu_percent", lambda interval=None: values["cpu"])

    return values


@pytest.fixture
def thermal_tree(tmp_path):
    """Build a fake /sys/class/thermal directory.

    Returns a helper ``add_zone(name, zone_type, temp)`` that creates a
    ``thermal_zoneN`` entry; pass ``temp=None`` to omit the temp file.

    Example:
        def test_zone(thermal_tree):
            thermal_dir, add_zone = thermal_tree
            add_zone("thermal_zone0", "x86_pkg_temp", "52000")
    """
    thermal_dir = tmp_path / "thermal"
    thermal_dir.mkdir()

    def add_zone(name, zone_type, temp):
        zone = thermal_dir / name
        zone.mkdir()
        if zone_type is not None:
            (zone / "type").write_text(f"{zone_type}\n", encoding="utf-8")
        if temp is not None:
            (zone / "temp").write_text(f"{temp}\n", encoding="utf-8")
        return zone

    return thermal_dir, add_zone


@pytest.fixture
def mock_platform():
    """Provide a PlatformUtils mock where no external tools are installed.

    Tests opt tools in by configuring ``command_exists`` and ``run_command``.
    """
    platform = MagicMock(spec=PlatformUtils)
    platform.command_exists.return_value = False
    platform.run_command.return_value = ""
    platform.get_platform.return_value = "linux"
    platform.is_linux.return_value = True
    return platform


@pytest.fixture
def sample_snapshot():
    """Provide a fully populated snapshot."""
    return SystemSnapshot(
        disk=DiskMetrics(total=20 * 1024**3, used=9 * 1024**3, used_percent=45.0),
        memory=MemoryMetrics(total=16 * 1024**3, used=8 * 1024**3, used_percent=50.0),
        cpu=CPUMetrics(usage_percent=12.5, temperature=45.0),
        gpus=(
            GPUMetrics(
                name="NVIDIA GPU 0 (Test GPU)",
                type=GPUType.NVIDIA,
                usage_percent=45.5,
                temperature=62.0,
            ),
            GPUMetrics(name="AMD GPU", type=GPUType.AMD, usage_percent=12.5),
        ),
        updated=datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary config.ini file for testing.

    Returns:
        Path: Path to temporary config file
    """
    config = configparser.ConfigParser()

    config["monitor"] = {"interval": "2", "interval_unit": "minutes", "disk_path": "/home"}
    config["display"] = {"temperature_unit": "fahrenheit"}
    config["logging"] = {"level": "debug", "file": str(tmp_path / "pmonitor.log")}

    config_file = tmp_path / "config.ini"
    with open(config_file, "w") as f:
        config.write(f)

    return config_file


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Keep PM_* overrides from the host environment out of the tests."""
    for name in ("PM_INTERVAL", "PM_INTERVAL_UNIT", "PM_DISK_PATH"):
        monkeypatch.delenv(name, raising=False)


# Pytest hooks for custom behavior


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add automatic markers.

    Args:
        config: pytest config object
        items: list of collected test items
    """
    for item in items:
        # Auto-mark all tests in tests/unit as unit tests
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Auto-mark integration tests
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
