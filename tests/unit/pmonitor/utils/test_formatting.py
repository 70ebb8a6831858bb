"""Unit tests for display formatting.

Example Run:
    pytest tests/unit/pmonitor/utils/test_formatting.py -v
"""

import dataclasses

from pmonitor.core.models import CPUMetrics, DiskMetrics, GPUMetrics, GPUType
from pmonitor.utils.formatting import (
    format_bytes,
    format_percentage,
    format_snapshot,
    format_temperature,
    gpu_label,
)


class TestScalarFormatting:
    """Test suite for the scalar formatters."""

    def test_format_bytes(self):
        assert format_bytes(512) == "512.0 B"
        assert format_bytes(1024) == "1.0 KB"
        assert format_bytes(1610612736) == "1.5 GB"

    def test_format_percentage(self):
        assert format_percentage(75.543) == "75.5%"
        assert format_percentage(0) == "0.0%"

    def test_format_temperature(self):
        assert format_temperature(45.25) == "45.2°C"
        assert format_temperature(100, unit="F") == "212.0°F"
        assert format_temperature(0, unit="fahrenheit") == "32.0°F"
        assert format_temperature(30, unit="celsius") == "30.0°C"


class TestGPULabel:
    """Test suite for gpu_label."""

    def test_labels_by_type(self):
        assert gpu_label(GPUMetrics(name="x", type=GPUType.NVIDIA), 1) == "NVIDIA GPU 1"
        assert gpu_label(GPUMetrics(name="AMD GPU", type=GPUType.AMD), 2) == "AMD GPU 2"
        assert gpu_label(GPUMetrics(name="y", type=GPUType.INTEGRATED), 3) == "iGPU 3"

    def test_unknown_type(self):
        assert gpu_label(GPUMetrics(name="Mystery"), 0) == "GPU 0"


class TestFormatSnapshot:
    """Test suite for format_snapshot."""

    def test_full_snapshot(self, sample_snapshot):
        lines = format_snapshot(sample_snapshot)

        assert lines == [
            "Disk: 45.0% (9.0 GB / 20.0 GB)",
            "Memory: 50.0% (8.0 GB / 16.0 GB)",
            "CPU: 12.5% (45.0°C)",
            "NVIDIA GPU 0: 45.5% 62.0°C",
            "AMD GPU 1: 12.5%",
        ]

    def test_fahrenheit(self, sample_snapshot):
        lines = format_snapshot(sample_snapshot, temperature_unit="fahrenheit")

        assert "CPU: 12.5% (113.0°F)" in lines

    def test_errors_show_unavailable(self, sample_snapshot):
        """Test failed metrics render as N/A rather than zero."""
        snapshot = dataclasses.replace(
            sample_snapshot,
            disk=DiskMetrics.unavailable("denied"),
            cpu=CPUMetrics.unavailable("no data"),
            gpus=(GPUMetrics(name="Integrated GPU", type=GPUType.INTEGRATED, error="n/i"),),
        )

        lines = format_snapshot(snapshot)

        assert lines[0] == "Disk: N/A"
        assert lines[2] == "CPU: N/A"
        assert lines[3] == "iGPU 0: N/A"

    def test_cpu_without_temperature(self, sample_snapshot):
        snapshot = dataclasses.replace(sample_snapshot, cpu=CPUMetrics(usage_percent=3.0))

        assert format_snapshot(snapshot)[2] == "CPU: 3.0%"

    def test_no_gpus(self, sample_snapshot):
        snapshot = dataclasses.replace(sample_snapshot, gpus=())

        assert format_snapshot(snapshot)[-1] == "GPU: none detected"
