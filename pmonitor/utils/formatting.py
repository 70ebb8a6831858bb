"""Data formatting and transformation utilities.

This module provides formatting functions that turn snapshot data into the
short human-readable strings a presentation layer shows, e.g. in a tray menu
or on the console. All final rounding happens here, not in the collectors.
"""

from typing import List

from pmonitor.core.models import GPUMetrics, GPUType, SystemSnapshot

UNAVAILABLE = "N/A"


def format_bytes(bytes_value: float, decimal_places: int = 1) -> str:
    """Format bytes into human-readable size.

    Args:
        bytes_value: Size in bytes to format.
        decimal_places: Number of decimal places to display (default: 1).

    Returns:
        Formatted string (e.g., "1.5 GB", "512.0 MB").

    Example:
        >>> format_bytes(1610612736)
        '1.5 GB'
        >>> format_bytes(1024)
        '1.0 KB'
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if bytes_value < 1024.0:
            return f"{bytes_value:.{decimal_places}f} {unit}"
        bytes_value /= 1024.0
    return f"{bytes_value:.{decimal_places}f} PB"


def format_percentage(value: float, decimal_places: int = 1) -> str:
    """Format a value as a percentage string.

    Example:
        >>> format_percentage(75.543)
        '75.5%'
    """
    return f"{value:.{decimal_places}f}%"


def format_temperature(celsius: float, unit: str = "C") -> str:
    """Format temperature with unit.

    Args:
        celsius: Temperature in Celsius.
        unit: "C"/"celsius" or "F"/"fahrenheit" (default: "C").

    Returns:
        Formatted temperature string (e.g., "45.2°C", "113.4°F").

    Example:
        >>> format_temperature(45.2)
        '45.2°C'
        >>> format_temperature(100, unit="fahrenheit")
        '212.0°F'
    """
    if unit.upper() in ("F", "FAHRENHEIT"):
        fahrenheit = (celsius * 9/5) + 32
        return f"{fahrenheit:.1f}°F"
    return f"{celsius:.1f}°C"


def gpu_label(gpu: GPUMetrics, index: int) -> str:
    """Short display label for a GPU, chosen from its category tag.

    Example:
        >>> gpu_label(GPUMetrics(name="NVIDIA GPU 0 (RTX 3080)", type=GPUType.NVIDIA), 0)
        'NVIDIA GPU 0'
    """
    if gpu.type == GPUType.NVIDIA:
        return f"NVIDIA GPU {index}"
    if gpu.type == GPUType.AMD:
        return f"AMD GPU {index}"
    if gpu.type == GPUType.INTEGRATED:
        return f"iGPU {index}"
    return f"GPU {index}"


def format_snapshot(snapshot: SystemSnapshot, temperature_unit: str = "celsius") -> List[str]:
    """Render a snapshot as display lines.

    Results carrying an error are shown as "N/A", never as zero. Temperatures
    are only shown when present.

    Args:
        snapshot: Snapshot to render.
        temperature_unit: "celsius" or "fahrenheit".

    Returns:
        One line per metric, GPUs last.

    Example:
        >>> format_snapshot(snapshot)
        ['Disk: 45.2% (9.0 GB / 20.0 GB)', 'Memory: 60.0% (9.6 GB / 16.0 GB)', 'CPU: 12.5% (45.0°C)', ...]
    """
    lines = []

    disk = snapshot.disk
    if disk.available:
        lines.append(
            f"Disk: {format_percentage(disk.used_percent)} "
            f"({format_bytes(disk.used)} / {format_bytes(disk.total)})"
        )
    else:
        lines.append(f"Disk: {UNAVAILABLE}")

    memory = snapshot.memory
    if memory.available:
        lines.append(
            f"Memory: {format_percentage(memory.used_percent)} "
            f"({format_bytes(memory.used)} / {format_bytes(memory.total)})"
        )
    else:
        lines.append(f"Memory: {UNAVAILABLE}")

    cpu = snapshot.cpu
    if not cpu.available:
        lines.append(f"CPU: {UNAVAILABLE}")
    elif cpu.temperature is not None:
        lines.append(
            f"CPU: {format_percentage(cpu.usage_percent)} "
            f"({format_temperature(cpu.temperature, temperature_unit)})"
        )
    else:
        lines.append(f"CPU: {format_percentage(cpu.usage_percent)}")

    if not snapshot.gpus:
        lines.append("GPU: none detected")

    for index, gpu in enumerate(snapshot.gpus):
        label = gpu_label(gpu, index)
        if not gpu.available:
            lines.append(f"{label}: {UNAVAILABLE}")
        elif gpu.temperature is not None:
            lines.append(
                f"{label}: {format_percentage(gpu.usage_percent)} "
                f"{format_temperature(gpu.temperature, temperature_unit)}"
            )
        else:
            lines.append(f"{label}: {format_percentage(gpu.usage_percent)}")

    return lines
