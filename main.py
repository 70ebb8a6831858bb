#!/usr/bin/env python3
"""p-monitor - Host resource monitor.

p-monitor samples disk, memory, CPU and GPU utilization at a configurable
interval and keeps the latest snapshot available to a presentation layer.
This entry point wires the engine together and uses a minimal console
presenter that logs each new snapshot.

Architecture:
    1. **Core Layer** (pmonitor/core/):
       - config: Read-only configuration
       - models: Metric results and snapshots
       - store: Latest-snapshot store

    2. **Data Collection Layer** (pmonitor/collectors/):
       - system: Disk, memory, CPU and the full collection cycle
       - thermal: CPU temperature discovery
       - gpu: NVIDIA, AMD and integrated GPU probing

    3. **Monitoring Layer** (pmonitor/monitors/):
       - system: Periodic collection loop

    4. **Utility Layer** (pmonitor/utils/):
       - Platform detection, formatting, logging

Thread Safety:
    - Collection runs on a single daemon thread
    - The presenter only reads the snapshot store
    - Graceful shutdown on SIGINT/SIGTERM

Usage:
    python main.py                      # Run until interrupted
    python main.py --config my.ini      # Use a specific config file
    python main.py --once               # Collect one snapshot and exit

Exit Codes:
    0: Clean shutdown
    1: Configuration error
"""

# Standard library imports
import argparse
import logging
import signal
import sys
import threading

# Local imports
from pmonitor.collectors.gpu import GPUCollector
from pmonitor.collectors.system import (
    CPUCollector,
    DiskCollector,
    MemoryCollector,
    SystemInfoCollector,
)
from pmonitor.core.config import MonitorConfig, load_config
from pmonitor.core.errors import ConfigError
from pmonitor.core.store import SnapshotStore
from pmonitor.monitors.system import SystemMonitor
from pmonitor.utils.formatting import format_snapshot
from pmonitor.utils.logging_setup import setup_logging
from pmonitor.utils.platform import PlatformUtils

logger = logging.getLogger(__name__)

PRESENTER_POLL = 1.0


def build_collector(config: MonitorConfig, platform_utils: PlatformUtils) -> SystemInfoCollector:
    """Create the collection cycle with all probes configured."""
    return SystemInfoCollector(
        disk=DiskCollector(config.disk_path),
        memory=MemoryCollector(),
        cpu=CPUCollector(),
        gpu=GPUCollector(platform_utils=platform_utils),
    )


def present(store: SnapshotStore, config: MonitorConfig, exit_flag: threading.Event) -> None:
    """Log each new snapshot until the exit flag is set.

    Stands in for a real presentation layer: it runs on its own schedule and
    only ever reads from the store.
    """
    last_seen = 0
    while not exit_flag.is_set():
        snapshot, published = store.latest()
        if snapshot is not None and published != last_seen:
            last_seen = published
            logger.info(f"Snapshot at {snapshot.updated.strftime('%H:%M:%S')}")
            for line in format_snapshot(snapshot, config.temperature_unit):
                logger.info(f"  {line}")
        exit_flag.wait(PRESENTER_POLL)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Host resource monitor")
    parser.add_argument("--config", help="Path to config.ini")
    parser.add_argument(
        "--once", action="store_true", help="Collect a single snapshot and exit"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Main entry point for p-monitor.

    Loads configuration, sets up logging, starts the monitor thread and runs
    the console presenter until SIGINT or SIGTERM is received.

    Returns:
        Process exit code.
    """
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        setup_logging()
        logger.error(f"Configuration error: {e}")
        return 1

    setup_logging(config.log_level, config.log_file)
    logger.info("Starting p-monitor...")

    platform_utils = PlatformUtils()
    if not platform_utils.is_linux():
        logger.warning(
            f"Running on {platform_utils.get_platform()}, CPU temperature needs Linux sysfs"
        )

    collector = build_collector(config, platform_utils)
    store = SnapshotStore()
    monitor = SystemMonitor(collector, store, config.interval_seconds)

    if args.once:
        snapshot = monitor.run_once()
        for line in format_snapshot(snapshot, config.temperature_unit):
            print(line)
        return 0

    exit_flag = threading.Event()

    def signal_handler(sig, frame):
        """Handle shutdown signals gracefully."""
        logger.info("Shutdown signal received, stopping monitor...")
        exit_flag.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    monitor.start()

    logger.info("=" * 50)
    logger.info("p-monitor running. Press Ctrl+C to exit...")
    logger.info(f"Interval: {config.interval_seconds}s")
    logger.info(f"Disk path: {config.disk_path}")
    logger.info("=" * 50)

    try:
        present(store, config, exit_flag)
    finally:
        monitor.stop()
        logger.info("Shutdown complete")

    return 0


if __name__ == "__main__":
    sys.exit(main())
