"""System monitoring loop.

This module provides the SystemMonitor class which drives periodic
collection cycles on a background thread and publishes each finished
snapshot to the snapshot store, where the presentation layer picks it up.
"""

# Standard library imports
import logging
import threading
import time
from typing import Optional

# Local imports
from pmonitor.collectors.system import SystemInfoCollector
from pmonitor.core.config import MIN_INTERVAL
from pmonitor.core.models import SystemSnapshot
from pmonitor.core.store import SnapshotStore

logger = logging.getLogger(__name__)


class SystemMonitor:
    """Runs collection cycles at a fixed interval.

    The first cycle runs as soon as the monitor starts, then one per elapsed
    interval. Cycles run one after another on a single daemon thread, so a
    cycle never starts before the previous one has published. Stopping is
    cooperative: an in-flight cycle is allowed to finish, but its snapshot is
    discarded once a stop has been requested.

    A monitor can only be started once. Build a new one to run again.

    Attributes:
        collector: Collector that runs one full cycle.
        store: Snapshot store receiving each finished snapshot.
        interval: Seconds between cycle starts.

    Example:
        >>> store = SnapshotStore()
        >>> monitor = SystemMonitor(SystemInfoCollector(), store, interval=5)
        >>> monitor.start()
        >>> snapshot = store.current()
        >>> monitor.stop()
    """

    def __init__(
        self,
        collector: SystemInfoCollector,
        store: SnapshotStore,
        interval: int = 5,
    ):
        """Initialize system monitor.

        Args:
            collector: System information collector instance.
            store: Snapshot store to publish to.
            interval: Collection interval in seconds (default: 5). Values
                below one second are raised to one second.
        """
        if interval < MIN_INTERVAL:
            logger.warning(
                f"Interval {interval}s is too small, using {MIN_INTERVAL}s instead"
            )
            interval = MIN_INTERVAL

        self.collector = collector
        self.store = store
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._stopped = False
        self._cycles = 0
        logger.debug(f"SystemMonitor initialized with interval={interval}s")

    @property
    def is_running(self) -> bool:
        """Check if the monitor thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    @property
    def cycles(self) -> int:
        """Number of snapshots this monitor has published."""
        return self._cycles

    def start(self) -> None:
        """Start the monitoring thread.

        Does nothing if the monitor is already running.

        Raises:
            RuntimeError: If the monitor has already been stopped.
        """
        if self._stopped:
            raise RuntimeError("SystemMonitor cannot be restarted after stop()")
        if self.is_running:
            return

        self._thread = threading.Thread(
            target=self._run,
            name="SystemMonitor",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Request the monitoring loop to stop and wait for it.

        Args:
            timeout: How long to wait for the thread to finish (seconds).
        """
        self._stopped = True
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning("System monitor did not stop within timeout")
            else:
                self._thread = None

    def run_once(self) -> Optional[SystemSnapshot]:
        """Run a single collection cycle and publish its snapshot.

        Returns:
            The published snapshot, or None if a stop was requested while the
            cycle was running.
        """
        snapshot = self.collector.collect()

        if self._stop_event.is_set():
            logger.debug("Stop requested during collection, discarding snapshot")
            return None

        self.store.publish(snapshot)
        self._cycles += 1
        return snapshot

    def _run(self) -> None:
        """Main loop running on the monitor thread."""
        logger.info(f"System monitor started (interval={self.interval}s)")
        next_tick = time.monotonic()

        try:
            while not self._stop_event.is_set():
                try:
                    self.run_once()
                except Exception as e:
                    logger.error(f"Error in collection cycle: {e}", exc_info=True)

                next_tick += self.interval
                now = time.monotonic()
                if now > next_tick:
                    skipped = int((now - next_tick) // self.interval) + 1
                    logger.warning(
                        f"Collection cycle overran the interval, skipping {skipped} tick(s)"
                    )
                    next_tick += skipped * self.interval

                # Wait for next tick or stop signal
                self._stop_event.wait(next_tick - now)
        finally:
            logger.info("System monitor stopped")
