"""Latest-snapshot store shared between the sampler and the presentation layer."""

# Standard library imports
import logging
import threading
from typing import Optional, Tuple

# Local imports
from pmonitor.core.models import SystemSnapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Holds the most recently completed snapshot.

    The monitor thread publishes and any number of reader threads call
    ``current()``. Snapshots are immutable, so swapping the reference is all
    that needs protecting; the lock is never held while probes run.

    Example:
        >>> store = SnapshotStore()
        >>> store.current() is None
        True
        >>> store.publish(snapshot)
        >>> store.current() is snapshot
        True
    """

    def __init__(self):
        """Initialize an empty store."""
        self._lock = threading.Lock()
        self._snapshot: Optional[SystemSnapshot] = None
        self._published = 0

    def publish(self, snapshot: SystemSnapshot) -> None:
        """Replace the stored snapshot.

        Args:
            snapshot: Fully constructed snapshot from a finished cycle.
        """
        with self._lock:
            self._snapshot = snapshot
            self._published += 1
        logger.debug(f"Published snapshot taken at {snapshot.updated.isoformat()}")

    def current(self) -> Optional[SystemSnapshot]:
        """Get the latest snapshot, or None if no cycle has completed yet."""
        with self._lock:
            return self._snapshot

    def latest(self) -> Tuple[Optional[SystemSnapshot], int]:
        """Get the latest snapshot together with the publish count it belongs to."""
        with self._lock:
            return self._snapshot, self._published

    @property
    def published(self) -> int:
        """Number of snapshots published so far."""
        with self._lock:
            return self._published
