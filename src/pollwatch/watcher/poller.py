"""Background polling loop that drives a Watcher."""

import logging
import threading
from typing import TYPE_CHECKING, Callable

from .engine import ScanResult, Watcher
from .node import Node

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)

MIN_POLL_INTERVAL = 0.1


class PollingWatcher:
    """Run Watcher.scan() on a background thread at a fixed interval.

    All access to the wrapped Watcher goes through an internal lock, so
    nodes can be registered and unregistered from other threads while the
    loop is running. Node notifications run on the polling thread.
    """

    def __init__(
        self,
        watcher: Watcher | None = None,
        poll_interval: float = 1.0,
        on_errors: Callable[[list[Exception]], None] | None = None,
    ):
        """Initialize the polling watcher.

        Args:
            watcher: Watcher to drive (default: a new Watcher)
            poll_interval: Seconds between scans (minimum 0.1)
            on_errors: Called with the failures of any scan that reported some
        """
        self._watcher = watcher if watcher is not None else Watcher()
        self._poll_interval = max(MIN_POLL_INTERVAL, poll_interval)
        self._on_errors = on_errors

        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        on_errors: Callable[[list[Exception]], None] | None = None,
    ) -> "PollingWatcher":
        """Build a polling watcher using the interval and root from settings."""
        watcher = Watcher(provider=settings.create_provider())
        return cls(watcher, poll_interval=settings.poll_interval, on_errors=on_errors)

    @property
    def watcher(self) -> Watcher:
        """The wrapped Watcher. Not safe to use directly while running."""
        return self._watcher

    @property
    def poll_interval(self) -> float:
        """Get the polling interval in seconds."""
        return self._poll_interval

    @poll_interval.setter
    def poll_interval(self, value: float) -> None:
        """Set the polling interval in seconds."""
        self._poll_interval = max(MIN_POLL_INTERVAL, value)

    @property
    def is_running(self) -> bool:
        """Check if the polling thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def register(self, node: Node) -> None:
        """Register a node with the wrapped Watcher."""
        with self._lock:
            self._watcher.register(node)

    def unregister(self, node: Node) -> None:
        """Unregister a node from the wrapped Watcher."""
        with self._lock:
            self._watcher.unregister(node)

    def scan(self) -> ScanResult:
        """Run one scan immediately, serialized with the polling loop."""
        with self._lock:
            result = self._watcher.scan()

        if result.errors:
            logger.warning(f"Scan reported {len(result.errors)} node failures")
            if self._on_errors is not None:
                try:
                    self._on_errors(result.errors)
                except Exception as e:
                    logger.error(f"Error in scan error callback: {e}")
        return result

    def start(self) -> None:
        """Start polling in a daemon thread."""
        if self.is_running:
            logger.warning("PollingWatcher is already running")
            return

        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop_event,),
            name="pollwatch-poller",
            daemon=True,
        )
        self._thread.start()

        logger.info(f"PollingWatcher started (interval: {self._poll_interval:.1f}s)")

    def stop(self, timeout: float = 5.0) -> None:
        """Stop polling and wait for the current scan to finish."""
        if self._thread is None:
            return

        self._stop_event.set()
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning(f"PollingWatcher still finishing a scan after {timeout:.1f}s")
            return
        self._thread = None

        logger.info("PollingWatcher stopped")

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            try:
                self.scan()
            except Exception as e:
                logger.error(f"Scan failed: {e}")

            stop_event.wait(self._poll_interval)

    def __enter__(self) -> "PollingWatcher":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()
