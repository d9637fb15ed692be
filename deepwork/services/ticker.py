"""Ticker - the fixed-period tick source for the timer.

Runs on a daemon thread only while started. Every start begins a new
generation so ticks from a thread that was already told to stop can be
recognised and ignored.
"""

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)


class Ticker:
    """Calls `callback(generation)` every `interval` seconds while running."""

    def __init__(self, callback: Callable[[int], None], interval: float = 1.0):
        """Initialize the ticker.

        Args:
            callback: Receives the generation that produced the tick.
            interval: Seconds between ticks.
        """
        self._callback = callback
        self.interval = interval
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._stop_event: threading.Event | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        """The generation of the current run (changes on every start/stop)."""
        return self._generation

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._stop_event is not None and not self._stop_event.is_set()

    def start(self) -> None:
        """Start ticking. Does nothing if already started."""
        with self._lock:
            if self._stop_event is not None and not self._stop_event.is_set():
                return
            self._generation += 1
            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(
                target=self._run,
                args=(stop_event, self._generation),
                name=f"ticker-{self._generation}",
                daemon=True,
            )
            self._thread.start()
        logger.debug(f"Ticker started (generation {self._generation})")

    def stop(self) -> None:
        """Stop ticking.

        Does not wait for the thread: it may be blocked on the very lock the
        caller holds. A tick it still delivers carries a stale generation.
        """
        with self._lock:
            if self._stop_event is None or self._stop_event.is_set():
                return
            self._stop_event.set()
            self._generation += 1
            self._thread = None
        logger.debug("Ticker stopped")

    def _run(self, stop_event: threading.Event, generation: int) -> None:
        while not stop_event.wait(self.interval):
            try:
                self._callback(generation)
            except Exception as e:
                logger.error(f"Tick error: {e}")
