"""Bounded activity journal shown in the terminal pane."""

import logging
from collections import deque
from collections.abc import Callable

from deepwork.models.log_entry import LogEntry, LogKind

logger = logging.getLogger(__name__)

LOG_CAPACITY = 50


class ActivityLog:
    """Append-only journal that keeps the most recent entries.

    Oldest entries are dropped silently once capacity is reached. Listeners
    are told about every append and every clear.
    """

    def __init__(self, capacity: int = LOG_CAPACITY):
        """Initialize the journal.

        Args:
            capacity: Maximum number of entries retained.
        """
        self._entries: deque[LogEntry] = deque(maxlen=capacity)
        self._listeners: list[Callable[[LogEntry | None], None]] = []

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def append(self, kind: LogKind, message: str) -> LogEntry:
        """Append an entry stamped with the current local time.

        Args:
            kind: Entry category.
            message: Entry text.

        Returns:
            The new LogEntry.
        """
        entry = LogEntry(kind=kind, message=message)
        self._entries.append(entry)
        logger.debug(f"[{kind.value}] {message}")
        self._notify(entry)
        return entry

    def system(self, message: str) -> LogEntry:
        return self.append(LogKind.SYSTEM, message)

    def focus(self, message: str) -> LogEntry:
        return self.append(LogKind.FOCUS, message)

    def achievement(self, message: str) -> LogEntry:
        return self.append(LogKind.ACHIEVEMENT, message)

    def clear(self) -> None:
        """Remove every entry without writing a new one."""
        self._entries.clear()
        self._notify(None)

    def entries(self) -> list[LogEntry]:
        """Entries oldest first."""
        return list(self._entries)

    def subscribe(self, callback: Callable[[LogEntry | None], None]) -> None:
        """Register a listener; it receives the new entry, or None on clear."""
        self._listeners.append(callback)

    def _notify(self, entry: LogEntry | None) -> None:
        for callback in self._listeners:
            try:
                callback(entry)
            except Exception as e:
                logger.warning(f"Log listener failed: {e}")

    def __len__(self) -> int:
        return len(self._entries)
