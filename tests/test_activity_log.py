"""Tests for ActivityLog."""

from deepwork.models.log_entry import LogKind
from deepwork.services.activity_log import LOG_CAPACITY, ActivityLog


class TestAppend:
    """Tests for appending entries."""

    def test_append_returns_entry(self):
        """append returns the stored entry."""
        log = ActivityLog()
        entry = log.append(LogKind.FOCUS, "Objective Added: x")

        assert entry.kind == LogKind.FOCUS
        assert entry.message == "Objective Added: x"
        assert log.entries() == [entry]

    def test_shortcuts_set_kind(self):
        """system, focus and achievement set the entry kind."""
        log = ActivityLog()
        log.system("a")
        log.focus("b")
        log.achievement("c")

        assert [e.kind for e in log.entries()] == [
            LogKind.SYSTEM,
            LogKind.FOCUS,
            LogKind.ACHIEVEMENT,
        ]

    def test_entries_oldest_first(self):
        """Entries are returned in append order."""
        log = ActivityLog()
        for i in range(3):
            log.system(str(i))
        assert [e.message for e in log.entries()] == ["0", "1", "2"]


class TestCapacity:
    """Tests for bounded retention."""

    def test_default_capacity(self):
        """The log keeps 50 entries by default."""
        assert LOG_CAPACITY == 50
        assert ActivityLog().capacity == 50

    def test_drops_oldest_when_full(self):
        """Appending past capacity drops the oldest entries."""
        log = ActivityLog()
        for i in range(LOG_CAPACITY + 5):
            log.system(f"entry {i}")

        entries = log.entries()
        assert len(entries) == LOG_CAPACITY
        assert entries[0].message == "entry 5"
        assert entries[-1].message == f"entry {LOG_CAPACITY + 4}"


class TestClear:
    """Tests for clearing."""

    def test_clear_leaves_log_empty(self):
        """clear removes everything and writes no entry of its own."""
        log = ActivityLog()
        log.system("a")
        log.clear()
        assert len(log) == 0


class TestListeners:
    """Tests for subscriptions."""

    def test_listener_receives_entries_and_clear(self):
        """Listeners get each new entry, and None on clear."""
        log = ActivityLog()
        seen = []
        log.subscribe(seen.append)

        entry = log.system("a")
        log.clear()

        assert seen == [entry, None]

    def test_failing_listener_does_not_break_append(self):
        """A listener that raises does not stop the append."""
        log = ActivityLog()

        def boom(entry):
            raise RuntimeError("boom")

        log.subscribe(boom)
        log.system("still here")
        assert len(log) == 1
