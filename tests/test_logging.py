"""Tests for the simulation event log.

The logger records structured entries as the engines step, giving a
text replay of every decision.
"""

from py_osviz.logging import LogEntry, Logger, LogLevel


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_str_with_step(self) -> None:
        """String form names the source and step."""
        entry = LogEntry(level=LogLevel.INFO, message="fault on page 3", source="paging", step=2)
        assert str(entry) == "[INFO] paging#2: fault on page 3"

    def test_str_without_step(self) -> None:
        """Entries without a step omit the counter."""
        entry = LogEntry(level=LogLevel.DEBUG, message="moved", source="disk")
        assert str(entry) == "[DEBUG] disk: moved"

    def test_to_dict(self) -> None:
        """The dict view uses the level name."""
        entry = LogEntry(level=LogLevel.WARNING, message="m", source="s", step=1)
        assert entry.to_dict() == {"level": "WARNING", "message": "m", "source": "s", "step": 1}


class TestLogger:
    """Verify append, filter and clear."""

    def test_starts_empty(self) -> None:
        """A new logger has no entries."""
        assert Logger().entries == []

    def test_log_appends_in_order(self) -> None:
        """Entries come back oldest first."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="paging")
        logger.log(LogLevel.DEBUG, "second", source="disk")
        assert [e.message for e in logger.entries] == ["first", "second"]

    def test_filter_by_level_and_source(self) -> None:
        """Both criteria narrow the result."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "hit", source="paging")
        logger.log(LogLevel.INFO, "fault", source="paging")
        logger.log(LogLevel.INFO, "reset", source="disk")
        assert [e.message for e in logger.filter(min_level=LogLevel.INFO)] == ["fault", "reset"]
        assert [e.message for e in logger.filter(source="paging")] == ["hit", "fault"]
        assert [e.message for e in logger.filter(min_level=LogLevel.INFO, source="disk")] == ["reset"]

    def test_entries_is_a_copy(self) -> None:
        """Mutating the returned list doesn't affect the logger."""
        logger = Logger()
        logger.log(LogLevel.INFO, "x", source="paging")
        logger.entries.clear()
        assert len(logger.entries) == 1

    def test_clear(self) -> None:
        """Clear removes everything."""
        logger = Logger()
        logger.log(LogLevel.INFO, "x", source="paging")
        logger.clear()
        assert logger.entries == []
