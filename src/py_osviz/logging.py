"""Simulation event log — an audit trail of every step.

Each engine can be handed a ``Logger``.  As the simulation advances it
records what happened: which page faulted, which victim was evicted,
where the disk head travelled.  Reading the log back is the text-only
way to replay a run, much like ``dmesg`` replays the kernel ring buffer.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **LogEntry** — a single structured record (level, message, source, step).
- **Logger** — an append-only log with filtering and clearing.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records should be immutable.
    - **Filter returns a list, not a generator** — a simulation log is
      small and callers usually want to iterate multiple times.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The engine that generated the event ("paging" or "disk").
        step: The step counter at the time of the event, if any.

    """

    level: LogLevel
    message: str
    source: str
    step: int | None = None

    def __str__(self) -> str:
        """Format as ``[LEVEL] source#step: message``."""
        where = self.source if self.step is None else f"{self.source}#{self.step}"
        return f"[{self.level.name}] {where}: {self.message}"

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly view of the entry."""
        return {
            "level": self.level.name,
            "message": self.message,
            "source": self.source,
            "step": self.step,
        }


class Logger:
    """Append-only log buffer with filtering."""

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def log(
        self,
        level: LogLevel,
        message: str,
        *,
        source: str,
        step: int | None = None,
    ) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Engine that generated the event.
            step: Step counter associated with the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source, step=step))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()
