"""Disk scheduling — moving the head one request at a time.

When several I/O requests are waiting, the disk arm must travel between
tracks to service them.  The dominant cost is **seek distance** — how
far the head moves.  A scheduling policy decides which request goes
next.

Think of a disk arm like an elevator in a building:
    - **FCFS** — stop at every floor in the order people pressed buttons.
    - **SSTF** — always go to the nearest requested floor (greedy).
    - **SCAN** — keep going the same way while anyone is waiting ahead,
      then turn around.

Each ``step()`` services exactly one request, so the head's journey can
be replayed move by move.  Seek cost is an abstract distance in track
units, not milliseconds.

Policies (Strategy pattern):
    - ``FCFSPolicy`` — earliest arrival first.
    - ``SSTFPolicy`` — nearest first; ties go to the earlier arrival.
    - ``SCANPolicy`` — nearest request ahead in the sweep direction.  When
      nothing is left ahead the direction flips, and the flip sticks.
      The head turns around at the last request rather than running on
      to the disk edge.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Protocol

from py_osviz.logging import Logger, LogLevel

DEFAULT_DISK_SIZE = 200
DEFAULT_HEAD = 50

_SOURCE = "disk"


class DiskAlgorithm(StrEnum):
    """The scheduling policies the engine can run."""

    FCFS = "FCFS"
    SSTF = "SSTF"
    SCAN = "SCAN"


class Direction(StrEnum):
    """Sweep direction along the track axis (SCAN only)."""

    UP = "up"
    DOWN = "down"

    def flipped(self) -> "Direction":
        """Return the opposite direction."""
        return Direction.DOWN if self is Direction.UP else Direction.UP


def parse_disk_algorithm(name: str) -> DiskAlgorithm:
    """Look up a disk scheduling algorithm by name (case-insensitive).

    Raises:
        ValueError: If the name is not a known algorithm.

    """
    try:
        return DiskAlgorithm(name.upper())
    except ValueError:
        known = ", ".join(a.value for a in DiskAlgorithm)
        msg = f"Unknown disk scheduling algorithm: {name!r} (expected one of {known})"
        raise ValueError(msg) from None


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DiskRequest:
    """A pending or served I/O request.

    Attributes:
        position: Track the request lives on.
        arrival_order: Index in the original request list (also its id).
        served: Whether the head has visited it.

    """

    position: int
    arrival_order: int
    served: bool = False

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly view of the request."""
        return {"id": self.arrival_order, "position": self.position, "served": self.served}


@dataclass(frozen=True)
class DiskStep:
    """What one call to ``step()`` did.

    Attributes:
        request: The request just serviced, or None when nothing is left.
        cost: Head movement for this step.
        head: Head position after the step.
        total_seek: Cumulative head movement after the step.
        finished: True when there was nothing left to service.

    """

    request: DiskRequest | None
    cost: int
    head: int
    total_seek: int
    finished: bool

    @property
    def request_id(self) -> int | None:
        """Return the serviced request's arrival order, if any."""
        return None if self.request is None else self.request.arrival_order

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly view of the step."""
        return {
            "request_id": self.request_id,
            "position": None if self.request is None else self.request.position,
            "cost": self.cost,
            "head": self.head,
            "total_seek": self.total_seek,
            "finished": self.finished,
        }


@dataclass(frozen=True)
class DiskSnapshot:
    """A read-only view of the whole engine state."""

    algorithm: DiskAlgorithm
    disk_size: int
    head: int
    direction: Direction
    total_seek: int
    requests: tuple[DiskRequest, ...]
    complete: bool

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly view of the snapshot."""
        return {
            "algorithm": self.algorithm.value,
            "disk_size": self.disk_size,
            "head": self.head,
            "direction": self.direction.value,
            "total_seek": self.total_seek,
            "requests": [r.to_dict() for r in self.requests],
            "complete": self.complete,
        }


# ---------------------------------------------------------------------------
# Policies (Strategy pattern)
# ---------------------------------------------------------------------------


class DiskPolicy(Protocol):
    """Protocol for disk scheduling policies."""

    def select(
        self,
        pending: Sequence[DiskRequest],
        *,
        head: int,
        direction: Direction,
    ) -> tuple[DiskRequest | None, Direction]:
        """Pick the next request to service.

        Args:
            pending: Unserved requests in arrival order.
            head: Current head position.
            direction: Current sweep direction.

        Returns:
            The chosen request (None if *pending* is empty) and the
            direction the head is travelling in afterwards.

        """
        ...


class FCFSPolicy:
    """First Come, First Served — service in arrival order.

    Fair (no starvation), but the arm zigzags across the disk.
    """

    def select(
        self,
        pending: Sequence[DiskRequest],
        *,
        head: int,  # noqa: ARG002
        direction: Direction,
    ) -> tuple[DiskRequest | None, Direction]:
        """Return the earliest-arriving unserved request."""
        if not pending:
            return None, direction
        return min(pending, key=lambda r: r.arrival_order), direction


class SSTFPolicy:
    """Shortest Seek Time First — always go to the nearest request.

    Greedy, so distant requests can starve while the head hovers near
    a busy region.
    """

    def select(
        self,
        pending: Sequence[DiskRequest],
        *,
        head: int,
        direction: Direction,
    ) -> tuple[DiskRequest | None, Direction]:
        """Return the nearest unserved request (ties → earliest arrival)."""
        if not pending:
            return None, direction
        nearest = min(pending, key=lambda r: (abs(r.position - head), r.arrival_order))
        return nearest, direction


class SCANPolicy:
    """SCAN (Elevator algorithm) — sweep one direction, then reverse.

    A request sitting exactly under the head counts as "ahead" in
    either direction.  After a flip the head's own track is excluded,
    since the first search already ruled it out.
    """

    def select(
        self,
        pending: Sequence[DiskRequest],
        *,
        head: int,
        direction: Direction,
    ) -> tuple[DiskRequest | None, Direction]:
        """Return the next request along the sweep, flipping if needed."""
        if not pending:
            return None, direction

        if direction is Direction.UP:
            ahead = [r for r in pending if r.position >= head]
            if ahead:
                return min(ahead, key=lambda r: (r.position, r.arrival_order)), direction
            behind = [r for r in pending if r.position < head]
            return max(behind, key=lambda r: (r.position, -r.arrival_order)), Direction.DOWN

        ahead = [r for r in pending if r.position <= head]
        if ahead:
            return max(ahead, key=lambda r: (r.position, -r.arrival_order)), direction
        behind = [r for r in pending if r.position > head]
        return min(behind, key=lambda r: (r.position, r.arrival_order)), Direction.UP


_POLICIES: dict[DiskAlgorithm, type[FCFSPolicy] | type[SSTFPolicy] | type[SCANPolicy]] = {
    DiskAlgorithm.FCFS: FCFSPolicy,
    DiskAlgorithm.SSTF: SSTFPolicy,
    DiskAlgorithm.SCAN: SCANPolicy,
}


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class DiskSchedulingEngine:
    """Step-driven disk scheduling simulator.

    The request list and head start are fixed at construction.  The
    algorithm can only change through ``reset()``.

    Args:
        positions: Track numbers of the requests, in arrival order.
        algorithm: Which scheduling policy to run.
        initial_head: Head position at the start of every run.
        disk_size: Number of tracks (valid positions are ``0..disk_size-1``).
        logger: Optional event log.

    """

    def __init__(
        self,
        positions: Iterable[int],
        *,
        algorithm: DiskAlgorithm = DiskAlgorithm.FCFS,
        initial_head: int = DEFAULT_HEAD,
        disk_size: int = DEFAULT_DISK_SIZE,
        logger: Logger | None = None,
    ) -> None:
        """Create an engine with every request pending."""
        if disk_size <= 0:
            msg = f"Disk size must be positive, got {disk_size}"
            raise ValueError(msg)
        positions = list(positions)
        for position in [*positions, initial_head]:
            if not 0 <= position < disk_size:
                msg = f"Position {position} outside disk (0..{disk_size - 1})"
                raise ValueError(msg)

        self._initial = tuple(DiskRequest(position=p, arrival_order=i) for i, p in enumerate(positions))
        self._initial_head = initial_head
        self._disk_size = disk_size
        self._logger = logger
        self._algorithm = algorithm
        self._policy: DiskPolicy = _POLICIES[algorithm]()
        self._requests = list(self._initial)
        self._head = initial_head
        self._direction = Direction.UP
        self._total_seek = 0

    @property
    def algorithm(self) -> DiskAlgorithm:
        """Return the active scheduling policy."""
        return self._algorithm

    @property
    def disk_size(self) -> int:
        """Return the number of tracks."""
        return self._disk_size

    @property
    def initial_head(self) -> int:
        """Return the head position every run starts from."""
        return self._initial_head

    @property
    def head(self) -> int:
        """Return the current head position."""
        return self._head

    @property
    def direction(self) -> Direction:
        """Return the current sweep direction."""
        return self._direction

    @property
    def total_seek(self) -> int:
        """Return cumulative head movement."""
        return self._total_seek

    @property
    def requests(self) -> tuple[DiskRequest, ...]:
        """Return every request (served and pending) in arrival order."""
        return tuple(self._requests)

    @property
    def pending(self) -> list[DiskRequest]:
        """Return unserved requests in arrival order."""
        return [r for r in self._requests if not r.served]

    @property
    def is_complete(self) -> bool:
        """Return True once every request has been served."""
        return all(r.served for r in self._requests)

    def snapshot(self) -> DiskSnapshot:
        """Return an immutable view of the current state."""
        return DiskSnapshot(
            algorithm=self._algorithm,
            disk_size=self._disk_size,
            head=self._head,
            direction=self._direction,
            total_seek=self._total_seek,
            requests=self.requests,
            complete=self.is_complete,
        )

    def select_next(self) -> DiskRequest | None:
        """Return the request the policy would service next.

        Nothing is marked served here, but a SCAN direction flip found
        while searching is kept, so later calls see the new direction.
        """
        chosen, direction = self._policy.select(self.pending, head=self._head, direction=self._direction)
        if direction is not self._direction:
            self._log(LogLevel.DEBUG, f"sweep reversed at {self._head}, now moving {direction.value}")
            self._direction = direction
        return chosen

    def step(self) -> DiskStep:
        """Service one request.

        Returns:
            A descriptor of the move.  Once every request is served the
            descriptor has ``finished=True`` and nothing changes.

        """
        chosen = self.select_next()
        if chosen is None:
            return DiskStep(
                request=None,
                cost=0,
                head=self._head,
                total_seek=self._total_seek,
                finished=True,
            )

        assert not chosen.served, "request served twice"  # noqa: S101
        cost = abs(chosen.position - self._head)
        self._log(
            LogLevel.DEBUG,
            f"head {self._head} -> {chosen.position} (request {chosen.arrival_order}, cost {cost})",
        )
        self._total_seek += cost
        self._head = chosen.position
        served = replace(chosen, served=True)
        self._requests[chosen.arrival_order] = served

        if self.is_complete:
            self._log(LogLevel.INFO, f"all requests served, total seek {self._total_seek}")
        return DiskStep(
            request=served,
            cost=cost,
            head=self._head,
            total_seek=self._total_seek,
            finished=False,
        )

    def run(self) -> list[int]:
        """Step until every request is served.

        Returns:
            Positions in the order they were serviced by this call.

        """
        order: list[int] = []
        while not self.is_complete:
            result = self.step()
            if result.request is None:
                break
            order.append(result.request.position)
        return order

    def reset(self, *, algorithm: DiskAlgorithm | None = None) -> None:
        """Mark every request pending and park the head at its start.

        Args:
            algorithm: If given, switch to this policy for the next run.

        """
        if algorithm is not None:
            self._algorithm = algorithm
            self._policy = _POLICIES[algorithm]()
        self._requests = list(self._initial)
        self._head = self._initial_head
        self._direction = Direction.UP
        self._total_seek = 0
        self._log(LogLevel.INFO, f"reset ({self._algorithm.value}, head at {self._head})")

    def _log(self, level: LogLevel, message: str) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source=_SOURCE)
