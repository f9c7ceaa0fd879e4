"""Page replacement — step-by-step FIFO and LRU over a reference string.

A process touches pages in some order (the **reference string**).  Only
a handful of frames exist in RAM, so when a page that isn't resident is
referenced the OS takes a **page fault**, loads the page, and — if every
frame is occupied — picks a **victim** to evict.

Unlike a pager that runs a whole workload at once, this engine advances
one reference per ``step()`` so a learner can watch every decision:

    1. Read the next page id from the reference string.
    2. **Hit** — it's already resident.  LRU notes the access; FIFO
       doesn't care.
    3. **Fault** — load it into a free frame, or evict a victim and
       reuse the victim's frame.

Replacement Policies (Strategy pattern):
    - **FIFO** — evict the page loaded longest ago (smallest load order).
      Cheap, but blind to how often a page is used.
    - **LRU** — evict the page referenced longest ago (smallest last
      access).  Ties fall back to load order, so the outcome never
      depends on list iteration details.

Both counters are the step index at which the event happened, so they
are strictly increasing and never collide among resident pages.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Protocol

from py_osviz.events import NarrationClass
from py_osviz.logging import Logger, LogLevel

DEFAULT_CAPACITY = 3

_SOURCE = "paging"


class PageAlgorithm(StrEnum):
    """The replacement policies the engine can run."""

    FIFO = "FIFO"
    LRU = "LRU"


def parse_page_algorithm(name: str) -> PageAlgorithm:
    """Look up a replacement algorithm by name (case-insensitive).

    Raises:
        ValueError: If the name is not a known algorithm.

    """
    try:
        return PageAlgorithm(name.upper())
    except ValueError:
        known = ", ".join(a.value for a in PageAlgorithm)
        msg = f"Unknown page replacement algorithm: {name!r} (expected one of {known})"
        raise ValueError(msg) from None


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Page:
    """A page resident in one memory frame.

    Attributes:
        id: The logical page number.
        load_order: Step counter when the page was loaded.
        last_access: Step counter of the most recent reference.

    """

    id: int
    load_order: int
    last_access: int

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly view of the page."""
        return {"id": self.id, "load_order": self.load_order, "last_access": self.last_access}


@dataclass(frozen=True)
class PageStep:
    """What one call to ``step()`` did.

    Attributes:
        narration: Which message class applies to this step.
        reference: The page id consumed, or None at the end of the run.
        was_fault: Whether the reference caused a page fault.
        evicted: The id of the evicted page, if any.
        resident: The resident set after the step, in frame order.
        step_index: Cursor position after the step.
        fault_count: Total faults after the step.

    """

    narration: NarrationClass
    reference: int | None
    was_fault: bool
    evicted: int | None
    resident: tuple[Page, ...]
    step_index: int
    fault_count: int

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly view of the step."""
        return {
            "narration": self.narration.value,
            "reference": self.reference,
            "was_fault": self.was_fault,
            "evicted": self.evicted,
            "resident": [p.to_dict() for p in self.resident],
            "step_index": self.step_index,
            "fault_count": self.fault_count,
        }


@dataclass(frozen=True)
class PagingSnapshot:
    """A read-only view of the whole engine state."""

    algorithm: PageAlgorithm
    capacity: int
    sequence: tuple[int, ...]
    resident: tuple[Page, ...]
    step_index: int
    fault_count: int
    complete: bool

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly view of the snapshot."""
        return {
            "algorithm": self.algorithm.value,
            "capacity": self.capacity,
            "sequence": list(self.sequence),
            "resident": [p.to_dict() for p in self.resident],
            "step_index": self.step_index,
            "fault_count": self.fault_count,
            "complete": self.complete,
        }


# ---------------------------------------------------------------------------
# Victim selection (Strategy pattern)
# ---------------------------------------------------------------------------


class VictimPolicy(Protocol):
    """Interface for choosing which resident page to evict."""

    def select_victim(self, resident: Sequence[Page]) -> int:
        """Return the frame index of the page to evict.

        Raises:
            IndexError: If no pages are resident.

        """
        ...

    def on_hit(self, page: Page, *, now: int) -> Page:
        """Return the page as it should look after being referenced again."""
        ...


class FIFOPolicy:
    """First In, First Out — evict the oldest loaded page."""

    def select_victim(self, resident: Sequence[Page]) -> int:
        """Return the frame holding the smallest load order."""
        if not resident:
            msg = "No pages to evict"
            raise IndexError(msg)
        return min(range(len(resident)), key=lambda i: resident[i].load_order)

    def on_hit(self, page: Page, *, now: int) -> Page:  # noqa: ARG002
        """FIFO ignores accesses — order is purely by load time."""
        return page


class LRUPolicy:
    """Least Recently Used — evict the page accessed longest ago."""

    def select_victim(self, resident: Sequence[Page]) -> int:
        """Return the frame with the oldest access (ties → oldest load)."""
        if not resident:
            msg = "No pages to evict"
            raise IndexError(msg)
        return min(
            range(len(resident)),
            key=lambda i: (resident[i].last_access, resident[i].load_order),
        )

    def on_hit(self, page: Page, *, now: int) -> Page:
        """Stamp the page with the current access time."""
        return replace(page, last_access=now)


_POLICIES: dict[PageAlgorithm, type[FIFOPolicy] | type[LRUPolicy]] = {
    PageAlgorithm.FIFO: FIFOPolicy,
    PageAlgorithm.LRU: LRUPolicy,
}


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class PageReplacementEngine:
    """Step-driven page replacement simulator.

    The reference string and the frame count are fixed at construction.
    The algorithm can only change through ``reset()`` so a run never
    mixes two policies.

    Args:
        sequence: The reference string (page ids in access order).
        algorithm: Which replacement policy to run.
        capacity: Number of physical frames.
        logger: Optional event log.

    """

    def __init__(
        self,
        sequence: Iterable[int],
        *,
        algorithm: PageAlgorithm = PageAlgorithm.FIFO,
        capacity: int = DEFAULT_CAPACITY,
        logger: Logger | None = None,
    ) -> None:
        """Create an engine positioned before the first reference."""
        if capacity <= 0:
            msg = f"Capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self._sequence = tuple(sequence)
        self._capacity = capacity
        self._logger = logger
        self._algorithm = algorithm
        self._policy: VictimPolicy = _POLICIES[algorithm]()
        self._resident: list[Page] = []
        self._step_index = 0
        self._fault_count = 0

    @property
    def algorithm(self) -> PageAlgorithm:
        """Return the active replacement policy."""
        return self._algorithm

    @property
    def capacity(self) -> int:
        """Return the number of frames."""
        return self._capacity

    @property
    def sequence(self) -> tuple[int, ...]:
        """Return the reference string."""
        return self._sequence

    @property
    def step_index(self) -> int:
        """Return how many references have been consumed."""
        return self._step_index

    @property
    def fault_count(self) -> int:
        """Return the number of page faults so far."""
        return self._fault_count

    @property
    def resident(self) -> tuple[Page, ...]:
        """Return the resident pages in frame order."""
        return tuple(self._resident)

    @property
    def is_complete(self) -> bool:
        """Return True once every reference has been consumed."""
        return self._step_index >= len(self._sequence)

    def snapshot(self) -> PagingSnapshot:
        """Return an immutable view of the current state."""
        return PagingSnapshot(
            algorithm=self._algorithm,
            capacity=self._capacity,
            sequence=self._sequence,
            resident=self.resident,
            step_index=self._step_index,
            fault_count=self._fault_count,
            complete=self.is_complete,
        )

    def step(self) -> PageStep:
        """Consume the next reference.

        Eviction and insertion happen together: there is never a moment
        where the victim is gone but the new page isn't loaded yet.

        Returns:
            A descriptor of what happened.  After the reference string is
            exhausted every call returns the same ``COMPLETE`` descriptor
            and changes nothing.

        """
        if self.is_complete:
            return self._result(NarrationClass.COMPLETE, reference=None, was_fault=False, evicted=None)

        now = self._step_index
        ref = self._sequence[now]
        first = now == 0
        evicted: int | None = None

        slot = self._find(ref)
        if slot is not None:
            self._resident[slot] = self._policy.on_hit(self._resident[slot], now=now)
            was_fault = False
            self._log(LogLevel.DEBUG, f"hit on page {ref}", step=now)
        else:
            was_fault = True
            self._fault_count += 1
            page = Page(id=ref, load_order=now, last_access=now)
            if len(self._resident) < self._capacity:
                self._resident.append(page)
                self._log(LogLevel.INFO, f"fault on page {ref}, loaded into free frame", step=now)
            else:
                victim = self._policy.select_victim(self._resident)
                evicted = self._resident[victim].id
                self._resident[victim] = page
                self._log(
                    LogLevel.INFO,
                    f"fault on page {ref}, evicted page {evicted} from frame {victim}",
                    step=now,
                )

        self._step_index += 1
        self._check_invariants()

        if first:
            narration = NarrationClass.START
        elif was_fault:
            narration = NarrationClass.FAULT
        else:
            narration = NarrationClass.HIT

        if self.is_complete:
            self._log(LogLevel.INFO, f"run complete with {self._fault_count} faults", step=now)

        return self._result(narration, reference=ref, was_fault=was_fault, evicted=evicted)

    def reset(self, *, algorithm: PageAlgorithm | None = None) -> None:
        """Clear memory and rewind to the first reference.

        Args:
            algorithm: If given, switch to this policy for the next run.

        """
        if algorithm is not None:
            self._algorithm = algorithm
            self._policy = _POLICIES[algorithm]()
        self._resident.clear()
        self._step_index = 0
        self._fault_count = 0
        self._log(LogLevel.INFO, f"reset ({self._algorithm.value}, {self._capacity} frames)")

    def _find(self, page_id: int) -> int | None:
        """Return the frame index holding *page_id*, or None."""
        for i, page in enumerate(self._resident):
            if page.id == page_id:
                return i
        return None

    def _result(
        self,
        narration: NarrationClass,
        *,
        reference: int | None,
        was_fault: bool,
        evicted: int | None,
    ) -> PageStep:
        return PageStep(
            narration=narration,
            reference=reference,
            was_fault=was_fault,
            evicted=evicted,
            resident=self.resident,
            step_index=self._step_index,
            fault_count=self._fault_count,
        )

    def _check_invariants(self) -> None:
        resident = self._resident
        assert len(resident) <= self._capacity, "resident set over capacity"  # noqa: S101
        assert len({p.id for p in resident}) == len(resident), "duplicate resident page"  # noqa: S101
        assert len({p.load_order for p in resident}) == len(resident), "load order collision"  # noqa: S101
        assert len({p.last_access for p in resident}) == len(resident), "access time collision"  # noqa: S101
        assert self._fault_count <= self._step_index, "more faults than references"  # noqa: S101

    def _log(self, level: LogLevel, message: str, *, step: int | None = None) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source=_SOURCE, step=step)
