"""Shared step model — what every simulation engine promises its callers.

Both engines follow the same contract: the caller issues ``step()`` or
``reset()`` and reads back immutable descriptors.  Nothing outside an
engine ever mutates its state.  Keeping that contract in one place lets
the auto-player and the web adapter drive either engine without caring
which one it is.

The page-replacement engine also classifies each step so a front-end
can pick the right message:

    - **START** — the very first reference of a run.
    - **HIT** — the page was already resident.
    - **FAULT** — the page had to be loaded (possibly evicting another).
    - **COMPLETE** — the reference string is exhausted.

The classification is the contract; turning it into words is the
presentation layer's job (see ``py_osviz.narration``).
"""

from enum import StrEnum
from typing import Protocol


class NarrationClass(StrEnum):
    """Which kind of message a page-replacement step deserves."""

    START = "start"
    HIT = "hit"
    FAULT = "fault"
    COMPLETE = "complete"


class StepResult(Protocol):
    """Anything returned from ``step()`` can be serialised for a UI."""

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly view of the step."""
        ...


class Steppable(Protocol):
    """Protocol for simulation engines (Strategy-style seam).

    ``AutoPlayer`` only needs these three members, so a new engine
    plugs in without touching the player.
    """

    @property
    def is_complete(self) -> bool:
        """Return True once no further step can change the state."""
        ...

    def step(self) -> StepResult:
        """Advance the simulation by exactly one atomic transition."""
        ...

    def reset(self) -> None:
        """Return to the initial state."""
        ...
