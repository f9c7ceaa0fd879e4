"""Auto-play — advancing a simulation on a steady beat.

A visualiser usually offers a Play button: the simulation moves forward
on its own, one step every few seconds, until the run is over or the
user pauses.  This module models that loop without owning a clock.

The caller (a UI event loop, a test, a browser timer) reports how much
time has passed via ``tick(elapsed)``.  The player adds it up and fires
one ``step()`` each time a full interval has accumulated — much like a
programmable interval timer fires an interrupt every N ticks.

Key properties:
    - **One code path** — timer-driven steps and the manual "next"
      button both go through ``AutoPlayer.step()``.
    - **Pausing is not cancelling** — a step that already happened stays
      happened; pause only stops future ticks.
    - **Self-stopping** — once the engine reports ``is_complete`` the
      player pauses itself.
    - **Reset is atomic** — engine state, play state and accumulated
      time are cleared together.
"""

from py_osviz.events import Steppable, StepResult


class AutoPlayer:
    """Drive a ``Steppable`` engine at a fixed interval.

    Args:
        engine: The simulation to advance.
        interval: Seconds between automatic steps.

    """

    def __init__(self, engine: Steppable, *, interval: float) -> None:
        """Create a paused player."""
        self._engine = engine
        self._interval = 0.0
        self.interval = interval
        self._elapsed = 0.0
        self._playing = False
        self._steps = 0

    @property
    def engine(self) -> Steppable:
        """Return the driven engine."""
        return self._engine

    @property
    def interval(self) -> float:
        """Return the seconds between automatic steps."""
        return self._interval

    @interval.setter
    def interval(self, value: float) -> None:
        """Set the seconds between automatic steps.

        Raises:
            ValueError: If the interval is not positive.

        """
        if value <= 0:
            msg = f"Interval must be positive, got {value}"
            raise ValueError(msg)
        self._interval = value

    @property
    def playing(self) -> bool:
        """Return True while auto-play is active."""
        return self._playing

    @property
    def steps(self) -> int:
        """Return how many steps this player has issued since the last reset."""
        return self._steps

    def play(self) -> None:
        """Start auto-play (no-op when the run is already complete)."""
        if not self._engine.is_complete:
            self._playing = True

    def pause(self) -> None:
        """Stop auto-play and discard any partially accumulated interval."""
        self._playing = False
        self._elapsed = 0.0

    def toggle(self) -> bool:
        """Flip between playing and paused.

        Returns:
            The new ``playing`` state.

        """
        if self._playing:
            self.pause()
        else:
            self.play()
        return self._playing

    def step(self) -> StepResult:
        """Advance the engine by exactly one step.

        This is the manual "next" action and also what each timer fire
        calls.
        """
        result = self._engine.step()
        self._steps += 1
        if self._engine.is_complete:
            self.pause()
        return result

    def tick(self, elapsed: float) -> list[StepResult]:
        """Report that *elapsed* seconds have passed.

        Args:
            elapsed: Wall time since the previous tick (non-negative).

        Returns:
            The step results fired during this tick, oldest first.

        Raises:
            ValueError: If *elapsed* is negative.

        """
        if elapsed < 0:
            msg = f"Elapsed time cannot be negative, got {elapsed}"
            raise ValueError(msg)
        if not self._playing:
            return []

        self._elapsed += elapsed
        fired: list[StepResult] = []
        while self._playing and self._elapsed >= self._interval:
            self._elapsed -= self._interval
            fired.append(self.step())
        return fired

    def reset(self) -> None:
        """Pause and rewind the engine to its initial state."""
        self.pause()
        self._engine.reset()
        self._steps = 0
