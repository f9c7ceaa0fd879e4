"""Terminal front-end — watch the algorithms step by step in a console.

The console keeps I/O separate from logic, the same way a shell is
split from its REPL:

    - ``Console.execute()`` takes one command line and returns the text
      to show.  It never prints, so it is fully testable.
    - ``run()`` is the thin loop that reads ``stdin`` and prints.

Commands act on the *active* simulation (``paging`` or ``disk``)::

    paging | disk        switch the active simulation
    algo NAME            reset with another algorithm (FIFO, LRU, FCFS, SSTF, SCAN)
    step [N]             advance one (or N) steps
    play                 auto-play to the end at the configured cadence
    reset                rewind the active simulation
    state                show the current snapshot
    log                  show the event log
    help | exit
"""

import readline
import time
from collections.abc import Callable

from py_osviz.config import SimulatorConfig, build_disk_engine, build_page_engine
from py_osviz.io.disk import DiskSchedulingEngine, DiskStep, parse_disk_algorithm
from py_osviz.logging import Logger
from py_osviz.memory.replacement import PageReplacementEngine, PageStep, parse_page_algorithm
from py_osviz.narration import READY_MESSAGE, narrate_disk_step, narrate_page_step
from py_osviz.player import AutoPlayer

_HELP = __doc__.split("::", 1)[1].rstrip() if __doc__ else ""


def format_paging(engine: PageReplacementEngine) -> str:
    """Render the resident set as ``[ 5 ][ 6 ][ 3 ]`` plus counters."""
    frames = [f"[{p.id:^3}]" for p in engine.resident]
    frames += ["[   ]"] * (engine.capacity - len(frames))
    return (
        f"{engine.algorithm.value}  {''.join(frames)}  "
        f"step {engine.step_index}/{len(engine.sequence)}  faults {engine.fault_count}"
    )


def format_disk(engine: DiskSchedulingEngine) -> str:
    """Render the head position, direction and pending requests."""
    pending = " ".join(str(r.position) for r in engine.pending) or "-"
    return (
        f"{engine.algorithm.value}  head {engine.head} ({engine.direction.value})  "
        f"seek {engine.total_seek}  pending: {pending}"
    )


class Console:
    """Command interpreter for both simulations.

    Args:
        config: Simulation settings.
        sleep: Called with the interval between auto-play steps.

    """

    EXIT_SENTINEL = "__exit__"

    def __init__(
        self,
        config: SimulatorConfig | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Create a console with both engines reset."""
        config = config or SimulatorConfig()
        self._logger = Logger()
        self._paging = build_page_engine(config.paging, logger=self._logger)
        self._disk = build_disk_engine(config.disk, logger=self._logger)
        self._players = {
            "paging": AutoPlayer(self._paging, interval=config.paging.interval),
            "disk": AutoPlayer(self._disk, interval=config.disk.interval),
        }
        self._active = "paging"
        self._sleep = sleep
        self._commands: dict[str, Callable[[list[str]], str]] = {
            "paging": self._cmd_switch,
            "disk": self._cmd_switch,
            "algo": self._cmd_algo,
            "step": self._cmd_step,
            "play": self._cmd_play,
            "reset": self._cmd_reset,
            "state": self._cmd_state,
            "log": self._cmd_log,
            "help": self._cmd_help,
        }

    @property
    def active(self) -> str:
        """Return the name of the active simulation."""
        return self._active

    def execute(self, line: str) -> str:
        """Run one command line and return its output."""
        parts = line.split()
        if not parts:
            return ""
        name, args = parts[0].lower(), parts[1:]
        if name == "exit":
            return self.EXIT_SENTINEL
        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}. Type 'help' for commands."
        if name in {"paging", "disk"}:
            args = [name]
        return handler(args)

    # -- commands -------------------------------------------------------------

    def _cmd_switch(self, args: list[str]) -> str:
        self._active = args[0]
        return self._cmd_state([])

    def _cmd_algo(self, args: list[str]) -> str:
        if len(args) != 1:
            return "Usage: algo NAME"
        try:
            if self._active == "paging":
                self._paging.reset(algorithm=parse_page_algorithm(args[0]))
            else:
                self._disk.reset(algorithm=parse_disk_algorithm(args[0]))
        except ValueError as e:
            return f"Error: {e}"
        self._players[self._active].pause()
        return f"{READY_MESSAGE}\n{self._cmd_state([])}"

    def _cmd_step(self, args: list[str]) -> str:
        try:
            count = int(args[0]) if args else 1
        except ValueError:
            return f"Error: step count must be an integer, got {args[0]!r}"
        player = self._players[self._active]
        return "\n".join(self._describe(player.step()) for _ in range(max(count, 1)))

    def _cmd_play(self, _args: list[str]) -> str:
        player = self._players[self._active]
        player.play()
        lines: list[str] = []
        while player.playing:
            self._sleep(player.interval)
            lines.extend(self._describe(result) for result in player.tick(player.interval))
        return "\n".join(lines) if lines else "Nothing left to play. Try 'reset'."

    def _cmd_reset(self, _args: list[str]) -> str:
        self._players[self._active].reset()
        return f"{READY_MESSAGE}\n{self._cmd_state([])}"

    def _cmd_state(self, _args: list[str]) -> str:
        if self._active == "paging":
            return format_paging(self._paging)
        return format_disk(self._disk)

    def _cmd_log(self, _args: list[str]) -> str:
        return "\n".join(str(e) for e in self._logger.entries) or "(log is empty)"

    def _cmd_help(self, _args: list[str]) -> str:
        return _HELP

    def _describe(self, result: object) -> str:
        if isinstance(result, PageStep):
            text = narrate_page_step(result, self._paging.algorithm)
            return f"{text}\n  {format_paging(self._paging)}"
        if isinstance(result, DiskStep):
            text = narrate_disk_step(result, self._disk.algorithm)
            return f"{text}\n  {format_disk(self._disk)}"
        return str(result)


def run() -> None:
    """Run the interactive console until ``exit``, Ctrl+D or Ctrl+C.

    This is the ``py-osviz`` console entry point.
    """
    console = Console()
    readline.parse_and_bind("tab: complete")
    print("OS algorithm visualiser. Type 'help' for commands, 'exit' to quit.")  # noqa: T201
    try:
        while True:
            try:
                line = input(f"{console.active} $ ")
            except EOFError:
                print()  # noqa: T201
                break
            result = console.execute(line)
            if result == Console.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201
    except KeyboardInterrupt:
        print("\nInterrupted.")  # noqa: T201
