"""Simulation configuration — the knobs a front-end can turn.

Everything here is plain data: frozen dataclasses with defaults that
reproduce the classic classroom examples.  Engines never read global
state; a caller builds an engine from a config and owns it from then on.

Defaults:
    - Page replacement: 3 frames, reference string ``1 3 0 3 5 6 3``,
      FIFO, one step every 3.5 seconds when auto-playing.
    - Disk scheduling: 200 tracks, head at 50, the textbook request
      queue ``98 183 37 122 14 124 65 67``, FCFS, one step per second.
"""

from dataclasses import dataclass, field

from py_osviz.io.disk import DEFAULT_DISK_SIZE, DEFAULT_HEAD, DiskAlgorithm, DiskSchedulingEngine
from py_osviz.logging import Logger
from py_osviz.memory.replacement import DEFAULT_CAPACITY, PageAlgorithm, PageReplacementEngine

DEFAULT_SEQUENCE: tuple[int, ...] = (1, 3, 0, 3, 5, 6, 3)
DEFAULT_REQUESTS: tuple[int, ...] = (98, 183, 37, 122, 14, 124, 65, 67)

PAGING_INTERVAL = 3.5
DISK_INTERVAL = 1.0


@dataclass(frozen=True)
class PagingConfig:
    """Settings for a page replacement run."""

    sequence: tuple[int, ...] = DEFAULT_SEQUENCE
    capacity: int = DEFAULT_CAPACITY
    algorithm: PageAlgorithm = PageAlgorithm.FIFO
    interval: float = PAGING_INTERVAL


@dataclass(frozen=True)
class DiskConfig:
    """Settings for a disk scheduling run."""

    requests: tuple[int, ...] = DEFAULT_REQUESTS
    initial_head: int = DEFAULT_HEAD
    disk_size: int = DEFAULT_DISK_SIZE
    algorithm: DiskAlgorithm = DiskAlgorithm.FCFS
    interval: float = DISK_INTERVAL


@dataclass(frozen=True)
class SimulatorConfig:
    """Settings for both simulations."""

    paging: PagingConfig = field(default_factory=PagingConfig)
    disk: DiskConfig = field(default_factory=DiskConfig)


def build_page_engine(config: PagingConfig, *, logger: Logger | None = None) -> PageReplacementEngine:
    """Create a page replacement engine from *config*."""
    return PageReplacementEngine(
        config.sequence,
        algorithm=config.algorithm,
        capacity=config.capacity,
        logger=logger,
    )


def build_disk_engine(config: DiskConfig, *, logger: Logger | None = None) -> DiskSchedulingEngine:
    """Create a disk scheduling engine from *config*."""
    return DiskSchedulingEngine(
        config.requests,
        algorithm=config.algorithm,
        initial_head=config.initial_head,
        disk_size=config.disk_size,
        logger=logger,
    )
