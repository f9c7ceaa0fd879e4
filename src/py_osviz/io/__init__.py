"""I/O subsystem — step-by-step disk scheduling.

Re-exports public symbols so callers can write::

    from py_osviz.io import DiskSchedulingEngine, DiskAlgorithm

Note: The policy classes (FCFSPolicy, etc.) are NOT re-exported here to
avoid confusion with the page replacement policies.  Import them
directly from ``py_osviz.io.disk``.
"""

from py_osviz.io.disk import (
    DEFAULT_DISK_SIZE,
    DEFAULT_HEAD,
    Direction,
    DiskAlgorithm,
    DiskRequest,
    DiskSchedulingEngine,
    DiskSnapshot,
    DiskStep,
    parse_disk_algorithm,
)

__all__ = [
    "DEFAULT_DISK_SIZE",
    "DEFAULT_HEAD",
    "Direction",
    "DiskAlgorithm",
    "DiskRequest",
    "DiskSchedulingEngine",
    "DiskSnapshot",
    "DiskStep",
    "parse_disk_algorithm",
]
