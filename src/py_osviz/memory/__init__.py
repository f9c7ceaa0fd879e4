"""Memory subsystem — step-by-step page replacement.

Re-exports public symbols so callers can write::

    from py_osviz.memory import PageReplacementEngine, PageAlgorithm
"""

from py_osviz.memory.replacement import (
    DEFAULT_CAPACITY,
    FIFOPolicy,
    LRUPolicy,
    Page,
    PageAlgorithm,
    PageReplacementEngine,
    PageStep,
    PagingSnapshot,
    VictimPolicy,
    parse_page_algorithm,
)

__all__ = [
    "DEFAULT_CAPACITY",
    "FIFOPolicy",
    "LRUPolicy",
    "Page",
    "PageAlgorithm",
    "PageReplacementEngine",
    "PageStep",
    "PagingSnapshot",
    "VictimPolicy",
    "parse_page_algorithm",
]
