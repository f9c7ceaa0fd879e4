"""Friendly commentary for the visualiser.

The engines only *classify* what happened; this module turns those
classifications into sentences a learner can read while the animation
plays.  It also carries the short algorithm blurbs and the glossary
tooltips shown beside each simulation.

Nothing in the engines depends on this module, so a front-end is free
to replace every string here (for instance with a translation).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_osviz.events import NarrationClass
from py_osviz.io.disk import DiskAlgorithm
from py_osviz.memory.replacement import PageAlgorithm

if TYPE_CHECKING:
    from py_osviz.io.disk import DiskStep
    from py_osviz.memory.replacement import PageStep

READY_MESSAGE = "Choose an algorithm and press Play to begin."

SUBTITLES: dict[str, str] = {
    PageAlgorithm.FIFO: "First In, First Out",
    PageAlgorithm.LRU: "Least Recently Used",
    DiskAlgorithm.FCFS: "First Come, First Served",
    DiskAlgorithm.SSTF: "Shortest Seek Time First",
    DiskAlgorithm.SCAN: "Elevator Algorithm",
}

DESCRIPTIONS: dict[str, str] = {
    PageAlgorithm.FIFO: (
        "FIFO replaces the page that has been in memory the longest, no matter how "
        "often it is used. It is simple to implement but not always efficient."
    ),
    PageAlgorithm.LRU: (
        "LRU replaces the page that has gone unused for the longest time. It usually "
        "beats FIFO because it takes the history of page use into account."
    ),
    DiskAlgorithm.FCFS: (
        "FCFS serves requests in the order they arrived. It is fair, but the head "
        "zigzags across the disk and the total seek distance is high."
    ),
    DiskAlgorithm.SSTF: (
        "SSTF always serves the request closest to the head. Total movement drops, "
        "but requests far from the head can wait a long time."
    ),
    DiskAlgorithm.SCAN: (
        "SCAN moves the head in one direction serving every request on the way, then "
        "turns around, just like an elevator."
    ),
}

GLOSSARY: dict[str, tuple[str, str]] = {
    "page_fault": (
        "What is a page fault?",
        "A page fault happens when a requested page is not in physical memory (RAM) "
        "and must be loaded from disk. Fewer page faults means better performance.",
    ),
    "seek_time": (
        "What is seek time?",
        "Seek time is how far the disk head has to travel from one position to another. "
        "The lower the total seek, the more efficient the algorithm.",
    ),
}


def narrate_page_step(step: PageStep, algorithm: PageAlgorithm) -> str:
    """Describe a page replacement step in plain English.

    Args:
        step: The descriptor returned by ``PageReplacementEngine.step()``.
        algorithm: The policy that produced it.

    Returns:
        A sentence or two suitable for a narration banner.

    """
    page = step.reference
    match step.narration:
        case NarrationClass.COMPLETE:
            return "Simulation complete! Reset to watch it again."
        case NarrationClass.START:
            return f"Welcome! Let's run the {algorithm.value} simulation. First, page {page} is loaded into memory."
        case NarrationClass.FAULT:
            if step.evicted is None:
                return f"Page fault! Page {page} is not in memory, and a free frame is available for it."
            if algorithm is PageAlgorithm.FIFO:
                return (
                    f"Page fault! Page {page} must be loaded but memory is full. "
                    f"Following First-In-First-Out, the oldest page ({step.evicted}) is removed."
                )
            return (
                f"Page fault! Page {page} is not in memory. "
                f"Using LRU, the page unused for the longest time ({step.evicted}) is removed."
            )
        case NarrationClass.HIT:
            if algorithm is PageAlgorithm.LRU:
                return f"Great! Page {page} is already in memory. Its timestamp is updated to record this access."
            return f"Page {page} is already in memory. FIFO needs no further bookkeeping."
    return READY_MESSAGE


def narrate_disk_step(step: DiskStep, algorithm: DiskAlgorithm) -> str:
    """Describe a disk scheduling step in plain English."""
    if step.request is None:
        return f"All requests served. Total seek distance with {algorithm.value}: {step.total_seek}."
    return (
        f"{algorithm.value} moves the head to track {step.request.position} "
        f"(distance {step.cost}, total {step.total_seek})."
    )


def describe(algorithm: PageAlgorithm | DiskAlgorithm) -> dict[str, str]:
    """Return the name, subtitle and description for an algorithm."""
    return {
        "name": algorithm.value,
        "subtitle": SUBTITLES[algorithm],
        "description": DESCRIPTIONS[algorithm],
    }
