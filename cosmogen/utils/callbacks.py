"""Typed callback protocols for progress reporting.

These Protocol classes give typed callback signatures; any plain callable
with a matching signature satisfies them.
"""

from typing import Protocol


class ItemProgressCallback(Protocol):
    """Callback for item-based progress (populations, clusters).

    Args:
        current: Number of members generated so far
        total: Total members requested
    """

    def __call__(self, current: int, total: int) -> None: ...


class StepProgressCallback(Protocol):
    """Callback for step-based progress (formation and evolution sequences).

    Args:
        step: Step identifier (e.g. "2/5", "quenched")
        status: Human-readable status message
    """

    def __call__(self, step: str, status: str) -> None: ...
