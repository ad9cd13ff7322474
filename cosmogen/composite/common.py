"""Helpers shared by the composite generators."""

import math
from contextlib import contextmanager
from typing import Callable, Iterator, Protocol, Union

from ..core.errors import CompositionFailed, CosmogenError, GenerationCancelled
from ..generation.rng import MinimalStandardRandom
from ..generation.sampler import sample_linear


class _Event(Protocol):
    def is_set(self) -> bool: ...


# A threading.Event (or anything with is_set) or a zero-argument callable
CancelCheck = Union[_Event, Callable[[], bool]]


@contextmanager
def composition_step(description: str) -> Iterator[None]:
    """Re-raise generation errors from a composite step as CompositionFailed.

    Cancellation and composition errors pass through unchanged.
    """
    try:
        yield
    except (CompositionFailed, GenerationCancelled):
        raise
    except CosmogenError as exc:
        raise CompositionFailed(f"{description}: {exc}") from exc


def is_cancelled(cancel: CancelCheck | None) -> bool:
    if cancel is None:
        return False
    if hasattr(cancel, "is_set"):
        return cancel.is_set()
    return bool(cancel())


def spherical_position(
    rng: MinimalStandardRandom, radius: float
) -> tuple[float, float, float]:
    """A point within a sphere: radius, azimuth and polar angle drawn in that order."""
    r = sample_linear(rng, 0.0, radius)
    theta = rng.random() * 2 * math.pi
    phi = rng.random() * math.pi
    return (
        r * math.sin(phi) * math.cos(theta),
        r * math.cos(phi),
        r * math.sin(phi) * math.sin(theta),
    )
