"""Range sampling on top of the deterministic stream."""

from typing import Literal

from .rng import MinimalStandardRandom

Scale = Literal["linear", "log10"]


def sample_linear(rng: MinimalStandardRandom, low: float, high: float) -> float:
    """Draw uniformly from [low, high]."""
    return low + rng.random() * (high - low)


def sample_log10(rng: MinimalStandardRandom, log10_low: float, log10_high: float) -> float:
    """Draw a value whose base-10 logarithm is uniform in [log10_low, log10_high]."""
    return 10 ** sample_linear(rng, log10_low, log10_high)


def sample_range(
    rng: MinimalStandardRandom,
    bounds: tuple[float, float],
    scale: Scale = "linear",
) -> float:
    """Draw within declared bounds using the field's fixed scale."""
    low, high = bounds
    if scale == "log10":
        return sample_log10(rng, low, high)
    return sample_linear(rng, low, high)


def jitter(rng: MinimalStandardRandom, base: float, spread: float) -> float:
    """Perturb ``base`` by a uniform offset in [-spread / 2, spread / 2]."""
    return base + (rng.random() - 0.5) * spread


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
