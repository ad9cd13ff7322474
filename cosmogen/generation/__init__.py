"""Deterministic sampling: RNG, range sampler, instance config builder and the
single-object pipeline."""

from .rng import MinimalStandardRandom, derive_seed, next_state, seed_state
from .sampler import sample_linear, sample_log10, sample_range
from .builder import build, validate_overrides
from .pipeline import derive_result, generate_object

__all__ = [
    "MinimalStandardRandom",
    "derive_seed",
    "next_state",
    "seed_state",
    "sample_linear",
    "sample_log10",
    "sample_range",
    "build",
    "validate_overrides",
    "derive_result",
    "generate_object",
]
