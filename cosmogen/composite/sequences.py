"""Formation sequences (black holes) and evolution sequences (galaxies)."""

import logging
import time

from ..config import GenerationConfig
from ..core.errors import CompositionFailed
from ..core.models import GenerationResult
from ..generation import build, derive_result, derive_seed
from ..generation.rng import MinimalStandardRandom
from ..registry import Registry
from ..utils.callbacks import StepProgressCallback
from .common import composition_step
from .merger import merge

logger = logging.getLogger(__name__)

# Mechanisms that form a single hole directly, and the class they produce
DIRECT_FORMATION_KEYS: dict[str, str] = {
    "stellar_collapse": "stellar_mass",
    "direct_collapse": "supermassive",
    "primordial_formation": "primordial_micro",
}
FORMATION_MECHANISMS: tuple[str, ...] = (
    "stellar_collapse",
    "direct_collapse",
    "hierarchical_merger",
    "primordial_formation",
)
# Progenitor mass shares in a hierarchical merger
MERGER_SHARES = (0.6, 0.4)

# Galaxy evolution
INITIAL_REDSHIFT = 6.0
REDSHIFT_STEP = 1.0
DWARF_STELLAR_MASS = 1e8
FIELD_PATH = ("primordial", "formation", "mature", "interacting", "post_merger")
CLUSTER_PATH = ("primordial", "formation", "interacting", "post_merger", "quenched")
DWARF_PATH = ("primordial", "formation", "quenched")
FORMATION_SFR_BOOST = 5.0
FORMATION_ASYMMETRY = 0.5
QUENCHED_SFR_FACTOR = 0.1


# =============================================================================
# Black hole formation
# =============================================================================


def progenitor_masses(final_mass: float, radiated_fraction: float) -> tuple[float, float]:
    """Progenitor masses whose merger remnant has exactly ``final_mass``."""
    primary_share, secondary_share = MERGER_SHARES
    scale = final_mass / (primary_share + secondary_share * (1 - radiated_fraction))
    return primary_share * scale, secondary_share * scale


def generate_formation_sequence(
    mechanism: str,
    final_mass: float,
    seed: int,
    registry: Registry,
    generation: GenerationConfig | None = None,
    on_step: StepProgressCallback | None = None,
) -> list[GenerationResult]:
    """Black holes that form a hole of ``final_mass`` through ``mechanism``.

    Collapse and primordial formation yield the hole alone; a hierarchical
    merger yields two stellar-mass progenitors and their remnant.

    Raises:
        CompositionFailed: If the mechanism is unknown or a step fails
    """
    generation = generation or GenerationConfig()
    rng = MinimalStandardRandom(seed)

    if mechanism == "hierarchical_merger":
        m1, m2 = progenitor_masses(final_mass, generation.radiated_fraction)
        with composition_step("Could not resolve progenitors"):
            progenitor = registry.require("stellar_mass", "black_hole")
        if on_step:
            on_step("1/1", f"Merging progenitors of {m1:.4g} and {m2:.4g} M☉")
        return merge(progenitor, progenitor, rng, registry, generation, {"mass": m1}, {"mass": m2})

    key = DIRECT_FORMATION_KEYS.get(mechanism)
    if key is None:
        raise CompositionFailed(
            f"Unknown formation mechanism {mechanism!r}. "
            f"Expected one of: {', '.join(FORMATION_MECHANISMS)}"
        )

    started = time.perf_counter()
    if on_step:
        on_step("1/1", f"Forming {key} via {mechanism}")
    with composition_step(f"Could not form {key}"):
        type_def = registry.require(key, "black_hole")
        config = build(type_def, derive_seed(rng), mass_override=final_mass)
    return [derive_result(config.with_position((0.0, 0.0, 0.0), role=mechanism), type_def, generation, started)]


# =============================================================================
# Galaxy evolution
# =============================================================================


def evolution_path(initial_mass: float, environment: str = "field") -> tuple[str, ...]:
    """Stages a galaxy passes through; environments other than "cluster" evolve as field galaxies."""
    if initial_mass < DWARF_STELLAR_MASS:
        return DWARF_PATH
    if environment == "cluster":
        return CLUSTER_PATH
    return FIELD_PATH


def stage_key(stage: str, initial_mass: float) -> str:
    """Galaxy class representing an evolution stage."""
    if stage == "primordial":
        return "irregular_i"
    if stage == "formation":
        return "starburst" if initial_mass > 1e10 else "dwarf_irregular"
    if stage == "mature":
        return "spiral_sb" if initial_mass > 1e11 else "dwarf_elliptical"
    if stage == "interacting":
        return "peculiar"
    if stage in ("quenched", "post_merger"):
        return "elliptical_e4"
    return "spiral_sb"


def generate_evolution_sequence(
    initial_mass: float,
    seed: int,
    registry: Registry,
    environment: str = "field",
    generation: GenerationConfig | None = None,
    on_step: StepProgressCallback | None = None,
) -> list[GenerationResult]:
    """One galaxy per evolution stage, from redshift 6 toward the present.

    Redshift drops by one per stage (floored at zero). Formation stages have
    their star formation boosted and their asymmetry raised; quenched stages
    have it suppressed.
    """
    generation = generation or GenerationConfig()
    rng = MinimalStandardRandom(seed)
    path = evolution_path(initial_mass, environment)

    sequence: list[GenerationResult] = []
    redshift = INITIAL_REDSHIFT
    for index, stage in enumerate(path, start=1):
        started = time.perf_counter()
        key = stage_key(stage, initial_mass)
        if on_step:
            on_step(f"{index}/{len(path)}", f"{stage} ({key}, z={redshift:g})")

        with composition_step(f"Could not generate {stage} stage"):
            type_def = registry.require(key, "galaxy")
            config = build(type_def, derive_seed(rng), overrides={"redshift": redshift})

        updates: dict = {"evolution_stage": stage, "composite_role": stage}
        if stage == "formation":
            updates["star_formation_rate"] = config.star_formation_rate * FORMATION_SFR_BOOST
            updates["asymmetry_index"] = FORMATION_ASYMMETRY
        elif stage == "quenched":
            updates["star_formation_rate"] = config.star_formation_rate * QUENCHED_SFR_FACTOR
        config = config.with_updates(**updates)

        sequence.append(derive_result(config, type_def, generation, started))
        redshift = max(0.0, redshift - REDSHIFT_STEP)

    logger.debug("Generated %s evolution sequence of %d stages", environment, len(sequence))
    return sequence
