"""Merger sequences: a bound pair followed by its remnant.

The remnant class comes from a fixed rule table per domain (compact stellar
remnants merge into a white dwarf or a neutron star) and its mass is
``m1 + m2 * (1 - radiated_fraction)``, passed to the builder as an explicit
mass override. The remnant seed is drawn from the composite stream after the
pair's orbit.
"""

import logging
import time

from ..config import GenerationConfig
from ..core.models import GalaxyType, GenerationResult, StarType, TypeDefinitionBase
from ..generation import build, derive_result, derive_seed
from ..generation.rng import MinimalStandardRandom
from ..registry import Registry
from .binary import build_binary, resolve_pair
from .common import composition_step

logger = logging.getLogger(__name__)

# Upper combined-mass bounds (M☉), checked in order; the last entry is open-ended
BLACK_HOLE_REMNANTS: tuple[tuple[float, str], ...] = (
    (100.0, "stellar_mass"),
    (1e5, "intermediate_mass"),
    (1e10, "supermassive"),
    (float("inf"), "ultramassive"),
)

STAR_REMNANTS: tuple[tuple[float, str], ...] = (
    (0.08, "brown_dwarf"),
    (0.45, "m_type"),
    (0.8, "k_type"),
    (1.04, "g_type"),
    (1.4, "f_type"),
    (2.1, "a_type"),
    (16.0, "b_type"),
    (float("inf"), "o_type"),
)

# White-dwarf mergers under this mass stay white dwarfs; any other merger
# involving a compact remnant collapses to a neutron star
CHANDRASEKHAR_MASS = 1.4

MINOR_MERGER_RATIO = 0.1
INTERMEDIATE_MERGER_RATIO = 0.3
MASSIVE_REMNANT_STELLAR_MASS = 1e11


def remnant_mass(primary_mass: float, secondary_mass: float, radiated_fraction: float) -> float:
    return primary_mass + secondary_mass * (1 - radiated_fraction)


def _by_mass(table: tuple[tuple[float, str], ...], mass: float) -> str:
    for bound, key in table:
        if mass < bound:
            return key
    return table[-1][1]


def galaxy_remnant_key(
    primary_def: GalaxyType, primary_mass: float, secondary_def: GalaxyType, secondary_mass: float
) -> str:
    """Minor mergers keep the larger galaxy's class; major mergers build spheroids."""
    if primary_mass >= secondary_mass:
        massive_def, massive, minor_def, minor = primary_def, primary_mass, secondary_def, secondary_mass
    else:
        massive_def, massive, minor_def, minor = secondary_def, secondary_mass, primary_def, primary_mass

    ratio = minor / massive if massive > 0 else 1.0
    if ratio < MINOR_MERGER_RATIO:
        return massive_def.key
    if ratio < INTERMEDIATE_MERGER_RATIO:
        if massive_def.has_disk and minor_def.has_disk:
            return "peculiar"
        return massive_def.key
    if massive + minor > MASSIVE_REMNANT_STELLAR_MASS:
        return "elliptical_e4"
    return "irregular_i"


def star_remnant_key(primary_def: StarType, secondary_def: StarType, total_mass: float) -> str:
    """Main-sequence class by combined mass, unless a compact remnant is involved."""
    if not (primary_def.compact_remnant or secondary_def.compact_remnant):
        return _by_mass(STAR_REMNANTS, total_mass)
    both_white_dwarfs = primary_def.key == secondary_def.key == "white_dwarf"
    if both_white_dwarfs and total_mass < CHANDRASEKHAR_MASS:
        return "white_dwarf"
    return "neutron_star"


def remnant_key(
    primary_def: TypeDefinitionBase,
    primary_mass: float,
    secondary_def: TypeDefinitionBase,
    secondary_mass: float,
) -> str:
    """Classification of the object left after two same-domain objects merge."""
    if primary_def.domain == "black_hole":
        return _by_mass(BLACK_HOLE_REMNANTS, primary_mass + secondary_mass)
    if primary_def.domain == "galaxy":
        return galaxy_remnant_key(primary_def, primary_mass, secondary_def, secondary_mass)
    return star_remnant_key(primary_def, secondary_def, primary_mass + secondary_mass)


def merge(
    primary_def: TypeDefinitionBase,
    secondary_def: TypeDefinitionBase,
    rng: MinimalStandardRandom,
    registry: Registry,
    generation: GenerationConfig,
    primary_overrides: dict[str, float] | None = None,
    secondary_overrides: dict[str, float] | None = None,
) -> list[GenerationResult]:
    """Pair and remnant from an already-seeded composite stream."""
    primary, secondary = build_binary(
        primary_def, secondary_def, rng, generation, primary_overrides, secondary_overrides
    )
    m1, m2 = primary.config.mass, secondary.config.mass

    started = time.perf_counter()
    key = remnant_key(primary_def, m1, secondary_def, m2)
    mass = remnant_mass(m1, m2, generation.radiated_fraction)
    with composition_step("Could not resolve merger remnant"):
        remnant_def = registry.require(key, primary_def.domain)
    remnant_seed = derive_seed(rng)
    with composition_step(f"Could not build remnant {key}"):
        config = build(remnant_def, remnant_seed, mass_override=mass)
    config = config.with_position((0.0, 0.0, 0.0), role="remnant")

    logger.debug("Merged %s + %s into %s (%.4g M☉)", primary_def.key, secondary_def.key, key, mass)
    return [primary, secondary, derive_result(config, remnant_def, generation, started)]


def generate_merger_sequence(
    primary_key: str | None,
    secondary_key: str | None,
    seed: int,
    registry: Registry,
    generation: GenerationConfig | None = None,
    domain: str | None = None,
) -> list[GenerationResult]:
    """Generate ``[primary, secondary, remnant]``.

    Raises:
        CompositionFailed: If a progenitor or the remnant cannot be resolved
            or built
    """
    generation = generation or GenerationConfig()
    rng = MinimalStandardRandom(seed)
    primary_def, secondary_def = resolve_pair(primary_key, secondary_key, rng, registry, domain)
    return merge(primary_def, secondary_def, rng, registry, generation)
