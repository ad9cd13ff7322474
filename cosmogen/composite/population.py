"""Populations, galaxy clusters, primordial black hole populations and
multi-star systems.

All generators here draw everything from one composite stream per call.
Per member the order is: class pick (when random), member seed, then the
member's placement.
"""

import logging
import math
import time

from ..config import GenerationConfig
from ..core.errors import GenerationCancelled
from ..core.models import GenerationResult, InstanceConfigBase, TypeDefinitionBase
from ..generation import build, derive_result, derive_seed
from ..generation.rng import MinimalStandardRandom
from ..generation.sampler import sample_linear
from ..physics.constants import KM_PER_AU, KM_PER_MPC, KM_PER_PC
from ..physics.orbits import interaction_strength, kepler_period_days
from ..registry import Registry
from ..registry.selector import resolve
from ..utils.callbacks import ItemProgressCallback
from .binary import ECCENTRICITY_RANGES, build_binary
from .common import CancelCheck, composition_step, is_cancelled, spherical_position

logger = logging.getLogger(__name__)

# Galaxy clusters
DEFAULT_CLUSTER_CENTER = "elliptical_e4"
CLUSTER_REDSHIFT = 0.05
CLUSTER_REDSHIFT_PER_MPC = 0.01
CLUSTER_RADIUS_MPC = (0.1, 5.0)
CLUSTER_THICKNESS = 0.3

# Primordial black holes
PRIMORDIAL_KEY = "primordial_micro"
MASS_FUNCTIONS: tuple[str, ...] = ("monochromatic", "power_law", "lognormal")
MONOCHROMATIC_MASS = 1e-12
POWER_LAW_LOG10_RANGE = (-15.0, -5.0)
LOGNORMAL_LN_RANGE = (-30.0, -10.0)

# Multi-star systems: companion i orbits at COMPANION_ORBIT_AU * i^1.5
COMPANION_ORBIT_AU = 10.0


# =============================================================================
# Populations
# =============================================================================


def generate_population(
    class_key: str | None,
    count: int,
    seed: int,
    registry: Registry,
    generation: GenerationConfig | None = None,
    domain: str | None = None,
    on_progress: ItemProgressCallback | None = None,
    cancel: CancelCheck | None = None,
) -> list[GenerationResult]:
    """Generate ``count`` objects placed within a sphere of
    ``generation.population_radius_pc``.

    With no ``class_key`` each member's class is picked at random (within
    ``domain`` when given). ``cancel`` is checked before each member and
    ``on_progress`` called after each one.

    Raises:
        GenerationCancelled: If ``cancel`` fires; no members are returned
        CompositionFailed: If a member cannot be resolved or built
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    generation = generation or GenerationConfig()
    rng = MinimalStandardRandom(seed)
    radius_km = generation.population_radius_pc * KM_PER_PC

    fixed_def = None
    if class_key is not None:
        with composition_step("Could not resolve population class"):
            fixed_def = resolve(class_key, rng, registry, domain)

    members: list[GenerationResult] = []
    for index in range(count):
        if is_cancelled(cancel):
            logger.info("Population cancelled after %d/%d members", index, count)
            raise GenerationCancelled(index, count)

        started = time.perf_counter()
        with composition_step(f"Could not generate population member {index}"):
            type_def = fixed_def or resolve(None, rng, registry, domain)
            config = build(type_def, derive_seed(rng))
        config = config.with_position(spherical_position(rng, radius_km), role=f"member_{index}")
        members.append(derive_result(config, type_def, generation, started))

        if on_progress:
            on_progress(index + 1, count)

    logger.debug("Generated population of %d (seed=%d)", count, seed)
    return members


# =============================================================================
# Galaxy clusters
# =============================================================================


def cluster_member_key(distance_mpc: float, rng: MinimalStandardRandom) -> str:
    """Morphology by distance from the cluster center (morphology-density relation).

    Consumes one draw beyond 0.5 Mpc.
    """
    if distance_mpc < 0.5:
        return "elliptical_e4"
    if distance_mpc < 2.0:
        return "lenticular_s0" if rng.random() < 0.5 else "dwarf_elliptical"
    return "spiral_sb" if rng.random() < 0.3 else "irregular_i"


def generate_cluster(
    center_key: str | None,
    member_count: int,
    seed: int,
    registry: Registry,
    generation: GenerationConfig | None = None,
) -> list[GenerationResult]:
    """Central galaxy at the origin plus ``member_count - 1`` satellites.

    Member draw order: distance from center, morphology roll, seed, azimuth,
    height.
    """
    if member_count < 1:
        raise ValueError(f"member_count must be at least 1, got {member_count}")
    generation = generation or GenerationConfig()
    rng = MinimalStandardRandom(seed)

    started = time.perf_counter()
    with composition_step("Could not resolve cluster center"):
        center_def = registry.require(center_key or DEFAULT_CLUSTER_CENTER, "galaxy")
    with composition_step(f"Could not build cluster center {center_def.key}"):
        center = build(center_def, derive_seed(rng), overrides={"redshift": CLUSTER_REDSHIFT})
    center = center.with_position((0.0, 0.0, 0.0), role="central")
    cluster = [derive_result(center, center_def, generation, started)]

    for index in range(1, member_count):
        started = time.perf_counter()
        distance = sample_linear(rng, *CLUSTER_RADIUS_MPC)
        key = cluster_member_key(distance, rng)
        redshift = CLUSTER_REDSHIFT + distance * CLUSTER_REDSHIFT_PER_MPC
        with composition_step(f"Could not generate cluster member {index}"):
            member_def = registry.require(key, "galaxy")
            config = build(member_def, derive_seed(rng), overrides={"redshift": redshift})

        angle = rng.random() * 2 * math.pi
        height = (rng.random() - 0.5) * distance * CLUSTER_THICKNESS
        position = (
            distance * math.cos(angle) * KM_PER_MPC,
            height * KM_PER_MPC,
            distance * math.sin(angle) * KM_PER_MPC,
        )
        config = config.with_position(position, role=f"member_{index}")
        cluster.append(derive_result(config, member_def, generation, started))

    logger.debug("Generated cluster around %s with %d galaxies", center_def.key, len(cluster))
    return cluster


# =============================================================================
# Primordial black holes
# =============================================================================


def sample_primordial_mass(mass_function: str, rng: MinimalStandardRandom) -> float:
    """Mass in M☉; the monochromatic function consumes no draw."""
    if mass_function == "monochromatic":
        return MONOCHROMATIC_MASS
    if mass_function == "power_law":
        return 10 ** sample_linear(rng, *POWER_LAW_LOG10_RANGE)
    if mass_function == "lognormal":
        return math.exp(sample_linear(rng, *LOGNORMAL_LN_RANGE))
    raise ValueError(
        f"Unknown mass function {mass_function!r}. Expected one of: {', '.join(MASS_FUNCTIONS)}"
    )


def generate_primordial_population(
    mass_function: str,
    count: int,
    seed: int,
    registry: Registry,
    generation: GenerationConfig | None = None,
) -> list[GenerationResult]:
    """Primordial black holes with masses drawn from a mass function.

    Member draw order: mass, seed, position.
    """
    mass_function = mass_function.replace("-", "_")
    if mass_function not in MASS_FUNCTIONS:
        raise ValueError(
            f"Unknown mass function {mass_function!r}. Expected one of: {', '.join(MASS_FUNCTIONS)}"
        )
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    generation = generation or GenerationConfig()
    rng = MinimalStandardRandom(seed)
    radius_km = generation.population_radius_pc * KM_PER_PC

    with composition_step("Could not resolve primordial class"):
        type_def = registry.require(PRIMORDIAL_KEY, "black_hole")

    members: list[GenerationResult] = []
    for index in range(count):
        started = time.perf_counter()
        mass = sample_primordial_mass(mass_function, rng)
        with composition_step(f"Could not build primordial black hole {index}"):
            config = build(type_def, derive_seed(rng), mass_override=mass)
        config = config.with_position(spherical_position(rng, radius_km), role=f"member_{index}")
        members.append(derive_result(config, type_def, generation, started))
    return members


# =============================================================================
# Multi-star systems
# =============================================================================


def _companion_orbit(
    primary: InstanceConfigBase,
    companion: InstanceConfigBase,
    index: int,
    star_count: int,
    rng: MinimalStandardRandom,
) -> InstanceConfigBase:
    separation_au = COMPANION_ORBIT_AU * index**1.5
    separation = separation_au * KM_PER_AU
    angle = 2 * math.pi * index / star_count
    return companion.with_binary(
        companion_key=primary.key,
        companion_mass=primary.mass,
        separation_km=separation,
        eccentricity=sample_linear(rng, *ECCENTRICITY_RANGES["star"]),
        period_days=kepler_period_days(primary.mass + companion.mass, separation),
        interaction_strength=interaction_strength(primary.mass, companion.mass, separation_au),
        position_km=(separation * math.cos(angle), 0.0, separation * math.sin(angle)),
        role=f"companion_{index}",
    )


def generate_stellar_system(
    star_count: int,
    seed: int,
    registry: Registry,
    generation: GenerationConfig | None = None,
) -> list[GenerationResult]:
    """One, two or more stars.

    A single star stands alone, two stars form a binary, and larger systems
    are a primary at the origin with companions on widening orbits
    (``10 i^1.5`` AU, evenly spaced in angle). Companion orbits are drawn
    after all class picks and seeds.
    """
    if star_count < 1:
        raise ValueError(f"star_count must be at least 1, got {star_count}")
    generation = generation or GenerationConfig()
    rng = MinimalStandardRandom(seed)

    if star_count == 2:
        with composition_step("Could not resolve binary stars"):
            primary_def = resolve(None, rng, registry, "star")
            secondary_def = resolve(None, rng, registry, "star")
        return list(build_binary(primary_def, secondary_def, rng, generation))

    started = time.perf_counter()
    picks: list[tuple[TypeDefinitionBase, int]] = []
    with composition_step("Could not resolve system stars"):
        for _ in range(star_count):
            type_def = resolve(None, rng, registry, "star")
            picks.append((type_def, derive_seed(rng)))

    configs: list[InstanceConfigBase] = []
    for type_def, member_seed in picks:
        with composition_step(f"Could not build {type_def.key}"):
            configs.append(build(type_def, member_seed))

    primary = configs[0].with_position((0.0, 0.0, 0.0), role="primary" if star_count > 1 else None)
    bound = [primary]
    for index, companion in enumerate(configs[1:], start=1):
        bound.append(_companion_orbit(primary, companion, index, star_count, rng))

    return [
        derive_result(config, type_def, generation, started)
        for config, (type_def, _) in zip(bound, picks)
    ]
