"""Binary systems.

Draw order on the composite stream: primary class (when random), secondary
class (when random), primary seed, secondary seed, eccentricity, separation.
Each member is built from its own stream seeded with its member seed, so
either member can be regenerated alone from its reproducible tuple.
"""

import logging
import time

from ..config import GenerationConfig
from ..core.errors import CompositionFailed
from ..core.models import (
    GalaxyType,
    GenerationResult,
    InstanceConfigBase,
    TypeDefinitionBase,
)
from ..generation import build, derive_result, derive_seed
from ..generation.rng import MinimalStandardRandom
from ..generation.sampler import sample_linear
from ..physics.black_hole import schwarzschild_radius
from ..physics.constants import KM_PER_AU, KM_PER_KPC
from ..physics.orbits import center_of_mass_positions, interaction_strength, kepler_period_days
from ..registry import Registry
from ..registry.selector import resolve
from .common import composition_step

logger = logging.getLogger(__name__)

# Separation envelopes: black holes in combined Schwarzschild radii, galaxies
# in kpc, stars in AU
SEPARATION_ENVELOPES: dict[str, tuple[float, float]] = {
    "black_hole": (10.0, 1000.0),
    "galaxy": (20.0, 100.0),
    "star": (1.0, 11.0),
}

ECCENTRICITY_RANGES: dict[str, tuple[float, float]] = {
    "black_hole": (0.0, 0.3),
    "galaxy": (0.0, 0.5),
    "star": (0.0, 0.6),
}

# Length unit in which interaction strength is reported, in km
INTERACTION_UNITS_KM: dict[str, float] = {
    "black_hole": 1.0,
    "galaxy": KM_PER_KPC,
    "star": KM_PER_AU,
}


def separation_envelope_km(domain: str, total_mass: float) -> tuple[float, float]:
    """Plausible separation range (km) for a pair of combined mass ``total_mass``."""
    low, high = SEPARATION_ENVELOPES[domain]
    if domain == "black_hole":
        rs = schwarzschild_radius(total_mass)
        return low * rs, high * rs
    if domain == "galaxy":
        return low * KM_PER_KPC, high * KM_PER_KPC
    return low * KM_PER_AU, high * KM_PER_AU


def dynamical_mass(config: InstanceConfigBase, type_def: TypeDefinitionBase) -> float:
    """Mass that sets the orbit: galaxies orbit with their dark matter halos."""
    if isinstance(type_def, GalaxyType):
        return config.mass / (1 - type_def.dark_matter_fraction)
    return config.mass


def bind_pair(
    primary: InstanceConfigBase,
    secondary: InstanceConfigBase,
    primary_def: TypeDefinitionBase,
    secondary_def: TypeDefinitionBase,
    rng: MinimalStandardRandom,
) -> tuple[InstanceConfigBase, InstanceConfigBase]:
    """Draw the orbit of two built members and attach it to both configs."""
    domain = primary_def.domain
    if secondary_def.domain != domain:
        raise CompositionFailed(
            f"Binary members must share a domain: {primary_def.key} is a {domain}, "
            f"{secondary_def.key} is a {secondary_def.domain}"
        )

    m1, m2 = primary.mass, secondary.mass
    low, high = separation_envelope_km(domain, m1 + m2)
    if high <= 0:
        raise CompositionFailed(f"Combined mass of {primary.key} and {secondary.key} must be positive")

    eccentricity = sample_linear(rng, *ECCENTRICITY_RANGES[domain])
    separation = sample_linear(rng, low, high)

    orbit_mass = dynamical_mass(primary, primary_def) + dynamical_mass(secondary, secondary_def)
    period = kepler_period_days(orbit_mass, separation)
    strength = interaction_strength(m1, m2, separation / INTERACTION_UNITS_KM[domain])
    p1, p2 = center_of_mass_positions(m1, m2, separation)

    logger.debug(
        "Bound %s + %s: separation=%.4g km, e=%.3f, period=%.4g d",
        primary.key,
        secondary.key,
        separation,
        eccentricity,
        period,
    )

    orbit = dict(
        separation_km=separation,
        eccentricity=eccentricity,
        period_days=period,
        interaction_strength=strength,
    )
    return (
        primary.with_binary(
            companion_key=secondary.key, companion_mass=m2, position_km=p1, role="primary", **orbit
        ),
        secondary.with_binary(
            companion_key=primary.key, companion_mass=m1, position_km=p2, role="secondary", **orbit
        ),
    )


def resolve_pair(
    primary_key: str | None,
    secondary_key: str | None,
    rng: MinimalStandardRandom,
    registry: Registry,
    domain: str | None = None,
) -> tuple[TypeDefinitionBase, TypeDefinitionBase]:
    """Resolve both member classes; a random secondary stays in the primary's domain."""
    with composition_step("Could not resolve primary"):
        primary_def = resolve(primary_key, rng, registry, domain)
    with composition_step("Could not resolve secondary"):
        secondary_def = resolve(
            secondary_key, rng, registry, domain if secondary_key is not None else primary_def.domain
        )
    if secondary_def.domain != primary_def.domain:
        raise CompositionFailed(
            f"Binary members must share a domain: {primary_def.key} is a {primary_def.domain}, "
            f"{secondary_def.key} is a {secondary_def.domain}"
        )
    return primary_def, secondary_def


def build_binary(
    primary_def: TypeDefinitionBase,
    secondary_def: TypeDefinitionBase,
    rng: MinimalStandardRandom,
    generation: GenerationConfig,
    primary_overrides: dict[str, float] | None = None,
    secondary_overrides: dict[str, float] | None = None,
) -> tuple[GenerationResult, GenerationResult]:
    """Build, bind and derive both members from seeds drawn off ``rng``."""
    started = time.perf_counter()
    primary_seed = derive_seed(rng)
    secondary_seed = derive_seed(rng)

    with composition_step(f"Could not build {primary_def.key}"):
        primary = build(primary_def, primary_seed, overrides=primary_overrides)
    with composition_step(f"Could not build {secondary_def.key}"):
        secondary = build(secondary_def, secondary_seed, overrides=secondary_overrides)

    primary, secondary = bind_pair(primary, secondary, primary_def, secondary_def, rng)
    return (
        derive_result(primary, primary_def, generation, started),
        derive_result(secondary, secondary_def, generation, started),
    )


def generate_binary(
    primary_key: str | None,
    secondary_key: str | None,
    seed: int,
    registry: Registry,
    generation: GenerationConfig | None = None,
    domain: str | None = None,
) -> tuple[GenerationResult, GenerationResult]:
    """Generate a bound pair of same-domain objects.

    Raises:
        CompositionFailed: If a class cannot be resolved, the members belong
            to different domains, or a member cannot be built
    """
    generation = generation or GenerationConfig()
    rng = MinimalStandardRandom(seed)
    primary_def, secondary_def = resolve_pair(primary_key, secondary_key, rng, registry, domain)
    return build_binary(primary_def, secondary_def, rng, generation)
