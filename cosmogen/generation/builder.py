"""Instance config builder.

Turns a type definition and a seeded stream into a fully-parameterized
instance config. Draws happen in a fixed per-domain order (an overridden field
consumes no draw), so a (key, seed, overrides) tuple always rebuilds the same
config:

black hole:
    mass (log10) -> spin -> charge -> formation mechanism -> age -> accretion
    rate -> environment density -> ambient field -> companion roll
    [-> companion count] -> distance -> accretion disk roll
galaxy:
    stellar mass (log10) -> effective radius -> star formation rate ->
    metallicity -> age -> formation mechanism -> ellipticity
    [-> arm tightness -> arm symmetry] [-> Eddington ratio]
star:
    mass -> radius -> temperature -> luminosity -> formation mechanism ->
    age -> magnetic field -> metallicity -> companion roll -> distance
"""

import logging
import math
from typing import Any, Mapping

from ..core.errors import InvalidOverride
from ..core.models import (
    CONFIG_CLASSES,
    BlackHoleConfig,
    BlackHoleType,
    GalaxyConfig,
    GalaxyType,
    InstanceConfigBase,
    StarConfig,
    StarType,
    TypeDefinitionBase,
)
from ..core.models.registry import PRIMORDIAL_AGE_YEARS
from ..physics.constants import UNIVERSE_AGE_GYR
from ..physics.star import main_sequence_lifetime
from .rng import MinimalStandardRandom
from .sampler import clamp, jitter, sample_linear, sample_range

logger = logging.getLogger(__name__)

# Probability that a black hole or star is generated with stellar companions
COMPANION_PROBABILITY = 0.3
MAX_STELLAR_COMPANIONS = 5
# A disk is drawn for holes above this mass when the roll exceeds the threshold
ACCRETION_DISK_MIN_MASS = 3.0
ACCRETION_DISK_ROLL = 0.3
# Black hole redshift from distance (pc), a rough local approximation
BLACK_HOLE_REDSHIFT_SCALE_PC = 3000.0

EDDINGTON_RATIO_RANGE = (0.01, 1.0)
QUIESCENT_EDDINGTON_RATIO = 0.001
ELLIPTICITY_SPREAD = 0.2
ARM_TIGHTNESS_SPREAD = 5.0
ARM_SYMMETRY_SPREAD = 0.2
# Fraction of the main sequence lifetime a star's age is drawn from
STELLAR_AGE_FRACTION = 0.8
STELLAR_METALLICITY_SPREAD = 0.4
STELLAR_FIELD_SPREAD = 0.5


def validate_overrides(
    config_cls: type[InstanceConfigBase],
    overrides: Mapping[str, Any] | None,
) -> dict[str, float]:
    """Check overrides for type and sign sanity.

    Overrides bypass range validation entirely: an out-of-range but finite,
    correctly-signed value is accepted as-is.

    Raises:
        InvalidOverride: unknown field, non-numeric or non-finite value,
            negative value for a non-negative quantity, or a spin/charge-like
            value outside [0, 1]
    """
    checked: dict[str, float] = {}
    for name, value in (overrides or {}).items():
        if name not in config_cls.OVERRIDABLE:
            allowed = ", ".join(sorted(config_cls.OVERRIDABLE))
            raise InvalidOverride(name, value, f"not an overridable field (expected one of: {allowed})")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidOverride(name, value, "must be a real number")
        value = float(value)
        if not math.isfinite(value):
            raise InvalidOverride(name, value, "must be finite")
        if name in config_cls.NON_NEGATIVE and value < 0:
            raise InvalidOverride(name, value, "must not be negative")
        if name in config_cls.UNIT_INTERVAL and not 0 <= value <= 1:
            raise InvalidOverride(name, value, "must lie within [0, 1]")
        checked[name] = value
    return checked


def build(
    type_def: TypeDefinitionBase,
    seed: int,
    rng: MinimalStandardRandom | None = None,
    mass_override: float | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> InstanceConfigBase:
    """Build the instance config for one object.

    Args:
        type_def: Resolved classification
        seed: Seed recorded on the config
        rng: Stream to draw from; a fresh one seeded with ``seed`` when omitted
        mass_override: Shorthand for ``overrides={"mass": ...}``
        overrides: Field values that replace sampling for those fields

    Raises:
        InvalidOverride: If an override fails sanity checks. Nothing is drawn
            from the stream in that case.
    """
    merged = dict(overrides or {})
    if mass_override is not None:
        merged["mass"] = mass_override
    checked = validate_overrides(CONFIG_CLASSES[type_def.domain], merged)

    if rng is None:
        rng = MinimalStandardRandom(seed)

    if isinstance(type_def, BlackHoleType):
        config = _build_black_hole(type_def, seed, rng, checked)
    elif isinstance(type_def, GalaxyType):
        config = _build_galaxy(type_def, seed, rng, checked)
    elif isinstance(type_def, StarType):
        config = _build_star(type_def, seed, rng, checked)
    else:
        raise TypeError(f"Unsupported type definition: {type(type_def).__name__}")

    logger.debug("Built %s (seed=%d, overrides=%s, draws=%d)", type_def.key, seed, sorted(checked), rng.draws)
    return config


def _sampled(
    type_def: TypeDefinitionBase,
    field: str,
    rng: MinimalStandardRandom,
    overrides: dict[str, float],
) -> float:
    """Override value for a field, or one draw within its declared range."""
    if field in overrides:
        return overrides[field]
    return sample_range(rng, type_def.declared_range(field), type_def.scale_for(field))


def _pick_mechanism(type_def: TypeDefinitionBase, rng: MinimalStandardRandom) -> str:
    return type_def.formation_mechanisms[rng.index(len(type_def.formation_mechanisms))]


# =============================================================================
# Black holes
# =============================================================================


def _build_black_hole(
    type_def: BlackHoleType,
    seed: int,
    rng: MinimalStandardRandom,
    overrides: dict[str, float],
) -> BlackHoleConfig:
    mass = _sampled(type_def, "mass", rng, overrides)
    spin = _sampled(type_def, "spin", rng, overrides)
    charge = _sampled(type_def, "charge", rng, overrides)

    mechanism = _pick_mechanism(type_def, rng)
    if "age_years" in overrides:
        age = overrides["age_years"]
    elif mechanism == "primordial_formation":
        age = PRIMORDIAL_AGE_YEARS
    else:
        age = sample_linear(rng, *type_def.age_range(mechanism))

    accretion_rate = _sampled(type_def, "accretion_rate", rng, overrides)
    density = _sampled(type_def, "environment_density", rng, overrides)
    ambient_field = _sampled(type_def, "ambient_magnetic_field", rng, overrides)

    companions = 0
    if rng.random() < COMPANION_PROBABILITY:
        companions = rng.index(MAX_STELLAR_COMPANIONS)

    distance = _sampled(type_def, "distance_pc", rng, overrides)

    features = dict(type_def.visual_features)
    disk_roll = rng.random()
    features["ergosphere"] = spin > 0.1
    features["accretion_disk"] = mass > ACCRETION_DISK_MIN_MASS and disk_roll > ACCRETION_DISK_ROLL
    features["jet_structure"] = features["accretion_disk"] and spin > 0.5
    features["gravitational_lensing"] = mass > 1e6
    features["shadow_image"] = mass > 1e6

    return BlackHoleConfig(
        key=type_def.key,
        seed=seed,
        mass=mass,
        spin=spin,
        charge=charge,
        formation_mechanism=mechanism,
        age_years=age,
        accretion_rate=accretion_rate,
        environment_density=density,
        ambient_magnetic_field=ambient_field,
        stellar_companions=companions,
        distance_pc=distance,
        redshift=max(0.0, distance / BLACK_HOLE_REDSHIFT_SCALE_PC),
        overrides=overrides,
        visual_features=features,
    )


# =============================================================================
# Galaxies
# =============================================================================


def _build_galaxy(
    type_def: GalaxyType,
    seed: int,
    rng: MinimalStandardRandom,
    overrides: dict[str, float],
) -> GalaxyConfig:
    mass = _sampled(type_def, "mass", rng, overrides)
    radius = _sampled(type_def, "effective_radius_kpc", rng, overrides)
    sfr = _sampled(type_def, "star_formation_rate", rng, overrides)
    metallicity = _sampled(type_def, "metallicity", rng, overrides)
    age = _sampled(type_def, "age_gyr", rng, overrides)

    mechanism = _pick_mechanism(type_def, rng)

    morphology = type_def.morphology
    if "ellipticity" in overrides:
        ellipticity = overrides["ellipticity"]
    else:
        ellipticity = clamp(jitter(rng, morphology.ellipticity, ELLIPTICITY_SPREAD), 0.0, 1.0)

    arm_tightness = morphology.arm_tightness
    arm_symmetry = morphology.arm_symmetry
    if morphology.spiral_arms > 0:
        if "arm_tightness" in overrides:
            arm_tightness = overrides["arm_tightness"]
        else:
            arm_tightness = jitter(rng, morphology.arm_tightness, ARM_TIGHTNESS_SPREAD)
        if "arm_symmetry" in overrides:
            arm_symmetry = overrides["arm_symmetry"]
        else:
            arm_symmetry = clamp(jitter(rng, morphology.arm_symmetry, ARM_SYMMETRY_SPREAD), 0.0, 1.0)

    if "eddington_ratio" in overrides:
        eddington_ratio = overrides["eddington_ratio"]
    elif type_def.has_active_nucleus:
        eddington_ratio = sample_linear(rng, *EDDINGTON_RATIO_RANGE)
    else:
        eddington_ratio = QUIESCENT_EDDINGTON_RATIO

    if "redshift" in overrides:
        redshift = overrides["redshift"]
    else:
        redshift = max(0.0, (UNIVERSE_AGE_GYR - age) / 5.0)

    features = dict(type_def.visual_features)
    if type_def.has_active_nucleus:
        features["active_nucleus"] = True

    return GalaxyConfig(
        key=type_def.key,
        seed=seed,
        mass=mass,
        effective_radius_kpc=radius,
        star_formation_rate=sfr,
        metallicity=metallicity,
        age_gyr=age,
        redshift=redshift,
        formation_mechanism=mechanism,
        hubble_type=type_def.hubble_type,
        ellipticity=ellipticity,
        spiral_arms=morphology.spiral_arms,
        arm_tightness=arm_tightness,
        arm_symmetry=arm_symmetry,
        bar_strength=morphology.bar_strength,
        asymmetry_index=morphology.asymmetry_index,
        eddington_ratio=eddington_ratio,
        has_active_nucleus=type_def.has_active_nucleus,
        overrides=overrides,
        visual_features=features,
    )


# =============================================================================
# Stars
# =============================================================================


def _build_star(
    type_def: StarType,
    seed: int,
    rng: MinimalStandardRandom,
    overrides: dict[str, float],
) -> StarConfig:
    mass = _sampled(type_def, "mass", rng, overrides)
    radius = _sampled(type_def, "radius", rng, overrides)
    temperature = _sampled(type_def, "temperature", rng, overrides)
    luminosity = _sampled(type_def, "luminosity", rng, overrides)

    mechanism = _pick_mechanism(type_def, rng)

    if "age_myr" in overrides:
        age = overrides["age_myr"]
    else:
        lifetime = main_sequence_lifetime(mass)
        if math.isinf(lifetime):
            lifetime = UNIVERSE_AGE_GYR * 1000
        age = rng.random() * lifetime * STELLAR_AGE_FRACTION

    if "magnetic_field_gauss" in overrides:
        field = overrides["magnetic_field_gauss"]
    else:
        field = type_def.magnetic_field_gauss * (1 + rng.random() * STELLAR_FIELD_SPREAD)

    if "metallicity" in overrides:
        metallicity = overrides["metallicity"]
    else:
        metallicity = jitter(rng, type_def.base_metallicity, STELLAR_METALLICITY_SPREAD)

    features = dict(type_def.visual_features)
    features["binary_companion"] = rng.random() < COMPANION_PROBABILITY

    distance = _sampled(type_def, "distance_pc", rng, overrides)

    return StarConfig(
        key=type_def.key,
        seed=seed,
        mass=mass,
        radius=radius,
        temperature=temperature,
        luminosity=luminosity,
        formation_mechanism=mechanism,
        age_myr=age,
        metallicity=metallicity,
        magnetic_field_gauss=field,
        distance_pc=distance,
        overrides=overrides,
        visual_features=features,
    )
