"""Galaxy scaling relations.

Profiles are scalar descriptors (Sersic index, scale length, effective
radius); turning them into images is a rendering concern.
"""

from ..core.models import GalaxyConfig, GalaxyPhysics, GalaxyType
from .constants import (
    C_KMS,
    EDDINGTON_PER_SOLAR_MASS,
    G_KPC,
    HUBBLE_CONSTANT,
    UNIVERSE_AGE_GYR,
)
from .orbits import kepler_period_days

# Mass-size slope by morphology family
SIZE_SLOPES = {"elliptical": 0.75, "dwarf": 0.3}
DEFAULT_SIZE_SLOPE = 0.14

# Base color index by family, before the metallicity term
BASE_COLOR_INDEX = {
    "spiral": 0.4,
    "barred_spiral": 0.4,
    "elliptical": 0.8,
    "lenticular": 0.8,
    "irregular": 0.2,
    "dwarf": 0.6,
}
DEFAULT_COLOR_INDEX = 0.6

# Kennicutt (1998) star formation rate calibrations
KENNICUTT_UV = 1.4e-28  # M☉/yr per erg/s/Hz
KENNICUTT_IR = 4.5e-44  # M☉/yr per erg/s
KENNICUTT_HALPHA = 7.9e-42  # M☉/yr per erg/s

CENTRAL_BLACK_HOLE_FRACTION = 1e-4


def size_relation_radius(stellar_mass: float, family: str) -> float:
    """Effective radius (kpc) from R = 3 (M*/1e11)^beta."""
    if stellar_mass <= 0:
        return 0.0
    slope = SIZE_SLOPES.get(family, DEFAULT_SIZE_SLOPE)
    return 3.0 * (stellar_mass / 1e11) ** slope


def mass_to_light_ratio(population: str, age_gyr: float) -> float:
    if population == "population_i":
        return 2.0 + 0.5 * age_gyr
    if population == "population_ii":
        return 5.0 + age_gyr
    if population == "starburst":
        return 0.5
    return 3.0


def tully_fisher_velocity(stellar_mass: float) -> float:
    """Rotation velocity (km/s) of a disk, v = 200 (M*/5e10)^(1/4)."""
    if stellar_mass <= 0:
        return 0.0
    return 200.0 * (stellar_mass / 5e10) ** 0.25


def faber_jackson_dispersion(stellar_mass: float) -> float:
    """Central velocity dispersion (km/s), sigma = 150 (M*/1e11)^(1/4)."""
    if stellar_mass <= 0:
        return 0.0
    return 150.0 * (stellar_mass / 1e11) ** 0.25


def dynamical_mass(velocity: float, radius_kpc: float) -> float:
    """Virial mass (M☉), v^2 R / G."""
    return velocity**2 * radius_kpc / G_KPC


def hubble_distance_mpc(redshift: float) -> float:
    return redshift * C_KMS / HUBBLE_CONSTANT


def agn_luminosity(stellar_mass: float, eddington_ratio: float) -> tuple[float, float]:
    """Central black hole mass (M☉) and its Eddington-scaled luminosity (erg/s)."""
    bh_mass = stellar_mass * CENTRAL_BLACK_HOLE_FRACTION
    return bh_mass, eddington_ratio * EDDINGTON_PER_SOLAR_MASS * bh_mass


def derive_physics(config: GalaxyConfig, type_def: GalaxyType) -> GalaxyPhysics:
    stellar_mass = config.mass
    total_mass = stellar_mass / (1 - type_def.dark_matter_fraction)
    gas_mass = type_def.gas_fraction * stellar_mass
    sfr = config.star_formation_rate

    rotation = tully_fisher_velocity(stellar_mass) if type_def.has_disk or type_def.morphology.spiral_arms else 0.0
    dispersion = faber_jackson_dispersion(stellar_mass)
    kinematic_velocity = rotation if rotation > 0 else dispersion

    ml_ratio = mass_to_light_ratio(type_def.dominant_population, config.age_gyr)
    bh_mass, agn_lum = agn_luminosity(stellar_mass, config.eddington_ratio)

    orbital_period = 0.0
    if config.is_binary and config.orbital_separation_km > 0:
        orbital_period = kepler_period_days(
            total_mass + config.companion_mass / (1 - type_def.dark_matter_fraction),
            config.orbital_separation_km,
        )

    return GalaxyPhysics(
        stellar_mass=stellar_mass,
        total_mass=total_mass,
        dark_matter_mass=total_mass - stellar_mass,
        gas_mass=gas_mass,
        size_relation_radius=size_relation_radius(stellar_mass, type_def.family),
        sersic_index=type_def.sersic_index,
        disk_scale_length=config.effective_radius_kpc / 1.678,
        rotation_velocity=rotation,
        velocity_dispersion=dispersion,
        dynamical_mass=dynamical_mass(kinematic_velocity, config.effective_radius_kpc),
        specific_star_formation_rate=sfr / stellar_mass if stellar_mass > 0 else 0.0,
        gas_depletion_time=gas_mass / sfr / 1e9 if sfr > 0 else float("inf"),
        mass_to_light_ratio=ml_ratio,
        stellar_luminosity=stellar_mass / ml_ratio,
        uv_luminosity=sfr / KENNICUTT_UV,
        infrared_luminosity=sfr / KENNICUTT_IR,
        halpha_luminosity=sfr / KENNICUTT_HALPHA,
        central_black_hole_mass=bh_mass,
        agn_luminosity=agn_lum,
        # X-ray binaries scale with SFR (Mineo et al. 2012) on top of the nucleus
        xray_luminosity=0.1 * agn_lum + 2.6e39 * sfr,
        radio_luminosity=1e-3 * agn_lum + 1e38 * sfr,
        color_index=BASE_COLOR_INDEX.get(type_def.family, DEFAULT_COLOR_INDEX) + 0.2 * config.metallicity,
        lookback_time=max(0.0, UNIVERSE_AGE_GYR - config.age_gyr),
        distance_mpc=hubble_distance_mpc(config.redshift),
        orbital_period=orbital_period,
    )


def angular_size_arcmin(radius_kpc: float, distance_mpc: float) -> float:
    """Apparent diameter of a galaxy in arcminutes (small-angle)."""
    if distance_mpc <= 0:
        return float("inf") if radius_kpc > 0 else 0.0
    return 2 * radius_kpc / (distance_mpc * 1000) * 206265 / 60


def morphology_summary(config: GalaxyConfig) -> str:
    """Short human-readable morphology string, e.g. 'SBb, 2 arms, e=0.15'."""
    parts = [config.hubble_type]
    if config.spiral_arms:
        parts.append(f"{config.spiral_arms} arms (pitch {config.arm_tightness:.1f}°)")
    if config.bar_strength > 0:
        parts.append(f"bar {config.bar_strength:.2f}")
    parts.append(f"e={config.ellipticity:.2f}")
    return ", ".join(parts)
