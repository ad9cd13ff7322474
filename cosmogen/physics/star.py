"""Stellar structure relations (solar units unless noted)."""

import math

from ..core.models import StarConfig, StarPhysics, StarType
from .black_hole import schwarzschild_radius
from .constants import G_SUN_CGS, M_SUN, R_SUN_KM, T_SUN
from .orbits import kepler_period_days

SUN_AGE_MYR = 4600.0
UNIVERSE_AGE_MYR = 13800.0

# Morgan-Keenan temperature boundaries, hottest first
SPECTRAL_BOUNDARIES: tuple[tuple[float, str], ...] = (
    (30000.0, "O"),
    (10000.0, "B"),
    (7500.0, "A"),
    (6000.0, "F"),
    (5200.0, "G"),
    (3700.0, "K"),
    (2400.0, "M"),
    (1300.0, "L"),
)


def main_sequence_lifetime(mass: float) -> float:
    """Main sequence lifetime in Myr, 1e4 M^-2.5."""
    if mass <= 0:
        return float("inf")
    return 1e4 * mass**-2.5


def habitable_zone(luminosity: float) -> tuple[float, float]:
    """Inner and outer habitable-zone edges in AU."""
    if luminosity <= 0:
        return 0.0, 0.0
    return math.sqrt(luminosity / 1.1), math.sqrt(luminosity / 0.53)


def stefan_boltzmann_luminosity(radius: float, temperature: float) -> float:
    """L/L☉ = (R/R☉)^2 (T/T☉)^4."""
    return radius**2 * (temperature / T_SUN) ** 4


def spectral_class(temperature: float) -> str:
    for boundary, letter in SPECTRAL_BOUNDARIES:
        if temperature >= boundary:
            return letter
    return "T"


def evolution_stage(age_myr: float, lifetime_myr: float) -> str:
    """Stage label from the fraction of the main sequence lifetime elapsed."""
    if lifetime_myr <= 0 or math.isinf(lifetime_myr):
        return "main_sequence"
    fraction = age_myr / lifetime_myr
    if fraction < 0.1:
        return "pre_main_sequence"
    if fraction < 0.9:
        return "main_sequence"
    if fraction < 0.95:
        return "subgiant"
    if fraction < 0.99:
        return "giant"
    return "supernova"


def derive_physics(config: StarConfig, type_def: StarType) -> StarPhysics:
    mass, radius, luminosity = config.mass, config.radius, config.luminosity
    lifetime = main_sequence_lifetime(mass)
    hz_inner, hz_outer = habitable_zone(luminosity)

    if radius > 0:
        log_g = math.log10(G_SUN_CGS * mass / radius**2) if mass > 0 else float("-inf")
        escape = 617.7 * math.sqrt(mass / radius)
        density = 1.41 * mass / radius**3
    else:
        log_g, escape, density = float("inf"), float("inf"), float("inf")

    # Skumanich spin-down for stars with convective envelopes
    if type_def.compact_remnant:
        rotation = type_def.rotation_period_days
    else:
        rotation = type_def.rotation_period_days * math.sqrt(max(config.age_myr, 1.0) / SUN_AGE_MYR)

    orbital_period = 0.0
    if config.is_binary and config.orbital_separation_km > 0:
        orbital_period = kepler_period_days(
            mass + config.companion_mass, config.orbital_separation_km
        )

    return StarPhysics(
        mass_kg=mass * M_SUN,
        radius_km=radius * R_SUN_KM,
        stefan_boltzmann_luminosity=stefan_boltzmann_luminosity(radius, config.temperature),
        surface_gravity_log_g=log_g,
        escape_velocity=escape,
        mean_density=density,
        main_sequence_lifetime=lifetime,
        habitable_zone_inner=hz_inner,
        habitable_zone_outer=hz_outer,
        frost_line=2.7 * math.sqrt(max(luminosity, 0.0)),
        rotation_period=rotation,
        magnetic_field=config.magnetic_field_gauss,
        wind_speed=type_def.wind_speed_kms,
        mass_loss_rate=type_def.mass_loss_rate * (luminosity / max(type_def.luminosity_range[1], 1e-12)),
        schwarzschild_radius=schwarzschild_radius(mass),
        spectral_class=spectral_class(config.temperature),
        orbital_period=orbital_period,
    )
