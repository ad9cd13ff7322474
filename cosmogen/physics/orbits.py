"""Two-body relations shared by every domain."""

import math

from .constants import C, G, M_SUN, SECONDS_PER_DAY, SECONDS_PER_YEAR


def kepler_period_days(total_mass: float, separation_km: float) -> float:
    """Orbital period from Kepler's third law.

    Args:
        total_mass: Combined mass in solar masses
        separation_km: Semi-major axis in km

    Returns:
        Period in days; infinite when the combined mass is zero.
    """
    if total_mass <= 0:
        return float("inf")
    a = separation_km * 1000
    return 2 * math.pi * math.sqrt(a**3 / (G * total_mass * M_SUN)) / SECONDS_PER_DAY


def interaction_strength(mass1: float, mass2: float, separation: float) -> float:
    """Dimensionless tidal interaction measure, M1*M2/separation^2."""
    if separation <= 0:
        return float("inf")
    return mass1 * mass2 / separation**2


def center_of_mass_positions(
    mass1: float, mass2: float, separation_km: float
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """Place two bodies on the x axis around their common center of mass."""
    total = mass1 + mass2
    if total <= 0:
        half = separation_km / 2
        return (-half, 0.0, 0.0), (half, 0.0, 0.0)
    r1 = separation_km * mass2 / total
    r2 = separation_km * mass1 / total
    return (-r1, 0.0, 0.0), (r2, 0.0, 0.0)


def chirp_mass(mass1: float, mass2: float) -> float:
    total = mass1 + mass2
    if total <= 0:
        return 0.0
    return (mass1 * mass2) ** 0.6 / total**0.2


def peters_coalescence_years(
    mass1: float, mass2: float, separation_km: float, eccentricity: float = 0.0
) -> float:
    """Gravitational-wave inspiral time (Peters 1964), with the (1-e^2)^3.5 correction."""
    m1 = mass1 * M_SUN
    m2 = mass2 * M_SUN
    total = m1 + m2
    if m1 <= 0 or m2 <= 0:
        return float("inf")
    a = separation_km * 1000
    t_circular = 5 * C**5 * a**4 / (256 * G**3 * m1 * m2 * total)
    return t_circular * (1 - eccentricity**2) ** 3.5 / SECONDS_PER_YEAR


def gravitational_wave_strain(
    chirp_mass_solar: float, frequency_hz: float, distance_m: float
) -> float:
    """Quadrupole strain amplitude of a circular binary."""
    if chirp_mass_solar <= 0 or frequency_hz <= 0:
        return 0.0
    if distance_m <= 0:
        return float("inf")
    mc = chirp_mass_solar * M_SUN
    return 4 * (G * mc) ** (5 / 3) * (math.pi * frequency_hz) ** (2 / 3) / (C**4 * distance_m)
