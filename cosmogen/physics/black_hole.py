"""Closed-form compact-object physics.

Radii are in km. Spin ``a`` and charge ``q`` are dimensionless (fractions of
the mass in geometric units). Every function returns the well-defined limit
at zero mass or zero spin instead of raising.

Reported radii are the counter-rotating (retrograde) photon orbit and ISCO,
which keeps ``r_s <= photon_sphere <= isco`` for every spin in [0, 1]. The
prograde ISCO is reported separately and drives the disk efficiency.
"""

import math

from ..core.models import BlackHoleConfig, BlackHolePhysics, BlackHoleType
from .constants import (
    C,
    EDDINGTON_PER_SOLAR_MASS,
    EPSILON_0,
    ERG_PER_JOULE,
    G,
    HBAR,
    K_B,
    KM_PER_PC,
    M_SUN,
    SECONDS_PER_DAY,
    SECONDS_PER_YEAR,
    SIGMA_SB,
)
from .orbits import (
    chirp_mass,
    gravitational_wave_strain,
    kepler_period_days,
    peters_coalescence_years,
)


# =============================================================================
# Horizon geometry
# =============================================================================


def schwarzschild_radius(mass: float) -> float:
    """r_s = 2GM/c^2 in km for a mass in solar masses."""
    return 2 * G * mass * M_SUN / C**2 / 1000


def horizon_radii(mass: float, spin: float, charge: float = 0.0) -> tuple[float, float]:
    """Outer and inner Kerr-Newman horizons, clamped at the extremal limit."""
    r_g = schwarzschild_radius(mass) / 2
    root = math.sqrt(max(0.0, 1 - spin**2 - charge**2))
    return r_g * (1 + root), r_g * (1 - root)


def ergosphere_radius(mass: float, spin: float, polar_angle: float = math.pi / 2) -> float:
    """Outer ergosurface r = M + sqrt(M^2 - a^2 cos^2(theta)); equatorial by default.

    At spin zero the ergosurface coincides with the horizon at r_s exactly.
    """
    rs = schwarzschild_radius(mass)
    if spin == 0:
        return rs
    r_g = rs / 2
    return r_g * (1 + math.sqrt(max(0.0, 1 - (spin * math.cos(polar_angle)) ** 2)))


def photon_sphere_radius(mass: float, spin: float, prograde: bool = False) -> float:
    """Circular photon orbit r = 2M(1 + cos(2/3 arccos(-+a))); 1.5 r_s at spin zero."""
    rs = schwarzschild_radius(mass)
    if spin == 0:
        return 1.5 * rs
    a = -spin if prograde else spin
    return rs * (1 + math.cos(2 / 3 * math.acos(a)))


def isco_radius(mass: float, spin: float, prograde: bool = False) -> float:
    """Bardeen-Press-Teukolsky innermost stable circular orbit; 3 r_s at spin zero."""
    rs = schwarzschild_radius(mass)
    if spin == 0:
        return 3 * rs
    a = min(abs(spin), 1.0)
    z1 = 1 + (1 - a**2) ** (1 / 3) * ((1 + a) ** (1 / 3) + (1 - a) ** (1 / 3))
    z2 = math.sqrt(3 * a**2 + z1**2)
    root = math.sqrt(max(0.0, (3 - z1) * (3 + z1 + 2 * z2)))
    r_in_m = 3 + z2 - root if prograde else 3 + z2 + root
    return r_in_m * rs / 2


# =============================================================================
# Thermodynamics
# =============================================================================


def hawking_temperature(mass: float) -> float:
    """T = hbar c^3 / (8 pi G M k_B), Kelvin; infinite at zero mass."""
    if mass <= 0:
        return float("inf")
    return HBAR * C**3 / (8 * math.pi * G * mass * M_SUN * K_B)


def evaporation_time(mass: float) -> float:
    """t = 5120 pi G^2 M^3 / (hbar c^4), years."""
    if mass <= 0:
        return 0.0
    m = mass * M_SUN
    return 5120 * math.pi * G**2 * m**3 / (HBAR * C**4) / SECONDS_PER_YEAR


def bekenstein_hawking_entropy(mass: float, spin: float, charge: float = 0.0) -> float:
    """S/k_B = A c^3 / (4 G hbar) using the Kerr-Newman horizon area."""
    if mass <= 0:
        return 0.0
    r_plus, _ = horizon_radii(mass, spin, charge)
    r_plus_m = r_plus * 1000
    a_m = spin * schwarzschild_radius(mass) * 1000 / 2
    area = 4 * math.pi * (r_plus_m**2 + a_m**2)
    return area * C**3 / (4 * G * HBAR)


def surface_gravity(mass: float, spin: float, charge: float = 0.0) -> float:
    """kappa = c^2 (r+ - r-) / (2 (r+^2 + a^2)), m/s^2; zero when extremal."""
    if mass <= 0:
        return float("inf")
    r_plus, r_minus = horizon_radii(mass, spin, charge)
    a_m = spin * schwarzschild_radius(mass) * 1000 / 2
    r_plus_m = r_plus * 1000
    return C**2 * (r_plus_m - r_minus * 1000) / (2 * (r_plus_m**2 + a_m**2))


def electric_charge(mass: float, charge: float) -> float:
    """Charge in coulombs, Q = q M sqrt(4 pi eps0 G)."""
    return charge * mass * M_SUN * math.sqrt(4 * math.pi * EPSILON_0 * G)


# =============================================================================
# Accretion and jets
# =============================================================================


def radiative_efficiency(spin: float) -> float:
    """Novikov-Thorne efficiency 1 - sqrt(1 - 2/(3 r_isco)), r_isco prograde in units of M."""
    isco_in_m = isco_radius(1.0, spin, prograde=True) * 2 / schwarzschild_radius(1.0)
    return 1 - math.sqrt(max(0.0, 1 - 2 / (3 * isco_in_m)))


def accretion_luminosity(accretion_rate: float, efficiency: float) -> float:
    """L = eta Mdot c^2, erg/s, for Mdot in solar masses per year."""
    mdot = accretion_rate * M_SUN / SECONDS_PER_YEAR
    return efficiency * mdot * C**2 * ERG_PER_JOULE


def disk_temperature(mass: float, accretion_rate: float, inner_radius_km: float) -> float:
    """Thin-disk temperature scale (3 G M Mdot / (8 pi sigma r^3))^(1/4) at the inner edge."""
    if mass <= 0 or accretion_rate <= 0 or inner_radius_km <= 0:
        return 0.0
    mdot = accretion_rate * M_SUN / SECONDS_PER_YEAR
    r = inner_radius_km * 1000
    return (3 * G * mass * M_SUN * mdot / (8 * math.pi * SIGMA_SB * r**3)) ** 0.25


def eddington_luminosity(mass: float) -> float:
    return EDDINGTON_PER_SOLAR_MASS * max(mass, 0.0)


def jet_power(mass: float, spin: float, magnetic_field: float, charge: float = 0.0) -> float:
    """Blandford-Znajek scaling a^2 B^2 r_s^2 c / (8 pi r_H), erg/s."""
    r_plus, _ = horizon_radii(mass, spin, charge)
    if r_plus <= 0 or spin == 0:
        return 0.0
    rs_m = schwarzschild_radius(mass) * 1000
    return spin**2 * magnetic_field**2 * rs_m**2 * C / (8 * math.pi * r_plus * 1000) * ERG_PER_JOULE


def horizon_magnetic_field(config: BlackHoleConfig, type_def: BlackHoleType) -> float:
    """Horizon field scaled from the type baseline by the sampled ambient field."""
    if type_def.ambient_magnetic_field > 0:
        return type_def.magnetic_field_strength * (
            config.ambient_magnetic_field / type_def.ambient_magnetic_field
        )
    return type_def.magnetic_field_strength


# =============================================================================
# Profile
# =============================================================================


def derive_physics(config: BlackHoleConfig, type_def: BlackHoleType) -> BlackHolePhysics:
    """Compute the full physics profile. No randomness, no exceptions at the limits."""
    mass, spin, charge = config.mass, config.spin, config.charge

    rs = schwarzschild_radius(mass)
    r_plus, r_minus = horizon_radii(mass, spin, charge)
    ergosphere = ergosphere_radius(mass, spin)
    isco_pro = isco_radius(mass, spin, prograde=True)

    efficiency = radiative_efficiency(spin)
    disk_lum = accretion_luminosity(config.accretion_rate, efficiency)
    edd_lum = eddington_luminosity(mass)
    b_field = horizon_magnetic_field(config, type_def)

    entropy = bekenstein_hawking_entropy(mass, spin, charge)

    binary: dict[str, float] = {}
    if config.is_binary and config.orbital_separation_km > 0:
        total = mass + config.companion_mass
        period = kepler_period_days(total, config.orbital_separation_km)
        mc = chirp_mass(mass, config.companion_mass)
        frequency = 2 / (period * SECONDS_PER_DAY) if 0 < period < float("inf") else 0.0
        binary = {
            "orbital_period": period,
            "orbital_separation": config.orbital_separation_km,
            "eccentricity": config.orbital_eccentricity,
            "chirp_mass": mc,
            "gravitational_wave_frequency": frequency,
            "strain_amplitude": gravitational_wave_strain(
                mc, frequency, config.distance_pc * KM_PER_PC * 1000
            ),
            "coalescence_time": peters_coalescence_years(
                mass,
                config.companion_mass,
                config.orbital_separation_km,
                config.orbital_eccentricity,
            ),
        }

    return BlackHolePhysics(
        mass_kg=mass * M_SUN,
        schwarzschild_radius=rs,
        horizon_radius=r_plus,
        inner_horizon_radius=r_minus,
        ergosphere_radius=ergosphere,
        ergoregion_depth=max(0.0, ergosphere - r_plus),
        photon_sphere=photon_sphere_radius(mass, spin),
        isco=isco_radius(mass, spin),
        isco_prograde=isco_pro,
        magnetosphere_size=10 * rs * (1 + spin),
        hawking_temperature=hawking_temperature(mass),
        evaporation_time=evaporation_time(mass),
        entropy=entropy,
        entropy_bits=entropy / math.log(2),
        surface_gravity=surface_gravity(mass, spin, charge),
        electric_charge=electric_charge(mass, charge),
        magnetic_field_strength=b_field,
        accretion_rate=config.accretion_rate,
        radiative_efficiency=efficiency,
        disk_luminosity=disk_lum,
        disk_temperature=disk_temperature(mass, config.accretion_rate, isco_pro),
        eddington_luminosity=edd_lum,
        eddington_ratio=disk_lum / edd_lum if edd_lum > 0 else 0.0,
        jet_power=jet_power(mass, spin, b_field, charge),
        quantum_corrections=type_def.quantum_corrections,
        **binary,
    )
