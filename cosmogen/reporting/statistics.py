"""Statistics reporter.

Rolls an instance config and its derived profiles into a display-ready
report: values converted to display units, a mass class, an evolution stage,
a quality label and the generation time. A single deterministic pass, no
randomness.
"""

import math

from ..config import GenerationConfig
from ..core.models import (
    QUALITY_LEVELS,
    BlackHoleConfig,
    BlackHoleObservables,
    BlackHolePhysics,
    BlackHoleType,
    GalaxyConfig,
    GalaxyObservables,
    GalaxyPhysics,
    GalaxyType,
    InstanceConfigBase,
    ObservablesProfile,
    PhysicsProfile,
    StarConfig,
    StarObservables,
    StarPhysics,
    StarType,
    StatisticsReport,
    TypeDefinitionBase,
)
from ..core.models.registry import PRIMORDIAL_AGE_YEARS
from ..physics.constants import C, L_SUN_ERG, L_SUN_W
from ..physics.observables import absolute_magnitude, distance_modulus, flux_at
from ..physics.star import evolution_stage as stellar_evolution_stage

# Effects per unit of effect density, by domain
EFFECT_SCALE = {"black_hole": 10, "galaxy": 20, "star": 10}
MAX_PARTICLES = 1_000_000

# Thresholds on the combined quality score, lowest label first
QUALITY_THRESHOLDS: tuple[tuple[int, str], ...] = ((6, "low"), (10, "medium"), (14, "high"))

# Galaxy structure indices by family: (concentration, smoothness, gini)
STRUCTURE_INDICES: dict[str, tuple[float, float, float]] = {
    "elliptical": (4.5, 0.9, 0.7),
    "spiral": (2.8, 0.6, 0.5),
    "barred_spiral": (2.8, 0.6, 0.5),
    "lenticular": (3.8, 0.8, 0.6),
    "irregular": (1.5, 0.2, 0.3),
    "peculiar": (2.2, 0.3, 0.45),
    "active": (4.0, 0.7, 0.65),
    "dwarf": (2.0, 0.5, 0.4),
}
DEFAULT_STRUCTURE_INDICES = (3.0, 0.5, 0.5)

# Black hole evolution thresholds
ACTIVE_ACCRETION_RATE = 1e-6
INSPIRAL_SEPARATION_KM = 10_000.0


# =============================================================================
# Labels
# =============================================================================


def classify_black_hole_mass(mass: float) -> str:
    if mass < 0:
        return "exotic_object"
    if mass < 1e-10:
        return "quantum_black_hole"
    if mass < 1e-5:
        return "primordial_micro"
    if mass < 1:
        return "primordial_mini"
    if mass < 3:
        return "mass_gap"
    if mass < 100:
        return "stellar_mass"
    if mass < 1e5:
        return "intermediate_mass"
    if mass < 1e9:
        return "supermassive"
    return "ultramassive"


def classify_galaxy_mass(stellar_mass: float) -> str:
    if stellar_mass < 1e8:
        return "ultra_faint_dwarf"
    if stellar_mass < 1e9:
        return "dwarf"
    if stellar_mass < 1e10:
        return "small"
    if stellar_mass < 1e11:
        return "normal"
    if stellar_mass < 1e12:
        return "massive"
    return "giant"


def classify_star_mass(mass: float) -> str:
    if mass < 0.08:
        return "substellar"
    if mass < 0.5:
        return "low_mass"
    if mass < 2.0:
        return "solar_like"
    if mass < 8.0:
        return "intermediate_mass"
    return "massive"


def quality_label(effects: int, particles: int, geometry_complexity: int, cap: str) -> str:
    """Quality from effect and particle counts, capped by the configured level."""
    score = effects + geometry_complexity
    if particles > 100_000:
        score += 2
    elif particles > 10_000:
        score += 1

    label = QUALITY_LEVELS[-1]
    for threshold, name in QUALITY_THRESHOLDS:
        if score < threshold:
            label = name
            break
    return QUALITY_LEVELS[min(QUALITY_LEVELS.index(label), QUALITY_LEVELS.index(cap))]


def black_hole_stage(config: BlackHoleConfig, type_def: BlackHoleType) -> str:
    if config.age_years < type_def.formation_timescale_years * 2:
        return "formation"
    if config.accretion_rate > ACTIVE_ACCRETION_RATE:
        return "active_accretion"
    if config.is_binary and 0 < config.orbital_separation_km < INSPIRAL_SEPARATION_KM:
        return "binary_inspiral"
    return "quiescent"


def galaxy_stage(config: GalaxyConfig, type_def: GalaxyType, observables: GalaxyObservables) -> str:
    if config.evolution_stage:
        return config.evolution_stage
    if config.age_gyr * 1e9 < type_def.formation_timescale_years * 2:
        return "formation"
    if config.is_binary:
        return "interacting"
    if observables.quenched:
        return "quenched"
    if config.has_active_nucleus:
        return "active"
    return "mature"


# =============================================================================
# Reports
# =============================================================================


def build_report(
    config: InstanceConfigBase,
    type_def: TypeDefinitionBase,
    physics: PhysicsProfile,
    observables: ObservablesProfile,
    generation: GenerationConfig | None = None,
    generation_time_ms: float = 0.0,
) -> StatisticsReport:
    """Assemble the statistics report for one generated object."""
    generation = generation or GenerationConfig()
    if isinstance(config, BlackHoleConfig):
        fields = _black_hole_fields(config, type_def, physics, observables)
    elif isinstance(config, GalaxyConfig):
        fields = _galaxy_fields(config, type_def, physics, observables)
    elif isinstance(config, StarConfig):
        fields = _star_fields(config, type_def, physics, observables)
    else:
        raise TypeError(f"Unsupported config: {type(config).__name__}")

    effects = math.floor(type_def.effect_density * EFFECT_SCALE[type_def.domain])
    particles = min(fields.pop("particles"), MAX_PARTICLES)

    return StatisticsReport(
        domain=type_def.domain,
        key=type_def.key,
        name=type_def.name,
        effect_count=effects,
        particle_count=particles,
        quality_label=quality_label(effects, particles, type_def.geometry_complexity, generation.quality),
        signatures=observables.signatures,
        generation_time_ms=max(0.0, generation_time_ms),
        **fields,
    )


def _black_hole_fields(
    config: BlackHoleConfig,
    type_def: BlackHoleType,
    physics: BlackHolePhysics,
    observables: BlackHoleObservables,
) -> dict:
    rs = physics.schwarzschild_radius
    distance = config.distance_pc

    frame_dragging = config.spin * C / (2 * math.pi * rs * 1000) if rs > 0 else 0.0
    tidal_radius = 2.44 * rs * max(config.mass, 0.0) ** (1 / 3)
    disk_solar = physics.disk_luminosity / L_SUN_ERG
    apparent = absolute_magnitude(disk_solar) + distance_modulus(distance)

    if "primordial_formation" in type_def.formation_mechanisms:
        stable = physics.evaporation_time > PRIMORDIAL_AGE_YEARS
    else:
        stable = type_def.stable

    particles = 0
    if type_def.observables.get("hawking_radiation"):
        particles = math.floor(max(config.mass, 0.0) * 1e15)

    metrics = {
        "mass_solar": config.mass,
        "mass_kg": physics.mass_kg,
        "schwarzschild_radius_km": rs,
        "horizon_radius_km": physics.horizon_radius,
        "horizon_radius_rs": physics.horizon_radius / rs if rs > 0 else 0.0,
        "ergosphere_radius_km": physics.ergosphere_radius,
        "photon_sphere_km": physics.photon_sphere,
        "isco_km": physics.isco,
        "isco_prograde_km": physics.isco_prograde,
        "tidal_radius_km": tidal_radius,
        "hawking_temperature_k": physics.hawking_temperature,
        "evaporation_time_years": physics.evaporation_time,
        "entropy_bits": physics.entropy_bits,
        "surface_gravity_m_s2": physics.surface_gravity,
        "spin": config.spin,
        "angular_momentum": config.spin * config.mass * rs,
        "frame_dragging_frequency_hz": frame_dragging,
        "electric_charge_c": physics.electric_charge,
        "magnetic_field_t": physics.magnetic_field_strength,
        "accretion_rate_solar_per_year": physics.accretion_rate,
        "disk_luminosity_erg_s": physics.disk_luminosity,
        "disk_temperature_k": physics.disk_temperature,
        "eddington_luminosity_erg_s": physics.eddington_luminosity,
        "eddington_ratio": physics.eddington_ratio,
        "jet_power_erg_s": physics.jet_power,
        "jet_length_pc": type_def.jet_length_pc,
        "gravitational_wave_strain": physics.strain_amplitude,
        "gravitational_wave_frequency_hz": physics.gravitational_wave_frequency,
        "coalescence_time_years": physics.coalescence_time,
        "chirp_mass_solar": physics.chirp_mass,
        "orbital_period_days": physics.orbital_period,
        "gravitational_influence_pc": type_def.gravitational_influence_pc,
        "accretion_radius_pc": type_def.accretion_radius_pc,
        "distance_pc": distance,
        "apparent_magnitude": apparent,
        "xray_flux_erg_s_cm2": flux_at(observables.xray_luminosity, distance),
        "radio_flux_erg_s_cm2": flux_at(observables.radio_luminosity, distance),
        "gamma_ray_flux_erg_s_cm2": flux_at(observables.gamma_ray_luminosity, distance),
        "age_years": config.age_years,
        "formation_timescale_years": type_def.formation_timescale_years,
    }
    return {
        "mass_class": classify_black_hole_mass(config.mass),
        "evolution_stage": black_hole_stage(config, type_def),
        "stable": stable,
        "metrics": metrics,
        "particles": particles,
    }


def _galaxy_fields(
    config: GalaxyConfig,
    type_def: GalaxyType,
    physics: GalaxyPhysics,
    observables: GalaxyObservables,
) -> dict:
    concentration, smoothness, gini = STRUCTURE_INDICES.get(type_def.family, DEFAULT_STRUCTURE_INDICES)

    metrics = {
        "stellar_mass_solar": physics.stellar_mass,
        "total_mass_solar": physics.total_mass,
        "dark_matter_fraction": type_def.dark_matter_fraction,
        "gas_mass_solar": physics.gas_mass,
        "effective_radius_kpc": config.effective_radius_kpc,
        "size_relation_radius_kpc": physics.size_relation_radius,
        "sersic_index": physics.sersic_index,
        "disk_scale_length_kpc": physics.disk_scale_length,
        "rotation_velocity_km_s": physics.rotation_velocity,
        "velocity_dispersion_km_s": physics.velocity_dispersion,
        "dynamical_mass_solar": physics.dynamical_mass,
        "star_formation_rate_solar_per_year": config.star_formation_rate,
        "specific_star_formation_rate_per_gyr": physics.specific_star_formation_rate * 1e9,
        "gas_depletion_time_gyr": physics.gas_depletion_time,
        "mass_to_light_ratio": physics.mass_to_light_ratio,
        "luminosity_solar": physics.stellar_luminosity,
        "color_index": physics.color_index,
        "metallicity": config.metallicity,
        "age_gyr": config.age_gyr,
        "redshift": config.redshift,
        "distance_mpc": physics.distance_mpc,
        "lookback_time_gyr": physics.lookback_time,
        "concentration_index": concentration,
        "asymmetry_index": config.asymmetry_index,
        "smoothness_index": smoothness,
        "gini_coefficient": gini,
        "absolute_magnitude": observables.absolute_magnitude,
        "apparent_magnitude": observables.apparent_magnitude,
        "surface_brightness_mag_arcsec2": observables.surface_brightness,
        "angular_size_arcmin": observables.angular_size,
        "uv_luminosity_erg_s_hz": physics.uv_luminosity,
        "infrared_luminosity_erg_s": physics.infrared_luminosity,
        "xray_luminosity_erg_s": physics.xray_luminosity,
        "radio_luminosity_erg_s": physics.radio_luminosity,
        "central_black_hole_mass_solar": physics.central_black_hole_mass,
        "agn_luminosity_erg_s": physics.agn_luminosity,
        "eddington_ratio": config.eddington_ratio,
    }
    return {
        "mass_class": classify_galaxy_mass(physics.stellar_mass),
        "evolution_stage": galaxy_stage(config, type_def, observables),
        "stable": type_def.stable,
        "metrics": metrics,
        "particles": math.floor(max(physics.stellar_mass, 0.0) / 1e8 * 1000),
    }


def _star_fields(
    config: StarConfig,
    type_def: StarType,
    physics: StarPhysics,
    observables: StarObservables,
) -> dict:
    lifetime = physics.main_sequence_lifetime
    if type_def.compact_remnant:
        stage = "remnant"
    else:
        stage = stellar_evolution_stage(config.age_myr, lifetime)

    radius = config.radius
    volume = 4 / 3 * math.pi * radius**3

    metrics = {
        "mass_solar": config.mass,
        "mass_kg": physics.mass_kg,
        "radius_solar": radius,
        "radius_km": physics.radius_km,
        "luminosity_solar": config.luminosity,
        "stefan_boltzmann_luminosity_solar": physics.stefan_boltzmann_luminosity,
        "temperature_k": config.temperature,
        "surface_area_solar": 4 * math.pi * radius**2,
        "volume_solar": volume,
        "density_solar": config.mass / volume if volume > 0 else float("inf"),
        "energy_output_w": config.luminosity * L_SUN_W,
        "surface_gravity_log_g": physics.surface_gravity_log_g,
        "escape_velocity_km_s": physics.escape_velocity,
        "mean_density_g_cm3": physics.mean_density,
        "age_myr": config.age_myr,
        "lifetime_myr": lifetime,
        "time_to_next_stage_myr": max(0.0, lifetime - config.age_myr),
        "habitable_zone_inner_au": physics.habitable_zone_inner,
        "habitable_zone_outer_au": physics.habitable_zone_outer,
        "frost_line_au": physics.frost_line,
        "tidal_locking_radius_au": max(config.mass, 0.0) ** (1 / 3) * 0.1,
        "rotation_period_days": physics.rotation_period,
        "magnetic_field_gauss": physics.magnetic_field,
        "wind_speed_km_s": physics.wind_speed,
        "mass_loss_rate_solar_per_year": physics.mass_loss_rate,
        "metallicity": config.metallicity,
        "absolute_magnitude": observables.absolute_magnitude,
        "apparent_magnitude": observables.apparent_magnitude,
        "bolometric_flux_w_m2": observables.bolometric_flux,
        "color_index": observables.color_index,
        "distance_pc": config.distance_pc,
        "orbital_period_days": physics.orbital_period,
    }
    return {
        "mass_class": classify_star_mass(config.mass),
        "evolution_stage": stage,
        "stable": type_def.stable and stage != "supernova",
        "metrics": metrics,
        "particles": math.floor(type_def.effect_density * 1000),
    }
