"""Observables derivation.

Combines the baseline observable flags of a type definition with scalars
computed from the physics profile: luminosities per band, fluxes, magnitudes
and detectability booleans. Like the physics derivers, this is a pure function
of its inputs.
"""

import math

from ..config import GenerationConfig
from ..core.models import (
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
    TypeDefinitionBase,
)
from .black_hole import schwarzschild_radius
from .constants import CM_PER_PC, L_SUN_ERG, luminosity_distance_flux
from .galaxy import angular_size_arcmin

# Solar absolute bolometric magnitude
SUN_ABSOLUTE_MAGNITUDE = 4.74
# Distances are floored here so magnitudes and fluxes stay finite at the origin
MIN_DISTANCE_PC = 1e-3
NAKED_EYE_LIMIT = 6.0

# Black hole band fractions
XRAY_DISK_FRACTION = 0.1
RADIO_JET_FRACTION = 0.01
GAMMA_JET_FRACTION = 0.001
# Hawking emission hotter than this is counted as detectable (gamma-ray regime)
HAWKING_DETECTABLE_TEMPERATURE = 1e6

# Signature thresholds
GW_SIGNATURE_STRAIN = 1e-25
XRAY_SIGNATURE_LUMINOSITY = 1e35
HAWKING_SIGNATURE_TEMPERATURE = 1e-10

# Specific star formation rate separating star-forming from quenched galaxies, 1/yr
QUENCHED_SSFR = 1e-11
RADIO_LOUD_LUMINOSITY = 1e40


def absolute_magnitude(luminosity_solar: float) -> float:
    """Bolometric absolute magnitude; infinitely faint at zero luminosity."""
    if luminosity_solar <= 0:
        return float("inf")
    return SUN_ABSOLUTE_MAGNITUDE - 2.5 * math.log10(luminosity_solar)


def distance_modulus(distance_pc: float) -> float:
    return 5 * math.log10(max(distance_pc, MIN_DISTANCE_PC) / 10)


def flux_at(luminosity: float, distance_pc: float) -> float:
    """Flux in luminosity units per cm^2 at a distance in parsecs."""
    return luminosity_distance_flux(luminosity, max(distance_pc, MIN_DISTANCE_PC) * CM_PER_PC)


def derive_observables(
    config: InstanceConfigBase,
    physics: PhysicsProfile,
    type_def: TypeDefinitionBase,
    generation: GenerationConfig | None = None,
) -> ObservablesProfile:
    """Dispatch to the domain's observables deriver."""
    generation = generation or GenerationConfig()
    if isinstance(config, BlackHoleConfig):
        return black_hole_observables(config, physics, type_def, generation)
    if isinstance(config, GalaxyConfig):
        return galaxy_observables(config, physics, type_def, generation)
    if isinstance(config, StarConfig):
        return star_observables(config, physics, type_def, generation)
    raise TypeError(f"Unsupported config: {type(config).__name__}")


# =============================================================================
# Black holes
# =============================================================================


def black_hole_observables(
    config: BlackHoleConfig,
    physics: BlackHolePhysics,
    type_def: BlackHoleType,
    generation: GenerationConfig,
) -> BlackHoleObservables:
    flags = dict(type_def.observables)

    xray = physics.disk_luminosity * XRAY_DISK_FRACTION
    radio = physics.jet_power * RADIO_JET_FRACTION
    gamma = physics.jet_power * GAMMA_JET_FRACTION

    merger_signature = False
    if config.is_binary and config.orbital_separation_km > 0:
        threshold = generation.close_binary_threshold_rs * schwarzschild_radius(config.total_mass)
        merger_signature = config.orbital_separation_km < threshold

    jets = flags.get("relativistic_jets", False) and physics.jet_power > 0
    thermal = flags.get("thermal_disk_spectrum", False) and physics.accretion_rate > 0
    hawking = flags.get("hawking_radiation", False) or (
        physics.hawking_temperature > HAWKING_DETECTABLE_TEMPERATURE
    )

    signatures = []
    if physics.strain_amplitude > GW_SIGNATURE_STRAIN:
        signatures.append("gravitational waves")
    if xray > XRAY_SIGNATURE_LUMINOSITY:
        signatures.append("X-ray emission")
    if jets:
        signatures.append("relativistic jets")
    if flags.get("iron_k_alpha_line"):
        signatures.append("iron K-alpha line")
    if flags.get("frame_dragging") and config.spin > 0:
        signatures.append("frame dragging")
    if config.visual_features.get("shadow_image"):
        signatures.append("event horizon shadow")
    if physics.hawking_temperature > HAWKING_SIGNATURE_TEMPERATURE:
        signatures.append("Hawking radiation")

    return BlackHoleObservables(
        flags=flags,
        xray_luminosity=xray,
        radio_luminosity=radio,
        gamma_ray_luminosity=gamma,
        gravitational_wave_strain=physics.strain_amplitude,
        merger_signature=merger_signature,
        inspiral_detectable=physics.strain_amplitude > generation.strain_sensitivity_floor,
        relativistic_jets=jets,
        thermal_disk_spectrum=thermal,
        hawking_radiation_detectable=hawking,
        signatures=tuple(signatures),
    )


# =============================================================================
# Galaxies
# =============================================================================


def galaxy_observables(
    config: GalaxyConfig,
    physics: GalaxyPhysics,
    type_def: GalaxyType,
    generation: GenerationConfig,
) -> GalaxyObservables:
    flags = dict(type_def.observables)
    distance_pc = physics.distance_mpc * 1e6

    absolute = absolute_magnitude(physics.stellar_luminosity)
    apparent = absolute + distance_modulus(distance_pc)

    radius = config.effective_radius_kpc
    if physics.stellar_luminosity > 0 and radius > 0:
        surface_brightness = -2.5 * math.log10(physics.stellar_luminosity / (math.pi * radius**2)) + 26.4
    else:
        surface_brightness = float("inf")

    star_forming = physics.specific_star_formation_rate > QUENCHED_SSFR
    jets = bool(flags.get("radio_lobes")) or (
        config.has_active_nucleus and physics.radio_luminosity > RADIO_LOUD_LUMINOSITY
    )
    survey_detectable = apparent <= generation.survey_magnitude_limit

    signatures = []
    if config.has_active_nucleus:
        signatures.append("active galactic nucleus")
    if jets:
        signatures.append("radio jets")
    if star_forming:
        signatures.append("star formation")
    else:
        signatures.append("quenched stellar population")
    if flags.get("tidal_tails") or config.is_binary:
        signatures.append("tidal interaction")
    if flags.get("spiral_structure"):
        signatures.append("spiral structure")

    return GalaxyObservables(
        flags=flags,
        absolute_magnitude=absolute,
        apparent_magnitude=apparent,
        surface_brightness=surface_brightness,
        angular_size=angular_size_arcmin(radius, max(physics.distance_mpc, MIN_DISTANCE_PC / 1e6)),
        xray_flux=flux_at(physics.xray_luminosity, distance_pc),
        radio_flux=flux_at(physics.radio_luminosity, distance_pc),
        active_nucleus=config.has_active_nucleus,
        relativistic_jets=jets,
        star_forming=star_forming,
        quenched=not star_forming,
        survey_detectable=survey_detectable,
        signatures=tuple(signatures),
    )


# =============================================================================
# Stars
# =============================================================================


def star_observables(
    config: StarConfig,
    physics: StarPhysics,
    type_def: StarType,
    generation: GenerationConfig,
) -> StarObservables:
    flags = dict(type_def.observables)

    absolute = absolute_magnitude(config.luminosity)
    apparent = absolute + distance_modulus(config.distance_pc)
    # W/m^2: flux_at works in cm, so convert through erg
    bolometric = flux_at(config.luminosity * L_SUN_ERG, config.distance_pc) * 1e-3

    has_hz = not type_def.compact_remnant and physics.habitable_zone_outer > 0
    variable = type_def.variable or bool(flags.get("pulsations"))

    signatures = []
    if variable:
        signatures.append("photometric variability")
    if flags.get("infrared_excess"):
        signatures.append("infrared excess")
    if flags.get("x_ray_corona"):
        signatures.append("X-ray corona")
    if type_def.compact_remnant:
        signatures.append("compact remnant")
    if has_hz:
        signatures.append("habitable zone")

    return StarObservables(
        flags=flags,
        absolute_magnitude=absolute,
        apparent_magnitude=apparent,
        bolometric_flux=bolometric,
        color_index=type_def.color_index,
        variable=variable,
        naked_eye_visible=apparent <= NAKED_EYE_LIMIT,
        has_habitable_zone=has_hz,
        signatures=tuple(signatures),
    )
