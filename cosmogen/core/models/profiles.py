"""Derived physics and observables profiles.

Pure outputs of the derivers in ``cosmogen.physics``: frozen, recomputed rather
than edited when their inputs change. Units are noted per field.
"""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Profile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# =============================================================================
# Physics profiles
# =============================================================================


class BlackHolePhysics(_Profile):
    domain: Literal["black_hole"] = "black_hole"

    mass_kg: float
    # Radii, km
    schwarzschild_radius: float
    horizon_radius: float
    inner_horizon_radius: float
    ergosphere_radius: float
    ergoregion_depth: float
    photon_sphere: float
    isco: float = Field(description="Counter-rotating innermost stable circular orbit")
    isco_prograde: float
    magnetosphere_size: float
    # Thermodynamics
    hawking_temperature: float = Field(description="Kelvin")
    evaporation_time: float = Field(description="Years")
    entropy: float = Field(description="Units of k_B")
    entropy_bits: float
    surface_gravity: float = Field(description="m/s^2")
    # Electromagnetic
    electric_charge: float = Field(description="Coulombs")
    magnetic_field_strength: float = Field(description="Tesla at the horizon")
    # Accretion
    accretion_rate: float = Field(description="Solar masses per year")
    radiative_efficiency: float
    disk_luminosity: float = Field(description="erg/s")
    disk_temperature: float = Field(description="Kelvin")
    eddington_luminosity: float = Field(description="erg/s")
    eddington_ratio: float
    jet_power: float = Field(description="erg/s")
    # Binary, zero for isolated holes
    orbital_period: float = Field(default=0.0, description="Days")
    orbital_separation: float = Field(default=0.0, description="km")
    eccentricity: float = 0.0
    chirp_mass: float = Field(default=0.0, description="Solar masses")
    gravitational_wave_frequency: float = Field(default=0.0, description="Hz")
    strain_amplitude: float = 0.0
    coalescence_time: float = Field(default=0.0, description="Years")
    quantum_corrections: float = 0.0


class GalaxyPhysics(_Profile):
    domain: Literal["galaxy"] = "galaxy"

    stellar_mass: float = Field(description="Solar masses")
    total_mass: float
    dark_matter_mass: float
    gas_mass: float
    size_relation_radius: float = Field(description="kpc, from the mass-size relation")
    sersic_index: float
    disk_scale_length: float = Field(description="kpc")
    rotation_velocity: float = Field(description="km/s")
    velocity_dispersion: float = Field(description="km/s")
    dynamical_mass: float = Field(description="Solar masses")
    specific_star_formation_rate: float = Field(description="1/yr")
    gas_depletion_time: float = Field(description="Gyr")
    mass_to_light_ratio: float
    stellar_luminosity: float = Field(description="Solar luminosities")
    uv_luminosity: float = Field(description="erg/s/Hz")
    infrared_luminosity: float = Field(description="erg/s")
    halpha_luminosity: float = Field(description="erg/s")
    central_black_hole_mass: float = Field(description="Solar masses")
    agn_luminosity: float = Field(description="erg/s")
    xray_luminosity: float = Field(description="erg/s")
    radio_luminosity: float = Field(description="erg/s")
    color_index: float
    lookback_time: float = Field(description="Gyr")
    distance_mpc: float
    orbital_period: float = Field(default=0.0, description="Days")


class StarPhysics(_Profile):
    domain: Literal["star"] = "star"

    mass_kg: float
    radius_km: float
    stefan_boltzmann_luminosity: float = Field(description="Solar luminosities")
    surface_gravity_log_g: float = Field(description="log10 cm/s^2")
    escape_velocity: float = Field(description="km/s")
    mean_density: float = Field(description="g/cm^3")
    main_sequence_lifetime: float = Field(description="Myr")
    habitable_zone_inner: float = Field(description="AU")
    habitable_zone_outer: float = Field(description="AU")
    frost_line: float = Field(description="AU")
    rotation_period: float = Field(description="Days")
    magnetic_field: float = Field(description="Gauss")
    wind_speed: float = Field(description="km/s")
    mass_loss_rate: float = Field(description="Solar masses per year")
    schwarzschild_radius: float = Field(description="km")
    spectral_class: str
    orbital_period: float = Field(default=0.0, description="Days")


PhysicsProfile = Union[BlackHolePhysics, GalaxyPhysics, StarPhysics]


# =============================================================================
# Observables profiles
# =============================================================================


class BlackHoleObservables(_Profile):
    domain: Literal["black_hole"] = "black_hole"

    flags: dict[str, bool] = Field(default_factory=dict)
    xray_luminosity: float = Field(description="erg/s")
    radio_luminosity: float
    gamma_ray_luminosity: float
    gravitational_wave_strain: float
    merger_signature: bool
    inspiral_detectable: bool
    relativistic_jets: bool
    thermal_disk_spectrum: bool
    hawking_radiation_detectable: bool
    signatures: tuple[str, ...] = ()


class GalaxyObservables(_Profile):
    domain: Literal["galaxy"] = "galaxy"

    flags: dict[str, bool] = Field(default_factory=dict)
    absolute_magnitude: float
    apparent_magnitude: float
    surface_brightness: float = Field(description="mag/arcsec^2")
    angular_size: float = Field(description="arcmin")
    xray_flux: float = Field(description="erg/s/cm^2")
    radio_flux: float
    active_nucleus: bool
    relativistic_jets: bool
    star_forming: bool
    quenched: bool
    survey_detectable: bool
    signatures: tuple[str, ...] = ()


class StarObservables(_Profile):
    domain: Literal["star"] = "star"

    flags: dict[str, bool] = Field(default_factory=dict)
    absolute_magnitude: float
    apparent_magnitude: float
    bolometric_flux: float = Field(description="W/m^2")
    color_index: float
    variable: bool
    naked_eye_visible: bool
    has_habitable_zone: bool
    signatures: tuple[str, ...] = ()


ObservablesProfile = Union[BlackHoleObservables, GalaxyObservables, StarObservables]
