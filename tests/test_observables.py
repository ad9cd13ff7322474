"""Tests for two-body relations and the observables deriver."""

import math

import pytest

from cosmogen.config import GenerationConfig
from cosmogen.generation import build, derive_result
from cosmogen.physics.black_hole import schwarzschild_radius
from cosmogen.physics.constants import KM_PER_AU
from cosmogen.physics.observables import absolute_magnitude, distance_modulus, flux_at
from cosmogen.physics.orbits import (
    center_of_mass_positions,
    chirp_mass,
    gravitational_wave_strain,
    interaction_strength,
    kepler_period_days,
    peters_coalescence_years,
)


class TestOrbits:
    def test_earth_year(self):
        assert kepler_period_days(1.0, KM_PER_AU) == pytest.approx(365.25, rel=1e-2)

    def test_massless_period_is_infinite(self):
        assert math.isinf(kepler_period_days(0.0, KM_PER_AU))

    def test_interaction_strength(self):
        assert interaction_strength(2.0, 3.0, 2.0) == pytest.approx(1.5)
        assert math.isinf(interaction_strength(1.0, 1.0, 0.0))

    def test_center_of_mass(self):
        p1, p2 = center_of_mass_positions(3.0, 1.0, 8.0)
        assert p1 == (-2.0, 0.0, 0.0)
        assert p2 == (6.0, 0.0, 0.0)
        assert 3.0 * p1[0] + 1.0 * p2[0] == pytest.approx(0.0)

    def test_center_of_mass_without_mass(self):
        p1, p2 = center_of_mass_positions(0.0, 0.0, 10.0)
        assert (p1[0], p2[0]) == (-5.0, 5.0)

    def test_chirp_mass_of_equal_pair(self):
        assert chirp_mass(1.0, 1.0) == pytest.approx(2**-0.2)
        assert chirp_mass(0.0, 0.0) == 0.0

    def test_eccentric_orbits_merge_sooner(self):
        circular = peters_coalescence_years(30.0, 30.0, 1e6)
        assert peters_coalescence_years(30.0, 30.0, 1e6, 0.5) < circular
        assert math.isinf(peters_coalescence_years(0.0, 30.0, 1e6))

    def test_strain_limits(self):
        assert gravitational_wave_strain(0.0, 100.0, 1e20) == 0.0
        assert math.isinf(gravitational_wave_strain(30.0, 100.0, 0.0))
        assert gravitational_wave_strain(30.0, 100.0, 1e25) > 0.0


class TestPhotometry:
    def test_solar_absolute_magnitude(self):
        assert absolute_magnitude(1.0) == pytest.approx(4.74)
        assert absolute_magnitude(100.0) == pytest.approx(-0.26)

    def test_dark_object_is_infinitely_faint(self):
        assert math.isinf(absolute_magnitude(0.0))

    def test_distance_modulus(self):
        assert distance_modulus(10.0) == pytest.approx(0.0)
        assert distance_modulus(100.0) == pytest.approx(5.0)

    def test_flux_stays_finite_at_origin(self):
        assert math.isfinite(flux_at(1e33, 0.0))
        assert flux_at(0.0, 10.0) == 0.0


def _bound_pair_member(registry, separation_rs: float):
    definition = registry.get("stellar_mass")
    config = build(definition, 1, mass_override=10.0)
    rs = schwarzschild_radius(20.0)
    return definition, config.with_binary(
        companion_key="stellar_mass",
        companion_mass=10.0,
        separation_km=separation_rs * rs,
        eccentricity=0.0,
        period_days=kepler_period_days(20.0, separation_rs * rs),
        interaction_strength=1.0,
        position_km=(0.0, 0.0, 0.0),
        role="primary",
    )


class TestBlackHoleObservables:
    def test_close_binary_merger_signature(self, registry):
        definition, config = _bound_pair_member(registry, 20.0)
        result = derive_result(config, definition)
        assert result.observables.merger_signature is True
        assert result.physics.strain_amplitude > 0.0
        assert result.physics.chirp_mass == pytest.approx(chirp_mass(10.0, 10.0))

    def test_threshold_comes_from_config(self, registry):
        definition, config = _bound_pair_member(registry, 20.0)
        result = derive_result(config, definition, GenerationConfig(close_binary_threshold_rs=10.0))
        assert result.observables.merger_signature is False

    def test_wide_binary_has_no_signature(self, registry):
        definition, config = _bound_pair_member(registry, 500.0)
        assert derive_result(config, definition).observables.merger_signature is False

    def test_strain_floor_controls_detectability(self, registry):
        definition, config = _bound_pair_member(registry, 20.0)
        strain = derive_result(config, definition).physics.strain_amplitude
        loose = derive_result(config, definition, GenerationConfig(strain_sensitivity_floor=strain / 10))
        strict = derive_result(config, definition, GenerationConfig(strain_sensitivity_floor=strain * 10))
        assert loose.observables.inspiral_detectable is True
        assert strict.observables.inspiral_detectable is False

    def test_flags_come_from_definition(self, registry):
        definition = registry.get("primordial_micro")
        result = derive_result(build(definition, 2), definition)
        assert result.observables.hawking_radiation_detectable is True
        assert "Hawking radiation" in result.observables.signatures


class TestGalaxyAndStarObservables:
    def test_quenched_galaxy(self, registry):
        definition = registry.get("elliptical_e4")
        config = build(definition, 1, overrides={"star_formation_rate": 0.0})
        observables = derive_result(config, definition).observables
        assert observables.quenched is True
        assert observables.star_forming is False
        assert "quenched stellar population" in observables.signatures

    def test_active_nucleus(self, registry):
        definition = registry.get("quasar")
        observables = derive_result(build(definition, 1), definition).observables
        assert observables.active_nucleus is True
        assert "active galactic nucleus" in observables.signatures

    def test_survey_limit_from_config(self, registry):
        definition = registry.get("dwarf_elliptical")
        config = build(definition, 1)
        bright = derive_result(config, definition, GenerationConfig(survey_magnitude_limit=100.0))
        faint = derive_result(config, definition, GenerationConfig(survey_magnitude_limit=-100.0))
        assert bright.observables.survey_detectable is True
        assert faint.observables.survey_detectable is False

    def test_nearby_bright_star_is_naked_eye(self, registry):
        definition = registry.get("a_type")
        config = build(definition, 1, overrides={"distance_pc": 10.0, "luminosity": 20.0})
        observables = derive_result(config, definition).observables
        assert observables.naked_eye_visible is True
        assert observables.apparent_magnitude == pytest.approx(absolute_magnitude(20.0))

    def test_compact_remnant_has_no_habitable_zone(self, registry):
        definition = registry.get("white_dwarf")
        observables = derive_result(build(definition, 1), definition).observables
        assert observables.has_habitable_zone is False
        assert "compact remnant" in observables.signatures
