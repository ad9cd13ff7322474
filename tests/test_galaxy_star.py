"""Tests for galaxy scaling relations and stellar structure."""

import math

import pytest

from cosmogen.generation.builder import build
from cosmogen.physics import galaxy, star


class TestGalaxyRelations:
    def test_tully_fisher_normalization(self):
        assert galaxy.tully_fisher_velocity(5e10) == pytest.approx(200.0)

    def test_faber_jackson_normalization(self):
        assert galaxy.faber_jackson_dispersion(1e11) == pytest.approx(150.0)

    def test_size_relation_normalization(self):
        assert galaxy.size_relation_radius(1e11, "spiral") == pytest.approx(3.0)
        assert galaxy.size_relation_radius(1e11, "elliptical") == pytest.approx(3.0)

    def test_ellipticals_grow_faster(self):
        assert galaxy.size_relation_radius(1e12, "elliptical") > galaxy.size_relation_radius(1e12, "spiral")

    def test_zero_mass_limits(self):
        assert galaxy.tully_fisher_velocity(0.0) == 0.0
        assert galaxy.size_relation_radius(0.0, "spiral") == 0.0

    def test_hubble_distance(self):
        assert galaxy.hubble_distance_mpc(0.0) == 0.0
        assert galaxy.hubble_distance_mpc(0.01) == pytest.approx(42.83, rel=1e-3)

    def test_agn_luminosity(self):
        bh_mass, luminosity = galaxy.agn_luminosity(1e10, 0.1)
        assert bh_mass == pytest.approx(1e6)
        assert luminosity == pytest.approx(1.26e43)

    def test_angular_size_at_origin(self):
        assert math.isinf(galaxy.angular_size_arcmin(5.0, 0.0))


class TestGalaxyProfile:
    def test_dark_matter_fraction(self, registry):
        definition = registry.get("spiral_sb")
        config = build(definition, 4)
        physics = galaxy.derive_physics(config, definition)
        assert physics.stellar_mass == config.mass
        assert physics.stellar_mass / physics.total_mass == pytest.approx(1 - definition.dark_matter_fraction)
        assert physics.dark_matter_mass == pytest.approx(physics.total_mass - physics.stellar_mass)

    def test_disks_rotate(self, registry):
        definition = registry.get("spiral_sb")
        physics = galaxy.derive_physics(build(definition, 4), definition)
        assert physics.rotation_velocity > 0

    def test_ellipticals_are_pressure_supported(self, registry):
        definition = registry.get("elliptical_e0")
        physics = galaxy.derive_physics(build(definition, 4), definition)
        assert physics.rotation_velocity == 0.0
        assert physics.velocity_dispersion > 0

    def test_no_star_formation(self, registry):
        definition = registry.get("elliptical_e4")
        config = build(definition, 4, overrides={"star_formation_rate": 0.0})
        physics = galaxy.derive_physics(config, definition)
        assert physics.specific_star_formation_rate == 0.0
        assert math.isinf(physics.gas_depletion_time)

    def test_morphology_summary(self, registry):
        config = build(registry.get("barred_sbb"), 2)
        summary = galaxy.morphology_summary(config)
        assert summary.startswith(config.hubble_type)
        assert "arms" in summary


class TestStellarRelations:
    def test_solar_lifetime(self):
        assert star.main_sequence_lifetime(1.0) == pytest.approx(1e4)

    def test_massive_stars_die_young(self):
        assert star.main_sequence_lifetime(10.0) < star.main_sequence_lifetime(1.0)

    def test_zero_mass_lifetime(self):
        assert math.isinf(star.main_sequence_lifetime(0.0))

    def test_solar_luminosity(self):
        assert star.stefan_boltzmann_luminosity(1.0, 5772.0) == pytest.approx(1.0)

    def test_habitable_zone(self):
        inner, outer = star.habitable_zone(1.0)
        assert inner == pytest.approx(0.953, rel=1e-3)
        assert outer == pytest.approx(1.374, rel=1e-3)
        assert star.habitable_zone(0.0) == (0.0, 0.0)

    @pytest.mark.parametrize(
        "temperature, letter",
        [(40000.0, "O"), (15000.0, "B"), (8000.0, "A"), (6500.0, "F"), (5772.0, "G"), (4000.0, "K"), (3000.0, "M"), (1500.0, "L"), (900.0, "T")],
    )
    def test_spectral_class(self, temperature, letter):
        assert star.spectral_class(temperature) == letter

    @pytest.mark.parametrize(
        "age, stage",
        [(50.0, "pre_main_sequence"), (500.0, "main_sequence"), (920.0, "subgiant"), (970.0, "giant"), (995.0, "supernova")],
    )
    def test_evolution_stage(self, age, stage):
        assert star.evolution_stage(age, 1000.0) == stage

    def test_infinite_lifetime_stage(self):
        assert star.evolution_stage(1e6, math.inf) == "main_sequence"


class TestStarProfile:
    def test_sun_like_star(self, registry):
        definition = registry.get("g_type")
        config = build(
            definition,
            1,
            overrides={"mass": 1.0, "radius": 1.0, "temperature": 5772.0, "luminosity": 1.0},
        )
        physics = star.derive_physics(config, definition)
        assert physics.spectral_class == "G"
        assert physics.surface_gravity_log_g == pytest.approx(4.44, abs=0.01)
        assert physics.escape_velocity == pytest.approx(617.7)
        assert physics.main_sequence_lifetime == pytest.approx(1e4)

    def test_compact_remnant_rotation_fixed(self, registry):
        definition = registry.get("neutron_star")
        physics = star.derive_physics(build(definition, 3), definition)
        assert physics.rotation_period == definition.rotation_period_days

    def test_zero_radius_limits(self, registry):
        definition = registry.get("g_type")
        config = build(definition, 1, overrides={"radius": 0.0})
        physics = star.derive_physics(config, definition)
        assert math.isinf(physics.escape_velocity)
        assert math.isinf(physics.mean_density)
