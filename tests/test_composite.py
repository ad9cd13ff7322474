"""Tests for binaries, mergers, formation and evolution sequences."""

import math

import pytest

from cosmogen.config import GenerationConfig
from cosmogen.core.errors import CompositionFailed, UnknownClassification
from cosmogen.engine import (
    generate_binary,
    generate_evolution_sequence,
    generate_formation_sequence,
    generate_merger_sequence,
    regenerate,
)
from cosmogen.composite.merger import galaxy_remnant_key, remnant_key, remnant_mass
from cosmogen.composite.sequences import evolution_path, progenitor_masses, stage_key
from cosmogen.physics.black_hole import schwarzschild_radius
from cosmogen.records import ObjectRecord

COMPOSITE_FIELDS = {
    "is_binary",
    "companion_key",
    "companion_mass",
    "orbital_separation_km",
    "orbital_eccentricity",
    "orbital_period_days",
    "interaction_strength",
    "position_km",
    "composite_role",
}


def _own_fields(result) -> dict:
    return result.config.model_dump(exclude=COMPOSITE_FIELDS)


class TestBinary:
    def test_black_hole_pair(self):
        primary, secondary = generate_binary("stellar_mass", "stellar_mass", 11)
        assert primary.config.composite_role == "primary"
        assert secondary.config.composite_role == "secondary"
        assert primary.config.is_binary and secondary.config.is_binary
        assert primary.config.companion_mass == secondary.config.mass
        assert secondary.config.companion_mass == primary.config.mass

    def test_shared_orbit(self):
        primary, secondary = generate_binary("kerr", "schwarzschild", 3)
        for field in ("orbital_separation_km", "orbital_eccentricity", "orbital_period_days"):
            assert getattr(primary.config, field) == getattr(secondary.config, field)

    def test_orbit_is_physical(self):
        for seed in range(1, 6):
            primary, _ = generate_binary("stellar_mass", "kerr", seed)
            config = primary.config
            assert config.orbital_separation_km > 0
            assert 0 < config.orbital_period_days < math.inf
            assert 0.0 <= config.orbital_eccentricity <= 0.3

    def test_separation_envelope(self):
        primary, secondary = generate_binary("stellar_mass", "stellar_mass", 8)
        rs = schwarzschild_radius(primary.config.mass + secondary.config.mass)
        assert 10 * rs <= primary.config.orbital_separation_km <= 1000 * rs

    def test_center_of_mass_at_origin(self):
        primary, secondary = generate_binary("g_type", "m_type", 4)
        moment = (
            primary.config.mass * primary.config.position_km[0]
            + secondary.config.mass * secondary.config.position_km[0]
        )
        assert moment == pytest.approx(0.0, abs=primary.config.orbital_separation_km * 1e-9)

    def test_deterministic(self):
        a = generate_binary(None, None, 21)
        b = generate_binary(None, None, 21)
        assert [r.config for r in a] == [r.config for r in b]

    def test_random_secondary_shares_domain(self):
        for seed in range(1, 10):
            primary, secondary = generate_binary("g_type", None, seed)
            assert secondary.domain == "star"

    def test_domain_restricts_random_members(self):
        primary, secondary = generate_binary(None, None, 6, domain="galaxy")
        assert primary.domain == secondary.domain == "galaxy"

    def test_mixed_domains_rejected(self):
        with pytest.raises(CompositionFailed, match="share a domain"):
            generate_binary("kerr", "g_type", 1)

    def test_unknown_member_wrapped(self):
        with pytest.raises(CompositionFailed) as exc_info:
            generate_binary("kerr", "not_a_class", 1)
        assert isinstance(exc_info.value.__cause__, UnknownClassification)

    def test_members_regenerate(self):
        for result in generate_binary("stellar_mass", "kerr", 13):
            rebuilt = regenerate(ObjectRecord.from_result(result))
            assert _own_fields(rebuilt) == _own_fields(result)
            assert rebuilt.config.is_binary is False

    def test_galaxy_binary_period_uses_halo_mass(self):
        primary, _ = generate_binary("spiral_sb", "spiral_sb", 2)
        assert primary.physics.orbital_period == pytest.approx(primary.config.orbital_period_days)


class TestMerger:
    def test_sequence_shape(self):
        sequence = generate_merger_sequence("stellar_mass", "stellar_mass", 5)
        assert [r.config.composite_role for r in sequence] == ["primary", "secondary", "remnant"]
        assert sequence[2].config.position_km == (0.0, 0.0, 0.0)

    def test_mass_conservation(self):
        primary, secondary, remnant = generate_merger_sequence("stellar_mass", "stellar_mass", 5)
        m1, m2 = primary.config.mass, secondary.config.mass
        assert remnant.config.mass == pytest.approx(m1 + m2 * 0.95)
        assert remnant.config.overrides == {"mass": remnant.config.mass}

    def test_radiated_fraction_from_config(self):
        config = GenerationConfig(radiated_fraction=0.0)
        primary, secondary, remnant = generate_merger_sequence("g_type", "k_type", 2, config=config)
        assert remnant.config.mass == pytest.approx(primary.config.mass + secondary.config.mass)

    def test_black_hole_remnant_class(self):
        primary, secondary, remnant = generate_merger_sequence("stellar_mass", "stellar_mass", 9)
        total = primary.config.mass + secondary.config.mass
        assert remnant.key == ("stellar_mass" if total < 100 else "intermediate_mass")

    def test_remnant_regenerates(self):
        remnant = generate_merger_sequence("kerr", "kerr", 4)[-1]
        rebuilt = regenerate(ObjectRecord.from_result(remnant))
        assert _own_fields(rebuilt) == _own_fields(remnant)

    def test_galaxy_merger(self):
        sequence = generate_merger_sequence(None, None, 17, domain="galaxy")
        assert all(r.domain == "galaxy" for r in sequence)

    def test_unknown_progenitor(self):
        with pytest.raises(CompositionFailed):
            generate_merger_sequence("nope", "kerr", 1)


class TestRemnantRules:
    def test_remnant_mass(self):
        assert remnant_mass(10.0, 10.0, 0.05) == pytest.approx(19.5)

    @pytest.mark.parametrize(
        "m1, m2, key",
        [(30.0, 30.0, "stellar_mass"), (1e3, 1e3, "intermediate_mass"), (1e6, 1e6, "supermassive"), (1e10, 1e10, "ultramassive")],
    )
    def test_black_hole_table(self, registry, m1, m2, key):
        kerr = registry.get("kerr")
        assert remnant_key(kerr, m1, kerr, m2) == key

    @pytest.mark.parametrize(
        "m1, m2, key",
        [(0.03, 0.03, "brown_dwarf"), (0.5, 0.5, "g_type"), (1.5, 1.5, "b_type"), (20.0, 20.0, "o_type")],
    )
    def test_star_table(self, registry, m1, m2, key):
        g_type = registry.get("g_type")
        assert remnant_key(g_type, m1, g_type, m2) == key

    @pytest.mark.parametrize(
        "first, m1, second, m2, key",
        [
            ("neutron_star", 1.4, "neutron_star", 1.4, "neutron_star"),
            ("white_dwarf", 0.6, "white_dwarf", 0.6, "white_dwarf"),
            ("white_dwarf", 0.9, "white_dwarf", 0.9, "neutron_star"),
            ("g_type", 1.0, "white_dwarf", 0.6, "neutron_star"),
        ],
    )
    def test_compact_star_table(self, registry, first, m1, second, m2, key):
        assert remnant_key(registry.get(first), m1, registry.get(second), m2) == key

    def test_double_neutron_star_merger(self):
        primary, secondary, remnant = generate_merger_sequence("neutron_star", "neutron_star", 3)
        assert remnant.key == "neutron_star"
        assert remnant.config.mass > max(primary.config.mass, secondary.config.mass)

    def test_minor_galaxy_merger_keeps_class(self, registry):
        spiral, elliptical = registry.get("spiral_sb"), registry.get("elliptical_e0")
        assert galaxy_remnant_key(spiral, 1e11, elliptical, 5e9) == "spiral_sb"
        assert galaxy_remnant_key(elliptical, 5e9, spiral, 1e11) == "spiral_sb"

    def test_intermediate_disk_merger_is_peculiar(self, registry):
        spiral, barred = registry.get("spiral_sb"), registry.get("barred_sbb")
        assert galaxy_remnant_key(spiral, 1e11, barred, 2e10) == "peculiar"

    def test_intermediate_merger_without_disks(self, registry):
        elliptical, irregular = registry.get("elliptical_e0"), registry.get("irregular_i")
        assert galaxy_remnant_key(elliptical, 1e11, irregular, 2e10) == "elliptical_e0"

    def test_major_mergers(self, registry):
        spiral = registry.get("spiral_sb")
        assert galaxy_remnant_key(spiral, 1e11, spiral, 1e11) == "elliptical_e4"
        assert galaxy_remnant_key(spiral, 1e9, spiral, 1e9) == "irregular_i"


class TestFormationSequence:
    def test_progenitor_masses(self):
        m1, m2 = progenitor_masses(100.0, 0.05)
        assert m1 / m2 == pytest.approx(1.5)
        assert m1 + m2 * 0.95 == pytest.approx(100.0)

    def test_hierarchical_merger(self):
        sequence = generate_formation_sequence("hierarchical_merger", 60.0, 3)
        assert len(sequence) == 3
        assert [r.key for r in sequence[:2]] == ["stellar_mass", "stellar_mass"]
        assert sequence[-1].config.mass == pytest.approx(60.0)
        assert sequence[-1].key == "stellar_mass"

    @pytest.mark.parametrize(
        "mechanism, mass, key",
        [
            ("stellar_collapse", 10.0, "stellar_mass"),
            ("direct_collapse", 1e6, "supermassive"),
            ("primordial_formation", 1e-12, "primordial_micro"),
        ],
    )
    def test_direct_mechanisms(self, mechanism, mass, key):
        (result,) = generate_formation_sequence(mechanism, mass, 1)
        assert result.key == key
        assert result.config.mass == mass
        assert result.config.composite_role == mechanism

    def test_unknown_mechanism(self):
        with pytest.raises(CompositionFailed, match="Unknown formation mechanism"):
            generate_formation_sequence("spontaneous", 10.0, 1)

    def test_step_callback(self):
        steps = []
        generate_formation_sequence("stellar_collapse", 10.0, 1, on_step=lambda s, m: steps.append(s))
        assert steps == ["1/1"]


class TestEvolutionSequence:
    def test_paths(self):
        assert evolution_path(1e7) == ("primordial", "formation", "quenched")
        assert evolution_path(1e11, "cluster")[-1] == "quenched"
        assert evolution_path(1e11, "field")[-1] == "post_merger"
        assert evolution_path(1e11, "void") == evolution_path(1e11, "field")

    def test_stage_keys(self):
        assert stage_key("primordial", 1e11) == "irregular_i"
        assert stage_key("formation", 1e11) == "starburst"
        assert stage_key("formation", 1e9) == "dwarf_irregular"
        assert stage_key("interacting", 1e11) == "peculiar"
        assert stage_key("post_merger", 1e11) == "elliptical_e4"

    def test_field_sequence(self):
        sequence = generate_evolution_sequence(1e11, 8)
        assert [r.statistics.evolution_stage for r in sequence] == list(evolution_path(1e11))
        assert [r.config.redshift for r in sequence] == [6.0, 5.0, 4.0, 3.0, 2.0]
        assert all(r.domain == "galaxy" for r in sequence)

    def test_dwarf_sequence(self):
        sequence = generate_evolution_sequence(1e7, 8, environment="cluster")
        assert len(sequence) == 3

    def test_formation_stage_adjustments(self):
        formation = generate_evolution_sequence(1e11, 8)[1]
        assert formation.config.asymmetry_index == 0.5
        rebuilt = regenerate(ObjectRecord.from_result(formation))
        assert formation.config.star_formation_rate == pytest.approx(rebuilt.config.star_formation_rate * 5)

    def test_quenched_stage_adjustments(self):
        quenched = generate_evolution_sequence(1e11, 8, environment="cluster")[-1]
        rebuilt = regenerate(ObjectRecord.from_result(quenched))
        assert quenched.config.star_formation_rate == pytest.approx(rebuilt.config.star_formation_rate * 0.1)
        assert rebuilt.config.redshift == quenched.config.redshift

    def test_step_callback(self):
        steps = []
        generate_evolution_sequence(1e11, 8, on_step=lambda s, m: steps.append(s))
        assert steps == ["1/5", "2/5", "3/5", "4/5", "5/5"]
