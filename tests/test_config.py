"""Tests for configuration loading, saving and environment overrides."""

import json

import pytest

from cosmogen import config as config_module
from cosmogen.config import CosmogenConfig, DefaultsConfig, GenerationConfig, coerce_value


class TestGenerationConfig:
    def test_defaults(self):
        config = GenerationConfig()
        assert config.quality == "high"
        assert config.radiated_fraction == 0.05
        assert config.close_binary_threshold_rs == 50.0
        assert config.population_radius_pc == 1000.0

    def test_invalid_quality(self):
        with pytest.raises(ValueError, match="Invalid quality"):
            GenerationConfig(quality="cinematic")

    @pytest.mark.parametrize("fraction", [-0.1, 1.0])
    def test_invalid_radiated_fraction(self, fraction):
        with pytest.raises(ValueError):
            GenerationConfig(radiated_fraction=fraction)

    def test_invalid_radius(self):
        with pytest.raises(ValueError):
            GenerationConfig(population_radius_pc=0.0)


class TestCosmogenConfig:
    def test_load_without_file(self):
        config = CosmogenConfig.load()
        assert config.generation == GenerationConfig()
        assert config.defaults == DefaultsConfig()

    def test_save_and_load(self, isolated_config):
        CosmogenConfig(
            generation=GenerationConfig(quality="ultra"),
            defaults=DefaultsConfig(seed=7),
        ).save()
        assert isolated_config.exists()

        loaded = CosmogenConfig.load()
        assert loaded.generation.quality == "ultra"
        assert loaded.defaults.seed == 7

    def test_default_section_omitted_when_unchanged(self, isolated_config):
        CosmogenConfig().save()
        assert "defaults" not in json.loads(isolated_config.read_text())

    def test_env_overrides_file(self, monkeypatch):
        CosmogenConfig(generation=GenerationConfig(quality="low")).save()
        monkeypatch.setenv("COSMOGEN_QUALITY", "medium")
        monkeypatch.setenv("COSMOGEN_SEED", "11")
        config = CosmogenConfig.load()
        assert config.generation.quality == "medium"
        assert config.defaults.seed == 11

    def test_invalid_env_value_ignored(self, monkeypatch):
        monkeypatch.setenv("COSMOGEN_QUALITY", "cinematic")
        monkeypatch.setenv("COSMOGEN_RADIATED_FRACTION", "lots")
        config = CosmogenConfig.load()
        assert config.generation.quality == "high"
        assert config.generation.radiated_fraction == 0.05

    def test_corrupt_file_falls_back_to_defaults(self, isolated_config):
        isolated_config.parent.mkdir(parents=True, exist_ok=True)
        isolated_config.write_text("{oops")
        assert CosmogenConfig.load().generation == GenerationConfig()

    def test_unknown_keys_ignored(self, isolated_config):
        isolated_config.parent.mkdir(parents=True, exist_ok=True)
        isolated_config.write_text(json.dumps({"generation": {"quality": "low", "shiny": True}}))
        assert CosmogenConfig.load().generation.quality == "low"

    def test_to_dict(self):
        data = CosmogenConfig().to_dict()
        assert set(data) == {"generation", "defaults"}
        assert data["defaults"]["population_size"] == 50

    def test_env_vars_cover_every_field(self):
        covered = {(zone, name) for zone, name, _ in config_module._ENV_VARS.values()}
        assert ("generation", "survey_magnitude_limit") in covered
        assert ("defaults", "population_size") in covered


class TestCoerceValue:
    def test_numeric_fields(self):
        generation = GenerationConfig()
        assert coerce_value(generation, "radiated_fraction", "0.1") == 0.1
        assert coerce_value(DefaultsConfig(), "seed", "9") == 9

    def test_string_field(self):
        assert coerce_value(GenerationConfig(), "quality", "low") == "low"

    def test_bad_number(self):
        with pytest.raises(ValueError):
            coerce_value(DefaultsConfig(), "seed", "nine")

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            coerce_value(GenerationConfig(), "shiny", "1")
