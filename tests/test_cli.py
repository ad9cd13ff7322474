"""CLI smoke tests using typer's CliRunner."""

import io
import json

import pytest
from rich.console import Console
from typer.testing import CliRunner

from cosmogen import __version__
from cosmogen.cli.app import app
from cosmogen.cli.utils import ExitCode, Output

runner = CliRunner()


def _json(result) -> dict:
    return json.loads(result.stdout)


class TestVersionFlag:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestCatalogCommands:
    """Tests for list and show."""

    def test_list(self):
        result = runner.invoke(app, ["--json", "list"])
        assert result.exit_code == 0
        data = _json(result)
        assert data["count"] == 40
        assert data["classifications"][0]["Key"] == "stellar_mass"

    def test_list_domain(self):
        result = runner.invoke(app, ["--json", "list", "--domain", "galaxy"])
        assert result.exit_code == 0
        assert _json(result)["count"] == 12

    def test_list_unknown_domain(self):
        result = runner.invoke(app, ["list", "--domain", "planet"])
        assert result.exit_code == 1
        assert "Unknown domain" in result.output

    def test_show(self):
        result = runner.invoke(app, ["show", "kerr"])
        assert result.exit_code == 0
        assert "Sampled ranges" in result.output

    def test_show_json(self):
        result = runner.invoke(app, ["--json", "show", "spiral_sb"])
        assert result.exit_code == 0
        assert _json(result)["type_definition"]["domain"] == "galaxy"

    def test_show_unknown(self):
        result = runner.invoke(app, ["show", "nope"])
        assert result.exit_code == 2


class TestGenerateCommand:
    """Tests for generate and regenerate."""

    def test_generate_json(self):
        result = runner.invoke(app, ["--json", "generate", "kerr", "--seed", "7"])
        assert result.exit_code == 0
        config = _json(result)["object"]["config"]
        assert config["key"] == "kerr"
        assert config["seed"] == 7

    def test_generate_human(self):
        result = runner.invoke(app, ["generate", "g_type", "--seed", "3"])
        assert result.exit_code == 0
        assert "Metrics" in result.output

    def test_generate_uses_configured_seed(self):
        runner.invoke(app, ["config", "set", "defaults.seed", "5"])
        result = runner.invoke(app, ["--json", "generate", "kerr"])
        assert _json(result)["object"]["config"]["seed"] == 5

    def test_generate_unknown_class(self):
        result = runner.invoke(app, ["generate", "nope"])
        assert result.exit_code == 2

    def test_generate_invalid_override(self):
        result = runner.invoke(app, ["generate", "kerr", "--set", "spin=2"])
        assert result.exit_code == 1

    def test_generate_non_numeric_override(self):
        result = runner.invoke(app, ["--json", "generate", "kerr", "--set", "spin=abc"])
        assert result.exit_code == 1
        assert _json(result)["status"] == "error"

    def test_generate_then_regenerate(self, tmp_path):
        path = tmp_path / "kerr.json"
        first = runner.invoke(app, ["--json", "generate", "kerr", "--seed", "9", "--mass", "12", "-o", str(path)])
        assert first.exit_code == 0
        assert path.exists()

        second = runner.invoke(app, ["--json", "regenerate", str(path)])
        assert second.exit_code == 0
        (rebuilt,) = _json(second)["objects"]
        assert rebuilt["config"] == _json(first)["object"]["config"]

    def test_regenerate_missing_file(self, tmp_path):
        result = runner.invoke(app, ["regenerate", str(tmp_path / "missing.json")])
        assert result.exit_code == 3


class TestCompositeCommands:
    """Tests for binary, merger and population."""

    def test_binary(self):
        result = runner.invoke(app, ["--json", "binary", "stellar_mass", "stellar_mass", "--seed", "11"])
        assert result.exit_code == 0
        data = _json(result)
        assert len(data["objects"]) == 2
        assert data["orbit"]["separation_km"] > 0

    def test_binary_mixed_domains(self):
        result = runner.invoke(app, ["binary", "kerr", "g_type"])
        assert result.exit_code == 4

    def test_merger(self):
        result = runner.invoke(app, ["--json", "merger", "stellar_mass", "stellar_mass", "--seed", "5"])
        assert result.exit_code == 0
        data = _json(result)
        assert [o["config"]["composite_role"] for o in data["objects"]] == ["primary", "secondary", "remnant"]
        assert data["remnant_mass"] > 0

    def test_population(self):
        result = runner.invoke(app, ["population", "-n", "5", "--seed", "1"])
        assert result.exit_code == 0
        assert "Generated 5 objects" in result.output

    def test_population_json(self):
        result = runner.invoke(app, ["--json", "population", "-n", "3", "-d", "star"])
        assert result.exit_code == 0
        data = _json(result)
        assert data["count"] == 3
        assert all(o["config"]["domain"] == "star" for o in data["objects"])

    def test_population_negative_count(self):
        result = runner.invoke(app, ["population", "-n", "-1"])
        assert result.exit_code == 1

    def test_population_saves_records(self, tmp_path):
        path = tmp_path / "population.json"
        result = runner.invoke(app, ["population", "-n", "4", "-o", str(path)])
        assert result.exit_code == 0
        assert len(json.loads(path.read_text())["objects"]) == 4

    @pytest.mark.parametrize(
        "command",
        [
            ["binary", "stellar_mass", "stellar_mass", "--seed", "11"],
            ["merger", "stellar_mass", "stellar_mass", "--seed", "5"],
            ["population", "-n", "4", "--seed", "3", "-d", "star"],
        ],
    )
    def test_composite_output_regenerates(self, tmp_path, command):
        path = tmp_path / "composite.json"
        first = runner.invoke(app, ["--json", *command, "-o", str(path)])
        assert first.exit_code == 0
        assert json.loads(path.read_text())["meta"]["call"]["operation"] == command[0]

        second = runner.invoke(app, ["--json", "regenerate", str(path)])
        assert second.exit_code == 0
        rebuilt = [o["config"] for o in _json(second)["objects"]]
        assert rebuilt == [o["config"] for o in _json(first)["objects"]]

    def test_binary_regenerate_restores_orbit(self, tmp_path):
        path = tmp_path / "binary.json"
        first = runner.invoke(app, ["--json", "binary", "stellar_mass", "stellar_mass", "--seed", "11", "-o", str(path)])
        second = runner.invoke(app, ["--json", "regenerate", str(path)])
        primary = _json(second)["objects"][0]
        assert primary["config"]["orbital_period_days"] == _json(first)["orbit"]["period_days"]
        assert primary["config"]["orbital_period_days"] > 0
        assert primary["physics"]["strain_amplitude"] > 0


class TestConfigCommand:
    """Tests for the config command."""

    def test_config_show(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "Generation" in result.output
        assert "Defaults" in result.output

    def test_config_set(self, isolated_config):
        result = runner.invoke(app, ["config", "set", "generation.quality", "ultra"])
        assert result.exit_code == 0
        assert json.loads(isolated_config.read_text())["generation"]["quality"] == "ultra"

    def test_config_set_invalid_key(self):
        result = runner.invoke(app, ["config", "set", "invalid.key", "value"])
        assert result.exit_code == 1
        assert "Unknown key" in result.output

    def test_config_set_invalid_value(self):
        result = runner.invoke(app, ["config", "set", "generation.quality", "cinematic"])
        assert result.exit_code == 1
        assert "Invalid value" in result.output

    def test_config_set_invalid_int_value(self):
        result = runner.invoke(app, ["config", "set", "defaults.seed", "abc"])
        assert result.exit_code == 1

    def test_config_set_missing_args(self):
        result = runner.invoke(app, ["config", "set"])
        assert result.exit_code == 1

    def test_config_reset(self, isolated_config):
        runner.invoke(app, ["config", "set", "defaults.seed", "3"])
        assert isolated_config.exists()
        result = runner.invoke(app, ["config", "reset"])
        assert result.exit_code == 0
        assert not isolated_config.exists()

    def test_config_unknown_action(self):
        result = runner.invoke(app, ["config", "unknown_action"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output


class TestOutput:
    """Tests for the dual-mode output collector."""

    def test_json_document(self, capsys):
        out = Output(console=Console(), json_mode=True)
        out.error("bad spin", category="InvalidOverride", exit_code=ExitCode.VALIDATION_ERROR)
        out.table("Population by classification", ["Key", "Count"], [["kerr", "2"]])
        out.text("ignored in JSON mode")
        assert out.finish() == ExitCode.VALIDATION_ERROR

        data = json.loads(capsys.readouterr().out)
        assert data["status"] == "error"
        assert data["exit_code"] == ExitCode.VALIDATION_ERROR
        assert data["errors"] == [{"message": "bad spin", "category": "InvalidOverride"}]
        assert data["population_by_classification"] == [{"Key": "kerr", "Count": "2"}]

    def test_human_mode_prints(self):
        buffer = io.StringIO()
        out = Output(console=Console(file=buffer, width=80), json_mode=False)
        out.header("Kerr black hole")
        out.success("Generated kerr")
        assert out.finish() == ExitCode.SUCCESS
        assert "Kerr black hole" in buffer.getvalue()
        assert "Generated kerr" in buffer.getvalue()
