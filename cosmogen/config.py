"""Configuration management for cosmogen.

Generation tuning lives in ``GenerationConfig`` and is passed explicitly into
every generation call; nothing reads a process-wide "current quality" value.

Config resolution order (highest priority first):
1. Programmatic (CosmogenConfig / GenerationConfig constructed in code)
2. Environment variables (COSMOGEN_QUALITY, COSMOGEN_RADIATED_FRACTION, etc.)
3. Config file (~/.config/cosmogen/config.json, managed by `cosmogen config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "cosmogen"
CONFIG_FILE = CONFIG_DIR / "config.json"

QUALITY_LEVELS = ("low", "medium", "high", "ultra")


# =============================================================================
# Config dataclasses
# =============================================================================


@dataclass
class GenerationConfig:
    """Tuning passed into every generation call.

    - quality: upper bound on the quality label reported for objects
    - radiated_fraction: share of the secondary's mass radiated away in a merger
    - close_binary_threshold_rs: separation (in combined Schwarzschild radii)
      below which a black hole binary shows a merger signature
    - strain_sensitivity_floor: minimum detectable gravitational-wave strain
    - population_radius_pc: radius of the sphere population members are placed in
    - survey_magnitude_limit: faintest apparent magnitude counted as detectable
    """

    quality: str = "high"
    radiated_fraction: float = 0.05
    close_binary_threshold_rs: float = 50.0
    strain_sensitivity_floor: float = 1e-23
    population_radius_pc: float = 1000.0
    survey_magnitude_limit: float = 25.0

    def __post_init__(self) -> None:
        if self.quality not in QUALITY_LEVELS:
            raise ValueError(
                f"Invalid quality {self.quality!r}. Expected one of: {', '.join(QUALITY_LEVELS)}"
            )
        if not 0 <= self.radiated_fraction < 1:
            raise ValueError("radiated_fraction must be in [0, 1)")
        if self.close_binary_threshold_rs <= 0:
            raise ValueError("close_binary_threshold_rs must be positive")
        if self.strain_sensitivity_floor <= 0:
            raise ValueError("strain_sensitivity_floor must be positive")
        if self.population_radius_pc <= 0:
            raise ValueError("population_radius_pc must be positive")


@dataclass
class DefaultsConfig:
    """CLI defaults."""

    seed: int = 42
    population_size: int = 50


@dataclass
class CosmogenConfig:
    """Top-level cosmogen configuration.

    Construct programmatically for package use, or load from the config file
    for CLI use.

    Examples:
        # Package use, no files needed
        config = CosmogenConfig(generation=GenerationConfig(quality="ultra"))

        # CLI use, loads from ~/.config/cosmogen/config.json
        config = CosmogenConfig.load()
    """

    generation: GenerationConfig = field(default_factory=GenerationConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls) -> "CosmogenConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: config file
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError, ValueError, TypeError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: env var overrides
        _apply_env(config)
        return config

    def save(self) -> None:
        """Save config to ~/.config/cosmogen/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        data: dict[str, Any] = {"generation": asdict(self.generation)}
        if self.defaults != DefaultsConfig():
            data["defaults"] = asdict(self.defaults)
        with open(CONFIG_FILE, "w") as f:
            json.dump(data, f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return {
            "generation": asdict(self.generation),
            "defaults": asdict(self.defaults),
        }


# =============================================================================
# Config application
# =============================================================================

_ENV_VARS: dict[str, tuple[str, str, type]] = {
    "COSMOGEN_QUALITY": ("generation", "quality", str),
    "COSMOGEN_RADIATED_FRACTION": ("generation", "radiated_fraction", float),
    "COSMOGEN_CLOSE_BINARY_THRESHOLD": ("generation", "close_binary_threshold_rs", float),
    "COSMOGEN_STRAIN_FLOOR": ("generation", "strain_sensitivity_floor", float),
    "COSMOGEN_POPULATION_RADIUS": ("generation", "population_radius_pc", float),
    "COSMOGEN_SURVEY_LIMIT": ("generation", "survey_magnitude_limit", float),
    "COSMOGEN_SEED": ("defaults", "seed", int),
    "COSMOGEN_POPULATION_SIZE": ("defaults", "population_size", int),
}


def _field_types(section: Any) -> dict[str, type]:
    return {f.name: type(getattr(section, f.name)) for f in fields(section)}


def coerce_value(section: Any, name: str, value: Any) -> Any:
    """Coerce a raw (string or JSON) value to the type of a config field."""
    target = _field_types(section)[name]
    if target is bool:
        return str(value).lower() in ("1", "true", "yes")
    return target(value)


def _apply_section(section: Any, values: dict[str, Any]) -> Any:
    """Return a copy of a dataclass section with known keys replaced and re-validated."""
    current = asdict(section)
    for k, v in values.items():
        if k in current:
            current[k] = coerce_value(section, k, v)
        else:
            logger.warning("Ignoring unknown config key %s.%s", type(section).__name__, k)
    return type(section)(**current)


def _apply_dict(config: CosmogenConfig, data: dict) -> None:
    """Apply a dict of values onto a CosmogenConfig."""
    if isinstance(data.get("generation"), dict):
        config.generation = _apply_section(config.generation, data["generation"])
    if isinstance(data.get("defaults"), dict):
        config.defaults = _apply_section(config.defaults, data["defaults"])


def _apply_env(config: CosmogenConfig) -> None:
    for env_var, (zone, name, _) in _ENV_VARS.items():
        val = os.environ.get(env_var)
        if not val:
            continue
        section = getattr(config, zone)
        try:
            setattr(config, zone, _apply_section(section, {name: val}))
        except ValueError:
            logger.warning("Invalid %s=%r, ignoring", env_var, val)
