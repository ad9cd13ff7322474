"""Classification type definitions.

A type definition is the static template for one classification: declared
sampling ranges, baseline physics values, baseline observable and
visual-feature flags, formation mechanisms, and ordinal scores. Definitions are
loaded once from the YAML tables in ``cosmogen/registry/data`` and never
mutated afterwards.

Which sampler a range uses is fixed per field in ``SAMPLED_FIELDS`` below;
the order in which fields consume random draws is fixed by the builder.
"""

from types import MappingProxyType
from typing import Annotated, ClassVar, Literal, Mapping, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)


Domain = Literal["black_hole", "galaxy", "star"]
DOMAINS: tuple[str, ...] = ("black_hole", "galaxy", "star")

ObservationalStatus = Literal["confirmed", "probable", "theoretical", "speculative"]

Bounds = tuple[float, float]

# Scale of each declared range: (config field, range attribute, scale)
SampledField = tuple[str, str, Literal["linear", "log10"]]


def _check_bounds(value: Bounds) -> Bounds:
    low, high = value
    if low > high:
        raise ValueError(f"Range lower bound {low} exceeds upper bound {high}")
    return value


def _freeze(value: Mapping) -> MappingProxyType:
    return MappingProxyType(dict(value))


def _thaw(value: Mapping) -> dict:
    return dict(value)


# Mapping fields are stored read-only and dumped as plain dicts
FlagMap = Annotated[dict[str, bool], AfterValidator(_freeze), PlainSerializer(_thaw)]


# =============================================================================
# Shared base
# =============================================================================


class TypeDefinitionBase(BaseModel):
    """Attributes shared by every classification."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    SAMPLED_FIELDS: ClassVar[tuple[SampledField, ...]] = ()

    key: str = Field(description="Classification key, unique across domains")
    name: str
    description: str = ""
    real_world_example: str = ""
    observational_status: ObservationalStatus

    mass_range: Bounds
    formation_mechanisms: tuple[str, ...] = Field(min_length=1)
    formation_timescale_years: float = Field(ge=0)

    observables: FlagMap = Field(default_factory=dict, validate_default=True)
    visual_features: FlagMap = Field(default_factory=dict, validate_default=True)

    discoverability: float = Field(ge=0, le=1)
    scientific_value: int = Field(ge=0, le=10)
    danger_level: int = Field(ge=0, le=10)
    resource_value: int = Field(ge=0, le=10)
    effect_density: float = Field(default=0.5, ge=0, le=1)
    geometry_complexity: int = Field(default=3, ge=1, le=5)
    stable: bool = True

    unique_features: tuple[str, ...] = ()
    astrophysical_processes: tuple[str, ...] = ()

    @field_validator("mass_range")
    @classmethod
    def _validate_mass_range(cls, value: Bounds) -> Bounds:
        return _check_bounds(value)

    def scale_for(self, field: str) -> Literal["linear", "log10"]:
        """Sampling scale declared for a config field."""
        for name, _, scale in self.SAMPLED_FIELDS:
            if name == field:
                return scale
        raise KeyError(f"{self.key} declares no sampled field {field!r}")

    def declared_range(self, field: str) -> Bounds:
        """Declared range for a config field, in the units of its scale."""
        for name, attr, _ in self.SAMPLED_FIELDS:
            if name == field:
                return getattr(self, attr)
        raise KeyError(f"{self.key} declares no sampled field {field!r}")

    def bounds(self, field: str) -> Bounds:
        """Declared range for a config field, in physical units."""
        low, high = self.declared_range(field)
        if self.scale_for(field) == "log10":
            return 10**low, 10**high
        return low, high

    def sampled_field_names(self) -> list[str]:
        return [name for name, _, _ in self.SAMPLED_FIELDS]


# =============================================================================
# Black holes
# =============================================================================

# Age ranges (years) by formation mechanism; primordial holes have a fixed age
BLACK_HOLE_AGE_RANGES: dict[str, Bounds] = {
    "stellar_collapse": (1e6, 1e10),
    "direct_collapse": (1e8, 1e9),
}
DEFAULT_BLACK_HOLE_AGE_RANGE: Bounds = (1e6, 1e10)
PRIMORDIAL_AGE_YEARS = 13.8e9

# Sampled environmental quantities span this multiple of the baseline value
BASELINE_SPREAD: Bounds = (0.1, 2.0)


class BlackHoleType(TypeDefinitionBase):
    """Compact-object classification. Masses are log10 solar masses."""

    SAMPLED_FIELDS: ClassVar[tuple[SampledField, ...]] = (
        ("mass", "mass_range", "log10"),
        ("spin", "spin_range", "linear"),
        ("charge", "charge_range", "linear"),
        ("accretion_rate", "accretion_rate_range", "linear"),
        ("environment_density", "environment_density_range", "linear"),
        ("ambient_magnetic_field", "ambient_field_range", "linear"),
        ("distance_pc", "distance_range", "linear"),
    )

    domain: Literal["black_hole"] = "black_hole"

    spin_range: Bounds = (0.0, 0.99)
    charge_range: Bounds = (0.0, 0.01)
    temperature_range: Bounds = (0.0, 0.0)
    distance_range: Bounds = (0.1, 1000.0)

    # Baselines; sampled values span BASELINE_SPREAD times these
    accretion_rate: float = Field(default=0.0, ge=0)
    environment_density: float = Field(default=1.0, ge=0)
    ambient_magnetic_field: float = Field(default=1e-9, ge=0)
    magnetic_field_strength: float = Field(default=1e4, ge=0)
    quantum_corrections: float = 0.0

    accretion_rate_range: Bounds | None = None
    environment_density_range: Bounds | None = None
    ambient_field_range: Bounds | None = None

    gravitational_influence_pc: float = 0.0
    accretion_radius_pc: float = 0.0
    jet_length_pc: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _derive_baseline_ranges(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        low, high = BASELINE_SPREAD
        for baseline, range_name in (
            ("accretion_rate", "accretion_rate_range"),
            ("environment_density", "environment_density_range"),
            ("ambient_magnetic_field", "ambient_field_range"),
        ):
            if data.get(range_name) is None:
                try:
                    value = float(data.get(baseline, cls.model_fields[baseline].default))
                except (TypeError, ValueError):
                    # Left for field validation to report
                    continue
                data[range_name] = (value * low, value * high)
        return data

    @field_validator(
        "spin_range",
        "charge_range",
        "distance_range",
        "accretion_rate_range",
        "environment_density_range",
        "ambient_field_range",
    )
    @classmethod
    def _validate_ranges(cls, value: Bounds | None) -> Bounds | None:
        if value is None:
            return value
        return _check_bounds(value)

    @field_validator("spin_range", "charge_range")
    @classmethod
    def _validate_unit_interval(cls, value: Bounds) -> Bounds:
        if value[0] < 0 or value[1] > 1:
            raise ValueError("Spin and charge ranges must lie within [0, 1]")
        return value

    def age_range(self, mechanism: str) -> Bounds:
        return BLACK_HOLE_AGE_RANGES.get(mechanism, DEFAULT_BLACK_HOLE_AGE_RANGE)


# =============================================================================
# Galaxies
# =============================================================================

GalaxyFamily = Literal[
    "spiral", "barred_spiral", "elliptical", "lenticular", "irregular", "dwarf", "active", "peculiar"
]
StellarPopulation = Literal["population_i", "population_ii", "starburst", "mixed"]
PopulationMix = Annotated[dict[StellarPopulation, float], AfterValidator(_freeze), PlainSerializer(_thaw)]


class GalaxyMorphology(BaseModel):
    """Baseline morphology descriptors; scalars only, never rasterized."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ellipticity: float = Field(default=0.0, ge=0, le=1)
    spiral_arms: int = Field(default=0, ge=0)
    arm_tightness: float = 0.0
    arm_symmetry: float = Field(default=0.0, ge=0, le=1)
    bar_strength: float = Field(default=0.0, ge=0, le=1)
    bulge_to_total: float = Field(default=0.0, ge=0, le=1)
    disk_thickness: float = Field(default=0.1, ge=0)
    asymmetry_index: float = Field(default=0.0, ge=0, le=1)


class GalaxyType(TypeDefinitionBase):
    """Galaxy classification. Stellar masses are log10 solar masses."""

    SAMPLED_FIELDS: ClassVar[tuple[SampledField, ...]] = (
        ("mass", "mass_range", "log10"),
        ("effective_radius_kpc", "size_range", "linear"),
        ("star_formation_rate", "star_formation_range", "linear"),
        ("metallicity", "metallicity_range", "linear"),
        ("age_gyr", "age_range", "linear"),
    )

    domain: Literal["galaxy"] = "galaxy"

    family: GalaxyFamily
    hubble_type: str
    size_range: Bounds
    star_formation_range: Bounds
    metallicity_range: Bounds
    age_range: Bounds

    morphology: GalaxyMorphology = Field(default_factory=GalaxyMorphology)
    dominant_population: StellarPopulation = "mixed"
    population_mix: PopulationMix = Field(default_factory=dict, validate_default=True)
    dark_matter_fraction: float = Field(default=0.85, ge=0, lt=1)
    gas_fraction: float = Field(default=0.1, ge=0)
    sersic_index: float = Field(default=1.0, gt=0)
    has_active_nucleus: bool = False

    @field_validator("size_range", "star_formation_range", "metallicity_range", "age_range")
    @classmethod
    def _validate_ranges(cls, value: Bounds) -> Bounds:
        return _check_bounds(value)

    @property
    def has_disk(self) -> bool:
        return self.family in ("spiral", "barred_spiral", "lenticular")


# =============================================================================
# Stars
# =============================================================================


class StarType(TypeDefinitionBase):
    """Stellar classification. Masses are linear solar masses."""

    SAMPLED_FIELDS: ClassVar[tuple[SampledField, ...]] = (
        ("mass", "mass_range", "linear"),
        ("radius", "radius_range", "linear"),
        ("temperature", "temperature_range", "linear"),
        ("luminosity", "luminosity_range", "linear"),
        ("distance_pc", "distance_range", "linear"),
    )

    domain: Literal["star"] = "star"

    spectral_type: str
    radius_range: Bounds
    temperature_range: Bounds
    luminosity_range: Bounds
    distance_range: Bounds = (1.0, 1000.0)

    color_index: float = 0.65
    base_metallicity: float = 0.0
    rotation_period_days: float = Field(default=25.0, gt=0)
    magnetic_field_gauss: float = Field(default=1.0, ge=0)
    wind_speed_kms: float = Field(default=400.0, ge=0)
    mass_loss_rate: float = Field(default=2e-14, ge=0)
    compact_remnant: bool = False
    variable: bool = False

    @field_validator("radius_range", "temperature_range", "luminosity_range", "distance_range")
    @classmethod
    def _validate_ranges(cls, value: Bounds) -> Bounds:
        return _check_bounds(value)


TypeDefinition = Annotated[
    Union[BlackHoleType, GalaxyType, StarType],
    Field(discriminator="domain"),
]
