"""Instance configs: the concrete sampled parameters of one generated object.

Configs are frozen. Composite generators derive updated copies through
``with_binary``/``with_position``/``with_updates`` instead of mutating.
"""

import hashlib
import json
from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


Vector3 = tuple[float, float, float]


class InstanceConfigBase(BaseModel):
    """Fields shared by every generated object."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Fields a caller may override, and those whose sign must be non-negative
    OVERRIDABLE: ClassVar[frozenset[str]] = frozenset()
    NON_NEGATIVE: ClassVar[frozenset[str]] = frozenset()
    UNIT_INTERVAL: ClassVar[frozenset[str]] = frozenset()

    key: str
    seed: int
    mass: float = Field(description="Solar masses (stellar mass for galaxies)")
    formation_mechanism: str
    overrides: dict[str, float] = Field(default_factory=dict)

    # Composite-system fields, populated only by composite generators
    is_binary: bool = False
    companion_key: str | None = None
    companion_mass: float = 0.0
    orbital_separation_km: float = 0.0
    orbital_eccentricity: float = 0.0
    orbital_period_days: float = 0.0
    interaction_strength: float = 0.0
    position_km: Vector3 = (0.0, 0.0, 0.0)
    composite_role: str | None = None

    visual_features: dict[str, bool] = Field(default_factory=dict)

    @property
    def total_mass(self) -> float:
        return self.mass + (self.companion_mass if self.is_binary else 0.0)

    def canonical_json(self) -> str:
        """Stable serialization used for hashing and equality checks."""
        return json.dumps(
            self.model_dump(mode="json"),
            sort_keys=True,
            separators=(",", ":"),
            allow_nan=True,
        )

    def fingerprint(self) -> str:
        """Stable SHA-256 of the config, suitable as a render-cache key."""
        return hashlib.sha256(self.canonical_json().encode("utf-8")).hexdigest()

    def reproducible_tuple(self) -> dict[str, Any]:
        """The minimal inputs that regenerate this object as a single generation."""
        return {
            "key": self.key,
            "seed": self.seed,
            "overrides": dict(sorted(self.overrides.items())),
        }

    def with_binary(
        self,
        *,
        companion_key: str,
        companion_mass: float,
        separation_km: float,
        eccentricity: float,
        period_days: float,
        interaction_strength: float,
        position_km: Vector3,
        role: str,
    ):
        return self.model_copy(
            update={
                "is_binary": True,
                "companion_key": companion_key,
                "companion_mass": companion_mass,
                "orbital_separation_km": separation_km,
                "orbital_eccentricity": eccentricity,
                "orbital_period_days": period_days,
                "interaction_strength": interaction_strength,
                "position_km": position_km,
                "composite_role": role,
            }
        )

    def with_position(self, position_km: Vector3, role: str | None = None):
        update: dict[str, Any] = {"position_km": position_km}
        if role is not None:
            update["composite_role"] = role
        return self.model_copy(update=update)

    def with_updates(self, **fields: Any):
        return self.model_copy(update=fields)


class BlackHoleConfig(InstanceConfigBase):
    OVERRIDABLE: ClassVar[frozenset[str]] = frozenset(
        {
            "mass",
            "spin",
            "charge",
            "age_years",
            "accretion_rate",
            "environment_density",
            "ambient_magnetic_field",
            "distance_pc",
        }
    )
    NON_NEGATIVE: ClassVar[frozenset[str]] = OVERRIDABLE
    UNIT_INTERVAL: ClassVar[frozenset[str]] = frozenset({"spin", "charge"})

    domain: Literal["black_hole"] = "black_hole"

    spin: float
    charge: float
    age_years: float
    accretion_rate: float = Field(description="Solar masses per year")
    environment_density: float = Field(description="Particles per cm^3")
    ambient_magnetic_field: float = Field(description="Tesla")
    stellar_companions: int = 0
    distance_pc: float
    redshift: float


class GalaxyConfig(InstanceConfigBase):
    OVERRIDABLE: ClassVar[frozenset[str]] = frozenset(
        {
            "mass",
            "effective_radius_kpc",
            "star_formation_rate",
            "metallicity",
            "age_gyr",
            "redshift",
            "ellipticity",
            "arm_tightness",
            "arm_symmetry",
            "eddington_ratio",
        }
    )
    NON_NEGATIVE: ClassVar[frozenset[str]] = OVERRIDABLE - {"metallicity", "arm_tightness"}
    UNIT_INTERVAL: ClassVar[frozenset[str]] = frozenset({"ellipticity", "arm_symmetry"})

    domain: Literal["galaxy"] = "galaxy"

    effective_radius_kpc: float
    star_formation_rate: float = Field(description="Solar masses per year")
    metallicity: float = Field(description="[Fe/H]")
    age_gyr: float
    redshift: float
    hubble_type: str
    ellipticity: float
    spiral_arms: int = 0
    arm_tightness: float = 0.0
    arm_symmetry: float = 0.0
    bar_strength: float = 0.0
    asymmetry_index: float = 0.0
    eddington_ratio: float
    has_active_nucleus: bool = False
    evolution_stage: str | None = None


class StarConfig(InstanceConfigBase):
    OVERRIDABLE: ClassVar[frozenset[str]] = frozenset(
        {
            "mass",
            "radius",
            "temperature",
            "luminosity",
            "age_myr",
            "metallicity",
            "magnetic_field_gauss",
            "distance_pc",
        }
    )
    NON_NEGATIVE: ClassVar[frozenset[str]] = OVERRIDABLE - {"metallicity"}

    domain: Literal["star"] = "star"

    radius: float = Field(description="Solar radii")
    temperature: float = Field(description="Kelvin")
    luminosity: float = Field(description="Solar luminosities")
    age_myr: float
    metallicity: float
    magnetic_field_gauss: float
    distance_pc: float


InstanceConfig = Annotated[
    Union[BlackHoleConfig, GalaxyConfig, StarConfig],
    Field(discriminator="domain"),
]

CONFIG_CLASSES: dict[str, type[InstanceConfigBase]] = {
    "black_hole": BlackHoleConfig,
    "galaxy": GalaxyConfig,
    "star": StarConfig,
}
