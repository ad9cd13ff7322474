"""Statistics reports and the bundled generation result."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .instance import InstanceConfig
from .profiles import (
    BlackHoleObservables,
    BlackHolePhysics,
    GalaxyObservables,
    GalaxyPhysics,
    StarObservables,
    StarPhysics,
)
from .registry import TypeDefinition

QualityLabel = Literal["low", "medium", "high", "ultra"]
QUALITY_LEVELS: tuple[str, ...] = ("low", "medium", "high", "ultra")


class StatisticsReport(BaseModel):
    """Display-ready rollup of one generated object.

    ``metrics`` holds display-unit values keyed by a name that carries the
    unit (``mass_solar``, ``radius_km``, ``evaporation_time_years``, ...).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    domain: str
    key: str
    name: str
    mass_class: str
    evolution_stage: str
    quality_label: QualityLabel
    effect_count: int = Field(ge=0)
    particle_count: int = Field(ge=0)
    stable: bool
    metrics: dict[str, float] = Field(default_factory=dict)
    signatures: tuple[str, ...] = ()
    generation_time_ms: float = Field(default=0.0, ge=0)


class GenerationResult(BaseModel):
    """Config, derived profiles and statistics for one object."""

    model_config = ConfigDict(frozen=True)

    config: InstanceConfig
    type_definition: TypeDefinition
    physics: Annotated[
        BlackHolePhysics | GalaxyPhysics | StarPhysics, Field(discriminator="domain")
    ]
    observables: Annotated[
        BlackHoleObservables | GalaxyObservables | StarObservables,
        Field(discriminator="domain"),
    ]
    statistics: StatisticsReport

    @property
    def key(self) -> str:
        return self.config.key

    @property
    def domain(self) -> str:
        return self.config.domain

    def summary(self) -> str:
        """One-line description for logs and CLI output."""
        stats = self.statistics
        return (
            f"{self.type_definition.name} [{self.key}] "
            f"mass={self.config.mass:.4g} M☉ class={stats.mass_class} "
            f"stage={stats.evolution_stage} quality={stats.quality_label}"
        )

    def to_dict(self, include_type: bool = False) -> dict[str, Any]:
        data = self.model_dump(mode="json", exclude=None if include_type else {"type_definition"})
        return data

