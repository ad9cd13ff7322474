"""All Pydantic models for cosmogen, organized by concern.

- registry.py: classification type definitions (static templates)
- instance.py: sampled instance configs
- profiles.py: derived physics and observables profiles
- report.py: statistics reports and bundled generation results
"""

from .registry import (
    DOMAINS,
    BlackHoleType,
    Bounds,
    Domain,
    GalaxyMorphology,
    GalaxyType,
    StarType,
    TypeDefinition,
    TypeDefinitionBase,
)
from .instance import (
    CONFIG_CLASSES,
    BlackHoleConfig,
    GalaxyConfig,
    InstanceConfig,
    InstanceConfigBase,
    StarConfig,
)
from .profiles import (
    BlackHoleObservables,
    BlackHolePhysics,
    GalaxyObservables,
    GalaxyPhysics,
    ObservablesProfile,
    PhysicsProfile,
    StarObservables,
    StarPhysics,
)
from .report import (
    QUALITY_LEVELS,
    GenerationResult,
    QualityLabel,
    StatisticsReport,
)

__all__ = [
    # Registry
    "DOMAINS",
    "Domain",
    "Bounds",
    "TypeDefinition",
    "TypeDefinitionBase",
    "BlackHoleType",
    "GalaxyType",
    "GalaxyMorphology",
    "StarType",
    # Instances
    "CONFIG_CLASSES",
    "InstanceConfig",
    "InstanceConfigBase",
    "BlackHoleConfig",
    "GalaxyConfig",
    "StarConfig",
    # Profiles
    "PhysicsProfile",
    "ObservablesProfile",
    "BlackHolePhysics",
    "BlackHoleObservables",
    "GalaxyPhysics",
    "GalaxyObservables",
    "StarPhysics",
    "StarObservables",
    # Reports
    "QUALITY_LEVELS",
    "QualityLabel",
    "StatisticsReport",
    "GenerationResult",
]
