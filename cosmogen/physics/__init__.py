"""Closed-form physics and observables derivation.

Derivers are pure: they read an instance config and its type definition, never
draw random numbers and never raise at the numeric limits (zero mass, zero
spin, zero distance).
"""

from ..core.models import (
    BlackHoleConfig,
    GalaxyConfig,
    InstanceConfigBase,
    PhysicsProfile,
    StarConfig,
    TypeDefinitionBase,
)
from . import black_hole, galaxy, star
from .observables import derive_observables


def derive_physics(config: InstanceConfigBase, type_def: TypeDefinitionBase) -> PhysicsProfile:
    """Dispatch to the domain's physics deriver."""
    if config.domain != type_def.domain:
        raise ValueError(
            f"Config domain {config.domain!r} does not match type definition domain {type_def.domain!r}"
        )
    if isinstance(config, BlackHoleConfig):
        return black_hole.derive_physics(config, type_def)
    if isinstance(config, GalaxyConfig):
        return galaxy.derive_physics(config, type_def)
    if isinstance(config, StarConfig):
        return star.derive_physics(config, type_def)
    raise TypeError(f"Unsupported config: {type(config).__name__}")


__all__ = ["derive_physics", "derive_observables", "black_hole", "galaxy", "star"]
