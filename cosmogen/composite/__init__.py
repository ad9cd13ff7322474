"""Composite generators: several single-object generations plus the
relational quantities that bind them (orbits, positions, remnants).

Every composite call owns one stream seeded from the call's seed. Class picks
and member seeds are drawn from it, and each member is built from its own
stream seeded with its member seed.
"""

from .binary import build_binary, generate_binary, separation_envelope_km
from .merger import generate_merger_sequence, remnant_key, remnant_mass
from .population import (
    generate_cluster,
    generate_population,
    generate_primordial_population,
    generate_stellar_system,
)
from .sequences import evolution_path, generate_evolution_sequence, generate_formation_sequence

__all__ = [
    "build_binary",
    "generate_binary",
    "separation_envelope_km",
    "generate_merger_sequence",
    "remnant_key",
    "remnant_mass",
    "generate_cluster",
    "generate_population",
    "generate_primordial_population",
    "generate_stellar_system",
    "evolution_path",
    "generate_evolution_sequence",
    "generate_formation_sequence",
]
