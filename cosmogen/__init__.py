"""cosmogen: seeded, classification-driven generation of black holes,
galaxies and stars with closed-form physics and observables."""

__version__ = "0.3.0"

from .config import CosmogenConfig, GenerationConfig
from .core.errors import (
    CompositionFailed,
    CosmogenError,
    GenerationCancelled,
    InvalidOverride,
    UnknownClassification,
)
from .core.models import GenerationResult
from .engine import (
    generate_binary,
    generate_cluster,
    generate_evolution_sequence,
    generate_formation_sequence,
    generate_merger_sequence,
    generate_population,
    generate_primordial_population,
    generate_single,
    generate_stellar_system,
    get_type_definition,
    list_classifications,
    regenerate,
    regenerate_records,
    replay,
)
from .records import CompositeCall, ObjectRecord, load_records, save_json

__all__ = [
    "__version__",
    "CosmogenConfig",
    "GenerationConfig",
    "CosmogenError",
    "UnknownClassification",
    "InvalidOverride",
    "CompositionFailed",
    "GenerationCancelled",
    "GenerationResult",
    "generate_single",
    "generate_binary",
    "generate_merger_sequence",
    "generate_population",
    "generate_cluster",
    "generate_primordial_population",
    "generate_stellar_system",
    "generate_formation_sequence",
    "generate_evolution_sequence",
    "list_classifications",
    "get_type_definition",
    "regenerate",
    "regenerate_records",
    "replay",
    "CompositeCall",
    "ObjectRecord",
    "save_json",
    "load_records",
]
