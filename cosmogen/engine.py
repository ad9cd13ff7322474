"""Public generation API.

Every call is synchronous and owns its random stream; the shared registry is
read-only, so independent calls may run in parallel. Generation tuning is
passed in explicitly through ``config`` (defaults when omitted).
"""

import inspect
import logging
from typing import Any, Callable, Mapping, Sequence

from . import composite
from .composite.common import CancelCheck
from .config import GenerationConfig
from .core.models import GenerationResult, TypeDefinitionBase
from .generation import MinimalStandardRandom, generate_object
from .records import CompositeCall, ObjectRecord, RecordError, composite_call
from .registry import Registry, get_registry
from .registry.selector import resolve
from .utils.callbacks import ItemProgressCallback, StepProgressCallback

logger = logging.getLogger(__name__)


def generate_single(
    class_key: str | None = None,
    seed: int = 0,
    mass_override: float | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
    domain: str | None = None,
    config: GenerationConfig | None = None,
    registry: Registry | None = None,
) -> GenerationResult:
    """Generate one object.

    Without ``class_key`` the class is picked at random (within ``domain``
    when given). The pick runs on its own stream seeded with ``seed`` and the
    object is then built from a fresh stream with the same seed, so the
    result equals ``generate_single(result.key, seed)``.

    Raises:
        UnknownClassification: If ``class_key`` is not registered (in ``domain``)
        InvalidOverride: If an override fails sanity checks
    """
    registry = registry or get_registry()
    type_def = resolve(class_key, MinimalStandardRandom(seed), registry, domain)
    return generate_object(
        type_def, seed, config, mass_override=mass_override, overrides=overrides
    )


def generate_binary(
    primary_key: str | None = None,
    secondary_key: str | None = None,
    seed: int = 0,
    *,
    domain: str | None = None,
    config: GenerationConfig | None = None,
    registry: Registry | None = None,
) -> tuple[GenerationResult, GenerationResult]:
    """Generate a bound pair ``(primary, secondary)`` of the same domain."""
    return composite.generate_binary(
        primary_key, secondary_key, seed, registry or get_registry(), config, domain
    )


def generate_merger_sequence(
    primary_key: str | None = None,
    secondary_key: str | None = None,
    seed: int = 0,
    *,
    domain: str | None = None,
    config: GenerationConfig | None = None,
    registry: Registry | None = None,
) -> list[GenerationResult]:
    """Generate ``[primary, secondary, remnant]``."""
    return composite.generate_merger_sequence(
        primary_key, secondary_key, seed, registry or get_registry(), config, domain
    )


def generate_population(
    class_key: str | None,
    count: int,
    seed: int = 0,
    *,
    domain: str | None = None,
    config: GenerationConfig | None = None,
    on_progress: ItemProgressCallback | None = None,
    cancel: CancelCheck | None = None,
    registry: Registry | None = None,
) -> list[GenerationResult]:
    """Generate ``count`` objects, cooperatively cancellable between members."""
    return composite.generate_population(
        class_key,
        count,
        seed,
        registry or get_registry(),
        config,
        domain=domain,
        on_progress=on_progress,
        cancel=cancel,
    )


def generate_cluster(
    center_key: str | None = None,
    member_count: int = 50,
    seed: int = 0,
    *,
    config: GenerationConfig | None = None,
    registry: Registry | None = None,
) -> list[GenerationResult]:
    """Generate a galaxy cluster: central galaxy first, then its members."""
    return composite.generate_cluster(center_key, member_count, seed, registry or get_registry(), config)


def generate_primordial_population(
    mass_function: str,
    count: int,
    seed: int = 0,
    *,
    config: GenerationConfig | None = None,
    registry: Registry | None = None,
) -> list[GenerationResult]:
    """Generate primordial black holes ("monochromatic", "power_law" or "lognormal")."""
    return composite.generate_primordial_population(
        mass_function, count, seed, registry or get_registry(), config
    )


def generate_stellar_system(
    star_count: int,
    seed: int = 0,
    *,
    config: GenerationConfig | None = None,
    registry: Registry | None = None,
) -> list[GenerationResult]:
    """Generate a single star, a binary, or a primary with companions."""
    return composite.generate_stellar_system(star_count, seed, registry or get_registry(), config)


def generate_formation_sequence(
    mechanism: str,
    final_mass: float,
    seed: int = 0,
    *,
    config: GenerationConfig | None = None,
    on_step: StepProgressCallback | None = None,
    registry: Registry | None = None,
) -> list[GenerationResult]:
    """Generate the black holes that form a hole of ``final_mass`` via ``mechanism``."""
    return composite.generate_formation_sequence(
        mechanism, final_mass, seed, registry or get_registry(), config, on_step
    )


def generate_evolution_sequence(
    initial_mass: float,
    seed: int = 0,
    environment: str = "field",
    *,
    config: GenerationConfig | None = None,
    on_step: StepProgressCallback | None = None,
    registry: Registry | None = None,
) -> list[GenerationResult]:
    """Generate one galaxy per evolution stage for a ``field`` or ``cluster`` galaxy."""
    return composite.generate_evolution_sequence(
        initial_mass, seed, registry or get_registry(), environment, config, on_step
    )


def list_classifications(domain: str | None = None, *, registry: Registry | None = None) -> list[str]:
    """Registered classification keys, in registry order."""
    return (registry or get_registry()).keys(domain)


def get_type_definition(key: str, *, registry: Registry | None = None) -> TypeDefinitionBase | None:
    return (registry or get_registry()).get(key)


def regenerate(
    record: ObjectRecord | Mapping[str, Any],
    *,
    config: GenerationConfig | None = None,
    registry: Registry | None = None,
) -> GenerationResult:
    """Rebuild an object from its reproducible tuple.

    Composite members come back as single objects: their own sampled values
    are identical, relational fields (orbits, positions) are not restored.
    Use ``regenerate_records`` to replay the composite call of a whole file.
    """
    if not isinstance(record, ObjectRecord):
        record = ObjectRecord.model_validate(dict(record))
    return generate_single(
        record.key, record.seed, overrides=record.overrides, config=config, registry=registry
    )


_COMPOSITE_OPERATIONS: dict[str, Callable[..., Sequence[GenerationResult]]] = {
    "binary": generate_binary,
    "merger": generate_merger_sequence,
    "population": generate_population,
    "cluster": generate_cluster,
    "primordial_population": generate_primordial_population,
    "stellar_system": generate_stellar_system,
    "formation_sequence": generate_formation_sequence,
    "evolution_sequence": generate_evolution_sequence,
}


def replay(
    call: CompositeCall,
    *,
    config: GenerationConfig | None = None,
    registry: Registry | None = None,
) -> list[GenerationResult]:
    """Run a recorded composite call again.

    Raises:
        RecordError: If the recorded arguments do not fit the operation
    """
    operation = _COMPOSITE_OPERATIONS[call.operation]
    try:
        inspect.signature(operation).bind(seed=call.seed, config=config, registry=registry, **call.args)
    except TypeError as e:
        raise RecordError(f"Recorded {call.operation} call has invalid arguments: {e}") from e
    logger.debug("Replaying %s call with seed %d", call.operation, call.seed)
    return list(operation(seed=call.seed, config=config, registry=registry, **call.args))


def regenerate_records(
    meta: Mapping[str, Any],
    records: Sequence[ObjectRecord],
    *,
    config: GenerationConfig | None = None,
    registry: Registry | None = None,
) -> list[GenerationResult]:
    """Rebuild everything stored in a records file.

    A file with a recorded composite call is replayed through that call, so
    orbits, positions and remnants come back too. Otherwise each record is
    regenerated on its own with ``regenerate``.
    """
    call = composite_call(dict(meta))
    if call is None:
        return [regenerate(record, config=config, registry=registry) for record in records]

    results = replay(call, config=config, registry=registry)
    if [ObjectRecord.from_result(r) for r in results] != list(records):
        # Expected when the generation config (e.g. radiated fraction) changed since saving
        logger.warning(
            "Replayed %s call (seed=%d) differs from the %d stored records",
            call.operation,
            call.seed,
            len(records),
        )
    return results
