"""Single-object generation pipeline.

build -> derive physics -> derive observables -> statistics report. Composite
generators reuse ``derive_result`` after they have attached relational fields
to a member's config.
"""

import logging
import time
from typing import Any, Mapping

from ..config import GenerationConfig
from ..core.models import GenerationResult, InstanceConfigBase, TypeDefinitionBase
from ..physics import derive_observables, derive_physics
from ..reporting import build_report
from .builder import build
from .rng import MinimalStandardRandom

logger = logging.getLogger(__name__)


def derive_result(
    config: InstanceConfigBase,
    type_def: TypeDefinitionBase,
    generation: GenerationConfig | None = None,
    started: float | None = None,
) -> GenerationResult:
    """Derive physics, observables and statistics for a built config.

    Args:
        config: Instance config (possibly carrying composite fields)
        type_def: The config's classification
        generation: Generation tuning; defaults when omitted
        started: ``time.perf_counter()`` value taken when generation of this
            object began, used for ``generation_time_ms``
    """
    generation = generation or GenerationConfig()
    physics = derive_physics(config, type_def)
    observables = derive_observables(config, physics, type_def, generation)

    elapsed_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0
    statistics = build_report(config, type_def, physics, observables, generation, elapsed_ms)

    return GenerationResult(
        config=config,
        type_definition=type_def,
        physics=physics,
        observables=observables,
        statistics=statistics,
    )


def generate_object(
    type_def: TypeDefinitionBase,
    seed: int,
    generation: GenerationConfig | None = None,
    *,
    mass_override: float | None = None,
    overrides: Mapping[str, Any] | None = None,
    rng: MinimalStandardRandom | None = None,
) -> GenerationResult:
    """Build and fully derive one object of a resolved classification."""
    started = time.perf_counter()
    config = build(type_def, seed, rng=rng, mass_override=mass_override, overrides=overrides)
    result = derive_result(config, type_def, generation, started)
    logger.debug("Generated %s", result.summary())
    return result
