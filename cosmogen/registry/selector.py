"""Classification selection.

Random selection uses weighted rejection: each type is kept if one draw falls
below its discoverability, one kept type is then picked uniformly, and when no
type survives a uniform pick over all types is made instead. This only
approximates discoverability-proportional sampling and the fallback favours
rare types; the behaviour is kept as-is because changing it changes which
objects existing seeds produce.
"""

import logging

from ..core.models.registry import TypeDefinitionBase
from ..generation.rng import MinimalStandardRandom
from . import Registry

logger = logging.getLogger(__name__)


def select_random(
    candidates: list[TypeDefinitionBase],
    rng: MinimalStandardRandom,
) -> TypeDefinitionBase:
    """Weighted-rejection pick from candidates (one draw per candidate, then one more)."""
    if not candidates:
        raise ValueError("No classifications to select from")
    kept = [t for t in candidates if rng.random() < t.discoverability]
    if kept:
        return kept[rng.index(len(kept))]
    logger.debug("All %d candidates rejected, falling back to uniform pick", len(candidates))
    return candidates[rng.index(len(candidates))]


def resolve(
    key: str | None,
    rng: MinimalStandardRandom,
    registry: Registry,
    domain: str | None = None,
) -> TypeDefinitionBase:
    """Resolve a requested key, or pick one at random.

    An explicit key consumes no draws. Raises UnknownClassification when the
    key is absent (or belongs to a domain other than ``domain``).
    """
    if key is not None:
        return registry.require(key, domain)

    definition = select_random(registry.definitions(domain), rng)
    logger.debug("Selected %s", definition.key)
    return definition
