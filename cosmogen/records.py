"""Persistence of the minimal reproducible tuple.

Only what is needed to regenerate an object is stored: classification key,
seed, overrides and composite role. Derived fields are never written;
``cosmogen.engine.regenerate`` rebuilds them on load.

Composite results (pairs, mergers, populations) also depend on the stream
they were drawn from, so files written for them carry the ``CompositeCall``
that produced them and ``cosmogen.engine.regenerate_records`` replays it.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core.errors import CosmogenError
from .core.models import GenerationResult

logger = logging.getLogger(__name__)

RECORD_FORMAT_VERSION = 1


class ObjectRecord(BaseModel):
    """Reproducible tuple of one generated object."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    seed: int
    overrides: dict[str, float] = Field(default_factory=dict)
    role: str | None = None

    @classmethod
    def from_result(cls, result: GenerationResult) -> "ObjectRecord":
        return cls(**result.config.reproducible_tuple(), role=result.config.composite_role)


class RecordError(CosmogenError):
    """Raised when a records file cannot be read."""


CompositeOperation = Literal[
    "binary",
    "merger",
    "population",
    "cluster",
    "primordial_population",
    "stellar_system",
    "formation_sequence",
    "evolution_sequence",
]


class CompositeCall(BaseModel):
    """The composite operation behind a records file.

    ``args`` are the keyword arguments of the matching ``cosmogen.engine``
    function as originally passed (unresolved keys stay ``None``), without
    ``seed``, ``config`` or callbacks.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    operation: CompositeOperation
    seed: int
    args: dict[str, Any] = Field(default_factory=dict)


def save_json(
    results: Iterable[GenerationResult],
    path: Path | str,
    meta: dict[str, Any] | None = None,
    call: CompositeCall | None = None,
) -> None:
    """Save reproducible tuples of results to a JSON file.

    Args:
        results: Generated objects
        path: Output file; parent directories are created
        meta: Extra metadata merged into the ``meta`` block
        call: Composite call that produced ``results``, stored as ``meta.call``
    """
    from . import __version__

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    objects = [ObjectRecord.from_result(r).model_dump(mode="json") for r in results]
    output = {
        "meta": {
            "format_version": RECORD_FORMAT_VERSION,
            "cosmogen_version": __version__,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "count": len(objects),
            **(meta or {}),
        },
        "objects": objects,
    }
    if call is not None:
        output["meta"]["call"] = call.model_dump(mode="json")

    with open(path, "w") as f:
        json.dump(output, f, indent=2, default=str)
    logger.info("Saved %d records to %s", len(objects), path)


def load_records(path: Path | str) -> tuple[dict[str, Any], list[ObjectRecord]]:
    """Read a file written by ``save_json``.

    Returns:
        Tuple of (meta, records)

    Raises:
        RecordError: If the file is not valid JSON or a record is malformed
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise RecordError(f"{path.name}: not valid JSON ({e})") from e

    if not isinstance(data, dict) or not isinstance(data.get("objects"), list):
        raise RecordError(f"{path.name}: expected an object with an 'objects' list")

    records = []
    for index, entry in enumerate(data["objects"]):
        try:
            records.append(ObjectRecord.model_validate(entry))
        except ValidationError as e:
            raise RecordError(f"{path.name}: invalid record #{index}: {e}") from e
    return data.get("meta", {}), records


def composite_call(meta: dict[str, Any]) -> CompositeCall | None:
    """The composite call recorded in a file's meta block, if any.

    Raises:
        RecordError: If a recorded call is malformed
    """
    if meta.get("call") is None:
        return None
    try:
        return CompositeCall.model_validate(meta["call"])
    except ValidationError as e:
        raise RecordError(f"invalid composite call: {e}") from e
