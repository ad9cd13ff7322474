"""Classification registry.

The registry is built once from the YAML tables in ``data/`` into an immutable
mapping and shared read-only by every generation call. There is no mutation
API; tests and tools that need a different table construct their own
``Registry`` from definitions.
"""

import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator

import yaml
from pydantic import TypeAdapter, ValidationError

from ..core.errors import UnknownClassification
from ..core.models.registry import DOMAINS, TypeDefinition, TypeDefinitionBase

logger = logging.getLogger(__name__)

DATA_FILES: dict[str, str] = {
    "black_hole": "black_holes.yaml",
    "galaxy": "galaxies.yaml",
    "star": "stars.yaml",
}
_FILE_DOMAINS: dict[str, str] = {filename: domain for domain, filename in DATA_FILES.items()}

_type_adapter = TypeAdapter(TypeDefinition)


class RegistryError(ValueError):
    """Raised when a registry table is malformed."""


class Registry:
    """Immutable, ordered mapping of classification key to type definition."""

    def __init__(self, definitions: Iterable[TypeDefinitionBase]):
        entries: dict[str, TypeDefinitionBase] = {}
        for definition in definitions:
            if definition.key in entries:
                raise RegistryError(f"Duplicate classification key: {definition.key}")
            entries[definition.key] = definition
        self._types = MappingProxyType(entries)

    # -- Mapping-style access --

    def __contains__(self, key: object) -> bool:
        return key in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    @property
    def types(self) -> MappingProxyType:
        return self._types

    def get(self, key: str) -> TypeDefinitionBase | None:
        return self._types.get(key)

    def require(self, key: str, domain: str | None = None) -> TypeDefinitionBase:
        """Look up a key, raising UnknownClassification when absent.

        When ``domain`` is given, a key from another domain is treated as unknown.
        """
        definition = self._types.get(key)
        if definition is None or (domain is not None and definition.domain != domain):
            raise UnknownClassification(key, domain)
        return definition

    def keys(self, domain: str | None = None) -> list[str]:
        return [d.key for d in self.definitions(domain)]

    def definitions(self, domain: str | None = None) -> list[TypeDefinitionBase]:
        if domain is not None and domain not in DOMAINS:
            raise ValueError(f"Unknown domain: {domain!r} (expected one of {', '.join(DOMAINS)})")
        return [d for d in self._types.values() if domain is None or d.domain == domain]

    def domains(self) -> list[str]:
        return [d for d in DOMAINS if any(t.domain == d for t in self._types.values())]

    # -- Loading --

    @classmethod
    def from_yaml(cls, paths: Iterable[Path | str]) -> "Registry":
        definitions: list[TypeDefinitionBase] = []
        for path in paths:
            definitions.extend(load_definitions(path))
        return cls(definitions)


def load_definitions(path: Path | str, domain: str | None = None) -> list[TypeDefinitionBase]:
    """Load and validate one YAML table of type definitions.

    Entries without a ``domain`` key take it from ``domain``, or failing that
    from the table's file name (see ``DATA_FILES``).
    """
    path = Path(path)
    domain = domain or _FILE_DOMAINS.get(path.name)
    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, list):
        raise RegistryError(f"{path.name}: expected a list of type definitions")

    definitions = []
    for index, entry in enumerate(data):
        if isinstance(entry, dict) and domain is not None:
            entry.setdefault("domain", domain)
        try:
            definitions.append(_type_adapter.validate_python(entry))
        except ValidationError as e:
            key = entry.get("key", f"#{index}") if isinstance(entry, dict) else f"#{index}"
            raise RegistryError(f"{path.name}: invalid definition {key}: {e}") from e
    logger.debug("Loaded %d definitions from %s", len(definitions), path.name)
    return definitions


def _data_path(filename: str) -> Path:
    return Path(str(resources.files(__package__).joinpath("data").joinpath(filename)))


@lru_cache(maxsize=1)
def get_registry() -> Registry:
    """The built-in registry, loaded once per process."""
    definitions: list[TypeDefinitionBase] = []
    for domain in DOMAINS:
        definitions.extend(load_definitions(_data_path(DATA_FILES[domain]), domain))
    registry = Registry(definitions)
    logger.debug("Built-in registry ready with %d classifications", len(registry))
    return registry


__all__ = ["Registry", "RegistryError", "get_registry", "load_definitions", "DATA_FILES"]
