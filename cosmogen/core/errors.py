"""Exception hierarchy for generation failures.

Every public generation call either returns a complete result or raises one
of these. Nothing is retried: generation is deterministic, so a retry with the
same inputs reproduces the same failure.
"""


class CosmogenError(Exception):
    """Base class for all generation errors."""


class UnknownClassification(CosmogenError):
    """Raised when a classification key is not present in the registry."""

    def __init__(self, key: str, domain: str | None = None):
        self.key = key
        self.domain = domain
        if domain:
            message = f"Unknown {domain} classification: {key!r}"
        else:
            message = f"Unknown classification: {key!r}"
        super().__init__(message)


class InvalidOverride(CosmogenError):
    """Raised when an override fails basic type or sign sanity checks."""

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid override for '{field}' ({value!r}): {reason}")


class CompositionFailed(CosmogenError):
    """Raised when any step of a composite generation fails."""


class GenerationCancelled(CosmogenError):
    """Raised when a population generation is cancelled between members."""

    def __init__(self, completed: int, total: int):
        self.completed = completed
        self.total = total
        super().__init__(f"Generation cancelled after {completed}/{total} members")
