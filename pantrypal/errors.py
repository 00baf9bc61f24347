"""Error types shared across the pantry modules."""

from __future__ import annotations


class PantryError(Exception):
    """Base class for pantry errors.

    ``message`` is always safe to show to a user.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StorageError(PantryError):
    """Inventory or reminder persistence failed."""


class BackendError(PantryError):
    """A reminder backend call failed."""


class ConfigError(PantryError):
    """A required setting is missing or unusable."""


class ValidationError(PantryError, ValueError):
    """User input was rejected before anything was written."""


class LookupFailed(PantryError):
    """Base class for external catalog failures."""


class NotFoundError(LookupFailed):
    """The external lookup had no match."""


class NetworkError(LookupFailed):
    """The external service could not be reached or answered with an error."""


class ParseError(LookupFailed):
    """The external service answered with something we could not decode."""
