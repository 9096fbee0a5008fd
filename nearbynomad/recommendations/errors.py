from __future__ import annotations


class PreferenceValidationError(ValueError):
    """Raised when the raw preferences cannot be normalized.

    Only ``mood`` is required; a missing or unknown mood, or a slider value
    that is not a number, ends up here before any scoring happens.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class EngineConfigurationError(RuntimeError):
    """Raised at construction time when the engine is wired incorrectly."""


class CatalogError(RuntimeError):
    """Raised when the place catalog file cannot be read."""
