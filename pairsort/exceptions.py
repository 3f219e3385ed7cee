"""
Exception classes for pairsort.

Centralized location for all custom exceptions to avoid circular imports.
"""


class ValidationError(Exception):
    """Base exception for validation-related errors."""
    pass


class ConfigurationError(Exception):
    """Base exception for configuration-related errors."""
    pass


class InvalidIndexError(ValidationError, IndexError):
    """Raised for an index the comparator does not own, or a pair naming one element twice."""

    def __init__(self, index: object, size: int, message: str | None = None):
        self.index = index
        self.size = size
        super().__init__(
            message or f"Element index {index!r} out of range for {size} elements"
        )
