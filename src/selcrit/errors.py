"""
Exception types raised by the selection criteria package.

Lookup misses (unknown criterion name, unknown literal or numerical value)
are NOT errors: they return None. Everything below signals a caller mistake
that the caller may recover from.
"""


class CriterionError(Exception):
    """Base class for all selection criteria errors."""
    pass


class UnknownMatchMethodError(CriterionError, LookupError):
    """Raised when a rule asks a criterion for a match method it does not support."""

    def __init__(self, method: str, criterion_name: str, available=()):
        self.method = method
        self.criterion_name = criterion_name
        self.available = tuple(available)
        super().__init__(
            f"Unknown match method '{method}' for criterion '{criterion_name}' "
            f"(available: {', '.join(self.available) or 'none'})"
        )


class DuplicateValuePairError(CriterionError, ValueError):
    """Raised when a literal or numerical value is already registered."""
    pass


class InvalidBitmaskValueError(CriterionError, ValueError):
    """Raised by strict inclusive criteria for values that are not a single bit."""
    pass


class DuplicateCriterionError(CriterionError, ValueError):
    """Raised when a criterion name is already taken in a registry."""
    pass


class SerializationError(CriterionError):
    """Raised when a criterion or config document cannot be loaded."""
    pass
