"""
Validation module exceptions.
"""

from shared.exceptions import ValidationError

from .models import FieldViolation


class ValidationFailedError(ValidationError):
    """Raised when a payload does not satisfy its schema."""

    def __init__(self, violations: list[FieldViolation], message: str = "Validation failed"):
        super().__init__(
            message,
            code="VALIDATION_FAILED",
            details={"violations": [v.model_dump() for v in violations]},
        )
        self.violations = violations


class UnknownSchemaError(KeyError):
    """Raised for a schema name that is not registered (programmer error)."""
