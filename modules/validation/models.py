"""
Validation result models.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class FieldViolation(BaseModel):
    """A single field-level violation."""

    field: str = Field(..., description="Dotted path of the offending field")
    message: str = Field(..., description="Human readable message")
    type: str = Field(..., description="Machine readable violation type")


class ValidationResult(BaseModel):
    """Either a sanitized value or the complete list of violations."""

    value: Optional[Any] = None
    violations: list[FieldViolation] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations
