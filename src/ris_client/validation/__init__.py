"""Request validation module.

- Array field grouping for cart line items
- Schema-driven, mode-aware field validator
- Field-level validation error model
"""

from .array_params import (
    ARRAY_FAMILIES,
    ArrayFieldGroup,
    family_of,
    fetch_array_params,
)
from .models import ValidationError, ValidationErrorKind
from .validator import validate

__all__ = [
    # Array fields
    "ARRAY_FAMILIES",
    "ArrayFieldGroup",
    "family_of",
    "fetch_array_params",
    # Results
    "ValidationError",
    "ValidationErrorKind",
    # Validator
    "validate",
]
