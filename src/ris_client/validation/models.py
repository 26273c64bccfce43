# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Field-level validation results."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..record import HIDDEN_FIELDS, HIDDEN_VALUE


class ValidationErrorKind(str, Enum):
    """Kind of field-level validation problem."""

    MISSING = "MISSING"
    TOO_LONG = "TOO_LONG"
    PATTERN_MISMATCH = "PATTERN_MISMATCH"


class ValidationError(BaseModel):
    """One field-level validation problem.

    Returned by validate(); str() gives the human-readable form used in
    logs and in ValidationFailedError messages.
    """

    model_config = ConfigDict(frozen=True)

    field: str = Field(
        ...,
        description="Concrete field name (PROD_TYPE0, not PROD_TYPE, for array fields)",
    )
    kind: ValidationErrorKind
    mode: str | None = Field(
        None,
        description="Transaction mode, set for MISSING errors",
    )
    value: str | None = Field(
        None,
        description="Offending value, set for TOO_LONG and PATTERN_MISMATCH",
    )
    max_length: int | None = None
    pattern: str | None = None

    def __str__(self) -> str:
        if self.kind == ValidationErrorKind.MISSING:
            return f"Required field [{self.field}] missing for mode [{self.mode}]"
        if self.kind == ValidationErrorKind.TOO_LONG:
            return (
                f"Field [{self.field}] has length [{len(self.value or '')}] "
                f"when it should be at most [{self.max_length}]"
            )
        return (
            f"Field [{self.field}] has value [{self.shown_value}] "
            f"which does not match the pattern [{self.pattern}]"
        )

    @property
    def shown_value(self) -> str | None:
        """Value as it may appear in logs and messages."""
        if self.field in HIDDEN_FIELDS and self.value:
            return HIDDEN_VALUE
        return self.value

    @classmethod
    def missing(cls, field: str, mode: str | None) -> "ValidationError":
        return cls(field=field, kind=ValidationErrorKind.MISSING, mode=mode)

    @classmethod
    def too_long(cls, field: str, value: str, max_length: int) -> "ValidationError":
        return cls(
            field=field,
            kind=ValidationErrorKind.TOO_LONG,
            value=value,
            max_length=max_length,
        )

    @classmethod
    def pattern_mismatch(cls, field: str, value: str, pattern: str) -> "ValidationError":
        return cls(
            field=field,
            kind=ValidationErrorKind.PATTERN_MISMATCH,
            value=value,
            pattern=pattern,
        )
