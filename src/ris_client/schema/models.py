# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Pydantic models for the YAML field validation schema.

Each field rule states in which transaction modes the field is required
and which length and pattern constraints its value must satisfy.
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldRule(BaseModel):
    """Validation rule for one RIS field.

    Examples:
        - name: MERC, required: always, pattern: "\\d{6}"
        - name: TRAN, required: [U, X], max_length: 12
        - name: PROD_TYPE, required: [Q, P, W, J], max_length: 255
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Field name, or array family prefix (PROD_TYPE ...)",
        examples=["MERC", "PTOK", "PROD_TYPE"],
    )
    required: Literal["always", "never"] | frozenset[str] = Field(
        "never",
        description="'always', 'never', or the transaction modes that require the field",
        examples=["always", ["Q", "P"]],
    )
    max_length: int | None = Field(
        None,
        gt=0,
        description="Maximum character length of the value",
    )
    pattern: re.Pattern[str] | None = Field(
        None,
        description="Regular expression the whole value must match",
    )
    exempt_when_empty: bool = Field(
        False,
        description="Skip length and pattern checks for an empty value",
    )

    @field_validator("required", mode="before")
    @classmethod
    def normalize_required(cls, v: object) -> object:
        """Accept a mode list and treat an empty one as 'never'."""
        if v is None:
            return "never"
        if isinstance(v, (list, tuple, set, frozenset)):
            modes = frozenset(str(mode) for mode in v)
            for mode in modes:
                if len(mode) != 1:
                    raise ValueError(f"Transaction mode must be a single character: {mode!r}")
            return modes or "never"
        return v

    @field_validator("pattern", mode="before")
    @classmethod
    def compile_pattern(cls, v: object) -> object:
        """Compile the pattern at load time so bad regexes fail early."""
        if v is None or isinstance(v, re.Pattern):
            return v
        try:
            return re.compile(str(v))
        except re.error as e:
            raise ValueError(f"Invalid pattern {v!r}: {e}") from e

    def is_required(self, mode: str | None) -> bool:
        """Check if the field is required in the given transaction mode."""
        if self.required == "always":
            return True
        if self.required == "never":
            return False
        return mode is not None and mode in self.required

    @property
    def pattern_text(self) -> str | None:
        """Return the source text of the pattern."""
        return self.pattern.pattern if self.pattern is not None else None


class ValidationSchema(BaseModel):
    """Root model for a YAML validation schema.

    Example YAML:
        version: "0695"
        rules:
          - name: MODE
            required: always
            pattern: "[PQWJUX]"
          - name: TRAN
            required: [U, X]
            max_length: 12
    """

    model_config = ConfigDict(frozen=True)

    version: str | None = Field(
        None,
        description="RIS version the schema was written for",
    )
    rules: tuple[FieldRule, ...] = Field(
        default_factory=tuple,
        description="Field rules, evaluated in order",
    )
