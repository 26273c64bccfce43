# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Schema-driven request validation.

Evaluates a request record against the field rules of a validation schema
for one transaction mode. Rules are evaluated in schema order and every
problem is reported; nothing short-circuits. Whether errors are fatal is
the caller's decision.
"""

from collections.abc import Mapping
from typing import Any

import structlog

from ..schema.models import FieldRule, ValidationSchema
from .array_params import ArrayFieldGroup, fetch_array_params
from .models import ValidationError

logger = structlog.get_logger(__name__)


def validate(
    record: Mapping[str, Any],
    schema: ValidationSchema,
    mode: str | None,
) -> list[ValidationError]:
    """Validate a record against a schema.

    Args:
        record: Field map of the request
        schema: Loaded validation schema
        mode: Transaction mode (MODE field), None if unset

    Returns:
        Every validation error found, in schema order
    """
    errors: list[ValidationError] = []
    array_params = fetch_array_params(record)

    for rule in schema.rules:
        group = array_params.get(rule.name)

        if rule.is_required(mode) and not _is_present(rule.name, record, group):
            logger.error(
                "Missing required field",
                field=rule.name,
                mode=mode,
            )
            errors.append(ValidationError.missing(rule.name, mode))

        if rule.name in record:
            errors.extend(_check_value(rule, rule.name, record[rule.name]))
        elif group:
            for key in group:
                errors.extend(_check_value(rule, key, record[key]))

    logger.debug(
        "Validation finished",
        mode=mode,
        rules=len(schema.rules),
        errors=len(errors),
    )
    return errors


def _is_present(
    name: str,
    record: Mapping[str, Any],
    group: ArrayFieldGroup | None,
) -> bool:
    """A field is present as an exact key, or through a non-empty array family."""
    return name in record or bool(group)


def _check_value(rule: FieldRule, key: str, raw_value: Any) -> list[ValidationError]:
    """Run the length and pattern checks of a rule against one value."""
    errors: list[ValidationError] = []
    value = "" if raw_value is None else str(raw_value)

    if rule.exempt_when_empty and value == "":
        return errors

    if rule.max_length is not None and len(value) > rule.max_length:
        logger.error(
            "Field is too long",
            field=key,
            length=len(value),
            max_length=rule.max_length,
        )
        errors.append(ValidationError.too_long(key, value, rule.max_length))

    if rule.pattern is not None and not _matches(rule, value):
        logger.error(
            "Field does not match pattern",
            field=key,
            pattern=rule.pattern_text,
        )
        errors.append(ValidationError.pattern_mismatch(key, value, rule.pattern_text))

    return errors


def _matches(rule: FieldRule, value: str) -> bool:
    """Full-match the value; evaluation failures count as a mismatch."""
    try:
        return rule.pattern.fullmatch(value) is not None
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning("Pattern evaluation failed", field=rule.name, error=str(e))
        return False
