# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Validation schema loading.

The packaged ``validate.yaml`` is loaded once per process and shared; a
custom schema file can be loaded with ``load_schema(path)``.
"""

from functools import lru_cache
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError as PydanticValidationError

from ..errors import SchemaLoadError
from .models import ValidationSchema

logger = structlog.get_logger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).parent / "validate.yaml"


def load_schema(path: str | Path | None = None) -> ValidationSchema:
    """Load a validation schema from a YAML file.

    Args:
        path: Schema file. Defaults to the packaged validate.yaml.

    Raises:
        SchemaLoadError: if the file is unreadable or its content is malformed
    """
    schema_path = Path(path) if path else DEFAULT_SCHEMA_PATH

    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        logger.error("Validation schema unreadable", path=str(schema_path), error=str(e))
        raise SchemaLoadError(str(schema_path), str(e)) from e
    except yaml.YAMLError as e:
        logger.error("Validation schema is not valid YAML", path=str(schema_path), error=str(e))
        raise SchemaLoadError(str(schema_path), f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise SchemaLoadError(str(schema_path), "expected a mapping with a 'rules' list")

    try:
        schema = ValidationSchema.model_validate(data)
    except PydanticValidationError as e:
        logger.error("Validation schema rejected", path=str(schema_path), error=str(e))
        raise SchemaLoadError(str(schema_path), str(e)) from e

    logger.debug(
        "Loaded validation schema",
        path=str(schema_path),
        version=schema.version,
        rules=len(schema.rules),
    )
    return schema


@lru_cache
def get_schema(path: str | None = None) -> ValidationSchema:
    """Get the cached schema for a path (packaged schema when None)."""
    return load_schema(path)


def clear_schema_cache() -> None:
    """Clear the schema cache (useful for testing)."""
    get_schema.cache_clear()
