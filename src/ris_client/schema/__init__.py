"""Field validation schema: rule models and YAML loading."""

from .loader import DEFAULT_SCHEMA_PATH, clear_schema_cache, get_schema, load_schema
from .models import FieldRule, ValidationSchema

__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "FieldRule",
    "ValidationSchema",
    "clear_schema_cache",
    "get_schema",
    "load_schema",
]
