# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""RIS client error code system.

Every error raised by the client carries a machine-readable code, a
human-readable message and optional details, so callers can branch on
``error.code`` instead of parsing messages.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .validation.models import ValidationError


class RisErrorCode(str, Enum):
    """Standard RIS client error codes."""

    # Setup
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    SCHEMA_LOAD_ERROR = "SCHEMA_LOAD_ERROR"

    # Request data
    VALIDATION_FAILED = "VALIDATION_FAILED"
    ENCODING_ERROR = "ENCODING_ERROR"

    # Remote service
    TRANSPORT_ERROR = "TRANSPORT_ERROR"


class RisError(Exception):
    """Base exception for RIS client errors.

    Usage:
        raise RisError(
            code=RisErrorCode.CONFIGURATION_ERROR,
            message="[RIS_URL] must be defined",
            details={"parameter": "RIS_URL"},
        )
    """

    def __init__(
        self,
        code: RisErrorCode | str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code if isinstance(code, RisErrorCode) else RisErrorCode(code)
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }


# =============================================================================
# Specific Error Classes
# =============================================================================


class ConfigurationError(RisError):
    """Raised when a required setup value is absent."""

    def __init__(self, parameter: str, message: str | None = None):
        super().__init__(
            code=RisErrorCode.CONFIGURATION_ERROR,
            message=message or f"[{parameter}] must be defined in the client configuration",
            details={"parameter": parameter},
        )
        self.parameter = parameter


class SchemaLoadError(RisError):
    """Raised when the validation schema cannot be read or parsed."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            code=RisErrorCode.SCHEMA_LOAD_ERROR,
            message=f"Unable to load validation schema from {source}: {reason}",
            details={"source": source, "reason": reason},
        )
        self.source = source


class ValidationFailedError(RisError):
    """Raised in strict mode when the request record has validation errors.

    The message joins every field-level error, one per line.
    """

    def __init__(self, errors: list["ValidationError"]):
        self.errors = list(errors)
        super().__init__(
            code=RisErrorCode.VALIDATION_FAILED,
            message="\n".join(str(error) for error in self.errors),
            details={"count": len(self.errors), "fields": [e.field for e in self.errors]},
        )


class EncodingError(RisError):
    """Raised when a payment token cannot be encoded."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code=RisErrorCode.ENCODING_ERROR,
            message=message,
            details=details,
        )


class TransportError(RisError):
    """Raised when the RIS endpoint cannot be reached or answers with an error."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ):
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if url:
            details["url"] = url
        super().__init__(
            code=RisErrorCode.TRANSPORT_ERROR,
            message=message,
            details=details or None,
        )
        self.status_code = status_code
