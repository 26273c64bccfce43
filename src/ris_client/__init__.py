"""RIS fraud-screening API client.

- Request builders (Inquiry, Update) with typed field setters
- Payment token encoding (KHASH, MASK) and LAST4 derivation
- Schema-driven, mode-aware request validation
- HTTP transport and response reader
"""

from .config import Settings, clear_settings_cache, get_settings
from .encoding import EncodedToken, PaymentEncoding, PaymentType, TokenEncoder, mask_token
from .errors import (
    ConfigurationError,
    EncodingError,
    RisError,
    RisErrorCode,
    SchemaLoadError,
    TransportError,
    ValidationFailedError,
)
from .inquiry import CartItem, Inquiry, InquiryType, ShipmentType
from .khash import Khash
from .record import RequestRecord
from .request import Request
from .response import RisResponse
from .transport import RisTransport
from .update import RefundChargebackStatus, Update, UpdateType
from .validation import ValidationError, ValidationErrorKind, validate

__all__ = [
    # Configuration
    "Settings",
    "clear_settings_cache",
    "get_settings",
    # Errors
    "ConfigurationError",
    "EncodingError",
    "RisError",
    "RisErrorCode",
    "SchemaLoadError",
    "TransportError",
    "ValidationFailedError",
    # Encoding
    "EncodedToken",
    "Khash",
    "PaymentEncoding",
    "PaymentType",
    "TokenEncoder",
    "mask_token",
    # Requests
    "CartItem",
    "Inquiry",
    "InquiryType",
    "RefundChargebackStatus",
    "Request",
    "RequestRecord",
    "ShipmentType",
    "Update",
    "UpdateType",
    # Validation
    "ValidationError",
    "ValidationErrorKind",
    "validate",
    # Transport
    "RisResponse",
    "RisTransport",
]
