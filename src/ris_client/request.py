# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Base RIS request.

A request owns the field record of one transaction. Setters write wire
fields (payment setters run the token encoder), ``validate()`` checks the
record against the field schema and ``get_response()`` submits it.

Example usage:
    inquiry = Inquiry()
    inquiry.set_session_id("f3a9c5e0b1d24e7f")
    inquiry.set_card_payment("4111111111111111")
    response = inquiry.get_response()
"""

from abc import ABC, abstractmethod
from enum import Enum

import httpx
import structlog

from .config import Settings, get_settings
from .encoding import PaymentEncoding, PaymentType, TokenEncoder, mask_token
from .errors import ConfigurationError, ValidationFailedError
from .khash import Khash
from .record import (
    AUTH,
    AVST,
    AVSZ,
    CUSTOMER_ID,
    CVVR,
    LAST4,
    MACK,
    MERC,
    MODE,
    ORDR,
    PENC,
    PTOK,
    PTYP,
    SESS,
    VERS,
    FieldValue,
    RequestRecord,
)
from .response import RisResponse
from .schema import ValidationSchema, get_schema
from .transport import RisTransport
from .validation import ValidationError, validate

logger = structlog.get_logger(__name__)


def _safe(value: str | None) -> str:
    return "" if value is None else value


def _wire(value: FieldValue | Enum) -> FieldValue:
    """Unwrap enum members to their wire value."""
    return value.value if isinstance(value, Enum) else value


class Request(ABC):
    """Abstract parent of RIS requests (Inquiry, Update)."""

    def __init__(
        self,
        settings: Settings | None = None,
        check_configuration: bool = True,
        khash: Khash | None = None,
        schema: ValidationSchema | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Build a request from the client settings.

        Args:
            settings: Client settings. Defaults to get_settings().
            check_configuration: Require RIS_URL and RIS_KHASH_SALT
            khash: KHASH collaborator. Defaults to one salted with RIS_KHASH_SALT.
            schema: Validation schema. Defaults to the configured/packaged one.
            http_transport: httpx transport override used when posting

        Raises:
            ConfigurationError: if a required setting is missing
        """
        self._settings = settings or get_settings()
        self._record = RequestRecord()
        self._schema = schema
        self._http_transport = http_transport

        self._check_configuration_parameter("merchant_id")
        if check_configuration:
            self._check_configuration_parameter("url")
            self._check_configuration_parameter("khash_salt")
        # timeout must always be defined
        self._check_configuration_parameter("connect_timeout")

        if khash is None and self._settings.khash_salt:
            khash = Khash(self._settings.khash_salt)
        self._encoder = TokenEncoder(khash, self._settings.merchant_id)

        self.set_merchant_id(self._settings.merchant_id)
        self.set_version(self._settings.version)
        self._url = self._settings.url
        self._connect_timeout = self._settings.connect_timeout

        self._api_key: str | None = None
        self._certificate: str | None = None
        self._password: str | None = None
        if self._settings.uses_api_key:
            self.set_api_key(self._settings.api_key)
        else:
            self._check_configuration_parameter("certificate_file")
            self._check_configuration_parameter("private_key_password")
            self.set_certificate(
                self._settings.certificate_file,
                self._settings.private_key_password,
            )

        # KHASH payment encoding is set by default.
        if self._encoder.can_hash:
            self.set_khash_payment_encoding(True)
        else:
            logger.warning("No KHASH salt configured, payment tokens will be sent unhashed")
            self.set_khash_payment_encoding(False)

    # =========================================================================
    # Record access
    # =========================================================================

    @property
    def record(self) -> RequestRecord:
        """The live field record of this request."""
        return self._record

    @property
    def schema(self) -> ValidationSchema:
        """The validation schema applied to this request."""
        if self._schema is None:
            self._schema = get_schema(self._settings.schema_path)
        return self._schema

    def set_parameter(self, key: str, value: FieldValue) -> None:
        """Set any wire field."""
        self._record.set(key, _wire(value))

    def get_param(self, key: str) -> str:
        """Return a field as a string, or an empty string when absent."""
        if not key:
            return ""
        return self._record.get_str(key)

    # =========================================================================
    # Scalar fields
    # =========================================================================

    @abstractmethod
    def set_mode(self, mode: str) -> None:
        """Set the transaction mode; allowed values depend on the request type."""

    def set_merchant_id(self, merchant_id: int) -> None:
        self._record.set(MERC, merchant_id)
        self._encoder.merchant_id = merchant_id

    def set_version(self, version: str) -> None:
        self._record.set(VERS, version)

    def set_kount_central_customer_id(self, customer_id: str) -> None:
        self._record.set(CUSTOMER_ID, _safe(customer_id))

    def set_session_id(self, session_id: str | None) -> None:
        self._record.set(SESS, _safe(session_id))

    def set_order_number(self, order_number: str | None) -> None:
        """Set the merchant order number (unique, up to 32 characters)."""
        self._record.set(ORDR, _safe(order_number))

    def set_mack(self, mack: str) -> None:
        """Merchant acknowledgement that the product will ship: Y or N."""
        self._record.set(MACK, mack)

    def set_auth(self, auth: str) -> None:
        """Authorization status of the payment: A or D."""
        self._record.set(AUTH, auth)

    def set_avsz(self, avsz: str) -> None:
        """Bankcard AVS zip code reply: M, N or X."""
        self._record.set(AVSZ, avsz)

    def set_avst(self, avst: str) -> None:
        """Bankcard AVS street address reply: M, N or X."""
        self._record.set(AVST, avst)

    def set_cvvr(self, cvvr: str) -> None:
        """Bankcard CVV/CVC/CVV2 reply: M, N or X."""
        self._record.set(CVVR, cvvr)

    # =========================================================================
    # Payments
    # =========================================================================

    def set_card_payment(self, card_number: str | None) -> None:
        self._set_payment_token(PaymentType.CARD, card_number)

    def set_card_payment_masked(self, card_number: str | None) -> None:
        """Set a card payment using the MASK encoding.

        The first 6 and last 4 characters are kept and everything in between
        is replaced with ``X``: 0007380568572514 -> 000738XXXXXX2514.

        Raises:
            EncodingError: if the card number is shorter than 10 characters.
                The record is left unchanged.
        """
        masked = mask_token(_safe(card_number))
        self._record.set(PENC, PaymentEncoding.MASK.value)
        self._set_payment_token(PaymentType.CARD, masked, khash_enabled=False)

    def set_check_payment(self, micr: str | None) -> None:
        """Set a check payment from the MICR line."""
        self._set_payment_token(PaymentType.CHECK, micr)

    def set_paypal_payment(self, paypal_id: str | None) -> None:
        self._set_payment_token(PaymentType.PAYPAL, paypal_id)

    def set_google_payment(self, google_id: str | None) -> None:
        self._set_payment_token(PaymentType.GOOGLE, google_id)

    def set_gift_card_payment(self, gift_card_number: str | None) -> None:
        self._set_payment_token(PaymentType.GIFT_CARD, gift_card_number)

    def set_bill_me_later_payment(self, blml_id: str | None) -> None:
        self._set_payment_token(PaymentType.BILL_ME_LATER, blml_id)

    def set_green_dot_money_pak_payment(self, payment_id: str | None) -> None:
        self._set_payment_token(PaymentType.GREEN_DOT_MONEY_PAK, payment_id)

    def set_no_payment(self) -> None:
        """Set no payment. The encoder is bypassed and PENC left untouched."""
        self._record.set(PTYP, PaymentType.NONE.value)
        self._record.set(PTOK, "")

    def set_payment(self, ptyp: PaymentType | str, ptok: str | None) -> None:
        """Set any payment type code with its token."""
        logger.debug("Setting payment", payment_type=_wire(ptyp))
        self._set_payment_token(ptyp, ptok)

    def set_payment_token_last4(self, last4: str) -> None:
        """Set LAST4 explicitly; later payment setters keep it."""
        self._record.set(LAST4, last4)

    def set_khash_payment_encoding(self, enabled: bool) -> None:
        """Enable or disable KHASH payment encoding.

        Raises:
            ConfigurationError: when enabling without a KHASH salt
        """
        if enabled and not self._encoder.can_hash:
            raise ConfigurationError(Settings.env_name("khash_salt"))
        encoding = PaymentEncoding.KHASH if enabled else PaymentEncoding.NONE
        self._record.set(PENC, encoding.value)

    @property
    def is_khash_payment_encoding(self) -> bool:
        """Check if KHASH payment encoding is set."""
        return self._record.get(PENC) == PaymentEncoding.KHASH.value

    def _set_payment_token(
        self,
        ptyp: PaymentType | str,
        token: str | None,
        khash_enabled: bool | None = None,
    ) -> None:
        """Encode a token and store PTYP, PTOK and, on first payment, LAST4."""
        if khash_enabled is None:
            khash_enabled = self.is_khash_payment_encoding

        existing_last4 = self._record.get(LAST4)
        encoded = self._encoder.encode(
            _safe(token),
            _wire(ptyp),
            khash_enabled,
            last4=None if existing_last4 is None else str(existing_last4),
        )

        self._record.set(PTYP, _wire(ptyp))
        if LAST4 not in self._record:
            self._record.set(LAST4, encoded.last4)
        self._record.set(PTOK, encoded.token)

    # =========================================================================
    # Connection
    # =========================================================================

    def get_url(self) -> str | None:
        return self._url

    def set_url(self, url: str) -> None:
        self._url = url

    def set_api_key(self, key: str) -> None:
        """Set the API key; takes precedence over a client certificate."""
        self._api_key = key

    def set_certificate(self, certificate: str, password: str) -> None:
        """Set the client certificate (PEM with private key) and its password."""
        self._certificate = certificate
        self._password = password

    def get_certificate_file(self) -> str | None:
        return self._certificate

    def get_private_key_password(self) -> str | None:
        return self._password

    def _build_transport(self) -> RisTransport:
        if self._api_key:
            return RisTransport(
                self._url,
                self._connect_timeout,
                api_key=self._api_key,
                transport=self._http_transport,
            )
        return RisTransport(
            self._url,
            self._connect_timeout,
            certificate_file=self._certificate,
            private_key_password=self._password,
            transport=self._http_transport,
        )

    # =========================================================================
    # Validation and submission
    # =========================================================================

    def validate(self, strict: bool = False) -> list[ValidationError]:
        """Validate the current record against the schema.

        Args:
            strict: Raise instead of returning when errors exist

        Raises:
            ValidationFailedError: in strict mode, with every error message
        """
        return self._validate_payload(self._record.snapshot(), strict)

    def get_response(self, strict: bool = True) -> RisResponse:
        """Validate and post the request, returning the RIS response.

        The record is not modified: validation and submission work on a
        snapshot, in which KHASH encoding is dropped when PTOK is empty.

        Args:
            strict: Raise on validation errors. When False, errors are logged
                and the request is sent anyway.
        """
        logger.debug("Submitting RIS request", url=self._url)
        payload = self._record.snapshot()

        if payload.get(PTOK, "") == "" and payload.get(PENC) == PaymentEncoding.KHASH.value:
            payload[PENC] = PaymentEncoding.NONE.value

        self._validate_payload(payload, strict)

        raw = self._build_transport().post(payload.items())
        logger.debug("RIS response received", length=len(raw))
        return RisResponse(raw)

    def _validate_payload(
        self,
        payload: dict[str, FieldValue],
        strict: bool,
    ) -> list[ValidationError]:
        mode = payload.get(MODE)
        errors = validate(payload, self.schema, None if mode is None else str(mode))
        if errors:
            logger.error(
                "Request validation errors",
                count=len(errors),
                errors=[str(error) for error in errors],
            )
            if strict:
                raise ValidationFailedError(errors)
        return errors

    def _check_configuration_parameter(self, field: str) -> None:
        """Raise ConfigurationError when a settings field is unset."""
        value = getattr(self._settings, field)
        if value is None or value == "":
            parameter = Settings.env_name(field)
            logger.error("Configuration parameter not defined", parameter=parameter)
            raise ConfigurationError(parameter)
