# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""
Payment token encoding

Turns a raw payment token into the value stored in ``PTOK`` (KHASH digest,
MASK form, or the raw token) and derives the ``LAST4`` digest.
"""

from enum import Enum
from typing import NamedTuple

import structlog

from .errors import EncodingError
from .khash import Khash

logger = structlog.get_logger(__name__)

MASK_CHAR = "X"
MASK_PREFIX_LENGTH = 6
MASK_SUFFIX_LENGTH = 4
MIN_MASKABLE_LENGTH = MASK_PREFIX_LENGTH + MASK_SUFFIX_LENGTH

LAST4_LENGTH = 4


class PaymentType(str, Enum):
    """Payment type codes sent in ``PTYP``."""

    CARD = "CARD"
    CHECK = "CHEK"
    PAYPAL = "PYPL"
    GOOGLE = "GOOG"
    GIFT_CARD = "GIFT"
    BILL_ME_LATER = "BLML"
    GREEN_DOT_MONEY_PAK = "GDMP"
    NONE = "NONE"


class PaymentEncoding(str, Enum):
    """Payment encoding modes sent in ``PENC``."""

    NONE = ""
    KHASH = "KHASH"
    MASK = "MASK"


class EncodedToken(NamedTuple):
    """Value to store in ``PTOK`` and the matching ``LAST4``."""

    token: str
    last4: str


def mask_token(token: str) -> str:
    """
    Mask a card number for the MASK encoding.

    The first 6 and last 4 characters stay as they are, everything in
    between becomes ``X``: ``0007380568572514`` -> ``000738XXXXXX2514``.

    Raises:
        EncodingError: if the token is shorter than 10 characters, where
            the kept prefix and suffix would overlap.
    """
    if token is None or len(token) < MIN_MASKABLE_LENGTH:
        length = 0 if token is None else len(token)
        raise EncodingError(
            f"Token of length {length} cannot be masked, "
            f"at least {MIN_MASKABLE_LENGTH} characters are required",
            details={"length": length, "min_length": MIN_MASKABLE_LENGTH},
        )

    hidden = len(token) - MIN_MASKABLE_LENGTH
    return (
        token[:MASK_PREFIX_LENGTH]
        + MASK_CHAR * hidden
        + token[len(token) - MASK_SUFFIX_LENGTH:]
    )


def last4_of(token: str) -> str:
    """Return the last four characters of a token, or the whole short token."""
    if len(token) > LAST4_LENGTH:
        return token[-LAST4_LENGTH:]
    return token


class TokenEncoder:
    """Encode payment tokens for one merchant.

    Example usage:
        encoder = TokenEncoder(Khash(salt), merchant_id=999666)
        encoded = encoder.encode("4111111111111111", PaymentType.CARD, khash_enabled=True)
        record["PTOK"], record["LAST4"] = encoded
    """

    def __init__(self, khash: Khash | None, merchant_id: int) -> None:
        self._khash = khash
        self._merchant_id = merchant_id

    @property
    def can_hash(self) -> bool:
        """Check if a KHASH collaborator is available."""
        return self._khash is not None

    @property
    def merchant_id(self) -> int:
        return self._merchant_id

    @merchant_id.setter
    def merchant_id(self, value: int) -> None:
        self._merchant_id = value

    def encode(
        self,
        raw_token: str,
        payment_type: PaymentType | str,
        khash_enabled: bool,
        last4: str | None = None,
    ) -> EncodedToken:
        """Encode a raw token.

        Args:
            raw_token: Token as given by the caller (already masked for MASK)
            payment_type: PTYP code; gift cards hash with the merchant id
            khash_enabled: Store the KHASH digest instead of the raw token
            last4: LAST4 already present on the record, kept as is

        Returns:
            EncodedToken with the stored token and LAST4 value
        """
        raw_token = raw_token or ""
        if last4 is None:
            last4 = last4_of(raw_token)

        if not khash_enabled:
            return EncodedToken(raw_token, last4)

        if self._khash is None:
            raise EncodingError(
                "KHASH encoding requested but no salt is configured",
                details={"payment_type": str(payment_type)},
            )

        if payment_type == PaymentType.GIFT_CARD:
            token = self._khash.hash_gift_card(self._merchant_id, raw_token)
        else:
            token = self._khash.hash_payment_token(raw_token)

        logger.debug(
            "Payment token hashed",
            payment_type=getattr(payment_type, "value", payment_type),
            token_length=len(raw_token),
        )
        return EncodedToken(token, last4)
