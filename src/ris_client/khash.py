# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""KHASH payment token hashing.

KHASH replaces a raw payment token with a one-way, salted digest before it
leaves the merchant. The digest keeps the first six characters of the token
(the BIN for cards) so the service can still reason about the issuer.

Gift card numbers are only unique per merchant, so their digest is prefixed
with the merchant id instead.
"""

import hashlib
import string

from .errors import ConfigurationError

LEGAL_CHARS = string.digits + string.ascii_uppercase
HASH_LENGTH = 14

_LOOP_MAX = HASH_LENGTH * 2
_HEX_CHUNK = 7
_TOKEN_PREFIX = 6


class Khash:
    """Salted KHASH digests for payment tokens.

    Each instance carries its own salt; build one instance per salt.
    """

    def __init__(self, salt: str) -> None:
        if not salt:
            raise ConfigurationError("RIS_KHASH_SALT")
        self._salt = salt

    def hash(self, plain_text: str) -> str:
        """Return the 14-character KHASH digest of ``plain_text``."""
        digest = hashlib.sha1(f"{plain_text}.{self._salt}".encode("utf-8")).hexdigest()
        return "".join(
            LEGAL_CHARS[int(digest[i:i + _HEX_CHUNK], 16) % len(LEGAL_CHARS)]
            for i in range(0, _LOOP_MAX, 2)
        )

    def hash_payment_token(self, token: str) -> str:
        """Hash a payment token, keeping its first six characters."""
        if not token:
            return ""
        return f"{token[:_TOKEN_PREFIX]}{self.hash(token)}"

    def hash_gift_card(self, merchant_id: int, card_number: str) -> str:
        """Hash a gift card number scoped to the merchant."""
        if not card_number:
            return ""
        return f"{merchant_id}{self.hash(card_number)}"
