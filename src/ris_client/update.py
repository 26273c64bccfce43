# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""RIS update request: changes a transaction already known to the service."""

from enum import Enum

from .record import MODE
from .request import Request


class UpdateType(str, Enum):
    """Update transaction modes."""

    NO_RESPONSE = "U"
    WITH_RESPONSE = "X"


class RefundChargebackStatus(str, Enum):
    """Refund or chargeback status sent in RFCB."""

    REFUND = "R"
    CHARGEBACK = "C"


class Update(Request):
    """Update request, mode U unless changed with set_mode()."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.set_mode(UpdateType.NO_RESPONSE)

    def set_mode(self, mode: UpdateType | str) -> None:
        """Set the update mode.

        Raises:
            ValueError: if the mode is not an update mode
        """
        self._record.set(MODE, UpdateType(mode).value)

    def set_transaction_id(self, transaction_id: str) -> None:
        """Set the RIS transaction id returned by the original inquiry."""
        self._record.set("TRAN", transaction_id)

    def set_refund_chargeback_status(self, status: RefundChargebackStatus | str) -> None:
        self._record.set("RFCB", RefundChargebackStatus(status).value)
