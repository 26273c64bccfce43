# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""RIS inquiry request: asks the service to score a new order."""

from dataclasses import dataclass
from enum import Enum

from .record import MODE
from .request import Request, _safe
from .validation import family_of
from .validation.array_params import PROD_DESC, PROD_ITEM, PROD_PRICE, PROD_QUANT, PROD_TYPE

DEFAULT_CURRENCY = "USD"


class InquiryType(str, Enum):
    """Inquiry transaction modes."""

    INQUIRY = "Q"
    PHONE_ORDER = "P"
    KOUNT_CENTRAL_FULL = "W"
    KOUNT_CENTRAL_THRESHOLD = "J"


class ShipmentType(str, Enum):
    """Shipment speed codes sent in SHTP."""

    SAME_DAY = "SD"
    NEXT_DAY = "ND"
    SECOND_DAY = "2D"
    STANDARD = "ST"


@dataclass(frozen=True)
class CartItem:
    """One cart line item.

    Price is in the currency's minor units (cents for USD).
    """

    product_type: str
    item_name: str
    description: str
    quantity: int
    price: int


class Inquiry(Request):
    """Inquiry request, mode Q unless changed with set_mode()."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.set_mode(InquiryType.INQUIRY)
        self.set_currency(DEFAULT_CURRENCY)

    def set_mode(self, mode: InquiryType | str) -> None:
        """Set the inquiry mode.

        Raises:
            ValueError: if the mode is not an inquiry mode
        """
        self._record.set(MODE, InquiryType(mode).value)

    def set_currency(self, currency: str) -> None:
        """Set the ISO 4217 currency code of the order total."""
        self._record.set("CURR", currency)

    def set_total(self, total: int) -> None:
        """Set the order total in minor units."""
        self._record.set("TOTL", total)

    def set_email(self, email: str | None) -> None:
        self._record.set("EMAL", _safe(email))

    def set_ip_address(self, address: str | None) -> None:
        self._record.set("IPAD", _safe(address))

    def set_name(self, name: str | None) -> None:
        self._record.set("NAME", _safe(name))

    def set_unique_customer_id(self, customer_id: str | None) -> None:
        self._record.set("UNIQ", _safe(customer_id))

    def set_website(self, site: str) -> None:
        """Set the website id configured for the merchant."""
        self._record.set("SITE", site)

    def set_anid(self, anid: str | None) -> None:
        """Set the automatic number identification (caller phone number)."""
        self._record.set("ANID", _safe(anid))

    def set_shipment_type(self, shipment_type: ShipmentType | str) -> None:
        self._record.set("SHTP", ShipmentType(shipment_type).value)

    def set_user_defined_field(self, label: str, value: str) -> None:
        self._record.set(f"UDF[{label}]", value)

    def set_cart(self, items: list[CartItem]) -> None:
        """Replace the cart line items.

        Writes PROD_TYPE<i>, PROD_ITEM<i>, PROD_DESC<i>, PROD_QUANT<i> and
        PROD_PRICE<i> for every item, indexed from 0.
        """
        for key in [k for k in self._record if family_of(k) is not None]:
            self._record.remove(key)

        for index, item in enumerate(items):
            self._record.set(f"{PROD_TYPE}{index}", item.product_type)
            self._record.set(f"{PROD_ITEM}{index}", item.item_name)
            self._record.set(f"{PROD_DESC}{index}", item.description)
            self._record.set(f"{PROD_QUANT}{index}", item.quantity)
            self._record.set(f"{PROD_PRICE}{index}", item.price)
