# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Request record: the field map of one in-flight RIS transaction.

Field values are either strings (single-character codes included) or
integers. The record is not thread-safe; use one record per transaction.
"""

from collections.abc import Iterator, Mapping

FieldValue = str | int

# Wire field keys
MERC = "MERC"
VERS = "VERS"
MODE = "MODE"
PTYP = "PTYP"
PTOK = "PTOK"
PENC = "PENC"
LAST4 = "LAST4"
SESS = "SESS"
ORDR = "ORDR"
MACK = "MACK"
AUTH = "AUTH"
AVSZ = "AVSZ"
AVST = "AVST"
CVVR = "CVVR"
CUSTOMER_ID = "CUSTOMER_ID"

# Fields whose values never appear in logs or error messages
HIDDEN_FIELDS = frozenset({PTOK})
HIDDEN_VALUE = "payment token hidden"


class RequestRecord(Mapping[str, FieldValue]):
    """Mutable mapping of RIS field names to values."""

    def __init__(self, data: Mapping[str, FieldValue] | None = None) -> None:
        self._data: dict[str, FieldValue] = {}
        for key, value in (data or {}).items():
            self.set(key, value)

    def __getitem__(self, key: str) -> FieldValue:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"RequestRecord({sorted(self._data)})"

    def set(self, key: str, value: FieldValue) -> None:
        """Set a field, rejecting values outside the str/int variant."""
        if not isinstance(key, str) or not key:
            raise TypeError("Field name must be a non-empty string")
        # bool is an int subclass but has no wire form
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise TypeError(
                f"Field [{key}] must be a str or int, got {type(value).__name__}"
            )
        self._data[key] = value

    def remove(self, key: str) -> None:
        """Remove a field if present."""
        self._data.pop(key, None)

    def get_str(self, key: str) -> str:
        """Return a field as a string, or an empty string when absent."""
        value = self._data.get(key)
        return "" if value is None else str(value)

    def snapshot(self) -> dict[str, FieldValue]:
        """Return a detached copy of the fields."""
        return dict(self._data)
