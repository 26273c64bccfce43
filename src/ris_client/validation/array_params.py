# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Array (line-item) field grouping.

Cart line items travel as indexed fields: PROD_TYPE0, PROD_TYPE1, ...
Grouping them by family lets one schema rule named PROD_TYPE cover every
indexed field. Matching is a plain prefix test, so any suffix counts.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

PROD_TYPE = "PROD_TYPE"
PROD_ITEM = "PROD_ITEM"
PROD_DESC = "PROD_DESC"
PROD_QUANT = "PROD_QUANT"
PROD_PRICE = "PROD_PRICE"

ARRAY_FAMILIES: tuple[str, ...] = (
    PROD_TYPE,
    PROD_ITEM,
    PROD_DESC,
    PROD_QUANT,
    PROD_PRICE,
)


@dataclass
class ArrayFieldGroup:
    """Concrete fields of one array family found in a record."""

    family: str
    fields: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.fields)

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


def family_of(name: str) -> str | None:
    """Return the array family a field name belongs to, if any."""
    for family in ARRAY_FAMILIES:
        if name.startswith(family):
            return family
    return None


def fetch_array_params(record: Mapping[str, Any]) -> dict[str, ArrayFieldGroup]:
    """Group the record's array fields by family.

    Every family is always present in the result, empty when the record
    has no field for it.
    """
    groups = {family: ArrayFieldGroup(family) for family in ARRAY_FAMILIES}
    for key in record:
        family = family_of(key)
        if family is not None:
            groups[family].fields.append(key)
    return groups
