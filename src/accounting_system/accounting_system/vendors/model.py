from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..common.patch import UNSET
from ..common.serialization import dump_fields
from ..common.validators import optional_text, require_non_empty


@dataclass(frozen=True)
class Vendor:
    """External payee referenced by vouchers."""

    vendor_id: int
    name: str
    tax_id: str
    phone: Optional[str] = None
    bank_account: Optional[str] = None
    contact_person: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return dump_fields(self)


@dataclass(frozen=True)
class NewVendor:
    name: str
    tax_id: str
    phone: Optional[str] = None
    bank_account: Optional[str] = None
    contact_person: Optional[str] = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "NewVendor":
        return cls(
            name=require_non_empty(data.get("name"), "name"),
            tax_id=require_non_empty(data.get("tax_id"), "tax_id"),
            phone=optional_text(data.get("phone")),
            bank_account=optional_text(data.get("bank_account")),
            contact_person=optional_text(data.get("contact_person")),
        )


@dataclass(frozen=True)
class VendorPatch:
    name: Any = UNSET
    tax_id: Any = UNSET
    phone: Any = UNSET
    bank_account: Any = UNSET
    contact_person: Any = UNSET

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "VendorPatch":
        values: dict[str, Any] = {}
        for key in ("name", "tax_id"):
            if key in data:
                values[key] = require_non_empty(data[key], key)
        for key in ("phone", "bank_account", "contact_person"):
            if key in data:
                values[key] = optional_text(data[key])
        return cls(**values)
