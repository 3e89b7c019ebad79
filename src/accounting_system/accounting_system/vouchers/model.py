from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from ..common.patch import UNSET
from ..common.serialization import dump_fields
from ..common.validators import optional_text, parse_choice, parse_iso_date, parse_money, require_int
from ..core.enums import VoucherStatus


@dataclass(frozen=True)
class Voucher:
    """Expense record awaiting or having completed accounting approval."""

    voucher_id: int
    vendor_id: int
    amount: Decimal
    voucher_date: date
    description: Optional[str]
    status: VoucherStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def month(self) -> str:
        return self.voucher_date.strftime("%Y-%m")

    def to_dict(self) -> dict:
        data = dump_fields(self)
        data["date"] = data.pop("voucher_date")
        return data


@dataclass(frozen=True)
class NewVoucher:
    vendor_id: int
    amount: Decimal
    voucher_date: date
    description: Optional[str] = None
    status: VoucherStatus = VoucherStatus.PENDING

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "NewVoucher":
        status = data.get("status")
        return cls(
            vendor_id=require_int(data.get("vendor_id"), "vendor_id"),
            amount=parse_money(data.get("amount"), "amount"),
            voucher_date=parse_iso_date(data.get("date"), "date"),
            description=optional_text(data.get("description")),
            status=parse_choice(status, VoucherStatus, "status") if status else VoucherStatus.PENDING,
        )


@dataclass(frozen=True)
class VoucherPatch:
    vendor_id: Any = UNSET
    amount: Any = UNSET
    voucher_date: Any = UNSET
    description: Any = UNSET
    status: Any = UNSET

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "VoucherPatch":
        values: dict[str, Any] = {}
        if "vendor_id" in data:
            values["vendor_id"] = require_int(data["vendor_id"], "vendor_id")
        if "amount" in data:
            values["amount"] = parse_money(data["amount"], "amount")
        if "date" in data:
            values["voucher_date"] = parse_iso_date(data["date"], "date")
        if "description" in data:
            values["description"] = optional_text(data["description"])
        if "status" in data:
            values["status"] = parse_choice(data["status"], VoucherStatus, "status")
        return cls(**values)
