from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from ..common.patch import UNSET
from ..common.serialization import dump_fields
from ..common.validators import (
    optional_email,
    optional_text,
    parse_choice,
    parse_iso_date,
    parse_money,
    require_non_empty,
)
from ..core.enums import EmployeeStatus

_REQUIRED_TEXT = ("name", "department", "position", "phone")
_OPTIONAL_TEXT = (
    "bank_account",
    "bank_name",
    "emergency_contact_name",
    "emergency_contact_phone",
    "emergency_contact_relationship",
)


@dataclass(frozen=True)
class Employee:
    employee_id: int
    name: str
    department: str
    position: str
    phone: str
    join_date: date
    status: EmployeeStatus
    base_salary: Decimal
    allowance: Decimal
    email: Optional[str] = None
    bank_account: Optional[str] = None
    bank_name: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_relationship: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return dump_fields(self)


@dataclass(frozen=True)
class NewEmployee:
    name: str
    department: str
    position: str
    phone: str
    join_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    base_salary: Decimal = Decimal("0.00")
    allowance: Decimal = Decimal("0.00")
    email: Optional[str] = None
    bank_account: Optional[str] = None
    bank_name: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_relationship: Optional[str] = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "NewEmployee":
        values: dict[str, Any] = {key: require_non_empty(data.get(key), key) for key in _REQUIRED_TEXT}
        values["join_date"] = parse_iso_date(data.get("join_date"), "join_date")
        if data.get("status"):
            values["status"] = parse_choice(data["status"], EmployeeStatus, "status")
        for key in ("base_salary", "allowance"):
            if data.get(key) not in (None, ""):
                values[key] = parse_money(data[key], key)
        values["email"] = optional_email(data.get("email"))
        for key in _OPTIONAL_TEXT:
            values[key] = optional_text(data.get(key))
        return cls(**values)


@dataclass(frozen=True)
class EmployeePatch:
    name: Any = UNSET
    department: Any = UNSET
    position: Any = UNSET
    phone: Any = UNSET
    join_date: Any = UNSET
    status: Any = UNSET
    base_salary: Any = UNSET
    allowance: Any = UNSET
    email: Any = UNSET
    bank_account: Any = UNSET
    bank_name: Any = UNSET
    emergency_contact_name: Any = UNSET
    emergency_contact_phone: Any = UNSET
    emergency_contact_relationship: Any = UNSET

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "EmployeePatch":
        values: dict[str, Any] = {}
        for key in _REQUIRED_TEXT:
            if key in data:
                values[key] = require_non_empty(data[key], key)
        if "join_date" in data:
            values["join_date"] = parse_iso_date(data["join_date"], "join_date")
        if "status" in data:
            values["status"] = parse_choice(data["status"], EmployeeStatus, "status")
        for key in ("base_salary", "allowance"):
            if key in data:
                values[key] = parse_money(data[key], key)
        if "email" in data:
            values["email"] = optional_email(data["email"])
        for key in _OPTIONAL_TEXT:
            if key in data:
                values[key] = optional_text(data[key])
        return cls(**values)
