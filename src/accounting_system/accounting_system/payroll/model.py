from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..common.patch import UNSET
from ..common.serialization import dump_fields, to_json_value
from ..common.validators import (
    optional_text,
    parse_choice,
    parse_money,
    parse_period,
    require_int,
    require_non_empty,
)
from ..core.enums import PayrollStatus

ZERO = Decimal("0.00")


def compute_net_pay(base_salary: Decimal, allowance: Decimal, bonus: Decimal, deduction: Decimal) -> Decimal:
    return base_salary + allowance + bonus - deduction


@dataclass(frozen=True)
class PayrollRecord:
    """One employee's pay line for one period.

    `employee_name`, `department` and `position` are a snapshot taken when
    the line is first created; later employee edits do not reach them.
    `record_id` is None for a draft that has not been saved yet.
    """

    record_id: Optional[int]
    employee_id: int
    employee_name: str
    department: str
    position: str
    period: str
    base_salary: Decimal
    allowance: Decimal
    bonus: Decimal = ZERO
    deduction: Decimal = ZERO
    note: Optional[str] = None
    status: PayrollStatus = PayrollStatus.DRAFT
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def net_pay(self) -> Decimal:
        return compute_net_pay(self.base_salary, self.allowance, self.bonus, self.deduction)

    @property
    def is_finalized(self) -> bool:
        return self.status is PayrollStatus.FINALIZED

    def to_dict(self) -> dict:
        data = dump_fields(self)
        data["net_pay"] = to_json_value(self.net_pay)
        return data


@dataclass(frozen=True)
class NewPayrollRecord:
    employee_id: int
    employee_name: str
    department: str
    position: str
    period: str
    base_salary: Decimal
    allowance: Decimal
    bonus: Decimal = ZERO
    deduction: Decimal = ZERO
    note: Optional[str] = None
    status: PayrollStatus = PayrollStatus.DRAFT

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "NewPayrollRecord":
        status = data.get("status")
        return cls(
            employee_id=require_int(data.get("employee_id"), "employee_id"),
            employee_name=require_non_empty(data.get("employee_name"), "employee_name"),
            department=require_non_empty(data.get("department"), "department"),
            position=require_non_empty(data.get("position"), "position"),
            period=parse_period(data.get("period")),
            base_salary=parse_money(data.get("base_salary"), "base_salary"),
            allowance=parse_money(data.get("allowance", "0"), "allowance"),
            bonus=parse_money(data.get("bonus", "0"), "bonus"),
            deduction=parse_money(data.get("deduction", "0"), "deduction"),
            note=optional_text(data.get("note")),
            status=parse_choice(status, PayrollStatus, "status") if status else PayrollStatus.DRAFT,
        )

    def mutable_fields(self) -> "PayrollPatch":
        """The part of a batch line that may overwrite an existing record."""
        return PayrollPatch(
            base_salary=self.base_salary,
            allowance=self.allowance,
            bonus=self.bonus,
            deduction=self.deduction,
            note=self.note,
            status=self.status,
        )


@dataclass(frozen=True)
class PayrollPatch:
    base_salary: Any = UNSET
    allowance: Any = UNSET
    bonus: Any = UNSET
    deduction: Any = UNSET
    note: Any = UNSET
    status: Any = UNSET

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "PayrollPatch":
        values: dict[str, Any] = {}
        for key in ("base_salary", "allowance", "bonus", "deduction"):
            if key in data:
                values[key] = parse_money(data[key], key)
        if "note" in data:
            values["note"] = optional_text(data["note"])
        if "status" in data:
            values["status"] = parse_choice(data["status"], PayrollStatus, "status")
        return cls(**values)


@dataclass(frozen=True)
class PeriodPayroll:
    period: str
    status: PayrollStatus
    records: list[PayrollRecord] = field(default_factory=list)
    # False when the records are freshly seeded drafts, not yet saved.
    persisted: bool = False

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "status": self.status.value,
            "persisted": self.persisted,
            "records": [r.to_dict() for r in self.records],
        }


@dataclass(frozen=True)
class PeriodSummary:
    period: str
    total_amount: Decimal
    employee_count: int
    status: Optional[PayrollStatus]

    def to_dict(self) -> dict:
        return dump_fields(self)
