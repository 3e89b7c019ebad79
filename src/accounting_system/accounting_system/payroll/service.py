from __future__ import annotations

import io
import logging
from decimal import Decimal
from typing import Any, Iterable, Optional

import pandas as pd

from ..common.patch import supplied
from ..common.validators import parse_period, require_int
from ..core.enums import PayrollStatus
from ..core.exceptions import RecordLockedError, ValidationError
from ..database.connection import ensure_writable
from ..employees.repository import EmployeeRepository
from .model import ZERO, NewPayrollRecord, PayrollPatch, PayrollRecord, PeriodPayroll, PeriodSummary
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

EXPORT_SHEET = "Payroll"
EXPORT_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _shared_status(records: Iterable[PayrollRecord]) -> PayrollStatus:
    records = list(records)
    if records and all(r.is_finalized for r in records):
        return PayrollStatus.FINALIZED
    return PayrollStatus.DRAFT


def _locked(record: PayrollRecord) -> RecordLockedError:
    return RecordLockedError(
        f"Payroll for employee {record.employee_id} in {record.period} is finalized and can no longer change"
    )


def _changes_anything(current: PayrollRecord, patch: PayrollPatch) -> bool:
    return any(getattr(current, name) != value for name, value in supplied(patch).items())


class PayrollService:
    """Use case: monthly payroll.

    Flow: open a period (existing lines, or one seeded draft per active
    employee) -> adjust bonus/deduction -> save as draft -> finalize.
    Finalized lines are read-only.
    """

    def __init__(self, payroll: PayrollRepository, employees: EmployeeRepository):
        self._payroll = payroll
        self._employees = employees

    # --- reads ---

    def list_records(self) -> list[PayrollRecord]:
        return list(self._payroll.list_all())

    def get_record(self, record_id: int) -> Optional[PayrollRecord]:
        return self._payroll.get_by_id(require_int(record_id, "record_id"))

    def list_period(self, period: str) -> list[PayrollRecord]:
        return list(self._payroll.list_by_period(parse_period(period)))

    def get_or_init_period(self, period: str) -> PeriodPayroll:
        period = parse_period(period)
        existing = list(self._payroll.list_by_period(period))
        if existing:
            return PeriodPayroll(period=period, status=_shared_status(existing), records=existing, persisted=True)

        drafts = [
            PayrollRecord(
                record_id=None,
                employee_id=e.employee_id,
                employee_name=e.name,
                department=e.department,
                position=e.position,
                period=period,
                base_salary=e.base_salary,
                allowance=e.allowance,
                bonus=ZERO,
                deduction=ZERO,
                status=PayrollStatus.DRAFT,
            )
            for e in self._employees.list_active()
        ]
        return PeriodPayroll(period=period, status=PayrollStatus.DRAFT, records=drafts, persisted=False)

    def period_summary(self, period: str) -> PeriodSummary:
        period = parse_period(period)
        records = list(self._payroll.list_by_period(period))
        total = sum((r.net_pay for r in records), Decimal("0.00"))
        return PeriodSummary(
            period=period,
            total_amount=total,
            employee_count=len(records),
            status=_shared_status(records) if records else None,
        )

    def export_period(self, period: str) -> io.BytesIO:
        """Excel workbook with one row per pay line plus net pay."""
        period = parse_period(period)
        records = list(self._payroll.list_by_period(period))

        data = [
            {
                "員工編號": r.employee_id,
                "姓名": r.employee_name,
                "部門": r.department,
                "職位": r.position,
                "期間": r.period,
                "底薪": float(r.base_salary),
                "津貼": float(r.allowance),
                "獎金": float(r.bonus),
                "扣款": float(r.deduction),
                "實發金額": float(r.net_pay),
                "備註": r.note or "",
                "狀態": r.status.value,
            }
            for r in records
        ]
        df = pd.DataFrame(data)

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=EXPORT_SHEET)
        output.seek(0)
        return output

    # --- writes ---

    def create_record(self, data: dict[str, Any]) -> PayrollRecord:
        record = NewPayrollRecord.from_payload(data)
        ensure_writable(self._payroll)
        if self._payroll.find_by_employee_period(record.employee_id, record.period) is not None:
            raise ValidationError(f"Employee {record.employee_id} already has a payroll record for {record.period}")
        created = self._payroll.create(record)
        logger.info("Created payroll record %s (%s %s)", created.record_id, created.employee_id, created.period)
        return created

    def update_record(self, record_id: int, data: dict[str, Any]) -> Optional[PayrollRecord]:
        record_id = require_int(record_id, "record_id")
        patch = PayrollPatch.from_payload(data)
        ensure_writable(self._payroll)

        current = self._payroll.get_by_id(record_id)
        if current is None:
            return None
        if current.is_finalized:
            raise _locked(current)
        return self._payroll.update(record_id, patch)

    def delete_record(self, record_id: int) -> bool:
        record_id = require_int(record_id, "record_id")
        ensure_writable(self._payroll)

        current = self._payroll.get_by_id(record_id)
        if current is None:
            return False
        if current.is_finalized:
            raise _locked(current)
        return self._payroll.delete(record_id)

    def save_batch(self, items: list[dict[str, Any]]) -> list[PayrollRecord]:
        """Upsert pay lines keyed by (employee_id, period).

        Each line is written on its own; a failure part-way leaves the
        earlier lines saved. Replaying the same batch yields the same rows.
        """

        if not isinstance(items, list):
            raise ValidationError("records must be a list")
        lines = [NewPayrollRecord.from_payload(item) if isinstance(item, dict) else None for item in items]
        if any(line is None for line in lines):
            raise ValidationError("Each record must be a JSON object")
        ensure_writable(self._payroll)

        saved: list[PayrollRecord] = []
        for line in lines:
            saved.append(self._upsert(line))
        logger.info("Saved %d payroll line(s)", len(saved))
        return saved

    def finalize_period(self, period: str) -> int:
        period = parse_period(period)
        ensure_writable(self._payroll)
        count = self._payroll.set_period_status(period, PayrollStatus.FINALIZED.value)
        logger.info("Finalized payroll period %s (%d record(s))", period, count)
        return count

    def save_and_finalize(self, period: str, items: list[dict[str, Any]]) -> int:
        """Save the lines as draft, then finalize the whole period.

        Two separate steps: if finalizing fails the period stays saved as draft.
        """

        period = parse_period(period)
        if not isinstance(items, list):
            raise ValidationError("records must be a list")
        drafts = []
        for item in items:
            if not isinstance(item, dict):
                raise ValidationError("Each record must be a JSON object")
            if item.get("period", period) != period:
                raise ValidationError(f"Record period {item.get('period')} does not match {period}")
            drafts.append({**item, "period": period, "status": PayrollStatus.DRAFT.value})

        self.save_batch(drafts)
        return self.finalize_period(period)

    def _upsert(self, line: NewPayrollRecord) -> PayrollRecord:
        existing = self._payroll.find_by_employee_period(line.employee_id, line.period)
        if existing is None:
            return self._payroll.create(line)

        patch = line.mutable_fields()
        if existing.is_finalized:
            if _changes_anything(existing, patch):
                raise _locked(existing)
            return existing

        updated = self._payroll.update(existing.record_id, patch)
        if updated is None:
            raise RuntimeError(f"Payroll record {existing.record_id} disappeared during save")
        return updated
