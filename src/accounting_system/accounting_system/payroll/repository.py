from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewPayrollRecord, PayrollPatch, PayrollRecord


class PayrollRepository(Protocol):
    available: bool

    def list_all(self) -> Sequence[PayrollRecord]:
        """Period descending, then newest-created first."""

        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_by_period(self, period: str) -> Sequence[PayrollRecord]:
        """Records of one period ordered by employee name."""

        raise NotImplementedError

    def find_by_employee_period(self, employee_id: int, period: str) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def create(self, record: NewPayrollRecord) -> PayrollRecord:
        raise NotImplementedError

    def update(self, record_id: int, patch: PayrollPatch) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError

    def set_period_status(self, period: str, status: str) -> int:
        """Set every record of `period` to `status`; returns how many records the period holds."""

        raise NotImplementedError
