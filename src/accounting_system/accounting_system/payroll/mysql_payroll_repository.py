from __future__ import annotations

from dataclasses import astuple, fields
from typing import Optional, Sequence

from ..common.patch import supplied
from ..core.enums import PayrollStatus
from ..core.exceptions import ValidationError
from ..database.connection import StoreHandle
from ..database.mysql_base import (
    as_decimal,
    build_set_clause,
    db_cursor,
    duplicate_key_as,
    fetchall,
    fetchone,
)
from .model import NewPayrollRecord, PayrollPatch, PayrollRecord
from .repository import PayrollRepository

_NEW_COLUMNS = tuple(f.name for f in fields(NewPayrollRecord))
_COLUMNS = "id, " + ", ".join(_NEW_COLUMNS) + ", created_at, updated_at"


def _to_record(row: dict) -> PayrollRecord:
    return PayrollRecord(
        record_id=int(row["id"]),
        employee_id=int(row["employee_id"]),
        employee_name=row["employee_name"],
        department=row["department"],
        position=row["position"],
        period=str(row["period"]),
        base_salary=as_decimal(row["base_salary"]),
        allowance=as_decimal(row["allowance"]),
        bonus=as_decimal(row["bonus"]),
        deduction=as_decimal(row["deduction"]),
        note=row.get("note"),
        status=PayrollStatus(row["status"]),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def _db_value(value):
    return value.value if isinstance(value, PayrollStatus) else value


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: StoreHandle):
        self._conn_factory = conn_factory

    @property
    def available(self) -> bool:
        return self._conn_factory.available

    def list_all(self) -> Sequence[PayrollRecord]:
        if not self._conn_factory.available:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll_records ORDER BY period DESC, created_at DESC, id DESC")
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: int) -> Optional[PayrollRecord]:
        if not self._conn_factory.available:
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select(cur, record_id)

    def list_by_period(self, period: str) -> Sequence[PayrollRecord]:
        if not self._conn_factory.available:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll_records WHERE period=%s ORDER BY employee_name ASC, id ASC",
                (period,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def find_by_employee_period(self, employee_id: int, period: str) -> Optional[PayrollRecord]:
        if not self._conn_factory.available:
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payroll_records WHERE employee_id=%s AND period=%s",
                (int(employee_id), period),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def create(self, record: NewPayrollRecord) -> PayrollRecord:
        placeholders = ",".join(["%s"] * len(_NEW_COLUMNS))
        with duplicate_key_as(
            ValidationError, f"Employee {record.employee_id} already has a payroll record for {record.period}"
        ):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO payroll_records({', '.join(_NEW_COLUMNS)}) VALUES({placeholders})",
                    tuple(_db_value(v) for v in astuple(record)),
                )
                created = self._select(cur, int(cur.lastrowid))
                if created is None:
                    raise RuntimeError("Failed to create payroll record")
                return created

    def update(self, record_id: int, patch: PayrollPatch) -> Optional[PayrollRecord]:
        changes = {k: _db_value(v) for k, v in supplied(patch).items()}
        with db_cursor(self._conn_factory) as (_, cur):
            if changes:
                set_clause, params = build_set_clause(changes)
                cur.execute(f"UPDATE payroll_records SET {set_clause} WHERE id=%s", (*params, int(record_id)))
            return self._select(cur, record_id)

    def delete(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payroll_records WHERE id=%s", (int(record_id),))
            return cur.rowcount > 0

    def set_period_status(self, period: str, status: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE payroll_records SET status=%s WHERE period=%s", (status, period))
            # rowcount skips rows that already had `status`; report every row of the period.
            cur.execute("SELECT COUNT(*) AS n FROM payroll_records WHERE period=%s", (period,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    @staticmethod
    def _select(cur, record_id: int) -> Optional[PayrollRecord]:
        cur.execute(f"SELECT {_COLUMNS} FROM payroll_records WHERE id=%s", (int(record_id),))
        row = fetchone(cur)
        return _to_record(row) if row else None
