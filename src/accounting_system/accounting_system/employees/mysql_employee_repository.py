from __future__ import annotations

from dataclasses import astuple, fields
from typing import Optional, Sequence

from ..common.patch import supplied
from ..core.enums import EmployeeStatus
from ..database.connection import StoreHandle
from ..database.mysql_base import as_date, as_decimal, build_set_clause, db_cursor, fetchall, fetchone
from .model import Employee, EmployeePatch, NewEmployee
from .repository import EmployeeRepository

_NEW_COLUMNS = tuple(f.name for f in fields(NewEmployee))
_COLUMNS = "id, " + ", ".join(_NEW_COLUMNS) + ", created_at, updated_at"


def _to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["id"]),
        name=row["name"],
        department=row["department"],
        position=row["position"],
        phone=row["phone"],
        join_date=as_date(row["join_date"]),
        status=EmployeeStatus(row["status"]),
        base_salary=as_decimal(row["base_salary"]),
        allowance=as_decimal(row["allowance"]),
        email=row.get("email"),
        bank_account=row.get("bank_account"),
        bank_name=row.get("bank_name"),
        emergency_contact_name=row.get("emergency_contact_name"),
        emergency_contact_phone=row.get("emergency_contact_phone"),
        emergency_contact_relationship=row.get("emergency_contact_relationship"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def _db_value(value):
    return value.value if isinstance(value, EmployeeStatus) else value


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: StoreHandle):
        self._conn_factory = conn_factory

    @property
    def available(self) -> bool:
        return self._conn_factory.available

    def list_all(self) -> Sequence[Employee]:
        if not self._conn_factory.available:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY created_at DESC, id DESC")
            return [_to_employee(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[Employee]:
        if not self._conn_factory.available:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE status=%s ORDER BY name ASC, id ASC",
                (EmployeeStatus.ACTIVE.value,),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        if not self._conn_factory.available:
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select(cur, employee_id)

    def create(self, employee: NewEmployee) -> Employee:
        placeholders = ",".join(["%s"] * len(_NEW_COLUMNS))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO employees({', '.join(_NEW_COLUMNS)}) VALUES({placeholders})",
                tuple(_db_value(v) for v in astuple(employee)),
            )
            created = self._select(cur, int(cur.lastrowid))
            if created is None:
                raise RuntimeError("Failed to create employee")
            return created

    def update(self, employee_id: int, patch: EmployeePatch) -> Optional[Employee]:
        changes = {k: _db_value(v) for k, v in supplied(patch).items()}
        with db_cursor(self._conn_factory) as (_, cur):
            if changes:
                set_clause, params = build_set_clause(changes)
                cur.execute(f"UPDATE employees SET {set_clause} WHERE id=%s", (*params, int(employee_id)))
            return self._select(cur, employee_id)

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=%s", (int(employee_id),))
            return cur.rowcount > 0

    @staticmethod
    def _select(cur, employee_id: int) -> Optional[Employee]:
        cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (int(employee_id),))
        row = fetchone(cur)
        return _to_employee(row) if row else None
