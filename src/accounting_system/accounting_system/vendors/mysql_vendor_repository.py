from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..common.patch import supplied
from ..core.exceptions import ReferentialIntegrityError
from ..database.connection import StoreHandle
from ..database.mysql_base import ER_ROW_IS_REFERENCED_2, build_set_clause, db_cursor, fetchall, fetchone
from .model import NewVendor, Vendor, VendorPatch
from .repository import VendorRepository

_COLUMNS = "id, name, tax_id, phone, bank_account, contact_person, created_at, updated_at"


def _to_vendor(row: dict) -> Vendor:
    return Vendor(
        vendor_id=int(row["id"]),
        name=row["name"],
        tax_id=row["tax_id"],
        phone=row.get("phone"),
        bank_account=row.get("bank_account"),
        contact_person=row.get("contact_person"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLVendorRepository(VendorRepository):
    def __init__(self, conn_factory: StoreHandle):
        self._conn_factory = conn_factory

    @property
    def available(self) -> bool:
        return self._conn_factory.available

    def list_all(self) -> Sequence[Vendor]:
        if not self._conn_factory.available:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM vendors ORDER BY created_at DESC, id DESC")
            return [_to_vendor(r) for r in fetchall(cur)]

    def get_by_id(self, vendor_id: int) -> Optional[Vendor]:
        if not self._conn_factory.available:
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select(cur, vendor_id)

    def create(self, vendor: NewVendor) -> Vendor:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO vendors(name, tax_id, phone, bank_account, contact_person)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (vendor.name, vendor.tax_id, vendor.phone, vendor.bank_account, vendor.contact_person),
            )
            created = self._select(cur, int(cur.lastrowid))
            if created is None:
                raise RuntimeError("Failed to create vendor")
            return created

    def update(self, vendor_id: int, patch: VendorPatch) -> Optional[Vendor]:
        changes = supplied(patch)
        with db_cursor(self._conn_factory) as (_, cur):
            if changes:
                set_clause, params = build_set_clause(changes)
                cur.execute(f"UPDATE vendors SET {set_clause} WHERE id=%s", (*params, int(vendor_id)))
            return self._select(cur, vendor_id)

    def delete(self, vendor_id: int) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM vendors WHERE id=%s", (int(vendor_id),))
                return cur.rowcount > 0
        except mysql.connector.IntegrityError as e:
            if e.errno == ER_ROW_IS_REFERENCED_2:
                raise ReferentialIntegrityError("Vendor has dependent vouchers and cannot be deleted") from e
            raise

    def count(self) -> int:
        if not self._conn_factory.available:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM vendors")
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    @staticmethod
    def _select(cur, vendor_id: int) -> Optional[Vendor]:
        cur.execute(f"SELECT {_COLUMNS} FROM vendors WHERE id=%s", (int(vendor_id),))
        row = fetchone(cur)
        return _to_vendor(row) if row else None
