from __future__ import annotations

from typing import Optional, Sequence

from ..common.patch import supplied
from ..core.enums import VoucherStatus
from ..core.exceptions import ValidationError
from ..database.connection import StoreHandle
from ..database.mysql_base import (
    as_date,
    as_decimal,
    build_set_clause,
    db_cursor,
    fetchall,
    fetchone,
    missing_parent_as,
)
from .model import NewVoucher, Voucher, VoucherPatch
from .repository import VoucherRepository

_COLUMNS = "id, vendor_id, amount, voucher_date, description, status, created_at, updated_at"


def _to_voucher(row: dict) -> Voucher:
    return Voucher(
        voucher_id=int(row["id"]),
        vendor_id=int(row["vendor_id"]),
        amount=as_decimal(row["amount"]),
        voucher_date=as_date(row["voucher_date"]),
        description=row.get("description"),
        status=VoucherStatus(row["status"]),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def _to_columns(patch: VoucherPatch) -> dict:
    columns = supplied(patch)
    if "status" in columns:
        columns["status"] = columns["status"].value
    return columns


class MySQLVoucherRepository(VoucherRepository):
    def __init__(self, conn_factory: StoreHandle):
        self._conn_factory = conn_factory

    @property
    def available(self) -> bool:
        return self._conn_factory.available

    def list_all(self) -> Sequence[Voucher]:
        if not self._conn_factory.available:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM vouchers ORDER BY created_at DESC, id DESC")
            return [_to_voucher(r) for r in fetchall(cur)]

    def get_by_id(self, voucher_id: int) -> Optional[Voucher]:
        if not self._conn_factory.available:
            return None
        with db_cursor(self._conn_factory) as (_, cur):
            return self._select(cur, voucher_id)

    def list_by_vendor(self, vendor_id: int) -> Sequence[Voucher]:
        if not self._conn_factory.available:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM vouchers WHERE vendor_id=%s ORDER BY created_at DESC, id DESC",
                (int(vendor_id),),
            )
            return [_to_voucher(r) for r in fetchall(cur)]

    def create(self, voucher: NewVoucher) -> Voucher:
        with missing_parent_as(ValidationError, f"Vendor {voucher.vendor_id} does not exist"), db_cursor(
            self._conn_factory
        ) as (_, cur):
            cur.execute(
                """
                INSERT INTO vouchers(vendor_id, amount, voucher_date, description, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    voucher.vendor_id,
                    voucher.amount,
                    voucher.voucher_date,
                    voucher.description,
                    voucher.status.value,
                ),
            )
            created = self._select(cur, int(cur.lastrowid))
            if created is None:
                raise RuntimeError("Failed to create voucher")
            return created

    def update(self, voucher_id: int, patch: VoucherPatch) -> Optional[Voucher]:
        changes = _to_columns(patch)
        with missing_parent_as(ValidationError, "Vendor does not exist"), db_cursor(self._conn_factory) as (_, cur):
            if changes:
                set_clause, params = build_set_clause(changes)
                cur.execute(f"UPDATE vouchers SET {set_clause} WHERE id=%s", (*params, int(voucher_id)))
            return self._select(cur, voucher_id)

    def delete(self, voucher_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM vouchers WHERE id=%s", (int(voucher_id),))
            return cur.rowcount > 0

    @staticmethod
    def _select(cur, voucher_id: int) -> Optional[Voucher]:
        cur.execute(f"SELECT {_COLUMNS} FROM vouchers WHERE id=%s", (int(voucher_id),))
        row = fetchone(cur)
        return _to_voucher(row) if row else None
