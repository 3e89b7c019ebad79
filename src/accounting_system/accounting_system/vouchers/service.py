from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.patch import UNSET
from ..common.validators import parse_choice, require_int
from ..core.enums import VoucherStatus
from ..core.exceptions import InvalidTransitionError, RecordLockedError
from ..database.connection import ensure_writable
from ..vendors.repository import VendorRepository
from .model import NewVoucher, Voucher, VoucherPatch
from .repository import VoucherRepository

logger = logging.getLogger(__name__)

# Fields that may not change once a voucher has left PENDING.
FROZEN_FIELDS = ("vendor_id", "amount")


def check_transition(current: VoucherStatus, target: VoucherStatus) -> None:
    """pending -> completed | void; terminal states never change."""
    if current is not VoucherStatus.PENDING:
        raise InvalidTransitionError(f"Voucher is already {current.value}")
    if target is VoucherStatus.PENDING:
        raise InvalidTransitionError("Voucher is already pending")


class VoucherService:
    """Use case: voucher CRUD and the approval state machine."""

    def __init__(self, vouchers: VoucherRepository, vendors: VendorRepository):
        self._vouchers = vouchers
        self._vendors = vendors

    def list_vouchers(self, *, query: Optional[str] = None, status: Optional[str] = None) -> list[Voucher]:
        vouchers = list(self._vouchers.list_all())
        if status and status != "all":
            wanted = parse_choice(status, VoucherStatus, "status")
            vouchers = [v for v in vouchers if v.status is wanted]

        q = (query or "").strip().lower()
        if q:
            names = {v.vendor_id: v.name.lower() for v in self._vendors.list_all()}
            vouchers = [
                v
                for v in vouchers
                if q in (v.description or "").lower() or q in names.get(v.vendor_id, "")
            ]
        return vouchers

    def get_voucher(self, voucher_id: int) -> Optional[Voucher]:
        return self._vouchers.get_by_id(require_int(voucher_id, "voucher_id"))

    def list_by_vendor(self, vendor_id: int) -> list[Voucher]:
        return list(self._vouchers.list_by_vendor(require_int(vendor_id, "vendor_id")))

    def create_voucher(self, data: dict[str, Any]) -> Voucher:
        voucher = self._vouchers.create(NewVoucher.from_payload(data))
        logger.info("Created voucher %s for vendor %s amount=%s", voucher.voucher_id, voucher.vendor_id, voucher.amount)
        return voucher

    def update_voucher(self, voucher_id: int, data: dict[str, Any]) -> Optional[Voucher]:
        voucher_id = require_int(voucher_id, "voucher_id")
        patch = VoucherPatch.from_payload(data)
        ensure_writable(self._vouchers)

        current = self._vouchers.get_by_id(voucher_id)
        if current is None:
            return None

        if current.status.is_terminal:
            for name in FROZEN_FIELDS:
                value = getattr(patch, name)
                if value is not UNSET and value != getattr(current, name):
                    raise RecordLockedError(f"Voucher is {current.status.value}; {name} can no longer change")

        if isinstance(patch.status, VoucherStatus) and patch.status is not current.status:
            check_transition(current.status, patch.status)

        return self._vouchers.update(voucher_id, patch)

    def set_status(self, voucher_id: int, target: Any) -> Optional[Voucher]:
        voucher_id = require_int(voucher_id, "voucher_id")
        target_status = parse_choice(target, VoucherStatus, "status")
        ensure_writable(self._vouchers)

        current = self._vouchers.get_by_id(voucher_id)
        if current is None:
            return None

        check_transition(current.status, target_status)
        updated = self._vouchers.update(voucher_id, VoucherPatch(status=target_status))
        logger.info("Voucher %s: %s -> %s", voucher_id, current.status.value, target_status.value)
        return updated

    def delete_voucher(self, voucher_id: int) -> bool:
        return self._vouchers.delete(require_int(voucher_id, "voucher_id"))

