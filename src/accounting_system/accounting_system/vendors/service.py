from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.validators import require_int
from ..core.exceptions import ReferentialIntegrityError
from ..vouchers.repository import VoucherRepository
from .model import NewVendor, Vendor, VendorPatch
from .repository import VendorRepository

logger = logging.getLogger(__name__)


class VendorService:
    """Use case: manage vendors, refusing to delete one that vouchers still reference."""

    def __init__(self, vendors: VendorRepository, vouchers: VoucherRepository):
        self._vendors = vendors
        self._vouchers = vouchers

    def list_vendors(self, *, query: Optional[str] = None) -> list[Vendor]:
        vendors = list(self._vendors.list_all())
        q = (query or "").strip().lower()
        if not q:
            return vendors
        return [
            v
            for v in vendors
            if q in v.name.lower() or q in v.tax_id.lower() or q in (v.contact_person or "").lower()
        ]

    def get_vendor(self, vendor_id: int) -> Optional[Vendor]:
        return self._vendors.get_by_id(require_int(vendor_id, "vendor_id"))

    def create_vendor(self, data: dict[str, Any]) -> Vendor:
        vendor = self._vendors.create(NewVendor.from_payload(data))
        logger.info("Created vendor %s (%s)", vendor.vendor_id, vendor.name)
        return vendor

    def update_vendor(self, vendor_id: int, data: dict[str, Any]) -> Optional[Vendor]:
        vendor_id = require_int(vendor_id, "vendor_id")
        patch = VendorPatch.from_payload(data)
        return self._vendors.update(vendor_id, patch)

    def delete_vendor(self, vendor_id: int) -> bool:
        vendor_id = require_int(vendor_id, "vendor_id")

        # The FK restrict in the schema backs this check against concurrent inserts.
        dependents = self._vouchers.list_by_vendor(vendor_id)
        if dependents:
            raise ReferentialIntegrityError(
                f"Vendor {vendor_id} has {len(dependents)} voucher(s) and cannot be deleted"
            )

        deleted = self._vendors.delete(vendor_id)
        if deleted:
            logger.info("Deleted vendor %s", vendor_id)
        return deleted
