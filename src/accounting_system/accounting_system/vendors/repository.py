from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewVendor, Vendor, VendorPatch


class VendorRepository(Protocol):
    """Repository interface for Vendor.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    available: bool

    def list_all(self) -> Sequence[Vendor]:
        """Newest-created first."""

        raise NotImplementedError

    def get_by_id(self, vendor_id: int) -> Optional[Vendor]:
        raise NotImplementedError

    def create(self, vendor: NewVendor) -> Vendor:
        raise NotImplementedError

    def update(self, vendor_id: int, patch: VendorPatch) -> Optional[Vendor]:
        raise NotImplementedError

    def delete(self, vendor_id: int) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
