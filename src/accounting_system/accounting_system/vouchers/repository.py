from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewVoucher, Voucher, VoucherPatch


class VoucherRepository(Protocol):
    available: bool

    def list_all(self) -> Sequence[Voucher]:
        """Newest-created first."""

        raise NotImplementedError

    def get_by_id(self, voucher_id: int) -> Optional[Voucher]:
        raise NotImplementedError

    def list_by_vendor(self, vendor_id: int) -> Sequence[Voucher]:
        raise NotImplementedError

    def create(self, voucher: NewVoucher) -> Voucher:
        raise NotImplementedError

    def update(self, voucher_id: int, patch: VoucherPatch) -> Optional[Voucher]:
        raise NotImplementedError

    def delete(self, voucher_id: int) -> bool:
        raise NotImplementedError
