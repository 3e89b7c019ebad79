from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from ..common.datetime_utils import month_key, today_local, trailing_months
from ..core.constants import (
    ALLOWED_REPORT_MONTHS,
    CATEGORY_FALLBACK,
    CATEGORY_PREFIX_LENGTH,
    CATEGORY_TOP_N,
    DASHBOARD_RECENT_LIMIT,
    DEFAULT_REPORT_MONTHS,
)
from ..core.enums import VoucherStatus
from ..core.exceptions import ValidationError
from ..vendors.repository import VendorRepository
from ..vouchers.model import Voucher
from ..vouchers.repository import VoucherRepository

ZERO = Decimal("0.00")


def monthly_totals(vouchers: Iterable[Voucher], months_back: int, today: date) -> list[dict[str, Any]]:
    """Completed-voucher totals per month, oldest first; empty months are 0."""
    months = trailing_months(today, months_back)
    totals = {m: ZERO for m in months}
    for v in vouchers:
        if v.status is VoucherStatus.COMPLETED and v.month in totals:
            totals[v.month] += v.amount
    return [{"month": m, "total": totals[m]} for m in months]


def category_of(description: Optional[str]) -> str:
    # Naive bucketing: leading characters of the description.
    text = (description or "").strip()
    return text[:CATEGORY_PREFIX_LENGTH] if text else CATEGORY_FALLBACK


def category_breakdown(vouchers: Iterable[Voucher], limit: int = CATEGORY_TOP_N) -> list[dict[str, Any]]:
    buckets: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for v in vouchers:
        if v.status is VoucherStatus.COMPLETED:
            buckets[category_of(v.description)] += v.amount
    ranked = sorted(buckets.items(), key=lambda kv: kv[1], reverse=True)
    return [{"category": name, "total": total} for name, total in ranked[:limit]]


def dashboard(vouchers: Iterable[Voucher], vendor_count: int, today: date) -> dict[str, Any]:
    vouchers = list(vouchers)
    pending = [v for v in vouchers if v.status is VoucherStatus.PENDING]
    this_month = month_key(today)
    completed_this_month = sum(
        (v.amount for v in vouchers if v.status is VoucherStatus.COMPLETED and v.month == this_month),
        ZERO,
    )
    recent = sorted(
        vouchers,
        key=lambda v: (v.created_at is not None, v.created_at, v.voucher_id),
        reverse=True,
    )[:DASHBOARD_RECENT_LIMIT]
    return {
        "pending_count": len(pending),
        "pending_amount": sum((v.amount for v in pending), ZERO),
        "completed_this_month": completed_this_month,
        "vendor_count": int(vendor_count),
        "recent_vouchers": recent,
    }


def parse_months(value: Any, default: int = DEFAULT_REPORT_MONTHS) -> int:
    if value in (None, ""):
        return default
    try:
        months = int(value)
    except (TypeError, ValueError):
        raise ValidationError("months must be an integer")
    if months not in ALLOWED_REPORT_MONTHS:
        allowed = ", ".join(str(m) for m in ALLOWED_REPORT_MONTHS)
        raise ValidationError(f"months must be one of: {allowed}")
    return months


class ReportService:
    """Read-only aggregates over vouchers."""

    def __init__(
        self,
        vouchers: VoucherRepository,
        vendors: VendorRepository,
        *,
        default_months: int = DEFAULT_REPORT_MONTHS,
    ):
        self._vouchers = vouchers
        self._vendors = vendors
        self._default_months = default_months

    def monthly(self, months: Any = None, *, today: Optional[date] = None) -> list[dict[str, Any]]:
        months_back = parse_months(months, self._default_months)
        return monthly_totals(self._vouchers.list_all(), months_back, today or today_local())

    def categories(self) -> list[dict[str, Any]]:
        return category_breakdown(self._vouchers.list_all())

    def dashboard(self, *, today: Optional[date] = None) -> dict[str, Any]:
        return dashboard(self._vouchers.list_all(), self._vendors.count(), today or today_local())
