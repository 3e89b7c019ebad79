from __future__ import annotations

from decimal import Decimal

import pytest

from src.accounting_system.accounting_system.core.enums import VoucherStatus
from src.accounting_system.accounting_system.core.exceptions import (
    InvalidTransitionError,
    RecordLockedError,
    ReferentialIntegrityError,
    ValidationError,
)
from src.accounting_system.accounting_system.vendors.service import VendorService
from src.accounting_system.accounting_system.vouchers.service import VoucherService, check_transition


@pytest.fixture
def vendors(vendors_repo, vouchers_repo):
    return VendorService(vendors_repo, vouchers_repo)


@pytest.fixture
def svc(vendors_repo, vouchers_repo):
    return VoucherService(vouchers_repo, vendors_repo)


@pytest.fixture
def tsmc(vendors):
    return vendors.create_vendor({"name": "台積電", "tax_id": "22099131"})


def _voucher(svc, vendor, **overrides):
    data = {"vendor_id": vendor.vendor_id, "amount": "150000.00", "date": "2025-01-03", "description": "設備維護費"}
    data.update(overrides)
    return svc.create_voucher(data)


def test_tsmc_voucher_lifecycle(vendors, svc, tsmc):
    voucher = _voucher(svc, tsmc)
    assert voucher.status is VoucherStatus.PENDING
    assert voucher.amount == Decimal("150000.00")

    completed = svc.set_status(voucher.voucher_id, "completed")
    assert completed.status is VoucherStatus.COMPLETED

    with pytest.raises(ReferentialIntegrityError):
        vendors.delete_vendor(tsmc.vendor_id)
    assert vendors.get_vendor(tsmc.vendor_id) is not None


def test_create_then_get_round_trip(svc, tsmc):
    a = _voucher(svc, tsmc)
    b = _voucher(svc, tsmc, amount="12.50")

    assert a.voucher_id != b.voucher_id
    assert svc.get_voucher(a.voucher_id) == a
    assert svc.get_voucher(b.voucher_id).amount == Decimal("12.50")


def test_create_for_unknown_vendor_fails(svc):
    with pytest.raises(ValidationError):
        svc.create_voucher({"vendor_id": 77, "amount": "10.00", "date": "2025-01-01"})


@pytest.mark.parametrize(
    "payload",
    [
        {"amount": "10.00", "date": "2025-01-01"},
        {"vendor_id": 1, "amount": 10.5, "date": "2025-01-01"},
        {"vendor_id": 1, "amount": "10.001", "date": "2025-01-01"},
        {"vendor_id": 1, "amount": "-1.00", "date": "2025-01-01"},
        {"vendor_id": 1, "amount": "10.00", "date": "01/03/2025"},
        {"vendor_id": 1, "amount": "10.00", "date": "2025-01-01", "status": "approved"},
    ],
)
def test_create_rejects_malformed_input(svc, tsmc, vouchers_repo, payload):
    with pytest.raises(ValidationError):
        svc.create_voucher(payload)
    assert vouchers_repo.list_all() == []


@pytest.mark.parametrize(
    "current,target",
    [
        (VoucherStatus.COMPLETED, VoucherStatus.VOID),
        (VoucherStatus.VOID, VoucherStatus.COMPLETED),
        (VoucherStatus.PENDING, VoucherStatus.PENDING),
        (VoucherStatus.COMPLETED, VoucherStatus.PENDING),
    ],
)
def test_check_transition_rejects(current, target):
    with pytest.raises(InvalidTransitionError):
        check_transition(current, target)


def test_void_is_terminal(svc, tsmc):
    voucher = _voucher(svc, tsmc)
    svc.set_status(voucher.voucher_id, "void")

    with pytest.raises(InvalidTransitionError):
        svc.set_status(voucher.voucher_id, "completed")
    assert svc.get_voucher(voucher.voucher_id).status is VoucherStatus.VOID


def test_set_status_on_missing_voucher_is_none(svc):
    assert svc.set_status(404, "completed") is None


def test_update_routes_status_through_transition_rule(svc, tsmc):
    voucher = _voucher(svc, tsmc)
    svc.update_voucher(voucher.voucher_id, {"status": "completed"})

    with pytest.raises(InvalidTransitionError):
        svc.update_voucher(voucher.voucher_id, {"status": "pending"})


def test_amount_and_vendor_frozen_after_completion(svc, vendors, tsmc):
    other = vendors.create_vendor({"name": "PChome", "tax_id": "16606102"})
    voucher = _voucher(svc, tsmc)
    svc.set_status(voucher.voucher_id, "completed")

    with pytest.raises(RecordLockedError):
        svc.update_voucher(voucher.voucher_id, {"amount": "1.00"})
    with pytest.raises(RecordLockedError):
        svc.update_voucher(voucher.voucher_id, {"vendor_id": other.vendor_id})

    # Description stays editable; resending the same amount is not a change.
    updated = svc.update_voucher(voucher.voucher_id, {"description": "設備維護費 (Q1)", "amount": "150000.00"})
    assert updated.description == "設備維護費 (Q1)"
    assert updated.amount == Decimal("150000.00")


def test_pending_voucher_amount_can_change(svc, tsmc):
    voucher = _voucher(svc, tsmc)
    updated = svc.update_voucher(voucher.voucher_id, {"amount": "149000.00"})
    assert updated.amount == Decimal("149000.00")


def test_list_filters_by_status_and_query(svc, vendors, tsmc):
    cht = vendors.create_vendor({"name": "中華電信", "tax_id": "96979933"})
    a = _voucher(svc, tsmc)
    b = _voucher(svc, cht, description="電話費")
    svc.set_status(a.voucher_id, "completed")

    assert [v.voucher_id for v in svc.list_vouchers()] == [b.voucher_id, a.voucher_id]
    assert [v.voucher_id for v in svc.list_vouchers(status="completed")] == [a.voucher_id]
    assert len(svc.list_vouchers(status="all")) == 2
    assert [v.voucher_id for v in svc.list_vouchers(query="中華")] == [b.voucher_id]
    assert [v.voucher_id for v in svc.list_vouchers(query="維護")] == [a.voucher_id]


def test_list_by_vendor(svc, vendors, tsmc):
    cht = vendors.create_vendor({"name": "中華電信", "tax_id": "96979933"})
    _voucher(svc, tsmc)
    _voucher(svc, cht)

    assert [v.vendor_id for v in svc.list_by_vendor(cht.vendor_id)] == [cht.vendor_id]


def test_to_dict_uses_money_strings_and_date_key(svc, tsmc):
    data = _voucher(svc, tsmc).to_dict()

    assert data["amount"] == "150000.00"
    assert data["date"] == "2025-01-03"
    assert data["status"] == "pending"
    assert "voucher_date" not in data
