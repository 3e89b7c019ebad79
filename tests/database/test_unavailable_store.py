from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.accounting_system.accounting_system.container import build_container
from src.accounting_system.accounting_system.core.exceptions import StoreUnavailableError
from src.accounting_system.accounting_system.database.connection import UnavailableDatabase, open_store
from src.accounting_system.accounting_system.employees.mysql_employee_repository import MySQLEmployeeRepository
from src.accounting_system.accounting_system.payroll.mysql_payroll_repository import MySQLPayrollRepository
from src.accounting_system.accounting_system.vendors.model import NewVendor, VendorPatch
from src.accounting_system.accounting_system.vendors.mysql_vendor_repository import MySQLVendorRepository
from src.accounting_system.accounting_system.vouchers.mysql_voucher_repository import MySQLVoucherRepository


@pytest.fixture
def store():
    return UnavailableDatabase()


def test_open_store_without_config_is_unavailable():
    assert open_store(None).available is False
    assert open_store({}).available is False


def test_reads_degrade_to_empty(store):
    vendors = MySQLVendorRepository(store)
    vouchers = MySQLVoucherRepository(store)
    employees = MySQLEmployeeRepository(store)
    payroll = MySQLPayrollRepository(store)

    assert vendors.list_all() == []
    assert vendors.get_by_id(1) is None
    assert vendors.count() == 0
    assert vouchers.list_all() == []
    assert vouchers.list_by_vendor(1) == []
    assert employees.list_active() == []
    assert payroll.list_by_period("2025-03") == []
    assert payroll.find_by_employee_period(1, "2025-03") is None


def test_writes_fail_loudly(store):
    vendors = MySQLVendorRepository(store)

    with pytest.raises(StoreUnavailableError):
        vendors.create(NewVendor(name="台積電", tax_id="22099131"))
    with pytest.raises(StoreUnavailableError):
        vendors.update(1, VendorPatch(name="X"))
    with pytest.raises(StoreUnavailableError):
        vendors.delete(1)
    with pytest.raises(StoreUnavailableError):
        MySQLPayrollRepository(store).set_period_status("2025-03", "finalized")


def test_services_over_unavailable_store():
    c = build_container(db_config=None)

    assert c.vendor_service.list_vendors() == []
    assert c.voucher_service.get_voucher(1) is None
    assert c.report_service.monthly(3, today=date(2025, 3, 1))[1]["total"] == Decimal("0.00")
    assert c.payroll_service.get_or_init_period("2025-03").records == []

    with pytest.raises(StoreUnavailableError):
        c.voucher_service.set_status(1, "completed")
    with pytest.raises(StoreUnavailableError):
        c.voucher_service.create_voucher({"vendor_id": 1, "amount": "1.00", "date": "2025-01-01"})
    with pytest.raises(StoreUnavailableError):
        c.payroll_service.finalize_period("2025-03")
    with pytest.raises(StoreUnavailableError):
        c.vendor_service.delete_vendor(1)
