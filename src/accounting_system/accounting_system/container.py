from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_REPORT_MONTHS
from .database.connection import StoreHandle, open_store
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .vendors.mysql_vendor_repository import MySQLVendorRepository
from .vendors.repository import VendorRepository
from .vendors.service import VendorService
from .vouchers.mysql_voucher_repository import MySQLVoucherRepository
from .vouchers.repository import VoucherRepository
from .vouchers.service import VoucherService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    vendors_repo: VendorRepository
    vouchers_repo: VoucherRepository
    employees_repo: EmployeeRepository
    payroll_repo: PayrollRepository

    auth_service: AuthService
    user_service: UserService
    vendor_service: VendorService
    voucher_service: VoucherService
    employee_service: EmployeeService
    payroll_service: PayrollService
    report_service: ReportService


def wire_container(
    *,
    users_repo: UserRepository,
    vendors_repo: VendorRepository,
    vouchers_repo: VoucherRepository,
    employees_repo: EmployeeRepository,
    payroll_repo: PayrollRepository,
    report_months: int = DEFAULT_REPORT_MONTHS,
) -> Container:
    """Build services on top of any set of repositories (MySQL or in-memory)."""
    return Container(
        users_repo=users_repo,
        vendors_repo=vendors_repo,
        vouchers_repo=vouchers_repo,
        employees_repo=employees_repo,
        payroll_repo=payroll_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        vendor_service=VendorService(vendors_repo, vouchers_repo),
        voucher_service=VoucherService(vouchers_repo, vendors_repo),
        employee_service=EmployeeService(employees_repo),
        payroll_service=PayrollService(payroll_repo, employees_repo),
        report_service=ReportService(vouchers_repo, vendors_repo, default_months=report_months),
    )


def build_container(*, db_config: Optional[dict], report_months: int = DEFAULT_REPORT_MONTHS) -> Container:
    conn: StoreHandle = open_store(db_config)
    return wire_container(
        users_repo=MySQLUserRepository(conn),
        vendors_repo=MySQLVendorRepository(conn),
        vouchers_repo=MySQLVoucherRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        report_months=report_months,
    )
