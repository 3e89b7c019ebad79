from __future__ import annotations

from dataclasses import asdict, replace
from datetime import datetime, timedelta
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.accounting_system.accounting_system.common.patch import supplied
from src.accounting_system.accounting_system.container import wire_container
from src.accounting_system.accounting_system.core.enums import EmployeeStatus, Role
from src.accounting_system.accounting_system.core.exceptions import ValidationError
from src.accounting_system.accounting_system.employees.model import Employee, NewEmployee
from src.accounting_system.accounting_system.payroll.model import NewPayrollRecord, PayrollRecord
from src.accounting_system.accounting_system.users.model import User
from src.accounting_system.accounting_system.vendors.model import NewVendor, Vendor
from src.accounting_system.accounting_system.vouchers.model import NewVoucher, Voucher


class Clock:
    """Strictly increasing timestamps so "newest first" is deterministic."""

    def __init__(self, start: datetime = datetime(2025, 1, 1, 9, 0, 0)):
        self._now = start

    def tick(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


class InMemoryTable:
    available = True

    def __init__(self, clock: Clock):
        self._clock = clock
        self._rows: dict[int, object] = {}
        self._id = 0

    def _insert(self, build) -> object:
        self._id += 1
        ts = self._clock.tick()
        row = build(self._id, ts)
        self._rows[self._id] = row
        return row

    def _newest_first(self) -> list:
        return sorted(self._rows.values(), key=lambda r: (r.created_at, self._key(r)), reverse=True)

    def _key(self, row) -> int:
        raise NotImplementedError

    def get_by_id(self, row_id: int):
        return self._rows.get(int(row_id))

    def update(self, row_id: int, patch):
        current = self._rows.get(int(row_id))
        if current is None:
            return None
        changes = supplied(patch)
        if changes:
            current = replace(current, **changes, updated_at=self._clock.tick())
            self._rows[int(row_id)] = current
        return current

    def delete(self, row_id: int) -> bool:
        return self._rows.pop(int(row_id), None) is not None


class InMemoryVendors(InMemoryTable):
    def _key(self, row: Vendor) -> int:
        return row.vendor_id

    def list_all(self):
        return self._newest_first()

    def create(self, vendor: NewVendor) -> Vendor:
        return self._insert(lambda i, ts: Vendor(vendor_id=i, **asdict(vendor), created_at=ts, updated_at=ts))

    def count(self) -> int:
        return len(self._rows)


class InMemoryVouchers(InMemoryTable):
    """Enforces the vendor foreign key the way the schema does."""

    def __init__(self, clock: Clock, vendors: InMemoryVendors):
        super().__init__(clock)
        self._vendors = vendors

    def _key(self, row: Voucher) -> int:
        return row.voucher_id

    def _check_vendor(self, vendor_id: int) -> None:
        if self._vendors.get_by_id(vendor_id) is None:
            raise ValidationError(f"Vendor {vendor_id} does not exist")

    def list_all(self):
        return self._newest_first()

    def list_by_vendor(self, vendor_id: int):
        return [v for v in self._newest_first() if v.vendor_id == int(vendor_id)]

    def create(self, voucher: NewVoucher) -> Voucher:
        self._check_vendor(voucher.vendor_id)
        return self._insert(lambda i, ts: Voucher(voucher_id=i, **asdict(voucher), created_at=ts, updated_at=ts))

    def update(self, voucher_id: int, patch):
        if "vendor_id" in supplied(patch):
            self._check_vendor(patch.vendor_id)
        return super().update(voucher_id, patch)


class InMemoryEmployees(InMemoryTable):
    def _key(self, row: Employee) -> int:
        return row.employee_id

    def list_all(self):
        return self._newest_first()

    def list_active(self):
        active = [e for e in self._rows.values() if e.status is EmployeeStatus.ACTIVE]
        return sorted(active, key=lambda e: (e.name, e.employee_id))

    def create(self, employee: NewEmployee) -> Employee:
        return self._insert(lambda i, ts: Employee(employee_id=i, **asdict(employee), created_at=ts, updated_at=ts))


class InMemoryPayroll(InMemoryTable):
    """Enforces UNIQUE(employee_id, period) like the schema."""

    def _key(self, row: PayrollRecord) -> int:
        return row.record_id

    def list_all(self):
        by_created = self._newest_first()
        return sorted(by_created, key=lambda r: r.period, reverse=True)

    def list_by_period(self, period: str):
        rows = [r for r in self._rows.values() if r.period == period]
        return sorted(rows, key=lambda r: (r.employee_name, r.record_id))

    def find_by_employee_period(self, employee_id: int, period: str) -> Optional[PayrollRecord]:
        for r in self._rows.values():
            if r.employee_id == int(employee_id) and r.period == period:
                return r
        return None

    def create(self, record: NewPayrollRecord) -> PayrollRecord:
        if self.find_by_employee_period(record.employee_id, record.period) is not None:
            raise ValidationError("duplicate (employee_id, period)")
        return self._insert(
            lambda i, ts: PayrollRecord(record_id=i, **asdict(record), created_at=ts, updated_at=ts)
        )

    def set_period_status(self, period: str, status: str) -> int:
        matched = [r for r in self._rows.values() if r.period == period]
        for r in matched:
            self._rows[r.record_id] = replace(r, status=type(r.status)(status), updated_at=self._clock.tick())
        return len(matched)


class InMemoryUsers:
    available = True

    def __init__(self):
        self._by_id: dict[int, User] = {}
        self.signed_in: list[int] = []

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.username == username), None)

    def create_user(self, *, username: str, password_hash: str, name, role: Role) -> int:
        user_id = len(self._by_id) + 1
        self._by_id[user_id] = User(user_id=user_id, username=username, password_hash=password_hash, name=name, role=role)
        return user_id

    def touch_signed_in(self, user_id: int) -> None:
        self.signed_in.append(int(user_id))


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def vendors_repo(clock):
    return InMemoryVendors(clock)


@pytest.fixture
def vouchers_repo(clock, vendors_repo):
    return InMemoryVouchers(clock, vendors_repo)


@pytest.fixture
def employees_repo(clock):
    return InMemoryEmployees(clock)


@pytest.fixture
def payroll_repo(clock):
    return InMemoryPayroll(clock)


@pytest.fixture
def users_repo():
    repo = InMemoryUsers()
    repo.create_user(username="admin", password_hash=generate_password_hash("admin123"), name="Admin", role=Role.ADMIN)
    repo.create_user(username="clerk", password_hash=generate_password_hash("clerk123"), name="Clerk", role=Role.USER)
    return repo


@pytest.fixture
def container(users_repo, vendors_repo, vouchers_repo, employees_repo, payroll_repo):
    return wire_container(
        users_repo=users_repo,
        vendors_repo=vendors_repo,
        vouchers_repo=vouchers_repo,
        employees_repo=employees_repo,
        payroll_repo=payroll_repo,
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    from src.accounting_system.accounting_system.main import create_app

    flask_app = create_app(container=container)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def anon_client(app):
    return app.test_client()


@pytest.fixture
def client(app):
    c = app.test_client()
    with c.session_transaction() as sess:
        sess["user_id"] = 1
        sess["username"] = "admin"
        sess["name"] = "Admin"
        sess["role"] = Role.ADMIN.value
    return c


@pytest.fixture
def employee_payload():
    def make(**overrides):
        data = {
            "name": "王小明",
            "department": "業務部",
            "position": "專員",
            "phone": "0912-345-678",
            "join_date": "2023-02-01",
            "base_salary": "50000.00",
            "allowance": "5000.00",
        }
        data.update(overrides)
        return data

    return make
