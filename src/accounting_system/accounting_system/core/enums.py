from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    USER = "user"


class VoucherStatus(str, Enum):
    """Voucher approval state. Only PENDING can transition."""

    PENDING = "pending"
    COMPLETED = "completed"
    VOID = "void"

    @property
    def is_terminal(self) -> bool:
        return self is not VoucherStatus.PENDING


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    LEAVE = "leave"
    RESIGNED = "resigned"


class PayrollStatus(str, Enum):
    """A period is DRAFT until finalized; FINALIZED is one-way."""

    DRAFT = "draft"
    FINALIZED = "finalized"
