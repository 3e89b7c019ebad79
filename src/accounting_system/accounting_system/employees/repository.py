from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, EmployeePatch, NewEmployee


class EmployeeRepository(Protocol):
    available: bool

    def list_all(self) -> Sequence[Employee]:
        """Newest-created first."""

        raise NotImplementedError

    def list_active(self) -> Sequence[Employee]:
        """Active employees ordered by name."""

        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def create(self, employee: NewEmployee) -> Employee:
        raise NotImplementedError

    def update(self, employee_id: int, patch: EmployeePatch) -> Optional[Employee]:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        raise NotImplementedError
