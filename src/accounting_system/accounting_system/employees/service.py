from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.validators import require_int
from .model import Employee, EmployeePatch, NewEmployee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: employee records.

    Deleting an employee leaves their payroll lines alone; those carry
    their own name/department/position snapshot.
    """

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self, *, query: Optional[str] = None) -> list[Employee]:
        employees = list(self._employees.list_all())
        q = (query or "").strip().lower()
        if not q:
            return employees
        return [
            e
            for e in employees
            if q in e.name.lower() or q in e.department.lower() or q in e.position.lower()
        ]

    def list_active(self) -> list[Employee]:
        return list(self._employees.list_active())

    def get_employee(self, employee_id: int) -> Optional[Employee]:
        return self._employees.get_by_id(require_int(employee_id, "employee_id"))

    def create_employee(self, data: dict[str, Any]) -> Employee:
        employee = self._employees.create(NewEmployee.from_payload(data))
        logger.info("Created employee %s (%s)", employee.employee_id, employee.name)
        return employee

    def update_employee(self, employee_id: int, data: dict[str, Any]) -> Optional[Employee]:
        employee_id = require_int(employee_id, "employee_id")
        return self._employees.update(employee_id, EmployeePatch.from_payload(data))

    def delete_employee(self, employee_id: int) -> bool:
        deleted = self._employees.delete(require_int(employee_id, "employee_id"))
        if deleted:
            logger.info("Deleted employee %s", employee_id)
        return deleted
