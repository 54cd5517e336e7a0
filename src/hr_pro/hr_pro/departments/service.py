from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.validators import optional_int
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Departamento não encontrado"


class DepartmentService:
    def __init__(self, departments: DepartmentRepository, employees: EmployeeRepository):
        self._departments = departments
        self._employees = employees

    def list_departments(self) -> list[dict]:
        return [d.to_api() for d in self._departments.list_all()]

    def get_department(self, dept_id: int) -> dict:
        department = self._departments.get_by_id(int(dept_id))
        if not department:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return department.to_api()

    def list_members(self, dept_id: int) -> list[dict]:
        if not self._departments.get_by_id(int(dept_id)):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return [m.to_api() for m in self._departments.list_employees(int(dept_id))]

    def assign_manager(self, dept_id: int, payload: Mapping[str, Any]) -> dict:
        """Set the manager of a department; an explicit ``managerId: null`` clears it.

        The manager must be an existing employee; the database does not
        enforce this reference.
        """
        if "managerId" not in payload:
            raise ValidationError("managerId é obrigatório")
        dept_id = int(dept_id)
        if not self._departments.get_by_id(dept_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)

        new_manager: Optional[int] = optional_int(payload["managerId"], "Gerente")
        if new_manager is not None and not self._employees.get_by_id(new_manager):
            raise ValidationError("Gerente tem de ser um colaborador existente")

        if not self._departments.set_manager(dept_id, new_manager):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        logger.info("department %s manager set to %s", dept_id, new_manager)
        return self.get_department(dept_id)
