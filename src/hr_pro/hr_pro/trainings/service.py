from __future__ import annotations

import logging
from typing import Any

from ..common.validators import require_int
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .repository import TrainingRepository

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Formação não encontrada"


class TrainingService:
    def __init__(self, trainings: TrainingRepository, employees: EmployeeRepository, *, provider: str):
        self._trainings = trainings
        self._employees = employees
        self._provider = provider

    def list_trainings(self) -> list[dict]:
        return [t.to_api(self._provider) for t in self._trainings.list_all()]

    def get_training(self, training_id: int) -> dict:
        program = self._trainings.get_by_id(int(training_id))
        if not program:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return program.to_api(self._provider)

    def enroll(self, training_id: int, employee_id: Any) -> None:
        """Enroll an employee, copying the program dates onto the attendance.

        Enrolling an already-enrolled employee is accepted and changes nothing.
        """
        program = self._trainings.get_by_id(int(training_id))
        if not program:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        if employee_id in (None, ""):
            raise ValidationError("employeeId é obrigatório")
        employee_id = require_int(employee_id, "Colaborador")
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Colaborador não encontrado")

        self._trainings.enroll(
            program.training_id,
            employee_id,
            start_date=program.start_date,
            end_date=program.end_date,
        )
        logger.info("employee %s enrolled in training %s", employee_id, program.training_id)

    def unenroll(self, training_id: int, employee_id: int) -> None:
        if not self._trainings.get_by_id(int(training_id)):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        if not self._trainings.unenroll(int(training_id), int(employee_id)):
            raise NotFoundError("Inscrição não encontrada")
