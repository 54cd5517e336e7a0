from __future__ import annotations

import logging
from typing import Any, Mapping

from ..common.validators import optional_decimal, optional_int, require_date, require_fields, require_int
from ..core.constants import MAX_EVALUATION_SCORE, MIN_EVALUATION_SCORE
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import NewEvaluation
from .repository import EvaluationRepository

logger = logging.getLogger(__name__)


def _optional_text(value: Any):
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class EvaluationService:
    def __init__(self, evaluations: EvaluationRepository, employees: EmployeeRepository):
        self._evaluations = evaluations
        self._employees = employees

    def list_evaluations(self) -> list[dict]:
        return [e.to_api() for e in self._evaluations.list_all()]

    def list_for_employee(self, employee_id: int) -> list[dict]:
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Colaborador não encontrado")
        return [e.to_api() for e in self._evaluations.list_for_employee(int(employee_id))]

    def create(self, payload: Mapping[str, Any]) -> int:
        """Record an evaluation.

        ``type`` in the payload is ignored: it is always derived from
        whether the reviewer is the subject.
        """
        require_fields(payload, ("employeeId", "date", "score"))
        employee_id = require_int(payload.get("employeeId"), "Colaborador")
        reviewer_id = optional_int(payload.get("reviewerId"), "Avaliador")
        evaluation_date = require_date(payload.get("date"), "Data")
        score = optional_decimal(payload.get("score"), "Pontuação")
        if score is None or not (MIN_EVALUATION_SCORE <= score <= MAX_EVALUATION_SCORE):
            raise ValidationError("Pontuação deve estar entre 0 e 5")

        if not self._employees.get_by_id(employee_id):
            raise ValidationError("Colaborador inválido")
        if reviewer_id is not None and not self._employees.get_by_id(reviewer_id):
            raise ValidationError("Avaliador inválido")

        new_id = self._evaluations.create(
            NewEvaluation(
                employee_id=employee_id,
                reviewer_id=reviewer_id,
                date=evaluation_date,
                score=score,
                comments=_optional_text(payload.get("comments")),
                self_evaluation=_optional_text(payload.get("selfEvaluation")),
            )
        )
        logger.info("evaluation %s created for employee %s", new_id, employee_id)
        return new_id
