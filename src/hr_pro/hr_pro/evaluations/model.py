from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import iso_date
from ..core.enums import EvaluationType


@dataclass(frozen=True)
class Evaluation:
    """Domain entity: one performance review of an employee."""

    evaluation_id: int
    employee_id: int
    reviewer_id: Optional[int]
    date: date
    score: Decimal
    comments: Optional[str] = None
    self_evaluation: Optional[str] = None
    employee_name: Optional[str] = None
    reviewer_name: Optional[str] = None

    @property
    def type(self) -> EvaluationType:
        return EvaluationType.infer(employee_id=self.employee_id, reviewer_id=self.reviewer_id)

    def to_api(self) -> dict:
        return {
            "id": str(self.evaluation_id),
            "employeeId": str(self.employee_id),
            "employeeName": self.employee_name,
            "date": iso_date(self.date),
            "score": float(self.score),
            "reviewerId": str(self.reviewer_id) if self.reviewer_id is not None else None,
            "reviewer": self.reviewer_name,
            "comments": self.comments or "",
            "selfEvaluation": self.self_evaluation,
            "documentUrl": None,
            "type": self.type.value,
        }


@dataclass(frozen=True)
class NewEvaluation:
    employee_id: int
    reviewer_id: Optional[int]
    date: date
    score: Decimal
    comments: Optional[str]
    self_evaluation: Optional[str]
