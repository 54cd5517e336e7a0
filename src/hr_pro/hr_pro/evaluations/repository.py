from __future__ import annotations

from typing import Protocol, Sequence

from .model import Evaluation, NewEvaluation


class EvaluationRepository(Protocol):
    def list_all(self) -> Sequence[Evaluation]:
        """Every evaluation, newest first, with subject and reviewer names."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Evaluation]:
        raise NotImplementedError

    def create(self, new: NewEvaluation) -> int:
        raise NotImplementedError
