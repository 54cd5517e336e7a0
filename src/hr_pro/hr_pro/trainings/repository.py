from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TrainingProgram


class TrainingRepository(Protocol):
    def list_all(self) -> Sequence[TrainingProgram]:
        raise NotImplementedError

    def get_by_id(self, training_id: int) -> Optional[TrainingProgram]:
        raise NotImplementedError

    def enroll(self, training_id: int, employee_id: int, *, start_date: date, end_date: date) -> None:
        """Insert the attendance row; enrolling twice leaves one row."""

        raise NotImplementedError

    def unenroll(self, training_id: int, employee_id: int) -> bool:
        raise NotImplementedError
