from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple

from ..common.datetime_utils import iso_date
from ..core.enums import TrainingStatus


@dataclass(frozen=True)
class TrainingProgram:
    training_id: int
    title: str
    description: Optional[str]
    start_date: date
    end_date: date
    stored_status: str
    enrolled_employee_ids: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def status(self) -> Optional[TrainingStatus]:
        return TrainingStatus.from_stored(self.stored_status)

    def is_enrolled(self, employee_id: int) -> bool:
        return int(employee_id) in self.enrolled_employee_ids

    def to_api(self, provider: str) -> dict:
        status = self.status
        return {
            "id": str(self.training_id),
            "title": self.title,
            "description": self.description or "",
            "startDate": iso_date(self.start_date),
            "endDate": iso_date(self.end_date),
            "status": status.value if status else self.stored_status,
            "provider": provider,
            "enrolledEmployeeIds": [str(i) for i in self.enrolled_employee_ids],
        }
