from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..evaluations.model import Evaluation
from .model import (
    Absence,
    Benefit,
    Dependent,
    Employee,
    EmployeeFields,
    JobHistoryEntry,
    NewEmployee,
    SalaryEntry,
    TrainingAttendance,
    VacationRequest,
)


class EmployeeRepository(Protocol):
    """Repository interface for employees and their owned sub-collections.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    # Base records
    def list_with_salary(self) -> Sequence[Employee]:
        """All employees ordered by name, ``base_salary_gross`` filled."""

        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def find_id_by_nif(self, nif: str) -> Optional[int]:
        raise NotImplementedError

    def find_id_by_email(self, email: str) -> Optional[int]:
        raise NotImplementedError

    # Detail sub-collections
    def current_salary(self, employee_id: int) -> Optional[Decimal]:
        raise NotImplementedError

    def current_benefits(self, employee_id: int) -> Sequence[Benefit]:
        raise NotImplementedError

    def salary_history(self, employee_id: int) -> Sequence[SalaryEntry]:
        raise NotImplementedError

    def vacation_requests(self, employee_id: int) -> Sequence[VacationRequest]:
        raise NotImplementedError

    def trainings(self, employee_id: int) -> Sequence[TrainingAttendance]:
        raise NotImplementedError

    def evaluations(self, employee_id: int) -> Sequence[Evaluation]:
        raise NotImplementedError

    def job_history(self, employee_id: int) -> Sequence[JobHistoryEntry]:
        raise NotImplementedError

    def dependents(self, employee_id: int) -> Sequence[Dependent]:
        raise NotImplementedError

    def absences(self, employee_id: int) -> Sequence[Absence]:
        raise NotImplementedError

    # Writes
    def create(self, new: NewEmployee, *, net_salary: Optional[Decimal]) -> int:
        """Insert employee, admission entry and optional salary atomically.

        Returns the assigned sequential id.
        """

        raise NotImplementedError

    def update(self, employee_id: int, fields: EmployeeFields) -> bool:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        """Clear department-manager references, then delete the employee."""

        raise NotImplementedError
