from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import iso_date
from ..core.enums import TrainingStatus, VacationStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee (row of ``funcionarios``).

    Note: plain data object, no DB access code here.
    """

    employee_id: int
    nif: str
    first_name: str
    last_name: str
    email: str
    phone: str
    birth_date: Optional[date]
    role: str
    department_id: Optional[int]
    department_name: Optional[str] = None
    street: Optional[str] = None
    locality: Optional[str] = None
    postal_code: Optional[str] = None
    admission_date: Optional[date] = None
    # Only filled by the list query (latest salario row).
    base_salary_gross: Optional[Decimal] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def address(self) -> str:
        """'<street>, <locality> <postal code>' with empty parts left out."""
        town = " ".join(p for p in (self.locality, self.postal_code) if p)
        return ", ".join(p for p in (self.street, town) if p)


@dataclass(frozen=True)
class SalaryEntry:
    start_date: date
    gross: Decimal

    def to_api(self, reason: str) -> dict:
        return {"date": iso_date(self.start_date), "amount": float(self.gross), "reason": reason}


@dataclass(frozen=True)
class Benefit:
    employee_id: int
    benefit_type: str
    value: Decimal
    start_date: date

    def to_api(self) -> dict:
        return {
            "id": f"{self.employee_id}-{self.benefit_type}-{iso_date(self.start_date)}",
            "type": self.benefit_type,
            "value": float(self.value),
            "startDate": iso_date(self.start_date),
        }


@dataclass(frozen=True)
class VacationRequest:
    employee_id: int
    start_date: date
    end_date: date
    days: int
    stored_status: Optional[str]

    @property
    def status(self) -> VacationStatus:
        return VacationStatus.translate(self.stored_status)

    def to_api(self) -> dict:
        return {
            "id": f"{self.employee_id}-{iso_date(self.start_date)}",
            "startDate": iso_date(self.start_date),
            "endDate": iso_date(self.end_date),
            "daysUsed": int(self.days),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class TrainingAttendance:
    training_id: int
    title: str
    start_date: Optional[date]
    end_date: Optional[date]
    stored_status: Optional[str]

    def to_api(self, provider: str) -> dict:
        program_status = TrainingStatus.from_stored(self.stored_status)
        return {
            "id": str(self.training_id),
            "title": self.title,
            "date": iso_date(self.start_date),
            "startDate": iso_date(self.start_date),
            "endDate": iso_date(self.end_date),
            "status": "Completed" if program_status == TrainingStatus.COMPLETED else "Enrolled",
            "provider": provider,
        }


@dataclass(frozen=True)
class JobHistoryEntry:
    company: str
    role: str
    start_date: date
    end_date: Optional[date]

    def to_api(self, current_employer: str) -> dict:
        return {
            "company": self.company,
            "role": self.role,
            "startDate": iso_date(self.start_date),
            "endDate": iso_date(self.end_date),
            "isInternal": self.company == current_employer,
        }


@dataclass(frozen=True)
class Dependent:
    employee_id: int
    name: str
    relationship: str
    birth_date: Optional[date]

    def to_api(self) -> dict:
        return {
            "id": f"{self.employee_id}-{self.name}",
            "name": self.name,
            "relationship": self.relationship,
            "birthDate": iso_date(self.birth_date),
        }


@dataclass(frozen=True)
class Absence:
    employee_id: int
    date: date
    justification: Optional[str]

    @property
    def justified(self) -> bool:
        return bool(self.justification and self.justification.strip())

    def to_api(self) -> dict:
        return {
            "id": f"{self.employee_id}-{iso_date(self.date)}",
            "date": iso_date(self.date),
            "reason": self.justification or "",
            "justified": self.justified,
        }


@dataclass(frozen=True)
class EmployeeFields:
    """Validated write model shared by create and update."""

    first_name: str
    last_name: str
    email: str
    phone: str
    role: str
    department_id: int
    street: Optional[str] = None
    locality: Optional[str] = None
    postal_code: Optional[str] = None


@dataclass(frozen=True)
class NewEmployee:
    nif: str
    fields: EmployeeFields
    birth_date: date
    admission_date: date
    gross_salary: Optional[Decimal] = None
