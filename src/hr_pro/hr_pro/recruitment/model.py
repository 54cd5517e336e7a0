from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple

from ..common.datetime_utils import iso_date
from ..core.enums import CandidateStatus, JobStatus


@dataclass(frozen=True)
class JobOpening:
    """A requisition (``vagas``); the department name doubles as its title."""

    job_id: int
    department_id: int
    department_name: str
    open_date: Optional[date]
    stored_status: str
    requirements: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def status(self) -> Optional[JobStatus]:
        return JobStatus.from_stored(self.stored_status)

    def to_api(self) -> dict:
        status = self.status
        return {
            "id": str(self.job_id),
            "title": self.department_name,
            "department": self.department_name,
            "departmentId": str(self.department_id),
            "openDate": iso_date(self.open_date),
            "status": status.value if status else self.stored_status,
            "description": f"Vaga para o departamento de {self.department_name}",
            "requirements": list(self.requirements),
        }


@dataclass(frozen=True)
class Candidate:
    """An applicant as seen through one application (``candidato_a`` row)."""

    candidate_id: int
    job_id: int
    name: str
    email: str
    phone: Optional[str]
    applied_date: Optional[date]
    stored_status: str
    recruiter_id: Optional[int] = None
    cv_url: Optional[str] = None
    cover_letter: Optional[str] = None

    @property
    def status(self) -> Optional[CandidateStatus]:
        return CandidateStatus.from_stored(self.stored_status)

    def to_api(self) -> dict:
        status = self.status
        return {
            "id": str(self.candidate_id),
            "jobId": str(self.job_id),
            "name": self.name,
            "email": self.email,
            "phone": self.phone or "",
            "status": status.value if status else self.stored_status,
            "appliedDate": iso_date(self.applied_date),
            "recruiterId": str(self.recruiter_id) if self.recruiter_id is not None else None,
            "cvUrl": self.cv_url,
            "coverLetter": self.cover_letter,
        }
