from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.validators import optional_int, require_int
from ..core.enums import CandidateStatus, JobStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .repository import RecruitmentRepository

logger = logging.getLogger(__name__)

JOB_NOT_FOUND_MESSAGE = "Vaga não encontrada"
CANDIDATE_NOT_FOUND_MESSAGE = "Candidato não encontrado"


class RecruitmentService:
    def __init__(self, recruitment: RecruitmentRepository, employees: EmployeeRepository):
        self._recruitment = recruitment
        self._employees = employees

    # -------- Jobs --------
    def list_jobs(self) -> list[dict]:
        return [j.to_api() for j in self._recruitment.list_jobs()]

    def get_job(self, job_id: int) -> dict:
        job = self._recruitment.get_job(int(job_id))
        if not job:
            raise NotFoundError(JOB_NOT_FOUND_MESSAGE)
        return job.to_api()

    def close_job(self, job_id: int) -> dict:
        job_id = int(job_id)
        if not self._recruitment.get_job(job_id):
            raise NotFoundError(JOB_NOT_FOUND_MESSAGE)
        if not self._recruitment.set_job_status(job_id, JobStatus.CLOSED.stored):
            raise NotFoundError(JOB_NOT_FOUND_MESSAGE)
        logger.info("job %s closed", job_id)
        return self.get_job(job_id)

    # -------- Candidates --------
    def list_candidates(self, job_id: Any = None) -> list[dict]:
        job_filter: Optional[int] = optional_int(job_id, "Vaga")
        return [c.to_api() for c in self._recruitment.list_candidates(job_filter)]

    def list_job_candidates(self, job_id: int) -> list[dict]:
        if not self._recruitment.get_job(int(job_id)):
            raise NotFoundError(JOB_NOT_FOUND_MESSAGE)
        return [c.to_api() for c in self._recruitment.list_candidates(int(job_id))]

    def update_candidate_status(self, candidate_id: int, payload: dict) -> None:
        if payload.get("jobId") in (None, ""):
            raise ValidationError("jobId é obrigatório")
        job_id = require_int(payload.get("jobId"), "Vaga")
        status = CandidateStatus.parse(payload.get("status"))
        if status is None:
            raise ValidationError("Estado de candidatura inválido")

        if not self._recruitment.update_candidate_status(int(candidate_id), job_id, status.stored):
            raise NotFoundError(CANDIDATE_NOT_FOUND_MESSAGE)
        logger.info("candidate %s on job %s moved to %s", candidate_id, job_id, status.value)

    def assign_recruiter(self, candidate_id: int, payload: dict) -> None:
        if payload.get("jobId") in (None, ""):
            raise ValidationError("jobId é obrigatório")
        job_id = require_int(payload.get("jobId"), "Vaga")
        recruiter_id = optional_int(payload.get("recruiterId"), "Recrutador")
        if recruiter_id is not None and not self._employees.get_by_id(recruiter_id):
            raise ValidationError("Recrutador tem de ser um colaborador existente")

        if not self._recruitment.update_candidate_recruiter(int(candidate_id), job_id, recruiter_id):
            raise NotFoundError(CANDIDATE_NOT_FOUND_MESSAGE)
