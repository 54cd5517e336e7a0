from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Candidate, JobOpening


class RecruitmentRepository(Protocol):
    def list_jobs(self) -> Sequence[JobOpening]:
        """Newest openings first, requirements included."""

        raise NotImplementedError

    def get_job(self, job_id: int) -> Optional[JobOpening]:
        raise NotImplementedError

    def set_job_status(self, job_id: int, stored_status: str) -> bool:
        raise NotImplementedError

    def list_candidates(self, job_id: Optional[int] = None) -> Sequence[Candidate]:
        raise NotImplementedError

    # Candidate writes are scoped to the (candidate, job) application pair.
    def update_candidate_status(self, candidate_id: int, job_id: int, stored_status: str) -> bool:
        raise NotImplementedError

    def update_candidate_recruiter(self, candidate_id: int, job_id: int, recruiter_id: Optional[int]) -> bool:
        raise NotImplementedError
