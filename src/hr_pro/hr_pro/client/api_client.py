from __future__ import annotations

import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    """A failed API call, carrying the HTTP status and the server's message."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


class HRApiClient:
    """Thin JSON client for the ``/api`` surface.

    Note: ``session`` is injectable so tests can replace the transport.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    def _request(self, method: str, path: str, *, json: Any = None, params: Optional[dict] = None) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = self._session.request(method, url, json=json, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(0, "Não foi possível contactar o servidor") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            message = None
            if isinstance(body, dict):
                message = body.get("error") or body.get("message")
            raise ApiError(response.status_code, message or f"Erro HTTP {response.status_code}")
        return body

    # -------- Employees --------
    def list_employees(self) -> list:
        return self._request("GET", "/api/employees")

    def get_employee(self, employee_id: str) -> dict:
        return self._request("GET", f"/api/employees/{employee_id}")

    def create_employee(self, payload: dict) -> dict:
        return self._request("POST", "/api/employees", json=payload)

    def update_employee(self, employee_id: str, payload: dict) -> dict:
        return self._request("PUT", f"/api/employees/{employee_id}", json=payload)

    def delete_employee(self, employee_id: str) -> dict:
        return self._request("DELETE", f"/api/employees/{employee_id}")

    # -------- Departments --------
    def list_departments(self) -> list:
        return self._request("GET", "/api/departments")

    def get_department(self, dept_id: str) -> dict:
        return self._request("GET", f"/api/departments/{dept_id}")

    def list_department_employees(self, dept_id: str) -> list:
        return self._request("GET", f"/api/departments/{dept_id}/employees")

    def set_department_manager(self, dept_id: str, manager_id: Optional[str]) -> dict:
        return self._request("PUT", f"/api/departments/{dept_id}/manager", json={"managerId": manager_id})

    # -------- Recruitment --------
    def list_jobs(self) -> list:
        return self._request("GET", "/api/recruitment/jobs")

    def get_job(self, job_id: str) -> dict:
        return self._request("GET", f"/api/recruitment/jobs/{job_id}")

    def close_job(self, job_id: str) -> dict:
        return self._request("PUT", f"/api/recruitment/jobs/{job_id}/close")

    def list_candidates(self, job_id: Optional[str] = None) -> list:
        params = {"jobId": job_id} if job_id is not None else None
        return self._request("GET", "/api/recruitment/candidates", params=params)

    def list_job_candidates(self, job_id: str) -> list:
        return self._request("GET", f"/api/recruitment/jobs/{job_id}/candidates")

    def update_candidate_status(self, candidate_id: str, job_id: str, status: str) -> dict:
        return self._request(
            "PUT",
            f"/api/recruitment/candidates/{candidate_id}/status",
            json={"status": status, "jobId": job_id},
        )

    def update_candidate_recruiter(self, candidate_id: str, job_id: str, recruiter_id: Optional[str]) -> dict:
        return self._request(
            "PUT",
            f"/api/recruitment/candidates/{candidate_id}/recruiter",
            json={"recruiterId": recruiter_id, "jobId": job_id},
        )

    # -------- Trainings --------
    def list_trainings(self) -> list:
        return self._request("GET", "/api/trainings")

    def get_training(self, training_id: str) -> dict:
        return self._request("GET", f"/api/trainings/{training_id}")

    def enroll(self, training_id: str, employee_id: str) -> dict:
        return self._request("POST", f"/api/trainings/{training_id}/enroll", json={"employeeId": employee_id})

    def unenroll(self, training_id: str, employee_id: str) -> dict:
        return self._request("DELETE", f"/api/trainings/{training_id}/enroll/{employee_id}")

    # -------- Evaluations --------
    def list_evaluations(self) -> list:
        return self._request("GET", "/api/evaluations")

    def list_employee_evaluations(self, employee_id: str) -> list:
        return self._request("GET", f"/api/evaluations/employee/{employee_id}")

    def create_evaluation(self, payload: dict) -> dict:
        return self._request("POST", "/api/evaluations", json=payload)

    def health(self) -> dict:
        return self._request("GET", "/health")
