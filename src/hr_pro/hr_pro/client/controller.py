from __future__ import annotations

import itertools
import logging
from typing import Callable, Optional

from .api_client import ApiError, HRApiClient
from .store import (
    CandidateUpdated,
    CloseEmployeeForm,
    CollectionLoaded,
    DepartmentUpdated,
    EmployeeDeleted,
    EmployeeDetailLoaded,
    EmployeeDetailRequested,
    EmployeesFailed,
    EmployeesLoading,
    ErrorRaised,
    FormFailed,
    JobUpdated,
    Navigate,
    OpenEmployeeForm,
    ParticipantAdded,
    ParticipantRemoved,
    SelectDepartment,
    SelectEvaluation,
    SelectJob,
    SelectTraining,
    Store,
    View,
)

logger = logging.getLogger(__name__)

EMPLOYEES_LOAD_ERROR = "Erro ao conectar com o servidor. Verifique se o backend está a funcionar."


class ViewController:
    """Screen handlers: call the API, then dispatch what changed.

    Employee writes refetch the whole list; the other writes patch the
    local collections with the server's answer.
    """

    def __init__(self, api: HRApiClient, store: Store):
        self._api = api
        self._store = store
        self._request_ids = itertools.count(1)

    @property
    def state(self):
        return self._store.state

    # -------- Loading --------
    def load_all(self) -> None:
        self.fetch_employees()
        self._load("departments", self._api.list_departments)
        self._load("jobs", self._api.list_jobs)
        self._load("candidates", self._api.list_candidates)
        self._load("trainings", self._api.list_trainings)
        self._load("evaluations", self._api.list_evaluations)

    def _load(self, name: str, fetch: Callable[[], list]) -> bool:
        try:
            items = fetch()
        except ApiError as e:
            # Secondary collections stay as they were; only employees surface an error panel.
            logger.warning("could not load %s: %s", name, e.message)
            return False
        self._store.dispatch(CollectionLoaded(name, tuple(items or ())))
        return True

    def fetch_employees(self) -> bool:
        self._store.dispatch(EmployeesLoading())
        try:
            items = self._api.list_employees()
        except ApiError as e:
            logger.warning("could not load employees: %s", e.message)
            self._store.dispatch(EmployeesFailed(EMPLOYEES_LOAD_ERROR))
            return False
        self._store.dispatch(CollectionLoaded("employees", tuple(items or ())))
        return True

    def retry(self) -> None:
        self.fetch_employees()

    # -------- Employees --------
    def select_employee(self, employee_id: str) -> None:
        """Open the detail screen, always refetching the full record.

        If another selection happens before this response arrives, the
        response is discarded by the reducer.
        """
        request_id = next(self._request_ids)
        self._store.dispatch(EmployeeDetailRequested(request_id))
        try:
            employee = self._api.get_employee(employee_id)
        except ApiError as e:
            logger.warning("employee %s detail failed, using list record: %s", employee_id, e.message)
            employee = next(
                (emp for emp in self.state.employees if str(emp.get("id")) == str(employee_id)),
                {"id": str(employee_id)},
            )
        self._store.dispatch(EmployeeDetailLoaded(request_id, employee))

    def back_to_employee_list(self) -> None:
        self._store.dispatch(Navigate(View.EMPLOYEES_LIST))

    def open_new_employee(self) -> None:
        self._store.dispatch(OpenEmployeeForm())

    def edit_employee(self, employee_id: str) -> None:
        self._store.dispatch(OpenEmployeeForm(employee_id))

    def cancel_employee_form(self) -> None:
        self._store.dispatch(CloseEmployeeForm())

    def save_employee(self, data: dict, employee_id: Optional[str] = None) -> bool:
        try:
            if employee_id:
                self._api.update_employee(employee_id, data)
            else:
                self._api.create_employee(data)
        except ApiError as e:
            self._store.dispatch(FormFailed(e.message))
            return False

        self.fetch_employees()
        self._store.dispatch(CloseEmployeeForm())
        return True

    def delete_employee(self, employee_id: str) -> bool:
        try:
            self._api.delete_employee(employee_id)
        except ApiError as e:
            self._store.dispatch(ErrorRaised(e.message))
            return False

        self.fetch_employees()
        self._store.dispatch(EmployeeDeleted(str(employee_id)))
        return True

    # -------- Departments --------
    def select_department(self, department_id: str) -> None:
        self._store.dispatch(SelectDepartment(str(department_id)))

    def back_to_departments(self) -> None:
        self._store.dispatch(Navigate(View.DEPARTMENTS_LIST))

    def update_manager(self, department_id: str, manager_id: Optional[str]) -> bool:
        try:
            response = self._api.set_department_manager(department_id, manager_id)
        except ApiError as e:
            self._store.dispatch(ErrorRaised(e.message))
            return False
        self._store.dispatch(DepartmentUpdated(response["department"]))
        return True

    # -------- Recruitment --------
    def select_job(self, job_id: str) -> None:
        self._store.dispatch(SelectJob(str(job_id)))

    def back_to_recruitment(self) -> None:
        self._store.dispatch(Navigate(View.RECRUITMENT_LIST))

    def close_job(self, job_id: str) -> bool:
        try:
            response = self._api.close_job(job_id)
        except ApiError as e:
            self._store.dispatch(ErrorRaised(e.message))
            return False
        self._store.dispatch(JobUpdated(response["job"]))
        return True

    def update_candidate_status(self, candidate_id: str, job_id: str, status: str) -> bool:
        try:
            self._api.update_candidate_status(candidate_id, job_id, status)
        except ApiError as e:
            self._store.dispatch(ErrorRaised(e.message))
            return False
        self._store.dispatch(CandidateUpdated(str(candidate_id), str(job_id), {"status": status}))
        return True

    def update_recruiter(self, candidate_id: str, job_id: str, recruiter_id: Optional[str]) -> bool:
        try:
            self._api.update_candidate_recruiter(candidate_id, job_id, recruiter_id)
        except ApiError as e:
            self._store.dispatch(ErrorRaised(e.message))
            return False
        self._store.dispatch(CandidateUpdated(str(candidate_id), str(job_id), {"recruiterId": recruiter_id}))
        return True

    # -------- Trainings --------
    def select_training(self, training_id: str) -> None:
        self._store.dispatch(SelectTraining(str(training_id)))

    def back_to_trainings(self) -> None:
        self._store.dispatch(Navigate(View.TRAININGS_LIST))

    def add_participant(self, training_id: str, employee_id: str) -> bool:
        try:
            self._api.enroll(training_id, employee_id)
        except ApiError as e:
            self._store.dispatch(ErrorRaised(e.message))
            return False
        self._store.dispatch(ParticipantAdded(str(training_id), str(employee_id)))
        return True

    def remove_participant(self, training_id: str, employee_id: str) -> bool:
        try:
            self._api.unenroll(training_id, employee_id)
        except ApiError as e:
            self._store.dispatch(ErrorRaised(e.message))
            return False
        self._store.dispatch(ParticipantRemoved(str(training_id), str(employee_id)))
        return True

    # -------- Evaluations --------
    def select_evaluation(self, evaluation_id: str) -> None:
        self._store.dispatch(SelectEvaluation(str(evaluation_id)))

    def back_to_evaluations(self) -> None:
        self._store.dispatch(Navigate(View.EVALUATIONS_LIST))

    def open_evaluation_form(self) -> None:
        self._store.dispatch(Navigate(View.EVALUATIONS_FORM))

    def add_evaluation(self, data: dict) -> bool:
        try:
            self._api.create_evaluation(data)
        except ApiError as e:
            self._store.dispatch(FormFailed(e.message))
            return False
        self._load("evaluations", self._api.list_evaluations)
        self._store.dispatch(Navigate(View.EVALUATIONS_LIST))
        return True
