"""Client view state as a typed store.

Every transition goes through ``reduce(state, action)``, a pure function,
so screens can be tested without any rendering or HTTP.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class View(str, Enum):
    EMPLOYEES_LIST = "employees_list"
    EMPLOYEES_DETAIL = "employees_detail"
    DEPARTMENTS_LIST = "departments_list"
    DEPARTMENTS_DETAIL = "departments_detail"
    RECRUITMENT_LIST = "recruitment_list"
    RECRUITMENT_DETAIL = "recruitment_detail"
    TRAININGS_LIST = "trainings_list"
    TRAININGS_DETAIL = "trainings_detail"
    EVALUATIONS_LIST = "evaluations_list"
    EVALUATIONS_FORM = "evaluations_form"
    EVALUATIONS_DETAIL = "evaluations_detail"

    @property
    def is_list(self) -> bool:
        return self.value.endswith("_list")


COLLECTIONS = ("employees", "departments", "jobs", "candidates", "trainings", "evaluations")


def _find(items: Tuple[dict, ...], item_id: Optional[str]) -> Optional[dict]:
    if item_id is None:
        return None
    for item in items:
        if str(item.get("id")) == str(item_id):
            return item
    return None


@dataclass(frozen=True)
class AppState:
    employees: Tuple[dict, ...] = ()
    departments: Tuple[dict, ...] = ()
    jobs: Tuple[dict, ...] = ()
    candidates: Tuple[dict, ...] = ()
    trainings: Tuple[dict, ...] = ()
    evaluations: Tuple[dict, ...] = ()

    view: View = View.EMPLOYEES_LIST

    # The employee detail is a separate fetch; the others are looked up by id.
    selected_employee: Optional[dict] = None
    pending_detail_request: Optional[int] = None
    selected_department_id: Optional[str] = None
    selected_job_id: Optional[str] = None
    selected_training_id: Optional[str] = None
    selected_evaluation_id: Optional[str] = None

    show_employee_form: bool = False
    editing_employee_id: Optional[str] = None

    loading: bool = False
    error: Optional[str] = None
    form_error: Optional[str] = None

    @property
    def selected_department(self) -> Optional[dict]:
        return _find(self.departments, self.selected_department_id)

    @property
    def selected_job(self) -> Optional[dict]:
        return _find(self.jobs, self.selected_job_id)

    @property
    def selected_training(self) -> Optional[dict]:
        return _find(self.trainings, self.selected_training_id)

    @property
    def selected_evaluation(self) -> Optional[dict]:
        return _find(self.evaluations, self.selected_evaluation_id)

    @property
    def editing_employee(self) -> Optional[dict]:
        return _find(self.employees, self.editing_employee_id)

    def job_candidates(self, job_id: str) -> List[dict]:
        return [c for c in self.candidates if str(c.get("jobId")) == str(job_id)]


# -------- Actions --------
@dataclass(frozen=True)
class EmployeesLoading:
    pass


@dataclass(frozen=True)
class EmployeesFailed:
    message: str


@dataclass(frozen=True)
class CollectionLoaded:
    name: str
    items: Tuple[dict, ...]


@dataclass(frozen=True)
class Navigate:
    view: View


@dataclass(frozen=True)
class EmployeeDetailRequested:
    request_id: int


@dataclass(frozen=True)
class EmployeeDetailLoaded:
    request_id: int
    employee: dict


@dataclass(frozen=True)
class SelectDepartment:
    department_id: str


@dataclass(frozen=True)
class SelectJob:
    job_id: str


@dataclass(frozen=True)
class SelectTraining:
    training_id: str


@dataclass(frozen=True)
class SelectEvaluation:
    evaluation_id: str


@dataclass(frozen=True)
class OpenEmployeeForm:
    employee_id: Optional[str] = None


@dataclass(frozen=True)
class CloseEmployeeForm:
    pass


@dataclass(frozen=True)
class FormFailed:
    message: str


@dataclass(frozen=True)
class EmployeeDeleted:
    employee_id: str


@dataclass(frozen=True)
class DepartmentUpdated:
    department: dict


@dataclass(frozen=True)
class JobUpdated:
    job: dict


@dataclass(frozen=True)
class CandidateUpdated:
    candidate_id: str
    job_id: str
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ParticipantAdded:
    training_id: str
    employee_id: str


@dataclass(frozen=True)
class ParticipantRemoved:
    training_id: str
    employee_id: str


@dataclass(frozen=True)
class ErrorRaised:
    message: str


@dataclass(frozen=True)
class ErrorCleared:
    pass


# -------- Reducer --------
def _replace_by_id(items: Tuple[dict, ...], updated: dict) -> Tuple[dict, ...]:
    return tuple(updated if str(i.get("id")) == str(updated.get("id")) else i for i in items)


def _patch_training(state: AppState, training_id: str, patch: Callable[[List[str]], List[str]]) -> AppState:
    trainings = []
    for t in state.trainings:
        if str(t.get("id")) == str(training_id):
            t = {**t, "enrolledEmployeeIds": patch(list(t.get("enrolledEmployeeIds") or []))}
        trainings.append(t)
    return replace(state, trainings=tuple(trainings))


def _navigate(state: AppState, view: View) -> AppState:
    if not view.is_list:
        return replace(state, view=view)
    # Leaving a detail screen drops every selection and any detail still in flight.
    return replace(
        state,
        view=view,
        selected_employee=None,
        pending_detail_request=None,
        selected_department_id=None,
        selected_job_id=None,
        selected_training_id=None,
        selected_evaluation_id=None,
        form_error=None,
    )


def _collection_loaded(state: AppState, action: CollectionLoaded) -> AppState:
    if action.name not in COLLECTIONS:
        raise ValueError(f"unknown collection: {action.name}")
    changes: Dict[str, Any] = {action.name: tuple(action.items)}
    if action.name == "employees":
        changes.update(loading=False, error=None)
    return replace(state, **changes)


def _detail_loaded(state: AppState, action: EmployeeDetailLoaded) -> AppState:
    if action.request_id != state.pending_detail_request:
        logger.debug("dropping stale employee detail (request %s)", action.request_id)
        return state
    return replace(
        state,
        selected_employee=action.employee,
        pending_detail_request=None,
        view=View.EMPLOYEES_DETAIL,
    )


def _employee_deleted(state: AppState, action: EmployeeDeleted) -> AppState:
    employees = tuple(e for e in state.employees if str(e.get("id")) != str(action.employee_id))
    state = replace(state, employees=employees)
    selected = state.selected_employee
    if selected and str(selected.get("id")) == str(action.employee_id):
        return _navigate(state, View.EMPLOYEES_LIST)
    return state


def _candidate_updated(state: AppState, action: CandidateUpdated) -> AppState:
    candidates = tuple(
        {**c, **action.changes}
        if str(c.get("id")) == str(action.candidate_id) and str(c.get("jobId")) == str(action.job_id)
        else c
        for c in state.candidates
    )
    return replace(state, candidates=candidates)


_REDUCERS: Dict[type, Callable[[AppState, Any], AppState]] = {
    EmployeesLoading: lambda s, a: replace(s, loading=True, error=None),
    EmployeesFailed: lambda s, a: replace(s, loading=False, error=a.message),
    CollectionLoaded: _collection_loaded,
    Navigate: lambda s, a: _navigate(s, a.view),
    EmployeeDetailRequested: lambda s, a: replace(s, pending_detail_request=a.request_id),
    EmployeeDetailLoaded: _detail_loaded,
    SelectDepartment: lambda s, a: replace(s, selected_department_id=a.department_id, view=View.DEPARTMENTS_DETAIL),
    SelectJob: lambda s, a: replace(s, selected_job_id=a.job_id, view=View.RECRUITMENT_DETAIL),
    SelectTraining: lambda s, a: replace(s, selected_training_id=a.training_id, view=View.TRAININGS_DETAIL),
    SelectEvaluation: lambda s, a: replace(s, selected_evaluation_id=a.evaluation_id, view=View.EVALUATIONS_DETAIL),
    OpenEmployeeForm: lambda s, a: replace(
        s, show_employee_form=True, editing_employee_id=a.employee_id, form_error=None
    ),
    CloseEmployeeForm: lambda s, a: replace(s, show_employee_form=False, editing_employee_id=None, form_error=None),
    FormFailed: lambda s, a: replace(s, form_error=a.message),
    EmployeeDeleted: _employee_deleted,
    DepartmentUpdated: lambda s, a: replace(s, departments=_replace_by_id(s.departments, a.department)),
    JobUpdated: lambda s, a: replace(s, jobs=_replace_by_id(s.jobs, a.job)),
    CandidateUpdated: _candidate_updated,
    ParticipantAdded: lambda s, a: _patch_training(
        s, a.training_id, lambda ids: ids if a.employee_id in ids else ids + [a.employee_id]
    ),
    ParticipantRemoved: lambda s, a: _patch_training(
        s, a.training_id, lambda ids: [i for i in ids if i != a.employee_id]
    ),
    ErrorRaised: lambda s, a: replace(s, error=a.message),
    ErrorCleared: lambda s, a: replace(s, error=None),
}


def reduce(state: AppState, action: Any) -> AppState:
    try:
        handler = _REDUCERS[type(action)]
    except KeyError:
        raise TypeError(f"unknown action: {type(action).__name__}") from None
    return handler(state, action)


class Store:
    """Holds the current ``AppState`` and notifies subscribers on change."""

    def __init__(self, state: Optional[AppState] = None):
        self._state = state or AppState()
        self._listeners: List[Callable[[AppState], None]] = []

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, action: Any) -> AppState:
        new_state = reduce(self._state, action)
        if new_state is not self._state:
            self._state = new_state
            for listener in list(self._listeners):
                listener(new_state)
        return self._state

    def subscribe(self, listener: Callable[[AppState], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
