from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, TypeVar

from ..common.datetime_utils import age_on, iso_date, today
from ..common.validators import optional_decimal, require_date, require_fields, require_int
from ..core.constants import (
    ANNUAL_VACATION_DAYS,
    DEFAULT_TRAINING_PROVIDER,
    DUPLICATE_EMAIL_MESSAGE,
    DUPLICATE_NIF_MESSAGE,
    SALARY_UPDATE_REASON,
)
from ..core.enums import VacationStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..departments.repository import DepartmentRepository
from ..payroll.calculator.base import SalaryPolicy
from ..payroll.calculator.standard_calculator import FlatWithholdingPolicy
from .model import Employee, EmployeeFields, NewEmployee, VacationRequest
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

NOT_FOUND_MESSAGE = "Colaborador não encontrado"

CREATE_REQUIRED = (
    "nif",
    "primeiro_nome",
    "ultimo_nome",
    "email",
    "num_telemovel",
    "data_nascimento",
    "cargo",
    "id_depart",
)
UPDATE_REQUIRED = ("primeiro_nome", "ultimo_nome", "email", "num_telemovel", "cargo", "id_depart")

# Request bodies use the Portuguese column names; English aliases are accepted too.
_FIELD_ALIASES = {
    "nif": ("nif",),
    "primeiro_nome": ("primeiro_nome", "firstName"),
    "ultimo_nome": ("ultimo_nome", "lastName"),
    "email": ("email",),
    "num_telemovel": ("num_telemovel", "phone"),
    "data_nascimento": ("data_nascimento", "birthDate"),
    "cargo": ("cargo", "role"),
    "id_depart": ("id_depart", "departmentId"),
    "salario_bruto": ("salario_bruto", "baseSalaryGross"),
    "nome_rua": ("nome_rua", "street"),
    "nome_localidade": ("nome_localidade", "locality"),
    "codigo_postal": ("codigo_postal", "postalCode"),
    "data_admissao": ("data_admissao", "admissionDate"),
}


def normalize_employee_payload(data: Mapping[str, Any]) -> dict:
    out: dict = {}
    for field, aliases in _FIELD_ALIASES.items():
        for alias in aliases:
            value = data.get(alias)
            if value is not None:
                out[field] = value.strip() if isinstance(value, str) else value
                break

    full_name = data.get("fullName")
    if full_name is not None and not isinstance(full_name, str):
        raise ValidationError("Nome inválido")
    full_name = (full_name or "").strip()
    if full_name and not (out.get("primeiro_nome") or out.get("ultimo_nome")):
        # A single word is a first name with an empty last name.
        first, _, rest = full_name.partition(" ")
        out["primeiro_nome"] = first
        out["ultimo_nome"] = rest.strip()
        out["nome_completo"] = full_name

    if "department" in data and "id_depart" not in out:
        out["departamento"] = data.get("department")
    return out


def missing_exempt_fields(data: Mapping[str, Any]) -> set:
    """Required fields that another accepted input already covers."""
    exempt = set()
    if data.get("departamento") and data.get("id_depart") is None:
        exempt.add("id_depart")
    if data.get("nome_completo"):
        exempt.add("ultimo_nome")
    return exempt


def used_vacation_days(requests, *, year: int) -> int:
    """Approved days of requests starting in ``year``."""
    return sum(
        int(r.days) for r in requests if r.status == VacationStatus.APPROVED and r.start_date.year == year
    )


def employee_base_to_api(e: Employee) -> dict:
    return {
        "id": str(e.employee_id),
        "fullName": e.full_name,
        "firstName": e.first_name,
        "lastName": e.last_name,
        "nif": e.nif,
        "email": e.email,
        "phone": e.phone,
        "address": e.address,
        "street": e.street,
        "locality": e.locality,
        "postalCode": e.postal_code,
        "birthDate": iso_date(e.birth_date),
        "age": age_on(e.birth_date, today()),
        "departmentId": str(e.department_id) if e.department_id is not None else None,
        "department": e.department_name,
        "role": e.role,
        "admissionDate": iso_date(e.admission_date),
        "avatarUrl": None,
    }


class EmployeeService:
    """Use cases: read the employee list/aggregate and hire/update/dismiss."""

    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        *,
        current_employer: str,
        salary_policy: Optional[SalaryPolicy] = None,
    ):
        self._employees = employees
        self._departments = departments
        self._current_employer = current_employer
        self._salary_policy = salary_policy or FlatWithholdingPolicy()

    # -------- Reads --------
    def list_employees(self) -> list[dict]:
        out: list[dict] = []
        for e in self._employees.list_with_salary():
            item = employee_base_to_api(e)
            item["financials"] = self._salary_policy.breakdown(e.base_salary_gross).to_api()
            out.append(item)
        return out

    def _safe(self, label: str, employee_id: int, fetch: Callable[[], T], default: T) -> T:
        # A failing sub-collection must not break the whole aggregate.
        try:
            return fetch()
        except Exception:
            logger.exception("could not load %s for employee %s", label, employee_id)
            return default

    def get_detail(self, employee_id: int) -> dict:
        employee_id = int(employee_id)
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(NOT_FOUND_MESSAGE)

        repo = self._employees
        gross = self._safe("salary", employee_id, lambda: repo.current_salary(employee_id), None)
        benefits = self._safe("benefits", employee_id, lambda: repo.current_benefits(employee_id), [])
        salary_history = self._safe("salary history", employee_id, lambda: repo.salary_history(employee_id), [])
        vacations: list[VacationRequest] = list(
            self._safe("vacations", employee_id, lambda: repo.vacation_requests(employee_id), [])
        )
        trainings = self._safe("trainings", employee_id, lambda: repo.trainings(employee_id), [])
        evaluations = self._safe("evaluations", employee_id, lambda: repo.evaluations(employee_id), [])
        job_history = self._safe("job history", employee_id, lambda: repo.job_history(employee_id), [])
        dependents = self._safe("dependents", employee_id, lambda: repo.dependents(employee_id), [])
        absences = self._safe("absences", employee_id, lambda: repo.absences(employee_id), [])

        used_days = used_vacation_days(vacations, year=today().year)

        financials = self._salary_policy.breakdown(gross).to_api()
        financials["benefits"] = [b.to_api() for b in benefits]
        financials["history"] = [s.to_api(SALARY_UPDATE_REASON) for s in salary_history]

        out = employee_base_to_api(employee)
        out.update(
            {
                "financials": financials,
                "vacations": {
                    "totalDays": ANNUAL_VACATION_DAYS,
                    "usedDays": used_days,
                    "remainingDays": ANNUAL_VACATION_DAYS - used_days,
                    "history": [v.to_api() for v in vacations],
                },
                "trainings": [t.to_api(DEFAULT_TRAINING_PROVIDER) for t in trainings],
                "evaluations": [ev.to_api() for ev in evaluations],
                "jobHistory": [j.to_api(self._current_employer) for j in job_history],
                "dependents": [d.to_api() for d in dependents],
                "absences": [a.to_api() for a in absences],
            }
        )
        return out

    # -------- Writes --------
    def _resolve_department(self, data: dict) -> int:
        if data.get("id_depart") is None and data.get("departamento"):
            dept_id = self._departments.find_id_by_name(str(data["departamento"]))
            if dept_id is None:
                raise ValidationError("Departamento inválido")
            return dept_id

        dept_id = require_int(data.get("id_depart"), "Departamento")
        if not self._departments.get_by_id(dept_id):
            raise ValidationError("Departamento inválido")
        return dept_id

    def _fields(self, data: dict, department_id: int) -> EmployeeFields:
        email = str(data["email"]).strip()
        if "@" not in email:
            raise ValidationError("Email inválido")
        return EmployeeFields(
            first_name=str(data["primeiro_nome"]),
            last_name=str(data["ultimo_nome"]),
            email=email,
            phone=str(data["num_telemovel"]),
            role=str(data["cargo"]),
            department_id=department_id,
            street=data.get("nome_rua") or None,
            locality=data.get("nome_localidade") or None,
            postal_code=data.get("codigo_postal") or None,
        )

    def create(self, payload: Mapping[str, Any]) -> int:
        data = normalize_employee_payload(payload)
        exempt = missing_exempt_fields(data)
        require_fields(data, [f for f in CREATE_REQUIRED if f not in exempt])

        nif = str(data["nif"])
        if not (nif.isdigit() and len(nif) == 9):
            raise ValidationError("NIF inválido (9 dígitos)")

        birth_date = require_date(data["data_nascimento"], "Data de nascimento")
        admission_date = (
            require_date(data["data_admissao"], "Data de admissão") if data.get("data_admissao") else today()
        )
        gross = optional_decimal(data.get("salario_bruto"), "Salário bruto")
        if gross is not None and gross < 0:
            raise ValidationError("Salário bruto inválido")

        fields = self._fields(data, self._resolve_department(data))

        if self._employees.find_id_by_nif(nif) is not None:
            raise ConflictError(DUPLICATE_NIF_MESSAGE)
        if self._employees.find_id_by_email(fields.email) is not None:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        new = NewEmployee(
            nif=nif,
            fields=fields,
            birth_date=birth_date,
            admission_date=admission_date,
            gross_salary=gross,
        )
        net = self._salary_policy.net_salary(gross) if gross is not None else None
        employee_id = self._employees.create(new, net_salary=net)
        logger.info("employee %s created (nif=%s)", employee_id, nif)
        return employee_id

    def update(self, employee_id: int, payload: Mapping[str, Any]) -> None:
        employee_id = int(employee_id)
        data = normalize_employee_payload(payload)
        exempt = missing_exempt_fields(data)
        require_fields(data, [f for f in UPDATE_REQUIRED if f not in exempt])

        if not self._employees.get_by_id(employee_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)

        fields = self._fields(data, self._resolve_department(data))
        owner = self._employees.find_id_by_email(fields.email)
        if owner is not None and owner != employee_id:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        if not self._employees.update(employee_id, fields):
            raise NotFoundError(NOT_FOUND_MESSAGE)

    def delete(self, employee_id: int) -> None:
        employee_id = int(employee_id)
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        if not self._employees.delete(employee_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        logger.info("employee %s deleted", employee_id)
