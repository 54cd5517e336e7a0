from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

import src.hr_pro.hr_pro.employees.service as employee_service_module
from src.hr_pro.hr_pro.container import wire_services
from src.hr_pro.hr_pro.core.constants import DEFAULT_CURRENT_EMPLOYER
from src.hr_pro.hr_pro.departments.model import Department, DepartmentMember
from src.hr_pro.hr_pro.employees.model import (
    Absence,
    Benefit,
    Dependent,
    Employee,
    JobHistoryEntry,
    SalaryEntry,
    TrainingAttendance,
    VacationRequest,
)
from src.hr_pro.hr_pro.evaluations.model import Evaluation
from src.hr_pro.hr_pro.recruitment.model import Candidate, JobOpening
from src.hr_pro.hr_pro.trainings.model import TrainingProgram

TODAY = date(2024, 10, 1)


class InMemoryHR:
    """One shared dataset behind all fake repositories, with the store's cascades."""

    def __init__(self):
        self.departments = {
            1: {"name": "Recursos Humanos", "description": "Gestão de pessoas", "manager_id": 1},
            2: {"name": "Tecnologia da Informação", "description": None, "manager_id": 2},
            3: {"name": "Financeiro", "description": "Contabilidade", "manager_id": None},
        }
        self.employees: dict[int, Employee] = {
            1: Employee(
                employee_id=1,
                nif="245123987",
                first_name="Marta",
                last_name="Silva",
                email="marta.silva@hrpro.pt",
                phone="912000001",
                birth_date=date(1985, 3, 14),
                role="Diretora de RH",
                department_id=1,
                street="Rua das Flores 12",
                locality="Porto",
                postal_code="4050-262",
            ),
            2: Employee(
                employee_id=2,
                nif="231987456",
                first_name="João",
                last_name="Pereira",
                email="joao.pereira@hrpro.pt",
                phone="913000002",
                birth_date=date(1990, 10, 2),
                role="Engenheiro de Software",
                department_id=2,
            ),
            3: Employee(
                employee_id=3,
                nif="209876543",
                first_name="Rita",
                last_name="Costa",
                email="rita.costa@hrpro.pt",
                phone="914000003",
                birth_date=date(1993, 11, 21),
                role="Analista Financeira",
                department_id=3,
                locality="Porto",
            ),
        }
        self.job_history = {
            1: [JobHistoryEntry("bd054", "Diretora de RH", date(2015, 2, 1), None)],
            2: [
                JobHistoryEntry("bd054", "Engenheiro de Software", date(2018, 1, 8), None),
                JobHistoryEntry("Softinsa", "Programador Júnior", date(2012, 9, 1), date(2017, 12, 31)),
            ],
            3: [JobHistoryEntry("bd054", "Analista Financeira", date(2021, 4, 12), None)],
        }
        self.salaries = {
            1: [SalaryEntry(date(2015, 2, 1), Decimal("2800.00")), SalaryEntry(date(2023, 1, 1), Decimal("3400.00"))],
            2: [SalaryEntry(date(2018, 1, 8), Decimal("2500.00"))],
            3: [SalaryEntry(date(2021, 4, 12), Decimal("1800.00"))],
        }
        self.net_salaries: dict[tuple, Decimal] = {}
        self.benefits = {
            1: [
                Benefit(1, "Subsídio de Alimentação", Decimal("6.00"), date(2015, 2, 1)),
                Benefit(1, "Subsídio de Alimentação", Decimal("9.60"), date(2023, 1, 1)),
                Benefit(1, "Seguro de Saúde", Decimal("45.00"), date(2023, 1, 1)),
            ],
        }
        self.vacations = {
            1: [
                VacationRequest(1, date(2024, 8, 5), date(2024, 8, 16), 10, "Aprovado"),
                VacationRequest(1, date(2024, 2, 1), date(2024, 2, 5), 3, "Aprovado"),
                VacationRequest(1, date(2023, 12, 20), date(2023, 12, 29), 5, "Aprovado"),
                VacationRequest(1, date(2024, 9, 2), date(2024, 9, 3), 2, "Por aprovar"),
                VacationRequest(1, date(2024, 11, 4), date(2024, 11, 7), 4, "Rejeitado"),
                VacationRequest(1, date(2024, 12, 23), date(2024, 12, 24), 2, "Em revisão"),
            ],
        }
        self.dependents = {2: [Dependent(2, "Tomás Pereira", "Filho", date(2019, 5, 10))]}
        self.absences = {
            3: [
                Absence(3, date(2024, 5, 3), None),
                Absence(3, date(2024, 2, 12), "Consulta médica"),
                Absence(3, date(2024, 1, 8), "   "),
            ]
        }
        self.programs = {
            1: {
                "title": "RGPD na Prática",
                "description": "Proteção de dados pessoais",
                "start": date(2024, 3, 4),
                "end": date(2024, 3, 5),
                "status": "Concluída",
            },
            2: {
                "title": "Liderança de Equipas",
                "description": None,
                "start": date(2025, 5, 12),
                "end": date(2025, 5, 16),
                "status": "Planeada",
            },
        }
        # (employee_id, training_id) -> (start, end)
        self.enrollments: dict[tuple, tuple] = {
            (1, 1): (date(2024, 3, 4), date(2024, 3, 5)),
            (2, 1): (date(2024, 3, 4), date(2024, 3, 5)),
        }
        self.evaluations: dict[int, dict] = {
            1: {
                "employee_id": 2,
                "reviewer_id": 1,
                "date": date(2024, 6, 30),
                "score": Decimal("4.5"),
                "comments": "Excelente autonomia técnica",
                "self_evaluation": None,
            },
            2: {
                "employee_id": 2,
                "reviewer_id": 2,
                "date": date(2024, 6, 15),
                "score": Decimal("4.0"),
                "comments": "Autoavaliação semestral",
                "self_evaluation": "Cumpri os objetivos definidos",
            },
        }
        self.jobs = {
            1: {"department_id": 2, "open_date": date(2024, 9, 1), "status": "Aberta"},
            2: {"department_id": 3, "open_date": date(2024, 6, 15), "status": "Fechada"},
        }
        self.requirements = {1: ["Python", "SQL"]}
        self.candidates = {
            1: {"name": "Carla Mendes", "email": "carla.mendes@mail.pt", "phone": "915000001"},
            2: {"name": "Pedro Alves", "email": "pedro.alves@mail.pt", "phone": None},
        }
        # (candidate_id, job_id) -> application
        self.applications: dict[tuple, dict] = {
            (1, 1): {"applied": date(2024, 9, 10), "status": "Entrevista", "recruiter_id": 1},
            (2, 1): {"applied": date(2024, 9, 12), "status": "Submetido", "recruiter_id": None},
        }

    def full_name(self, employee_id: Optional[int]) -> Optional[str]:
        e = self.employees.get(employee_id) if employee_id is not None else None
        return e.full_name if e else None

    def delete_employee(self, employee_id: int) -> None:
        del self.employees[employee_id]
        for table in (self.job_history, self.salaries, self.benefits, self.vacations, self.dependents, self.absences):
            table.pop(employee_id, None)
        self.enrollments = {k: v for k, v in self.enrollments.items() if k[0] != employee_id}
        self.evaluations = {k: v for k, v in self.evaluations.items() if v["employee_id"] != employee_id}
        for ev in self.evaluations.values():
            if ev["reviewer_id"] == employee_id:
                ev["reviewer_id"] = None
        for app in self.applications.values():
            if app["recruiter_id"] == employee_id:
                app["recruiter_id"] = None


class FakeEmployeeRepo:
    def __init__(self, db: InMemoryHR, current_employer: str = DEFAULT_CURRENT_EMPLOYER):
        self.db = db
        self.current_employer = current_employer

    def _hydrate(self, e: Employee, *, with_salary: bool = False) -> Employee:
        dept = self.db.departments.get(e.department_id) if e.department_id is not None else None
        admissions = [h.start_date for h in self.db.job_history.get(e.employee_id, []) if h.company == self.current_employer]
        return replace(
            e,
            department_name=dept["name"] if dept else None,
            admission_date=max(admissions) if admissions else None,
            base_salary_gross=self.current_salary(e.employee_id) if with_salary else None,
        )

    def list_with_salary(self):
        items = [self._hydrate(e, with_salary=True) for e in self.db.employees.values()]
        return sorted(items, key=lambda e: (e.first_name, e.last_name))

    def get_by_id(self, employee_id):
        e = self.db.employees.get(int(employee_id))
        return self._hydrate(e) if e else None

    def find_id_by_nif(self, nif):
        return next((i for i, e in self.db.employees.items() if e.nif == nif), None)

    def find_id_by_email(self, email):
        return next((i for i, e in self.db.employees.items() if e.email == email), None)

    def current_salary(self, employee_id):
        rows = self.db.salaries.get(int(employee_id), [])
        return max(rows, key=lambda s: s.start_date).gross if rows else None

    def current_benefits(self, employee_id):
        latest: dict[str, Benefit] = {}
        for b in self.db.benefits.get(int(employee_id), []):
            if b.benefit_type not in latest or b.start_date > latest[b.benefit_type].start_date:
                latest[b.benefit_type] = b
        return sorted(latest.values(), key=lambda b: b.benefit_type)

    def salary_history(self, employee_id):
        return sorted(self.db.salaries.get(int(employee_id), []), key=lambda s: s.start_date, reverse=True)

    def vacation_requests(self, employee_id):
        return sorted(self.db.vacations.get(int(employee_id), []), key=lambda v: v.start_date, reverse=True)

    def trainings(self, employee_id):
        out = []
        for (emp_id, training_id), (start, end) in self.db.enrollments.items():
            if emp_id == int(employee_id):
                p = self.db.programs[training_id]
                out.append(TrainingAttendance(training_id, p["title"], start, end, p["status"]))
        return sorted(out, key=lambda t: t.start_date, reverse=True)

    def evaluations(self, employee_id):
        return FakeEvaluationRepo(self.db).list_for_employee(employee_id)

    def job_history(self, employee_id):
        return sorted(self.db.job_history.get(int(employee_id), []), key=lambda h: h.start_date, reverse=True)

    def dependents(self, employee_id):
        return list(self.db.dependents.get(int(employee_id), []))

    def absences(self, employee_id):
        return sorted(self.db.absences.get(int(employee_id), []), key=lambda a: a.date, reverse=True)

    def create(self, new, *, net_salary):
        new_id = max(self.db.employees, default=0) + 1
        f = new.fields
        self.db.employees[new_id] = Employee(
            employee_id=new_id,
            nif=new.nif,
            first_name=f.first_name,
            last_name=f.last_name,
            email=f.email,
            phone=f.phone,
            birth_date=new.birth_date,
            role=f.role,
            department_id=f.department_id,
            street=f.street,
            locality=f.locality,
            postal_code=f.postal_code,
        )
        self.db.job_history[new_id] = [JobHistoryEntry(self.current_employer, f.role, new.admission_date, None)]
        if new.gross_salary is not None:
            self.db.salaries[new_id] = [SalaryEntry(new.admission_date, new.gross_salary)]
            self.db.net_salaries[(new_id, new.admission_date)] = net_salary
        return new_id

    def update(self, employee_id, fields):
        e = self.db.employees.get(int(employee_id))
        if not e:
            return False
        self.db.employees[int(employee_id)] = replace(
            e,
            first_name=fields.first_name,
            last_name=fields.last_name,
            email=fields.email,
            phone=fields.phone,
            role=fields.role,
            department_id=fields.department_id,
            street=fields.street,
            locality=fields.locality,
            postal_code=fields.postal_code,
        )
        return True

    def delete(self, employee_id):
        employee_id = int(employee_id)
        for dept in self.db.departments.values():
            if dept["manager_id"] == employee_id:
                dept["manager_id"] = None
        if employee_id not in self.db.employees:
            return False
        self.db.delete_employee(employee_id)
        return True


class FakeDepartmentRepo:
    def __init__(self, db: InMemoryHR):
        self.db = db

    def _to_department(self, dept_id: int) -> Department:
        d = self.db.departments[dept_id]
        return Department(
            dept_id=dept_id,
            name=d["name"],
            description=d["description"],
            manager_id=d["manager_id"],
            manager_name=self.db.full_name(d["manager_id"]),
        )

    def list_all(self):
        return [self._to_department(i) for i in sorted(self.db.departments)]

    def get_by_id(self, dept_id):
        return self._to_department(int(dept_id)) if int(dept_id) in self.db.departments else None

    def find_id_by_name(self, name):
        return next((i for i, d in self.db.departments.items() if d["name"] == name), None)

    def list_employees(self, dept_id):
        members = [e for e in self.db.employees.values() if e.department_id == int(dept_id)]
        members.sort(key=lambda e: (e.first_name, e.last_name))
        return [DepartmentMember(e.employee_id, e.full_name, e.email, e.role) for e in members]

    def set_manager(self, dept_id, manager_id):
        if int(dept_id) not in self.db.departments:
            return False
        self.db.departments[int(dept_id)]["manager_id"] = manager_id
        return True


class FakeRecruitmentRepo:
    def __init__(self, db: InMemoryHR):
        self.db = db

    def _to_job(self, job_id: int) -> JobOpening:
        j = self.db.jobs[job_id]
        return JobOpening(
            job_id=job_id,
            department_id=j["department_id"],
            department_name=self.db.departments[j["department_id"]]["name"],
            open_date=j["open_date"],
            stored_status=j["status"],
            requirements=tuple(self.db.requirements.get(job_id, [])),
        )

    def list_jobs(self):
        return sorted((self._to_job(i) for i in self.db.jobs), key=lambda j: j.open_date, reverse=True)

    def get_job(self, job_id):
        return self._to_job(int(job_id)) if int(job_id) in self.db.jobs else None

    def set_job_status(self, job_id, stored_status):
        if int(job_id) not in self.db.jobs:
            return False
        self.db.jobs[int(job_id)]["status"] = stored_status
        return True

    def list_candidates(self, job_id=None):
        out = []
        for (cand_id, j_id), app in self.db.applications.items():
            if job_id is not None and j_id != int(job_id):
                continue
            c = self.db.candidates[cand_id]
            out.append(
                Candidate(
                    candidate_id=cand_id,
                    job_id=j_id,
                    name=c["name"],
                    email=c["email"],
                    phone=c["phone"],
                    applied_date=app["applied"],
                    stored_status=app["status"],
                    recruiter_id=app["recruiter_id"],
                )
            )
        return sorted(out, key=lambda c: c.applied_date, reverse=True)

    def update_candidate_status(self, candidate_id, job_id, stored_status):
        app = self.db.applications.get((int(candidate_id), int(job_id)))
        if not app:
            return False
        app["status"] = stored_status
        return True

    def update_candidate_recruiter(self, candidate_id, job_id, recruiter_id):
        app = self.db.applications.get((int(candidate_id), int(job_id)))
        if not app:
            return False
        app["recruiter_id"] = recruiter_id
        return True


class FakeTrainingRepo:
    def __init__(self, db: InMemoryHR):
        self.db = db

    def _to_program(self, training_id: int) -> TrainingProgram:
        p = self.db.programs[training_id]
        enrolled = sorted(emp for emp, t in self.db.enrollments if t == training_id)
        return TrainingProgram(
            training_id=training_id,
            title=p["title"],
            description=p["description"],
            start_date=p["start"],
            end_date=p["end"],
            stored_status=p["status"],
            enrolled_employee_ids=tuple(enrolled),
        )

    def list_all(self):
        return sorted((self._to_program(i) for i in self.db.programs), key=lambda p: p.start_date, reverse=True)

    def get_by_id(self, training_id):
        return self._to_program(int(training_id)) if int(training_id) in self.db.programs else None

    def enroll(self, training_id, employee_id, *, start_date, end_date):
        self.db.enrollments.setdefault((int(employee_id), int(training_id)), (start_date, end_date))

    def unenroll(self, training_id, employee_id):
        return self.db.enrollments.pop((int(employee_id), int(training_id)), None) is not None


class FakeEvaluationRepo:
    def __init__(self, db: InMemoryHR):
        self.db = db

    def _to_evaluation(self, evaluation_id: int) -> Evaluation:
        ev = self.db.evaluations[evaluation_id]
        return Evaluation(
            evaluation_id=evaluation_id,
            employee_id=ev["employee_id"],
            reviewer_id=ev["reviewer_id"],
            date=ev["date"],
            score=ev["score"],
            comments=ev["comments"],
            self_evaluation=ev["self_evaluation"],
            employee_name=self.db.full_name(ev["employee_id"]),
            reviewer_name=self.db.full_name(ev["reviewer_id"]),
        )

    def list_all(self):
        items = [self._to_evaluation(i) for i in self.db.evaluations]
        return sorted(items, key=lambda e: (e.date, e.evaluation_id), reverse=True)

    def list_for_employee(self, employee_id):
        return [e for e in self.list_all() if e.employee_id == int(employee_id)]

    def create(self, new):
        new_id = max(self.db.evaluations, default=0) + 1
        self.db.evaluations[new_id] = {
            "employee_id": new.employee_id,
            "reviewer_id": new.reviewer_id,
            "date": new.date,
            "score": new.score,
            "comments": new.comments,
            "self_evaluation": new.self_evaluation,
        }
        return new_id


@pytest.fixture(autouse=True)
def fixed_today(monkeypatch):
    monkeypatch.setattr(employee_service_module, "today", lambda: TODAY)
    return TODAY


@pytest.fixture
def db():
    return InMemoryHR()


@pytest.fixture
def container(db):
    return wire_services(
        conn=None,
        employees_repo=FakeEmployeeRepo(db),
        departments_repo=FakeDepartmentRepo(db),
        recruitment_repo=FakeRecruitmentRepo(db),
        trainings_repo=FakeTrainingRepo(db),
        evaluations_repo=FakeEvaluationRepo(db),
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.hr_pro.hr_pro.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


class RecordingCursor:
    """Cursor that records statements and answers from canned rows.

    ``rows`` maps a SQL fragment to the rows returned by the first statement
    containing it; ``fail_on`` makes the first statement containing that
    fragment raise ``error``.
    """

    def __init__(self, conn: "RecordingConnection"):
        self._conn = conn
        self._rows: list = []
        self.rowcount = 0

    def execute(self, sql, params=None):
        self._conn.statements.append((" ".join(sql.split()), params))
        if self._conn.fail_on and self._conn.fail_on in sql:
            raise self._conn.error
        self._rows = []
        for fragment, rows in self._conn.rows.items():
            if fragment in sql:
                self._rows = list(rows)
                break
        self.rowcount = self._conn.rowcount

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class RecordingConnection:
    def __init__(self):
        self.statements: list = []
        self.rows: dict = {}
        self.rowcount = 1
        self.fail_on: Optional[str] = None
        self.error: Exception = RuntimeError("falha simulada")
        self.commits = 0
        self.rollbacks = 0
        self.closed = 0

    def cursor(self, dictionary=False, buffered=False):
        return RecordingCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed += 1

    # Stands in for DatabaseConnection: every connect() hands out this same connection.
    def connect(self):
        return self

    def sql(self) -> list:
        return [s for s, _ in self.statements]


@pytest.fixture
def mysql_conn():
    return RecordingConnection()
