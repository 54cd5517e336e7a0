from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_CURRENT_EMPLOYER, DEFAULT_TRAINING_PROVIDER
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.repository import DepartmentRepository
from .departments.service import DepartmentService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .evaluations.mysql_evaluation_repository import MySQLEvaluationRepository
from .evaluations.repository import EvaluationRepository
from .evaluations.service import EvaluationService
from .payroll.calculator.base import SalaryPolicy
from .payroll.calculator.standard_calculator import FlatWithholdingPolicy
from .recruitment.mysql_recruitment_repository import MySQLRecruitmentRepository
from .recruitment.repository import RecruitmentRepository
from .recruitment.service import RecruitmentService
from .trainings.mysql_training_repository import MySQLTrainingRepository
from .trainings.repository import TrainingRepository
from .trainings.service import TrainingService


@dataclass(frozen=True)
class Container:
    # None when the repositories are not backed by MySQL (tests).
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    departments_repo: DepartmentRepository
    recruitment_repo: RecruitmentRepository
    trainings_repo: TrainingRepository
    evaluations_repo: EvaluationRepository

    employee_service: EmployeeService
    department_service: DepartmentService
    recruitment_service: RecruitmentService
    training_service: TrainingService
    evaluation_service: EvaluationService


def wire_services(
    *,
    conn: Optional[DatabaseConnection],
    employees_repo: EmployeeRepository,
    departments_repo: DepartmentRepository,
    recruitment_repo: RecruitmentRepository,
    trainings_repo: TrainingRepository,
    evaluations_repo: EvaluationRepository,
    current_employer: str = DEFAULT_CURRENT_EMPLOYER,
    salary_policy: Optional[SalaryPolicy] = None,
) -> Container:
    """Build the services on top of any set of repositories."""
    employee_service = EmployeeService(
        employees_repo,
        departments_repo,
        current_employer=current_employer,
        salary_policy=salary_policy or FlatWithholdingPolicy(),
    )
    return Container(
        conn=conn,
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        recruitment_repo=recruitment_repo,
        trainings_repo=trainings_repo,
        evaluations_repo=evaluations_repo,
        employee_service=employee_service,
        department_service=DepartmentService(departments_repo, employees_repo),
        recruitment_service=RecruitmentService(recruitment_repo, employees_repo),
        training_service=TrainingService(trainings_repo, employees_repo, provider=DEFAULT_TRAINING_PROVIDER),
        evaluation_service=EvaluationService(evaluations_repo, employees_repo),
    )


def build_container(
    *,
    db_config: dict,
    pool_size: int = 5,
    current_employer: str = DEFAULT_CURRENT_EMPLOYER,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(pool_size),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_services(
        conn=conn,
        employees_repo=MySQLEmployeeRepository(conn, current_employer=current_employer),
        departments_repo=MySQLDepartmentRepository(conn),
        recruitment_repo=MySQLRecruitmentRepository(conn),
        trainings_repo=MySQLTrainingRepository(conn),
        evaluations_repo=MySQLEvaluationRepository(conn),
        current_employer=current_employer,
    )
