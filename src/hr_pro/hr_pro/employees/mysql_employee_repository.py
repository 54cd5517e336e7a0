from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from mysql.connector import errorcode, errors

from ..core.constants import DUPLICATE_EMAIL_MESSAGE, DUPLICATE_NIF_MESSAGE
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, execute, fetchall, fetchone
from ..evaluations.model import Evaluation
from ..evaluations.mysql_evaluation_repository import EVALUATION_SELECT, to_evaluation
from .model import (
    Absence,
    Benefit,
    Dependent,
    Employee,
    EmployeeFields,
    JobHistoryEntry,
    NewEmployee,
    SalaryEntry,
    TrainingAttendance,
    VacationRequest,
)
from .repository import EmployeeRepository

_BASE_COLUMNS = """
    f.id_fun, f.nif, f.primeiro_nome, f.ultimo_nome, f.email, f.num_telemovel,
    f.nome_rua, f.nome_localidade, f.codigo_postal, f.data_nascimento, f.cargo,
    f.id_depart, d.nome AS dept_nome,
    (
        SELECT h.data_inicio
        FROM historico_empresas h
        WHERE h.id_fun = f.id_fun AND h.nome_empresa = %s
        ORDER BY h.data_inicio DESC
        LIMIT 1
    ) AS data_admissao
"""

_LATEST_SALARY_COLUMN = """
    (
        SELECT s.salario_bruto
        FROM salario s
        WHERE s.id_fun = f.id_fun
        ORDER BY s.data_inicio DESC
        LIMIT 1
    ) AS salario_bruto
"""


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["id_fun"]),
        nif=r["nif"],
        first_name=r["primeiro_nome"],
        last_name=r["ultimo_nome"],
        email=r["email"],
        phone=r["num_telemovel"],
        birth_date=r.get("data_nascimento"),
        role=r["cargo"],
        department_id=r.get("id_depart"),
        department_name=r.get("dept_nome"),
        street=r.get("nome_rua"),
        locality=r.get("nome_localidade"),
        postal_code=r.get("codigo_postal"),
        admission_date=r.get("data_admissao"),
        base_salary_gross=r.get("salario_bruto"),
    )


@contextmanager
def _duplicates_as_conflict():
    # The unique keys still win if two writers pass the service check at once.
    try:
        yield
    except errors.IntegrityError as e:
        if e.errno != errorcode.ER_DUP_ENTRY:
            raise
        message = str(e.msg or "")
        if "uq_funcionarios_nif" in message:
            raise ConflictError(DUPLICATE_NIF_MESSAGE) from e
        if "uq_funcionarios_email" in message:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from e
        raise


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, current_employer: str):
        self._conn_factory = conn_factory
        self._current_employer = current_employer

    def _select(self, *, with_salary: bool) -> str:
        columns = _BASE_COLUMNS + ("," + _LATEST_SALARY_COLUMN if with_salary else "")
        return f"""
            SELECT {columns}
            FROM funcionarios f
            LEFT JOIN departamentos d ON d.id_depart = f.id_depart
        """

    # -------- Base records --------
    def list_with_salary(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                self._select(with_salary=True) + " ORDER BY f.primeiro_nome, f.ultimo_nome",
                (self._current_employer,),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                self._select(with_salary=False) + " WHERE f.id_fun=%s",
                (self._current_employer, int(employee_id)),
            )
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def find_id_by_nif(self, nif: str) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(cur, "SELECT id_fun FROM funcionarios WHERE nif=%s", (nif,))
            row = fetchone(cur)
            return int(row["id_fun"]) if row else None

    def find_id_by_email(self, email: str) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(cur, "SELECT id_fun FROM funcionarios WHERE email=%s", (email,))
            row = fetchone(cur)
            return int(row["id_fun"]) if row else None

    # -------- Detail sub-collections --------
    def current_salary(self, employee_id: int) -> Optional[Decimal]:
        # Only salaries of a remuneration period still in force count.
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                """
                SELECT s.salario_bruto
                FROM salario s
                INNER JOIN remuneracoes r ON r.id_fun = s.id_fun AND r.data_inicio = s.data_inicio
                WHERE s.id_fun=%s
                  AND (r.data_fim IS NULL OR r.data_fim >= CURRENT_DATE)
                ORDER BY s.data_inicio DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            return row["salario_bruto"] if row else None

    def current_benefits(self, employee_id: int) -> Sequence[Benefit]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                """
                SELECT b.id_fun, b.tipo, b.valor, b.data_inicio
                FROM beneficios b
                INNER JOIN (
                    SELECT tipo, MAX(data_inicio) AS data_inicio
                    FROM beneficios
                    WHERE id_fun=%s
                    GROUP BY tipo
                ) latest ON latest.tipo = b.tipo AND latest.data_inicio = b.data_inicio
                WHERE b.id_fun=%s
                ORDER BY b.tipo
                """,
                (int(employee_id), int(employee_id)),
            )
            return [
                Benefit(
                    employee_id=int(r["id_fun"]),
                    benefit_type=r["tipo"],
                    value=r["valor"],
                    start_date=r["data_inicio"],
                )
                for r in fetchall(cur)
            ]

    def salary_history(self, employee_id: int) -> Sequence[SalaryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                "SELECT data_inicio, salario_bruto FROM salario WHERE id_fun=%s ORDER BY data_inicio DESC",
                (int(employee_id),),
            )
            return [SalaryEntry(start_date=r["data_inicio"], gross=r["salario_bruto"]) for r in fetchall(cur)]

    def vacation_requests(self, employee_id: int) -> Sequence[VacationRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                """
                SELECT id_fun, data_inicio, data_fim, num_dias, estado_aprov
                FROM ferias
                WHERE id_fun=%s
                ORDER BY data_inicio DESC
                """,
                (int(employee_id),),
            )
            return [
                VacationRequest(
                    employee_id=int(r["id_fun"]),
                    start_date=r["data_inicio"],
                    end_date=r["data_fim"],
                    days=int(r["num_dias"] or 0),
                    stored_status=r.get("estado_aprov"),
                )
                for r in fetchall(cur)
            ]

    def trainings(self, employee_id: int) -> Sequence[TrainingAttendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                """
                SELECT fo.id_for, fo.nome_formacao, tf.data_inicio, tf.data_fim, fo.estado
                FROM teve_formacao tf
                INNER JOIN formacoes fo ON fo.id_for = tf.id_for
                WHERE tf.id_fun=%s
                ORDER BY tf.data_inicio DESC
                """,
                (int(employee_id),),
            )
            return [
                TrainingAttendance(
                    training_id=int(r["id_for"]),
                    title=r["nome_formacao"],
                    start_date=r.get("data_inicio"),
                    end_date=r.get("data_fim"),
                    stored_status=r.get("estado"),
                )
                for r in fetchall(cur)
            ]

    def evaluations(self, employee_id: int) -> Sequence[Evaluation]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                EVALUATION_SELECT + " WHERE a.id_fun=%s ORDER BY a.data DESC, a.id_avaliacao DESC",
                (int(employee_id),),
            )
            return [to_evaluation(r) for r in fetchall(cur)]

    def job_history(self, employee_id: int) -> Sequence[JobHistoryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                """
                SELECT nome_empresa, cargo, data_inicio, data_fim
                FROM historico_empresas
                WHERE id_fun=%s
                ORDER BY data_inicio DESC
                """,
                (int(employee_id),),
            )
            return [
                JobHistoryEntry(
                    company=r["nome_empresa"],
                    role=r["cargo"],
                    start_date=r["data_inicio"],
                    end_date=r.get("data_fim"),
                )
                for r in fetchall(cur)
            ]

    def dependents(self, employee_id: int) -> Sequence[Dependent]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                "SELECT id_fun, nome, parentesco, data_nascimento FROM dependentes WHERE id_fun=%s ORDER BY nome",
                (int(employee_id),),
            )
            return [
                Dependent(
                    employee_id=int(r["id_fun"]),
                    name=r["nome"],
                    relationship=r["parentesco"],
                    birth_date=r.get("data_nascimento"),
                )
                for r in fetchall(cur)
            ]

    def absences(self, employee_id: int) -> Sequence[Absence]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                "SELECT id_fun, data, justificacao FROM faltas WHERE id_fun=%s ORDER BY data DESC",
                (int(employee_id),),
            )
            return [
                Absence(employee_id=int(r["id_fun"]), date=r["data"], justification=r.get("justificacao"))
                for r in fetchall(cur)
            ]

    # -------- Writes --------
    def create(self, new: NewEmployee, *, net_salary: Optional[Decimal]) -> int:
        f = new.fields
        with _duplicates_as_conflict(), db_cursor(self._conn_factory) as (_, cur):
            execute(cur, "SELECT COALESCE(MAX(id_fun), 0) + 1 AS next_id FROM funcionarios FOR UPDATE")
            next_id = int(fetchone(cur)["next_id"])

            execute(
                cur,
                """
                INSERT INTO funcionarios(
                    id_fun, nif, primeiro_nome, ultimo_nome, email, num_telemovel,
                    nome_rua, nome_localidade, codigo_postal,
                    data_nascimento, cargo, id_depart
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    next_id,
                    new.nif,
                    f.first_name,
                    f.last_name,
                    f.email,
                    f.phone,
                    f.street,
                    f.locality,
                    f.postal_code,
                    new.birth_date,
                    f.role,
                    f.department_id,
                ),
            )
            execute(
                cur,
                """
                INSERT INTO historico_empresas(id_fun, nome_empresa, cargo, data_inicio, data_fim)
                VALUES(%s,%s,%s,%s,NULL)
                """,
                (next_id, self._current_employer, f.role, new.admission_date),
            )

            if new.gross_salary is not None:
                execute(
                    cur,
                    "INSERT INTO remuneracoes(id_fun, data_inicio, data_fim) VALUES(%s,%s,NULL)",
                    (next_id, new.admission_date),
                )
                execute(
                    cur,
                    """
                    INSERT INTO salario(id_fun, data_inicio, salario_bruto, salario_liquido)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (next_id, new.admission_date, new.gross_salary, net_salary),
                )

            return next_id

    def update(self, employee_id: int, fields: EmployeeFields) -> bool:
        with _duplicates_as_conflict(), db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                """
                UPDATE funcionarios
                SET primeiro_nome=%s, ultimo_nome=%s, email=%s, num_telemovel=%s,
                    nome_rua=%s, nome_localidade=%s, codigo_postal=%s,
                    id_depart=%s, cargo=%s
                WHERE id_fun=%s
                """,
                (
                    fields.first_name,
                    fields.last_name,
                    fields.email,
                    fields.phone,
                    fields.street,
                    fields.locality,
                    fields.postal_code,
                    fields.department_id,
                    fields.role,
                    int(employee_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(cur, "UPDATE departamentos SET id_gerente=NULL WHERE id_gerente=%s", (int(employee_id),))
            execute(cur, "DELETE FROM funcionarios WHERE id_fun=%s", (int(employee_id),))
            return cur.rowcount > 0
