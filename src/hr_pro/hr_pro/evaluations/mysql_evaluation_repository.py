from __future__ import annotations

from typing import Any, Dict, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, execute, fetchall
from .model import Evaluation, NewEvaluation
from .repository import EvaluationRepository

EVALUATION_SELECT = """
    SELECT
        a.id_avaliacao, a.id_fun, a.id_avaliador, a.data, a.avaliacao_numerica,
        a.criterios, a.autoavaliacao,
        CONCAT(f.primeiro_nome, ' ', f.ultimo_nome) AS nome_funcionario,
        CONCAT(rv.primeiro_nome, ' ', rv.ultimo_nome) AS nome_avaliador
    FROM avaliacoes a
    INNER JOIN funcionarios f ON f.id_fun = a.id_fun
    LEFT JOIN funcionarios rv ON rv.id_fun = a.id_avaliador
"""


def to_evaluation(r: Dict[str, Any]) -> Evaluation:
    return Evaluation(
        evaluation_id=int(r["id_avaliacao"]),
        employee_id=int(r["id_fun"]),
        reviewer_id=int(r["id_avaliador"]) if r.get("id_avaliador") is not None else None,
        date=r["data"],
        score=r["avaliacao_numerica"],
        comments=r.get("criterios"),
        self_evaluation=r.get("autoavaliacao"),
        employee_name=r.get("nome_funcionario"),
        reviewer_name=r.get("nome_avaliador"),
    )


class MySQLEvaluationRepository(EvaluationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Evaluation]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(cur, EVALUATION_SELECT + " ORDER BY a.data DESC, a.id_avaliacao DESC")
            return [to_evaluation(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[Evaluation]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                EVALUATION_SELECT + " WHERE a.id_fun=%s ORDER BY a.data DESC, a.id_avaliacao DESC",
                (int(employee_id),),
            )
            return [to_evaluation(r) for r in fetchall(cur)]

    def create(self, new: NewEvaluation) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                """
                INSERT INTO avaliacoes(id_fun, id_avaliador, data, avaliacao_numerica, criterios, autoavaliacao)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.employee_id,
                    new.reviewer_id,
                    new.date,
                    new.score,
                    new.comments,
                    new.self_evaluation,
                ),
            )
            return int(cur.lastrowid)
