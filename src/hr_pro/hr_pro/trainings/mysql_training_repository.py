from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, execute, fetchall, fetchone, placeholders
from .model import TrainingProgram
from .repository import TrainingRepository

_SELECT = "SELECT id_for, nome_formacao, descricao, data_inicio, data_fim, estado FROM formacoes"


def _to_program(r: Dict[str, Any], enrolled: List[int]) -> TrainingProgram:
    return TrainingProgram(
        training_id=int(r["id_for"]),
        title=r["nome_formacao"],
        description=r.get("descricao"),
        start_date=r["data_inicio"],
        end_date=r["data_fim"],
        stored_status=r["estado"],
        enrolled_employee_ids=tuple(enrolled),
    )


class MySQLTrainingRepository(TrainingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _enrollments(self, cur, training_ids: Sequence[int]) -> Dict[int, List[int]]:
        by_training: Dict[int, List[int]] = defaultdict(list)
        if not training_ids:
            return by_training
        execute(
            cur,
            f"SELECT id_for, id_fun FROM teve_formacao WHERE id_for IN ({placeholders(len(training_ids))}) "
            "ORDER BY id_for, id_fun",
            training_ids,
        )
        for r in fetchall(cur):
            by_training[int(r["id_for"])].append(int(r["id_fun"]))
        return by_training

    def list_all(self) -> Sequence[TrainingProgram]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(cur, _SELECT + " ORDER BY data_inicio DESC, id_for DESC")
            rows = fetchall(cur)
            enrolled = self._enrollments(cur, [int(r["id_for"]) for r in rows])
            return [_to_program(r, enrolled[int(r["id_for"])]) for r in rows]

    def get_by_id(self, training_id: int) -> Optional[TrainingProgram]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(cur, _SELECT + " WHERE id_for=%s", (int(training_id),))
            row = fetchone(cur)
            if not row:
                return None
            enrolled = self._enrollments(cur, [int(training_id)])
            return _to_program(row, enrolled[int(training_id)])

    def enroll(self, training_id: int, employee_id: int, *, start_date: date, end_date: date) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            # A repeated (employee, training) pair is a no-op; FK errors still surface.
            execute(
                cur,
                """
                INSERT INTO teve_formacao(id_fun, id_for, data_inicio, data_fim, certificado)
                VALUES(%s,%s,%s,%s,NULL)
                ON DUPLICATE KEY UPDATE id_fun=id_fun
                """,
                (int(employee_id), int(training_id), start_date, end_date),
            )

    def unenroll(self, training_id: int, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                "DELETE FROM teve_formacao WHERE id_for=%s AND id_fun=%s",
                (int(training_id), int(employee_id)),
            )
            return cur.rowcount > 0
