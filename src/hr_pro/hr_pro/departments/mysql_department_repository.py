from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, execute, fetchall, fetchone
from .model import Department, DepartmentMember
from .repository import DepartmentRepository

_SELECT = """
    SELECT
        d.id_depart, d.nome, d.descricao, d.id_gerente,
        CONCAT(g.primeiro_nome, ' ', g.ultimo_nome) AS gerente_nome
    FROM departamentos d
    LEFT JOIN funcionarios g ON g.id_fun = d.id_gerente
"""


def _to_department(r: Dict[str, Any]) -> Department:
    return Department(
        dept_id=int(r["id_depart"]),
        name=r["nome"],
        description=r.get("descricao"),
        manager_id=int(r["id_gerente"]) if r.get("id_gerente") is not None else None,
        manager_name=r.get("gerente_nome"),
    )


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(cur, _SELECT + " ORDER BY d.id_depart")
            return [_to_department(r) for r in fetchall(cur)]

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(cur, _SELECT + " WHERE d.id_depart=%s", (int(dept_id),))
            row = fetchone(cur)
            return _to_department(row) if row else None

    def find_id_by_name(self, name: str) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(cur, "SELECT id_depart FROM departamentos WHERE nome=%s", (name,))
            row = fetchone(cur)
            return int(row["id_depart"]) if row else None

    def list_employees(self, dept_id: int) -> Sequence[DepartmentMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                """
                SELECT id_fun, primeiro_nome, ultimo_nome, email, cargo
                FROM funcionarios
                WHERE id_depart=%s
                ORDER BY primeiro_nome, ultimo_nome
                """,
                (int(dept_id),),
            )
            return [
                DepartmentMember(
                    employee_id=int(r["id_fun"]),
                    full_name=f"{r['primeiro_nome']} {r['ultimo_nome']}".strip(),
                    email=r["email"],
                    role=r["cargo"],
                )
                for r in fetchall(cur)
            ]

    def set_manager(self, dept_id: int, manager_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                "UPDATE departamentos SET id_gerente=%s WHERE id_depart=%s",
                (manager_id, int(dept_id)),
            )
            return cur.rowcount > 0
