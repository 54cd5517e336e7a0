from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, execute, fetchall, fetchone, placeholders
from .model import Candidate, JobOpening
from .repository import RecruitmentRepository

_JOB_SELECT = """
    SELECT v.id_vaga, v.id_depart, d.nome AS dept_nome, v.data_abertura, v.estado
    FROM vagas v
    INNER JOIN departamentos d ON d.id_depart = v.id_depart
"""

_CANDIDATE_SELECT = """
    SELECT
        c.id_cand, ca.id_vaga, c.nome, c.email, c.telemovel, c.cv_url, c.carta_motivacao,
        ca.data_cand, ca.estado, ca.id_recrutador
    FROM candidato_a ca
    INNER JOIN candidatos c ON c.id_cand = ca.id_cand
"""


def _to_job(r: Dict[str, Any], requirements: List[str]) -> JobOpening:
    return JobOpening(
        job_id=int(r["id_vaga"]),
        department_id=int(r["id_depart"]),
        department_name=r["dept_nome"],
        open_date=r.get("data_abertura"),
        stored_status=r["estado"],
        requirements=tuple(requirements),
    )


def _to_candidate(r: Dict[str, Any]) -> Candidate:
    return Candidate(
        candidate_id=int(r["id_cand"]),
        job_id=int(r["id_vaga"]),
        name=r["nome"],
        email=r["email"],
        phone=r.get("telemovel"),
        applied_date=r.get("data_cand"),
        stored_status=r["estado"],
        recruiter_id=int(r["id_recrutador"]) if r.get("id_recrutador") is not None else None,
        cv_url=r.get("cv_url"),
        cover_letter=r.get("carta_motivacao"),
    )


class MySQLRecruitmentRepository(RecruitmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _requirements(self, cur, job_ids: Sequence[int]) -> Dict[int, List[str]]:
        by_job: Dict[int, List[str]] = defaultdict(list)
        if not job_ids:
            return by_job
        execute(
            cur,
            f"SELECT id_vaga, requisito FROM requisitos_vaga WHERE id_vaga IN ({placeholders(len(job_ids))}) "
            "ORDER BY id_vaga, requisito",
            job_ids,
        )
        for r in fetchall(cur):
            by_job[int(r["id_vaga"])].append(r["requisito"])
        return by_job

    def list_jobs(self) -> Sequence[JobOpening]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(cur, _JOB_SELECT + " ORDER BY v.data_abertura DESC, v.id_vaga DESC")
            rows = fetchall(cur)
            requirements = self._requirements(cur, [int(r["id_vaga"]) for r in rows])
            return [_to_job(r, requirements[int(r["id_vaga"])]) for r in rows]

    def get_job(self, job_id: int) -> Optional[JobOpening]:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(cur, _JOB_SELECT + " WHERE v.id_vaga=%s", (int(job_id),))
            row = fetchone(cur)
            if not row:
                return None
            requirements = self._requirements(cur, [int(job_id)])
            return _to_job(row, requirements[int(job_id)])

    def set_job_status(self, job_id: int, stored_status: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(cur, "UPDATE vagas SET estado=%s WHERE id_vaga=%s", (stored_status, int(job_id)))
            return cur.rowcount > 0

    def list_candidates(self, job_id: Optional[int] = None) -> Sequence[Candidate]:
        with db_cursor(self._conn_factory) as (_, cur):
            if job_id is None:
                execute(cur, _CANDIDATE_SELECT + " ORDER BY ca.data_cand DESC, c.id_cand")
            else:
                execute(
                    cur,
                    _CANDIDATE_SELECT + " WHERE ca.id_vaga=%s ORDER BY ca.data_cand DESC, c.id_cand",
                    (int(job_id),),
                )
            return [_to_candidate(r) for r in fetchall(cur)]

    def update_candidate_status(self, candidate_id: int, job_id: int, stored_status: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                "UPDATE candidato_a SET estado=%s WHERE id_cand=%s AND id_vaga=%s",
                (stored_status, int(candidate_id), int(job_id)),
            )
            return cur.rowcount > 0

    def update_candidate_recruiter(self, candidate_id: int, job_id: int, recruiter_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            execute(
                cur,
                "UPDATE candidato_a SET id_recrutador=%s WHERE id_cand=%s AND id_vaga=%s",
                (recruiter_id, int(candidate_id), int(job_id)),
            )
            return cur.rowcount > 0
