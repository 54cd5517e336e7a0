from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Scoped transaction: every statement run on the yielded cursor is
    committed together, or rolled back together if anything raises."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary, buffered=True)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def execute(cur, sql: str, params: Sequence[Any] = ()) -> None:
    started = time.perf_counter()
    cur.execute(sql, tuple(params) if params else None)
    logger.debug(
        "query took %.1fms rows=%s: %s",
        (time.perf_counter() - started) * 1000,
        cur.rowcount,
        " ".join(sql.split())[:120],
    )


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def placeholders(count: int) -> str:
    return ",".join(["%s"] * count)
