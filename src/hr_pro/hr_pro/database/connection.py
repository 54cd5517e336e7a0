from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling
from mysql.connector.constants import ClientFlag


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5


class DatabaseConnection:
    """Singleton-like DB connection factory backed by a bounded pool.

    Note: Connections are borrowed per operation and returned on close().
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        # Created lazily so the app can boot while the database is down.
        if self._pool is None:
            self._pool = pooling.MySQLConnectionPool(
                pool_name="hr_pro",
                pool_size=int(self._config.pool_size),
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                charset="utf8mb4",
                collation="utf8mb4_unicode_ci",
                # rowcount reports matched rows, so an UPDATE that changes nothing still counts.
                client_flags=[ClientFlag.FOUND_ROWS],
            )
        return self._pool

    def connect(self):
        return self._get_pool().get_connection()
