from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department, DepartmentMember


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        raise NotImplementedError

    def find_id_by_name(self, name: str) -> Optional[int]:
        raise NotImplementedError

    def list_employees(self, dept_id: int) -> Sequence[DepartmentMember]:
        raise NotImplementedError

    def set_manager(self, dept_id: int, manager_id: Optional[int]) -> bool:
        """Point the department at a manager, or clear it with ``None``."""

        raise NotImplementedError
