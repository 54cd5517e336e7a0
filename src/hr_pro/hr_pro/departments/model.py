from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Department:
    dept_id: int
    name: str
    description: Optional[str] = None
    manager_id: Optional[int] = None
    manager_name: Optional[str] = None

    def to_api(self) -> dict:
        return {
            "id": str(self.dept_id),
            "name": self.name,
            "description": self.description or self.name,
            "managerId": str(self.manager_id) if self.manager_id is not None else None,
            "managerName": self.manager_name,
        }


@dataclass(frozen=True)
class DepartmentMember:
    employee_id: int
    full_name: str
    email: str
    role: str

    def to_api(self) -> dict:
        return {
            "id": str(self.employee_id),
            "fullName": self.full_name,
            "email": self.email,
            "role": self.role,
        }
