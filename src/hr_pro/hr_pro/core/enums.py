from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class _StoredEnum(str, Enum):
    """Enum whose members are persisted under a Portuguese label.

    Subclasses define ``_stored_labels()`` mapping member -> DB value.
    """

    @classmethod
    def _stored_labels(cls) -> dict:
        raise NotImplementedError

    @property
    def stored(self) -> str:
        return self._stored_labels()[self]

    @classmethod
    def from_stored(cls, value: Optional[str]):
        for member, label in cls._stored_labels().items():
            if value == label or value == member.value:
                return member
        return None

    @classmethod
    def parse(cls, value: Any):
        """Accept either the API value or the stored label.

        Anything that is not a string (numbers from JSON, lists...) is unknown.
        """
        if not isinstance(value, str):
            return None
        return cls.from_stored(value.strip())


class VacationStatus(_StoredEnum):
    """Estado de aprovação de um pedido de férias."""

    APPROVED = "Approved"
    PENDING = "Pending"
    REJECTED = "Rejected"

    @classmethod
    def _stored_labels(cls) -> dict:
        return {
            cls.APPROVED: "Aprovado",
            cls.PENDING: "Por aprovar",
            cls.REJECTED: "Rejeitado",
        }

    @classmethod
    def translate(cls, value: Optional[str]) -> "VacationStatus":
        # Unknown labels are treated as still waiting for approval.
        return cls.from_stored(value) or cls.PENDING


class JobStatus(_StoredEnum):
    OPEN = "Open"
    CLOSED = "Closed"
    SUSPENDED = "Suspended"

    @classmethod
    def _stored_labels(cls) -> dict:
        return {
            cls.OPEN: "Aberta",
            cls.CLOSED: "Fechada",
            cls.SUSPENDED: "Suspensa",
        }


class CandidateStatus(_StoredEnum):
    """Submitted -> Screening -> Interview -> Hired | Rejected."""

    SUBMITTED = "Submitted"
    SCREENING = "Screening"
    INTERVIEW = "Interview"
    HIRED = "Hired"
    REJECTED = "Rejected"

    @classmethod
    def _stored_labels(cls) -> dict:
        return {
            cls.SUBMITTED: "Submetido",
            cls.SCREENING: "Em análise",
            cls.INTERVIEW: "Entrevista",
            cls.HIRED: "Contratado",
            cls.REJECTED: "Rejeitado",
        }


class TrainingStatus(_StoredEnum):
    PLANNED = "Planned"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @classmethod
    def _stored_labels(cls) -> dict:
        return {
            cls.PLANNED: "Planeada",
            cls.IN_PROGRESS: "Em curso",
            cls.COMPLETED: "Concluída",
            cls.CANCELLED: "Cancelada",
        }


class EvaluationType(str, Enum):
    MANAGER = "Manager"
    SELF = "Self"
    PEER = "Peer"

    @classmethod
    def infer(cls, *, employee_id: int, reviewer_id: Optional[int]) -> "EvaluationType":
        if reviewer_id is not None and int(reviewer_id) == int(employee_id):
            return cls.SELF
        return cls.MANAGER
