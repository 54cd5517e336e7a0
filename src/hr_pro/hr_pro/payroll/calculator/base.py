from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SalaryBreakdown:
    gross: Decimal
    net: Decimal
    deductions: Decimal

    def to_api(self) -> dict:
        return {
            "baseSalaryGross": float(self.gross),
            "netSalary": float(self.net),
            "deductions": float(self.deductions),
        }


class SalaryPolicy(ABC):
    """Policy interface (Strategy Pattern for net salary)."""

    @abstractmethod
    def net_salary(self, gross: Decimal) -> Decimal:
        raise NotImplementedError

    def breakdown(self, gross) -> SalaryBreakdown:
        gross = Decimal(str(gross or 0))
        net = self.net_salary(gross)
        return SalaryBreakdown(gross=gross, net=net, deductions=gross - net)
