from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import NET_SALARY_RATIO
from .base import SalaryPolicy

CENTS = Decimal("0.01")


class FlatWithholdingPolicy(SalaryPolicy):
    """Standard rule: net = gross x ratio (77%), rounded to cents.

    A flat approximation of tax and social security withholding.
    """

    def __init__(self, ratio: Decimal = NET_SALARY_RATIO):
        self._ratio = Decimal(str(ratio))

    def net_salary(self, gross: Decimal) -> Decimal:
        return (Decimal(str(gross)) * self._ratio).quantize(CENTS, rounding=ROUND_HALF_UP)
