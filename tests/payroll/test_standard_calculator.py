from decimal import Decimal

import pytest

from src.hr_pro.hr_pro.payroll.calculator.standard_calculator import FlatWithholdingPolicy


@pytest.mark.parametrize(
    "gross, net",
    [
        ("2000", "1540.00"),
        ("3400.00", "2618.00"),
        ("1234.56", "950.61"),
        # half a cent rounds up
        ("0.50", "0.39"),
    ],
)
def test_net_is_77_percent_rounded_to_cents(gross, net):
    assert FlatWithholdingPolicy().net_salary(Decimal(gross)) == Decimal(net)


def test_breakdown_deductions_close_the_gap():
    b = FlatWithholdingPolicy().breakdown(Decimal("1800.00"))

    assert b.net == Decimal("1386.00")
    assert b.deductions == Decimal("414.00")
    assert b.to_api() == {"baseSalaryGross": 1800.0, "netSalary": 1386.0, "deductions": 414.0}


def test_missing_salary_is_zero():
    assert FlatWithholdingPolicy().breakdown(None).to_api() == {
        "baseSalaryGross": 0.0,
        "netSalary": 0.0,
        "deductions": 0.0,
    }


def test_custom_ratio():
    assert FlatWithholdingPolicy(Decimal("0.5")).net_salary(Decimal("100")) == Decimal("50.00")
