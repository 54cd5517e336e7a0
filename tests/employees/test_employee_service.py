from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.hr_pro.hr_pro.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.hr_pro.hr_pro.employees.model import VacationRequest
from src.hr_pro.hr_pro.employees.service import normalize_employee_payload, used_vacation_days


def _new_employee(**overrides):
    payload = {
        "nif": "123456789",
        "fullName": "Ana Teste",
        "email": "ana@test.pt",
        "phone": "912345678",
        "birthDate": "1990-01-01",
        "role": "Tester",
        "departmentId": 2,
        "baseSalaryGross": 2000,
    }
    payload.update(overrides)
    return payload


def test_list_is_ordered_by_name_and_carries_financials(container):
    items = container.employee_service.list_employees()

    assert [e["fullName"] for e in items] == ["João Pereira", "Marta Silva", "Rita Costa"]
    for e in items:
        fin = e["financials"]
        assert fin["netSalary"] == float(
            (Decimal(str(fin["baseSalaryGross"])) * Decimal("0.77")).quantize(Decimal("0.01"))
        )
        assert fin["deductions"] == pytest.approx(fin["baseSalaryGross"] - fin["netSalary"])
        assert "vacations" not in e


def test_list_uses_latest_salary(container):
    marta = next(e for e in container.employee_service.list_employees() if e["id"] == "1")
    assert marta["financials"] == {"baseSalaryGross": 3400.0, "netSalary": 2618.0, "deductions": 782.0}


def test_detail_composes_profile_and_sub_collections(container):
    detail = container.employee_service.get_detail(1)

    assert detail["address"] == "Rua das Flores 12, Porto 4050-262"
    assert detail["department"] == "Recursos Humanos"
    assert detail["admissionDate"] == "2015-02-01"
    assert detail["age"] == 39
    assert detail["financials"]["baseSalaryGross"] == 3400.0
    assert [h["amount"] for h in detail["financials"]["history"]] == [3400.0, 2800.0]
    assert detail["financials"]["history"][0]["reason"] == "Atualização salarial"


def test_detail_benefits_keep_most_recent_per_type(container):
    benefits = container.employee_service.get_detail(1)["financials"]["benefits"]

    by_type = {b["type"]: b["value"] for b in benefits}
    assert by_type == {"Seguro de Saúde": 45.0, "Subsídio de Alimentação": 9.6}


def test_vacation_summary_counts_only_approved_days_of_current_year(container):
    vacations = container.employee_service.get_detail(1)["vacations"]

    assert vacations["totalDays"] == 22
    assert vacations["usedDays"] == 13
    assert vacations["remainingDays"] == 9
    statuses = {v["startDate"]: v["status"] for v in vacations["history"]}
    assert statuses["2024-09-02"] == "Pending"
    assert statuses["2024-11-04"] == "Rejected"
    assert statuses["2024-12-23"] == "Pending"
    assert statuses["2023-12-20"] == "Approved"


def test_used_days_zero_without_approved_requests_this_year():
    requests = [
        VacationRequest(1, date(2023, 7, 1), date(2023, 7, 5), 5, "Aprovado"),
        VacationRequest(1, date(2024, 7, 1), date(2024, 7, 5), 5, "Por aprovar"),
    ]
    assert used_vacation_days(requests, year=2024) == 0
    assert used_vacation_days([], year=2024) == 0


def test_detail_flags_internal_jobs_and_justified_absences(container):
    joao = container.employee_service.get_detail(2)
    assert [(j["company"], j["isInternal"]) for j in joao["jobHistory"]] == [("bd054", True), ("Softinsa", False)]
    assert joao["dependents"][0]["relationship"] == "Filho"
    # Birthday is the day after the fixed "today".
    assert joao["age"] == 33

    rita = container.employee_service.get_detail(3)
    assert [a["justified"] for a in rita["absences"]] == [False, True, False]
    assert rita["address"] == "Porto"


def test_detail_evaluation_type_is_inferred_from_reviewer(container):
    evaluations = container.employee_service.get_detail(2)["evaluations"]

    assert {e["id"]: e["type"] for e in evaluations} == {"1": "Manager", "2": "Self"}
    assert evaluations[0]["reviewer"] == "Marta Silva"


def test_detail_trainings_report_completion_from_program_status(container, db):
    db.enrollments[(1, 2)] = (date(2025, 5, 12), date(2025, 5, 16))

    trainings = container.employee_service.get_detail(1)["trainings"]

    assert {t["id"]: t["status"] for t in trainings} == {"1": "Completed", "2": "Enrolled"}
    assert all(t["provider"] == "Empresa" for t in trainings)


def test_failing_sub_collection_degrades_to_empty(container, caplog):
    def boom(_employee_id):
        raise RuntimeError("dependentes indisponível")

    container.employees_repo.dependents = boom

    detail = container.employee_service.get_detail(2)

    assert detail["dependents"] == []
    assert detail["jobHistory"]
    assert "could not load dependents" in caplog.text


def test_detail_of_unknown_employee_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.employee_service.get_detail(999)


def test_create_inserts_admission_history_and_salary(container, db):
    new_id = container.employee_service.create(_new_employee())

    assert new_id == 4
    assert db.job_history[4][0].company == "bd054"
    assert db.job_history[4][0].start_date == date(2024, 10, 1)
    assert db.net_salaries[(4, date(2024, 10, 1))] == Decimal("1540.00")
    detail = container.employee_service.get_detail(new_id)
    assert detail["firstName"] == "Ana"
    assert detail["lastName"] == "Teste"
    assert detail["financials"]["baseSalaryGross"] == 2000.0
    assert detail["financials"]["netSalary"] == 1540.0


def test_create_without_salary_skips_salary_rows(container, db):
    new_id = container.employee_service.create(_new_employee(baseSalaryGross=None))

    assert new_id not in db.salaries
    assert container.employee_service.get_detail(new_id)["financials"]["baseSalaryGross"] == 0.0


def test_create_accepts_department_name(container, db):
    payload = _new_employee()
    del payload["departmentId"]
    payload["department"] = "Financeiro"

    new_id = container.employee_service.create(payload)

    assert db.employees[new_id].department_id == 3


def test_create_reports_every_missing_field(container):
    with pytest.raises(ValidationError) as exc:
        container.employee_service.create({"nif": "123456789"})

    message = str(exc.value)
    for field in ("primeiro_nome", "email", "num_telemovel", "data_nascimento", "cargo", "id_depart"):
        assert field in message


@pytest.mark.parametrize(
    "overrides",
    [
        {"nif": "12345"},
        {"email": "sem-arroba"},
        {"birthDate": "01/01/1990"},
        {"departmentId": 42},
        {"baseSalaryGross": "abc"},
        {"baseSalaryGross": -10},
    ],
)
def test_create_rejects_invalid_values(container, db, overrides):
    with pytest.raises(ValidationError):
        container.employee_service.create(_new_employee(**overrides))
    assert len(db.employees) == 3


def test_create_rejects_duplicate_nif_and_email(container, db):
    with pytest.raises(ConflictError, match="NIF já existe na base de dados"):
        container.employee_service.create(_new_employee(nif="245123987"))
    with pytest.raises(ConflictError, match="Email já existe na base de dados"):
        container.employee_service.create(_new_employee(email="rita.costa@hrpro.pt"))
    assert len(db.employees) == 3


def test_update_changes_mutable_fields(container, db):
    container.employee_service.update(
        3,
        {
            "firstName": "Rita",
            "lastName": "Costa Santos",
            "email": "rita.santos@hrpro.pt",
            "phone": "914999999",
            "role": "Contabilista",
            "departmentId": 1,
            "street": "Rua Nova 1",
        },
    )

    rita = db.employees[3]
    assert rita.last_name == "Costa Santos"
    assert rita.department_id == 1
    assert rita.street == "Rua Nova 1"
    assert rita.nif == "209876543"


def test_update_allows_keeping_own_email(container):
    detail = container.employee_service.get_detail(2)
    container.employee_service.update(
        2,
        {
            "firstName": detail["firstName"],
            "lastName": detail["lastName"],
            "email": detail["email"],
            "phone": "910000000",
            "role": detail["role"],
            "departmentId": 2,
        },
    )
    assert container.employee_service.get_detail(2)["phone"] == "910000000"


def test_update_rejects_email_of_another_employee(container):
    with pytest.raises(ConflictError):
        container.employee_service.update(
            2,
            {
                "firstName": "João",
                "lastName": "Pereira",
                "email": "marta.silva@hrpro.pt",
                "phone": "913000002",
                "role": "Engenheiro",
                "departmentId": 2,
            },
        )


def test_update_unknown_employee_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.employee_service.update(
            999,
            {
                "firstName": "X",
                "lastName": "Y",
                "email": "x@y.pt",
                "phone": "1",
                "role": "Z",
                "departmentId": 1,
            },
        )


def test_delete_clears_manager_reference_and_keeps_department(container, db):
    container.employee_service.delete(1)

    assert 1 not in db.employees
    assert db.departments[1]["manager_id"] is None
    assert db.departments[1]["name"] == "Recursos Humanos"
    assert db.evaluations[1]["reviewer_id"] is None


def test_delete_unknown_employee_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.employee_service.delete(999)


def test_normalize_splits_full_name_and_prefers_portuguese_keys():
    data = normalize_employee_payload({"fullName": "  Maria  da Luz ", "cargo": "A", "role": "B"})

    assert data["primeiro_nome"] == "Maria"
    assert data["ultimo_nome"] == "da Luz"
    assert data["cargo"] == "A"


def test_explicit_blank_last_name_is_still_required(container):
    payload = _new_employee()
    del payload["fullName"]
    payload.update(firstName="Ana", lastName="  ")

    with pytest.raises(ValidationError, match="ultimo_nome"):
        container.employee_service.create(payload)
