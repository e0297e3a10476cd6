import pytest
from datetime import date

from hr_payroll.models.adjustment import Adjustment
from hr_payroll.models.attendance import Attendance
from hr_payroll.models.payroll import PayrollRecord
from hr_payroll.services.payroll_repository import PayrollRepository
from hr_payroll.services.payroll_service import PayrollRunService


def _calculate(client, month="2024-06"):
    response = client.post("/api/payroll/calculate", json={"month": month})
    assert response.status_code == 200
    return response.json()["data"]


def test_run_computes_and_persists_each_employee(client, make_employee, db_session):
    employee = make_employee()
    db_session.add(Attendance(employee_id=employee.id, date="2024-06-03", status="absent", absence_reason="without_notice"))
    db_session.add(Adjustment(employee_id=employee.id, month="2024-06", kind="bonus", amount=5000))
    db_session.commit()

    run = _calculate(client)
    assert run["success_count"] == 1
    assert run["skip_count"] == 0
    assert run["failed_count"] == 0

    payroll = run["data"][0]["payroll"]
    assert payroll["absent_deduction"] == pytest.approx(20000)
    assert payroll["net_salary"] == pytest.approx(300000 - 20000 + 5000)

    record = db_session.query(PayrollRecord).filter(PayrollRecord.employee_id == employee.id).one()
    assert record.month == "2024-06"
    assert record.net_salary == pytest.approx(285000)
    assert record.total_bonuses == 5000


def test_rerun_overwrites_without_duplicates(client, make_employee, db_session):
    employee = make_employee()
    _calculate(client)

    db_session.add(Adjustment(employee_id=employee.id, month="2024-06", kind="deduction", amount=10000))
    db_session.commit()
    _calculate(client)

    records = db_session.query(PayrollRecord).filter(PayrollRecord.employee_id == employee.id).all()
    assert len(records) == 1
    assert records[0].net_salary == pytest.approx(290000)


def test_ineligible_employees_are_skipped_or_excluded(client, make_employee):
    make_employee(employee_number="S1", status="suspended", suspension_type="without_salary", suspension_date=date(2024, 5, 10))
    make_employee(employee_number="T1", status="terminated", termination_date=date(2024, 4, 30))
    make_employee(employee_number="N1", hire_date=date(2024, 8, 1))
    make_employee(employee_number="OK")

    run = _calculate(client)
    assert run["success_count"] == 1
    # Terminated and not-yet-hired employees are filtered before calculation
    assert run["skip_count"] == 1
    assert run["data"][0]["employee"]["employee_number"] == "OK"


def test_one_failing_employee_does_not_abort_the_run(db_session, make_employee):
    good = make_employee(employee_number="G1")
    bad = make_employee(employee_number="B1")
    # Negative overtime cannot form a valid attendance entry
    db_session.add(Attendance(employee_id=bad.id, date="2024-06-03", status="present", overtime_hours=-1))
    db_session.commit()

    run = PayrollRunService(PayrollRepository(db_session)).calculate_month("2024-06")
    assert run.success_count == 1
    assert run.failed_count == 1
    assert run.failures[0].employee_id == bad.id
    assert db_session.query(PayrollRecord).filter(PayrollRecord.employee_id == good.id).count() == 1


def test_terminated_mid_month_run(client, make_employee):
    make_employee(status="terminated", termination_date=date(2024, 6, 10))
    payroll = _calculate(client)["data"][0]["payroll"]
    assert payroll["days_due"] == 10
    assert payroll["last_working_day"] == "2024-06-10"


def test_read_path_hides_rows_after_termination_month(client, make_employee, db_session):
    employee = make_employee()
    _calculate(client, "2024-06")
    _calculate(client, "2024-07")

    employee.status = "terminated"
    employee.termination_date = date(2024, 6, 15)
    db_session.commit()

    assert client.get("/api/payroll", params={"month": "2024-07"}).json()["data"] == []
    june = client.get("/api/payroll", params={"month": "2024-06"}).json()["data"]
    assert len(june) == 1
    assert june[0]["employee"]["id"] == employee.id

    history = client.get("/api/payroll", params={"employee_id": employee.id}).json()["data"]
    assert [row["month"] for row in history] == ["2024-07", "2024-06"]


def test_malformed_month_is_rejected(client):
    response = client.post("/api/payroll/calculate", json={"month": "2024/06"})
    assert response.status_code == 422
    response = client.post("/api/payroll/calculate", json={"month": "2024-00"})
    assert response.status_code == 400


def test_empty_month_reports_no_employees(client):
    response = client.post("/api/payroll/calculate", json={"month": "1999-01"})
    body = response.json()
    assert body["data"]["success_count"] == 0
    assert body["message"] == "لا يوجد موظفين لهذا الشهر"


def test_rerun_drops_row_of_employee_now_skipped(client, make_employee, db_session):
    employee = make_employee()
    _calculate(client, "2024-07")
    assert db_session.query(PayrollRecord).filter(PayrollRecord.month == "2024-07").count() == 1

    employee.status = "suspended"
    employee.suspension_type = "without_salary"
    employee.suspension_date = date(2024, 6, 20)
    db_session.commit()

    response = client.post("/api/payroll/calculate", json={"month": "2024-07"})
    body = response.json()
    assert body["data"]["skip_count"] == 1
    assert body["data"]["success_count"] == 0
    assert body["message"] == "لا يوجد موظفين مستحقين للراتب لهذا الشهر"

    assert db_session.query(PayrollRecord).filter(PayrollRecord.month == "2024-07").count() == 0
    assert client.get("/api/payroll", params={"month": "2024-07"}).json()["data"] == []


def test_rerun_drops_row_of_employee_no_longer_a_candidate(client, make_employee, db_session):
    employee = make_employee()
    _calculate(client, "2024-06")

    employee.hire_date = date(2024, 8, 1)
    db_session.commit()

    run = _calculate(client, "2024-06")
    assert run["success_count"] == 0
    assert db_session.query(PayrollRecord).filter(PayrollRecord.month == "2024-06").count() == 0


def test_failed_employee_keeps_previous_row(db_session, make_employee):
    employee = make_employee()
    service = PayrollRunService(PayrollRepository(db_session))
    service.calculate_month("2024-06")

    db_session.add(Attendance(employee_id=employee.id, date="2024-06-03", status="present", overtime_hours=-1))
    db_session.commit()

    run = service.calculate_month("2024-06")
    assert run.failed_count == 1
    record = db_session.query(PayrollRecord).filter(PayrollRecord.employee_id == employee.id).one()
    assert record.net_salary == pytest.approx(300000)
