from datetime import date

from hr_payroll.models.attendance import Attendance


def test_month_stats_ignore_days_after_termination(client, make_employee, db_session):
    active = make_employee(employee_number="D1")
    gone = make_employee(employee_number="D2", status="terminated", termination_date=date(2024, 6, 10))
    make_employee(employee_number="D3", status="suspended", suspension_type="with_salary", suspension_date=date(2024, 6, 20))

    db_session.add_all([
        Attendance(employee_id=active.id, date="2024-06-03", status="present"),
        Attendance(employee_id=active.id, date="2024-06-04", status="holiday"),
        Attendance(employee_id=active.id, date="2024-06-05", status="absent", absence_reason="with_notice"),
        Attendance(employee_id=active.id, date="2024-06-06", status="leave"),
        Attendance(employee_id=gone.id, date="2024-06-12", status="present"),
    ])
    db_session.commit()

    stats = client.get("/api/dashboard/stats", params={"month": "2024-06"}).json()
    assert stats["period"] == "2024-06"
    assert stats["total_days"] == 4
    assert stats["present_days"] == 1
    assert stats["absent_days"] == 1
    assert stats["attendance_rate"] == 50.0
    assert stats["total_employees"] == 2
    assert stats["active_employees"] == 1
    assert stats["suspended_employees"] == 1
