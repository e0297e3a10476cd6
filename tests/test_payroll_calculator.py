import pytest
from datetime import date
from pydantic import ValidationError as PydanticValidationError

from hr_payroll.core.exceptions import ValidationError
from hr_payroll.schemas.payroll import AdjustmentEntry, AttendanceEntry, EmployeeProfile
from hr_payroll.services.payroll_calculator import compute_payroll, derive_rates


def _employee(**overrides):
    values = {
        "id": 1,
        "employee_number": "EMP001",
        "name": "أحمد محمد علي",
        "monthly_salary": 300000,
        "daily_work_hours": 8,
        "hire_date": date(2023, 1, 1),
        "status": "active",
    }
    values.update(overrides)
    return EmployeeProfile(**values)


def _day(day, status="present", reason=None, **extra):
    return AttendanceEntry(date=day, day_status=status, absence_reason=reason, **extra)


def test_full_month_without_records_pays_full_salary():
    """A 31-day month with no records is still 30 payable days, all present."""
    result = compute_payroll(_employee(), [], [], "2024-05")
    assert result.days_due == 30
    assert result.present_days == 30
    assert result.absent_days == 0
    assert result.base_salary == 300000
    assert result.net_salary == pytest.approx(300000)
    assert result.last_working_day is None


def test_unrecorded_days_count_as_present():
    attendance = [_day(date(2024, 6, 3), "absent", "with_notice")]
    result = compute_payroll(_employee(), attendance, [], "2024-06")
    assert result.absent_days == 1
    assert result.present_days == 29


def test_same_inputs_give_identical_result():
    attendance = [
        _day(date(2024, 6, 3), "absent", "without_notice"),
        _day(date(2024, 6, 4), overtime_hours=2, time_delay_minutes=15),
    ]
    adjustments = [AdjustmentEntry(kind="bonus", amount=5000)]
    first = compute_payroll(_employee(), attendance, adjustments, "2024-06")
    second = compute_payroll(_employee(), attendance, adjustments, "2024-06")
    assert first == second


def test_absence_without_notice_costs_twice_with_notice():
    with_notice = compute_payroll(_employee(), [_day(date(2024, 6, 3), "absent", "with_notice")], [], "2024-06")
    without_notice = compute_payroll(_employee(), [_day(date(2024, 6, 3), "absent", "without_notice")], [], "2024-06")
    assert with_notice.absent_deduction == pytest.approx(10000)
    assert without_notice.absent_deduction == pytest.approx(2 * with_notice.absent_deduction)
    assert with_notice.net_salary == pytest.approx(290000)
    assert without_notice.net_salary == pytest.approx(280000)


def test_absence_without_reason_counts_with_notice():
    result = compute_payroll(_employee(), [_day(date(2024, 6, 3), "absent")], [], "2024-06")
    assert result.absent_days_with_notice == 1
    assert result.absent_days_without_notice == 0


def test_net_salary_is_floored_at_zero():
    adjustments = [
        AdjustmentEntry(kind="deduction", amount=250000),
        AdjustmentEntry(kind="advance", amount=200000),
    ]
    result = compute_payroll(_employee(), [], adjustments, "2024-06")
    assert result.net_salary == 0


def test_hire_mid_month_prorates_base_salary():
    employee = _employee(hire_date=date(2024, 6, 16))
    result = compute_payroll(employee, [], [], "2024-06")
    # Inclusive 16..30 June
    assert result.days_due == 15
    assert result.base_salary == pytest.approx(10000 * 15)
    assert result.net_salary == pytest.approx(150000)
    assert result.present_days == 15


def test_hire_on_first_day_is_not_prorated():
    result = compute_payroll(_employee(hire_date=date(2024, 5, 1)), [], [], "2024-05")
    assert result.base_salary == 300000
    assert result.days_due == 30


def test_attendance_before_hire_is_ignored():
    employee = _employee(hire_date=date(2024, 6, 16))
    attendance = [_day(date(2024, 6, 10), "absent", "without_notice")]
    result = compute_payroll(employee, attendance, [], "2024-06")
    assert result.absent_days == 0
    assert result.absent_deduction == 0


def test_two_unannounced_absences_scenario():
    attendance = [_day(date(2024, 6, d)) for d in range(1, 29)]
    attendance += [
        _day(date(2024, 6, 29), "absent", "without_notice"),
        _day(date(2024, 6, 30), "absent", "without_notice"),
    ]
    result = compute_payroll(_employee(), attendance, [], "2024-06")
    assert result.absent_days_without_notice == 2
    assert result.absent_deduction == pytest.approx(40000)
    assert result.net_salary == pytest.approx(260000)
    assert result.present_days == 30 - 4


def test_termination_mid_month_cuts_the_range():
    employee = _employee(status="terminated", termination_date=date(2024, 6, 10))
    attendance = [
        _day(date(2024, 6, 5), overtime_hours=1),
        _day(date(2024, 6, 15), overtime_hours=5),
        _day(date(2024, 6, 20), "absent", "without_notice"),
    ]
    result = compute_payroll(employee, attendance, [], "2024-06")
    assert result.days_due == 10
    assert result.last_working_day == date(2024, 6, 10)
    assert result.overtime_hours == 1
    assert result.absent_days == 0


def test_terminated_before_month_is_skipped():
    employee = _employee(status="terminated", termination_date=date(2024, 5, 31))
    assert compute_payroll(employee, [], [], "2024-06") is None


def test_hired_after_month_is_skipped():
    assert compute_payroll(_employee(hire_date=date(2024, 7, 1)), [], [], "2024-06") is None


def test_suspension_without_salary_before_month_is_skipped():
    employee = _employee(status="suspended", suspension_type="without_salary", suspension_date=date(2024, 5, 20))
    assert compute_payroll(employee, [], [], "2024-06") is None


def test_suspension_with_salary_before_month_keeps_full_month():
    employee = _employee(status="suspended", suspension_type="with_salary", suspension_date=date(2024, 5, 20))
    result = compute_payroll(employee, [], [], "2024-06")
    assert result is not None
    assert result.days_due == 30
    assert result.last_working_day is None
    assert result.net_salary == pytest.approx(300000)


def test_suspension_mid_month_sets_last_working_day():
    employee = _employee(status="suspended", suspension_type="without_salary", suspension_date=date(2024, 6, 20))
    result = compute_payroll(employee, [], [], "2024-06")
    assert result.days_due == 20
    assert result.last_working_day == date(2024, 6, 20)


def test_overtime_and_delay_rates():
    employee = _employee(monthly_salary=240000)
    attendance = [_day(date(2024, 6, 3), overtime_hours=1, time_delay_minutes=30, non_time_delay_minutes=10)]
    result = compute_payroll(employee, attendance, [], "2024-06")

    rates = derive_rates(240000, 8)
    assert rates.hourly == pytest.approx(1000)
    assert rates.minute == pytest.approx(16.667, rel=1e-3)
    assert result.overtime_pay == pytest.approx(1000)
    assert result.time_delay_deduction == pytest.approx(500)
    assert result.non_time_delay_deduction == pytest.approx(333.33, rel=1e-3)
    assert result.net_salary == pytest.approx(240000 + 1000 - 500 - 1000 / 3)


def test_leave_and_holiday_reduce_present_days_only():
    attendance = [
        _day(date(2024, 6, 3), "leave"),
        _day(date(2024, 6, 4), "holiday"),
    ]
    result = compute_payroll(_employee(), attendance, [], "2024-06")
    assert result.leave_days == 1
    assert result.holiday_days == 1
    assert result.present_days == 28
    assert result.net_salary == pytest.approx(300000)


def test_adjustments_are_summed_by_kind():
    adjustments = [
        AdjustmentEntry(kind="deduction", amount=1000),
        AdjustmentEntry(kind="deduction", amount=500),
        AdjustmentEntry(kind="bonus", amount=20000),
        AdjustmentEntry(kind="advance", amount=50000),
    ]
    result = compute_payroll(_employee(), [], adjustments, "2024-06")
    assert result.total_deductions == 1500
    assert result.total_bonuses == 20000
    assert result.total_advances == 50000
    assert result.net_salary == pytest.approx(300000 - 1500 + 20000 - 50000)


def test_malformed_month_key_is_rejected():
    with pytest.raises(ValidationError):
        compute_payroll(_employee(), [], [], "2024-13")


def test_absence_reason_requires_absent_status():
    with pytest.raises(PydanticValidationError):
        AttendanceEntry(date=date(2024, 6, 3), day_status="present", absence_reason="with_notice")


def test_time_fields_count_on_present_days_only():
    attendance = [
        _day(date(2024, 6, 3), "leave", overtime_hours=3, time_delay_minutes=20),
        _day(date(2024, 6, 4), "holiday", non_time_delay_minutes=15),
        _day(date(2024, 6, 5), "absent", "with_notice", overtime_hours=2),
        _day(date(2024, 6, 6), overtime_hours=1, time_delay_minutes=5),
    ]
    result = compute_payroll(_employee(), attendance, [], "2024-06")
    assert result.overtime_hours == 1
    assert result.time_delay_minutes == 5
    assert result.non_time_delay_minutes == 0
    assert result.non_time_delay_deduction == 0
