"""
Monthly Payroll Calculator

Pure computation: one employee profile + that employee's attendance and
adjustments for a month -> one PayrollResult (or None when the employee
did not work that month at all).

Rules:
- All rates use a fixed 30-day month regardless of the calendar:
  daily = salary / 30, hourly = salary / (30 * work_hours), minute = hourly / 60
- Unrecorded days are present. Only recorded absence is deducted:
  with notice = 1 penalty-day, without notice = 2 penalty-days.
- Non-clock lateness costs twice the per-minute rate of clock lateness.
- Net salary never goes below zero.

days_due counts actual calendar days for partial months while the rate
divisor stays at 30. The two are intentionally not reconciled.
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Tuple

from hr_payroll.core.dates import inclusive_days, parse_month_key
from hr_payroll.models.employee import EmployeeStatus, SuspensionType
from hr_payroll.models.attendance import DayStatus, AbsenceReason
from hr_payroll.models.adjustment import AdjustmentKind
from hr_payroll.schemas.payroll import (
    AdjustmentEntry,
    AttendanceEntry,
    EmployeeProfile,
    PayrollResult,
)

STANDARD_MONTH_DAYS = 30
WITHOUT_NOTICE_PENALTY = 2
NON_TIME_DELAY_FACTOR = 2


@dataclass(frozen=True)
class Rates:
    daily: float
    hourly: float
    minute: float


@dataclass(frozen=True)
class EffectiveRange:
    start: date
    end: date
    # Termination or suspension date inside the month, if any
    cutoff: Optional[date] = None


def derive_rates(monthly_salary: float, daily_work_hours: float, month_days: int = STANDARD_MONTH_DAYS) -> Rates:
    hourly = monthly_salary / (month_days * daily_work_hours)
    return Rates(daily=monthly_salary / month_days, hourly=hourly, minute=hourly / 60)


def is_skipped(employee: EmployeeProfile, month_start: date, month_end: date) -> bool:
    """True when the employee has no payable day in the month at all."""
    if employee.hire_date and employee.hire_date > month_end:
        return True
    if (
        employee.status == EmployeeStatus.TERMINATED
        and employee.termination_date
        and employee.termination_date < month_start
    ):
        return True
    if (
        employee.status == EmployeeStatus.SUSPENDED
        and employee.suspension_date
        and employee.suspension_date < month_start
        and _suspension_type(employee) == SuspensionType.WITHOUT_SALARY
    ):
        return True
    return False


def resolve_effective_range(employee: EmployeeProfile, month_start: date, month_end: date) -> EffectiveRange:
    start = month_start
    if employee.hire_date and employee.hire_date > month_start:
        start = employee.hire_date

    cutoff = _lifecycle_cutoff(employee, month_start, month_end)
    return EffectiveRange(start=start, end=cutoff or month_end, cutoff=cutoff)


def compute_days_due(
    employee: EmployeeProfile,
    effective: EffectiveRange,
    month_start: date,
    month_end: date,
    month_days: int = STANDARD_MONTH_DAYS,
) -> int:
    if effective.end < month_end:
        return inclusive_days(month_start, effective.end)
    if employee.hire_date and employee.hire_date > month_start:
        return inclusive_days(employee.hire_date, month_end)
    return month_days


def prorate_base_salary(
    employee: EmployeeProfile,
    daily_rate: float,
    month_start: date,
    month_end: date,
    month_days: int = STANDARD_MONTH_DAYS,
) -> float:
    hire = employee.hire_date
    if hire and month_start < hire <= month_end:
        workable_days = inclusive_days(hire, month_end)
        if 0 < workable_days <= month_days:
            return daily_rate * workable_days
    return employee.monthly_salary


def filter_attendance(
    attendance: Iterable[AttendanceEntry],
    effective: EffectiveRange,
    hire_date: Optional[date],
) -> List[AttendanceEntry]:
    return [
        att for att in attendance
        if effective.start <= att.date <= effective.end
        and (hire_date is None or att.date >= hire_date)
    ]


def sum_adjustments(adjustments: Iterable[AdjustmentEntry]) -> Tuple[float, float, float]:
    """Return (deductions, bonuses, advances)."""
    totals = {kind: 0.0 for kind in AdjustmentKind}
    for adj in adjustments:
        totals[adj.kind] += adj.amount
    return totals[AdjustmentKind.DEDUCTION], totals[AdjustmentKind.BONUS], totals[AdjustmentKind.ADVANCE]


def compute_payroll(
    employee: EmployeeProfile,
    attendance_for_month: Iterable[AttendanceEntry],
    adjustments_for_month: Iterable[AdjustmentEntry],
    month: str,
    month_days: int = STANDARD_MONTH_DAYS,
) -> Optional[PayrollResult]:
    """
    Build the payslip of one employee for a ``YYYY-MM`` month.

    Returns None when the employee should get no payroll row for the month:
    hired after it, terminated before it, or suspended without salary
    before it.
    """
    month_start, month_end = parse_month_key(month)
    if is_skipped(employee, month_start, month_end):
        return None

    effective = resolve_effective_range(employee, month_start, month_end)
    records = filter_attendance(attendance_for_month, effective, employee.hire_date)

    absent_with_notice = 0
    absent_without_notice = 0
    leave_days = 0
    holiday_days = 0
    overtime_hours = 0.0
    time_delay_minutes = 0
    non_time_delay_minutes = 0

    for att in records:
        if att.day_status == DayStatus.ABSENT:
            if att.absence_reason == AbsenceReason.WITHOUT_NOTICE:
                absent_without_notice += 1
            else:
                absent_with_notice += 1
        elif att.day_status == DayStatus.LEAVE:
            leave_days += 1
        elif att.day_status == DayStatus.HOLIDAY:
            holiday_days += 1
        elif att.day_status == DayStatus.PRESENT:
            overtime_hours += att.overtime_hours
            time_delay_minutes += att.time_delay_minutes
            non_time_delay_minutes += att.non_time_delay_minutes

    penalty_days = absent_with_notice + absent_without_notice * WITHOUT_NOTICE_PENALTY
    days_due = compute_days_due(employee, effective, month_start, month_end, month_days)

    rates = derive_rates(employee.monthly_salary, employee.daily_work_hours, month_days)
    base_salary = prorate_base_salary(employee, rates.daily, month_start, month_end, month_days)
    absent_deduction = rates.daily * penalty_days
    salary_after_absence = base_salary - absent_deduction

    overtime_pay = overtime_hours * rates.hourly
    time_delay_deduction = time_delay_minutes * rates.minute
    non_time_delay_deduction = (non_time_delay_minutes * NON_TIME_DELAY_FACTOR) * rates.minute

    total_deductions, total_bonuses, total_advances = sum_adjustments(adjustments_for_month)

    net_salary = (
        salary_after_absence
        + overtime_pay
        + total_bonuses
        - time_delay_deduction
        - non_time_delay_deduction
        - total_deductions
        - total_advances
    )

    return PayrollResult(
        employee_id=employee.id,
        month=month,
        present_days=days_due - penalty_days - leave_days - holiday_days,
        absent_days=absent_with_notice + absent_without_notice,
        absent_days_with_notice=absent_with_notice,
        absent_days_without_notice=absent_without_notice,
        leave_days=leave_days,
        holiday_days=holiday_days,
        days_due=days_due,
        last_working_day=effective.cutoff,
        overtime_hours=overtime_hours,
        time_delay_minutes=time_delay_minutes,
        non_time_delay_minutes=non_time_delay_minutes,
        overtime_pay=overtime_pay,
        time_delay_deduction=time_delay_deduction,
        non_time_delay_deduction=non_time_delay_deduction,
        base_salary=base_salary,
        absent_deduction=absent_deduction,
        salary_after_absence=salary_after_absence,
        total_deductions=total_deductions,
        total_bonuses=total_bonuses,
        total_advances=total_advances,
        net_salary=max(net_salary, 0.0),
    )


def _suspension_type(employee: EmployeeProfile) -> SuspensionType:
    return employee.suspension_type or SuspensionType.WITHOUT_SALARY


def _lifecycle_cutoff(employee: EmployeeProfile, month_start: date, month_end: date) -> Optional[date]:
    if employee.status == EmployeeStatus.TERMINATED and employee.termination_date:
        if month_start <= employee.termination_date <= month_end:
            return employee.termination_date
    elif employee.status == EmployeeStatus.SUSPENDED and employee.suspension_date:
        if month_start <= employee.suspension_date <= month_end:
            return employee.suspension_date
    return None
