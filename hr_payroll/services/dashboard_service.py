from sqlalchemy import func
from sqlalchemy.orm import Session
from datetime import date
from typing import Any, Dict, Optional

from hr_payroll.core.dates import month_key_of, parse_month_key
from hr_payroll.models.attendance import Attendance, DayStatus
from hr_payroll.models.employee import Employee, EmployeeStatus


def get_dashboard_stats(db: Session, month: Optional[str] = None, employee_id: Optional[int] = None) -> Dict[str, Any]:
    """
    Attendance statistics for one month (current month by default).

    Records dated after an employee's termination are ignored. The
    attendance rate counts holidays as attended days.
    """
    today = date.today()
    period = month or month_key_of(today)
    month_start, month_end = parse_month_key(period)

    query = db.query(Attendance, Employee).join(Employee, Attendance.employee_id == Employee.id).filter(
        Attendance.date >= month_start.isoformat(),
        Attendance.date <= month_end.isoformat(),
    )
    if employee_id:
        query = query.filter(Attendance.employee_id == employee_id)

    counts = {status.value: 0 for status in DayStatus}
    total_days = 0
    for att, emp in query.all():
        if (
            emp.status == EmployeeStatus.TERMINATED.value
            and emp.termination_date
            and att.date > emp.termination_date.isoformat()
        ):
            continue
        total_days += 1
        if att.status in counts:
            counts[att.status] += 1

    attendance_rate = 0.0
    if total_days:
        attended = counts[DayStatus.PRESENT.value] + counts[DayStatus.HOLIDAY.value]
        attendance_rate = round(attended / total_days * 100, 1)

    employee_query = db.query(func.count(Employee.id))
    if employee_id:
        employee_query = employee_query.filter(Employee.id == employee_id)
    else:
        employee_query = employee_query.filter(Employee.status != EmployeeStatus.TERMINATED.value)

    total_employees = employee_query.scalar() or 0
    active_employees = employee_query.filter(Employee.status == EmployeeStatus.ACTIVE.value).scalar() or 0
    suspended_employees = employee_query.filter(Employee.status == EmployeeStatus.SUSPENDED.value).scalar() or 0
    today_attendance = db.query(func.count(Attendance.id)).filter(
        Attendance.date == today.isoformat()
    ).scalar() or 0

    return {
        "period": period,
        "total_employees": total_employees,
        "active_employees": active_employees,
        "suspended_employees": suspended_employees,
        "today_attendance": today_attendance,
        "total_days": total_days,
        "present_days": counts[DayStatus.PRESENT.value],
        "absent_days": counts[DayStatus.ABSENT.value],
        "leave_days": counts[DayStatus.LEAVE.value],
        "holiday_days": counts[DayStatus.HOLIDAY.value],
        "attendance_rate": attendance_rate,
    }
