"""
Attendance Store Service

One record per employee per calendar day. Every write goes through
normalize_attendance_status so the stored (status, absence_reason) pair is
always canonical. A day without a record is treated as present by payroll,
so nothing here ever back-fills missing days.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from datetime import date, timedelta
from typing import List, Optional
import logging

from hr_payroll.core.config import settings
from hr_payroll.core.dates import parse_month_key
from hr_payroll.core.exceptions import ConflictError, NotFoundError, ValidationError
from hr_payroll.models.attendance import Attendance, DayStatus
from hr_payroll.models.employee import Employee, EmployeeStatus
from hr_payroll.schemas.attendance import (
    AttendanceBatchRequest,
    AttendanceBatchResult,
    AttendanceCreate,
    AttendanceUpdate,
)
from hr_payroll.services.attendance_normalizer import normalize_attendance_status

logger = logging.getLogger(__name__)


def lifecycle_violation(employee: Employee, day: date) -> Optional[str]:
    """Reason the employee cannot have attendance on this day, or None."""
    if employee.hire_date and day < employee.hire_date:
        return f"لا يمكن تسجيل الدوام قبل تاريخ التعيين ({employee.hire_date.isoformat()})"
    if employee.status == EmployeeStatus.SUSPENDED.value and employee.suspension_date:
        if day >= employee.suspension_date:
            return "لا يمكن تسجيل الدوام في تاريخ الإيقاف أو بعده"
    if employee.status == EmployeeStatus.TERMINATED.value and employee.termination_date:
        if day > employee.termination_date:
            return "لا يمكن تسجيل الدوام بعد تاريخ إنهاء الخدمة"
    return None


def _get_employee(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)
    if not employee:
        raise NotFoundError("الموظف غير موجود")
    return employee


def record_attendance(db: Session, payload: AttendanceCreate) -> Attendance:
    employee = _get_employee(db, payload.employee_id)

    reason = lifecycle_violation(employee, payload.date)
    if reason:
        raise ValidationError(reason)

    day = payload.date.isoformat()
    existing = db.query(Attendance).filter(
        Attendance.employee_id == employee.id,
        Attendance.date == day
    ).first()
    if existing:
        raise ConflictError("تم تسجيل الدوام لهذا الموظف في هذا التاريخ مسبقاً")

    status, absence_reason = normalize_attendance_status(payload.status, payload.absence_reason)
    is_present = status == DayStatus.PRESENT

    record = Attendance(
        employee_id=employee.id,
        date=day,
        status=status.value,
        absence_reason=absence_reason.value if absence_reason else None,
        overtime_hours=payload.overtime_hours if is_present else 0.0,
        time_delay_minutes=payload.time_delay_minutes if is_present else 0,
        non_time_delay_minutes=payload.non_time_delay_minutes if is_present else 0,
    )
    db.add(record)
    try:
        db.commit()
        db.refresh(record)
    except IntegrityError:
        db.rollback()
        raise ConflictError("تم تسجيل الدوام لهذا الموظف في هذا التاريخ مسبقاً")
    except Exception:
        db.rollback()
        raise
    return record


def upsert_attendance_range(db: Session, payload: AttendanceBatchRequest) -> AttendanceBatchResult:
    """
    Mark every day of [start_date, end_date] with one status.

    Existing days are updated in place, missing days are created. Weekend
    days (when excluded) and days outside the employee's working life are
    skipped. A day that fails to save is counted and does not stop the rest.
    """
    if payload.start_date > payload.end_date:
        raise ValidationError("تاريخ البداية يجب أن يكون قبل تاريخ النهاية")

    employee = _get_employee(db, payload.employee_id)
    status, absence_reason = normalize_attendance_status(payload.status, payload.absence_reason)
    reason_value = absence_reason.value if absence_reason else None

    total_days = (payload.end_date - payload.start_date).days + 1
    dates: List[str] = []
    current = payload.start_date
    while current <= payload.end_date:
        weekend = payload.exclude_weekends and current.weekday() in settings.payroll.weekend_days
        if not weekend and lifecycle_violation(employee, current) is None:
            dates.append(current.isoformat())
        current += timedelta(days=1)

    if not dates:
        raise ValidationError("لا توجد أيام صالحة للتسجيل")

    existing = {
        record.date: record
        for record in db.query(Attendance).filter(
            Attendance.employee_id == employee.id,
            Attendance.date.in_(dates)
        ).all()
    }

    for day in dates:
        record = existing.get(day)
        if record is None:
            db.add(_new_record(employee.id, day, status, reason_value))
        else:
            _restatus(record, status, reason_value)

    success_count, failed_count = len(dates), 0
    try:
        db.commit()
    except IntegrityError:
        # Another writer created some of these days meanwhile; retry one by one
        db.rollback()
        logger.warning(
            "Bulk attendance write conflicted, retrying per day",
            extra={"employee_id": employee.id},
        )
        success_count, failed_count = _upsert_days_individually(db, employee.id, dates, status, reason_value)

    skip_count = total_days - success_count - failed_count
    logger.info(
        f"Attendance batch for employee {employee.id}: "
        f"{success_count} saved, {skip_count} skipped, {failed_count} failed"
    )
    return AttendanceBatchResult(
        success_count=success_count,
        skip_count=skip_count,
        failed_count=failed_count,
        total_days=total_days,
    )


def _new_record(employee_id: int, day: str, status: DayStatus, reason: Optional[str]) -> Attendance:
    return Attendance(
        employee_id=employee_id,
        date=day,
        status=status.value,
        absence_reason=reason,
        overtime_hours=0.0,
        time_delay_minutes=0,
        non_time_delay_minutes=0,
    )


def _restatus(record: Attendance, status: DayStatus, reason: Optional[str]):
    record.status = status.value
    record.absence_reason = reason
    if status != DayStatus.PRESENT:
        record.overtime_hours = 0.0
        record.time_delay_minutes = 0
        record.non_time_delay_minutes = 0


def _upsert_days_individually(db: Session, employee_id: int, dates: List[str], status: DayStatus, reason: Optional[str]):
    success_count = 0
    failed_count = 0
    for day in dates:
        try:
            record = db.query(Attendance).filter(
                Attendance.employee_id == employee_id,
                Attendance.date == day
            ).first()
            if record is None:
                db.add(_new_record(employee_id, day, status, reason))
            else:
                _restatus(record, status, reason)
            db.commit()
            success_count += 1
        except Exception as e:
            db.rollback()
            failed_count += 1
            logger.error(f"Failed to save attendance for {day}: {e}", extra={"employee_id": employee_id})
    return success_count, failed_count


def list_attendance(
    db: Session,
    employee_id: Optional[int] = None,
    day: Optional[date] = None,
    month: Optional[str] = None,
) -> List[Attendance]:
    query = db.query(Attendance)
    if employee_id:
        query = query.filter(Attendance.employee_id == employee_id)
    if day:
        query = query.filter(Attendance.date == day.isoformat())
    elif month:
        parse_month_key(month)
        query = query.filter(Attendance.date.startswith(month))
    return query.order_by(Attendance.date.desc(), Attendance.employee_id.asc()).all()


def update_attendance(db: Session, attendance_id: int, payload: AttendanceUpdate) -> Attendance:
    record = db.get(Attendance, attendance_id)
    if not record:
        raise NotFoundError("سجل الدوام غير موجود")

    changes = payload.model_dump(exclude_unset=True)
    if "status" in changes:
        status, reason = normalize_attendance_status(changes["status"], changes.get("absence_reason"))
        _restatus(record, status, reason.value if reason else None)

    if record.status == DayStatus.PRESENT.value:
        for field in ("overtime_hours", "time_delay_minutes", "non_time_delay_minutes"):
            if changes.get(field) is not None:
                setattr(record, field, changes[field])

    try:
        db.commit()
        db.refresh(record)
    except Exception:
        db.rollback()
        raise
    return record


def delete_attendance(db: Session, attendance_id: int) -> None:
    record = db.get(Attendance, attendance_id)
    if not record:
        raise NotFoundError("سجل الدوام غير موجود")
    db.delete(record)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
