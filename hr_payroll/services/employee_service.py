"""
Employee Directory Service

Owns employee profiles and their lifecycle fields. The payroll engine only
reads what this module writes, so lifecycle consistency is enforced here:
a suspended employee carries a suspension date, a terminated one a
termination date, and the fields of other states are cleared.
"""

from sqlalchemy.orm import Session
from datetime import date
from typing import Any, Dict, List, Optional
import logging

from hr_payroll.core.config import settings
from hr_payroll.core.exceptions import ConflictError, NotFoundError, ValidationError
from hr_payroll.models.employee import Employee, EmployeeStatus, SuspensionType
from hr_payroll.schemas.employee import EmployeeCreate, EmployeeUpdate

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = {"employee_number", "name", "salary", "work_hours", "status"}


def _validate_compensation(salary: Optional[float], work_hours: Optional[float]):
    if salary is None or salary <= 0:
        raise ValidationError("الراتب يجب أن يكون أكبر من صفر")
    if work_hours is not None and work_hours <= 0:
        raise ValidationError("ساعات العمل اليومية يجب أن تكون أكبر من صفر")


def _apply_lifecycle(values: Dict[str, Any]) -> Dict[str, Any]:
    """Validate status-specific fields and drop the ones that do not apply."""
    try:
        status = EmployeeStatus(values.get("status") or EmployeeStatus.ACTIVE.value)
    except ValueError:
        raise ValidationError(f"حالة الموظف غير صحيحة: {values.get('status')!r}")
    values["status"] = status.value

    if status == EmployeeStatus.SUSPENDED:
        if not values.get("suspension_date"):
            raise ValidationError("يرجى تحديد تاريخ الإيقاف")
        try:
            values["suspension_type"] = SuspensionType(
                values.get("suspension_type") or SuspensionType.WITHOUT_SALARY.value
            ).value
        except ValueError:
            raise ValidationError(f"نوع الإيقاف غير صحيح: {values.get('suspension_type')!r}")
        values["termination_date"] = None
    elif status == EmployeeStatus.TERMINATED:
        if not values.get("termination_date"):
            raise ValidationError("يرجى تحديد تاريخ إنهاء الخدمة")
        values["suspension_type"] = None
        values["suspension_date"] = None
    else:
        values["suspension_type"] = None
        values["suspension_date"] = None
        values["termination_date"] = None

    hire_date = values.get("hire_date")
    for field in ("suspension_date", "termination_date"):
        cutoff = values.get(field)
        if hire_date and cutoff and cutoff < hire_date:
            raise ValidationError("لا يمكن أن يسبق تاريخ الإيقاف أو الإنهاء تاريخ التعيين")
    return values


def _get_or_404(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)
    if not employee:
        raise NotFoundError("الموظف غير موجود")
    return employee


def create_employee(db: Session, payload: EmployeeCreate) -> Employee:
    values = payload.model_dump()
    if not (values.get("name") or "").strip() or not (values.get("employee_number") or "").strip():
        raise ValidationError("البيانات المطلوبة غير مكتملة")
    if values["work_hours"] is None:
        values["work_hours"] = settings.payroll.default_work_hours
    _validate_compensation(values["salary"], values["work_hours"])
    values = _apply_lifecycle(values)
    if not values.get("status_change_date"):
        values["status_change_date"] = values.get("hire_date") or date.today()

    existing = db.query(Employee).filter(
        Employee.employee_number == values["employee_number"]
    ).first()
    if existing:
        raise ConflictError("الرقم الوظيفي موجود مسبقاً")

    employee = Employee(**values)
    db.add(employee)
    try:
        db.commit()
        db.refresh(employee)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Employee created: {employee.employee_number}", extra={"employee_id": employee.id})
    return employee


def list_employees(
    db: Session,
    status: Optional[str] = None,
    include_terminated: bool = False,
) -> List[Employee]:
    """Terminated employees are archived and hidden unless asked for."""
    query = db.query(Employee)
    if status:
        query = query.filter(Employee.status == status)
    elif not include_terminated:
        query = query.filter(Employee.status != EmployeeStatus.TERMINATED.value)
    return query.order_by(Employee.employee_number.asc()).all()


def get_employee(db: Session, employee_id: int) -> Employee:
    return _get_or_404(db, employee_id)


def update_employee(db: Session, employee_id: int, payload: EmployeeUpdate) -> Employee:
    employee = _get_or_404(db, employee_id)
    changes = payload.model_dump(exclude_unset=True)

    new_number = changes.get("employee_number")
    if new_number and new_number != employee.employee_number:
        clash = db.query(Employee).filter(Employee.employee_number == new_number).first()
        if clash:
            raise ConflictError("الرقم الوظيفي موجود مسبقاً")

    current = {
        column.name: getattr(employee, column.name)
        for column in Employee.__table__.columns
        if column.name not in ("id", "created_at", "updated_at")
    }
    merged = dict(current)
    for field, value in changes.items():
        # Explicit nulls for required fields keep the stored value
        if value is None and field in _REQUIRED_FIELDS:
            continue
        merged[field] = value
    _validate_compensation(merged["salary"], merged["work_hours"])

    status_changed = merged["status"] != employee.status
    merged = _apply_lifecycle(merged)
    if status_changed and "status_change_date" not in changes:
        merged["status_change_date"] = merged.get("suspension_date") or merged.get("termination_date") or date.today()

    for field, value in merged.items():
        setattr(employee, field, value)
    try:
        db.commit()
        db.refresh(employee)
    except Exception:
        db.rollback()
        raise

    if status_changed:
        logger.info(
            f"Employee {employee.employee_number} status changed to {employee.status}",
            extra={"employee_id": employee.id},
        )
    return employee


def delete_employee(db: Session, employee_id: int) -> None:
    employee = _get_or_404(db, employee_id)
    if employee.is_terminated:
        raise ValidationError("لا يمكن حذف الموظف المنتهية خدمته")
    db.delete(employee)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
