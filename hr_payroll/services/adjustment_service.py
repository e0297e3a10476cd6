from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from hr_payroll.core.dates import parse_month_key
from hr_payroll.core.exceptions import NotFoundError, ValidationError
from hr_payroll.models.adjustment import Adjustment, AdjustmentKind
from hr_payroll.models.employee import Employee
from hr_payroll.schemas.adjustment import AdjustmentCreate, AdjustmentUpdate

logger = logging.getLogger(__name__)

KIND_LABELS = {
    AdjustmentKind.DEDUCTION: "الخصم",
    AdjustmentKind.BONUS: "المكافأة",
    AdjustmentKind.ADVANCE: "السلفة",
}


def _validate_kind(kind: Optional[str]) -> AdjustmentKind:
    try:
        return AdjustmentKind(kind)
    except ValueError:
        raise ValidationError("نوع العملية غير صحيح")


def _validate_amount(amount: Optional[float]):
    if amount is None or amount <= 0:
        raise ValidationError("المبلغ يجب أن يكون أكبر من صفر")


def create_adjustment(db: Session, payload: AdjustmentCreate) -> Adjustment:
    kind = _validate_kind(payload.kind)
    _validate_amount(payload.amount)
    parse_month_key(payload.month)

    if not db.get(Employee, payload.employee_id):
        raise NotFoundError("الموظف غير موجود")

    adjustment = Adjustment(
        employee_id=payload.employee_id,
        month=payload.month,
        kind=kind.value,
        amount=payload.amount,
        description=payload.description or None,
    )
    db.add(adjustment)
    try:
        db.commit()
        db.refresh(adjustment)
    except Exception:
        db.rollback()
        raise
    return adjustment


def list_adjustments(db: Session, employee_id: Optional[int] = None, month: Optional[str] = None) -> List[Adjustment]:
    query = db.query(Adjustment)
    if employee_id:
        query = query.filter(Adjustment.employee_id == employee_id)
    if month:
        query = query.filter(Adjustment.month == month)
    return query.order_by(Adjustment.created_at.desc(), Adjustment.id.desc()).all()


def update_adjustment(db: Session, adjustment_id: int, payload: AdjustmentUpdate) -> Adjustment:
    adjustment = db.get(Adjustment, adjustment_id)
    if not adjustment:
        raise NotFoundError("العملية غير موجودة")

    changes = payload.model_dump(exclude_unset=True)
    if "kind" in changes:
        adjustment.kind = _validate_kind(changes["kind"]).value
    if "amount" in changes:
        _validate_amount(changes["amount"])
        adjustment.amount = changes["amount"]
    if "month" in changes:
        parse_month_key(changes["month"])
        adjustment.month = changes["month"]
    if "description" in changes:
        adjustment.description = changes["description"] or None

    try:
        db.commit()
        db.refresh(adjustment)
    except Exception:
        db.rollback()
        raise
    return adjustment


def delete_adjustment(db: Session, adjustment_id: int) -> None:
    adjustment = db.get(Adjustment, adjustment_id)
    if not adjustment:
        raise NotFoundError("العملية غير موجودة")
    db.delete(adjustment)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
