from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from hr_payroll.core.schemas import ApiResponse
from hr_payroll.database import get_db
from hr_payroll.models.adjustment import AdjustmentKind
from hr_payroll.schemas.adjustment import AdjustmentCreate, AdjustmentResponse, AdjustmentUpdate
from hr_payroll.services import adjustment_service


router = APIRouter(
    prefix="/adjustments",
    tags=["adjustments"],
)


@router.get("", response_model=ApiResponse[List[AdjustmentResponse]])
def list_adjustments(
    employee_id: Optional[int] = None,
    month: Optional[str] = None,
    db: Session = Depends(get_db),
):
    items = adjustment_service.list_adjustments(db, employee_id=employee_id, month=month)
    return ApiResponse.ok([AdjustmentResponse.model_validate(i) for i in items])


@router.post("", response_model=ApiResponse[AdjustmentResponse])
def create_adjustment(payload: AdjustmentCreate, db: Session = Depends(get_db)):
    """Record a deduction, bonus or advance for one employee and month."""
    adjustment = adjustment_service.create_adjustment(db, payload)
    label = adjustment_service.KIND_LABELS[AdjustmentKind(adjustment.kind)]
    return ApiResponse.ok(AdjustmentResponse.model_validate(adjustment), message=f"تم إضافة {label} بنجاح")


@router.put("/{adjustment_id}", response_model=ApiResponse[AdjustmentResponse])
def update_adjustment(adjustment_id: int, payload: AdjustmentUpdate, db: Session = Depends(get_db)):
    adjustment = adjustment_service.update_adjustment(db, adjustment_id, payload)
    return ApiResponse.ok(AdjustmentResponse.model_validate(adjustment), message="تم التحديث بنجاح")


@router.delete("/{adjustment_id}", response_model=ApiResponse[None])
def delete_adjustment(adjustment_id: int, db: Session = Depends(get_db)):
    adjustment_service.delete_adjustment(db, adjustment_id)
    return ApiResponse.ok(None, message="تم الحذف بنجاح")
