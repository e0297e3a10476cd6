"""
Attendance Router

Daily attendance marking, single-day and date-range batch.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional

from hr_payroll.core.schemas import ApiResponse
from hr_payroll.database import get_db
from hr_payroll.schemas.attendance import (
    AttendanceBatchRequest,
    AttendanceBatchResult,
    AttendanceCreate,
    AttendanceResponse,
    AttendanceUpdate,
)
from hr_payroll.services import attendance_service


router = APIRouter(
    prefix="/attendance",
    tags=["attendance"],
)


@router.get("", response_model=ApiResponse[List[AttendanceResponse]])
def list_attendance(
    employee_id: Optional[int] = None,
    date: Optional[date] = None,
    month: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Filter by employee and by exact date or by YYYY-MM month."""
    records = attendance_service.list_attendance(db, employee_id=employee_id, day=date, month=month)
    return ApiResponse.ok([AttendanceResponse.model_validate(r) for r in records])


@router.post("", response_model=ApiResponse[AttendanceResponse])
def record_attendance(payload: AttendanceCreate, db: Session = Depends(get_db)):
    record = attendance_service.record_attendance(db, payload)
    return ApiResponse.ok(AttendanceResponse.model_validate(record), message="تم تسجيل الدوام بنجاح")


@router.post("/batch", response_model=ApiResponse[AttendanceBatchResult])
def record_attendance_batch(payload: AttendanceBatchRequest, db: Session = Depends(get_db)):
    """
    Mark a date range for one employee. Existing days are updated, new
    days created; the response carries success/skip/failed counts.
    """
    result = attendance_service.upsert_attendance_range(db, payload)
    return ApiResponse.ok(result, message=f"تم تسجيل {result.success_count} يوم بنجاح")


@router.put("/{attendance_id}", response_model=ApiResponse[AttendanceResponse])
def update_attendance(attendance_id: int, payload: AttendanceUpdate, db: Session = Depends(get_db)):
    record = attendance_service.update_attendance(db, attendance_id, payload)
    return ApiResponse.ok(AttendanceResponse.model_validate(record), message="تم تحديث الحضور بنجاح")


@router.delete("/{attendance_id}", response_model=ApiResponse[None])
def delete_attendance(attendance_id: int, db: Session = Depends(get_db)):
    attendance_service.delete_attendance(db, attendance_id)
    return ApiResponse.ok(None, message="تم حذف الحضور بنجاح")
