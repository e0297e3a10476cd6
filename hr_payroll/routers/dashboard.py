from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from hr_payroll.database import get_db
from hr_payroll.services.dashboard_service import get_dashboard_stats


router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


@router.get("/stats")
def dashboard_stats(
    month: Optional[str] = None,
    employee_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    """Attendance statistics for a month (defaults to the current month)."""
    return get_dashboard_stats(db, month=month, employee_id=employee_id)
