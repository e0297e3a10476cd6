"""
Payroll Router

Handles HTTP endpoints for payroll operations.
All business logic is delegated to the payroll service layer.
"""

from fastapi import APIRouter, Depends
from typing import Any, Dict, List, Optional

from hr_payroll.core.schemas import ApiResponse
from hr_payroll.schemas.payroll import CalculatePayrollRequest, PayrollRunResult
from hr_payroll.services.payroll_service import PayrollRunService, get_payroll_run_service


router = APIRouter(
    prefix="/payroll",
    tags=["payroll"],
)


@router.post("/calculate", response_model=ApiResponse[PayrollRunResult])
def calculate_payroll(
    request: CalculatePayrollRequest,
    service: PayrollRunService = Depends(get_payroll_run_service),
):
    """
    Calculate payroll for every eligible employee for a YYYY-MM month.
    Safe to re-run: the month's rows are replaced by the new results.
    """
    run = service.calculate_month(request.month)
    if run.success_count + run.skip_count + run.failed_count == 0:
        message = "لا يوجد موظفين لهذا الشهر"
    elif run.success_count == 0 and run.failed_count == 0:
        message = "لا يوجد موظفين مستحقين للراتب لهذا الشهر"
    else:
        message = "تم حساب الرواتب بنجاح"
    return ApiResponse.ok(run, message=message)


@router.get("", response_model=ApiResponse[List[Dict[str, Any]]])
def list_payroll(
    employee_id: Optional[int] = None,
    month: Optional[str] = None,
    service: PayrollRunService = Depends(get_payroll_run_service),
):
    """
    Get stored payroll rows filtered by employee and/or month.
    """
    return ApiResponse.ok(service.list_payroll(employee_id=employee_id, month=month))
