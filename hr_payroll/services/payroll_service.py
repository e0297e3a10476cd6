"""
Payroll Service Layer

Orchestrates a monthly payroll run around the pure calculator:

- Router -> PayrollRunService (this module) -> PayrollRepository / calculator
- Inputs are loaded in bulk for the month, each employee is computed
  independently, and all results are persisted in one upsert.
- One employee's failure is recorded and counted; it never aborts the run.
"""

from typing import Any, Dict, List, Optional
import logging

from fastapi import Depends

from hr_payroll.core.dates import month_key_of, parse_month_key
from hr_payroll.models.employee import Employee, EmployeeStatus
from hr_payroll.schemas.employee import EmployeeSummary
from hr_payroll.schemas.payroll import (
    AdjustmentEntry,
    AttendanceEntry,
    EmployeeProfile,
    PayrollFailure,
    PayrollRecordResponse,
    PayrollResult,
    PayrollRunResult,
)
from hr_payroll.services.payroll_calculator import compute_payroll
from hr_payroll.services.payroll_repository import PayrollRepository, get_payroll_repository

logger = logging.getLogger(__name__)


class PayrollRunService:
    def __init__(self, repository: PayrollRepository):
        self.repository = repository

    def calculate_month(self, month: str) -> PayrollRunResult:
        """
        Compute and persist payroll for every eligible employee of a month.

        Re-running the same month overwrites the previous rows and drops
        the rows of employees who no longer get a payroll for it. A failed
        employee keeps whatever row the month already had.
        """
        month_start, month_end = parse_month_key(month)
        employees = self.repository.employees_for_month(month_start, month_end)
        run = PayrollRunResult(month=month)
        ids = [emp.id for emp in employees]
        attendance = self.repository.attendance_by_employee(ids, month)
        adjustments = self.repository.adjustments_by_employee(ids, month)

        logger.info(f"Payroll run for {month}: {len(employees)} candidate employees")

        computed: List[PayrollResult] = []
        failed_ids: List[int] = []
        for emp in employees:
            try:
                result = compute_payroll(
                    EmployeeProfile.from_model(emp),
                    [AttendanceEntry.from_model(a) for a in attendance.get(emp.id, [])],
                    [AdjustmentEntry.from_model(d) for d in adjustments.get(emp.id, [])],
                    month,
                )
            except Exception as e:
                logger.error(
                    f"Payroll calculation failed for employee {emp.id}: {e}",
                    exc_info=True,
                    extra={"employee_id": emp.id, "month": month},
                )
                run.failures.append(PayrollFailure(employee_id=emp.id, error=str(e)))
                failed_ids.append(emp.id)
                run.failed_count += 1
                continue

            if result is None:
                run.skip_count += 1
                continue

            computed.append(result)
            run.data.append({
                "employee": EmployeeSummary.model_validate(emp).model_dump(),
                "payroll": result.model_dump(mode="json"),
            })

        self.repository.upsert_results(month, computed, preserve_employee_ids=failed_ids)
        run.success_count = len(computed)

        logger.info(
            f"Payroll run for {month} finished: {run.success_count} saved, "
            f"{run.skip_count} skipped, {run.failed_count} failed"
        )
        return run

    def list_payroll(self, employee_id: Optional[int] = None, month: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Stored payroll rows, newest month first.

        When a month is given, rows of employees terminated before that
        month are left out.
        """
        if month:
            parse_month_key(month)
        rows = []
        for record, employee in self.repository.list_records(employee_id=employee_id, month=month):
            if month and _terminated_before(employee, month):
                continue
            item = PayrollRecordResponse.model_validate(record).model_dump(mode="json")
            item["employee"] = _employee_payload(employee)
            rows.append(item)
        return rows


def _terminated_before(employee: Employee, month: str) -> bool:
    if employee.status != EmployeeStatus.TERMINATED.value or not employee.termination_date:
        return False
    return month > month_key_of(employee.termination_date)


def _employee_payload(employee: Employee) -> Dict[str, Any]:
    return {
        "id": employee.id,
        "name": employee.name,
        "employee_number": employee.employee_number,
        "branch": employee.branch,
        "department": employee.department,
        "position": employee.position,
        "salary": employee.salary,
        "status": employee.status,
        "termination_date": employee.termination_date.isoformat() if employee.termination_date else None,
    }


def get_payroll_run_service(
    repository: PayrollRepository = Depends(get_payroll_repository),
) -> PayrollRunService:
    return PayrollRunService(repository)
