"""
Data contracts of the monthly payroll engine.

The engine consumes EmployeeProfile / AttendanceEntry / AdjustmentEntry and
produces a PayrollResult. These are plain pydantic values with no database
handle, so the calculation stays pure.
"""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import date
from typing import Any, Dict, List, Optional

from hr_payroll.models.employee import EmployeeStatus, SuspensionType
from hr_payroll.models.attendance import DayStatus, AbsenceReason
from hr_payroll.models.adjustment import AdjustmentKind


class EmployeeProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    employee_number: str = ""
    name: str = ""
    monthly_salary: float = Field(gt=0)
    daily_work_hours: float = Field(default=8.0, gt=0)
    hire_date: Optional[date] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    status_change_date: Optional[date] = None
    suspension_type: Optional[SuspensionType] = None
    suspension_date: Optional[date] = None
    termination_date: Optional[date] = None

    @classmethod
    def from_model(cls, employee: Any) -> "EmployeeProfile":
        return cls(
            id=employee.id,
            employee_number=employee.employee_number or "",
            name=employee.name or "",
            monthly_salary=employee.salary,
            daily_work_hours=employee.work_hours or 8.0,
            hire_date=employee.hire_date,
            status=employee.status,
            status_change_date=employee.status_change_date,
            suspension_type=employee.suspension_type,
            suspension_date=employee.suspension_date,
            termination_date=employee.termination_date,
        )


class AttendanceEntry(BaseModel):
    """
    One recorded day. A day with no entry at all counts as present:
    only explicitly recorded absence is ever penalized.
    """
    model_config = ConfigDict(frozen=True)

    date: date
    day_status: DayStatus = DayStatus.PRESENT
    absence_reason: Optional[AbsenceReason] = None
    overtime_hours: float = Field(default=0.0, ge=0)
    time_delay_minutes: int = Field(default=0, ge=0)
    non_time_delay_minutes: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _reason_only_when_absent(self) -> "AttendanceEntry":
        if self.absence_reason is not None and self.day_status != DayStatus.ABSENT:
            raise ValueError("absence_reason is only meaningful for absent days")
        return self

    @classmethod
    def from_model(cls, record: Any) -> "AttendanceEntry":
        return cls(
            date=record.date,
            day_status=record.status,
            absence_reason=record.absence_reason if record.status == DayStatus.ABSENT.value else None,
            overtime_hours=record.overtime_hours or 0.0,
            time_delay_minutes=record.time_delay_minutes or 0,
            non_time_delay_minutes=record.non_time_delay_minutes or 0,
        )


class AdjustmentEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: AdjustmentKind
    amount: float = Field(gt=0)
    description: Optional[str] = None

    @classmethod
    def from_model(cls, adjustment: Any) -> "AdjustmentEntry":
        return cls(kind=adjustment.kind, amount=adjustment.amount, description=adjustment.description)


# Returned to callers for display, never written to payroll_records
DISPLAY_ONLY_FIELDS = {"absent_deduction", "salary_after_absence"}


class PayrollResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee_id: int
    month: str

    # Attendance tallies
    present_days: int
    absent_days: int
    absent_days_with_notice: int
    absent_days_without_notice: int
    leave_days: int
    holiday_days: int
    days_due: int
    last_working_day: Optional[date] = None

    # Time adjustments
    overtime_hours: float
    time_delay_minutes: int
    non_time_delay_minutes: int
    overtime_pay: float
    time_delay_deduction: float
    non_time_delay_deduction: float

    # Money
    base_salary: float
    absent_deduction: float
    salary_after_absence: float
    total_deductions: float
    total_bonuses: float
    total_advances: float
    net_salary: float = Field(ge=0)

    def to_record_values(self) -> Dict[str, Any]:
        """Column values for the payroll_records upsert."""
        return self.model_dump(exclude=DISPLAY_ONLY_FIELDS)


class PayrollRecordResponse(BaseModel):
    id: int
    employee_id: int
    month: str
    present_days: int
    absent_days: int
    absent_days_with_notice: int
    absent_days_without_notice: int
    leave_days: int
    holiday_days: int
    days_due: int
    last_working_day: Optional[date] = None
    overtime_hours: float
    time_delay_minutes: int
    non_time_delay_minutes: int
    overtime_pay: float
    time_delay_deduction: float
    non_time_delay_deduction: float
    base_salary: float
    total_deductions: float
    total_bonuses: float
    total_advances: float
    net_salary: float

    model_config = ConfigDict(from_attributes=True)


class CalculatePayrollRequest(BaseModel):
    month: str = Field(pattern=r"^\d{4}-\d{2}$", examples=["2024-05"])


class PayrollFailure(BaseModel):
    employee_id: int
    error: str


class PayrollRunResult(BaseModel):
    month: str
    success_count: int = 0
    skip_count: int = 0
    failed_count: int = 0
    data: List[Dict[str, Any]] = []
    failures: List[PayrollFailure] = []
