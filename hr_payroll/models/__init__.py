# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import employee, attendance, adjustment, payroll

# Explicit class exports for cleaner imports
from .employee import Employee, EmployeeStatus, SuspensionType
from .attendance import Attendance, DayStatus, AbsenceReason
from .adjustment import Adjustment, AdjustmentKind
from .payroll import PayrollRecord

__all__ = [
    "Employee",
    "EmployeeStatus",
    "SuspensionType",
    "Attendance",
    "DayStatus",
    "AbsenceReason",
    "Adjustment",
    "AdjustmentKind",
    "PayrollRecord",
]
