"""
Employee Model.
Static profile plus lifecycle state (active / suspended / terminated).
"""
from sqlalchemy import Column, Integer, String, Float, Date, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from hr_payroll.database import Base


class EmployeeStatus(str, enum.Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    TERMINATED = "terminated"


class SuspensionType(str, enum.Enum):
    WITH_SALARY = "with_salary"
    WITHOUT_SALARY = "without_salary"


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    employee_number = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    branch = Column(String, default="")
    department = Column(String, default="")
    position = Column(String, default="")

    salary = Column(Float, nullable=False)
    work_hours = Column(Float, default=8.0, nullable=False)

    hire_date = Column(Date, nullable=True)
    status = Column(String, default=EmployeeStatus.ACTIVE.value, nullable=False, index=True)
    status_change_date = Column(Date, nullable=True)
    # Only one of suspension_date / termination_date is kept, matching status
    suspension_type = Column(String, nullable=True)
    suspension_date = Column(Date, nullable=True)
    termination_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    attendance = relationship("Attendance", back_populates="employee", cascade="all, delete-orphan")
    adjustments = relationship("Adjustment", back_populates="employee", cascade="all, delete-orphan")
    payroll_records = relationship("PayrollRecord", back_populates="employee", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Employee {self.employee_number}: {self.name} ({self.status})>"

    @property
    def is_terminated(self) -> bool:
        return self.status == EmployeeStatus.TERMINATED.value
