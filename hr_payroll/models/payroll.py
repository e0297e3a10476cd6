from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hr_payroll.database import Base

class PayrollRecord(Base):
    """Derived monthly payslip; overwritten on every run for the same (employee, month)."""
    __tablename__ = "payroll_records"
    __table_args__ = (
        UniqueConstraint("employee_id", "month", name="uq_payroll_employee_month"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    month = Column(String(7), nullable=False, index=True)

    present_days = Column(Integer, default=0)
    absent_days = Column(Integer, default=0)
    absent_days_with_notice = Column(Integer, default=0)
    absent_days_without_notice = Column(Integer, default=0)
    leave_days = Column(Integer, default=0)
    holiday_days = Column(Integer, default=0)
    days_due = Column(Integer, default=0)
    last_working_day = Column(Date, nullable=True)

    overtime_hours = Column(Float, default=0.0)
    time_delay_minutes = Column(Integer, default=0)
    non_time_delay_minutes = Column(Integer, default=0)
    overtime_pay = Column(Float, default=0.0)
    time_delay_deduction = Column(Float, default=0.0)
    non_time_delay_deduction = Column(Float, default=0.0)

    base_salary = Column(Float, default=0.0)
    total_deductions = Column(Float, default=0.0)
    total_bonuses = Column(Float, default=0.0)
    total_advances = Column(Float, default=0.0)
    net_salary = Column(Float, default=0.0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employee = relationship("Employee", back_populates="payroll_records")
