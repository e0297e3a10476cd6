from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hr_payroll.database import Base
import enum

class DayStatus(str, enum.Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"
    HOLIDAY = "holiday"

class AbsenceReason(str, enum.Enum):
    WITH_NOTICE = "with_notice"
    WITHOUT_NOTICE = "without_notice"

class Attendance(Base):
    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_attendance_employee_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD, prefix-searchable by month
    status = Column(String, default=DayStatus.PRESENT.value, nullable=False)
    absence_reason = Column(String, nullable=True)  # NULL unless status == absent
    overtime_hours = Column(Float, default=0.0, nullable=False)
    time_delay_minutes = Column(Integer, default=0, nullable=False)
    non_time_delay_minutes = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employee = relationship("Employee", back_populates="attendance")
