from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from hr_payroll.database import Base
import enum

class AdjustmentKind(str, enum.Enum):
    DEDUCTION = "deduction"
    BONUS = "bonus"
    ADVANCE = "advance"

class Adjustment(Base):
    __tablename__ = "adjustments"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    month = Column(String(7), nullable=False, index=True)  # YYYY-MM
    kind = Column(String, nullable=False)  # Store enum value as string
    amount = Column(Float, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    employee = relationship("Employee", back_populates="adjustments")
