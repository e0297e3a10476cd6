from pydantic import BaseModel, ConfigDict, Field
from datetime import date, datetime
from typing import Optional

class AttendanceCreate(BaseModel):
    employee_id: int
    date: date
    # present | absent | leave | holiday, or legacy "absent_without_notice"
    status: Optional[str] = None
    absence_reason: Optional[str] = None
    overtime_hours: float = Field(default=0.0, ge=0)
    time_delay_minutes: int = Field(default=0, ge=0)
    non_time_delay_minutes: int = Field(default=0, ge=0)

class AttendanceUpdate(BaseModel):
    status: Optional[str] = None
    absence_reason: Optional[str] = None
    overtime_hours: Optional[float] = Field(default=None, ge=0)
    time_delay_minutes: Optional[int] = Field(default=None, ge=0)
    non_time_delay_minutes: Optional[int] = Field(default=None, ge=0)

class AttendanceBatchRequest(BaseModel):
    employee_id: int
    start_date: date
    end_date: date
    status: Optional[str] = None
    absence_reason: Optional[str] = None
    exclude_weekends: bool = False

class AttendanceBatchResult(BaseModel):
    success_count: int
    skip_count: int
    failed_count: int
    total_days: int

class AttendanceResponse(BaseModel):
    id: int
    employee_id: int
    date: str
    status: str
    absence_reason: Optional[str] = None
    overtime_hours: float
    time_delay_minutes: int
    non_time_delay_minutes: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
