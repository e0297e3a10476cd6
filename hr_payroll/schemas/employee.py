from pydantic import BaseModel, ConfigDict
from datetime import date, datetime
from typing import Optional

class EmployeeBase(BaseModel):
    employee_number: str
    name: str
    branch: str = ""
    department: str = ""
    position: str = ""
    salary: float
    work_hours: Optional[float] = None
    hire_date: Optional[date] = None
    status: str = "active"
    status_change_date: Optional[date] = None
    suspension_type: Optional[str] = None
    suspension_date: Optional[date] = None
    termination_date: Optional[date] = None

class EmployeeCreate(EmployeeBase):
    pass

class EmployeeUpdate(BaseModel):
    """Partial update: only fields present in the payload are applied."""
    employee_number: Optional[str] = None
    name: Optional[str] = None
    branch: Optional[str] = None
    department: Optional[str] = None
    position: Optional[str] = None
    salary: Optional[float] = None
    work_hours: Optional[float] = None
    hire_date: Optional[date] = None
    status: Optional[str] = None
    status_change_date: Optional[date] = None
    suspension_type: Optional[str] = None
    suspension_date: Optional[date] = None
    termination_date: Optional[date] = None

class EmployeeResponse(EmployeeBase):
    id: int
    work_hours: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class EmployeeSummary(BaseModel):
    id: int
    name: str
    employee_number: str

    model_config = ConfigDict(from_attributes=True)
