from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

class AdjustmentCreate(BaseModel):
    employee_id: int
    month: str
    kind: str  # deduction | bonus | advance
    amount: float
    description: Optional[str] = None

class AdjustmentUpdate(BaseModel):
    month: Optional[str] = None
    kind: Optional[str] = None
    amount: Optional[float] = None
    description: Optional[str] = None

class AdjustmentResponse(BaseModel):
    id: int
    employee_id: int
    month: str
    kind: str
    amount: float
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
