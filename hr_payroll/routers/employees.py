"""
Employees Router

Employee directory endpoints. Business rules live in employee_service.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from hr_payroll.core.schemas import ApiResponse
from hr_payroll.database import get_db
from hr_payroll.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from hr_payroll.services import employee_service


router = APIRouter(
    prefix="/employees",
    tags=["employees"],
)


@router.get("", response_model=ApiResponse[List[EmployeeResponse]])
def list_employees(
    status: Optional[str] = None,
    include_terminated: bool = Query(False, alias="includeTerminated"),
    db: Session = Depends(get_db),
):
    employees = employee_service.list_employees(db, status=status, include_terminated=include_terminated)
    return ApiResponse.ok([EmployeeResponse.model_validate(e) for e in employees])


@router.post("", response_model=ApiResponse[EmployeeResponse])
def create_employee(payload: EmployeeCreate, db: Session = Depends(get_db)):
    employee = employee_service.create_employee(db, payload)
    return ApiResponse.ok(EmployeeResponse.model_validate(employee), message="تم إضافة الموظف بنجاح")


@router.get("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
def get_employee(employee_id: int, db: Session = Depends(get_db)):
    employee = employee_service.get_employee(db, employee_id)
    return ApiResponse.ok(EmployeeResponse.model_validate(employee))


@router.put("/{employee_id}", response_model=ApiResponse[EmployeeResponse])
def update_employee(employee_id: int, payload: EmployeeUpdate, db: Session = Depends(get_db)):
    employee = employee_service.update_employee(db, employee_id, payload)
    return ApiResponse.ok(EmployeeResponse.model_validate(employee), message="تم تحديث بيانات الموظف بنجاح")


@router.delete("/{employee_id}", response_model=ApiResponse[None])
def delete_employee(employee_id: int, db: Session = Depends(get_db)):
    employee_service.delete_employee(db, employee_id)
    return ApiResponse.ok(None, message="تم حذف الموظف بنجاح")
