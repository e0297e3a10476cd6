"""
Payroll Repository

Persistence client for payroll runs. One instance wraps one session and is
built per request (see ``get_payroll_repository``); nothing is kept at
module level.
"""
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from fastapi import Depends
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from hr_payroll.database import get_db
from hr_payroll.models.adjustment import Adjustment
from hr_payroll.models.attendance import Attendance
from hr_payroll.models.employee import Employee, EmployeeStatus
from hr_payroll.models.payroll import PayrollRecord
from hr_payroll.schemas.payroll import PayrollResult
from hr_payroll.services.base import BaseService


class PayrollRepository(BaseService):

    def employees_for_month(self, month_start: date, month_end: date) -> List[Employee]:
        """Employees who may have worked during the month (coarse DB-side filter)."""
        return self.db.query(Employee).filter(
            or_(Employee.hire_date.is_(None), Employee.hire_date <= month_end),
            or_(
                Employee.status != EmployeeStatus.TERMINATED.value,
                Employee.termination_date.is_(None),
                Employee.termination_date >= month_start,
            ),
        ).order_by(Employee.id.asc()).all()

    def attendance_by_employee(self, employee_ids: Iterable[int], month: str) -> Dict[int, List[Attendance]]:
        grouped: Dict[int, List[Attendance]] = defaultdict(list)
        ids = list(employee_ids)
        if not ids:
            return grouped
        rows = self.db.query(Attendance).filter(
            Attendance.employee_id.in_(ids),
            Attendance.date.startswith(month),
        ).all()
        for row in rows:
            grouped[row.employee_id].append(row)
        return grouped

    def adjustments_by_employee(self, employee_ids: Iterable[int], month: str) -> Dict[int, List[Adjustment]]:
        grouped: Dict[int, List[Adjustment]] = defaultdict(list)
        ids = list(employee_ids)
        if not ids:
            return grouped
        rows = self.db.query(Adjustment).filter(
            Adjustment.employee_id.in_(ids),
            Adjustment.month == month,
        ).all()
        for row in rows:
            grouped[row.employee_id].append(row)
        return grouped

    def upsert_results(
        self,
        month: str,
        results: List[PayrollResult],
        preserve_employee_ids: Iterable[int] = (),
    ) -> List[PayrollRecord]:
        """
        Replace the month's payroll rows with ``results`` in one transaction,
        updating in place on (employee_id, month). Other rows of the month
        are deleted, except those of ``preserve_employee_ids``. Either
        everything is saved or nothing is.
        """
        result_ids = [r.employee_id for r in results]
        kept_ids = set(result_ids) | set(preserve_employee_ids)

        stale = self.db.query(PayrollRecord).filter(PayrollRecord.month == month)
        if kept_ids:
            stale = stale.filter(PayrollRecord.employee_id.not_in(kept_ids))
        removed = stale.delete(synchronize_session=False)

        existing = {}
        if result_ids:
            existing = {
                record.employee_id: record
                for record in self.db.query(PayrollRecord).filter(
                    PayrollRecord.month == month,
                    PayrollRecord.employee_id.in_(result_ids),
                ).all()
            }

        saved: List[PayrollRecord] = []
        for result in results:
            values = result.to_record_values()
            record = existing.get(result.employee_id)
            if record is None:
                record = PayrollRecord(**values)
                self.db.add(record)
            else:
                for field, value in values.items():
                    setattr(record, field, value)
            saved.append(record)

        self.commit()
        self.log_info(f"Upserted {len(saved)} payroll records for {month}, removed {removed} stale")
        return saved

    def list_records(
        self,
        employee_id: Optional[int] = None,
        month: Optional[str] = None,
    ) -> List[Tuple[PayrollRecord, Employee]]:
        query = self.db.query(PayrollRecord).options(joinedload(PayrollRecord.employee))
        if employee_id:
            query = query.filter(PayrollRecord.employee_id == employee_id)
        if month:
            query = query.filter(PayrollRecord.month == month)
        records = query.order_by(PayrollRecord.month.desc(), PayrollRecord.employee_id.asc()).all()
        return [(record, record.employee) for record in records]


def get_payroll_repository(db: Session = Depends(get_db)) -> PayrollRepository:
    """FastAPI dependency: a repository bound to the request's session."""
    return PayrollRepository(db)
