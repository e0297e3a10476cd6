"""
Seed demo employees, attendance and adjustments into the configured database.

Usage: python -m scripts.seed_sample_data
"""
from datetime import date

from hr_payroll.database import SessionLocal, init_db
from hr_payroll.models.adjustment import Adjustment
from hr_payroll.models.attendance import Attendance
from hr_payroll.models.employee import Employee

SAMPLE_EMPLOYEES = [
    {
        "employee_number": "EMP001",
        "name": "أحمد محمد علي",
        "branch": "الفرع الرئيسي",
        "department": "المبيعات",
        "position": "مندوب مبيعات",
        "salary": 500000,
        "work_hours": 8,
        "hire_date": date(2024, 1, 1),
    },
    {
        "employee_number": "EMP002",
        "name": "فاطمة أحمد حسن",
        "branch": "الفرع الرئيسي",
        "department": "الإدارة",
        "position": "مدير مبيعات",
        "salary": 750000,
        "work_hours": 8,
        "hire_date": date(2023, 6, 1),
    },
    {
        "employee_number": "EMP003",
        "name": "علي حسين كاظم",
        "branch": "الفرع الثاني",
        "department": "المحاسبة",
        "position": "محاسب",
        "salary": 600000,
        "work_hours": 8,
        "hire_date": date(2023, 9, 15),
    },
]


def seed():
    init_db()
    db = SessionLocal()
    try:
        existing = db.query(Employee).count()
        if existing:
            print(f"Database already has {existing} employees. Skipping.")
            return

        employees = []
        for values in SAMPLE_EMPLOYEES:
            employee = Employee(status="active", status_change_date=values["hire_date"], **values)
            db.add(employee)
            employees.append(employee)
        db.flush()

        first, second, _ = employees
        db.add_all([
            Attendance(employee_id=first.id, date="2024-06-03", status="absent", absence_reason="without_notice"),
            Attendance(employee_id=first.id, date="2024-06-04", status="present", overtime_hours=2),
            Attendance(employee_id=second.id, date="2024-06-05", status="leave"),
            Adjustment(employee_id=first.id, month="2024-06", kind="advance", amount=50000, description="سلفة"),
            Adjustment(employee_id=second.id, month="2024-06", kind="bonus", amount=25000, description="مكافأة"),
        ])
        db.commit()
        for employee in employees:
            print(f"Created {employee.employee_number} -> {employee.name}")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed()
