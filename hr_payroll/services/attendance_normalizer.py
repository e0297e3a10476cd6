from typing import Optional, Tuple

from hr_payroll.core.exceptions import ValidationError
from hr_payroll.models.attendance import DayStatus, AbsenceReason

# Older clients send the reason folded into the status string
LEGACY_ABSENT_WITHOUT_NOTICE = "absent_without_notice"


def normalize_attendance_status(
    status: Optional[str],
    absence_reason: Optional[str] = None,
) -> Tuple[DayStatus, Optional[AbsenceReason]]:
    """
    Map every accepted wire form onto (day_status, absence_reason).

    A missing status means present. An absent day without an explicit
    ``without_notice`` reason is an absence with notice.
    """
    raw = (status or DayStatus.PRESENT.value).strip().lower()

    if raw == LEGACY_ABSENT_WITHOUT_NOTICE:
        return DayStatus.ABSENT, AbsenceReason.WITHOUT_NOTICE

    try:
        day_status = DayStatus(raw)
    except ValueError:
        raise ValidationError(f"حالة الدوام غير صحيحة: {status!r}")

    if day_status == DayStatus.ABSENT:
        if absence_reason == AbsenceReason.WITHOUT_NOTICE.value:
            return day_status, AbsenceReason.WITHOUT_NOTICE
        return day_status, AbsenceReason.WITH_NOTICE

    return day_status, None
