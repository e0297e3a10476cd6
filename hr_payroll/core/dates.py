"""
Calendar helpers shared by the payroll engine and the CRUD services.

Month keys are always ``YYYY-MM`` strings; day values are ``datetime.date``.
"""
import calendar
import re
from datetime import date
from typing import Tuple

from hr_payroll.core.exceptions import ValidationError

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_month_key(month: str) -> Tuple[date, date]:
    """Return the first and last calendar day of a ``YYYY-MM`` month key."""
    match = _MONTH_KEY_RE.match(month or "")
    if not match:
        raise ValidationError(f"صيغة الشهر غير صحيحة: {month!r} (المطلوب YYYY-MM)")
    year, month_num = int(match.group(1)), int(match.group(2))
    if not 1 <= month_num <= 12:
        raise ValidationError(f"رقم الشهر غير صحيح: {month!r}")
    last_day = calendar.monthrange(year, month_num)[1]
    return date(year, month_num, 1), date(year, month_num, last_day)


def month_key_of(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days from start to end, both ends counted."""
    return (end - start).days + 1
