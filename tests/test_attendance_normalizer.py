import pytest

from hr_payroll.core.exceptions import ValidationError
from hr_payroll.models.attendance import AbsenceReason, DayStatus
from hr_payroll.services.attendance_normalizer import normalize_attendance_status


@pytest.mark.parametrize("status,reason,expected", [
    ("absent_without_notice", None, (DayStatus.ABSENT, AbsenceReason.WITHOUT_NOTICE)),
    ("absent", "without_notice", (DayStatus.ABSENT, AbsenceReason.WITHOUT_NOTICE)),
    ("absent", "with_notice", (DayStatus.ABSENT, AbsenceReason.WITH_NOTICE)),
    ("absent", None, (DayStatus.ABSENT, AbsenceReason.WITH_NOTICE)),
    ("leave", "without_notice", (DayStatus.LEAVE, None)),
    ("holiday", None, (DayStatus.HOLIDAY, None)),
    (None, None, (DayStatus.PRESENT, None)),
])
def test_wire_forms_map_to_canonical_pair(status, reason, expected):
    assert normalize_attendance_status(status, reason) == expected


def test_unknown_status_is_rejected():
    with pytest.raises(ValidationError):
        normalize_attendance_status("sick")
