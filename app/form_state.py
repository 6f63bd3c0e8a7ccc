# app/form_state.py
"""
Edit operations on a timesheet snapshot.

Each edit takes a `Submission` and returns a new one with every derived
field that depends on the edit brought up to date. Nothing is mutated in
place.
"""
from typing import Optional

from app.calculator import (
    auto_populate_first_row_hours,
    recompute_account_row_total,
    recompute_daily_total,
    recompute_grand_total,
    recompute_shift_duration,
)
from app.signature import ImageDecodeError, decode_signature, is_blank, strip_data_uri
from app.timesheet_schema import (
    ACCOUNT_ROWS,
    SHIFTS_PER_DAY,
    AccountCodeRow,
    SignatureImage,
    Submission,
    field_name,
)

SHIFT_TIME_FIELDS = {"clockIn": "clock_in", "clockOut": "clock_out", "clock_in": "clock_in", "clock_out": "clock_out"}

# Derived or structural fields cannot be set through edit_employee_field
_PROTECTED_FIELDS = {"timesheet", "account_codes", "grand_total", "signature"}


class SignatureRequiredError(Exception):
    """Raised when a submission is sent without a signature image."""
    pass


def _check_shift_index(shift_index: int):
    if not 0 <= shift_index < SHIFTS_PER_DAY:
        raise IndexError(f"shift_index must be between 0 and {SHIFTS_PER_DAY - 1}")


# ---------------- DAY GRID EDITS ----------------
def edit_shift_time(
    submission: Submission,
    day: int,
    shift_index: int,
    field: str,
    value: str,
    auto_populate: bool = True,
) -> Submission:
    if field not in SHIFT_TIME_FIELDS:
        raise KeyError(f"Unknown shift time field: {field}")
    _check_shift_index(shift_index)

    entry = submission.day_entry(day)
    shifts = list(entry.shifts)
    shifts[shift_index] = shifts[shift_index].model_copy(update={SHIFT_TIME_FIELDS[field]: value})
    days = [e for e in submission.timesheet if e.day != day]
    days.append(entry.model_copy(update={"shifts": tuple(shifts)}))

    days = recompute_shift_duration(days, day, shift_index)
    days = recompute_daily_total(days, day)

    rows = submission.account_codes
    if auto_populate:
        rows = auto_populate_first_row_hours(days, rows)

    return submission.model_copy(update={
        "timesheet": days,
        "account_codes": rows,
        "grand_total": recompute_grand_total(rows),
    })


def edit_shift_code(submission: Submission, day: int, shift_index: int, value: str) -> Submission:
    _check_shift_index(shift_index)
    code = (value or "")[:2].upper()

    entry = submission.day_entry(day)
    shifts = list(entry.shifts)
    shifts[shift_index] = shifts[shift_index].model_copy(update={"code": code})
    days = [e for e in submission.timesheet if e.day != day]
    days.append(entry.model_copy(update={"shifts": tuple(shifts)}))

    return submission.model_copy(update={"timesheet": tuple(sorted(days, key=lambda e: e.day))})


# ---------------- ACCOUNT CODE EDITS ----------------
def edit_account_row(submission: Submission, index: int, field: str, value: str) -> Submission:
    if not 0 <= index < ACCOUNT_ROWS:
        raise IndexError(f"account row index must be between 0 and {ACCOUNT_ROWS - 1}")
    name = field_name(AccountCodeRow, field)
    if name == "total_pay":
        raise KeyError("totalPay is computed from hours and payRate")

    rows = list(submission.account_codes)
    rows[index] = recompute_account_row_total(rows[index], name, value)

    return submission.model_copy(update={
        "account_codes": tuple(rows),
        "grand_total": recompute_grand_total(rows),
    })


# ---------------- HEADER / FOOTER EDITS ----------------
def edit_employee_field(submission: Submission, field: str, value: str) -> Submission:
    name = field_name(Submission, field)
    if name in _PROTECTED_FIELDS:
        raise KeyError(f"{field} cannot be edited directly")
    # Re-validate so Literal fields (employeeType) stay within their choices
    data = submission.model_dump()
    data[name] = value
    return Submission.model_validate(data)


# ---------------- SIGNATURE ----------------
def attach_signature(submission: Submission, signature: SignatureImage) -> Submission:
    """Attach a drawn or uploaded signature; replaces whichever was there."""
    return submission.model_copy(update={"signature": signature})


def clear_signature(submission: Submission) -> Submission:
    return submission.model_copy(update={"signature": None})


def is_signed(submission: Submission) -> bool:
    """
    True when the snapshot carries a signature with actual content.

    A bare data-URI prefix counts as unsigned, and so does a drawn pad with
    no ink on it. Bytes that cannot be decoded still count as signed so the
    server can report the bad image instead.
    """
    sig: Optional[SignatureImage] = submission.signature
    if sig is None or not strip_data_uri(sig.data):
        return False
    if sig.source != "drawn":
        return True
    try:
        return not is_blank(decode_signature(sig))
    except ImageDecodeError:
        return True


def ensure_signed(submission: Submission) -> Submission:
    if not is_signed(submission):
        raise SignatureRequiredError("Please sign the timesheet.")
    return submission
