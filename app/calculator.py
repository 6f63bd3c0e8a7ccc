# app/calculator.py
"""
Derived fields of the timesheet form.

Every function here is pure: it takes snapshot values and returns new ones.
Parse failures never raise; an unreadable clock time or number is treated
as absent.
"""
from decimal import Decimal, DecimalException, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence, Tuple

from app.timesheet_schema import AccountCodeRow, DayEntry, Submission, field_name

PAY_FIELDS = ("hours", "pay_rate")


# ---------------- PARSING HELPERS ----------------
def parse_clock(value: str) -> Optional[int]:
    """'HH:MM' (24h) -> minutes after midnight. Blank/invalid -> None."""
    s = (value or "").strip()
    if not s or ":" not in s:
        return None
    try:
        hh, mm = s.split(":")[:2]
        h, m = int(hh), int(mm)
    except ValueError:
        return None
    if not (0 <= h <= 23 and 0 <= m <= 59):
        return None
    return h * 60 + m


def parse_number(value) -> Optional[Decimal]:
    s = str(value if value is not None else "").strip()
    if not s:
        return None
    try:
        d = Decimal(s)
    except InvalidOperation:
        return None
    if not d.is_finite():
        return None
    return d


def shift_minutes(clock_in: str, clock_out: str) -> int:
    # Same-day only: out at or before in counts as nothing, never wraps
    start = parse_clock(clock_in)
    end = parse_clock(clock_out)
    if start is None or end is None:
        return 0
    return max(0, end - start)


def format_hours(minutes: int) -> str:
    if minutes <= 0:
        return ""
    return f"{minutes / 60:.2f}"


def format_money(amount: Decimal) -> str:
    # Amounts too large to hold two decimal places are treated as absent
    try:
        return str(amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    except DecimalException:
        return ""


# ---------------- DAY GRID ----------------
def _replace_day(day_entries: Sequence[DayEntry], updated: DayEntry) -> Tuple[DayEntry, ...]:
    out = [e for e in day_entries if e.day != updated.day]
    out.append(updated)
    return tuple(sorted(out, key=lambda e: e.day))


def _find_day(day_entries: Iterable[DayEntry], day: int) -> DayEntry:
    for entry in day_entries:
        if entry.day == day:
            return entry
    return DayEntry(day=day)


def recompute_shift_duration(day_entries: Sequence[DayEntry], day: int, shift_index: int) -> Tuple[DayEntry, ...]:
    entry = _find_day(day_entries, day)
    shifts = list(entry.shifts)
    shift = shifts[shift_index]
    duration = format_hours(shift_minutes(shift.clock_in, shift.clock_out))
    shifts[shift_index] = shift.model_copy(update={"duration": duration})
    return _replace_day(day_entries, entry.model_copy(update={"shifts": tuple(shifts)}))


def day_minutes(entry: DayEntry) -> int:
    # Summed from the raw clock times, not from the rounded shift strings
    return sum(shift_minutes(s.clock_in, s.clock_out) for s in entry.shifts)


def recompute_daily_total(day_entries: Sequence[DayEntry], day: int) -> Tuple[DayEntry, ...]:
    entry = _find_day(day_entries, day)
    total = format_hours(day_minutes(entry))
    return _replace_day(day_entries, entry.model_copy(update={"daily_total": total}))


def total_day_minutes(day_entries: Iterable[DayEntry]) -> int:
    return sum(day_minutes(e) for e in day_entries)


# ---------------- ACCOUNT CODES ----------------
def row_total_pay(hours, pay_rate) -> str:
    h = parse_number(hours)
    r = parse_number(pay_rate)
    if h is None or r is None:
        return ""
    try:
        product = h * r
    except DecimalException:
        return ""
    return format_money(product)


def recompute_account_row_total(row: AccountCodeRow, field: str, value: str) -> AccountCodeRow:
    """
    Apply an edit to one account-code row.

    `field` may be the Python name or the camelCase wire name; unknown
    fields raise KeyError. Editing `hours` or `pay_rate` recomputes
    `total_pay`; when either input is missing or non-numeric the total is
    cleared rather than left stale.
    """
    name = field_name(AccountCodeRow, field)
    updated = row.model_copy(update={name: value})
    if name in PAY_FIELDS:
        updated = updated.model_copy(
            update={"total_pay": row_total_pay(updated.hours, updated.pay_rate)}
        )
    return updated


def recompute_grand_total(account_rows: Iterable[AccountCodeRow]) -> str:
    total = Decimal("0")
    for row in account_rows:
        amount = parse_number(row.total_pay)
        if amount is None:
            continue
        try:
            total += amount
        except DecimalException:
            return ""
    if total <= 0:
        return ""
    return format_money(total)


def auto_populate_first_row_hours(
    day_entries: Sequence[DayEntry],
    account_rows: Sequence[AccountCodeRow],
) -> Tuple[AccountCodeRow, ...]:
    """
    Bind row 0's hours to the sum of all daily totals (both windows).

    Row 0's total pay is recomputed from its existing pay rate. The binding
    only flows grid -> account rows.
    """
    rows = list(account_rows)
    hours = format_hours(total_day_minutes(day_entries))
    rows[0] = recompute_account_row_total(rows[0], "hours", hours)
    return tuple(rows)


# ---------------- FULL SNAPSHOT ----------------
def recompute_all(submission: Submission, auto_populate: bool = True) -> Submission:
    days = tuple(submission.timesheet)
    for entry in submission.timesheet:
        for i in range(len(entry.shifts)):
            days = recompute_shift_duration(days, entry.day, i)
        days = recompute_daily_total(days, entry.day)

    rows = tuple(
        row.model_copy(update={"total_pay": row_total_pay(row.hours, row.pay_rate)})
        for row in submission.account_codes
    )
    if auto_populate:
        rows = auto_populate_first_row_hours(days, rows)

    return submission.model_copy(update={
        "timesheet": days,
        "account_codes": rows,
        "grand_total": recompute_grand_total(rows),
    })
