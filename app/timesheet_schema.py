# app/timesheet_schema.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional, Tuple

SHIFTS_PER_DAY = 3
ACCOUNT_ROWS = 3

MONTH1_DAYS = list(range(16, 32))   # 16-31
MONTH2_DAYS = list(range(1, 16))    # 1-15

SCHOOLS = [
    "Mt. Pleasant",
    "ANDREW HILL",
    "YERBA BUENA",
    "W.C. Overfelt",
    "JAMES LICK",
]

ALPHA_CODES = [
    {"code": "A", "desc": "Sub - Personal Necessity 436-1150"},
    {"code": "B", "desc": "Sub - Illness 436-1151"},
    {"code": "C", "desc": "Sub - School Business 437-1152"},
    {"code": "D", "desc": "Sub - Vacant 437-1153"},
    {"code": "E", "desc": "Home Teaching 194"},
    {"code": "F", "desc": "Home Teaching Handicapped 383"},
    {"code": "G", "desc": "Saturday School 176"},
    {"code": "H", "desc": "Summer Counselor"},
    {"code": "I", "desc": "Extra Class 1113"},
    {"code": "J", "desc": "Summer School 187-1110"},
    {"code": "K", "desc": "Admin Supervision 1119"},
]

EMPLOYEE_TYPES = ["Classified", "Certificated"]


class FormModel(BaseModel):
    # camelCase on the wire, snake_case in Python; snapshots are immutable
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def field_name(model_cls, name: str) -> str:
    """Accept either the Python name or the camelCase wire alias."""
    if name in model_cls.model_fields:
        return name
    for key, info in model_cls.model_fields.items():
        if info.alias == name:
            return key
    raise KeyError(f"Unknown field: {name}")


class Shift(FormModel):
    clock_in: str = ""
    clock_out: str = ""
    code: str = Field("", max_length=2)
    duration: str = ""

    @field_validator("code")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.upper()


class DayEntry(FormModel):
    day: int = Field(..., ge=1, le=31)
    shifts: Tuple[Shift, ...] = Field((), validate_default=True)
    daily_total: str = ""

    @field_validator("shifts")
    @classmethod
    def pad_shifts(cls, v):
        if len(v) > SHIFTS_PER_DAY:
            raise ValueError(f"at most {SHIFTS_PER_DAY} shifts per day")
        return tuple(v) + tuple(Shift() for _ in range(SHIFTS_PER_DAY - len(v)))


class AccountCodeRow(FormModel):
    fund: str = ""
    location: str = ""
    program: str = ""
    goal: str = ""
    function: str = ""
    object: str = ""
    resource: str = ""
    year: str = ""
    manager: str = ""
    alpha: str = ""
    hours: str = ""
    pay_rate: str = ""
    total_pay: str = ""


class SignatureImage(FormModel):
    source: Literal["drawn", "uploaded"] = "drawn"
    format: Literal["png", "jpeg"]
    data: str = ""


class Submission(FormModel):
    # Employee
    employee_name: str = ""
    employee_id: str = ""
    fte: str = ""
    hours_per_week: str = ""
    position: str = ""
    school: str = SCHOOLS[0]
    email: str = ""
    employee_type: Literal["Classified", "Certificated"] = "Classified"
    month1: str = ""
    month2: str = ""
    year: str = ""

    # Grids
    timesheet: Tuple[DayEntry, ...] = ()
    account_codes: Tuple[AccountCodeRow, ...] = Field((), validate_default=True)
    grand_total: str = ""

    # Alpha code legend
    alpha_l: str = ""
    alpha_m: str = ""
    alpha_n: str = ""

    # Approvals
    signature: Optional[SignatureImage] = None
    date_employee: str = ""
    date_principal: str = ""
    date_manager: str = ""

    @field_validator("timesheet")
    @classmethod
    def unique_days(cls, v):
        days = [d.day for d in v]
        if len(days) != len(set(days)):
            raise ValueError("day numbers must be unique")
        return tuple(sorted(v, key=lambda d: d.day))

    @field_validator("account_codes")
    @classmethod
    def pad_account_codes(cls, v):
        if len(v) > ACCOUNT_ROWS:
            raise ValueError(f"exactly {ACCOUNT_ROWS} account code rows are allowed")
        return tuple(v) + tuple(AccountCodeRow() for _ in range(ACCOUNT_ROWS - len(v)))

    def day_entry(self, day: int) -> DayEntry:
        """Return the entry for `day`, or a blank one if the day was never filled."""
        for entry in self.timesheet:
            if entry.day == day:
                return entry
        return DayEntry(day=day)


class SubmitResult(FormModel):
    success: bool
    file_id: Optional[str] = None
    error: Optional[str] = None


class OptionsResponse(FormModel):
    schools: List[str]
    alpha_codes: List[dict]
    employee_types: List[str]
    month1_days: List[int]
    month2_days: List[int]
