"""Pydantic v2 validation models for Fiscal Budget Tracker data structures.

Each model maps directly to a JSON structure exchanged with the storage
and sync collaborators, or to a derived view produced by the engine.
Strict validation ensures schema violations surface as errors at
ingestion time, not as silent data corruption downstream.

Models:
- Project -> one entry of the project collection (camelCase on the wire)
- FiscalYear -> the (start_year, end_year) October-September window
- FiscalMonth -> one of the 12 months of a fiscal year, with labels
- MonthlyBudgetSummary -> one column of the budget progress rows
- DayCell -> one day of a monthly calendar grid
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fiscal_tracker.engine.dates import format_date, to_date


# ── Enumerated sets ──

# Master list of work groups (organizational units owning a project)
PROJECT_GROUPS = (
    "ผู้อำนวยการศูนย์",
    "รองผู้อำนวยการศูนย์",
    "ผู้ช่วยผู้อำนวยการศูนย์",
    "กลุ่มอำนวยการ",
    "กลุ่มขับเคลื่อนยุทธศาสตร์",
    "กลุ่มอนามัยแม่และเด็ก",
    "กลุ่มอนามัยวัยเรียน",
    "กลุ่มอนามัยวัยรุ่นและเยาวชน",
    "กลุ่มอนามัยวัยทำงาน",
    "กลุ่มอนามัยผู้สูงอายุ",
    "กลุ่มอนามัยสิ่งแวดล้อม",
    "กลุ่มสุขาภิบาล",
    "กลุ่มประเมินผลกระทบต่อสุขภาพ",
    "โรงพยาบาลศูนย์",
    "กลุ่มพัฒนาทักษะสมองเด็กปฐมวัย : ศูนย์ EF",
    "กลุ่มสื่อสารประชาสัมพันธ์",
    "กลุ่มจัดการความรู้ วิจัย",
    "กลุ่ม Training Center",
    "สำนักงานเลขานุการ",
    "โครงการพระราชดำริฯ",
)

# Project lifecycle statuses, in workflow order
PROJECT_STATUSES = (
    "ยังไม่เริ่ม",            # not started
    "กำลังดำเนินการ",         # in progress
    "เสร็จสิ้น",              # completed
    "เสนอโครงการ",            # proposed
    "ขออนุมัติดำเนินกิจกรรม",  # awaiting activity approval
    "ยื่นยืมเงิน",             # advance requested
    "ยื่นบันทึกกับพัสดุ",       # filed with procurement
    "เบิกจ่ายแล้ว",            # disbursed
)

DEFAULT_STATUS = PROJECT_STATUSES[0]

# Display color tags: value -> (label, text color for contrast)
COLOR_OPTIONS = {
    "bg-blue-600": ("น้ำเงิน", "text-white"),
    "bg-green-600": ("เขียว", "text-white"),
    "bg-purple-600": ("ม่วง", "text-white"),
    "bg-orange-600": ("ส้ม", "text-white"),
    "bg-pink-600": ("ชมพู", "text-white"),
    "bg-red-600": ("แดง", "text-white"),
    "bg-yellow-500": ("เหลือง", "text-gray-900"),
    "bg-cyan-600": ("ฟ้า", "text-white"),
    "bg-gray-600": ("เทา", "text-white"),
    "bg-indigo-600": ("น้ำเงินเข้ม", "text-white"),
    "bg-emerald-600": ("เขียวมรกต", "text-white"),
    "bg-lime-600": ("เขียวมะนาว", "text-white"),
    "bg-violet-600": ("ม่วงอ่อน", "text-white"),
    "bg-rose-600": ("ชมพูบานเย็น", "text-white"),
    "bg-amber-700": ("น้ำตาล", "text-white"),
}

DEFAULT_COLOR = "bg-blue-600"


# ── Project ──

class Project(BaseModel):
    """A budgeted activity tracked on the fiscal-year timeline.

    Field names are snake_case in Python and camelCase on the wire
    (``startMonth``, ``meetingStartDate``, ``meetingEndDate``); both are
    accepted on input. Serialize with ``to_wire()``.

    The meeting range is optional. A dangling half-range (only one date
    set) is accepted so legacy rows still load, but ``meeting_range``
    reports it as absent.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier, stable for the project's lifetime",
        examples=["m2x9k1abc4def5gh"],
    )
    name: str = Field(..., description="Activity name")
    group: str = Field(
        default=PROJECT_GROUPS[0],
        description="Owning work group (one of PROJECT_GROUPS)",
    )
    budget: float = Field(
        default=0.0,
        ge=0.0,
        allow_inf_nan=False,
        description="Budget amount (finite, non-negative)",
        examples=[150000, 0],
    )
    start_month: int = Field(
        default=0,
        ge=0,
        le=11,
        alias="startMonth",
        description="Fiscal month index, 0 = October .. 11 = September",
    )
    color: str = Field(default=DEFAULT_COLOR, description="Display color tag")
    status: str = Field(default=DEFAULT_STATUS, description="Lifecycle status")
    meeting_start_date: Optional[str] = Field(
        default=None,
        alias="meetingStartDate",
        description="First meeting day, inclusive (YYYY-MM-DD)",
        examples=["2025-10-05"],
    )
    meeting_end_date: Optional[str] = Field(
        default=None,
        alias="meetingEndDate",
        description="Last meeting day, inclusive (YYYY-MM-DD)",
        examples=["2025-10-07"],
    )
    vehicle: Optional[str] = Field(default=None, description="Official vehicle and driver")
    chairman: Optional[str] = Field(default=None, description="Activity chairperson")

    @field_validator(
        "meeting_start_date", "meeting_end_date", "vehicle", "chairman", mode="before",
    )
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("meeting_start_date", "meeting_end_date")
    @classmethod
    def validate_date(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return format_date(to_date(v))

    @field_validator("group")
    @classmethod
    def validate_group(cls, v: str) -> str:
        if v not in PROJECT_GROUPS:
            raise ValueError(f"Invalid group '{v}'. Must be one of PROJECT_GROUPS")
        return v

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if v not in PROJECT_STATUSES:
            raise ValueError(
                f"Invalid status '{v}'. Must be one of: {list(PROJECT_STATUSES)}"
            )
        return v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        if v not in COLOR_OPTIONS:
            raise ValueError(
                f"Invalid color '{v}'. Must be one of: {sorted(COLOR_OPTIONS)}"
            )
        return v

    @model_validator(mode="after")
    def validate_meeting_order(self) -> Project:
        if self.meeting_start_date and self.meeting_end_date:
            if self.meeting_end_date < self.meeting_start_date:
                raise ValueError(
                    f"meetingEndDate {self.meeting_end_date} is before "
                    f"meetingStartDate {self.meeting_start_date}"
                )
        return self

    @property
    def meeting_range(self) -> Optional[tuple[dt.date, dt.date]]:
        """The inclusive meeting range, or None when either end is missing."""
        if not self.meeting_start_date or not self.meeting_end_date:
            return None
        return to_date(self.meeting_start_date), to_date(self.meeting_end_date)

    def to_wire(self) -> dict:
        """Serialize with camelCase keys, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ── Fiscal calendar values ──

class FiscalYear(BaseModel):
    """An October-September fiscal year as its two calendar years."""

    model_config = ConfigDict(frozen=True)

    start_year: int = Field(..., description="Calendar year of October-December", examples=[2025])
    end_year: int = Field(..., description="Calendar year of January-September", examples=[2026])

    @model_validator(mode="after")
    def validate_span(self) -> FiscalYear:
        if self.end_year != self.start_year + 1:
            raise ValueError(
                f"end_year ({self.end_year}) must equal start_year + 1 "
                f"({self.start_year + 1})"
            )
        return self

    @classmethod
    def starting(cls, start_year: int) -> FiscalYear:
        return cls(start_year=start_year, end_year=start_year + 1)


class FiscalMonth(BaseModel):
    """One month of a fiscal year with its calendar position and labels.

    ``calendar_month`` is 0-based (January = 0) to match the fiscal index
    arithmetic; ``month_number`` gives the 1-based value for ``datetime``.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, le=11, description="Fiscal month index, 0 = October")
    calendar_month: int = Field(..., ge=0, le=11, description="Calendar month, 0 = January")
    calendar_year: int = Field(..., description="Gregorian calendar year")
    label: str = Field(..., description="Localized full month name")
    short_label: str = Field(..., description="Localized abbreviated month name")
    year_suffix: str = Field(
        ...,
        description="Two-digit display year (Buddhist era for the th locale)",
        examples=["68", "25"],
    )

    @property
    def month_number(self) -> int:
        return self.calendar_month + 1


# ── Derived views ──

class MonthlyBudgetSummary(BaseModel):
    """Budget progress for one fiscal month."""

    index: int = Field(..., ge=0, le=11, description="Fiscal month index")
    monthly_budget: float = Field(..., description="Budget of projects starting this month")
    cumulative_budget: float = Field(..., description="Running total through this month")
    cumulative_target_percent: float = Field(
        ..., description="Expected cumulative spend (%) from the target curve",
    )
    cumulative_actual_percent: float = Field(
        ..., description="cumulative_budget as a percentage of the grand total (0 when total is 0)",
    )


class DayCell(BaseModel):
    """One day of a monthly calendar grid."""

    day: int = Field(..., ge=1, le=31)
    date: dt.date
    has_event: bool = False
    projects: list[Project] = Field(default_factory=list)
