from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator

DAYS: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
)

DAY_SHORT_MAP = {
    "Mon": "Monday",
    "Tue": "Tuesday",
    "Wed": "Wednesday",
    "Thu": "Thursday",
    "Fri": "Friday",
}

MAX_TOTAL_SLOTS = 24

Day = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
EntryType = Literal["lecture", "lunch", "workshop", "event", "substitution"]
AttendanceStatus = Literal["Present", "Absent"]


def normalize_day(value: str) -> str:
    day = value.strip()
    return DAY_SHORT_MAP.get(day, day)


def validate_iso_date(value: str) -> str:
    trimmed = value.strip()
    try:
        date.fromisoformat(trimmed)
    except ValueError as exc:
        raise ValueError("Date must be in YYYY-MM-DD format") from exc
    return trimmed


class SnapshotModel(BaseModel):
    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }


class Program(SnapshotModel):
    """A semester cohort; owns sections and the lunch configuration they share."""

    id: str = Field(min_length=1)
    name: str
    lunch_enabled: bool = Field(default=False, alias="lunchEnabled")
    lunch_slot_index: int | None = Field(default=None, alias="lunchSlotIndex", ge=0)

    def lunch_slot(self, total_slots: int) -> int | None:
        if not self.lunch_enabled or self.lunch_slot_index is None:
            return None
        if self.lunch_slot_index >= total_slots:
            return None
        return self.lunch_slot_index


class Section(SnapshotModel):
    id: str = Field(min_length=1)
    name: str
    program_id: str = Field(
        validation_alias=AliasChoices("program_id", "programId", "semesterId"),
        serialization_alias="semesterId",
    )


class Subject(SnapshotModel):
    id: str = Field(min_length=1)
    name: str
    code: str = ""
    weekly_frequency: int = Field(default=0, alias="weeklyFrequency", ge=0)


class Faculty(SnapshotModel):
    id: str = Field(min_length=1)
    name: str
    department: str = ""
    subjects: list[str] = Field(default_factory=list)
    status: AttendanceStatus = "Present"
    workload_limit: int = Field(default=0, alias="workloadLimit", ge=0)


class Assignment(SnapshotModel):
    id: str = Field(min_length=1)
    section_id: str = Field(alias="sectionId")
    subject_id: str = Field(alias="subjectId")
    faculty_id: str = Field(alias="facultyId")


class TimetableEntry(SnapshotModel):
    id: str = Field(min_length=1)
    section_id: str = Field(alias="sectionId")
    day: Day
    slot_index: int = Field(alias="slotIndex", ge=0)
    faculty_id: str | None = Field(default=None, alias="facultyId")
    original_faculty_id: str | None = Field(default=None, alias="originalFacultyId")
    subject_id: str | None = Field(default=None, alias="subjectId")
    is_locked: bool = Field(default=False, alias="isLocked")
    entry_type: EntryType = Field(default="lecture", alias="entryType")
    title: str | None = None

    @field_validator("day", mode="before")
    @classmethod
    def validate_day(cls, value: str) -> str:
        if isinstance(value, str):
            return normalize_day(value)
        return value

    @property
    def cell(self) -> tuple[str, str, int]:
        return self.section_id, self.day, self.slot_index


class DailyAvailability(SnapshotModel):
    faculty_id: str = Field(alias="facultyId")
    date: str
    status: AttendanceStatus = "Present"
    unavailable_slots: list[int] = Field(default_factory=list, alias="unavailableSlots")

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        return validate_iso_date(value)


class GridConfig(SnapshotModel):
    total_slots: int = Field(default=8, alias="totalSlots", ge=1, le=MAX_TOTAL_SLOTS)


class Snapshot(SnapshotModel):
    """Read-only institutional data handed to the engine for a single call."""

    programs: list[Program] = Field(
        default_factory=list,
        validation_alias=AliasChoices("programs", "semesters"),
    )
    sections: list[Section] = Field(default_factory=list)
    subjects: list[Subject] = Field(default_factory=list)
    faculty: list[Faculty] = Field(default_factory=list)
    assignments: list[Assignment] = Field(default_factory=list)
    master_timetable: list[TimetableEntry] = Field(default_factory=list, alias="masterTimetable")
    config: GridConfig = Field(default_factory=GridConfig)

    @property
    def total_slots(self) -> int:
        return self.config.total_slots
