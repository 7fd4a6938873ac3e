"""Date-scoped working copies of the master grid and the edits made on them.

Nothing here writes back to the master grid; every helper returns new lists.
"""

from __future__ import annotations

from datetime import date as Date
import logging

from chronos.core.exceptions import SchedulerError
from chronos.schemas.snapshot import (
    DAYS,
    AttendanceStatus,
    DailyAvailability,
    EntryType,
    Snapshot,
    TimetableEntry,
    normalize_day,
    validate_iso_date,
)

logger = logging.getLogger(__name__)


def weekday_for_date(value: str | Date) -> str:
    """Weekday of an ISO date; weekend dates fall back to Monday."""
    parsed = value if isinstance(value, Date) else Date.fromisoformat(validate_iso_date(value))
    weekday = parsed.weekday()
    return DAYS[weekday] if weekday < len(DAYS) else DAYS[0]


def clone_master_to_daily(date: str, day: str, snapshot: Snapshot) -> list[TimetableEntry]:
    day = normalize_day(day)
    cloned = [
        entry.model_copy(update={
            "id": f"daily-{date}-{entry.id}",
            "original_faculty_id": entry.faculty_id,
        })
        for entry in snapshot.master_timetable
        if entry.day == day
    ]
    logger.info("Cloned %d master entries for %s (%s)", len(cloned), date, day)
    return cloned


def _upsert_availability(
    availability: list[DailyAvailability],
    faculty_id: str,
    date: str,
    **changes,
) -> list[DailyAvailability]:
    updated: list[DailyAvailability] = []
    found = False
    for record in availability:
        if not found and record.faculty_id == faculty_id and record.date == date:
            updated.append(record.model_copy(update=changes))
            found = True
        else:
            updated.append(record)
    if not found:
        updated.append(DailyAvailability(faculty_id=faculty_id, date=date, **changes))
    return updated


def set_faculty_status(
    availability: list[DailyAvailability],
    schedule: list[TimetableEntry],
    faculty_id: str,
    date: str,
    status: AttendanceStatus,
) -> tuple[list[DailyAvailability], list[TimetableEntry]]:
    updated_availability = _upsert_availability(availability, faculty_id, date, status=status)
    updated_schedule = list(schedule)
    if status == "Absent":
        updated_schedule = [entry for entry in schedule if entry.faculty_id != faculty_id]
        logger.info(
            "Faculty %s absent on %s; %d daily entries vacated",
            faculty_id,
            date,
            len(schedule) - len(updated_schedule),
        )
    return updated_availability, updated_schedule


def toggle_slot_unavailability(
    availability: list[DailyAvailability],
    schedule: list[TimetableEntry],
    faculty_id: str,
    date: str,
    slot_index: int,
) -> tuple[list[DailyAvailability], list[TimetableEntry]]:
    current = next(
        (record for record in availability if record.faculty_id == faculty_id and record.date == date),
        None,
    )
    slots = list(current.unavailable_slots) if current else []
    if slot_index in slots:
        slots = [slot for slot in slots if slot != slot_index]
    else:
        slots.append(slot_index)

    updated_availability = _upsert_availability(availability, faculty_id, date, unavailable_slots=slots)
    updated_schedule = list(schedule)
    if slot_index in slots:
        updated_schedule = [
            entry
            for entry in schedule
            if not (entry.faculty_id == faculty_id and entry.slot_index == slot_index)
        ]
    return updated_availability, updated_schedule


def _subject_for_faculty(snapshot: Snapshot, faculty_id: str, section_id: str) -> str | None:
    fallback = None
    for assignment in snapshot.assignments:
        if assignment.faculty_id != faculty_id:
            continue
        if assignment.section_id == section_id:
            return assignment.subject_id
        if fallback is None:
            fallback = assignment.subject_id
    return fallback


def place_daily_entry(
    schedule: list[TimetableEntry],
    snapshot: Snapshot,
    *,
    date: str,
    section_id: str,
    slot_index: int,
    entry_type: EntryType,
    faculty_id: str | None = None,
    title: str | None = None,
    day: str | None = None,
) -> list[TimetableEntry]:
    """Replace one cell of the daily copy with a substitution, workshop, lunch or event."""
    if slot_index >= snapshot.total_slots:
        raise SchedulerError(
            f"Period P{slot_index + 1} is outside the {snapshot.total_slots}-slot grid",
            details={"slot_index": slot_index},
        )
    if entry_type in ("lecture", "substitution") and not faculty_id:
        raise SchedulerError(f"A {entry_type} entry needs a faculty member")

    replaced = next(
        (entry for entry in schedule if entry.section_id == section_id and entry.slot_index == slot_index),
        None,
    )
    new_entry = TimetableEntry(
        id=f"daily-manual-{date}-{section_id}-{slot_index}",
        section_id=section_id,
        day=day or weekday_for_date(date),
        slot_index=slot_index,
        faculty_id=faculty_id,
        original_faculty_id=(replaced.original_faculty_id or replaced.faculty_id) if replaced else None,
        subject_id=_subject_for_faculty(snapshot, faculty_id, section_id) if faculty_id else None,
        is_locked=False,
        entry_type=entry_type,
        title=title,
    )
    kept = [
        entry
        for entry in schedule
        if not (entry.section_id == section_id and entry.slot_index == slot_index)
    ]
    return [*kept, new_entry]
