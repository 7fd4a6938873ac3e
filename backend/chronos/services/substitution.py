from __future__ import annotations

import logging

from chronos.core.config import Settings, get_settings
from chronos.schemas.snapshot import DailyAvailability, Snapshot, TimetableEntry
from chronos.schemas.substitution import RankedFaculty, SlotRef
from chronos.services.lookup import build_index

logger = logging.getLogger(__name__)


def _availability_by_faculty(
    availability: list[DailyAvailability],
    date: str | None,
) -> dict[str, DailyAvailability]:
    records: dict[str, DailyAvailability] = {}
    for record in availability:
        if date is not None and record.date != date:
            continue
        records.setdefault(record.faculty_id, record)
    return records


def rank_substitutes(
    target: SlotRef,
    availability: list[DailyAvailability],
    daily_schedule: list[TimetableEntry],
    snapshot: Snapshot,
    *,
    settings: Settings | None = None,
) -> list[RankedFaculty]:
    """Order every faculty member from best to worst cover for a vacant cell.

    Absent staff and staff already teaching at the target slot score 0. Everyone
    else starts from the base rank, loses points per lecture already taught that
    day, and gains a bonus when they hold a standing assignment to the section.
    The result is advisory; nothing is assigned here.
    """
    settings = settings or get_settings()
    index = build_index(snapshot)
    records = _availability_by_faculty(availability, target.date)

    schedule_by_faculty: dict[str, list[TimetableEntry]] = {}
    for entry in daily_schedule:
        if entry.faculty_id:
            schedule_by_faculty.setdefault(entry.faculty_id, []).append(entry)

    familiar_faculty = {
        assignment.faculty_id
        for assignment in snapshot.assignments
        if assignment.section_id == target.section_id
    }

    ranked: list[RankedFaculty] = []
    for member in snapshot.faculty:
        record = records.get(member.id)
        is_absent = record is not None and (
            record.status == "Absent" or target.slot_index in record.unavailable_slots
        )
        schedule = schedule_by_faculty.get(member.id, [])
        teaching_entry = next((entry for entry in schedule if entry.slot_index == target.slot_index), None)
        is_teaching = teaching_entry is not None
        load = len(schedule)

        if is_absent or is_teaching:
            rank = 0
        else:
            rank = settings.substitute_base_rank - load * settings.substitute_load_penalty
            if member.id in familiar_faculty:
                rank += settings.substitute_section_bonus

        busy_reason = None
        if is_absent:
            busy_reason = "Absent"
        elif teaching_entry is not None:
            busy_reason = f"Teaching: {index.section_label(teaching_entry.section_id)}"

        ranked.append(RankedFaculty(
            faculty=member,
            rank=rank,
            is_absent=is_absent,
            is_teaching=is_teaching,
            busy_reason=busy_reason,
            load=load,
            schedule=schedule,
        ))

    ranked.sort(key=lambda item: item.rank, reverse=True)
    logger.debug(
        "Ranked %d substitute(s) for section %s P%d",
        len(ranked),
        target.section_id,
        target.slot_index + 1,
    )
    return ranked
