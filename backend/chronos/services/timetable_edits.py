from __future__ import annotations

import logging

from chronos.core.exceptions import ResourceNotFoundError, SchedulerError
from chronos.schemas.snapshot import MAX_TOTAL_SLOTS, EntryType, Snapshot, TimetableEntry, normalize_day
from chronos.schemas.substitution import ManualAssignmentCandidate
from chronos.services.lookup import build_index

logger = logging.getLogger(__name__)


def _require_entry(entries: list[TimetableEntry], entry_id: str) -> None:
    if not any(entry.id == entry_id for entry in entries):
        raise ResourceNotFoundError("Timetable entry", entry_id)


def toggle_lock(entries: list[TimetableEntry], entry_id: str) -> list[TimetableEntry]:
    _require_entry(entries, entry_id)
    return [
        entry.model_copy(update={"is_locked": not entry.is_locked}) if entry.id == entry_id else entry
        for entry in entries
    ]


def remove_entry(entries: list[TimetableEntry], entry_id: str) -> list[TimetableEntry]:
    _require_entry(entries, entry_id)
    return [entry for entry in entries if entry.id != entry_id]


def assign_cell(
    entries: list[TimetableEntry],
    section_id: str,
    day: str,
    slot_index: int,
    *,
    entry_type: EntryType = "lecture",
    subject_id: str | None = None,
    faculty_id: str | None = None,
    title: str | None = None,
    entry_id: str | None = None,
) -> list[TimetableEntry]:
    """Pin a manual entry into a master cell, replacing whatever is there."""
    if entry_type == "lecture":
        if not subject_id or not faculty_id:
            raise SchedulerError(
                "A lecture needs both a subject and a faculty member",
                details={"subject_id": subject_id, "faculty_id": faculty_id},
            )
        title = None
    else:
        if not title or not title.strip():
            raise SchedulerError(f"A {entry_type} entry needs a title")
        title = title.strip()
        subject_id = None

    day = normalize_day(day)
    new_entry = TimetableEntry(
        id=entry_id or f"manual-{section_id}-{day}-{slot_index}",
        section_id=section_id,
        day=day,
        slot_index=slot_index,
        faculty_id=faculty_id or None,
        subject_id=subject_id,
        is_locked=True,
        entry_type=entry_type,
        title=title,
    )
    kept = [
        entry
        for entry in entries
        if not (entry.section_id == section_id and entry.day == day and entry.slot_index == slot_index)
    ]
    return [*kept, new_entry]


def resize_grid(entries: list[TimetableEntry], total_slots: int, delta: int) -> tuple[int, list[TimetableEntry]]:
    new_total = min(MAX_TOTAL_SLOTS, max(1, total_slots + delta))
    kept = [entry for entry in entries if entry.slot_index < new_total]
    if len(kept) != len(entries):
        logger.info("Grid shrunk to %d slots; %d entries discarded", new_total, len(entries) - len(kept))
    return new_total, kept


def faculty_day_load(entries: list[TimetableEntry], faculty_id: str, day: str) -> int:
    return sum(1 for entry in entries if entry.faculty_id == faculty_id and entry.day == day)


def faculty_clash_label(
    entries: list[TimetableEntry],
    snapshot: Snapshot,
    faculty_id: str,
    day: str,
    slot_index: int,
) -> str | None:
    clash = next(
        (
            entry
            for entry in entries
            if entry.faculty_id == faculty_id and entry.day == day and entry.slot_index == slot_index
        ),
        None,
    )
    if clash is None:
        return None
    index = build_index(snapshot)
    if clash.section_id not in index.sections:
        return "Busy"
    return f"Busy: {index.section_label(clash.section_id)}"


def manual_assignment_candidates(
    entries: list[TimetableEntry],
    snapshot: Snapshot,
    day: str,
    slot_index: int,
    search: str = "",
) -> list[ManualAssignmentCandidate]:
    """Faculty for the manual-assign picker: free staff first, then lightest day load."""
    needle = search.strip().lower()
    candidates = [
        ManualAssignmentCandidate(
            faculty=member,
            clash=faculty_clash_label(entries, snapshot, member.id, day, slot_index),
            load=faculty_day_load(entries, member.id, day),
        )
        for member in snapshot.faculty
        if needle in member.name.lower()
    ]
    candidates.sort(key=lambda item: (item.clash is not None, item.load))
    return candidates
