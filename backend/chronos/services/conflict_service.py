from __future__ import annotations

from collections import defaultdict
import logging
from typing import Dict, List

from chronos.core.config import Settings, get_settings
from chronos.schemas.conflict import ConflictDetail, ConflictResult
from chronos.schemas.snapshot import DAYS, Snapshot, TimetableEntry
from chronos.services.lookup import build_index

logger = logging.getLogger(__name__)


class ConflictService:
    """Read-only scan of a master or daily grid for hard and advisory issues."""

    def __init__(
        self,
        entries: List[TimetableEntry],
        snapshot: Snapshot,
        *,
        date: str | None = None,
        settings: Settings | None = None,
    ):
        self.entries = entries
        self.snapshot = snapshot
        self.date = date
        self.settings = settings or get_settings()
        self.index = build_index(snapshot)

    def detect_conflicts(self) -> ConflictResult:
        details: List[ConflictDetail] = []
        details.extend(self._faculty_clashes())
        details.extend(self._mandatory_gaps())
        details.extend(self._daily_load_issues())

        result = ConflictResult(
            hard=[item.description for item in details if item.severity == "hard"],
            warnings=[item.description for item in details if item.severity == "soft"],
            details=details,
            date=self.date,
        )
        logger.info(
            "Conflict scan%s: %d hard, %d warning(s) over %d entries",
            f" for {self.date}" if self.date else "",
            len(result.hard),
            len(result.warnings),
            len(self.entries),
        )
        return result

    def _faculty_clashes(self) -> List[ConflictDetail]:
        # Bucket by cell first; dicts keep first-seen faculty order.
        sections_by_cell: Dict[tuple[str, int], Dict[str, List[str]]] = defaultdict(dict)
        for entry in self.entries:
            if not entry.faculty_id:
                continue
            section_ids = sections_by_cell[(entry.day, entry.slot_index)].setdefault(entry.faculty_id, [])
            if entry.section_id not in section_ids:
                section_ids.append(entry.section_id)

        conflicts: List[ConflictDetail] = []
        for day in DAYS:
            for slot_index in range(self.snapshot.total_slots):
                for faculty_id, section_ids in sections_by_cell.get((day, slot_index), {}).items():
                    if len(section_ids) < 2:
                        continue
                    labels = ", ".join(self.index.section_label(section_id) for section_id in section_ids)
                    conflicts.append(ConflictDetail(
                        conflict_type="faculty_clash",
                        description=(
                            f"{self.index.faculty_name(faculty_id)} CLASH on {day} P{slot_index + 1} in: {labels}"
                        ),
                        severity="hard",
                        day=day,
                        slot_index=slot_index,
                        faculty_id=faculty_id,
                        section_ids=list(section_ids),
                    ))
        return conflicts

    def _mandatory_gaps(self) -> List[ConflictDetail]:
        slots_by_section_day: Dict[tuple[str, str], set[int]] = defaultdict(set)
        last_teaching_slot: Dict[tuple[str, str], int] = {}
        for entry in self.entries:
            key = (entry.section_id, entry.day)
            slots_by_section_day[key].add(entry.slot_index)
            if entry.entry_type != "lunch":
                last_teaching_slot[key] = max(last_teaching_slot.get(key, -1), entry.slot_index)

        conflicts: List[ConflictDetail] = []
        for section in self.snapshot.sections:
            program = self.index.programs.get(section.program_id)
            lunch_slot = program.lunch_slot_index if program and program.lunch_enabled else None
            label = self.index.section_label(section.id)
            for day in DAYS:
                key = (section.id, day)
                for slot_index in range(self.settings.mandatory_periods):
                    if slot_index == lunch_slot:
                        continue
                    if slot_index in slots_by_section_day.get(key, ()):
                        continue
                    # A section with nothing after this period is not in session.
                    if last_teaching_slot.get(key, -1) <= slot_index:
                        continue
                    conflicts.append(ConflictDetail(
                        conflict_type="mandatory_gap",
                        description=f"{label}: Mandatory Morning P{slot_index + 1} is Empty",
                        severity="hard",
                        day=day,
                        slot_index=slot_index,
                        section_ids=[section.id],
                    ))
        return conflicts

    def _daily_load_issues(self) -> List[ConflictDetail]:
        entries_by_faculty_day: Dict[tuple[str, str], List[TimetableEntry]] = defaultdict(list)
        for entry in self.entries:
            if entry.faculty_id:
                entries_by_faculty_day[(entry.faculty_id, entry.day)].append(entry)

        limit = self.settings.daily_load_limit
        run = self.settings.max_consecutive_lectures
        conflicts: List[ConflictDetail] = []
        for day in DAYS:
            for member in self.snapshot.faculty:
                day_classes = sorted(
                    entries_by_faculty_day.get((member.id, day), []),
                    key=lambda entry: entry.slot_index,
                )
                if len(day_classes) > limit:
                    conflicts.append(ConflictDetail(
                        conflict_type="excessive_load",
                        description=f"{member.name}: Excessive load ({len(day_classes)}/{limit}) on {day}",
                        severity="soft",
                        day=day,
                        faculty_id=member.id,
                        section_ids=_distinct_sections(day_classes),
                    ))
                for start in range(len(day_classes) - run + 1):
                    window = day_classes[start:start + run]
                    if all(
                        later.slot_index == earlier.slot_index + 1
                        for earlier, later in zip(window, window[1:])
                    ):
                        conflicts.append(ConflictDetail(
                            conflict_type="consecutive_lectures",
                            description=f"{member.name}: {run} Consecutive Lectures on {day}",
                            severity="hard",
                            day=day,
                            slot_index=window[0].slot_index,
                            faculty_id=member.id,
                            section_ids=_distinct_sections(window),
                        ))
        return conflicts


def _distinct_sections(entries: List[TimetableEntry]) -> List[str]:
    seen: List[str] = []
    for entry in entries:
        if entry.section_id not in seen:
            seen.append(entry.section_id)
    return seen


def detect_all_conflicts(
    entries: List[TimetableEntry],
    snapshot: Snapshot,
    date: str | None = None,
    *,
    settings: Settings | None = None,
) -> ConflictResult:
    return ConflictService(entries, snapshot, date=date, settings=settings).detect_conflicts()
