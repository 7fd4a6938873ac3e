"""Greedy two-pass slot allocation for the weekly master grid.

The allocator works on its own grid and occupancy tables built fresh from the
snapshot on every call:

1. lunch cells are pinned for every section whose program enables lunch,
2. locked entries from the previous master grid are carried over,
3. the mandatory pass fills the leading periods of each day, retrying with a
   forced fill (exhausted frequency, higher daily cap) when nothing qualifies,
4. the flexible pass fills remaining cells only when a candidate qualifies
   under the normal rules; everything else stays empty.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from itertools import count
import logging
from typing import Callable

from chronos.core.config import Settings, get_settings
from chronos.schemas.snapshot import DAYS, Snapshot, TimetableEntry
from chronos.services.grid import DAY_INDEX, FacultyOccupancy, TimetableGrid
from chronos.services.lookup import build_index

logger = logging.getLogger(__name__)

IdFactory = Callable[[str], str]


def monotonic_id_factory() -> IdFactory:
    counter = count(1)

    def next_id(prefix: str) -> str:
        return f"{prefix}-{next(counter):04d}"

    return next_id


@dataclass
class Candidate:
    assignment_id: str
    section_id: str
    subject_id: str
    faculty_id: str
    remaining_frequency: int
    total_scheduled: int


class SlotAllocator:
    def __init__(
        self,
        snapshot: Snapshot,
        *,
        settings: Settings | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        self.snapshot = snapshot
        self.settings = settings or get_settings()
        self.id_factory = id_factory
        self.total_slots = snapshot.total_slots
        self.index = build_index(snapshot)
        self._reset()

    def _reset(self) -> None:
        # Grid, occupancy, pool and default ids are per run.
        self.next_id = self.id_factory or monotonic_id_factory()
        self.grid = TimetableGrid([section.id for section in self.snapshot.sections], self.total_slots)
        self.occupancy = FacultyOccupancy(self.total_slots)
        self.candidates_by_section: dict[str, list[Candidate]] = defaultdict(list)

    def generate(self) -> list[TimetableEntry]:
        self._reset()
        self._prefill_lunch()
        self._prefill_locked_entries()
        self._build_candidate_pool()

        mandatory_slots = min(self.settings.mandatory_periods, self.total_slots)
        for slot_index in range(mandatory_slots):
            self._fill_slot(slot_index, prefix="auto-morn", allow_forced=True)
        for slot_index in range(self.total_slots):
            self._fill_slot(slot_index, prefix="auto-flex", allow_forced=False)

        entries = self.grid.entries()
        generated = sum(1 for entry in entries if not entry.is_locked)
        logger.info(
            "Generated %d lecture(s) across %d section(s); %d locked cell(s) preserved",
            generated,
            len(self.grid.section_ids),
            len(entries) - generated,
        )
        return entries

    def _prefill_lunch(self) -> None:
        for section_id in self.grid.section_ids:
            program = self.index.program_for_section(section_id)
            lunch_slot = program.lunch_slot(self.total_slots) if program else None
            if lunch_slot is None:
                continue
            section_index = self.grid.section_index(section_id)
            for day_index, day in enumerate(DAYS):
                self.grid.place(
                    section_index,
                    day_index,
                    lunch_slot,
                    TimetableEntry(
                        id=f"lunch-{section_id}-{day}",
                        section_id=section_id,
                        day=day,
                        slot_index=lunch_slot,
                        is_locked=True,
                        entry_type="lunch",
                        title="LUNCH",
                    ),
                )

    def _prefill_locked_entries(self) -> None:
        for entry in self.snapshot.master_timetable:
            if not entry.is_locked or entry.entry_type == "lunch":
                continue
            if entry.slot_index >= self.total_slots:
                logger.warning("Locked entry %s sits beyond slot %d; dropped", entry.id, self.total_slots)
                continue
            section_index = self.grid.section_index(entry.section_id)
            if section_index is None:
                logger.warning("Locked entry %s references unknown section %s", entry.id, entry.section_id)
                continue
            day_index = DAY_INDEX[entry.day]
            if not self.grid.is_empty(section_index, day_index, entry.slot_index):
                logger.warning(
                    "Locked entry %s skipped; %s P%d is already occupied",
                    entry.id,
                    entry.day,
                    entry.slot_index + 1,
                )
                continue
            self.grid.place(section_index, day_index, entry.slot_index, entry)
            if entry.faculty_id:
                self.occupancy.occupy(entry.faculty_id, day_index, entry.slot_index)

    def _build_candidate_pool(self) -> None:
        locked_counts: dict[tuple[str, str], int] = defaultdict(int)
        for entry in self.snapshot.master_timetable:
            if entry.is_locked and entry.subject_id:
                locked_counts[(entry.section_id, entry.subject_id)] += 1

        for assignment in self.snapshot.assignments:
            subject = self.index.subjects.get(assignment.subject_id)
            weekly_frequency = subject.weekly_frequency if subject else 0
            already_scheduled = locked_counts[(assignment.section_id, assignment.subject_id)]
            self.candidates_by_section[assignment.section_id].append(
                Candidate(
                    assignment_id=assignment.id,
                    section_id=assignment.section_id,
                    subject_id=assignment.subject_id,
                    faculty_id=assignment.faculty_id,
                    remaining_frequency=weekly_frequency - already_scheduled,
                    total_scheduled=already_scheduled,
                )
            )

    def _fill_slot(self, slot_index: int, *, prefix: str, allow_forced: bool) -> None:
        for day_index, day in enumerate(DAYS):
            for section_index, section_id in enumerate(self.grid.section_ids):
                if not self.grid.is_empty(section_index, day_index, slot_index):
                    continue
                match = self._find_best_candidate(
                    section_index,
                    section_id,
                    day_index,
                    slot_index,
                    force_fill=False,
                    load_limit=self.settings.daily_load_limit,
                )
                if match is None and allow_forced:
                    match = self._find_best_candidate(
                        section_index,
                        section_id,
                        day_index,
                        slot_index,
                        force_fill=True,
                        load_limit=self.settings.forced_daily_load_limit,
                    )
                    if match is not None:
                        logger.debug("Forced fill for section %s on %s P%d", section_id, day, slot_index + 1)
                if match is None:
                    logger.debug("No candidate for section %s on %s P%d", section_id, day, slot_index + 1)
                    continue
                self._place(match, section_index, day_index, slot_index, prefix)

    def _find_best_candidate(
        self,
        section_index: int,
        section_id: str,
        day_index: int,
        slot_index: int,
        *,
        force_fill: bool,
        load_limit: int,
    ) -> Candidate | None:
        # sorted() is stable: equal keys keep assignment order.
        ranked = sorted(
            self.candidates_by_section.get(section_id, ()),
            key=lambda candidate: (
                -candidate.remaining_frequency,
                self.occupancy.daily_load(candidate.faculty_id, day_index),
            ),
        )
        for candidate in ranked:
            if self.occupancy.is_busy(candidate.faculty_id, day_index, slot_index):
                continue
            if self.occupancy.daily_load(candidate.faculty_id, day_index) >= load_limit:
                continue
            run_length = self.occupancy.run_length_if_placed(candidate.faculty_id, day_index, slot_index)
            if run_length >= self.settings.max_consecutive_lectures:
                continue
            if self.grid.has_subject_on_day(section_index, day_index, candidate.subject_id):
                continue
            if not force_fill and candidate.remaining_frequency <= 0:
                continue
            return candidate
        return None

    def _place(self, candidate: Candidate, section_index: int, day_index: int, slot_index: int, prefix: str) -> None:
        entry = TimetableEntry(
            id=self.next_id(prefix),
            section_id=candidate.section_id,
            day=DAYS[day_index],
            slot_index=slot_index,
            faculty_id=candidate.faculty_id,
            subject_id=candidate.subject_id,
            is_locked=False,
            entry_type="lecture",
        )
        self.grid.place(section_index, day_index, slot_index, entry)
        self.occupancy.occupy(candidate.faculty_id, day_index, slot_index)
        candidate.remaining_frequency -= 1
        candidate.total_scheduled += 1


def generate_timetable(
    snapshot: Snapshot,
    *,
    settings: Settings | None = None,
    id_factory: IdFactory | None = None,
) -> list[TimetableEntry]:
    return SlotAllocator(snapshot, settings=settings, id_factory=id_factory).generate()
