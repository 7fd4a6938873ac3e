from __future__ import annotations

from collections import Counter

from chronos.schemas.snapshot import DAYS, TimetableEntry

DAY_INDEX = {day: index for index, day in enumerate(DAYS)}


class TimetableGrid:
    """Cells indexed by (section index, day index, slot index).

    A grid belongs to a single allocator run; it is never shared between calls.
    """

    def __init__(self, section_ids: list[str], total_slots: int) -> None:
        self.total_slots = total_slots
        self.section_ids: list[str] = []
        self._section_index: dict[str, int] = {}
        for section_id in section_ids:
            if section_id in self._section_index:
                continue
            self._section_index[section_id] = len(self.section_ids)
            self.section_ids.append(section_id)
        self._cells: list[list[list[TimetableEntry | None]]] = [
            [[None] * total_slots for _ in DAYS] for _ in self.section_ids
        ]

    def section_index(self, section_id: str) -> int | None:
        return self._section_index.get(section_id)

    def is_empty(self, section_index: int, day_index: int, slot_index: int) -> bool:
        return self._cells[section_index][day_index][slot_index] is None

    def place(self, section_index: int, day_index: int, slot_index: int, entry: TimetableEntry) -> None:
        self._cells[section_index][day_index][slot_index] = entry

    def has_subject_on_day(self, section_index: int, day_index: int, subject_id: str) -> bool:
        return any(
            entry is not None and entry.subject_id == subject_id
            for entry in self._cells[section_index][day_index]
        )

    def entries(self) -> list[TimetableEntry]:
        flattened: list[TimetableEntry] = []
        for section_cells in self._cells:
            for day_cells in section_cells:
                flattened.extend(entry for entry in day_cells if entry is not None)
        return flattened


class FacultyOccupancy:
    """Which faculty teach in each (day, slot), and how many sessions per day."""

    def __init__(self, total_slots: int) -> None:
        self.total_slots = total_slots
        self._busy: list[list[set[str]]] = [[set() for _ in range(total_slots)] for _ in DAYS]
        self._daily_load: list[Counter[str]] = [Counter() for _ in DAYS]

    def occupy(self, faculty_id: str, day_index: int, slot_index: int) -> None:
        self._busy[day_index][slot_index].add(faculty_id)
        self._daily_load[day_index][faculty_id] += 1

    def is_busy(self, faculty_id: str, day_index: int, slot_index: int) -> bool:
        return faculty_id in self._busy[day_index][slot_index]

    def daily_load(self, faculty_id: str, day_index: int) -> int:
        return self._daily_load[day_index][faculty_id]

    def run_length_if_placed(self, faculty_id: str, day_index: int, slot_index: int) -> int:
        busy = self._busy[day_index]
        length = 1
        cursor = slot_index - 1
        while cursor >= 0 and faculty_id in busy[cursor]:
            length += 1
            cursor -= 1
        cursor = slot_index + 1
        while cursor < self.total_slots and faculty_id in busy[cursor]:
            length += 1
            cursor += 1
        return length
