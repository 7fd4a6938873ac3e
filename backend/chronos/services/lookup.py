from __future__ import annotations

from dataclasses import dataclass

from chronos.schemas.snapshot import Faculty, Program, Section, Snapshot, Subject

UNKNOWN_LABEL = "?"


@dataclass(frozen=True)
class SnapshotIndex:
    """By-id views over a snapshot. Unknown ids resolve to ``None``."""

    programs: dict[str, Program]
    sections: dict[str, Section]
    subjects: dict[str, Subject]
    faculty: dict[str, Faculty]

    def program_for_section(self, section_id: str) -> Program | None:
        section = self.sections.get(section_id)
        if section is None:
            return None
        return self.programs.get(section.program_id)

    def section_label(self, section_id: str) -> str:
        section = self.sections.get(section_id)
        program = self.program_for_section(section_id)
        program_name = program.name if program else UNKNOWN_LABEL
        section_name = section.name if section else UNKNOWN_LABEL
        return f"{program_name}-{section_name}"

    def faculty_name(self, faculty_id: str) -> str:
        member = self.faculty.get(faculty_id)
        return member.name if member else faculty_id


def _first_by_id(items) -> dict:
    # First occurrence wins, matching a linear find over the list.
    indexed: dict = {}
    for item in items:
        indexed.setdefault(item.id, item)
    return indexed


def build_index(snapshot: Snapshot) -> SnapshotIndex:
    return SnapshotIndex(
        programs=_first_by_id(snapshot.programs),
        sections=_first_by_id(snapshot.sections),
        subjects=_first_by_id(snapshot.subjects),
        faculty=_first_by_id(snapshot.faculty),
    )
