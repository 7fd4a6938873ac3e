from __future__ import annotations

from chronos.schemas.snapshot import Snapshot, TimetableEntry
from chronos.schemas.workload import FacultyWorkload


def utilization_percent(lectures: int, workload_limit: int) -> float:
    if workload_limit < 1:
        return 0.0
    return round(lectures / workload_limit * 100, 1)


def faculty_workload(entries: list[TimetableEntry], snapshot: Snapshot) -> list[FacultyWorkload]:
    lectures_by_faculty: dict[str, int] = {}
    for entry in entries:
        if entry.entry_type == "lecture" and entry.faculty_id:
            lectures_by_faculty[entry.faculty_id] = lectures_by_faculty.get(entry.faculty_id, 0) + 1

    summary = [
        FacultyWorkload(
            faculty_id=member.id,
            name=member.name,
            department=member.department,
            lectures=lectures_by_faculty.get(member.id, 0),
            workload_limit=member.workload_limit,
            utilization=utilization_percent(lectures_by_faculty.get(member.id, 0), member.workload_limit),
        )
        for member in snapshot.faculty
    ]
    summary.sort(key=lambda item: item.utilization, reverse=True)
    return summary


def average_utilization(summary: list[FacultyWorkload]) -> float:
    if not summary:
        return 0.0
    return round(sum(item.utilization for item in summary) / len(summary), 1)
