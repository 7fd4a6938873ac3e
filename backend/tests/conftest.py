import pytest

from chronos.core.config import Settings
from chronos.schemas.snapshot import Snapshot


@pytest.fixture()
def engine_settings():
    # Ignore any developer .env so defaults stay predictable.
    return Settings(_env_file=None)


@pytest.fixture()
def single_subject_snapshot():
    return Snapshot.model_validate({
        "semesters": [{"id": "p1", "name": "Sem1", "lunchEnabled": False}],
        "sections": [{"id": "s", "name": "S", "semesterId": "p1"}],
        "subjects": [{"id": "math", "name": "Math", "code": "M101", "weeklyFrequency": 5}],
        "faculty": [{"id": "f", "name": "Prof F", "department": "Maths", "workloadLimit": 20}],
        "assignments": [{"id": "a1", "sectionId": "s", "subjectId": "math", "facultyId": "f"}],
        "masterTimetable": [],
        "config": {"totalSlots": 4},
    })


@pytest.fixture()
def three_subject_snapshot():
    return Snapshot.model_validate({
        "semesters": [{"id": "p1", "name": "Sem1"}],
        "sections": [{"id": "a", "name": "A", "semesterId": "p1"}],
        "subjects": [
            {"id": "math", "name": "Math", "code": "M101", "weeklyFrequency": 5},
            {"id": "phys", "name": "Physics", "code": "P101", "weeklyFrequency": 5},
            {"id": "chem", "name": "Chemistry", "code": "C101", "weeklyFrequency": 5},
        ],
        "faculty": [
            {"id": "f1", "name": "Prof A", "workloadLimit": 18},
            {"id": "f2", "name": "Prof B", "workloadLimit": 18},
            {"id": "f3", "name": "Prof C", "workloadLimit": 18},
        ],
        "assignments": [
            {"id": "a1", "sectionId": "a", "subjectId": "math", "facultyId": "f1"},
            {"id": "a2", "sectionId": "a", "subjectId": "phys", "facultyId": "f2"},
            {"id": "a3", "sectionId": "a", "subjectId": "chem", "facultyId": "f3"},
        ],
        "config": {"totalSlots": 6},
    })


@pytest.fixture()
def campus_snapshot():
    """Two programs, four sections and staff shared across sections."""
    return Snapshot.model_validate({
        "semesters": [
            {"id": "p1", "name": "Sem1", "lunchEnabled": True, "lunchSlotIndex": 3},
            {"id": "p3", "name": "Sem3", "lunchEnabled": False},
        ],
        "sections": [
            {"id": "s1a", "name": "A", "semesterId": "p1"},
            {"id": "s1b", "name": "B", "semesterId": "p1"},
            {"id": "s3a", "name": "A", "semesterId": "p3"},
            {"id": "s3b", "name": "B", "semesterId": "p3"},
        ],
        "subjects": [
            {"id": "math", "name": "Math", "code": "M101", "weeklyFrequency": 4},
            {"id": "phys", "name": "Physics", "code": "P101", "weeklyFrequency": 3},
            {"id": "econ", "name": "Economics", "code": "E201", "weeklyFrequency": 4},
            {"id": "law", "name": "Business Law", "code": "L201", "weeklyFrequency": 3},
            {"id": "comm", "name": "Communication", "code": "H101", "weeklyFrequency": 2},
        ],
        "faculty": [
            {"id": "f1", "name": "Dr. Rao", "department": "Science", "workloadLimit": 18},
            {"id": "f2", "name": "Dr. Iyer", "department": "Science", "workloadLimit": 18},
            {"id": "f3", "name": "Prof. Khan", "department": "Commerce", "workloadLimit": 16},
            {"id": "f4", "name": "Prof. Sen", "department": "Commerce", "workloadLimit": 16},
            {"id": "f5", "name": "Ms. Gupta", "department": "Humanities", "workloadLimit": 12},
        ],
        "assignments": [
            {"id": "a1", "sectionId": "s1a", "subjectId": "math", "facultyId": "f1"},
            {"id": "a2", "sectionId": "s1a", "subjectId": "phys", "facultyId": "f2"},
            {"id": "a3", "sectionId": "s1a", "subjectId": "comm", "facultyId": "f5"},
            {"id": "a4", "sectionId": "s1b", "subjectId": "math", "facultyId": "f1"},
            {"id": "a5", "sectionId": "s1b", "subjectId": "phys", "facultyId": "f2"},
            {"id": "a6", "sectionId": "s1b", "subjectId": "comm", "facultyId": "f5"},
            {"id": "a7", "sectionId": "s3a", "subjectId": "econ", "facultyId": "f3"},
            {"id": "a8", "sectionId": "s3a", "subjectId": "law", "facultyId": "f4"},
            {"id": "a9", "sectionId": "s3a", "subjectId": "comm", "facultyId": "f5"},
            {"id": "a10", "sectionId": "s3b", "subjectId": "econ", "facultyId": "f3"},
            {"id": "a11", "sectionId": "s3b", "subjectId": "law", "facultyId": "f4"},
            {"id": "a12", "sectionId": "s3b", "subjectId": "math", "facultyId": "f1"},
        ],
        "masterTimetable": [
            {
                "id": "lock-1",
                "sectionId": "s3a",
                "day": "Wednesday",
                "slotIndex": 0,
                "facultyId": "f4",
                "subjectId": "law",
                "isLocked": True,
                "entryType": "lecture",
            },
        ],
        "config": {"totalSlots": 6},
    })
