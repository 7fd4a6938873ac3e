import pytest

from chronos.core.config import Settings
from chronos.schemas.snapshot import DailyAvailability, Snapshot, TimetableEntry
from chronos.schemas.substitution import SlotRef
from chronos.services.substitution import rank_substitutes

DATE = "2026-10-20"


def daily(entry_id, section, slot, faculty):
    return TimetableEntry(
        id=entry_id, section_id=section, day="Tuesday", slot_index=slot, faculty_id=faculty,
    )


@pytest.fixture
def snapshot():
    return Snapshot.model_validate({
        "semesters": [{"id": "p1", "name": "Sem1"}],
        "sections": [
            {"id": "a", "name": "A", "semesterId": "p1"},
            {"id": "b", "name": "B", "semesterId": "p1"},
        ],
        "subjects": [{"id": "math", "name": "Math", "weeklyFrequency": 4}],
        "faculty": [
            {"id": "f1", "name": "Prof One"},
            {"id": "f2", "name": "Prof Two"},
            {"id": "f3", "name": "Prof Three"},
            {"id": "f4", "name": "Prof Four"},
        ],
        "assignments": [{"id": "a1", "sectionId": "a", "subjectId": "math", "facultyId": "f2"}],
        "config": {"totalSlots": 6},
    })


@pytest.fixture
def schedule():
    return [
        daily("d1", "b", 2, "f1"),
        daily("d2", "b", 0, "f3"),
        daily("d3", "b", 1, "f3"),
        daily("d4", "b", 4, "f2"),
    ]


def test_rank_orders_by_availability_load_and_familiarity(snapshot, schedule, engine_settings):
    availability = [DailyAvailability(faculty_id="f4", date=DATE, status="Absent")]
    ranked = rank_substitutes(
        SlotRef(section_id="a", slot_index=2, date=DATE), availability, schedule, snapshot,
        settings=engine_settings,
    )

    assert [(item.faculty.id, item.rank) for item in ranked] == [
        ("f2", 140),
        ("f3", 80),
        ("f1", 0),
        ("f4", 0),
    ]
    teaching = ranked[2]
    assert teaching.is_teaching and teaching.is_busy
    assert teaching.busy_reason == "Teaching: Sem1-B"
    absent = ranked[3]
    assert absent.is_absent and absent.busy_reason == "Absent"
    assert ranked[1].load == 2
    assert [entry.id for entry in ranked[1].schedule] == ["d2", "d3"]


def test_unavailable_slot_counts_as_absent(snapshot, schedule, engine_settings):
    availability = [DailyAvailability(faculty_id="f3", date=DATE, unavailable_slots=[2])]
    ranked = rank_substitutes(SlotRef(section_id="a", slot_index=2), availability, schedule, snapshot,
                              settings=engine_settings)
    f3 = next(item for item in ranked if item.faculty.id == "f3")
    assert f3.is_absent and f3.rank == 0

    ranked_other_slot = rank_substitutes(SlotRef(section_id="a", slot_index=3), availability, schedule, snapshot,
                                         settings=engine_settings)
    f3 = next(item for item in ranked_other_slot if item.faculty.id == "f3")
    assert not f3.is_absent and f3.rank == 80


def test_availability_for_other_dates_is_ignored(snapshot, engine_settings):
    availability = [DailyAvailability(faculty_id="f1", date="2026-10-21", status="Absent")]
    ranked = rank_substitutes(SlotRef(section_id="a", slot_index=0, date=DATE), availability, [], snapshot,
                              settings=engine_settings)
    f1 = next(item for item in ranked if item.faculty.id == "f1")
    assert not f1.is_absent
    assert f1.rank == 100


def test_ties_keep_faculty_order(snapshot, engine_settings):
    ranked = rank_substitutes(SlotRef(section_id="b", slot_index=0), [], [], snapshot, settings=engine_settings)
    assert [item.faculty.id for item in ranked] == ["f1", "f2", "f3", "f4"]
    assert {item.rank for item in ranked} == {100}


def test_weights_follow_settings(snapshot, schedule):
    settings = Settings(_env_file=None, substitute_load_penalty=25, substitute_section_bonus=10)
    ranked = rank_substitutes(SlotRef(section_id="a", slot_index=5), [], schedule, snapshot, settings=settings)
    ranks = {item.faculty.id: item.rank for item in ranked}
    assert ranks == {"f1": 75, "f2": 85, "f3": 50, "f4": 100}


def test_slot_ref_accepts_camel_case():
    target = SlotRef.model_validate({"sectionId": "a", "slotIndex": 3})
    assert (target.section_id, target.slot_index, target.date) == ("a", 3, None)
