from __future__ import annotations

from pydantic import BaseModel, Field

from chronos.schemas.snapshot import Faculty, TimetableEntry


class SlotRef(BaseModel):
    section_id: str = Field(min_length=1, alias="sectionId")
    slot_index: int = Field(ge=0, alias="slotIndex")
    date: str | None = None

    model_config = {
        "populate_by_name": True,
    }


class RankedFaculty(BaseModel):
    faculty: Faculty
    rank: int
    is_absent: bool
    is_teaching: bool
    busy_reason: str | None = None
    load: int = Field(ge=0)
    schedule: list[TimetableEntry] = Field(default_factory=list)

    @property
    def is_busy(self) -> bool:
        return self.is_absent or self.is_teaching


class ManualAssignmentCandidate(BaseModel):
    faculty: Faculty
    clash: str | None = None
    load: int = Field(ge=0)
