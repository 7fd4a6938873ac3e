from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ConflictDetail(BaseModel):
    conflict_type: Literal[
        "faculty_clash",
        "mandatory_gap",
        "consecutive_lectures",
        "excessive_load",
    ]
    description: str
    severity: Literal["hard", "soft"]
    day: str
    slot_index: int | None = None
    faculty_id: str | None = None
    section_ids: list[str] = Field(default_factory=list)


class ConflictResult(BaseModel):
    hard: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    details: list[ConflictDetail] = Field(default_factory=list)
    date: str | None = None

    @property
    def is_valid(self) -> bool:
        return not self.hard
