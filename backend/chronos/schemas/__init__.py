from chronos.schemas.conflict import ConflictDetail, ConflictResult  # noqa: F401
from chronos.schemas.snapshot import (  # noqa: F401
    DAYS,
    Assignment,
    DailyAvailability,
    Faculty,
    GridConfig,
    Program,
    Section,
    Snapshot,
    Subject,
    TimetableEntry,
)
from chronos.schemas.substitution import ManualAssignmentCandidate, RankedFaculty, SlotRef  # noqa: F401
from chronos.schemas.workload import FacultyWorkload  # noqa: F401
