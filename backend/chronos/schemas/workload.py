from pydantic import BaseModel, Field


class FacultyWorkload(BaseModel):
    faculty_id: str
    name: str
    department: str = ""
    lectures: int = Field(ge=0)
    workload_limit: int = Field(ge=0)
    utilization: float = Field(ge=0.0)

    @property
    def over_limit(self) -> bool:
        return self.workload_limit > 0 and self.lectures > self.workload_limit
