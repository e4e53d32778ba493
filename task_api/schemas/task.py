from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime, timezone
from task_api.models.enums import TaskStatus, TaskType
from task_api.utils.sanitization import sanitize_string


def ensure_future_deadline(v: datetime | None) -> datetime | None:
    if v is None:
        return v
    # Naive timestamps are read as server-local time
    v = v.astimezone()
    if v <= datetime.now(timezone.utc):
        raise ValueError("Deadline must be a future date")
    return v


# ── Common base for readable/writeable fields ──
class TaskBase(BaseModel):
    title: str = Field(..., min_length=2, max_length=25)
    description: str | None = Field(None, max_length=100)
    type: TaskType
    deadline: datetime | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("deadline")
    @classmethod
    def check_deadline(cls, v):
        return ensure_future_deadline(v)


class TaskCreate(TaskBase):
    pass


class TaskReplace(TaskBase):
    """Body of PUT: every editable field is sent; omitted optionals are cleared."""
    status: TaskStatus


class TaskUpdate(BaseModel):
    title: str | None = Field(None, min_length=2, max_length=25)
    description: str | None = Field(None, max_length=100)
    type: TaskType | None = None
    status: TaskStatus | None = None
    deadline: datetime | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)

    @field_validator("deadline")
    @classmethod
    def check_deadline(cls, v):
        return ensure_future_deadline(v)

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in ("title", "type", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class Task(BaseModel):
    task_id: int
    user_id: int
    title: str = Field(validation_alias="task_title")
    description: str | None = Field(None, validation_alias="task_description")
    status: TaskStatus = Field(validation_alias="task_status")
    type: TaskType = Field(validation_alias="task_type")
    deadline: datetime | None = Field(None, validation_alias="task_deadline")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class DashboardSummary(BaseModel):
    active_count: int
    completed_count: int
    overdue_count: int
    overdue_tasks: list[Task] = []
    today_tasks: list[Task] = []
    progress_chart: dict[str, int]

    class Config:
        from_attributes = True


class BulkDeleteResult(BaseModel):
    message: str
    deleted_count: int
