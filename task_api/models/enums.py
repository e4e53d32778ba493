from enum import Enum


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


# Statuses that still count as open work
ACTIVE_STATUSES = (TaskStatus.PENDING, TaskStatus.IN_PROGRESS)


class TaskType(str, Enum):
    WORK = "work"
    PERSONAL = "personal"


class TaskSort(str, Enum):
    DEADLINE = "deadline"
    DEADLINE_DESC = "-deadline"
    CREATED_AT = "createdAt"
    CREATED_AT_DESC = "-createdAt"


class DashboardType(str, Enum):
    ALL = "all"
    WORK = "work"
    PERSONAL = "personal"


def allowed_values(enum_cls) -> str:
    return ", ".join(f'"{member.value}"' for member in enum_cls)
