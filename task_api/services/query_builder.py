"""
Builds typed task queries from raw query-string values.

Every value is checked against its closed enumeration before it is folded
into a ``TaskQuery``, so only known fields with known values ever reach the
repository.
"""
from dataclasses import dataclass

from task_api.exceptions import InvalidFilter
from task_api.models.enums import (
    DashboardType,
    TaskSort,
    TaskStatus,
    TaskType,
    allowed_values,
)
from task_api.services.field_mapper import SortSpec, map_sort_key


DEFAULT_SORT = TaskSort.CREATED_AT


@dataclass(frozen=True)
class TaskQuery:
    owner_id: int
    task_type: TaskType | None = None
    status: TaskStatus | None = None
    exclude_status: TaskStatus | None = None
    sort: SortSpec | None = None


def _parse(enum_cls, value: str, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidFilter(
            f"Invalid {label} value. Valid values are {allowed_values(enum_cls)}."
        ) from None


def _parse_optional(enum_cls, value: str | None, label: str):
    # An empty query value (`?type=`) means the filter is absent
    if not value:
        return None
    return _parse(enum_cls, value, label)


def build_list_query(
    owner_id: int,
    task_type: str | None = None,
    status: str | None = None,
    sort: str | None = None,
) -> TaskQuery:
    parsed_type = _parse_optional(TaskType, task_type, "type")
    parsed_status = _parse_optional(TaskStatus, status, "status")
    parsed_sort = _parse_optional(TaskSort, sort, "sort") or DEFAULT_SORT

    return TaskQuery(
        owner_id=owner_id,
        task_type=parsed_type,
        status=parsed_status,
        # Default listing only shows open work
        exclude_status=TaskStatus.COMPLETED if parsed_status is None else None,
        sort=map_sort_key(parsed_sort.value),
    )


def build_dashboard_query(owner_id: int, dashboard_type: str) -> TaskQuery:
    parsed = _parse(DashboardType, dashboard_type, "dashboard type")
    if parsed is DashboardType.ALL:
        return TaskQuery(owner_id=owner_id)
    return TaskQuery(owner_id=owner_id, task_type=TaskType(parsed.value))


def build_bulk_delete_query(
    owner_id: int,
    task_type: str | None = None,
    status: str | None = None,
) -> TaskQuery:
    return TaskQuery(
        owner_id=owner_id,
        task_type=_parse_optional(TaskType, task_type, "type"),
        status=_parse_optional(TaskStatus, status, "status"),
    )
