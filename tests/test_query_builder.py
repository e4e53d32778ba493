import pytest

from task_api.exceptions import InvalidFilter
from task_api.models.enums import TaskStatus, TaskType
from task_api.services.field_mapper import SortSpec, map_filter_key, map_sort_key
from task_api.services.query_builder import (
    build_bulk_delete_query,
    build_dashboard_query,
    build_list_query,
)


@pytest.mark.parametrize("key, expected", [
    ("deadline", SortSpec("task_deadline", False)),
    ("-deadline", SortSpec("task_deadline", True)),
    ("createdAt", SortSpec("created_at", False)),
    ("-createdAt", SortSpec("created_at", True)),
])
def test_map_sort_key(key, expected):
    assert map_sort_key(key) == expected


def test_mapper_does_not_validate():
    with pytest.raises(KeyError):
        map_sort_key("title")
    assert map_filter_key("status") == "task_status"


def test_list_query_defaults_hide_completed_and_sort_by_creation():
    query = build_list_query(7)
    assert query.owner_id == 7
    assert query.status is None
    assert query.exclude_status is TaskStatus.COMPLETED
    assert query.sort == SortSpec("created_at", False)


def test_list_query_with_explicit_status_keeps_completed():
    query = build_list_query(7, task_type="personal", status="completed", sort="-deadline")
    assert query.task_type is TaskType.PERSONAL
    assert query.status is TaskStatus.COMPLETED
    assert query.exclude_status is None
    assert query.sort == SortSpec("task_deadline", True)


@pytest.mark.parametrize("kwargs", [
    {"task_type": "invalid"},
    {"status": "done"},
    {"sort": "title"},
    {"sort": "--deadline"},
])
def test_list_query_rejects_unknown_values(kwargs):
    with pytest.raises(InvalidFilter):
        build_list_query(1, **kwargs)


def test_invalid_filter_message_lists_valid_values():
    with pytest.raises(InvalidFilter) as exc_info:
        build_list_query(1, status="done")
    assert '"in-progress"' in exc_info.value.message


def test_dashboard_query_all_is_owner_only():
    query = build_dashboard_query(3, "all")
    assert query.owner_id == 3
    assert query.task_type is None
    assert query.exclude_status is None
    assert query.sort is None


def test_dashboard_query_scoped_to_type():
    assert build_dashboard_query(3, "work").task_type is TaskType.WORK


def test_dashboard_query_rejects_unknown_type():
    with pytest.raises(InvalidFilter):
        build_dashboard_query(3, "hobby")


def test_bulk_delete_query_has_no_default_exclusion():
    query = build_bulk_delete_query(5)
    assert query.status is None
    assert query.exclude_status is None

    query = build_bulk_delete_query(5, status="completed")
    assert query.status is TaskStatus.COMPLETED
    with pytest.raises(InvalidFilter):
        build_bulk_delete_query(5, task_type="errand")


def test_empty_values_are_treated_as_absent():
    query = build_list_query(7, task_type="", status="", sort="")
    assert query.task_type is None
    assert query.exclude_status is TaskStatus.COMPLETED
    assert query.sort == SortSpec("created_at", False)

    query = build_bulk_delete_query(7, task_type="", status="")
    assert (query.task_type, query.status) == (None, None)
