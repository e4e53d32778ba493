from dataclasses import dataclass


@dataclass(frozen=True)
class SortSpec:
    field: str
    descending: bool = False


# External vocabulary -> Task model columns
SORT_FIELDS = {
    "deadline": "task_deadline",
    "createdAt": "created_at",
}

FILTER_FIELDS = {
    "status": "task_status",
    "type": "task_type",
}

BODY_FIELDS = {
    "title": "task_title",
    "description": "task_description",
    "status": "task_status",
    "type": "task_type",
    "deadline": "task_deadline",
}


def map_sort_key(key: str) -> SortSpec:
    """Translate ``deadline`` / ``-createdAt`` style keys. Callers validate first."""
    descending = key.startswith("-")
    return SortSpec(field=SORT_FIELDS[key.lstrip("-")], descending=descending)


def map_filter_key(key: str) -> str:
    return FILTER_FIELDS[key]


def map_body_fields(data: dict) -> dict:
    return {BODY_FIELDS[key]: value for key, value in data.items()}
