from dataclasses import dataclass, field
from datetime import date, datetime, time

from task_api.models.enums import ACTIVE_STATUSES, TaskStatus
from task_api.models.tasks import Task


@dataclass
class DashboardSummary:
    active_count: int = 0
    completed_count: int = 0
    overdue_count: int = 0
    overdue_tasks: list[Task] = field(default_factory=list)
    today_tasks: list[Task] = field(default_factory=list)
    progress_chart: dict[str, int] = field(default_factory=dict)


def local_day(instant: datetime) -> date:
    """Calendar day of ``instant`` in server-local time."""
    return instant.astimezone().date()


def start_of_day(day: date) -> datetime:
    """Local midnight of ``day`` as an aware datetime."""
    return datetime.combine(day, time.min).astimezone()


def summarize(tasks: list[Task], reference_instant: datetime) -> DashboardSummary:
    today = local_day(reference_instant)
    today_start = start_of_day(today)
    summary = DashboardSummary()

    for task in tasks:
        status = TaskStatus(task.task_status)
        if status in ACTIVE_STATUSES:
            summary.active_count += 1
        elif status is TaskStatus.COMPLETED:
            summary.completed_count += 1

        deadline = task.task_deadline
        if deadline is None:
            continue
        if deadline < today_start and status is not TaskStatus.COMPLETED:
            summary.overdue_count += 1
            summary.overdue_tasks.append(task)
        if local_day(deadline) == today:
            summary.today_tasks.append(task)

    chart = {s.value: 0 for s in TaskStatus}
    for task in summary.today_tasks:
        chart[TaskStatus(task.task_status).value] += 1
    summary.progress_chart = chart

    return summary
