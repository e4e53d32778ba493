import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from sqlalchemy.future import select
from sqlalchemy.orm import joinedload

from task_api.database import AsyncSessionLocal
from task_api.models.enums import TaskStatus
from task_api.models.tasks import Task as TaskModel
from task_api.services.dashboard import local_day, start_of_day
from task_api.utils.email import send_digest_email

logger = logging.getLogger(__name__)


@dataclass
class DigestReport:
    notified: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)
    skipped: int = 0


def _group_by_owner(tasks):
    grouped = {}
    skipped = 0
    for task in tasks:
        owner = task.owner
        if owner is None or not owner.email:
            logger.info("[DIGEST] Skipping task %r - user data not found", task.task_title)
            skipped += 1
            continue
        # A deadline set for the day of creation needs no reminder
        if local_day(task.task_deadline) == local_day(task.created_at):
            logger.info("[DIGEST] Skipping task %r - deadline is same day as creation", task.task_title)
            skipped += 1
            continue
        grouped.setdefault(owner.user_id, (owner, []))[1].append(task)
    return grouped, skipped


async def send_due_today_digests(
    session_factory=AsyncSessionLocal,
    now: datetime | None = None,
    sender=send_digest_email,
) -> DigestReport:
    """Email every owner the open tasks whose deadline falls on today's local date."""
    logger.info("[DIGEST] Starting deadline notification check...")
    now = now or datetime.now(timezone.utc)
    today_start = start_of_day(local_day(now))
    tomorrow_start = start_of_day(local_day(now) + timedelta(days=1))
    report = DigestReport()

    async with session_factory() as db:
        result = await db.execute(
            select(TaskModel)
            .options(joinedload(TaskModel.owner))
            .filter(
                TaskModel.task_deadline >= today_start,
                TaskModel.task_deadline < tomorrow_start,
                TaskModel.task_status != TaskStatus.COMPLETED.value,
            )
            .order_by(TaskModel.task_deadline, TaskModel.task_id)
        )
        tasks = result.scalars().all()

    if not tasks:
        logger.info("[DIGEST] No tasks due today. Skipping notifications.")
        return report

    grouped, report.skipped = _group_by_owner(tasks)
    owners = [owner for owner, _ in grouped.values()]
    results = await asyncio.gather(
        *(sender(owner.email, owner.username, owner_tasks) for owner, owner_tasks in grouped.values()),
        return_exceptions=True,
    )

    for owner, outcome in zip(owners, results):
        if isinstance(outcome, Exception):
            logger.error("[DIGEST] Failed to send email to %s: %s", owner.email, outcome)
            report.failures[owner.email] = str(outcome)
        else:
            report.notified.append(owner.email)

    logger.info(
        "[DIGEST] Completed. Processed %s user(s), %s failure(s).",
        len(grouped), len(report.failures),
    )
    return report
