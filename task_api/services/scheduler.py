import asyncio
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from task_api.config import settings
from task_api.services.notifications import send_due_today_digests

logger = logging.getLogger(__name__)


async def run_digest_job():
    try:
        await send_due_today_digests()
    except Exception:
        # Keep the scheduler alive; the next run retries
        logger.exception("[SCHEDULER] Error during deadline notification job")


def setup_scheduler():
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        run_digest_job,
        trigger=CronTrigger.from_crontab(
            settings.NOTIFICATION_CRON_SCHEDULE,
            timezone=settings.NOTIFICATION_TIMEZONE,
        ),
        id="due_today_digest",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        "[SCHEDULER] Deadline notification job scheduled: %s (%s)",
        settings.NOTIFICATION_CRON_SCHEDULE, settings.NOTIFICATION_TIMEZONE,
    )

    if settings.RUN_NOTIFICATION_ON_STARTUP:
        logger.info("[SCHEDULER] Running notification check on startup...")
        asyncio.get_running_loop().create_task(run_digest_job())
    return scheduler
