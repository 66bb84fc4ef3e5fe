"""
Background Scheduler
Daily guest-data cleanup, run inside the API process with APScheduler
"""

import logging
from typing import Optional

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_MISSED
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from campushub.config import settings
from campushub.deps import get_store
from campushub.services.retention_service import RetentionService

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler: Optional[AsyncIOScheduler] = None


async def cleanup_guest_data() -> dict:
    """Scheduled job: delete expired guest registrations and notifications"""
    return await RetentionService(get_store()).sweep()


def _on_job_error(event):
    logger.error(
        "Scheduled job FAILED: job_id=%s error=%s",
        event.job_id,
        event.exception,
    )
    if event.traceback:
        logger.error("Traceback for job %s:\n%s", event.job_id, event.traceback)


def _on_job_missed(event):
    logger.warning(
        "Scheduled job MISSED: job_id=%s scheduled_run_time=%s",
        event.job_id,
        event.scheduled_run_time,
    )


def init_scheduler() -> AsyncIOScheduler:
    """Create and start the scheduler; must be called from a running event loop"""
    global scheduler

    if scheduler is not None:
        logger.warning("Scheduler already initialized")
        return scheduler

    scheduler = AsyncIOScheduler(
        timezone=settings.CLEANUP_TIMEZONE,
        job_defaults={
            "coalesce": True,
            "max_instances": 1,
            "misfire_grace_time": 3600,
        },
    )

    scheduler.add_job(
        func=cleanup_guest_data,
        trigger=CronTrigger(
            hour=settings.CLEANUP_SCHEDULE_HOUR,
            minute=settings.CLEANUP_SCHEDULE_MINUTE,
            timezone=settings.CLEANUP_TIMEZONE,
        ),
        id="cleanup_guest_data",
        name="Cleanup Expired Guest Data",
        replace_existing=True,
    )
    logger.info(
        "Scheduled job: cleanup_guest_data (daily at %02d:%02d %s)",
        settings.CLEANUP_SCHEDULE_HOUR,
        settings.CLEANUP_SCHEDULE_MINUTE,
        settings.CLEANUP_TIMEZONE,
    )

    scheduler.add_listener(_on_job_error, EVENT_JOB_ERROR)
    scheduler.add_listener(_on_job_missed, EVENT_JOB_MISSED)

    scheduler.start()
    logger.info("Background scheduler started")
    return scheduler


def shutdown_scheduler():
    global scheduler

    if scheduler is not None:
        scheduler.shutdown(wait=False)
        logger.info("Background scheduler shutdown complete")
        scheduler = None


def get_scheduler_status() -> dict:
    if scheduler is None:
        return {"status": "not_initialized", "jobs": []}

    jobs = [
        {
            "id": job.id,
            "name": job.name,
            "next_run_time": job.next_run_time.isoformat() if job.next_run_time else None,
            "trigger": str(job.trigger),
        }
        for job in scheduler.get_jobs()
    ]
    return {"status": "running" if scheduler.running else "stopped", "jobs": jobs}
