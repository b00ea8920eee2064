# telecom_provider/scheduler.py
import logging
import time

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from .core.config import get_log_level, get_snapshot_run_hour

logger = logging.getLogger("Scheduler")


def job_listener(event):
    """
    Scheduler event listener.
    Logs the outcome of every job run.
    """
    if event.exception:
        logger.error(f"Job {event.job_id} failed: {event.exception}")
    else:
        logger.info(f"Job {event.job_id} executed successfully")


def build_scheduler() -> BackgroundScheduler:
    """Create the scheduler with every periodic job registered (not started)."""
    # Late import to avoid circular imports
    from .services.usage_snapshot_job import run_usage_snapshot

    scheduler = BackgroundScheduler(
        job_defaults={
            "coalesce": True,  # Missed runs collapse into a single one
            "max_instances": 1,
            "misfire_grace_time": 300,
        }
    )
    scheduler.add_listener(job_listener, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR)

    hour, minute = get_snapshot_run_hour()
    logger.info(f"Scheduling usage snapshot daily at {hour:02d}:{minute:02d}")
    scheduler.add_job(
        run_usage_snapshot,
        trigger=CronTrigger(hour=hour, minute=minute),
        id="usage_snapshot_job",
        name="Daily Service Plan Usage Snapshot",
        replace_existing=True,
    )
    return scheduler


def run_scheduler():
    """
    Entry point of the scheduler process.
    Starts every scheduled job and keeps the process alive.
    """
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s - %(levelname)s - [Scheduler] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Initializing BackgroundScheduler...")

    scheduler = build_scheduler()
    scheduler.start()
    logger.info("Scheduler started")

    try:
        while True:
            time.sleep(60)
    except (KeyboardInterrupt, SystemExit):
        logger.info("Stopping scheduler...")
        scheduler.shutdown()
        logger.info("Scheduler stopped")
