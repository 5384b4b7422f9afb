"""
Deadline Notification Scheduler

Periodically runs the notification dispatcher against the guardian
internal API and emails owners whose obligations hit a 30/7/1 day threshold.
"""
import logging
import pytz
from apscheduler.schedulers.background import BackgroundScheduler

from .dispatcher import process_notifications
from .scheduler_config import NOTIFICATION_CHECK_INTERVAL_HOURS, SCHEDULER_TIMEZONE
from .store import InternalApiStore
from .transport import build_transport

logger = logging.getLogger(__name__)


def check_deadlines():
    """
    Main job: one dispatcher pass.

    Called periodically by the scheduler. All dedup state lives behind the
    store, so nothing is carried between runs.
    """
    result = process_notifications(InternalApiStore(), build_transport())
    if not result.success:
        logger.error(f"Notification run failed: {result.error}")
    return result


# Global scheduler instance
scheduler = BackgroundScheduler(timezone=pytz.timezone(SCHEDULER_TIMEZONE))


def start_scheduler():
    """Start the notification job."""
    scheduler.add_job(
        check_deadlines,
        'interval',
        hours=NOTIFICATION_CHECK_INTERVAL_HOURS,
        id='deadline_notification_job',
        replace_existing=True,
        max_instances=1,
        coalesce=True
    )

    scheduler.start()
    logger.info(f"🚀 Scheduler started: deadline notifications every {NOTIFICATION_CHECK_INTERVAL_HOURS}h")


def stop_scheduler():
    """Stop the scheduler gracefully."""
    scheduler.shutdown(wait=False)
    logger.info("🛑 Scheduler stopped")
