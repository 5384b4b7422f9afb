"""
Notification Dispatcher

Runs one notification pass: scan for eligible obligations, email each owner,
and record every attempt so the same threshold is never notified twice.
"""
import logging
from datetime import datetime
from typing import Optional
import pytz
from prometheus_client import Counter

from .eligibility import find_obligations_needing_notification
from .formatter import format_notification_email
from .schemas import NotificationRunResult
from .store import NotificationStore
from .transport import EmailTransport

logger = logging.getLogger(__name__)

NOTIFICATION_TYPE_EMAIL = "EMAIL"

NOTIFICATIONS_SENT = Counter(
    "notifications_sent_total",
    "Deadline notifications delivered",
    ["threshold"]
)

NOTIFICATIONS_FAILED = Counter(
    "notifications_failed_total",
    "Deadline notifications that failed to deliver",
    ["threshold"]
)


def process_notifications(
    store: NotificationStore,
    transport: EmailTransport,
    now: Optional[datetime] = None,
) -> NotificationRunResult:
    """
    Process all pending notifications.

    A delivery failure is recorded and counted against that obligation only.
    Any store error aborts the run and is reported with success=False.
    """
    now = now or datetime.now(pytz.utc)
    logger.info(f"🔔 [{now.isoformat()}] Processing obligation notifications...")

    try:
        obligations = find_obligations_needing_notification(store, now)

        if not obligations:
            logger.info("✅ No notifications needed at this time")
            return NotificationRunResult(success=True)

        logger.info(f"📬 Found {len(obligations)} obligation(s) needing notification")

        sent = 0
        failed = 0

        for obligation in obligations:
            threshold = obligation.notification_threshold
            error_message = None

            try:
                payload = format_notification_email(obligation)
                delivered = transport.deliver(obligation.owner_email, payload.subject, payload.html, payload.text)
                if not delivered:
                    error_message = "Transport reported delivery failure"
            except Exception as e:
                delivered = False
                error_message = str(e) or e.__class__.__name__

            store.append_notification_record(
                obligation.id,
                obligation.user_id,
                NOTIFICATION_TYPE_EMAIL,
                threshold,
                delivered,
                error_message,
            )

            if delivered:
                store.touch_last_notification(obligation.id, now)
                sent += 1
                NOTIFICATIONS_SENT.labels(threshold=str(threshold)).inc()
                logger.info(f"✅ Notification sent for: {obligation.title} ({threshold} days threshold)")
            else:
                failed += 1
                NOTIFICATIONS_FAILED.labels(threshold=str(threshold)).inc()
                logger.error(f"❌ Failed to send notification for: {obligation.title}: {error_message}")

        logger.info(f"📊 Summary: {sent} sent, {failed} failed")
        return NotificationRunResult(success=True, sent=sent, failed=failed)

    except Exception as e:
        logger.error(f"❌ Error processing notifications: {e}", exc_info=True)
        return NotificationRunResult(success=False, error=str(e) or "Unknown error")
