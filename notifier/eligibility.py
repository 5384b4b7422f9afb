"""
Eligibility scanner: which obligations need a notification right now.
"""
import logging
from datetime import datetime
from typing import List

from .scheduler_config import MAX_HORIZON_DAYS
from .schemas import EligibleObligation
from .store import NotificationStore
from .thresholds import days_until, classify_threshold

logger = logging.getLogger(__name__)

ACTIVE_STATUS = "ACTIVE"


def find_obligations_needing_notification(store: NotificationStore, now: datetime) -> List[EligibleObligation]:
    """
    Return ACTIVE obligations that sit inside a threshold band and have no
    notification record for that threshold yet, in fetch order.

    Read-only. Storage errors propagate to the caller.
    """
    obligations = store.list_active_obligations_due_within(MAX_HORIZON_DAYS, now)

    eligible = []
    for obligation in obligations:
        if obligation.status != ACTIVE_STATUS:
            continue

        days = days_until(obligation.deadline_at, now)
        threshold = classify_threshold(days)
        if threshold is None:
            continue

        # Any prior attempt at this threshold counts, failed or not
        if store.has_notification_record(obligation.id, threshold):
            logger.debug(f"Obligation {obligation.id}: {threshold}-day notice already recorded")
            continue

        eligible.append(
            EligibleObligation(
                **obligation.dict(),
                days_until_deadline=days,
                notification_threshold=threshold,
            )
        )

    return eligible
