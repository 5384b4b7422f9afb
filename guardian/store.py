"""
SQLAlchemy implementation of the notification engine's store contract
(see notifier/store.py). Used in-process by the cron route and behind the
internal endpoints the worker calls.
"""
from datetime import datetime, timedelta
from typing import List, Optional
from sqlalchemy.orm import Session

from guardian.enums import ObligationStatus, NotificationType
from guardian.models import Obligation, ObligationNotification, User
from guardian.schemas import to_naive_utc
from notifier.schemas import DueObligation


class SqlAlchemyNotificationStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_active_obligations_due_within(self, max_horizon_days: int, now: datetime) -> List[DueObligation]:
        horizon = to_naive_utc(now) + timedelta(days=max_horizon_days)

        rows = self.db.query(Obligation, User).join(User, Obligation.user_id == User.id).filter(
            Obligation.status == ObligationStatus.active,
            Obligation.deadline_at < horizon
        ).order_by(Obligation.id).all()

        return [
            DueObligation(
                id=obligation.id,
                user_id=obligation.user_id,
                title=obligation.title,
                category=obligation.category.value,
                deadline_at=obligation.deadline_at,
                consequence=obligation.consequence,
                severity=obligation.severity.value,
                status=obligation.status.value,
                owner_email=user.email,
                owner_name=user.name,
            )
            for obligation, user in rows
        ]

    def has_notification_record(self, obligation_id: int, threshold: int) -> bool:
        existing = self.db.query(ObligationNotification.id).filter(
            ObligationNotification.obligation_id == obligation_id,
            ObligationNotification.days_before_deadline == threshold
        ).first()
        return existing is not None

    def append_notification_record(
        self,
        obligation_id: int,
        user_id: int,
        notification_type: str,
        threshold: int,
        success: bool,
        error_message: Optional[str] = None,
    ) -> None:
        record = ObligationNotification(
            obligation_id=obligation_id,
            user_id=user_id,
            type=NotificationType(notification_type),
            days_before_deadline=threshold,
            sent_at=datetime.utcnow(),
            success=success,
            error_message=error_message,
        )
        self.db.add(record)
        self.db.commit()

    def touch_last_notification(self, obligation_id: int, now: datetime) -> None:
        self.db.query(Obligation).filter(Obligation.id == obligation_id).update(
            {Obligation.last_notification_at: to_naive_utc(now)},
            synchronize_session=False
        )
        self.db.commit()
