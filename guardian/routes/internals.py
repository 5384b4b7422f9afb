from typing import List, Optional
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from guardian.models import Obligation
from guardian.schemas import NotificationRecordCreate, NotificationTouch
from guardian.dependencies import get_db, verify_cron_secret
from guardian.store import SqlAlchemyNotificationStore
from notifier.schemas import DueObligation
from notifier.scheduler_config import MAX_HORIZON_DAYS

router = APIRouter(dependencies=[Depends(verify_cron_secret)])

# =========================================================
# INTERNAL ENDPOINTS (CRON_SECRET bearer when configured)
# Used by the notification worker (notifier/store.py)
# =========================================================

@router.get("/obligations-due", response_model=List[DueObligation])
def list_obligations_due(
    horizon_days: int = Query(default=MAX_HORIZON_DAYS, ge=0, le=366),
    now: Optional[datetime] = Query(None),
    db: Session = Depends(get_db)
):
    """ACTIVE obligations with a deadline earlier than now + horizon_days, joined with owner contact."""
    store = SqlAlchemyNotificationStore(db)
    return store.list_active_obligations_due_within(horizon_days, now or datetime.utcnow())


@router.get("/notifications/{obligation_id}/{threshold}")
def check_notification_exists(obligation_id: int, threshold: int, db: Session = Depends(get_db)):
    """Check whether a notification was already attempted at this threshold (idempotency)."""
    store = SqlAlchemyNotificationStore(db)
    return {"exists": store.has_notification_record(obligation_id, threshold)}


@router.post("/notifications", status_code=201)
def append_notification(record: NotificationRecordCreate, db: Session = Depends(get_db)):
    """Append a notification attempt to the log."""
    obligation = db.query(Obligation).filter(Obligation.id == record.obligation_id).first()
    if not obligation:
        raise HTTPException(status_code=404, detail="Obligation not found")

    store = SqlAlchemyNotificationStore(db)
    store.append_notification_record(
        record.obligation_id,
        record.user_id,
        record.type.value,
        record.days_before_deadline,
        record.success,
        record.error_message
    )
    return {"status": "ok"}


@router.post("/obligations/{obligation_id}/touch")
def touch_obligation(obligation_id: int, body: NotificationTouch, db: Session = Depends(get_db)):
    """Stamp last_notification_at after a successful delivery."""
    obligation = db.query(Obligation).filter(Obligation.id == obligation_id).first()
    if not obligation:
        raise HTTPException(status_code=404, detail="Obligation not found")

    SqlAlchemyNotificationStore(db).touch_last_notification(obligation_id, body.notified_at)
    return {"status": "ok"}
