from typing import List
from datetime import datetime
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from guardian.schemas import (
    ObligationCreate, ObligationUpdate, ObligationResponse, ObligationUsage,
    NotificationRecordResponse
)
from guardian.models import Obligation, ObligationNotification, User
from guardian.enums import ObligationStatus, UrgencyLevel
from guardian.dependencies import get_db, get_current_user
from guardian.permissions import (
    can_create_obligation, count_active_obligations, obligation_limit_for,
    has_active_subscription, check_obligation_access
)
from notifier.thresholds import days_until

logger = logging.getLogger(__name__)

router = APIRouter()

# =========================================================
# HELPERS
# =========================================================
def urgency_for(days: int, obligation_status: ObligationStatus) -> UrgencyLevel:
    """Display urgency for the obligation list. Independent of notification thresholds."""
    if obligation_status != ObligationStatus.active:
        return UrgencyLevel.safe
    if days <= 1:
        return UrgencyLevel.critical
    if days <= 7:
        return UrgencyLevel.danger
    if days <= 30:
        return UrgencyLevel.warning
    return UrgencyLevel.safe

def _to_response(obligation: Obligation, now: datetime) -> ObligationResponse:
    response = ObligationResponse.from_orm(obligation)
    days = days_until(obligation.deadline_at, now)
    response.days_until_deadline = days
    response.urgency = urgency_for(days, obligation.status)
    response.is_overdue = obligation.status == ObligationStatus.active and days < 0
    return response

def _get_owned_obligation(db: Session, obligation_id: int, user: User) -> Obligation:
    obligation = db.query(Obligation).filter(Obligation.id == obligation_id).first()
    # Foreign obligations are reported as missing
    if not check_obligation_access(user.id, obligation):
        raise HTTPException(status_code=404, detail="Obligation not found")
    return obligation

# =========================================================
# OBLIGATION ENDPOINTS
# =========================================================
@router.post("/", response_model=ObligationResponse, status_code=status.HTTP_201_CREATED)
def create_obligation(
    obligation_data: ObligationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # Paywall: free tier is limited to a fixed number of active obligations
    if not can_create_obligation(db, current_user):
        limit = obligation_limit_for(current_user)
        raise HTTPException(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail={
                "error": "LIMIT_REACHED",
                "message": f"Free tier limited to {limit} active obligations. Upgrade to add unlimited obligations."
            }
        )

    obligation = Obligation(
        **obligation_data.dict(),
        user_id=current_user.id,
        team_id=current_user.team_id,
        status=ObligationStatus.active
    )
    db.add(obligation)
    db.commit()
    db.refresh(obligation)
    logger.info(f"Obligation {obligation.id} created by user {current_user.id}")
    return _to_response(obligation, datetime.utcnow())

@router.get("/", response_model=List[ObligationResponse])
def get_obligations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    obligations = db.query(Obligation).filter(
        Obligation.user_id == current_user.id
    ).order_by(Obligation.deadline_at).all()

    now = datetime.utcnow()
    return [_to_response(o, now) for o in obligations]

@router.get("/usage", response_model=ObligationUsage)
def get_usage(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    limit = obligation_limit_for(current_user)
    active_count = count_active_obligations(db, current_user.id)
    return ObligationUsage(
        active_count=active_count,
        limit=limit,
        has_subscription=has_active_subscription(current_user),
        can_create=limit is None or active_count < limit
    )

@router.get("/{obligation_id}", response_model=ObligationResponse)
def get_obligation(
    obligation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    obligation = _get_owned_obligation(db, obligation_id, current_user)
    return _to_response(obligation, datetime.utcnow())

@router.put("/{obligation_id}", response_model=ObligationResponse)
def update_obligation(
    obligation_id: int,
    obligation_data: ObligationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    obligation = _get_owned_obligation(db, obligation_id, current_user)

    for key, value in obligation_data.dict().items():
        setattr(obligation, key, value)

    db.commit()
    db.refresh(obligation)
    return _to_response(obligation, datetime.utcnow())

@router.post("/{obligation_id}/handled", response_model=ObligationResponse)
def mark_obligation_handled(
    obligation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    obligation = _get_owned_obligation(db, obligation_id, current_user)

    # HANDLED is terminal: no further notifications for this obligation
    obligation.status = ObligationStatus.handled
    db.commit()
    db.refresh(obligation)
    logger.info(f"Obligation {obligation.id} marked as handled")
    return _to_response(obligation, datetime.utcnow())

@router.delete("/{obligation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_obligation(
    obligation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    obligation = _get_owned_obligation(db, obligation_id, current_user)
    db.delete(obligation)
    db.commit()
    return None

@router.get("/{obligation_id}/notifications", response_model=List[NotificationRecordResponse])
def get_notification_history(
    obligation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    obligation = _get_owned_obligation(db, obligation_id, current_user)
    return db.query(ObligationNotification).filter(
        ObligationNotification.obligation_id == obligation.id
    ).order_by(ObligationNotification.sent_at).all()
