from sqlalchemy.orm import Session
from guardian.config import config
from guardian.enums import ObligationStatus
from guardian.models import Obligation, User

def has_active_subscription(user: User) -> bool:
    """Paid teams (active or trialing subscription) are not limited"""
    return bool(user.team and user.team.has_active_subscription)

def count_active_obligations(db: Session, user_id: int) -> int:
    return db.query(Obligation).filter(
        Obligation.user_id == user_id,
        Obligation.status == ObligationStatus.active
    ).count()

def obligation_limit_for(user: User):
    """None means unlimited"""
    if has_active_subscription(user):
        return None
    return config.FREE_TIER_OBLIGATION_LIMIT

def can_create_obligation(db: Session, user: User) -> bool:
    limit = obligation_limit_for(user)
    if limit is None:
        return True
    return count_active_obligations(db, user.id) < limit

def check_obligation_access(user_id: int, obligation: Obligation) -> bool:
    """Obligations are visible to their owner only"""
    return obligation is not None and obligation.user_id == user_id
