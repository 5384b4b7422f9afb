from typing import List, Optional
from datetime import datetime
import pytz
from pydantic import BaseModel, Field, validator
from guardian.enums import ObligationStatus, ObligationSeverity, ObligationCategory, NotificationType, UrgencyLevel

# =========================================================
# PYDANTIC SCHEMAS
# =========================================================

def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.utc).replace(tzinfo=None)

# User Schemas
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=8, max_length=72)
    team_name: Optional[str] = None

    @validator("email")
    def normalize_email(cls, v):
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v.strip().lower()

class UserLogin(BaseModel):
    email: str
    password: str

    @validator("email")
    def normalize_email(cls, v):
        return v.strip().lower()

class Token(BaseModel):
    access_token: str
    token_type: str

# Obligation Schemas
class ObligationCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    category: ObligationCategory
    deadline_at: datetime
    consequence: str = Field(..., min_length=1, max_length=1000)
    severity: ObligationSeverity

    @validator("deadline_at")
    def store_as_utc(cls, v):
        return to_naive_utc(v)

class ObligationUpdate(ObligationCreate):
    pass

class ObligationResponse(BaseModel):
    id: int
    user_id: int
    team_id: Optional[int]
    title: str
    category: ObligationCategory
    deadline_at: datetime
    consequence: str
    severity: ObligationSeverity
    status: ObligationStatus
    last_notification_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    days_until_deadline: Optional[int] = None
    urgency: Optional[UrgencyLevel] = None
    is_overdue: bool = False

    class Config:
        from_attributes = True

class ObligationUsage(BaseModel):
    active_count: int
    limit: Optional[int]
    has_subscription: bool
    can_create: bool

# Notification Schemas
class NotificationRecordCreate(BaseModel):
    obligation_id: int
    user_id: int
    type: NotificationType = NotificationType.email
    days_before_deadline: int
    success: bool
    error_message: Optional[str] = None

class NotificationRecordResponse(BaseModel):
    id: int
    obligation_id: int
    user_id: int
    type: NotificationType
    days_before_deadline: int
    sent_at: datetime
    success: bool
    error_message: Optional[str]

    class Config:
        from_attributes = True

class NotificationTouch(BaseModel):
    notified_at: datetime

class CronRunResponse(BaseModel):
    success: bool
    sent: Optional[int] = None
    failed: Optional[int] = None
    timestamp: str
    error: Optional[str] = None

class NotificationHistory(BaseModel):
    obligation_id: int
    notifications: List[NotificationRecordResponse]
