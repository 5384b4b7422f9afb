from typing import Optional
from datetime import datetime
from pydantic import BaseModel

# =========================================================
# NOTIFICATION ENGINE SCHEMAS
# =========================================================

class DueObligation(BaseModel):
    """An ACTIVE obligation joined with its owner's contact details."""
    id: int
    user_id: int
    title: str
    category: str
    deadline_at: datetime
    consequence: str
    severity: str
    status: str
    owner_email: str
    owner_name: Optional[str] = None

    class Config:
        from_attributes = True


class EligibleObligation(DueObligation):
    days_until_deadline: int
    notification_threshold: int


class EmailPayload(BaseModel):
    subject: str
    html: str
    text: str


class NotificationRunResult(BaseModel):
    success: bool
    sent: int = 0
    failed: int = 0
    error: Optional[str] = None
