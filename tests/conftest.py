import os

# Configure the app for an in-memory database before any guardian import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ.setdefault("EMAIL_TRANSPORT", "console")

from datetime import datetime, timedelta
from itertools import count
import pytest
import pytz

from notifier.schemas import DueObligation

NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=pytz.utc)


class InMemoryStore:
    """Store fake: obligations and notification records held in lists."""

    def __init__(self):
        self.obligations = []
        self.records = []
        self.touched = {}
        self.fail_on_list = None
        self._ids = count(1)

    def add_obligation(self, deadline_at, status="ACTIVE", title=None, **fields):
        obligation_id = next(self._ids)
        obligation = DueObligation(
            id=obligation_id,
            user_id=fields.pop("user_id", 1),
            title=title or f"Obligation {obligation_id}",
            category=fields.pop("category", "TAX"),
            deadline_at=deadline_at,
            consequence=fields.pop("consequence", "Late fee of $500"),
            severity=fields.pop("severity", "HIGH"),
            status=status,
            owner_email=fields.pop("owner_email", f"owner{obligation_id}@example.com"),
            owner_name=fields.pop("owner_name", "Owner"),
        )
        self.obligations.append(obligation)
        return obligation

    def list_active_obligations_due_within(self, max_horizon_days, now):
        if self.fail_on_list:
            raise self.fail_on_list
        horizon = now + timedelta(days=max_horizon_days)
        return [
            o for o in self.obligations
            if o.status == "ACTIVE" and o.deadline_at < horizon
        ]

    def has_notification_record(self, obligation_id, threshold):
        return any(
            r["obligation_id"] == obligation_id and r["days_before_deadline"] == threshold
            for r in self.records
        )

    def append_notification_record(self, obligation_id, user_id, notification_type, threshold, success, error_message=None):
        self.records.append({
            "obligation_id": obligation_id,
            "user_id": user_id,
            "type": notification_type,
            "days_before_deadline": threshold,
            "success": success,
            "error_message": error_message,
        })

    def touch_last_notification(self, obligation_id, now):
        self.touched[obligation_id] = now


class RecordingTransport:
    """Transport fake: remembers every email and fails for chosen recipients."""

    def __init__(self, fail_for=(), raise_for=()):
        self.sent = []
        self.fail_for = set(fail_for)
        self.raise_for = set(raise_for)

    def deliver(self, to_address, subject, html, text):
        if to_address in self.raise_for:
            raise ConnectionError(f"SMTP connection refused for {to_address}")
        if to_address in self.fail_for:
            return False
        self.sent.append({"to": to_address, "subject": subject, "html": html, "text": text})
        return True


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def make_transport():
    return RecordingTransport
