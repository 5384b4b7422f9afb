"""
Storage collaborators for the notification engine.

``NotificationStore`` is the contract the engine reads and writes through.
``InternalApiStore`` implements it over HTTP against guardian/routes/internals.py
and is what the standalone worker uses. The in-process SQLAlchemy
implementation lives in guardian/store.py.
"""
import logging
from datetime import datetime
from typing import List, Optional, Protocol
import requests

from .config import config
from .schemas import DueObligation

logger = logging.getLogger(__name__)


class NotificationStore(Protocol):
    def list_active_obligations_due_within(self, max_horizon_days: int, now: datetime) -> List[DueObligation]:
        ...

    def has_notification_record(self, obligation_id: int, threshold: int) -> bool:
        ...

    def append_notification_record(
        self,
        obligation_id: int,
        user_id: int,
        notification_type: str,
        threshold: int,
        success: bool,
        error_message: Optional[str] = None,
    ) -> None:
        ...

    def touch_last_notification(self, obligation_id: int, now: datetime) -> None:
        ...


class InternalApiStore:
    """
    Store backed by the guardian internal API.

    Every call raises ``requests.RequestException`` on failure so the
    dispatcher can abort the run instead of acting on partial data.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or config.INTERNAL_API_URL).rstrip("/")
        self.token = token if token is not None else config.CRON_SECRET
        self.timeout = timeout or config.INTERNAL_API_TIMEOUT
        self.session = session or requests.Session()

    def _api_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _headers(self) -> dict:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def list_active_obligations_due_within(self, max_horizon_days: int, now: datetime) -> List[DueObligation]:
        resp = self.session.get(
            self._api_url("/obligations-due"),
            params={"horizon_days": max_horizon_days, "now": now.isoformat()},
            headers=self._headers(),
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return [DueObligation(**item) for item in resp.json()]

    def has_notification_record(self, obligation_id: int, threshold: int) -> bool:
        resp = self.session.get(
            self._api_url(f"/notifications/{obligation_id}/{threshold}"),
            headers=self._headers(),
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json().get("exists", False)

    def append_notification_record(
        self,
        obligation_id: int,
        user_id: int,
        notification_type: str,
        threshold: int,
        success: bool,
        error_message: Optional[str] = None,
    ) -> None:
        resp = self.session.post(
            self._api_url("/notifications"),
            json={
                "obligation_id": obligation_id,
                "user_id": user_id,
                "type": notification_type,
                "days_before_deadline": threshold,
                "success": success,
                "error_message": error_message,
            },
            headers=self._headers(),
            timeout=self.timeout,
        )
        resp.raise_for_status()

    def touch_last_notification(self, obligation_id: int, now: datetime) -> None:
        resp = self.session.post(
            self._api_url(f"/obligations/{obligation_id}/touch"),
            json={"notified_at": now.isoformat()},
            headers=self._headers(),
            timeout=self.timeout,
        )
        resp.raise_for_status()
