from datetime import datetime
import logging
import pytz
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from guardian.dependencies import get_db, is_cron_authorized
from guardian.store import SqlAlchemyNotificationStore
from notifier.dispatcher import process_notifications
from notifier.transport import EmailTransport, build_transport

logger = logging.getLogger(__name__)

router = APIRouter()

def get_transport() -> EmailTransport:
    return build_transport()

def _timestamp() -> str:
    return datetime.now(pytz.utc).isoformat()

# =========================================================
# CRON TRIGGER
# Called every 6 hours by an external scheduler, or manually.
# =========================================================
@router.api_route("/notifications", methods=["GET", "POST"])
def run_notifications(
    request: Request,
    db: Session = Depends(get_db),
    transport: EmailTransport = Depends(get_transport)
):
    if not is_cron_authorized(request.headers.get("authorization")):
        return JSONResponse({"error": "Unauthorized"}, status_code=401)

    try:
        logger.info("🚀 Cron job triggered: Processing notifications...")
        result = process_notifications(SqlAlchemyNotificationStore(db), transport)

        content = {"success": result.success, "timestamp": _timestamp()}
        if result.success:
            content.update(sent=result.sent, failed=result.failed)
        else:
            content["error"] = result.error
        return JSONResponse(content)

    except Exception as e:
        logger.error(f"Cron job error: {e}", exc_info=True)
        return JSONResponse(
            {"success": False, "error": str(e) or "Unknown error", "timestamp": _timestamp()},
            status_code=500
        )
