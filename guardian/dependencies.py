import hmac
import logging
from typing import Optional
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import jwt
from guardian.database import SessionLocal
from guardian.models import User, TokenBlacklist
from guardian.config import config

logger = logging.getLogger(__name__)

security = HTTPBearer()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    if not config.SECRET_KEY:
        raise HTTPException(status_code=500, detail="Server misconfiguration: SECRET_KEY not set")

    token = credentials.credentials

    blacklisted = db.query(TokenBlacklist).filter(TokenBlacklist.token == token).first()
    if blacklisted:
        raise HTTPException(status_code=401, detail="Token has been invalidated (logged out)")

    try:
        payload = jwt.decode(
            token,
            config.SECRET_KEY,
            algorithms=[config.ALGORITHM],
            options={"verify_signature": True, "verify_exp": True, "verify_sub": False}
        )
        sub = payload.get("sub")
        if sub is None:
            raise HTTPException(status_code=401, detail="Invalid token: subject missing")
        try:
            user_id = int(sub)
        except (TypeError, ValueError):
            raise HTTPException(status_code=401, detail="Invalid token: subject is not an integer id")

    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except jwt.InvalidTokenError as e:
        logger.debug(f"Token decode error: {e!r}")
        raise HTTPException(status_code=401, detail="Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")

    return user

def is_cron_authorized(authorization: Optional[str]) -> bool:
    """True when no CRON_SECRET is configured or the header carries it."""
    if not config.CRON_SECRET:
        return True
    expected = f"Bearer {config.CRON_SECRET}"
    return hmac.compare_digest((authorization or "").encode(), expected.encode())

def verify_cron_secret(request: Request):
    """Guard for the internal endpoints used by the notification worker."""
    if not is_cron_authorized(request.headers.get("authorization")):
        raise HTTPException(status_code=401, detail="Unauthorized")
