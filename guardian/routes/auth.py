from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from guardian.schemas import UserCreate, UserLogin, Token
from guardian.models import User, AuthCredential, Team, TokenBlacklist
from guardian.dependencies import get_db, get_current_user, security
from guardian.security import hash_password, verify_password, create_access_token
from guardian.config import config
import jwt
from datetime import datetime

router = APIRouter()

# =========================================================
# AUTH ENDPOINTS
# =========================================================
@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
def signup(user_data: UserCreate, db: Session = Depends(get_db)):
    if not config.SECRET_KEY:
        raise HTTPException(status_code=500, detail="Server misconfiguration: SECRET_KEY not set")

    existing = db.query(User).filter(User.email == user_data.email).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")

    # Every new user starts on their own free-tier team
    team = Team(name=user_data.team_name or f"{user_data.name}'s Team")
    db.add(team)
    db.flush()

    user = User(
        team_id=team.id,
        name=user_data.name,
        email=user_data.email
    )
    db.add(user)
    db.flush()

    auth = AuthCredential(
        user_id=user.id,
        password_hash=hash_password(user_data.password)
    )
    db.add(auth)
    db.commit()

    token = create_access_token({"sub": user.id})
    return {"access_token": token, "token_type": "bearer"}

@router.post("/login", response_model=Token)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == credentials.email).first()
    if not user or not user.auth_credential:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if not verify_password(credentials.password, user.auth_credential.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": user.id})
    return {"access_token": token, "token_type": "bearer"}

@router.post("/logout")
def logout(
    credentials = Depends(security),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    token = credentials.credentials

    try:
        payload = jwt.decode(token, options={"verify_signature": False})
        exp = payload.get("exp")
        expires_at = datetime.utcfromtimestamp(exp) if exp else datetime.utcnow()
    except jwt.InvalidTokenError:
        expires_at = datetime.utcnow()

    blacklisted = TokenBlacklist(token=token, expires_at=expires_at)
    db.add(blacklisted)
    db.commit()

    return {"message": "Logged out successfully"}
