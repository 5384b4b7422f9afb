from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Enum as SQLEnum, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from guardian.database import Base
from guardian.enums import ObligationStatus, ObligationSeverity, ObligationCategory, NotificationType

# =========================================================
# DATABASE MODELS
# All timestamps are naive UTC.
# =========================================================
class Team(Base):
    __tablename__ = "teams"
    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    stripe_customer_id = Column(Text, unique=True)
    stripe_subscription_id = Column(Text, unique=True)
    plan_name = Column(String(50))
    subscription_status = Column(String(20))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    members = relationship("User", back_populates="team")

    @property
    def has_active_subscription(self) -> bool:
        return bool(self.stripe_subscription_id) and self.subscription_status in ("active", "trialing")

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    team_id = Column(Integer, ForeignKey("teams.id"))
    name = Column(String(100))
    email = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    team = relationship("Team", back_populates="members")
    auth_credential = relationship("AuthCredential", back_populates="user", uselist=False)
    obligations = relationship("Obligation", back_populates="owner")

class AuthCredential(Base):
    __tablename__ = "auth_credentials"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="auth_credential")

class TokenBlacklist(Base):
    __tablename__ = "token_blacklist"
    id = Column(Integer, primary_key=True)
    token = Column(Text, unique=True, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

class Obligation(Base):
    __tablename__ = "critical_obligations"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    team_id = Column(Integer, ForeignKey("teams.id"))
    title = Column(String(255), nullable=False)
    category = Column(SQLEnum(ObligationCategory), nullable=False)
    deadline_at = Column(DateTime, nullable=False)
    consequence = Column(Text, nullable=False)
    severity = Column(SQLEnum(ObligationSeverity), nullable=False)
    status = Column(SQLEnum(ObligationStatus), nullable=False, default=ObligationStatus.active)
    last_notification_at = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    owner = relationship("User", back_populates="obligations")
    notifications = relationship(
        "ObligationNotification",
        back_populates="obligation",
        cascade="all, delete-orphan",
        order_by="ObligationNotification.sent_at"
    )

    __table_args__ = (
        Index("ix_obligations_status_deadline", "status", "deadline_at"),
    )

class ObligationNotification(Base):
    """Append-only log of notification attempts. No uniqueness constraint on
    (obligation_id, days_before_deadline); the scanner checks before sending."""
    __tablename__ = "obligation_notifications"
    id = Column(Integer, primary_key=True)
    obligation_id = Column(Integer, ForeignKey("critical_obligations.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    type = Column(SQLEnum(NotificationType), nullable=False, default=NotificationType.email)
    days_before_deadline = Column(Integer, nullable=False)
    sent_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    success = Column(Boolean, nullable=False)
    error_message = Column(Text)

    obligation = relationship("Obligation", back_populates="notifications")

    __table_args__ = (
        Index("ix_notifications_obligation_threshold", "obligation_id", "days_before_deadline"),
    )
