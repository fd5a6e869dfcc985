import uuid
from enum import Enum

from sqlalchemy import Column, Text, DateTime, Uuid

from .base import Base, utcnow


class PlanType(str, Enum):
    FREEMIUM = "FREEMIUM"
    PREMIUM = "PREMIUM"


class SubscriptionStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Subscription(Base):
    """
    Subscription record owned by the billing system.

    Read-only input to the notification gate.
    """
    __tablename__ = 'subscription'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, unique=True, index=True)
    plan_type = Column(Text, nullable=False, default=PlanType.FREEMIUM.value)
    status = Column(Text, nullable=False, default=SubscriptionStatus.ACTIVE.value)
    expires_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
