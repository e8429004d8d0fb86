from datetime import datetime
from sqlalchemy import String, Boolean, DateTime, Enum, JSON, func
from sqlalchemy.orm import Mapped, mapped_column
from armenu.core.database import Base
from typing import Optional
import enum

class SubscriptionPlan(str, enum.Enum):
    BASIC = "basic"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"

SUBSCRIPTIONPLAN_ENUM = Enum(
    SubscriptionPlan,
    name="subscriptionplan",
    native_enum=True,
    values_callable=lambda enum_cls: [e.value for e in enum_cls],
)

class Restaurant(Base):
    __tablename__ = "restaurants"
    
    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    logo: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    owner_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    subscription_plan: Mapped[SubscriptionPlan] = mapped_column(SUBSCRIPTIONPLAN_ENUM, default=SubscriptionPlan.BASIC)
    # Alternate lookup keys
    qr_code_secret: Mapped[Optional[str]] = mapped_column(String, nullable=True, unique=True)
    custom_domain: Mapped[Optional[str]] = mapped_column(String, nullable=True, unique=True)
    theme: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
