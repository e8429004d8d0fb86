from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from armenu.models.restaurant import SubscriptionPlan

class RestaurantTheme(BaseModel):
    primary_color: str = "#667eea"
    secondary_color: str = "#764ba2"
    background_color: str = "#f8f9fa"
    font_family: str = "Roboto"
    logo: Optional[str] = None
    banner_image: Optional[str] = None

class RestaurantBase(BaseModel):
    name: str
    description: str = ""
    logo: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    subscription_plan: SubscriptionPlan = SubscriptionPlan.BASIC
    custom_domain: Optional[str] = None
    theme: Optional[RestaurantTheme] = None

class Restaurant(RestaurantBase):
    """Full tenant record as held by the record store."""
    model_config = ConfigDict(from_attributes=True, frozen=True)
    
    id: str
    owner_id: str
    is_active: bool = True
    qr_code_secret: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class RestaurantPublic(RestaurantBase):
    # Customer-facing view: no owner reference, no QR secret
    model_config = ConfigDict(from_attributes=True)
    
    id: str
    is_active: bool
