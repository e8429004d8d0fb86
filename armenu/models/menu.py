from datetime import datetime
from sqlalchemy import String, Integer, Float, Boolean, DateTime, JSON, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column
from armenu.core.database import Base
from typing import List, Optional

class MenuCategory(Base):
    __tablename__ = "menu_categories"
    
    restaurant_id: Mapped[str] = mapped_column(ForeignKey("restaurants.id"), primary_key=True)
    id: Mapped[str] = mapped_column(String(200), primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    icon: Mapped[str] = mapped_column(String, default="")
    sort_order: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    # Insertion order, breaks sort_order ties
    insert_seq: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

class MenuItem(Base):
    __tablename__ = "menu_items"
    
    restaurant_id: Mapped[str] = mapped_column(ForeignKey("restaurants.id"), primary_key=True)
    id: Mapped[str] = mapped_column(String(200), primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    price: Mapped[float] = mapped_column(Float, nullable=False)
    image: Mapped[str] = mapped_column(String, default="")
    # Category id; dangling references are allowed, so no foreign key
    category: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    model_3d: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    allergens: Mapped[List[str]] = mapped_column(JSON, default=list)
    is_vegetarian: Mapped[bool] = mapped_column(Boolean, default=False)
    is_vegan: Mapped[bool] = mapped_column(Boolean, default=False)
    spicy_level: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
