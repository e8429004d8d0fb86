from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime
from armenu.schemas.restaurant import RestaurantPublic

DEFAULT_IMAGE = "/images/placeholder-food.jpg"

class MenuCategory(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)
    
    id: str
    restaurant_id: str
    name: str
    description: str = ""
    icon: str = ""
    sort_order: Optional[int] = None

class MenuCategoryCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)
    
    name: str = Field(..., min_length=1, max_length=200)
    restaurant_id: str = Field(..., min_length=1)
    description: str = ""
    icon: str = ""
    sort_order: Optional[int] = None

class MenuItem(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True, protected_namespaces=())
    
    id: str
    restaurant_id: str
    name: str
    description: str = ""
    price: float
    image: str = DEFAULT_IMAGE
    category: str
    model_3d: Optional[str] = None
    allergens: List[str] = Field(default_factory=list)
    is_vegetarian: bool = False
    is_vegan: bool = False
    spicy_level: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class MenuItemCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, protected_namespaces=())
    
    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    category: str = Field(..., min_length=1)
    restaurant_id: str = Field(..., min_length=1)
    description: str = ""
    image: str = DEFAULT_IMAGE
    model_3d: Optional[str] = None
    allergens: List[str] = Field(default_factory=list)
    is_vegetarian: bool = False
    is_vegan: bool = False
    spicy_level: int = Field(0, ge=0, le=3)

class MenuItemUpdate(BaseModel):
    """Partial update: only fields the caller actually sent are applied.

    The owning restaurant and the id are not part of this struct, so an item
    can never be moved to another tenant through an update.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore", protected_namespaces=())
    
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    category: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    model_3d: Optional[str] = None
    allergens: Optional[List[str]] = None
    is_vegetarian: Optional[bool] = None
    is_vegan: Optional[bool] = None
    spicy_level: Optional[int] = Field(None, ge=0, le=3)
    is_active: Optional[bool] = None
    
    @field_validator(
        "name", "price", "category", "description", "image", "allergens",
        "is_vegetarian", "is_vegan", "spicy_level", "is_active",
    )
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value

class MenuItemUpdateRequest(MenuItemUpdate):
    id: str = Field(..., min_length=1)
    restaurant_id: str = Field(..., min_length=1)

class MenuView(BaseModel):
    items: List[MenuItem]
    categories: List[MenuCategory]

class MenuResponse(MenuView):
    total: int
    restaurant: Optional[RestaurantPublic] = None

class MenuItemResponse(BaseModel):
    item: MenuItem
    restaurant: Optional[RestaurantPublic] = None

class MenuItemMessage(BaseModel):
    message: str
    item: MenuItem

class MenuCategoryMessage(BaseModel):
    message: str
    category: MenuCategory

class DeleteResponse(BaseModel):
    message: str
    success: bool

class ImportRowError(BaseModel):
    row: int
    error: str
    detail: str

class ImportReport(BaseModel):
    created: List[MenuItem]
    errors: List[ImportRowError]
    total_rows: int
