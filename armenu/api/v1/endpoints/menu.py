from fastapi import APIRouter, Depends, Query, UploadFile, File as FileParam
from typing import Optional, Union
from armenu.api.deps import get_menu_service, get_query_engine, get_resolver
from armenu.core.config import settings
from armenu.core.errors import MenuValidationError
from armenu.core.security import Principal, get_current_principal, require_access
from armenu.schemas.menu import (
    DeleteResponse,
    ImportReport,
    MenuCategoryCreate,
    MenuCategoryMessage,
    MenuItemCreate,
    MenuItemMessage,
    MenuItemResponse,
    MenuItemUpdateRequest,
    MenuResponse,
)
from armenu.schemas.restaurant import RestaurantPublic
from armenu.services.menu_import import menu_import_service
from armenu.services.menu_query import MenuQueryEngine
from armenu.services.menu_service import MenuService
from armenu.services.resolver import RestaurantResolver

router = APIRouter(prefix="/menu", tags=["Menu"])

@router.get("", response_model=Union[MenuResponse, MenuItemResponse])
async def get_menu(
    restaurant_id: Optional[str] = None,
    r: Optional[str] = Query(None, description="QR code secret"),
    domain: Optional[str] = Query(None, description="Custom domain slug"),
    category: Optional[str] = None,
    search: Optional[str] = None,
    item_id: Optional[str] = None,
    include_info: bool = False,
    resolver: RestaurantResolver = Depends(get_resolver),
    engine: MenuQueryEngine = Depends(get_query_engine),
):
    """Customer menu. Identifier precedence: restaurant_id, then r, then domain."""
    restaurant = await resolver.resolve(restaurant_id=restaurant_id, qr_secret=r, domain=domain)
    info = RestaurantPublic.model_validate(restaurant) if include_info else None

    if item_id:
        item = await engine.get_item(item_id, restaurant.id)
        return MenuItemResponse(item=item, restaurant=info)

    view = await engine.query_menu(restaurant.id, category=category, search_term=search)
    return MenuResponse(
        items=view.items,
        categories=view.categories,
        total=len(view.items),
        restaurant=info,
    )

@router.post("", response_model=MenuItemMessage, status_code=201)
async def create_menu_item(
    item_in: MenuItemCreate,
    principal: Principal = Depends(get_current_principal),
    menu_service: MenuService = Depends(get_menu_service),
):
    require_access(principal, item_in.restaurant_id, "write")
    item = await menu_service.create_item(item_in)
    return MenuItemMessage(message="Item created successfully", item=item)

@router.put("", response_model=MenuItemMessage)
async def update_menu_item(
    update_in: MenuItemUpdateRequest,
    principal: Principal = Depends(get_current_principal),
    menu_service: MenuService = Depends(get_menu_service),
):
    require_access(principal, update_in.restaurant_id, "write")
    item = await menu_service.update_item(update_in.id, update_in.restaurant_id, update_in)
    return MenuItemMessage(message="Item updated successfully", item=item)

@router.delete("", response_model=DeleteResponse)
async def delete_menu_item(
    id: str = Query(..., min_length=1),
    restaurant_id: str = Query(..., min_length=1),
    principal: Principal = Depends(get_current_principal),
    menu_service: MenuService = Depends(get_menu_service),
):
    require_access(principal, restaurant_id, "delete")
    success = await menu_service.delete_item(id, restaurant_id)
    return DeleteResponse(message="Item deleted successfully", success=success)

@router.post("/import", response_model=ImportReport)
async def import_menu(
    restaurant_id: str = Query(..., min_length=1),
    file: UploadFile = FileParam(...),
    principal: Principal = Depends(get_current_principal),
    resolver: RestaurantResolver = Depends(get_resolver),
    menu_service: MenuService = Depends(get_menu_service),
):
    require_access(principal, restaurant_id, "write")
    await resolver.lookup(restaurant_id=restaurant_id)

    content = await file.read()
    if len(content) > settings.MAX_IMPORT_BYTES:
        raise MenuValidationError("File too large")

    content_type = (file.content_type or "").split(";")[0].strip()
    rows = menu_import_service.parse_menu_file(content, content_type)
    return await menu_import_service.import_items(menu_service, restaurant_id, rows)

@router.post("/categories", response_model=MenuCategoryMessage, status_code=201)
async def create_category(
    category_in: MenuCategoryCreate,
    principal: Principal = Depends(get_current_principal),
    menu_service: MenuService = Depends(get_menu_service),
):
    require_access(principal, category_in.restaurant_id, "write")
    category = await menu_service.create_category(category_in)
    return MenuCategoryMessage(message="Category created successfully", category=category)
