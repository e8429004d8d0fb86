from fastapi import APIRouter, Depends
from typing import List
from armenu.api.deps import get_query_engine, get_resolver
from armenu.core.security import Principal, get_current_principal, require_access
from armenu.schemas.menu import MenuItem
from armenu.schemas.restaurant import Restaurant
from armenu.services.menu_query import MenuQueryEngine
from armenu.services.resolver import RestaurantResolver

router = APIRouter(prefix="/dashboard", tags=["Owner Dashboard"])

@router.get("/restaurants", response_model=List[Restaurant])
async def my_restaurants(
    principal: Principal = Depends(get_current_principal),
    engine: MenuQueryEngine = Depends(get_query_engine),
):
    return await engine.list_owner_restaurants(principal.owner_id)

@router.get("/restaurants/{restaurant_id}/items", response_model=List[MenuItem])
async def restaurant_items(
    restaurant_id: str,
    include_inactive: bool = False,
    principal: Principal = Depends(get_current_principal),
    resolver: RestaurantResolver = Depends(get_resolver),
    engine: MenuQueryEngine = Depends(get_query_engine),
):
    require_access(principal, restaurant_id, "read")
    await resolver.lookup(restaurant_id=restaurant_id)
    return await engine.list_items_for_admin(restaurant_id, include_inactive=include_inactive)

@router.get("/restaurants/{restaurant_id}/items/{item_id}", response_model=MenuItem)
async def restaurant_item(
    restaurant_id: str,
    item_id: str,
    principal: Principal = Depends(get_current_principal),
    engine: MenuQueryEngine = Depends(get_query_engine),
):
    require_access(principal, restaurant_id, "read")
    return await engine.get_item(item_id, restaurant_id)
