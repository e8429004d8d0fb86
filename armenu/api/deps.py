from fastapi import Depends, Request
from armenu.services.menu_query import MenuQueryEngine
from armenu.services.menu_service import MenuService
from armenu.services.record_store import RecordStore
from armenu.services.resolver import RestaurantResolver

def get_store(request: Request) -> RecordStore:
    return request.app.state.store

def get_resolver(store: RecordStore = Depends(get_store)) -> RestaurantResolver:
    return RestaurantResolver(store)

def get_query_engine(store: RecordStore = Depends(get_store)) -> MenuQueryEngine:
    return MenuQueryEngine(store)

def get_menu_service(store: RecordStore = Depends(get_store)) -> MenuService:
    return MenuService(store)
