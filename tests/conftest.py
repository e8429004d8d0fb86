from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from armenu.core.config import settings
from armenu.main import create_app
from armenu.services.menu_query import MenuQueryEngine
from armenu.services.menu_service import MenuService
from armenu.services.record_store import InMemoryRecordStore
from armenu.services.resolver import RestaurantResolver
from armenu.services.seed import load_seed


def seed_document() -> dict:
    return {
        "restaurants": [
            {
                "id": "bistro-1",
                "name": "Delicious AR Bistro",
                "description": "Fine dining in augmented reality",
                "owner_id": "owner-1",
                "is_active": True,
                "subscription_plan": "premium",
                "qr_code_secret": "bistro-secret",
                "custom_domain": "bistro",
            },
            {
                "id": "closed-1",
                "name": "Closed Diner",
                "owner_id": "owner-1",
                "is_active": False,
                "qr_code_secret": "closed-secret",
                "custom_domain": "closed",
            },
            {
                "id": "other-1",
                "name": "Other Place",
                "owner_id": "owner-2",
                "is_active": True,
                "qr_code_secret": "other-secret",
                "custom_domain": "other",
            },
            {
                "id": "empty-1",
                "name": "Empty Kitchen",
                "owner_id": "owner-1",
                "is_active": True,
            },
        ],
        "categories": [
            {"id": "mains", "name": "Main Course", "restaurant_id": "bistro-1", "sort_order": 2},
            {"id": "starters", "name": "Starters", "restaurant_id": "bistro-1", "sort_order": 1},
            {"id": "drinks", "name": "Beverages", "restaurant_id": "bistro-1", "sort_order": 1},
            {"id": "mains", "name": "Mains", "restaurant_id": "other-1"},
            {"id": "soups", "name": "Soups", "restaurant_id": "empty-1", "sort_order": 1},
            {"id": "specials", "name": "Specials", "restaurant_id": "closed-1"},
        ],
        "items": [
            {
                "id": "a",
                "name": "AR Deluxe Burger",
                "description": "Beef patty with cheddar",
                "price": 18.99,
                "category": "mains",
                "restaurant_id": "bistro-1",
                "allergens": ["gluten", "dairy"],
                "is_vegetarian": False,
                "spicy_level": 1,
            },
            {
                "id": "b",
                "name": "Caesar Salad",
                "description": "Romaine and parmesan",
                "price": 12.99,
                "category": "starters",
                "restaurant_id": "bistro-1",
                "allergens": ["dairy"],
                "is_vegetarian": True,
            },
            {
                "id": "c",
                "name": "Old Soup",
                "description": "No longer served",
                "price": 5.0,
                "category": "starters",
                "restaurant_id": "bistro-1",
                "is_active": False,
            },
            {
                # Category has no record: dangling references are allowed
                "id": "d",
                "name": "Garden Bowl",
                "description": "Quinoa and roasted roots",
                "price": 11.0,
                "category": "bowls",
                "restaurant_id": "bistro-1",
                "is_vegan": True,
            },
            {
                # Same bare id as bistro-1's burger, different tenant
                "id": "a",
                "name": "Other Burger",
                "price": 9.0,
                "category": "mains",
                "restaurant_id": "other-1",
            },
            {
                "id": "gone",
                "name": "Gone Stew",
                "price": 7.0,
                "category": "soups",
                "restaurant_id": "empty-1",
                "is_active": False,
            },
        ],
    }


@pytest.fixture
async def store():
    store = InMemoryRecordStore()
    await load_seed(store, seed_document())
    return store


@pytest.fixture
def resolver(store):
    return RestaurantResolver(store)


@pytest.fixture
def engine(store):
    return MenuQueryEngine(store)


@pytest.fixture
def menu_service(store):
    return MenuService(store)


@pytest.fixture
async def client(store):
    app = create_app(store=store)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def auth_headers(owner_id="owner-1", restaurants=("bistro-1", "closed-1", "empty-1"), role="owner", permissions=None):
    claims = {"sub": owner_id, "role": role, "restaurants": list(restaurants)}
    if permissions is not None:
        claims["permissions"] = permissions
    claims["exp"] = datetime.now(timezone.utc) + timedelta(minutes=30)
    token = jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner_headers():
    return auth_headers()


@pytest.fixture
def seed_doc():
    return seed_document()


@pytest.fixture
def make_headers():
    return auth_headers
