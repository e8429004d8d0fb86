import abc
import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Literal, Optional, Tuple

from armenu.core.errors import DuplicateItem, RestaurantNotFound, StoreUnavailable
from armenu.schemas.menu import MenuCategory, MenuItem
from armenu.schemas.restaurant import Restaurant

logger = logging.getLogger(__name__)

LookupChannel = Literal["id", "secret", "domain"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: Optional[datetime] = None) -> datetime:
    """Current time, forced strictly past ``previous`` so updates always move forward."""
    now = utcnow()
    if previous is not None:
        if previous.tzinfo is None:
            previous = previous.replace(tzinfo=timezone.utc)
        if now <= previous:
            now = previous + timedelta(microseconds=1)
    return now


class RecordStore(abc.ABC):
    """Storage contract for restaurants, categories and menu items.

    Every per-item method takes the compound ``(item_id, restaurant_id)`` key.
    Writes are atomic per record; failures of the backing storage raise
    ``StoreUnavailable`` immediately.
    """

    @abc.abstractmethod
    async def find_restaurant(self, by: LookupChannel, value: str) -> Optional[Restaurant]:
        ...

    @abc.abstractmethod
    async def list_restaurants_by_owner(self, owner_id: str) -> List[Restaurant]:
        ...

    @abc.abstractmethod
    async def insert_restaurant(self, restaurant: Restaurant) -> Restaurant:
        ...

    @abc.abstractmethod
    async def list_items(self, restaurant_id: str, include_inactive: bool = False) -> List[MenuItem]:
        ...

    @abc.abstractmethod
    async def get_item(self, item_id: str, restaurant_id: str) -> Optional[MenuItem]:
        ...

    @abc.abstractmethod
    async def insert_item(self, item: MenuItem) -> MenuItem:
        """Store a new item.

        ``RestaurantNotFound`` if the owning restaurant does not exist,
        ``DuplicateItem`` if the compound key is taken.
        """

    @abc.abstractmethod
    async def replace_item(self, item_id: str, restaurant_id: str, changes: dict) -> Optional[MenuItem]:
        """Merge ``changes`` over the stored item and bump ``updated_at``.

        Returns ``None`` when the compound key does not match.
        """

    @abc.abstractmethod
    async def mark_inactive(self, item_id: str, restaurant_id: str) -> Optional[MenuItem]:
        ...

    @abc.abstractmethod
    async def list_categories(self, restaurant_id: str) -> List[MenuCategory]:
        """Categories of one restaurant in insertion order."""

    @abc.abstractmethod
    async def insert_category(self, category: MenuCategory) -> MenuCategory:
        ...


class InMemoryRecordStore(RecordStore):
    """Process-local store.

    Records are frozen models; a write swaps in a whole new record under the
    collection lock, so readers see either the old or the new version.
    """

    def __init__(self):
        self._restaurants: Dict[str, Restaurant] = {}
        self._categories: Dict[Tuple[str, str], MenuCategory] = {}
        self._items: Dict[Tuple[str, str], MenuItem] = {}
        self._restaurant_lock = asyncio.Lock()
        self._category_lock = asyncio.Lock()
        self._item_lock = asyncio.Lock()
        self.available = True

    def _check_available(self):
        if not self.available:
            raise StoreUnavailable()

    def _require_restaurant(self, restaurant_id: str):
        if restaurant_id not in self._restaurants:
            raise RestaurantNotFound()

    async def find_restaurant(self, by: LookupChannel, value: str) -> Optional[Restaurant]:
        self._check_available()
        if by == "id":
            return self._restaurants.get(value)
        attr = {"secret": "qr_code_secret", "domain": "custom_domain"}[by]
        for restaurant in self._restaurants.values():
            if getattr(restaurant, attr) == value:
                return restaurant
        return None

    async def list_restaurants_by_owner(self, owner_id: str) -> List[Restaurant]:
        self._check_available()
        return [r for r in self._restaurants.values() if r.owner_id == owner_id]

    async def insert_restaurant(self, restaurant: Restaurant) -> Restaurant:
        self._check_available()
        async with self._restaurant_lock:
            if restaurant.id in self._restaurants:
                raise DuplicateItem(f"Restaurant '{restaurant.id}' already exists")
            for existing in self._restaurants.values():
                if restaurant.qr_code_secret and existing.qr_code_secret == restaurant.qr_code_secret:
                    raise DuplicateItem("QR secret already in use")
                if restaurant.custom_domain and existing.custom_domain == restaurant.custom_domain:
                    raise DuplicateItem(f"Domain '{restaurant.custom_domain}' already in use")
            if restaurant.created_at is None:
                restaurant = restaurant.model_copy(update={"created_at": utcnow()})
            self._restaurants[restaurant.id] = restaurant
        return restaurant

    async def list_items(self, restaurant_id: str, include_inactive: bool = False) -> List[MenuItem]:
        self._check_available()
        return [
            item for (rid, _), item in list(self._items.items())
            if rid == restaurant_id and (include_inactive or item.is_active)
        ]

    async def get_item(self, item_id: str, restaurant_id: str) -> Optional[MenuItem]:
        self._check_available()
        return self._items.get((restaurant_id, item_id))

    async def insert_item(self, item: MenuItem) -> MenuItem:
        self._check_available()
        self._require_restaurant(item.restaurant_id)
        key = (item.restaurant_id, item.id)
        async with self._item_lock:
            if key in self._items:
                raise DuplicateItem(f"Item '{item.id}' already exists")
            self._items[key] = item
        return item

    async def replace_item(self, item_id: str, restaurant_id: str, changes: dict) -> Optional[MenuItem]:
        self._check_available()
        key = (restaurant_id, item_id)
        async with self._item_lock:
            current = self._items.get(key)
            if current is None:
                return None
            updated = current.model_copy(
                update={**changes, "updated_at": next_timestamp(current.updated_at)}
            )
            self._items[key] = updated
        return updated

    async def mark_inactive(self, item_id: str, restaurant_id: str) -> Optional[MenuItem]:
        return await self.replace_item(item_id, restaurant_id, {"is_active": False})

    async def list_categories(self, restaurant_id: str) -> List[MenuCategory]:
        self._check_available()
        return [c for (rid, _), c in list(self._categories.items()) if rid == restaurant_id]

    async def insert_category(self, category: MenuCategory) -> MenuCategory:
        self._check_available()
        self._require_restaurant(category.restaurant_id)
        key = (category.restaurant_id, category.id)
        async with self._category_lock:
            if key in self._categories:
                raise DuplicateItem(f"Category '{category.id}' already exists")
            self._categories[key] = category
        return category
