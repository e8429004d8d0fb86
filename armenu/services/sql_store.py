import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from armenu.core.errors import DuplicateItem, RestaurantNotFound, StoreUnavailable
from armenu.models.menu import MenuCategory as MenuCategoryModel
from armenu.models.menu import MenuItem as MenuItemModel
from armenu.models.restaurant import Restaurant as RestaurantModel
from armenu.schemas.menu import MenuCategory, MenuItem
from armenu.schemas.restaurant import Restaurant
from armenu.services.record_store import LookupChannel, RecordStore, next_timestamp

logger = logging.getLogger(__name__)

_LOOKUP_COLUMNS = {
    "id": RestaurantModel.id,
    "secret": RestaurantModel.qr_code_secret,
    "domain": RestaurantModel.custom_domain,
}


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # Some backends (sqlite) hand back naive datetimes; everything we store is UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_restaurant(row: RestaurantModel) -> Restaurant:
    restaurant = Restaurant.model_validate(row)
    return restaurant.model_copy(
        update={"created_at": _aware(row.created_at), "updated_at": _aware(row.updated_at)}
    )


def _to_item(row: MenuItemModel) -> MenuItem:
    item = MenuItem.model_validate(row)
    return item.model_copy(
        update={"created_at": _aware(row.created_at), "updated_at": _aware(row.updated_at)}
    )


class SqlRecordStore(RecordStore):
    """Record store backed by an SQLAlchemy async engine."""

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory
        self._category_lock = asyncio.Lock()

    @asynccontextmanager
    async def _session(self):
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("Record store failure: %s", exc)
            raise StoreUnavailable() from exc

    async def find_restaurant(self, by: LookupChannel, value: str) -> Optional[Restaurant]:
        column = _LOOKUP_COLUMNS[by]
        async with self._session() as session:
            row = await session.scalar(select(RestaurantModel).where(column == value))
            return _to_restaurant(row) if row is not None else None

    async def list_restaurants_by_owner(self, owner_id: str) -> List[Restaurant]:
        async with self._session() as session:
            result = await session.execute(
                select(RestaurantModel)
                .where(RestaurantModel.owner_id == owner_id)
                .order_by(RestaurantModel.created_at, RestaurantModel.id)
            )
            return [_to_restaurant(row) for row in result.scalars().all()]

    async def insert_restaurant(self, restaurant: Restaurant) -> Restaurant:
        data = restaurant.model_dump(exclude_none=True)
        async with self._session() as session:
            row = RestaurantModel(**data)
            session.add(row)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise DuplicateItem(f"Restaurant '{restaurant.id}' conflicts with an existing one") from exc
            await session.refresh(row)
            return _to_restaurant(row)

    async def list_items(self, restaurant_id: str, include_inactive: bool = False) -> List[MenuItem]:
        query = select(MenuItemModel).where(MenuItemModel.restaurant_id == restaurant_id)
        if not include_inactive:
            query = query.where(MenuItemModel.is_active.is_(True))
        query = query.order_by(MenuItemModel.created_at, MenuItemModel.id)
        async with self._session() as session:
            result = await session.execute(query)
            return [_to_item(row) for row in result.scalars().all()]

    async def get_item(self, item_id: str, restaurant_id: str) -> Optional[MenuItem]:
        async with self._session() as session:
            row = await session.get(MenuItemModel, (restaurant_id, item_id))
            return _to_item(row) if row is not None else None

    async def insert_item(self, item: MenuItem) -> MenuItem:
        async with self._session() as session:
            try:
                async with session.begin():
                    await self._require_restaurant(session, item.restaurant_id)
                    if await session.get(MenuItemModel, (item.restaurant_id, item.id)) is not None:
                        raise DuplicateItem(f"Item '{item.id}' already exists")
                    row = MenuItemModel(**item.model_dump())
                    session.add(row)
            except IntegrityError as exc:
                # Lost a race against a concurrent insert of the same key
                raise DuplicateItem(f"Item '{item.id}' already exists") from exc
            return _to_item(row)

    async def replace_item(self, item_id: str, restaurant_id: str, changes: dict) -> Optional[MenuItem]:
        async with self._session() as session:
            async with session.begin():
                row = await session.get(
                    MenuItemModel, (restaurant_id, item_id), with_for_update=True
                )
                if row is None:
                    return None
                for field, value in changes.items():
                    setattr(row, field, value)
                row.updated_at = next_timestamp(row.updated_at)
            return _to_item(row)

    async def mark_inactive(self, item_id: str, restaurant_id: str) -> Optional[MenuItem]:
        return await self.replace_item(item_id, restaurant_id, {"is_active": False})

    async def list_categories(self, restaurant_id: str) -> List[MenuCategory]:
        async with self._session() as session:
            result = await session.execute(
                select(MenuCategoryModel)
                .where(MenuCategoryModel.restaurant_id == restaurant_id)
                .order_by(MenuCategoryModel.insert_seq)
            )
            return [MenuCategory.model_validate(row) for row in result.scalars().all()]

    async def insert_category(self, category: MenuCategory) -> MenuCategory:
        # insert_seq is read-then-written; the process lock covers backends
        # without row locks (sqlite), FOR UPDATE on the restaurant covers
        # other processes.
        async with self._category_lock:
            async with self._session() as session:
                try:
                    async with session.begin():
                        await self._require_restaurant(
                            session, category.restaurant_id, for_update=True
                        )
                        existing = await session.get(
                            MenuCategoryModel, (category.restaurant_id, category.id)
                        )
                        if existing is not None:
                            raise DuplicateItem(f"Category '{category.id}' already exists")
                        last_seq = await session.scalar(
                            select(func.coalesce(func.max(MenuCategoryModel.insert_seq), 0))
                            .where(MenuCategoryModel.restaurant_id == category.restaurant_id)
                        )
                        row = MenuCategoryModel(**category.model_dump(), insert_seq=last_seq + 1)
                        session.add(row)
                except IntegrityError as exc:
                    raise DuplicateItem(f"Category '{category.id}' already exists") from exc
                return MenuCategory.model_validate(row)

    @staticmethod
    async def _require_restaurant(session, restaurant_id: str, for_update: bool = False):
        restaurant = await session.get(
            RestaurantModel, restaurant_id, with_for_update=True if for_update else None
        )
        if restaurant is None:
            raise RestaurantNotFound()
        return restaurant
