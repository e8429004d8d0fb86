import logging
import re
from typing import Mapping, Union

from pydantic import BaseModel, ValidationError

from armenu.core.errors import ItemNotFound, MenuValidationError, RestaurantNotFound
from armenu.schemas.menu import (
    MenuCategory,
    MenuCategoryCreate,
    MenuItem,
    MenuItemCreate,
    MenuItemUpdate,
)
from armenu.services.record_store import RecordStore, utcnow

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
# Never writable through an update
_IMMUTABLE_FIELDS = {"id", "restaurant_id", "created_at", "updated_at"}


def slugify(name: str) -> str:
    return _WHITESPACE.sub("-", name.strip().lower())


def derive_id(restaurant_id: str, name: str) -> str:
    return f"{restaurant_id}-{slugify(name)}"


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', '')}" if loc else err.get("msg", ""))
    return "; ".join(parts)


def _coerce(schema, payload: Union[Mapping, BaseModel]):
    if isinstance(payload, schema):
        return payload
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise MenuValidationError(_format_errors(exc)) from exc


class MenuService:
    """Create, update and soft-delete menu entries of one tenant.

    Ids are derived as ``"{restaurant_id}-{slug(name)}"``. Creating an entry
    whose derived id already exists in the restaurant (even a soft-deleted
    one) is rejected with ``DuplicateItem``; restore or rename instead.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    async def _require_restaurant(self, restaurant_id: str):
        # Existence only, inactive restaurants can still be edited
        restaurant = await self.store.find_restaurant("id", restaurant_id)
        if restaurant is None:
            raise RestaurantNotFound()
        return restaurant

    async def create_item(self, payload: Union[Mapping, MenuItemCreate]) -> MenuItem:
        data = _coerce(MenuItemCreate, payload)
        await self._require_restaurant(data.restaurant_id)

        now = utcnow()
        item = MenuItem(
            **data.model_dump(),
            id=derive_id(data.restaurant_id, data.name),
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        created = await self.store.insert_item(item)
        logger.info("Created menu item %s for restaurant %s", created.id, created.restaurant_id)
        return created

    async def update_item(
        self,
        item_id: str,
        restaurant_id: str,
        changes: Union[Mapping, MenuItemUpdate],
    ) -> MenuItem:
        if not item_id or not restaurant_id:
            raise MenuValidationError("Missing required fields: id, restaurant_id")
        update = _coerce(MenuItemUpdate, changes)
        fields = update.model_dump(exclude_unset=True, exclude=_IMMUTABLE_FIELDS)

        updated = await self.store.replace_item(item_id, restaurant_id, fields)
        if updated is None:
            raise ItemNotFound()
        logger.info("Updated menu item %s (%s)", item_id, ", ".join(sorted(fields)) or "no fields")
        return updated

    async def delete_item(self, item_id: str, restaurant_id: str) -> bool:
        if not item_id or not restaurant_id:
            raise MenuValidationError("Missing required parameters: id, restaurant_id")
        if await self.store.mark_inactive(item_id, restaurant_id) is None:
            raise ItemNotFound()
        logger.info("Soft-deleted menu item %s for restaurant %s", item_id, restaurant_id)
        return True

    async def create_category(self, payload: Union[Mapping, MenuCategoryCreate]) -> MenuCategory:
        data = _coerce(MenuCategoryCreate, payload)
        await self._require_restaurant(data.restaurant_id)

        category = MenuCategory(**data.model_dump(), id=derive_id(data.restaurant_id, data.name))
        created = await self.store.insert_category(category)
        logger.info("Created category %s for restaurant %s", created.id, created.restaurant_id)
        return created
