from typing import Dict, List, Optional

from armenu.core.errors import ItemNotFound
from armenu.schemas.menu import MenuCategory, MenuItem, MenuView
from armenu.schemas.restaurant import Restaurant
from armenu.services.fuzzy import fuzzy_match
from armenu.services.record_store import RecordStore

ALL_CATEGORIES = "all"


def sort_categories(categories: List[MenuCategory]) -> List[MenuCategory]:
    # sorted() is stable: equal sort_order keeps insertion order
    return sorted(categories, key=lambda c: c.sort_order or 0)


def item_matches(item: MenuItem, term: str, category_names: Dict[str, str]) -> bool:
    if fuzzy_match(item.name, term) or fuzzy_match(item.description, term):
        return True
    if fuzzy_match(item.category, term):
        return True
    category_name = category_names.get(item.category)
    if category_name is not None and fuzzy_match(category_name, term):
        return True
    if any(fuzzy_match(allergen, term) for allergen in item.allergens):
        return True
    # Dietary flags are searchable even though the words are not stored
    if item.is_vegetarian and fuzzy_match("vegetarian", term):
        return True
    if item.is_vegan and fuzzy_match("vegan", term):
        return True
    return False


class MenuQueryEngine:
    """Read path for one tenant's menu. No side effects, no caching."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def query_menu(
        self,
        restaurant_id: str,
        category: Optional[str] = None,
        search_term: Optional[str] = None,
    ) -> MenuView:
        """Active items of ``restaurant_id`` narrowed by category, then by search.

        The category filter is an exact, case-sensitive comparison against the
        item's category id; ``"all"`` disables it. The search term is matched
        with :func:`fuzzy_match` against the item's text fields, its category
        and its dietary flags.
        """
        items = await self.store.list_items(restaurant_id)
        categories = sort_categories(await self.store.list_categories(restaurant_id))

        if category and category != ALL_CATEGORIES:
            items = [item for item in items if item.category == category]

        term = (search_term or "").strip()
        if term:
            category_names = {c.id: c.name for c in categories}
            items = [item for item in items if item_matches(item, term, category_names)]

        return MenuView(items=items, categories=categories)

    async def get_item(self, item_id: str, restaurant_id: str) -> MenuItem:
        # Soft-deleted items are returned too, edit views need them
        item = await self.store.get_item(item_id, restaurant_id)
        if item is None:
            raise ItemNotFound()
        return item

    async def list_items_for_admin(self, restaurant_id: str, include_inactive: bool = False) -> List[MenuItem]:
        return await self.store.list_items(restaurant_id, include_inactive=include_inactive)

    async def list_owner_restaurants(self, owner_id: str) -> List[Restaurant]:
        restaurants = await self.store.list_restaurants_by_owner(owner_id)
        return [r for r in restaurants if r.is_active]
