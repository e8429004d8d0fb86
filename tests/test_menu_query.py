import pytest

from armenu.core.errors import ItemNotFound
from armenu.schemas.menu import MenuCategory
from armenu.services.menu_query import sort_categories


def ids(items):
    return [item.id for item in items]


async def test_lists_only_active_items_of_the_restaurant(engine):
    view = await engine.query_menu("bistro-1")
    assert ids(view.items) == ["a", "b", "d"]
    assert all(item.restaurant_id == "bistro-1" for item in view.items)


async def test_categories_sorted_stably(engine):
    view = await engine.query_menu("bistro-1")
    assert [c.id for c in view.categories] == ["starters", "drinks", "mains"]


def test_sort_categories_keeps_input_order_for_ties():
    categories = [
        MenuCategory(id="x", restaurant_id="r", name="X", sort_order=2),
        MenuCategory(id="y", restaurant_id="r", name="Y", sort_order=1),
        MenuCategory(id="z", restaurant_id="r", name="Z", sort_order=1),
        MenuCategory(id="w", restaurant_id="r", name="W"),
    ]
    assert [c.id for c in sort_categories(categories)] == ["w", "y", "z", "x"]


async def test_categories_returned_without_active_items(engine):
    view = await engine.query_menu("empty-1")
    assert view.items == []
    assert [c.id for c in view.categories] == ["soups"]


async def test_category_filter_is_exact(engine):
    assert ids((await engine.query_menu("bistro-1", category="mains")).items) == ["a"]
    assert ids((await engine.query_menu("bistro-1", category="Mains")).items) == []
    assert ids((await engine.query_menu("bistro-1", category="bowls")).items) == ["d"]


async def test_all_sentinel_disables_category_filter(engine):
    view = await engine.query_menu("bistro-1", category="all")
    assert ids(view.items) == ["a", "b", "d"]


async def test_search_by_vegetarian_flag(engine):
    view = await engine.query_menu("bistro-1", search_term="vegetarian")
    assert ids(view.items) == ["b"]


async def test_search_by_vegan_flag(engine):
    # "vegan" is also a subsequence of "vegetarian", so vegetarian dishes show up too
    view = await engine.query_menu("bistro-1", search_term="vegan")
    assert ids(view.items) == ["b", "d"]


async def test_search_fields(engine):
    assert ids((await engine.query_menu("bistro-1", search_term="burger")).items) == ["a"]
    assert ids((await engine.query_menu("bistro-1", search_term="GLUTEN")).items) == ["a"]
    assert ids((await engine.query_menu("bistro-1", search_term="parmesan")).items) == ["b"]
    # category name, resolved from the category id
    assert ids((await engine.query_menu("bistro-1", search_term="course")).items) == ["a"]
    # category id when no category record exists
    assert ids((await engine.query_menu("bistro-1", search_term="bowls")).items) == ["d"]


async def test_search_is_fuzzy(engine):
    view = await engine.query_menu("bistro-1", search_term="dlxbgr")
    assert ids(view.items) == ["a"]


async def test_blank_search_is_ignored(engine):
    view = await engine.query_menu("bistro-1", search_term="   ")
    assert ids(view.items) == ["a", "b", "d"]


async def test_category_then_search(engine):
    view = await engine.query_menu("bistro-1", category="starters", search_term="vegetarian")
    assert ids(view.items) == ["b"]
    view = await engine.query_menu("bistro-1", category="mains", search_term="vegetarian")
    assert view.items == []


@pytest.mark.parametrize(
    "filters",
    [{}, {"category": "starters"}, {"search_term": "soup"}, {"category": "starters", "search_term": "old"}],
)
async def test_soft_deleted_items_never_listed(engine, filters):
    view = await engine.query_menu("bistro-1", **filters)
    assert "c" not in ids(view.items)


async def test_get_item_includes_soft_deleted(engine):
    item = await engine.get_item("c", "bistro-1")
    assert item.name == "Old Soup"
    assert item.is_active is False


async def test_get_item_is_scoped_by_restaurant(engine):
    assert (await engine.get_item("a", "bistro-1")).name == "AR Deluxe Burger"
    assert (await engine.get_item("a", "other-1")).name == "Other Burger"
    with pytest.raises(ItemNotFound):
        await engine.get_item("b", "other-1")


async def test_admin_listing(engine):
    assert ids(await engine.list_items_for_admin("bistro-1")) == ["a", "b", "d"]
    assert ids(await engine.list_items_for_admin("bistro-1", include_inactive=True)) == ["a", "b", "c", "d"]


async def test_owner_restaurants_are_active_only(engine):
    restaurants = await engine.list_owner_restaurants("owner-1")
    assert [r.id for r in restaurants] == ["bistro-1", "empty-1"]
