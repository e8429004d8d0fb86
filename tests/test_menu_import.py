import json

import pytest

from armenu.core.errors import MenuValidationError
from armenu.services.menu_import import menu_import_service


CSV_MENU = b"""name,price,category,description,allergens,is_vegetarian
Tomato Soup,6.5,starters,Slow roasted tomatoes,dairy;gluten,True
Grilled Fish,21,mains,,fish,False
"""


def test_parse_csv():
    rows = menu_import_service.parse_menu_file(CSV_MENU, "text/csv")
    assert rows[0] == {
        "name": "Tomato Soup",
        "price": 6.5,
        "category": "starters",
        "description": "Slow roasted tomatoes",
        "allergens": ["dairy", "gluten"],
        "is_vegetarian": True,
    }
    # empty cells are dropped, not sent as NaN
    assert "description" not in rows[1]
    assert rows[1]["allergens"] == ["fish"]


def test_parse_json():
    content = json.dumps(
        [
            {"name": "Espresso", "price": 3.5, "category": "coffee", "allergens": [], "is_vegan": True},
            {"name": "Latte", "price": 4, "category": "coffee", "allergens": ["dairy"]},
        ]
    ).encode()
    rows = menu_import_service.parse_menu_file(content, "application/json")
    assert [r["name"] for r in rows] == ["Espresso", "Latte"]
    assert rows[1]["allergens"] == ["dairy"]
    assert rows[0]["is_vegan"] is True


def test_missing_required_columns():
    with pytest.raises(MenuValidationError):
        menu_import_service.parse_menu_file(b"name,category\nSoup,starters\n", "text/csv")


def test_unsupported_type():
    with pytest.raises(MenuValidationError):
        menu_import_service.parse_menu_file(b"<xml/>", "application/xml")


async def test_import_reports_failed_rows(menu_service, engine):
    rows = [
        {"name": "Tomato Soup", "price": 6.5, "category": "starters"},
        {"name": "Caesar Salad", "price": 1, "category": "starters"},
        {"name": "Tomato Soup", "price": 7, "category": "starters"},
        {"name": "No Category", "price": 7},
    ]
    report = await menu_import_service.import_items(menu_service, "bistro-1", rows)

    assert report.total_rows == 4
    assert [item.id for item in report.created] == [
        "bistro-1-tomato-soup",
        "bistro-1-caesar-salad",
    ]
    assert [(e.row, e.error) for e in report.errors] == [(2, "DuplicateItem"), (3, "ValidationError")]

    view = await engine.query_menu("bistro-1", category="starters")
    assert "bistro-1-tomato-soup" in [i.id for i in view.items]
