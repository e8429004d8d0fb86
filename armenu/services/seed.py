import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from armenu.core.errors import MenuValidationError
from armenu.schemas.menu import MenuCategory, MenuItem
from armenu.schemas.restaurant import Restaurant
from armenu.services.record_store import RecordStore, utcnow

logger = logging.getLogger(__name__)


async def load_seed(store: RecordStore, document: Dict[str, Any]) -> Dict[str, int]:
    """Insert restaurants, categories and items from a seed document.

    Records are taken as-is (ids included); this is the out-of-band path by
    which restaurants come into existence.
    """
    counts = {"restaurants": 0, "categories": 0, "items": 0}
    try:
        for data in document.get("restaurants", []):
            await store.insert_restaurant(Restaurant.model_validate(data))
            counts["restaurants"] += 1
        for data in document.get("categories", []):
            await store.insert_category(MenuCategory.model_validate(data))
            counts["categories"] += 1
        for data in document.get("items", []):
            now = utcnow()
            item = MenuItem.model_validate({"created_at": now, "updated_at": now, **data})
            await store.insert_item(item)
            counts["items"] += 1
    except ValidationError as exc:
        raise MenuValidationError(f"Invalid seed data: {exc}") from exc

    logger.info(
        "Seeded %(restaurants)d restaurants, %(categories)d categories, %(items)d items", counts
    )
    return counts


async def load_seed_file(store: RecordStore, path: Union[str, Path]) -> Dict[str, int]:
    document = json.loads(Path(path).read_text(encoding="utf-8"))
    return await load_seed(store, document)
