import logging
import re
from io import BytesIO
from typing import Any, Dict, List

import pandas as pd

from armenu.core.errors import MenuError, MenuValidationError, StoreUnavailable
from armenu.schemas.menu import ImportReport, ImportRowError
from armenu.services.menu_service import MenuService

logger = logging.getLogger(__name__)

CSV_TYPES = {"text/csv", "application/csv", "application/vnd.ms-excel"}
JSON_TYPES = {"application/json", "text/json"}
_LIST_SEPARATOR = re.compile(r"[;,]")
TEXT_FIELDS = ("name", "description", "category", "image", "model_3d")


def _split_allergens(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [part.strip() for part in _LIST_SEPARATOR.split(str(value)) if part.strip()]


class MenuImportService:
    @staticmethod
    def parse_menu_file(file_content: bytes, content_type: str) -> List[Dict[str, Any]]:
        """Parse an uploaded CSV/JSON menu into item payloads (without restaurant)."""
        if content_type not in CSV_TYPES | JSON_TYPES:
            raise MenuValidationError("Only CSV/JSON supported")
        try:
            if content_type in CSV_TYPES:
                df = pd.read_csv(BytesIO(file_content))
            else:
                df = pd.read_json(BytesIO(file_content), orient="records", dtype=False)
        except ValueError as exc:
            raise MenuValidationError(f"Could not parse menu file: {exc}") from exc

        required_cols = ['name', 'price']
        if not all(col in df.columns for col in required_cols):
            raise MenuValidationError("Missing required columns: name, price")

        rows = []
        for record in df.to_dict(orient="records"):
            row = {}
            for key, value in record.items():
                if isinstance(value, (list, tuple)):
                    row[key] = value
                elif not pd.isna(value):
                    row[key] = value.item() if hasattr(value, "item") else value
            if "allergens" in row:
                row["allergens"] = _split_allergens(row["allergens"])
            for key in TEXT_FIELDS:
                if key in row:
                    row[key] = str(row[key])
            rows.append(row)

        return rows

    @staticmethod
    async def import_items(
        menu_service: MenuService, restaurant_id: str, rows: List[Dict[str, Any]]
    ) -> ImportReport:
        """Create every row through the menu service; failing rows are reported, not fatal."""
        created = []
        errors = []
        for index, row in enumerate(rows):
            payload = {**row, "restaurant_id": restaurant_id}
            payload.pop("id", None)
            try:
                created.append(await menu_service.create_item(payload))
            except MenuError as exc:
                if isinstance(exc, StoreUnavailable):
                    raise
                errors.append(ImportRowError(row=index, error=exc.reason, detail=exc.message))

        logger.info(
            "Imported %d/%d rows for restaurant %s", len(created), len(rows), restaurant_id
        )
        return ImportReport(created=created, errors=errors, total_rows=len(rows))

menu_import_service = MenuImportService()
