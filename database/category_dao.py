import re

from loguru import logger

from database.db_manager import DatabaseManager
from models.category import Category
from utils.constants import CATEGORIES_KEY, DEFAULT_CATEGORIES, LEGACY_INCOME_PATTERN


def category_to_record(c: Category) -> dict:
    return {
        "id": c.id,
        "name": c.name,
        "type": c.type,
        "color": c.color_hex,
        "icon": c.icon,
    }


class CategoryDAO:
    def __init__(self, db: DatabaseManager):
        self._db = db
        self._all_cache: list | None = None

    def _row_to_model(self, row: dict) -> Category:
        return Category(
            id=str(row.get("id", "")),
            name=row.get("name") or "",
            type=row["type"],
            color_hex=row.get("color") or row.get("color_hex") or "#888888",
            icon=row.get("icon") or "",
        )

    def get_all(self) -> list[Category]:
        if self._all_cache is None:
            rows = self._db.get_json(CATEGORIES_KEY)
            if not isinstance(rows, list) or not rows:
                self._seed_defaults()
                rows = self._db.get_json(CATEGORIES_KEY, [])
            rows = [r for r in rows if isinstance(r, dict)]
            if self._migrate(rows):
                self._db.set_json(CATEGORIES_KEY, rows)
            self._all_cache = [self._row_to_model(r) for r in rows]
        return self._all_cache

    def get_by_id(self, category_id: str) -> Category | None:
        return next((c for c in self.get_all() if c.id == category_id), None)

    def _seed_defaults(self):
        logger.info("Seeding built-in categories")
        self._db.set_json(CATEGORIES_KEY, [
            {
                "id": c["id"], "name": c["name"], "type": c["type"],
                "color": c["color_hex"], "icon": c["icon"],
            }
            for c in DEFAULT_CATEGORIES
        ])

    def _migrate(self, rows: list[dict]) -> bool:
        """Idempotent upgrade of records stored before categories carried a type."""
        changed = False
        for row in rows:
            if row.get("type") not in ("income", "expense"):
                is_income = re.search(LEGACY_INCOME_PATTERN, row.get("name") or "", re.IGNORECASE)
                row["type"] = "income" if is_income else "expense"
                changed = True
        if changed:
            logger.info("Migrated legacy category records to explicit types")
        return changed
