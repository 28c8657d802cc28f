from dataclasses import replace

from database.category_dao import CategoryDAO
from models.category import Category
from utils.constants import UNKNOWN_CATEGORY

_UNKNOWN = Category(**UNKNOWN_CATEGORY)


class CategoryService:
    def __init__(self, category_dao: CategoryDAO):
        self._dao = category_dao

    def get_all(self) -> list[Category]:
        return self._dao.get_all()

    def get_by_id(self, category_id: str) -> Category | None:
        return self._dao.get_by_id(category_id)

    def resolve(self, category_id: str) -> Category:
        """Catalog entry for category_id, or the 'Unknown' placeholder."""
        return self._dao.get_by_id(category_id) or _UNKNOWN

    def get_for_type(self, type_: str) -> list[Category]:
        return [c for c in self._dao.get_all() if c.type == type_]

    def choices_for_type(self, type_: str, keep_id: str | None = None) -> list[Category]:
        """Categories offered for type_.

        keep_id stays selectable even when it belongs to the other type or is
        missing from the catalog, so editing a record never swaps its category.
        """
        choices = self.get_for_type(type_)
        if keep_id is not None and all(c.id != keep_id for c in choices):
            choices.append(replace(self.resolve(keep_id), id=keep_id))
        return choices

    def first_id_for_type(self, type_: str) -> str:
        matching = self.get_for_type(type_)
        if matching:
            return matching[0].id
        all_cats = self._dao.get_all()
        return all_cats[0].id if all_cats else ""
