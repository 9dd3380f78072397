from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging
from fastapi import HTTPException
from vitrina.models.category import Category, Subcategory
from vitrina.services.store import CatalogStore
from vitrina.services.tree import TreeNavigator

logger = logging.getLogger(__name__)

CATEGORY_DELETE_WARNING = "¿Estás seguro de eliminar esta categoría y todas sus subcategorías?"
SUBCATEGORY_DELETE_WARNING = "¿Estás seguro de eliminar esta subcategoría y sus subcategorías anidadas?"


class CategoryManager:
    """
    Gestión de categorías del panel de administración.
    Cada mutación va al store y después se releen las colecciones completas.
    """

    def __init__(self, store: CatalogStore, expanded: Iterable[str] = ()):
        self.store = store
        self.categories: List[Category] = []
        self.navigator = TreeNavigator((), expanded)

    def load(self) -> "CategoryManager":
        self.fetch_categories()
        self.fetch_subcategories()
        return self

    def fetch_categories(self):
        self.categories = self.store.list_categories()

    def fetch_subcategories(self):
        self.navigator = TreeNavigator(self.store.list_subcategories(), self.navigator.expanded)

    @property
    def subcategories(self) -> Tuple[Subcategory, ...]:
        return self.navigator.subcategories

    def toggle(self, node_id: str):
        return self.navigator.toggle_expanded(node_id)

    # === Vista jerárquica ===

    def rows(self) -> List[Dict[str, Any]]:
        """Categorías con sus subcategorías visibles según la expansión"""
        result = []
        for category in self.categories:
            expanded = self.navigator.is_expanded(category.id)
            sub_rows = []
            if expanded:
                sub_rows = [
                    {
                        "subcategory": sub,
                        "depth": depth,
                        "children_count": self.navigator.direct_children_count(sub),
                        "is_expanded": self.navigator.is_expanded(sub.id),
                    }
                    for sub, depth in self.navigator.render_tree(category.id)
                ]
            result.append({
                "category": category,
                "subcategories_count": self.navigator.count_descendants(category.id),
                "is_expanded": expanded,
                "rows": sub_rows,
            })
        return result

    def parent_options(self, category_id: str, editing_id: Optional[str] = None) -> List[Tuple[Subcategory, int]]:
        return self.navigator.parent_options(category_id, editing_id)

    def delete_warning(self, kind: str, item_id: str) -> Dict[str, Any]:
        """Aviso previo al borrado en cascada"""
        if kind == "category":
            if not any(c.id == item_id for c in self.categories):
                raise HTTPException(status_code=404, detail="Category not found")
            return {
                "id": item_id,
                "message": CATEGORY_DELETE_WARNING,
                "cascade_count": self.navigator.count_descendants(item_id),
            }
        if self.navigator.get(item_id) is None:
            raise HTTPException(status_code=404, detail="Subcategory not found")
        return {
            "id": item_id,
            "message": SUBCATEGORY_DELETE_WARNING,
            "cascade_count": len(self.navigator.descendant_ids(item_id)),
        }

    # === Mutaciones ===

    def create_category(self, data: Dict[str, Any]) -> Category:
        category = self.store.create_category(data)
        self.fetch_categories()
        return category

    def update_category(self, category_id: str, data: Dict[str, Any]) -> Category:
        category = self.store.update_category(category_id, data)
        self.fetch_categories()
        return category

    def delete_category(self, category_id: str) -> int:
        removed = self.store.delete_category(category_id)
        self.fetch_categories()
        self.fetch_subcategories()
        return removed

    def create_subcategory(self, data: Dict[str, Any]) -> Subcategory:
        subcategory = self.store.create_subcategory(data)
        self.fetch_subcategories()
        return subcategory

    def update_subcategory(self, subcategory_id: str, data: Dict[str, Any]) -> Subcategory:
        subcategory = self.store.update_subcategory(subcategory_id, data)
        self.fetch_subcategories()
        return subcategory

    def delete_subcategory(self, subcategory_id: str) -> int:
        removed = self.store.delete_subcategory(subcategory_id)
        self.fetch_subcategories()
        return removed
