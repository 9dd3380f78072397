"""Composición del catálogo de la tienda.

``CatalogComposer`` carga productos, categorías y secciones promocionales,
guarda el estado de filtros y selección, y arma la vista final. Las colecciones
son copias de lectura: después de cada mutación se vuelven a pedir completas.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Dict, List, Optional, TypeVar

from starlette.concurrency import run_in_threadpool

from vitrina.models.category import Category, Subcategory
from vitrina.models.product import Product
from vitrina.models.promotion import PromotionalSection, SectionPosition
from vitrina.schemas.catalog import FilterState
from vitrina.services import filters
from vitrina.services.store import CatalogStore
from vitrina.services.tree import TreeNavigator

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRODUCTS = "products"
CATEGORIES = "categories"
PROMOTIONAL_SECTIONS = "promotional_sections"


class ComposerState(str, Enum):
    LOADING = "loading"
    READY = "ready"


class CatalogComposer:
    def __init__(self, store: CatalogStore, state: Optional[FilterState] = None):
        self.store = store
        self.status = ComposerState.LOADING
        self.filters = state or FilterState()

        self.products: List[Product] = []
        self.categories: List[Category] = []
        self.subcategories: List[Subcategory] = []
        self.promotional_sections: List[PromotionalSection] = []
        self.navigator = TreeNavigator(())

    # === Carga ===

    async def _safe_fetch(self, label: str, fetch: Callable[[], T], default: T) -> T:
        try:
            return await run_in_threadpool(fetch)
        except Exception:
            # Un fallo de lectura deja la colección vacía, no tumba el catálogo
            logger.error("Error fetching %s", label, exc_info=True)
            return default

    async def _fetch_products(self):
        self.products = await self._safe_fetch(PRODUCTS, self.store.list_products, [])

    async def _fetch_categories(self):
        categories, subcategories = await self._safe_fetch(
            CATEGORIES,
            lambda: (
                self.store.list_categories(active_only=True),
                self.store.list_subcategories(active_only=True),
            ),
            ([], []),
        )
        self.categories = categories
        self.subcategories = subcategories
        self.navigator = TreeNavigator(subcategories, self.navigator.expanded)

    async def _fetch_promotional_sections(self):
        self.promotional_sections = await self._safe_fetch(
            PROMOTIONAL_SECTIONS,
            lambda: self.store.list_promotional_sections(active_only=True),
            [],
        )

    async def load(self) -> "CatalogComposer":
        """Las tres lecturas son independientes y corren en paralelo"""
        self.status = ComposerState.LOADING
        await asyncio.gather(
            self._fetch_products(),
            self._fetch_categories(),
            self._fetch_promotional_sections(),
        )
        self.status = ComposerState.READY
        return self

    async def refresh(self, collection: str):
        fetchers: Dict[str, Callable[[], Awaitable[None]]] = {
            PRODUCTS: self._fetch_products,
            CATEGORIES: self._fetch_categories,
            PROMOTIONAL_SECTIONS: self._fetch_promotional_sections,
        }
        if collection not in fetchers:
            raise ValueError(f"Unknown collection: {collection}")
        await fetchers[collection]()

    async def mutate(self, collection: str, action: Callable[[], T]) -> T:
        """Ejecuta la mutación y luego vuelve a leer la colección afectada"""
        result = await run_in_threadpool(action)
        await self.refresh(collection)
        return result

    # === Selección ===

    def set_search(self, term: str):
        self.filters = self.filters.model_copy(update={"search_term": term})

    def select_category(self, category: str):
        self.filters = filters.select_category(self.filters, category)

    def select_subcategory(self, subcategory_id: str):
        """Selecciona la subcategoría y su categoría dueña"""
        category_name = self.category_name_for(subcategory_id)
        if category_name is None:
            raise ValueError(f"Unknown subcategory: {subcategory_id}")
        self.filters = filters.select_subcategory(self.filters, subcategory_id, category_name)

    def select_brand(self, brand: str):
        self.filters = filters.select_brand(self.filters, brand)

    def go_home(self):
        self.filters = filters.reset_navigation(self.filters)

    def category_name_for(self, subcategory_id: str) -> Optional[str]:
        sub = self.navigator.get(subcategory_id)
        if sub is None:
            return None
        for category in self.categories:
            if category.id == sub.category_id:
                return category.name
        return None

    # === Vistas derivadas ===

    def display_products(self) -> List[Product]:
        return filters.filter_products(self.products, self.filters)

    @property
    def brands(self) -> List[str]:
        return filters.distinct_brands(self.products)

    @property
    def category_names(self) -> List[str]:
        return filters.distinct_categories(self.products)

    @property
    def product_counts(self) -> Dict[str, int]:
        return filters.product_counts(self.products)

    @property
    def browse_mode(self) -> bool:
        return filters.is_browse_mode(self.filters)

    def selected_subcategory_name(self) -> str:
        if not self.filters.selected_subcategory_id:
            return ""
        sub = self.navigator.get(self.filters.selected_subcategory_id)
        return sub.name if sub else ""

    def sections_at(self, position: SectionPosition) -> List[PromotionalSection]:
        return [s for s in self.promotional_sections if s.position == position]

    def sections_between(self, index: int) -> List[PromotionalSection]:
        """Secciones que van antes de la categoría número ``index``"""
        return [
            s for s in self.sections_at(SectionPosition.BETWEEN_CATEGORIES)
            if s.order_position == index
        ]

    def products_by_category(self) -> Dict[str, List[Product]]:
        grouped: Dict[str, List[Product]] = {name: [] for name in self.category_names}
        for product in self.products:
            grouped[product.category].append(product)
        return grouped