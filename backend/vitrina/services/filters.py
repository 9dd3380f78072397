"""Filtrado de productos del catálogo.

``filter_products`` aplica los criterios como una tubería de etapas que van
reduciendo el conjunto. Todas las etapas son conjunciones independientes: el
resultado no depende del orden, solo el costo.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Sequence

from vitrina.models.product import Product
from vitrina.schemas.catalog import ALL, FilterState

Stage = Callable[[List[Product], FilterState], List[Product]]


def _contains(value, needle: str) -> bool:
    return bool(value) and needle in value.lower()


def search_stage(products: List[Product], criteria: FilterState) -> List[Product]:
    if not criteria.search_term:
        return products
    needle = criteria.search_term.lower()
    return [
        p for p in products
        if _contains(p.name, needle)
        or _contains(p.description, needle)
        or _contains(p.sku, needle)
        or _contains(p.brand, needle)
    ]


def selection_stage(products: List[Product], criteria: FilterState) -> List[Product]:
    # La subcategoría tiene prioridad sobre la categoría
    if criteria.selected_subcategory_id:
        return [p for p in products if p.subcategory_id == criteria.selected_subcategory_id]
    if criteria.selected_category != ALL:
        return [p for p in products if p.category == criteria.selected_category]
    return products


def brand_stage(products: List[Product], criteria: FilterState) -> List[Product]:
    if criteria.selected_brand == ALL:
        return products
    return [p for p in products if p.brand == criteria.selected_brand]


def price_stage(products: List[Product], criteria: FilterState) -> List[Product]:
    if criteria.price_range is None:
        return products
    low, high = criteria.price_range
    return [
        p for p in products
        if Decimal(p.price) >= low and (high is None or Decimal(p.price) <= high)
    ]


def stock_stage(products: List[Product], criteria: FilterState) -> List[Product]:
    if not criteria.only_in_stock:
        return products
    return [p for p in products if p.stock > 0]


def panel_categories_stage(products: List[Product], criteria: FilterState) -> List[Product]:
    if not criteria.categories:
        return products
    selected = set(criteria.categories)
    return [p for p in products if p.category in selected]


def panel_brands_stage(products: List[Product], criteria: FilterState) -> List[Product]:
    if not criteria.brands:
        return products
    selected = set(criteria.brands)
    return [p for p in products if p.brand and p.brand in selected]


STOREFRONT_STAGES: Sequence[Stage] = (search_stage, selection_stage, brand_stage)
PANEL_STAGES: Sequence[Stage] = (
    price_stage, stock_stage, panel_categories_stage, panel_brands_stage,
)
FILTER_STAGES: Sequence[Stage] = tuple(STOREFRONT_STAGES) + tuple(PANEL_STAGES)


def filter_products(
    products: Iterable[Product],
    criteria: FilterState,
    stages: Sequence[Stage] = FILTER_STAGES,
) -> List[Product]:
    """Aplica las etapas en orden; nunca modifica la colección original"""
    filtered = list(products)
    for stage in stages:
        filtered = stage(filtered, criteria)
    return list(filtered)


def distinct_brands(products: Iterable[Product]) -> List[str]:
    """Marcas no vacías, sin repetir, en orden lexicográfico"""
    return sorted({p.brand for p in products if p.brand and p.brand.strip()})


def distinct_categories(products: Iterable[Product]) -> List[str]:
    """Nombres de categoría en orden de primera aparición"""
    seen: Dict[str, None] = {}
    for p in products:
        seen.setdefault(p.category, None)
    return list(seen)


def product_counts(products: Iterable[Product]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for p in products:
        counts[p.category] = counts.get(p.category, 0) + 1
    return counts


def active_filters_count(criteria: FilterState) -> int:
    """Cantidad de filtros activos del panel lateral"""
    return (
        len(criteria.categories)
        + len(criteria.brands)
        + (1 if criteria.only_in_stock else 0)
        + (1 if criteria.price_range is not None else 0)
    )


def is_browse_mode(criteria: FilterState) -> bool:
    """Sin búsqueda ni selección se muestra el catálogo agrupado por categoría"""
    return (
        criteria.selected_category == ALL
        and not criteria.search_term
        and not criteria.selected_subcategory_id
        and criteria.selected_brand == ALL
    )


# === Reglas de selección ===

def select_category(criteria: FilterState, category: str) -> FilterState:
    return criteria.model_copy(update={
        "selected_category": category,
        "selected_subcategory_id": "",
        "selected_brand": ALL,
    })


def select_subcategory(criteria: FilterState, subcategory_id: str, category: str) -> FilterState:
    return criteria.model_copy(update={
        "selected_subcategory_id": subcategory_id,
        "selected_category": category,
        "selected_brand": ALL,
    })


def select_brand(criteria: FilterState, brand: str) -> FilterState:
    return criteria.model_copy(update={
        "selected_brand": brand,
        "selected_category": ALL,
        "selected_subcategory_id": "",
    })


def reset_navigation(criteria: FilterState) -> FilterState:
    """Click en el logo: vuelve al catálogo completo"""
    return criteria.model_copy(update={
        "selected_category": ALL,
        "selected_subcategory_id": "",
        "selected_brand": ALL,
        "search_term": "",
    })
