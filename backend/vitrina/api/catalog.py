from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional
from decimal import Decimal
from vitrina.api.deps import get_store
from vitrina.models.promotion import SectionPosition
from vitrina.schemas.catalog import ALL, FilterState, SelectionRequest, CatalogView
from vitrina.schemas.category import CategoryResponse, SubcategoryResponse
from vitrina.schemas.promotion import PromotionalSectionResponse
from vitrina.schemas.product import ProductResponse
from vitrina.services import filters
from vitrina.services.composer import CatalogComposer
from vitrina.services.currency import format_price
from vitrina.services.store import CatalogStore

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def filter_state_query(
    q: str = Query("", description="Búsqueda por nombre, descripción, SKU o marca"),
    category: str = Query(ALL),
    subcategory_id: str = Query(""),
    brand: str = Query(ALL),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    in_stock: bool = Query(False),
    categories: List[str] = Query([]),
    brands: List[str] = Query([]),
) -> FilterState:
    price_range = None
    if min_price is not None or max_price is not None:
        price_range = (
            min_price if min_price is not None else Decimal("0"),
            max_price,
        )
    try:
        return FilterState(
            search_term=q,
            selected_category=category,
            selected_subcategory_id=subcategory_id,
            selected_brand=brand,
            price_range=price_range,
            only_in_stock=in_stock,
            categories=categories,
            brands=brands,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def product_response(product) -> ProductResponse:
    response = ProductResponse.model_validate(product)
    response.formatted_price = format_price(product.price)
    return response


def sections_of(items) -> List[PromotionalSectionResponse]:
    return [PromotionalSectionResponse.model_validate(s) for s in items]


def compose_view(composer: CatalogComposer) -> CatalogView:
    display = composer.display_products()
    sections = {
        position.value: sections_of(composer.sections_at(position))
        for position in SectionPosition
        if position != SectionPosition.BETWEEN_CATEGORIES
    }

    category_sections = []
    if composer.browse_mode:
        for index, (name, items) in enumerate(composer.products_by_category().items()):
            category_sections.append({
                "category": name,
                "products": [product_response(p) for p in items],
                "sections_before": sections_of(composer.sections_between(index)),
            })

    return CatalogView(
        state=composer.filters,
        browse_mode=composer.browse_mode,
        products=[product_response(p) for p in display],
        total=len(display),
        brands=composer.brands,
        categories=composer.category_names,
        product_counts=composer.product_counts,
        active_filters=filters.active_filters_count(composer.filters),
        selected_subcategory_name=composer.selected_subcategory_name(),
        db_categories=[CategoryResponse.model_validate(c) for c in composer.categories],
        subcategories=[SubcategoryResponse.model_validate(s) for s in composer.subcategories],
        sections=sections,
        category_sections=category_sections,
    )


@router.get("/", response_model=CatalogView)
async def get_catalog(
    state: FilterState = Depends(filter_state_query),
    store: CatalogStore = Depends(get_store)
):
    """Catálogo armado con los filtros de la consulta"""
    composer = await CatalogComposer(store, state).load()
    return compose_view(composer)


@router.post("/query", response_model=CatalogView)
async def query_catalog(state: FilterState, store: CatalogStore = Depends(get_store)):
    composer = await CatalogComposer(store, state).load()
    return compose_view(composer)


@router.post("/selection", response_model=FilterState)
async def apply_selection(data: SelectionRequest, store: CatalogStore = Depends(get_store)):
    """Aplica una acción de navegación y devuelve el nuevo estado de filtros"""
    composer = CatalogComposer(store, data.state)

    if data.action == "category":
        composer.select_category(data.value or ALL)
    elif data.action == "subcategory":
        await composer.refresh("categories")
        try:
            composer.select_subcategory(data.value)
        except ValueError:
            raise HTTPException(status_code=404, detail="Subcategory not found")
    elif data.action == "brand":
        composer.select_brand(data.value or ALL)
    elif data.action == "search":
        composer.set_search(data.value)
    else:
        composer.go_home()

    return composer.filters
