from fastapi import APIRouter, Depends, Response
from fastapi.responses import HTMLResponse
from typing import List
from vitrina.api.catalog import filter_state_query, product_response
from vitrina.api.deps import get_store, get_storage, get_settings, admin_required
from vitrina.core.config import Settings
from vitrina.schemas.catalog import FilterState
from vitrina.schemas.product import ProductResponse, ProductCreate, ProductUpdate
from vitrina.services.export import export_csv, csv_filename, export_html, ImageInliner
from vitrina.services.filters import filter_products
from vitrina.services.storage import ObjectStorage
from vitrina.services.store import CatalogStore
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/products", tags=["admin-products"])


# === Export ===

@router.get("/export/csv")
def export_products_csv(
    state: FilterState = Depends(filter_state_query),
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    """Exporta los productos filtrados a CSV"""
    products = filter_products(store.list_products(), state)
    logger.info("Exporting %d products to CSV", len(products))
    return Response(
        content=export_csv(products),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{csv_filename()}"'},
    )


@router.get("/export/html", response_class=HTMLResponse)
def export_products_html(
    state: FilterState = Depends(filter_state_query),
    store: CatalogStore = Depends(get_store),
    storage: ObjectStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
    _: dict = Depends(admin_required)
):
    """Catálogo imprimible con imágenes embebidas"""
    products = filter_products(store.list_products(), state)
    logger.info("Exporting %d products to printable HTML", len(products))
    return HTMLResponse(export_html(products, ImageInliner(storage), settings.STORE_NAME))


# === CRUD Products ===

@router.get("/", response_model=List[ProductResponse])
def list_products(
    state: FilterState = Depends(filter_state_query),
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    """Todos los productos (admin) con los filtros del panel"""
    return [product_response(p) for p in filter_products(store.list_products(), state)]


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: str,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    return product_response(store.get_product(product_id))


@router.post("/", response_model=ProductResponse)
def create_product(
    data: ProductCreate,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    return product_response(store.create_product(data.model_dump()))


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    data: ProductUpdate,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    return product_response(store.update_product(product_id, data.model_dump(exclude_unset=True)))


@router.post("/{product_id}/duplicate", response_model=ProductResponse)
def duplicate_product(
    product_id: str,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    """Copia con sufijo (Copia) en el nombre y -COPY en el SKU"""
    return product_response(store.duplicate_product(product_id))


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    # La imagen queda en el bucket; se borra desde la galería
    store.delete_product(product_id)
    return {"message": "Product deleted"}
