from fastapi import APIRouter, Depends
from typing import List
from vitrina.api.catalog import filter_state_query, product_response
from vitrina.api.deps import get_store, get_settings
from vitrina.core.config import Settings
from vitrina.schemas.catalog import FilterState
from vitrina.schemas.product import ProductResponse, InquiryLinkResponse
from vitrina.services.checkout import build_inquiry_message, inquiry_link
from vitrina.services.filters import filter_products, distinct_brands
from vitrina.services.store import CatalogStore

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("/", response_model=List[ProductResponse])
def list_products(
    state: FilterState = Depends(filter_state_query),
    store: CatalogStore = Depends(get_store)
):
    """Productos filtrados, los más nuevos primero"""
    return [product_response(p) for p in filter_products(store.list_products(), state)]


@router.get("/brands", response_model=List[str])
def list_brands(store: CatalogStore = Depends(get_store)):
    return distinct_brands(store.list_products())


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, store: CatalogStore = Depends(get_store)):
    return product_response(store.get_product(product_id))


@router.get("/{product_id}/inquiry", response_model=InquiryLinkResponse)
def product_inquiry(
    product_id: str,
    store: CatalogStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Enlace de WhatsApp para consultar por un producto"""
    product = store.get_product(product_id)
    return InquiryLinkResponse(
        url=inquiry_link(product, settings.INQUIRY_WHATSAPP_PHONE),
        message=build_inquiry_message(product),
    )
