from fastapi import APIRouter, Depends, HTTPException
from vitrina.api.deps import get_store, get_settings
from vitrina.core.config import Settings
from vitrina.schemas.checkout import CheckoutRequest, CheckoutResponse, CartLineResponse
from vitrina.services.checkout import (
    add_to_cart, build_order_message, checkout_link, total_items, total_price
)
from vitrina.services.currency import format_price
from vitrina.services.store import CatalogStore
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["checkout"])


@router.post("/", response_model=CheckoutResponse)
def checkout(
    data: CheckoutRequest,
    store: CatalogStore = Depends(get_store),
    settings: Settings = Depends(get_settings)
):
    """Arma el pedido y el enlace de WhatsApp (no hay pago en línea)"""
    products = store.get_products([item.product_id for item in data.items])

    lines = []
    for item in data.items:
        product = products.get(item.product_id)
        if not product:
            raise HTTPException(status_code=400, detail=f"Product {item.product_id} not found")
        if product.stock <= 0:
            raise HTTPException(status_code=400, detail=f"Product {product.name} is out of stock")
        lines = add_to_cart(lines, product, item.quantity)

    total = total_price(lines)
    logger.info("Checkout link generated for %d items", total_items(lines))

    return CheckoutResponse(
        url=checkout_link(lines, settings.CHECKOUT_WHATSAPP_PHONE),
        message=build_order_message(lines),
        items=[
            CartLineResponse(
                product_id=line.product.id,
                name=line.product.name,
                sku=line.product.sku,
                quantity=line.quantity,
                unit_price=line.product.price,
                subtotal=line.subtotal,
            )
            for line in lines
        ],
        total_items=total_items(lines),
        total=total,
        formatted_total=format_price(total),
    )
