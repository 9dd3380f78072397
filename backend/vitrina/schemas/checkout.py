from pydantic import BaseModel, Field
from typing import List
from decimal import Decimal


class CartLineRequest(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)


class CheckoutRequest(BaseModel):
    items: List[CartLineRequest] = Field(min_length=1)


class CartLineResponse(BaseModel):
    product_id: str
    name: str
    sku: str | None = None
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class CheckoutResponse(BaseModel):
    url: str
    message: str
    items: List[CartLineResponse]
    total_items: int
    total: Decimal
    formatted_total: str
