from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str = ""
    price: Decimal
    formatted_price: Optional[str] = None
    image_url: str = ""
    category: str
    subcategory_id: Optional[str] = None
    stock: int
    sku: Optional[str] = None
    brand: Optional[str] = None
    dimensions: Optional[str] = None
    compatibility: Optional[str] = None

    class Config:
        from_attributes = True


class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    price: Decimal = Field(ge=0)
    image_url: str = ""
    category: str = Field(min_length=1)
    subcategory_id: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    sku: Optional[str] = None
    brand: Optional[str] = None
    dimensions: Optional[str] = None
    compatibility: Optional[str] = None


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=1)
    subcategory_id: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    sku: Optional[str] = None
    brand: Optional[str] = None
    dimensions: Optional[str] = None
    compatibility: Optional[str] = None


class InquiryLinkResponse(BaseModel):
    url: str
    message: str
