from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from .category import new_id, utcnow


class Product(SQLModel, table=True):
    __tablename__ = "products"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(index=True)
    description: str = ""

    price: Decimal = Field(max_digits=14, decimal_places=2)
    image_url: str = ""

    # Copia desnormalizada de Category.name, no es una foreign key
    category: str = Field(index=True)
    subcategory_id: Optional[str] = Field(default=None, index=True)
    stock: int = Field(default=0, ge=0)

    sku: Optional[str] = None
    brand: Optional[str] = None
    dimensions: Optional[str] = None
    compatibility: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
