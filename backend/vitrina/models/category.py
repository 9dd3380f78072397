from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone
import uuid


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str = Field(index=True)
    description: Optional[str] = None
    icon: str = Field(default="Package")

    order_position: int = Field(default=0)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Subcategory(SQLModel, table=True):
    __tablename__ = "subcategories"

    id: str = Field(default_factory=new_id, primary_key=True)
    category_id: str = Field(foreign_key="categories.id", index=True)
    # Nodo raíz del subárbol de la categoría cuando es None
    parent_id: Optional[str] = Field(default=None, foreign_key="subcategories.id", index=True)
    name: str

    order_position: int = Field(default=0)
    is_active: bool = Field(default=True)
    # Profundidad cacheada, se recalcula al escribir
    level: int = Field(default=0)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
