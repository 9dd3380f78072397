from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum
from .category import new_id, utcnow


class SectionPosition(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"
    BETWEEN_CATEGORIES = "between_categories"


class SectionType(str, Enum):
    FULL_WIDTH = "full_width"
    HALF_WIDTH = "half_width"
    GRID_2 = "grid_2"
    GRID_3 = "grid_3"


class Banner(SQLModel, table=True):
    __tablename__ = "banners"

    id: str = Field(default_factory=new_id, primary_key=True)
    title: str
    description: str = ""
    image_url: str
    link_url: Optional[str] = None
    # Nombre de categoría a la que navega el banner
    category: Optional[str] = None

    order_position: int = Field(default=0)
    is_active: bool = Field(default=True)
    show_title: bool = Field(default=True)
    show_shadow: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class PromotionalSection(SQLModel, table=True):
    __tablename__ = "promotional_sections"

    id: str = Field(default_factory=new_id, primary_key=True)
    title: str
    description: Optional[str] = None
    image_url: str
    link_url: Optional[str] = None
    category: Optional[str] = None

    position: SectionPosition = Field(default=SectionPosition.TOP)
    # Para between_categories es el índice de la categoría tras la que aparece
    order_position: int = Field(default=0)
    is_active: bool = Field(default=True)
    section_type: SectionType = Field(default=SectionType.FULL_WIDTH)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
