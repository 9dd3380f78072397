from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Tuple, Dict, Literal
from decimal import Decimal
from vitrina.schemas.product import ProductResponse
from vitrina.schemas.category import CategoryResponse, SubcategoryResponse
from vitrina.schemas.promotion import PromotionalSectionResponse

ALL = "all"


class FilterState(BaseModel):
    """Criterios activos del catálogo (efímeros, nunca se guardan)"""
    search_term: str = ""
    selected_category: str = ALL
    selected_subcategory_id: str = ""
    selected_brand: str = ALL
    # Panel lateral de filtros
    # (min, max); max None = sin tope
    price_range: Optional[Tuple[Decimal, Optional[Decimal]]] = None
    only_in_stock: bool = False
    categories: List[str] = []
    brands: List[str] = []

    @model_validator(mode="after")
    def check_price_range(self):
        if self.price_range is not None and self.price_range[1] is not None \
                and self.price_range[0] > self.price_range[1]:
            raise ValueError("price_range min must not exceed max")
        return self


class SelectionRequest(BaseModel):
    state: FilterState = Field(default_factory=FilterState)
    action: Literal["category", "subcategory", "brand", "home", "search"]
    value: str = ""


class CategorySection(BaseModel):
    """Bloque del catálogo agrupado por categoría"""
    category: str
    products: List[ProductResponse]
    sections_before: List[PromotionalSectionResponse] = []


class CatalogView(BaseModel):
    state: FilterState
    browse_mode: bool
    products: List[ProductResponse]
    total: int
    brands: List[str]
    categories: List[str]
    product_counts: Dict[str, int]
    active_filters: int
    selected_subcategory_name: str = ""
    db_categories: List[CategoryResponse] = []
    subcategories: List[SubcategoryResponse] = []
    sections: Dict[str, List[PromotionalSectionResponse]] = {}
    category_sections: List[CategorySection] = []
