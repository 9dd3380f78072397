from .category import CategoryResponse, SubcategoryResponse
from .product import ProductResponse
from .catalog import FilterState, CatalogView

__all__ = [
    "CategoryResponse", "SubcategoryResponse",
    "ProductResponse",
    "FilterState", "CatalogView",
]
