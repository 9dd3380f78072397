from .category import Category, Subcategory
from .product import Product
from .promotion import Banner, PromotionalSection, SectionPosition, SectionType
from .site import FooterSettings, SiteTheme

__all__ = [
    "Category", "Subcategory",
    "Product",
    "Banner", "PromotionalSection", "SectionPosition", "SectionType",
    "FooterSettings", "SiteTheme",
]
