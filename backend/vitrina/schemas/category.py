from pydantic import BaseModel, Field
from typing import Optional, List


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    icon: str
    order_position: int
    is_active: bool

    class Config:
        from_attributes = True


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    icon: str = "Package"
    order_position: int = 0
    is_active: bool = True


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    icon: Optional[str] = None
    order_position: Optional[int] = None
    is_active: Optional[bool] = None


class SubcategoryResponse(BaseModel):
    id: str
    category_id: str
    parent_id: Optional[str] = None
    name: str
    order_position: int
    is_active: bool
    level: int = 0

    class Config:
        from_attributes = True


class SubcategoryCreate(BaseModel):
    category_id: str
    parent_id: Optional[str] = None
    name: str = Field(min_length=1)
    order_position: int = 0
    is_active: bool = True


class SubcategoryUpdate(BaseModel):
    category_id: Optional[str] = None
    parent_id: Optional[str] = None
    name: Optional[str] = Field(default=None, min_length=1)
    order_position: Optional[int] = None
    is_active: Optional[bool] = None


class SubcategoryTreeNode(SubcategoryResponse):
    """Nodo del árbol anidado (vista pública)"""
    children: List["SubcategoryTreeNode"] = []


class CategoryTree(CategoryResponse):
    subcategories: List[SubcategoryTreeNode] = []


class SubcategoryRow(BaseModel):
    """Fila del panel de administración con su indentación"""
    subcategory: SubcategoryResponse
    depth: int
    children_count: int
    is_expanded: bool


class CategoryRow(BaseModel):
    category: CategoryResponse
    subcategories_count: int
    is_expanded: bool
    rows: List[SubcategoryRow] = []


class DeleteWarning(BaseModel):
    id: str
    message: str
    cascade_count: int
