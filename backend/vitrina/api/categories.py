from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from vitrina.api.deps import get_store
from vitrina.schemas.category import (
    CategoryResponse, SubcategoryResponse, SubcategoryTreeNode, CategoryTree
)
from vitrina.services.store import CatalogStore
from vitrina.services.tree import TreeNavigator, SubcategoryNode

router = APIRouter(prefix="/api/categories", tags=["categories"])


def to_tree_node(node: SubcategoryNode) -> SubcategoryTreeNode:
    base = SubcategoryResponse.model_validate(node["subcategory"])
    return SubcategoryTreeNode(
        **base.model_dump(),
        children=[to_tree_node(child) for child in node["children"]],
    )


@router.get("/", response_model=List[CategoryResponse])
def list_categories(store: CatalogStore = Depends(get_store)):
    """Categorías activas"""
    return store.list_categories(active_only=True)


@router.get("/tree", response_model=List[CategoryTree])
def category_tree(store: CatalogStore = Depends(get_store)):
    """Categorías activas con su árbol de subcategorías"""
    navigator = TreeNavigator(store.list_subcategories(active_only=True))
    result = []
    for category in store.list_categories(active_only=True):
        base = CategoryResponse.model_validate(category)
        result.append(CategoryTree(
            **base.model_dump(),
            subcategories=[to_tree_node(node) for node in navigator.build_forest(category.id)],
        ))
    return result


@router.get("/{category_id}/subcategories", response_model=List[SubcategoryResponse])
def list_children(
    category_id: str,
    parent_id: Optional[str] = Query(None, description="Sin valor: raíces de la categoría"),
    store: CatalogStore = Depends(get_store)
):
    """Hijos directos dentro de la categoría"""
    navigator = TreeNavigator(store.list_subcategories(active_only=True, category_id=category_id))
    return navigator.children_of(category_id, parent_id)
