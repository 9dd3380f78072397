from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from vitrina.api.deps import get_store, admin_required
from vitrina.schemas.category import (
    CategoryResponse, CategoryCreate, CategoryUpdate, CategoryRow,
    SubcategoryResponse, SubcategoryCreate, SubcategoryUpdate, SubcategoryRow,
    DeleteWarning,
)
from vitrina.services.category_manager import CategoryManager
from vitrina.services.store import CatalogStore

router = APIRouter(prefix="/api/admin/categories", tags=["admin-categories"])
subcategories_router = APIRouter(prefix="/api/admin/subcategories", tags=["admin-categories"])


def get_manager(
    expanded: List[str] = Query([], description="Ids de nodos expandidos"),
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
) -> CategoryManager:
    return CategoryManager(store, expanded).load()


# === Categories ===

@router.get("/", response_model=List[CategoryRow])
def list_categories(manager: CategoryManager = Depends(get_manager)):
    """Categorías con conteo de subcategorías y las filas visibles del árbol"""
    return manager.rows()


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: str,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    return store.get_category(category_id)


@router.post("/", response_model=CategoryResponse)
def create_category(data: CategoryCreate, manager: CategoryManager = Depends(get_manager)):
    return manager.create_category(data.model_dump())


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(category_id: str, data: CategoryUpdate, manager: CategoryManager = Depends(get_manager)):
    return manager.update_category(category_id, data.model_dump(exclude_unset=True))


@router.get("/{category_id}/delete-warning", response_model=DeleteWarning)
def category_delete_warning(category_id: str, manager: CategoryManager = Depends(get_manager)):
    return manager.delete_warning("category", category_id)


@router.delete("/{category_id}")
def delete_category(category_id: str, manager: CategoryManager = Depends(get_manager)):
    removed = manager.delete_category(category_id)
    return {"message": "Category deleted", "subcategories_deleted": removed}


# === Subcategories ===

@subcategories_router.get("/", response_model=List[SubcategoryResponse])
def list_subcategories(
    category_id: Optional[str] = Query(None),
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    return store.list_subcategories(category_id=category_id)


@subcategories_router.get("/parent-options", response_model=List[SubcategoryRow])
def parent_options(
    category_id: str,
    editing_id: Optional[str] = Query(None),
    manager: CategoryManager = Depends(get_manager)
):
    """Padres posibles para el formulario (sin el nodo editado ni su subárbol)"""
    return [
        {
            "subcategory": sub,
            "depth": depth,
            "children_count": manager.navigator.direct_children_count(sub),
            "is_expanded": True,
        }
        for sub, depth in manager.parent_options(category_id, editing_id)
    ]


@subcategories_router.post("/", response_model=SubcategoryResponse)
def create_subcategory(data: SubcategoryCreate, manager: CategoryManager = Depends(get_manager)):
    return manager.create_subcategory(data.model_dump())


@subcategories_router.patch("/{subcategory_id}", response_model=SubcategoryResponse)
def update_subcategory(
    subcategory_id: str,
    data: SubcategoryUpdate,
    manager: CategoryManager = Depends(get_manager)
):
    return manager.update_subcategory(subcategory_id, data.model_dump(exclude_unset=True))


@subcategories_router.get("/{subcategory_id}/delete-warning", response_model=DeleteWarning)
def subcategory_delete_warning(subcategory_id: str, manager: CategoryManager = Depends(get_manager)):
    return manager.delete_warning("subcategory", subcategory_id)


@subcategories_router.delete("/{subcategory_id}")
def delete_subcategory(subcategory_id: str, manager: CategoryManager = Depends(get_manager)):
    removed = manager.delete_subcategory(subcategory_id)
    return {"message": "Subcategory deleted", "descendants_deleted": removed}
