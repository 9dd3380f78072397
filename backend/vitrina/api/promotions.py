from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from vitrina.api.deps import get_store, admin_required
from vitrina.models.promotion import SectionPosition
from vitrina.schemas.promotion import (
    BannerResponse, BannerCreate, BannerUpdate,
    PromotionalSectionResponse, PromotionalSectionCreate, PromotionalSectionUpdate,
)
from vitrina.services.store import CatalogStore

router = APIRouter(prefix="/api", tags=["promotions"])
admin_router = APIRouter(prefix="/api/admin", tags=["admin-promotions"])


# === Public ===

@router.get("/banners", response_model=List[BannerResponse])
def list_active_banners(store: CatalogStore = Depends(get_store)):
    """Banners activos del carrusel, ordenados por posición"""
    return store.list_banners(active_only=True)


@router.get("/promotional-sections", response_model=List[PromotionalSectionResponse])
def list_active_sections(
    position: Optional[SectionPosition] = Query(None),
    store: CatalogStore = Depends(get_store)
):
    sections = store.list_promotional_sections(active_only=True)
    if position is not None:
        sections = [s for s in sections if s.position == position]
    return sections


# === Admin Banners ===

@admin_router.get("/banners", response_model=List[BannerResponse])
def list_banners(store: CatalogStore = Depends(get_store), _: dict = Depends(admin_required)):
    return store.list_banners()


@admin_router.post("/banners", response_model=BannerResponse)
def create_banner(
    data: BannerCreate,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    return store.create_banner(data.model_dump())


@admin_router.patch("/banners/{banner_id}", response_model=BannerResponse)
def update_banner(
    banner_id: str,
    data: BannerUpdate,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    return store.update_banner(banner_id, data.model_dump(exclude_unset=True))


@admin_router.delete("/banners/{banner_id}")
def delete_banner(
    banner_id: str,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    store.delete_banner(banner_id)
    return {"message": "Banner deleted"}


# === Admin Promotional sections ===

@admin_router.get("/promotional-sections", response_model=List[PromotionalSectionResponse])
def list_sections(store: CatalogStore = Depends(get_store), _: dict = Depends(admin_required)):
    return store.list_promotional_sections()


@admin_router.post("/promotional-sections", response_model=PromotionalSectionResponse)
def create_section(
    data: PromotionalSectionCreate,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    return store.create_promotional_section(data.model_dump())


@admin_router.patch("/promotional-sections/{section_id}", response_model=PromotionalSectionResponse)
def update_section(
    section_id: str,
    data: PromotionalSectionUpdate,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    return store.update_promotional_section(section_id, data.model_dump(exclude_unset=True))


@admin_router.delete("/promotional-sections/{section_id}")
def delete_section(
    section_id: str,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    store.delete_promotional_section(section_id)
    return {"message": "Promotional section deleted"}
