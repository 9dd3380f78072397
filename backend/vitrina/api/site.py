from fastapi import APIRouter, Depends
from typing import Dict, List, Optional
from vitrina.api.deps import get_store, admin_required
from vitrina.models.site import SiteTheme
from vitrina.schemas.site import (
    FooterSettingsResponse, FooterSettingsUpdate,
    ThemeResponse, ThemeCreate, ThemeUpdate, ActiveThemeResponse,
)
from vitrina.services.store import CatalogStore

router = APIRouter(prefix="/api/site", tags=["site"])
admin_router = APIRouter(prefix="/api/admin/site", tags=["admin-site"])

# Variable CSS -> campo del tema
CSS_VARIABLES = {
    "--primary-color": "primary_color",
    "--secondary-color": "secondary_color",
    "--accent-color": "accent_color",
    "--bg-gradient-from": "background_gradient_from",
    "--bg-gradient-to": "background_gradient_to",
    "--header-bg": "header_background",
    "--button-gradient-from": "button_gradient_from",
    "--button-gradient-to": "button_gradient_to",
}


def css_variables(theme: SiteTheme) -> Dict[str, str]:
    return {name: getattr(theme, field) for name, field in CSS_VARIABLES.items()}


# === Public ===

@router.get("/footer", response_model=Optional[FooterSettingsResponse])
def get_footer(store: CatalogStore = Depends(get_store)):
    return store.get_footer_settings()


@router.get("/theme", response_model=ActiveThemeResponse)
def get_active_theme(store: CatalogStore = Depends(get_store)):
    """Tema activo; sin tema el frontend usa sus colores por defecto"""
    theme = store.get_active_theme()
    if theme is None:
        return ActiveThemeResponse()
    return ActiveThemeResponse(
        theme=ThemeResponse.model_validate(theme),
        css_variables=css_variables(theme),
        custom_css=theme.custom_css,
    )


# === Admin Footer ===

@admin_router.put("/footer", response_model=FooterSettingsResponse)
def update_footer(
    data: FooterSettingsUpdate,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    return store.update_footer_settings(data.model_dump(exclude_unset=True))


# === Admin Themes ===

@admin_router.get("/themes", response_model=List[ThemeResponse])
def list_themes(store: CatalogStore = Depends(get_store), _: dict = Depends(admin_required)):
    return store.list_themes()


@admin_router.post("/themes", response_model=ThemeResponse)
def create_theme(
    data: ThemeCreate,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    """Los temas nuevos se crean inactivos"""
    return store.create_theme(data.model_dump())


@admin_router.patch("/themes/{theme_id}", response_model=ThemeResponse)
def update_theme(
    theme_id: str,
    data: ThemeUpdate,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    return store.update_theme(theme_id, data.model_dump(exclude_unset=True))


@admin_router.post("/themes/{theme_id}/activate", response_model=ThemeResponse)
def activate_theme(
    theme_id: str,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    return store.activate_theme(theme_id)


@admin_router.delete("/themes/{theme_id}")
def delete_theme(
    theme_id: str,
    store: CatalogStore = Depends(get_store),
    _: dict = Depends(admin_required)
):
    store.delete_theme(theme_id)
    return {"message": "Theme deleted"}
