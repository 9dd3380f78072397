from pydantic import BaseModel, Field
from typing import Optional, Dict


class FooterSettingsResponse(BaseModel):
    id: str
    company_name: str = ""
    company_description: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    facebook_url: str = ""
    instagram_url: str = ""
    twitter_url: str = ""
    whatsapp_number: str = ""
    copyright_text: str = ""

    class Config:
        from_attributes = True


class FooterSettingsUpdate(BaseModel):
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    twitter_url: Optional[str] = None
    whatsapp_number: Optional[str] = None
    copyright_text: Optional[str] = None


class ThemeResponse(BaseModel):
    id: str
    theme_name: str
    primary_color: str
    secondary_color: str
    accent_color: str
    background_gradient_from: str
    background_gradient_to: str
    header_background: str
    button_gradient_from: str
    button_gradient_to: str
    custom_css: Optional[str] = None
    active: bool

    class Config:
        from_attributes = True


class ThemeCreate(BaseModel):
    theme_name: str = Field(min_length=1)
    primary_color: str = "#39ff14"
    secondary_color: str = "#0a0a0a"
    accent_color: str = "#22c55e"
    background_gradient_from: str = "#000000"
    background_gradient_to: str = "#111111"
    header_background: str = "#0a0a0a"
    button_gradient_from: str = "#39ff14"
    button_gradient_to: str = "#16a34a"
    custom_css: Optional[str] = None


class ThemeUpdate(BaseModel):
    theme_name: Optional[str] = Field(default=None, min_length=1)
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    accent_color: Optional[str] = None
    background_gradient_from: Optional[str] = None
    background_gradient_to: Optional[str] = None
    header_background: Optional[str] = None
    button_gradient_from: Optional[str] = None
    button_gradient_to: Optional[str] = None
    custom_css: Optional[str] = None


class ActiveThemeResponse(BaseModel):
    """Tema activo con las variables CSS que aplica el frontend"""
    theme: Optional[ThemeResponse] = None
    css_variables: Dict[str, str] = {}
    custom_css: Optional[str] = None
