from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from .category import new_id, utcnow


class FooterSettings(SQLModel, table=True):
    __tablename__ = "footer_settings"

    id: str = Field(default_factory=new_id, primary_key=True)
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

    updated_at: datetime = Field(default_factory=utcnow)


class SiteTheme(SQLModel, table=True):
    __tablename__ = "site_theme_settings"

    id: str = Field(default_factory=new_id, primary_key=True)
    theme_name: str
    primary_color: str = "#39ff14"
    secondary_color: str = "#0a0a0a"
    accent_color: str = "#22c55e"
    background_gradient_from: str = "#000000"
    background_gradient_to: str = "#111111"
    header_background: str = "#0a0a0a"
    button_gradient_from: str = "#39ff14"
    button_gradient_to: str = "#16a34a"
    custom_css: Optional[str] = None
    active: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
