from pydantic import BaseModel, Field
from typing import Optional
from vitrina.models.promotion import SectionPosition, SectionType


class BannerResponse(BaseModel):
    id: str
    title: str
    description: str = ""
    image_url: str
    link_url: Optional[str] = None
    category: Optional[str] = None
    order_position: int
    is_active: bool
    show_title: bool
    show_shadow: bool

    class Config:
        from_attributes = True


class BannerCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""
    image_url: str = Field(min_length=1)
    link_url: Optional[str] = None
    category: Optional[str] = None
    order_position: int = 0
    is_active: bool = True
    show_title: bool = True
    show_shadow: bool = True


class BannerUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, min_length=1)
    link_url: Optional[str] = None
    category: Optional[str] = None
    order_position: Optional[int] = None
    is_active: Optional[bool] = None
    show_title: Optional[bool] = None
    show_shadow: Optional[bool] = None


class PromotionalSectionResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    image_url: str
    link_url: Optional[str] = None
    category: Optional[str] = None
    position: SectionPosition
    order_position: int
    is_active: bool
    section_type: SectionType

    class Config:
        from_attributes = True


class PromotionalSectionCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    image_url: str = Field(min_length=1)
    link_url: Optional[str] = None
    category: Optional[str] = None
    position: SectionPosition = SectionPosition.TOP
    order_position: int = 0
    is_active: bool = True
    section_type: SectionType = SectionType.FULL_WIDTH


class PromotionalSectionUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, min_length=1)
    link_url: Optional[str] = None
    category: Optional[str] = None
    position: Optional[SectionPosition] = None
    order_position: Optional[int] = None
    is_active: Optional[bool] = None
    section_type: Optional[SectionType] = None
