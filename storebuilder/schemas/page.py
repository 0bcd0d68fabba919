# storebuilder/schemas/page.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from storebuilder.models.content import PageType


class PageBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    show_header: bool = True
    show_footer: bool = True
    seo_title: Optional[str] = Field(None, max_length=200)
    seo_description: Optional[str] = None
    og_image_url: Optional[str] = Field(None, max_length=1024)


class PageCreate(PageBase):
    # Derived from the title when omitted; forced for system page types
    slug: Optional[str] = Field(None, max_length=128)
    page_type: PageType = PageType.custom
    is_published: bool = False


class PageUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = Field(None, max_length=128)
    is_published: Optional[bool] = None
    show_header: Optional[bool] = None
    show_footer: Optional[bool] = None
    seo_title: Optional[str] = Field(None, max_length=200)
    seo_description: Optional[str] = None
    og_image_url: Optional[str] = Field(None, max_length=1024)

    model_config = ConfigDict(extra="ignore")


class PageOut(PageBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    store_id: int
    slug: str
    page_type: PageType
    is_published: bool
    published_at: Optional[datetime] = None
    is_protected: bool
    created_at: datetime
    updated_at: datetime
