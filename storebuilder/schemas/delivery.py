# storebuilder/schemas/delivery.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from storebuilder.schemas.design import NavigationItemOut


class DeliverySectionOut(BaseModel):
    id: int
    type: str
    name: str
    sort_order: int
    config: Dict[str, Any] = Field(description="Registry defaults + stored config (+ mobile overrides at mobile)")


class DeliveryPageOut(BaseModel):
    store_slug: str
    id: int
    title: str
    slug: str
    page_type: str
    viewport: str
    show_header: bool
    show_footer: bool
    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    og_image_url: Optional[str] = None
    published_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    sections: List[DeliverySectionOut]


class DeliveryThemeOut(BaseModel):
    name: str
    colors: Dict[str, Any]
    typography: Dict[str, Any]
    layout: Dict[str, Any]
    custom_css: Optional[str] = None


class DeliveryStoreOut(BaseModel):
    slug: str
    name: str
    business_type: str
    business_category: Optional[str] = None
    theme: Optional[DeliveryThemeOut] = None
    header_config: Dict[str, Any] = {}
    footer_config: Dict[str, Any] = {}
    social_links: Dict[str, Any] = {}
    navigation: Dict[str, List[NavigationItemOut]] = {}
    pages: List[Dict[str, str]] = Field(default_factory=list, description="Published pages: slug + title")
