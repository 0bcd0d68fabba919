# storebuilder/schemas/design.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storebuilder.models.design import NavLocation


# -------- Themes --------
class ThemeCreate(BaseModel):
    name: str = Field("Default Theme", min_length=1, max_length=128)
    colors: Optional[Dict[str, Any]] = None
    typography: Optional[Dict[str, Any]] = None
    layout: Optional[Dict[str, Any]] = None
    custom_css: Optional[str] = None
    is_active: bool = False


class ThemeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    # Patches: keys set to null are removed
    colors: Optional[Dict[str, Any]] = None
    typography: Optional[Dict[str, Any]] = None
    layout: Optional[Dict[str, Any]] = None
    custom_css: Optional[str] = None


class ThemeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    store_id: int
    name: str
    is_active: bool
    colors: Dict[str, Any]
    typography: Dict[str, Any]
    layout: Dict[str, Any]
    custom_css: Optional[str] = None
    updated_at: datetime


# -------- Navigation --------
class NavigationItemCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=160)
    url: Optional[str] = Field(None, max_length=1024)
    page_id: Optional[int] = None
    location: NavLocation = NavLocation.header
    parent_id: Optional[int] = None
    is_highlighted: bool = False
    open_in_new_tab: bool = False


class NavigationItemUpdate(BaseModel):
    label: Optional[str] = Field(None, min_length=1, max_length=160)
    url: Optional[str] = Field(None, max_length=1024)
    page_id: Optional[int] = None
    is_highlighted: Optional[bool] = None
    open_in_new_tab: Optional[bool] = None


class NavigationReorder(BaseModel):
    location: NavLocation
    parent_id: Optional[int] = None
    item_ids: List[int]


class NavigationItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    label: str
    url: Optional[str] = None
    page_id: Optional[int] = None
    location: NavLocation
    parent_id: Optional[int] = None
    sort_order: int
    is_highlighted: bool
    open_in_new_tab: bool
    children: List["NavigationItemOut"] = []


# -------- Header / footer --------
class HeaderFooterUpdate(BaseModel):
    header_config: Optional[Dict[str, Any]] = None
    footer_config: Optional[Dict[str, Any]] = None
    social_links: Optional[Dict[str, Any]] = None


class HeaderFooterOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    store_id: int
    header_config: Dict[str, Any]
    footer_config: Dict[str, Any]
    social_links: Dict[str, Any]
