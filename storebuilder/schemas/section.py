# storebuilder/schemas/section.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class SectionCreate(BaseModel):
    section_type: str = Field(..., max_length=64)
    name: Optional[str] = Field(None, max_length=200)


class SectionRename(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class SectionReorder(BaseModel):
    # Full ordered list of the page's section ids, as the editor sees it after a drop
    section_ids: List[int]


class SectionMove(BaseModel):
    direction: Literal["up", "down"]


class SectionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    page_id: int
    store_id: int
    section_type: str
    name: str
    config: Dict[str, Any]
    mobile_config: Optional[Dict[str, Any]] = None
    is_visible: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime


class SectionDefinitionOut(BaseModel):
    type: str
    label: str
    category: str
    description: str
    icon: str
    default_config: Dict[str, Any]
    schema_: Dict[str, Any] = Field(..., alias="schema")

    model_config = ConfigDict(populate_by_name=True)


class PaletteItemOut(BaseModel):
    type: str
    label: str
    description: str
    icon: str


class PaletteCategoryOut(BaseModel):
    id: str
    label: str
    sections: List[PaletteItemOut]
