# storebuilder/schemas/template.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from storebuilder.models.content import PageType


class PageTemplateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    business_type: str
    business_category: Optional[str] = None
    page_type: PageType
    template_name: str
    description: Optional[str] = None
    default_title: Optional[str] = None
    default_slug: Optional[str] = None
    default_sections: List[Dict[str, Any]]
    preview_image_url: Optional[str] = None
    sort_order: int
