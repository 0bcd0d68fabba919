# storebuilder/api/v1/endpoints/section_types.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter

from storebuilder.schemas.section import PaletteCategoryOut, SectionDefinitionOut
from storebuilder.section_registry import lookup, palette

router = APIRouter(prefix="/section-types", tags=["section-types"])


@router.get("", response_model=List[PaletteCategoryOut])
def get_palette():
    """Addable section types grouped by category (header/footer are managed elsewhere)."""
    return palette()


@router.get("/{section_type}", response_model=SectionDefinitionOut, response_model_by_alias=True)
def get_section_type(section_type: str):
    return lookup(section_type).to_dict()
