# storebuilder/api/v1/endpoints/page_templates.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storebuilder.core.settings import settings
from storebuilder.db.session import get_db
from storebuilder.schemas.template import PageTemplateOut
from storebuilder.services.template_service import resolve_templates

router = APIRouter(prefix="/page-templates", tags=["page-templates"])


@router.get("", response_model=List[PageTemplateOut])
def list_page_templates(
    business_type: str = Query(settings.DEFAULT_BUSINESS_TYPE),
    business_category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return resolve_templates(db, business_type=business_type, business_category=business_category)
