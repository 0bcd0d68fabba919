# storebuilder/api/v1/endpoints/header_footer.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storebuilder.db.session import get_db
from storebuilder.deps.auth import ensure_store_access, get_current_user_id
from storebuilder.schemas.design import HeaderFooterOut, HeaderFooterUpdate
from storebuilder.services.header_footer_service import get_or_create_settings, update_settings
from storebuilder.services.store_service import get_store

router = APIRouter(prefix="/stores/{store_id}/header-footer", tags=["header-footer"])


@router.get("", response_model=HeaderFooterOut)
def get_header_footer(
    store_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    get_store(db, store_id)
    ensure_store_access(db, user_id=user_id, store_id=store_id)
    row = get_or_create_settings(db, store_id=store_id)
    db.commit()
    db.refresh(row)
    return row


@router.patch("", response_model=HeaderFooterOut)
def update_header_footer(
    store_id: int,
    patch: HeaderFooterUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    get_store(db, store_id)
    ensure_store_access(db, user_id=user_id, store_id=store_id)
    row = update_settings(db, store_id=store_id, patch=patch)
    db.commit()
    db.refresh(row)
    return row
