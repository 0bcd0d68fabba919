# storebuilder/api/v1/endpoints/themes.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storebuilder.db.session import get_db
from storebuilder.deps.auth import ensure_store_access, get_current_user_id
from storebuilder.schemas.design import ThemeCreate, ThemeOut, ThemeUpdate
from storebuilder.services.store_service import get_store
from storebuilder.services.theme_service import activate_theme, create_theme, get_theme, list_themes, update_theme

router = APIRouter(tags=["themes"])


@router.get("/stores/{store_id}/themes", response_model=List[ThemeOut])
def list_themes_endpoint(
    store_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    get_store(db, store_id)
    ensure_store_access(db, user_id=user_id, store_id=store_id)
    return list_themes(db, store_id=store_id)


@router.post("/stores/{store_id}/themes", response_model=ThemeOut, status_code=201)
def create_theme_endpoint(
    store_id: int,
    payload: ThemeCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    get_store(db, store_id)
    ensure_store_access(db, user_id=user_id, store_id=store_id)
    theme = create_theme(db, store_id=store_id, payload=payload)
    db.commit()
    db.refresh(theme)
    return theme


@router.patch("/themes/{theme_id}", response_model=ThemeOut)
def update_theme_endpoint(
    theme_id: int,
    patch: ThemeUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    ensure_store_access(db, user_id=user_id, store_id=get_theme(db, theme_id).store_id)
    theme = update_theme(db, theme_id, patch)
    db.commit()
    db.refresh(theme)
    return theme


@router.post("/themes/{theme_id}/activate", response_model=ThemeOut)
def activate_theme_endpoint(
    theme_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    ensure_store_access(db, user_id=user_id, store_id=get_theme(db, theme_id).store_id)
    theme = activate_theme(db, theme_id)
    db.commit()
    db.refresh(theme)
    return theme
