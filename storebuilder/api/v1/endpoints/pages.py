# storebuilder/api/v1/endpoints/pages.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from storebuilder.db.session import get_db
from storebuilder.deps.auth import ensure_store_access, get_current_user_id
from storebuilder.schemas.page import PageCreate, PageOut, PageUpdate
from storebuilder.services.page_service import create_page, delete_page, get_page, list_pages, update_page
from storebuilder.services.store_service import get_store

router = APIRouter(tags=["pages"])


@router.get("/stores/{store_id}/pages", response_model=List[PageOut])
def list_pages_endpoint(
    store_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    get_store(db, store_id)
    ensure_store_access(db, user_id=user_id, store_id=store_id)
    return list_pages(db, store_id=store_id)


@router.post("/stores/{store_id}/pages", response_model=PageOut, status_code=201)
def create_page_endpoint(
    store_id: int,
    payload: PageCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    get_store(db, store_id)
    ensure_store_access(db, user_id=user_id, store_id=store_id)
    page = create_page(db, store_id=store_id, payload=payload)
    db.commit()
    db.refresh(page)
    return page


@router.get("/pages/{page_id}", response_model=PageOut)
def get_page_endpoint(
    page_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    page = get_page(db, page_id)
    ensure_store_access(db, user_id=user_id, store_id=page.store_id)
    return page


@router.patch("/pages/{page_id}", response_model=PageOut)
def update_page_endpoint(
    page_id: int,
    patch: PageUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    ensure_store_access(db, user_id=user_id, store_id=get_page(db, page_id).store_id)
    page = update_page(db, page_id, patch)
    db.commit()
    db.refresh(page)
    return page


@router.delete("/pages/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_page_endpoint(
    page_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    ensure_store_access(db, user_id=user_id, store_id=get_page(db, page_id).store_id)
    delete_page(db, page_id)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
