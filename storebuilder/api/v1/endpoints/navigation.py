# storebuilder/api/v1/endpoints/navigation.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from storebuilder.db.session import get_db
from storebuilder.deps.auth import ensure_store_access, get_current_user_id
from storebuilder.models.design import NavLocation
from storebuilder.schemas.design import (
    NavigationItemCreate, NavigationItemOut, NavigationItemUpdate, NavigationReorder,
)
from storebuilder.services import navigation_service as nav
from storebuilder.services.store_service import get_store

router = APIRouter(tags=["navigation"])


@router.get("/stores/{store_id}/navigation", response_model=List[NavigationItemOut])
def list_navigation_endpoint(
    store_id: int,
    location: Optional[NavLocation] = Query(None),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    get_store(db, store_id)
    ensure_store_access(db, user_id=user_id, store_id=store_id)
    return nav.list_navigation(db, store_id=store_id, location=location)


@router.post("/stores/{store_id}/navigation", response_model=NavigationItemOut, status_code=201)
def create_navigation_item_endpoint(
    store_id: int,
    payload: NavigationItemCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    get_store(db, store_id)
    ensure_store_access(db, user_id=user_id, store_id=store_id)
    item = nav.create_item(db, store_id=store_id, payload=payload)
    db.commit()
    db.refresh(item)
    return item


@router.put("/stores/{store_id}/navigation/order", response_model=List[NavigationItemOut])
def reorder_navigation_endpoint(
    store_id: int,
    payload: NavigationReorder,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    get_store(db, store_id)
    ensure_store_access(db, user_id=user_id, store_id=store_id)
    items = nav.reorder_items(
        db,
        store_id=store_id,
        location=payload.location,
        parent_id=payload.parent_id,
        item_ids=payload.item_ids,
    )
    db.commit()
    return items


@router.patch("/navigation/{item_id}", response_model=NavigationItemOut)
def update_navigation_item_endpoint(
    item_id: int,
    patch: NavigationItemUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    ensure_store_access(db, user_id=user_id, store_id=nav.get_item(db, item_id).store_id)
    item = nav.update_item(db, item_id, patch)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/navigation/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_navigation_item_endpoint(
    item_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    ensure_store_access(db, user_id=user_id, store_id=nav.get_item(db, item_id).store_id)
    nav.delete_item(db, item_id)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
