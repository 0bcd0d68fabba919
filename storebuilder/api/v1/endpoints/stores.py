# storebuilder/api/v1/endpoints/stores.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from storebuilder.db.session import get_db
from storebuilder.deps.auth import ensure_store_access, get_current_user_id
from storebuilder.models.store import MemberRole, Store, StoreMember
from storebuilder.schemas.store import InitializePagesIn, InitializePagesOut, StoreCreate, StoreOut
from storebuilder.services.store_service import create_store, delete_store, get_store
from storebuilder.services.template_service import initialize_store_pages

router = APIRouter(prefix="/stores", tags=["stores"])


@router.get("", response_model=List[StoreOut])
def list_my_stores(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    stmt = (
        select(Store)
        .join(StoreMember, StoreMember.store_id == Store.id)
        .where(StoreMember.user_id == user_id)
        .order_by(Store.id.asc())
    )
    return db.scalars(stmt).all()


@router.post("", response_model=StoreOut, status_code=201)
def create_store_endpoint(
    payload: StoreCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    store = create_store(db, owner_id=user_id, payload=payload)
    db.commit()
    db.refresh(store)
    return store


@router.get("/{store_id}", response_model=StoreOut)
def get_store_endpoint(
    store_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    store = get_store(db, store_id)
    ensure_store_access(db, user_id=user_id, store_id=store.id)
    return store


@router.delete("/{store_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_store_endpoint(
    store_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    store = get_store(db, store_id)
    ensure_store_access(db, user_id=user_id, store_id=store.id, roles=[MemberRole.owner])
    delete_store(db, store.id)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{store_id}/initialize-pages", response_model=InitializePagesOut)
def initialize_pages_endpoint(
    store_id: int,
    payload: Optional[InitializePagesIn] = Body(None),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Creates the standard pages the store is missing; safe to call repeatedly."""
    store = get_store(db, store_id)
    ensure_store_access(db, user_id=user_id, store_id=store.id)
    payload = payload or InitializePagesIn()
    created = initialize_store_pages(
        db,
        store_id=store.id,
        business_type=payload.business_type or store.business_type,
        business_category=payload.business_category or store.business_category,
    )
    db.commit()
    return InitializePagesOut(store_id=store.id, pages_created=created)
