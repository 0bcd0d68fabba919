# storebuilder/services/store_service.py
# Store lifecycle: a new store gets its owner, default theme, chrome and standard pages
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storebuilder.core.errors import ConflictError, DuplicateSlugError, NotFoundError
from storebuilder.core.settings import settings
from storebuilder.models.design import HeaderFooterSettings, Theme
from storebuilder.models.store import MemberRole, Store, StoreMember
from storebuilder.schemas.store import StoreCreate
from storebuilder.services.page_service import validate_slug
from storebuilder.services.template_service import initialize_store_pages

logger = logging.getLogger(__name__)


def get_store(db: Session, store_id: int) -> Store:
    store = db.get(Store, store_id)
    if not store:
        raise NotFoundError("Store not found.")
    return store


def get_store_by_slug(db: Session, slug: str) -> Optional[Store]:
    return db.scalar(select(Store).where(Store.slug == slug))


def create_store(db: Session, *, owner_id: int, payload: StoreCreate) -> Store:
    """
    No commit here: the caller owns the transaction, so a failed seeding
    step rolls the whole store back with it.
    """
    slug = validate_slug(payload.slug)
    if get_store_by_slug(db, slug):
        raise DuplicateSlugError(f"A store with slug '{slug}' already exists.")

    store = Store(
        slug=slug,
        name=payload.name,
        business_type=payload.business_type or settings.DEFAULT_BUSINESS_TYPE,
        business_category=payload.business_category or settings.DEFAULT_BUSINESS_CATEGORY,
    )
    try:
        with db.begin_nested():
            db.add(store)
            db.flush()
    except IntegrityError:
        raise ConflictError(f"A store with slug '{slug}' already exists.") from None

    db.add(StoreMember(store_id=store.id, user_id=owner_id, role=MemberRole.owner))
    db.add(Theme(store_id=store.id, name="Default Theme", is_active=True))
    db.add(HeaderFooterSettings(store_id=store.id))
    db.flush()

    pages_created = 0
    if settings.AUTO_INITIALIZE_PAGES:
        pages_created = initialize_store_pages(
            db,
            store_id=store.id,
            business_type=store.business_type,
            business_category=store.business_category,
        )
    logger.info("store created id=%s slug=%s owner=%s pages=%s", store.id, slug, owner_id, pages_created)
    return store


def delete_store(db: Session, store_id: int) -> None:
    """Pages, sections, themes, navigation and settings go with it (ON DELETE CASCADE)."""
    store = get_store(db, store_id)
    db.delete(store)
    db.flush()
    logger.info("store deleted id=%s", store_id)
