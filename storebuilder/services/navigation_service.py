# storebuilder/services/navigation_service.py
# Header / footer / mobile menus, one level of nesting per parent
from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import and_, case, func, select, update
from sqlalchemy.orm import Session

from storebuilder.core.errors import NotFoundError, ValidationError
from storebuilder.models.content import Page
from storebuilder.models.design import NavigationItem, NavLocation
from storebuilder.models.store import Store
from storebuilder.schemas.design import NavigationItemCreate, NavigationItemUpdate

logger = logging.getLogger(__name__)


def get_item(db: Session, item_id: int) -> NavigationItem:
    item = db.get(NavigationItem, item_id)
    if not item:
        raise NotFoundError("Navigation item not found.")
    return item


def _siblings_filter(store_id: int, location: NavLocation, parent_id: Optional[int]):
    parent = NavigationItem.parent_id.is_(None) if parent_id is None else NavigationItem.parent_id == parent_id
    return and_(NavigationItem.store_id == store_id, NavigationItem.location == location, parent)


def _check_page(db: Session, store_id: int, page_id: Optional[int]) -> None:
    if page_id is None:
        return
    page = db.get(Page, page_id)
    if not page or page.store_id != store_id:
        raise ValidationError("Linked page does not belong to this store.")


def list_navigation(db: Session, *, store_id: int, location: Optional[NavLocation] = None) -> Sequence[NavigationItem]:
    """Top-level items in menu order; nested items hang off `children`."""
    stmt = select(NavigationItem).where(
        NavigationItem.store_id == store_id, NavigationItem.parent_id.is_(None)
    )
    if location is not None:
        stmt = stmt.where(NavigationItem.location == location)
    return db.scalars(stmt.order_by(NavigationItem.location, NavigationItem.sort_order, NavigationItem.id)).all()


def create_item(db: Session, *, store_id: int, payload: NavigationItemCreate) -> NavigationItem:
    if not db.get(Store, store_id):
        raise NotFoundError("Store not found.")
    _check_page(db, store_id, payload.page_id)
    if payload.parent_id is not None:
        parent = db.get(NavigationItem, payload.parent_id)
        if not parent or parent.store_id != store_id:
            raise ValidationError("Parent item does not belong to this store.")
        if parent.location != payload.location:
            raise ValidationError("Parent item is in a different menu.")

    current_max = db.scalar(
        select(func.max(NavigationItem.sort_order)).where(
            _siblings_filter(store_id, payload.location, payload.parent_id)
        )
    )
    item = NavigationItem(
        store_id=store_id,
        label=payload.label,
        url=payload.url,
        page_id=payload.page_id,
        location=payload.location,
        parent_id=payload.parent_id,
        is_highlighted=payload.is_highlighted,
        open_in_new_tab=payload.open_in_new_tab,
        sort_order=0 if current_max is None else current_max + 1,
    )
    db.add(item)
    db.flush()
    return item


def update_item(db: Session, item_id: int, patch: NavigationItemUpdate) -> NavigationItem:
    item = get_item(db, item_id)
    data = patch.model_dump(exclude_unset=True)
    if "page_id" in data:
        _check_page(db, item.store_id, data["page_id"])
        item.page_id = data["page_id"]
    if data.get("label"):
        item.label = data["label"]
    if "url" in data:
        item.url = data["url"]
    for attr in ("is_highlighted", "open_in_new_tab"):
        if data.get(attr) is not None:
            setattr(item, attr, data[attr])
    db.flush()
    return item


def delete_item(db: Session, item_id: int) -> None:
    item = get_item(db, item_id)
    db.delete(item)
    db.flush()


def reorder_items(
    db: Session,
    *,
    store_id: int,
    location: NavLocation,
    parent_id: Optional[int],
    item_ids: Sequence[int],
) -> Sequence[NavigationItem]:
    """Same contract as section reordering: the full sibling list, each id once."""
    db.flush()
    current = set(db.scalars(select(NavigationItem.id).where(_siblings_filter(store_id, location, parent_id))))
    ids = list(item_ids)
    if any(i not in current for i in ids):
        raise NotFoundError("Navigation items not found in this menu.")
    if len(set(ids)) != len(ids) or set(ids) != current:
        raise ValidationError("Menu order must list every item of the menu exactly once.")

    if ids:
        positions = {iid: pos for pos, iid in enumerate(ids)}
        db.execute(
            update(NavigationItem)
            .where(NavigationItem.id.in_(ids))
            .values(sort_order=case(positions, value=NavigationItem.id))
            .execution_options(synchronize_session=False)
        )
    logger.info("navigation reordered store_id=%s location=%s parent=%s", store_id, location.value, parent_id)
    stmt = (
        select(NavigationItem)
        .where(_siblings_filter(store_id, location, parent_id))
        .order_by(NavigationItem.sort_order, NavigationItem.id)
        .execution_options(populate_existing=True)
    )
    return db.scalars(stmt).all()
