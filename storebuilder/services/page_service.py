# storebuilder/services/page_service.py
# Pages: slug rules, publication stamps, protected pages
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storebuilder.core.errors import (
    ConflictError, DuplicateSlugError, NotFoundError, ProtectedPageError, ValidationError,
)
from storebuilder.models.content import PROTECTED_SLUGS, SYSTEM_PAGE_SLUGS, Page, PageType
from storebuilder.models.store import Store
from storebuilder.schemas.page import PageCreate, PageUpdate

logger = logging.getLogger(__name__)

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(title: str) -> str:
    s = title.strip().lower()
    s = re.sub(r"\s+", "-", s)
    s = re.sub(r"[^a-z0-9-]", "", s)
    s = re.sub(r"-{2,}", "-", s)
    return s.strip("-")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_slug(slug: str) -> str:
    if not slug or not SLUG_RE.match(slug):
        raise ValidationError(f"Invalid slug '{slug}': use lowercase letters, digits and single hyphens.")
    return slug


def get_page_by_slug(db: Session, *, store_id: int, slug: str) -> Optional[Page]:
    return db.scalar(select(Page).where(and_(Page.store_id == store_id, Page.slug == slug)))


def get_page(db: Session, page_id: int) -> Page:
    page = db.get(Page, page_id)
    if not page:
        raise NotFoundError("Page not found.")
    return page


def resolve_slug(page_type: PageType, title: str, slug: Optional[str]) -> str:
    fixed = SYSTEM_PAGE_SLUGS.get(page_type)
    if fixed:
        if slug and slug != fixed:
            raise ValidationError(f"Page type '{page_type.value}' always uses slug '{fixed}'.")
        return fixed
    return validate_slug(slug if slug else slugify(title))


def create_page(db: Session, *, store_id: int, payload: PageCreate) -> Page:
    if not db.get(Store, store_id):
        raise NotFoundError("Store not found.")

    slug = resolve_slug(payload.page_type, payload.title, payload.slug)
    if get_page_by_slug(db, store_id=store_id, slug=slug):
        raise DuplicateSlugError(f"A page with slug '{slug}' already exists in this store.")

    page = Page(
        store_id=store_id,
        title=payload.title,
        slug=slug,
        page_type=payload.page_type,
        is_published=payload.is_published,
        published_at=_utcnow() if payload.is_published else None,
        show_header=payload.show_header,
        show_footer=payload.show_footer,
        seo_title=payload.seo_title,
        seo_description=payload.seo_description,
        og_image_url=payload.og_image_url,
    )
    try:
        with db.begin_nested():
            db.add(page)
            db.flush()
    except IntegrityError:
        # lost a race against another editor creating the same slug
        raise ConflictError(f"A page with slug '{slug}' already exists in this store.") from None
    logger.info("page created store_id=%s page_id=%s slug=%s", store_id, page.id, slug)
    return page


def update_page(db: Session, page_id: int, patch: PageUpdate) -> Page:
    page = get_page(db, page_id)
    data = patch.model_dump(exclude_unset=True)

    if "slug" in data and data["slug"] != page.slug:
        if page.is_system:
            raise ValidationError(f"The slug of a '{page.page_type.value}' page cannot be changed.")
        new_slug = validate_slug(data["slug"])
        if get_page_by_slug(db, store_id=page.store_id, slug=new_slug):
            raise DuplicateSlugError(f"A page with slug '{new_slug}' already exists in this store.")
        page.slug = new_slug

    if "is_published" in data and data["is_published"] is not None:
        if data["is_published"] and not page.is_published:
            page.published_at = _utcnow()
        elif not data["is_published"]:
            page.published_at = None
        page.is_published = data["is_published"]

    for attr in ("title", "show_header", "show_footer", "seo_title", "seo_description", "og_image_url"):
        if attr in data:
            if attr in ("title", "show_header", "show_footer") and data[attr] is None:
                continue
            setattr(page, attr, data[attr])

    try:
        db.flush()
    except IntegrityError:
        raise ConflictError("Page update conflicts with another page of this store.") from None
    return page


def delete_page(db: Session, page_id: int) -> None:
    page = get_page(db, page_id)
    if page.is_protected:
        raise ProtectedPageError(f"Page '{page.slug}' is a standard page and cannot be deleted.")
    db.delete(page)
    db.flush()
    logger.info("page deleted store_id=%s page_id=%s", page.store_id, page_id)


def _standard_rank(page: Page) -> tuple:
    try:
        return (0, PROTECTED_SLUGS.index(page.slug), "")
    except ValueError:
        return (1, 0, page.title.lower())


def list_pages(db: Session, *, store_id: int) -> Sequence[Page]:
    """Standard pages first (home, products, about, contact), then by title."""
    pages = db.scalars(select(Page).where(Page.store_id == store_id)).all()
    return sorted(pages, key=_standard_rank)
