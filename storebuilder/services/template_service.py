# storebuilder/services/template_service.py
# Seeds a store's standard pages from the template catalog
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storebuilder.core.errors import NotFoundError, StoreBuilderError, ValidationError
from storebuilder.core.settings import settings
from storebuilder.models.content import Page, Section
from storebuilder.models.store import Store
from storebuilder.models.template import PageTemplate
from storebuilder.section_registry import lookup
from storebuilder.services.page_service import resolve_slug, get_page_by_slug

logger = logging.getLogger(__name__)


def resolve_templates(
    db: Session, *, business_type: str, business_category: Optional[str] = None
) -> Sequence[PageTemplate]:
    """Active templates of the business type; category-less templates apply to every category."""
    stmt = (
        select(PageTemplate)
        .where(
            PageTemplate.business_type == business_type,
            PageTemplate.is_active.is_(True),
            or_(PageTemplate.business_category.is_(None), PageTemplate.business_category == business_category),
        )
        .order_by(PageTemplate.sort_order, PageTemplate.id)
    )
    return db.scalars(stmt).all()


def _planned_sections(template: PageTemplate) -> List[Dict[str, Any]]:
    """
    Validates every default section entry up front so a bad template never
    leaves a half-built page. Raises StoreBuilderError on a malformed entry.
    """
    raw = template.default_sections
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError("default_sections must be a list.")
    planned = []
    for entry in raw:
        if not isinstance(entry, dict) or not isinstance(entry.get("type"), str):
            raise ValidationError(f"Malformed default section entry: {entry!r}.")
        definition = lookup(entry["type"])
        planned.append({"type": definition.type, "name": entry.get("name") or definition.label})
    return planned


def initialize_store_pages(
    db: Session,
    *,
    store_id: int,
    business_type: Optional[str] = None,
    business_category: Optional[str] = None,
) -> int:
    """
    Creates the standard pages (and their default sections) the store is
    missing. Existing slugs are left untouched, so running it again is a no-op.
    Each page goes in its own savepoint; a bad template row is logged and skipped.
    No commit here: the caller owns the transaction.
    Returns the number of pages created.
    """
    if not db.get(Store, store_id):
        raise NotFoundError("Store not found.")
    business_type = business_type or settings.DEFAULT_BUSINESS_TYPE
    business_category = business_category or settings.DEFAULT_BUSINESS_CATEGORY

    created = 0
    for template in resolve_templates(db, business_type=business_type, business_category=business_category):
        try:
            title = template.default_title or template.template_name
            slug = resolve_slug(template.page_type, title, template.default_slug)
            sections = _planned_sections(template)
        except StoreBuilderError as exc:
            logger.warning(
                "skipping template id=%s (%s) for store_id=%s: %s",
                template.id, template.template_name, store_id, exc.message,
            )
            continue

        if get_page_by_slug(db, store_id=store_id, slug=slug):
            continue

        try:
            with db.begin_nested():
                page = Page(
                    store_id=store_id,
                    title=title,
                    slug=slug,
                    page_type=template.page_type,
                    is_published=True,
                    published_at=datetime.now(timezone.utc),
                    show_header=True,
                    show_footer=True,
                )
                db.add(page)
                db.flush()
                for position, planned in enumerate(sections):
                    db.add(
                        Section(
                            page_id=page.id,
                            store_id=store_id,
                            section_type=planned["type"],
                            name=planned["name"],
                            config={},
                            is_visible=True,
                            sort_order=position,
                        )
                    )
                db.flush()
        except IntegrityError:
            # someone else created the slug in the meantime
            logger.info("page '%s' already exists for store_id=%s, skipped", slug, store_id)
            continue

        created += 1
        logger.debug("seeded page '%s' with %s sections for store_id=%s", slug, len(sections), store_id)

    logger.info(
        "initialized store_id=%s business=%s/%s pages_created=%s",
        store_id, business_type, business_category, created,
    )
    return created


def initialize_all_stores(db: Session) -> Dict[int, int]:
    """Backfill: seeds every existing store with the pages it is missing."""
    results: Dict[int, int] = {}
    for store in db.scalars(select(Store).order_by(Store.id)).all():
        results[store.id] = initialize_store_pages(
            db,
            store_id=store.id,
            business_type=store.business_type,
            business_category=store.business_category,
        )
    logger.info("backfill done stores=%s pages_created=%s", len(results), sum(results.values()))
    return results
