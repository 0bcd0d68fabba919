# storebuilder/services/delivery_service.py
# Read model for the storefront renderer: only what a visitor may see
from __future__ import annotations

from typing import Dict, List

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from storebuilder.core.errors import NotFoundError, ValidationError
from storebuilder.models.content import Page, Section
from storebuilder.models.design import HeaderFooterSettings, NavLocation
from storebuilder.models.store import Store, StoreStatus
from storebuilder.schemas.delivery import (
    DeliveryPageOut, DeliverySectionOut, DeliveryStoreOut, DeliveryThemeOut,
)
from storebuilder.schemas.design import NavigationItemOut
from storebuilder.section_registry import resolve
from storebuilder.services.navigation_service import list_navigation
from storebuilder.services.page_service import list_pages
from storebuilder.services.theme_service import get_active_theme
from storebuilder.utils.config_merge import VIEWPORTS, effective_config


def _active_store(db: Session, store_slug: str) -> Store:
    store = db.scalar(select(Store).where(and_(Store.slug == store_slug, Store.status == StoreStatus.active)))
    if not store:
        raise NotFoundError("Store not found.")
    return store


def render_section(section: Section, viewport: str) -> DeliverySectionOut:
    # A stored config is served as-is; only a never-edited one falls back to the registry default
    base = section.config or resolve(section.section_type).default_config()
    return DeliverySectionOut(
        id=section.id,
        type=section.section_type,
        name=section.name,
        sort_order=section.sort_order,
        config=effective_config(base, section.mobile_config, viewport),
    )


def fetch_storefront(db: Session, store_slug: str) -> DeliveryStoreOut:
    store = _active_store(db, store_slug)
    theme = get_active_theme(db, store_id=store.id)
    chrome = db.scalar(select(HeaderFooterSettings).where(HeaderFooterSettings.store_id == store.id))

    navigation: Dict[str, List[NavigationItemOut]] = {loc.value: [] for loc in NavLocation}
    for item in list_navigation(db, store_id=store.id):
        navigation[item.location.value].append(NavigationItemOut.model_validate(item))

    return DeliveryStoreOut(
        slug=store.slug,
        name=store.name,
        business_type=store.business_type,
        business_category=store.business_category,
        theme=(
            DeliveryThemeOut(
                name=theme.name,
                colors=theme.colors or {},
                typography=theme.typography or {},
                layout=theme.layout or {},
                custom_css=theme.custom_css,
            )
            if theme
            else None
        ),
        header_config=(chrome.header_config if chrome else {}) or {},
        footer_config=(chrome.footer_config if chrome else {}) or {},
        social_links=(chrome.social_links if chrome else {}) or {},
        navigation=navigation,
        pages=[
            {"slug": p.slug, "title": p.title}
            for p in list_pages(db, store_id=store.id)
            if p.is_published
        ],
    )


def fetch_published_page(db: Session, store_slug: str, page_slug: str, viewport: str = "desktop") -> DeliveryPageOut:
    if viewport not in VIEWPORTS:
        raise ValidationError(f"viewport must be one of {VIEWPORTS}.")
    store = _active_store(db, store_slug)
    page = db.scalar(
        select(Page).where(
            and_(Page.store_id == store.id, Page.slug == page_slug, Page.is_published.is_(True))
        )
    )
    if not page:
        raise NotFoundError("Page not found or not published.")

    sections = db.scalars(
        select(Section)
        .where(and_(Section.page_id == page.id, Section.is_visible.is_(True)))
        .order_by(Section.sort_order, Section.created_at, Section.id)
    ).all()

    return DeliveryPageOut(
        store_slug=store.slug,
        id=page.id,
        title=page.title,
        slug=page.slug,
        page_type=page.page_type.value,
        viewport=viewport,
        show_header=page.show_header,
        show_footer=page.show_footer,
        seo_title=page.seo_title,
        seo_description=page.seo_description,
        og_image_url=page.og_image_url,
        published_at=page.published_at,
        updated_at=page.updated_at,
        sections=[render_section(s, viewport) for s in sections],
    )
