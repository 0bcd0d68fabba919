# storebuilder/api/delivery/router.py
# Public storefront reads for the renderer (no auth)
from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.orm import Session

from storebuilder.db.session import get_db
from storebuilder.schemas.delivery import DeliveryPageOut, DeliveryStoreOut
from storebuilder.services.delivery_service import fetch_published_page, fetch_storefront
from storebuilder.utils.http_cache import cached_json_response

router = APIRouter(prefix="/delivery/v1", tags=["Delivery"])


@router.get(
    "/stores/{store_slug}",
    response_model=DeliveryStoreOut,
    summary="Storefront chrome: theme, header/footer, navigation (public)",
)
def get_storefront(
    store_slug: str,
    db: Session = Depends(get_db),
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
):
    out = fetch_storefront(db, store_slug)
    return cached_json_response(out.model_dump(mode="json"), if_none_match=if_none_match)


@router.get(
    "/stores/{store_slug}/pages/{page_slug}",
    response_model=DeliveryPageOut,
    summary="Published page with its visible sections in render order (public)",
)
def get_published_page(
    store_slug: str,
    page_slug: str,
    viewport: str = Query("desktop", description="desktop | tablet | mobile"),
    db: Session = Depends(get_db),
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
):
    """
    Each section's config is already resolved for the viewport:
    registry defaults, then the stored config, then mobile overrides at mobile.
    """
    out = fetch_published_page(db, store_slug, page_slug, viewport)
    return cached_json_response(out.model_dump(mode="json"), if_none_match=if_none_match)
