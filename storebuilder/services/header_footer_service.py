# storebuilder/services/header_footer_service.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from storebuilder.core.errors import NotFoundError
from storebuilder.models.design import HeaderFooterSettings
from storebuilder.models.store import Store
from storebuilder.schemas.design import HeaderFooterUpdate
from storebuilder.utils.config_merge import merge_config


def get_or_create_settings(db: Session, *, store_id: int) -> HeaderFooterSettings:
    if not db.get(Store, store_id):
        raise NotFoundError("Store not found.")
    row = db.scalar(select(HeaderFooterSettings).where(HeaderFooterSettings.store_id == store_id))
    if row is None:
        # stores created before header/footer settings existed
        row = HeaderFooterSettings(store_id=store_id)
        db.add(row)
        db.flush()
    return row


def update_settings(db: Session, *, store_id: int, patch: HeaderFooterUpdate) -> HeaderFooterSettings:
    row = get_or_create_settings(db, store_id=store_id)
    for attr in ("header_config", "footer_config", "social_links"):
        value = getattr(patch, attr)
        if value is not None:
            setattr(row, attr, merge_config(getattr(row, attr), value))
    db.flush()
    return row
