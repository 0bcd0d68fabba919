# storebuilder/services/theme_service.py
from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import and_, select, update
from sqlalchemy.orm import Session

from storebuilder.core.errors import NotFoundError
from storebuilder.models.design import (
    DEFAULT_THEME_COLORS, DEFAULT_THEME_LAYOUT, DEFAULT_THEME_TYPOGRAPHY, Theme,
)
from storebuilder.models.store import Store
from storebuilder.schemas.design import ThemeCreate, ThemeUpdate
from storebuilder.utils.config_merge import merge_config

logger = logging.getLogger(__name__)


def get_theme(db: Session, theme_id: int) -> Theme:
    theme = db.get(Theme, theme_id)
    if not theme:
        raise NotFoundError("Theme not found.")
    return theme


def list_themes(db: Session, *, store_id: int) -> Sequence[Theme]:
    return db.scalars(select(Theme).where(Theme.store_id == store_id).order_by(Theme.id)).all()


def get_active_theme(db: Session, *, store_id: int) -> Optional[Theme]:
    return db.scalar(select(Theme).where(and_(Theme.store_id == store_id, Theme.is_active.is_(True))))


def create_theme(db: Session, *, store_id: int, payload: ThemeCreate) -> Theme:
    """
    Always inserted inactive; activation is a second step so the
    one-active-theme index is never violated.
    """
    if not db.get(Store, store_id):
        raise NotFoundError("Store not found.")
    theme = Theme(
        store_id=store_id,
        name=payload.name,
        colors=merge_config(DEFAULT_THEME_COLORS, payload.colors or {}),
        typography=merge_config(DEFAULT_THEME_TYPOGRAPHY, payload.typography or {}),
        layout=merge_config(DEFAULT_THEME_LAYOUT, payload.layout or {}),
        custom_css=payload.custom_css,
        is_active=False,
    )
    db.add(theme)
    db.flush()
    if payload.is_active:
        activate_theme(db, theme.id)
    return theme


def update_theme(db: Session, theme_id: int, patch: ThemeUpdate) -> Theme:
    theme = get_theme(db, theme_id)
    data = patch.model_dump(exclude_unset=True)
    if data.get("name"):
        theme.name = data["name"]
    for attr in ("colors", "typography", "layout"):
        if data.get(attr) is not None:
            setattr(theme, attr, merge_config(getattr(theme, attr), data[attr]))
    if "custom_css" in data:
        theme.custom_css = data["custom_css"]
    db.flush()
    return theme


def activate_theme(db: Session, theme_id: int) -> Theme:
    """Deactivates the store's current theme, then activates the target."""
    target = get_theme(db, theme_id)
    db.execute(
        update(Theme)
        .where(
            and_(
                Theme.store_id == target.store_id,
                Theme.id != target.id,
                Theme.is_active == True,  # noqa: E712
            )
        )
        .values(is_active=False)
    )
    db.flush()

    target.is_active = True
    db.flush()
    logger.info("theme activated store_id=%s theme_id=%s", target.store_id, target.id)
    return target
