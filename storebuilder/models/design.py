# storebuilder/models/design.py
# Store-wide look & chrome: themes, navigation menus, header/footer settings
from __future__ import annotations

import copy
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import (
    Boolean, DateTime, Enum as SQLEnum, ForeignKey, Index, Integer, String, Text, func, text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storebuilder.db.base import Base, JSONType
from storebuilder.models.store import Store

DEFAULT_THEME_COLORS = {
    "primary": "222 47% 31%",
    "secondary": "210 40% 96%",
    "accent": "217 91% 60%",
    "background": "0 0% 100%",
    "foreground": "222 47% 11%",
    "muted": "210 40% 96%",
    "mutedForeground": "215 16% 47%",
    "border": "214 32% 91%",
    "success": "142 76% 36%",
    "warning": "38 92% 50%",
    "error": "0 84% 60%",
}

DEFAULT_THEME_TYPOGRAPHY = {
    "headingFont": "Plus Jakarta Sans",
    "bodyFont": "Plus Jakarta Sans",
    "baseFontSize": "16px",
    "headingWeight": "700",
    "bodyWeight": "400",
}

DEFAULT_THEME_LAYOUT = {
    "containerMaxWidth": "1280px",
    "sectionPadding": "4rem",
    "borderRadius": "0.5rem",
    "buttonRadius": "0.375rem",
}

DEFAULT_HEADER_CONFIG = {
    "layout": "logo-center",
    "sticky": True,
    "showSearch": True,
    "showCart": True,
    "showAccount": False,
    "announcementBar": None,
    "backgroundColor": None,
    "textColor": None,
}

DEFAULT_FOOTER_CONFIG = {
    "layout": "multi-column",
    "showNewsletter": True,
    "showSocialLinks": True,
    "showPaymentIcons": True,
    "copyrightText": None,
    "backgroundColor": None,
    "textColor": None,
    "columns": [],
}

DEFAULT_SOCIAL_LINKS = {
    "facebook": None,
    "instagram": None,
    "twitter": None,
    "tiktok": None,
    "youtube": None,
    "pinterest": None,
}


def _copy_of(value: dict):
    return lambda: copy.deepcopy(value)


class Theme(Base):
    __tablename__ = "store_themes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(128), default="Default Theme")
    is_active: Mapped[bool] = mapped_column(Boolean, default=False)

    colors: Mapped[dict] = mapped_column(JSONType, default=_copy_of(DEFAULT_THEME_COLORS))
    typography: Mapped[dict] = mapped_column(JSONType, default=_copy_of(DEFAULT_THEME_TYPOGRAPHY))
    layout: Mapped[dict] = mapped_column(JSONType, default=_copy_of(DEFAULT_THEME_LAYOUT))
    custom_css: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    store: Mapped[Store] = relationship("Store", back_populates="themes")

    __table_args__ = (
        # At most one active theme per store
        Index(
            "uq_store_themes_one_active",
            "store_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
    )


class NavLocation(str, Enum):
    header = "header"
    footer = "footer"
    mobile = "mobile"


class NavigationItem(Base):
    __tablename__ = "store_navigation"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id", ondelete="CASCADE"), index=True)

    label: Mapped[str] = mapped_column(String(160))
    url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    page_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("store_pages.id", ondelete="SET NULL"), nullable=True
    )

    location: Mapped[NavLocation] = mapped_column(
        SQLEnum(NavLocation, name="nav_location", native_enum=False, length=16), default=NavLocation.header
    )
    parent_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("store_navigation.id", ondelete="CASCADE"), nullable=True, index=True
    )
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    is_highlighted: Mapped[bool] = mapped_column(Boolean, default=False)
    open_in_new_tab: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    store: Mapped[Store] = relationship("Store", back_populates="navigation")
    children: Mapped[list["NavigationItem"]] = relationship(
        "NavigationItem",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[NavigationItem.sort_order, NavigationItem.id]",
    )

    __table_args__ = (
        Index("ix_store_navigation_store_location", "store_id", "location"),
    )


class HeaderFooterSettings(Base):
    __tablename__ = "store_header_footer"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id", ondelete="CASCADE"), unique=True)

    header_config: Mapped[dict] = mapped_column(JSONType, default=_copy_of(DEFAULT_HEADER_CONFIG))
    footer_config: Mapped[dict] = mapped_column(JSONType, default=_copy_of(DEFAULT_FOOTER_CONFIG))
    social_links: Mapped[dict] = mapped_column(JSONType, default=_copy_of(DEFAULT_SOCIAL_LINKS))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    store: Mapped[Store] = relationship("Store", back_populates="header_footer")
