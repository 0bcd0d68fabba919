# storebuilder/models/content.py
# Pages and the sections that compose them
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import (
    Boolean, DateTime, Enum as SQLEnum, ForeignKey, Index, Integer, String, Text, UniqueConstraint, func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storebuilder.db.base import Base, JSONType
from storebuilder.models.store import Store


class PageType(str, Enum):
    homepage = "homepage"
    about = "about"
    contact = "contact"
    policy = "policy"
    custom = "custom"
    product = "product"
    category = "category"
    cart = "cart"
    checkout = "checkout"
    profile = "profile"
    order_tracking = "order_tracking"
    search = "search"


# System pages are auto-created and keep a fixed slug
SYSTEM_PAGE_SLUGS: dict[PageType, str] = {
    PageType.homepage: "home",
    PageType.cart: "cart",
    PageType.checkout: "checkout",
    PageType.profile: "profile",
    PageType.order_tracking: "order-tracking",
    PageType.search: "search",
}

# Standard pages the editor refuses to delete (besides system pages)
PROTECTED_SLUGS: tuple[str, ...] = ("home", "products", "about", "contact")


class Page(Base):
    __tablename__ = "store_pages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id", ondelete="CASCADE"), index=True)

    title: Mapped[str] = mapped_column(String(200))
    slug: Mapped[str] = mapped_column(String(128))
    page_type: Mapped[PageType] = mapped_column(
        SQLEnum(PageType, name="page_type", native_enum=False, length=32), default=PageType.custom
    )

    seo_title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    seo_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    og_image_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    show_header: Mapped[bool] = mapped_column(Boolean, default=True)
    show_footer: Mapped[bool] = mapped_column(Boolean, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    store: Mapped[Store] = relationship("Store", back_populates="pages")
    sections: Mapped[list["Section"]] = relationship(
        "Section",
        back_populates="page",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="[Section.sort_order, Section.created_at, Section.id]",
    )

    __table_args__ = (
        UniqueConstraint("store_id", "slug", name="uq_store_page_slug"),
        Index("ix_store_pages_store_published", "store_id", "is_published"),
    )

    @property
    def is_system(self) -> bool:
        return self.page_type in SYSTEM_PAGE_SLUGS

    @property
    def is_protected(self) -> bool:
        return self.is_system or self.slug in PROTECTED_SLUGS


class Section(Base):
    __tablename__ = "page_sections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    page_id: Mapped[int] = mapped_column(ForeignKey("store_pages.id", ondelete="CASCADE"), index=True)
    # Denormalized owner, so access checks don't need the page join
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id", ondelete="CASCADE"), index=True)

    # Open enumeration: validated against the section registry, stored as text
    section_type: Mapped[str] = mapped_column(String(64))
    name: Mapped[str] = mapped_column(String(200))

    config: Mapped[dict] = mapped_column(JSONType, default=dict)
    mobile_config: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)

    is_visible: Mapped[bool] = mapped_column(Boolean, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    page: Mapped[Page] = relationship("Page", back_populates="sections")

    __table_args__ = (
        Index("ix_page_sections_page_order", "page_id", "sort_order"),
    )
