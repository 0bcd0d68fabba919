# storebuilder/models/store.py
# Tenant root (Store) and the membership rows used for editor access checks
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storebuilder.db.base import Base

if TYPE_CHECKING:
    from storebuilder.models.content import Page
    from storebuilder.models.design import HeaderFooterSettings, NavigationItem, Theme


class StoreStatus(str, Enum):
    active = "active"
    inactive = "inactive"
    suspended = "suspended"


class MemberRole(str, Enum):
    owner = "owner"
    editor = "editor"


class Store(Base):
    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[str] = mapped_column(String(80), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(160))
    status: Mapped[StoreStatus] = mapped_column(
        SQLEnum(StoreStatus, native_enum=False, length=20), default=StoreStatus.active
    )

    # Business classification, used to pick page templates
    business_type: Mapped[str] = mapped_column(String(64), default="ecommerce")
    business_category: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, default="general")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    members: Mapped[list["StoreMember"]] = relationship(
        "StoreMember", back_populates="store", cascade="all, delete-orphan", passive_deletes=True
    )
    pages: Mapped[list["Page"]] = relationship(
        "Page", back_populates="store", cascade="all, delete-orphan", passive_deletes=True
    )
    themes: Mapped[list["Theme"]] = relationship(
        "Theme", back_populates="store", cascade="all, delete-orphan", passive_deletes=True
    )
    navigation: Mapped[list["NavigationItem"]] = relationship(
        "NavigationItem", back_populates="store", cascade="all, delete-orphan", passive_deletes=True
    )
    header_footer: Mapped[Optional["HeaderFooterSettings"]] = relationship(
        "HeaderFooterSettings", back_populates="store", cascade="all, delete-orphan",
        passive_deletes=True, uselist=False,
    )

    @property
    def is_active(self) -> bool:
        return self.status == StoreStatus.active


class StoreMember(Base):
    __tablename__ = "store_members"
    __table_args__ = (
        UniqueConstraint("store_id", "user_id", name="uq_store_member"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    store_id: Mapped[int] = mapped_column(ForeignKey("stores.id", ondelete="CASCADE"), index=True)
    # Identity lives in the external auth provider; this is the JWT subject
    user_id: Mapped[int] = mapped_column(Integer, index=True)
    role: Mapped[MemberRole] = mapped_column(
        SQLEnum(MemberRole, native_enum=False, length=20), default=MemberRole.editor
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    store: Mapped[Store] = relationship("Store", back_populates="members")
