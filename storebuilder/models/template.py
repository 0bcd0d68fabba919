# storebuilder/models/template.py
# Page template catalog (not tenant-owned), keyed by business classification
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Enum as SQLEnum, Index, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from storebuilder.db.base import Base, JSONType
from storebuilder.models.content import PageType


class PageTemplate(Base):
    __tablename__ = "page_templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    business_type: Mapped[str] = mapped_column(String(64))
    # NULL means "any category of this business type"
    business_category: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    page_type: Mapped[PageType] = mapped_column(SQLEnum(PageType, name="page_type", native_enum=False, length=32))
    template_name: Mapped[str] = mapped_column(String(160))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # [{"type": "hero_banner", "name": "Hero Section"}, ...]
    default_sections: Mapped[list] = mapped_column(JSONType, default=list)
    default_title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    default_slug: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    preview_image_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint(
            "business_type", "business_category", "page_type", "template_name",
            name="uq_page_template_per_business",
        ),
        Index("ix_page_templates_business", "business_type", "business_category", "is_active"),
    )
