# storebuilder/seeds/page_templates.py
from __future__ import annotations

import json
import logging
import pathlib
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from storebuilder.models.content import PageType
from storebuilder.models.template import PageTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TemplateSpec:
    business_type: str          # e.g. "ecommerce"
    page_type: PageType
    template_name: str          # e.g. "E-commerce Homepage"
    default_title: str
    default_slug: str
    default_sections: Tuple[Tuple[str, str], ...] = ()   # (section_type, name)
    description: Optional[str] = None
    sort_order: int = 0
    business_category: Optional[str] = None              # None = every category
    is_active: bool = True

    def sections_payload(self) -> list[dict]:
        return [{"type": t, "name": n} for t, n in self.default_sections]


DEFAULT_PAGE_TEMPLATES: Tuple[TemplateSpec, ...] = (
    TemplateSpec(
        "ecommerce", PageType.homepage, "E-commerce Homepage", "Home", "home",
        (
            ("hero_banner", "Hero Section"),
            ("featured_products", "Featured Products"),
            ("category_grid", "Shop by Category"),
            ("testimonials", "Customer Reviews"),
        ),
        description="Standard homepage for e-commerce stores", sort_order=1,
    ),
    TemplateSpec(
        "ecommerce", PageType.product, "Product Catalog", "Products", "products",
        description="Product listing and filtering page", sort_order=2,
    ),
    TemplateSpec(
        "ecommerce", PageType.category, "Category Browser", "Categories", "categories",
        description="Browse products by category", sort_order=3,
    ),
    TemplateSpec(
        "ecommerce", PageType.cart, "Shopping Cart", "Cart", "cart",
        description="Shopping cart and checkout flow", sort_order=4,
    ),
    TemplateSpec(
        "ecommerce", PageType.checkout, "Checkout", "Checkout", "checkout",
        description="Order completion and payment", sort_order=5,
    ),
    TemplateSpec(
        "ecommerce", PageType.profile, "Customer Profile", "My Account", "profile",
        description="Customer account and order history", sort_order=6,
    ),
    TemplateSpec(
        "ecommerce", PageType.about, "About Us", "About Us", "about",
        (
            ("text_block", "About Content"),
            ("image_text", "Our Story"),
            ("trust_badges", "Why Choose Us"),
        ),
        description="Standard about page", sort_order=7,
    ),
    TemplateSpec(
        "ecommerce", PageType.contact, "Contact Us", "Contact", "contact",
        (("text_block", "Contact Information"),),
        description="Standard contact page", sort_order=8,
    ),
)


def _read_json(path: pathlib.Path) -> list:
    if not path.exists():
        raise FileNotFoundError(f"Template file not found: {path.as_posix()}")
    txt = path.read_bytes().decode("utf-8-sig")  # tolerate a BOM
    data = json.loads(txt)
    if not isinstance(data, list):
        raise ValueError(f"{path.name} must contain a JSON list of templates.")
    return data


def load_templates_file(file_path: str) -> list[TemplateSpec]:
    """
    Reads templates from a JSON list shaped like the page_templates rows:
    {"business_type", "page_type", "template_name", "default_title",
     "default_slug", "default_sections": [{"type", "name"}], ...}
    """
    specs: list[TemplateSpec] = []
    for raw in _read_json(pathlib.Path(file_path)):
        sections = tuple((s["type"], s.get("name") or s["type"]) for s in raw.get("default_sections", []))
        specs.append(
            TemplateSpec(
                business_type=raw["business_type"],
                page_type=PageType(raw["page_type"]),
                template_name=raw["template_name"],
                default_title=raw["default_title"],
                default_slug=raw["default_slug"],
                default_sections=sections,
                description=raw.get("description"),
                sort_order=int(raw.get("sort_order", 0)),
                business_category=raw.get("business_category"),
                is_active=bool(raw.get("is_active", True)),
            )
        )
    return specs


def _find_template(db: Session, spec: TemplateSpec) -> Optional[PageTemplate]:
    category = (
        PageTemplate.business_category.is_(None)
        if spec.business_category is None
        else PageTemplate.business_category == spec.business_category
    )
    return db.scalar(
        select(PageTemplate).where(
            PageTemplate.business_type == spec.business_type,
            category,
            PageTemplate.page_type == spec.page_type,
            PageTemplate.template_name == spec.template_name,
        )
    )


def upsert_page_templates(db: Session, templates: Iterable[TemplateSpec] = DEFAULT_PAGE_TEMPLATES) -> Tuple[int, int]:
    """
    Inserts missing templates; on an existing key only default_sections is refreshed.
    No commit here: the caller owns the transaction.
    Returns (inserted, updated).
    """
    inserted = updated = 0
    for spec in templates:
        row = _find_template(db, spec)
        if row is None:
            db.add(
                PageTemplate(
                    business_type=spec.business_type,
                    business_category=spec.business_category,
                    page_type=spec.page_type,
                    template_name=spec.template_name,
                    description=spec.description,
                    default_sections=spec.sections_payload(),
                    default_title=spec.default_title,
                    default_slug=spec.default_slug,
                    is_active=spec.is_active,
                    sort_order=spec.sort_order,
                )
            )
            inserted += 1
        elif row.default_sections != spec.sections_payload():
            row.default_sections = spec.sections_payload()
            updated += 1
        db.flush()
    logger.info("page templates upserted inserted=%s updated=%s", inserted, updated)
    return inserted, updated
