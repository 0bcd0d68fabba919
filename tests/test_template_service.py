# tests/test_template_service.py
from __future__ import annotations

import json

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from storebuilder.models.content import Page, PageType, Section
from storebuilder.models.store import Store
from storebuilder.models.template import PageTemplate
from storebuilder.schemas.page import PageCreate
from storebuilder.seeds.page_templates import (
    DEFAULT_PAGE_TEMPLATES, TemplateSpec, load_templates_file, upsert_page_templates,
)
from storebuilder.services.page_service import create_page, get_page_by_slug
from storebuilder.services.section_service import list_sections
from storebuilder.services.template_service import (
    initialize_all_stores, initialize_store_pages, resolve_templates,
)

STANDARD_SLUGS = {"home", "products", "categories", "cart", "checkout", "profile", "about", "contact"}


def _slugs(db: Session, store_id: int) -> set[str]:
    return set(db.scalars(select(Page.slug).where(Page.store_id == store_id)))


def _page_count(db: Session, store_id: int) -> int:
    return db.scalar(select(func.count(Page.id)).where(Page.store_id == store_id))


def test_new_store_gets_eight_standard_pages(db: Session, store: Store):
    assert _slugs(db, store.id) == STANDARD_SLUGS

    home = get_page_by_slug(db, store_id=store.id, slug="home")
    assert home.page_type == PageType.homepage
    assert home.is_published and home.show_header and home.show_footer

    sections = list_sections(db, home.id)
    assert [(s.section_type, s.name, s.sort_order) for s in sections] == [
        ("hero_banner", "Hero Section", 0),
        ("featured_products", "Featured Products", 1),
        ("category_grid", "Shop by Category", 2),
        ("testimonials", "Customer Reviews", 3),
    ]
    assert all(s.config == {} for s in sections)

    about = get_page_by_slug(db, store_id=store.id, slug="about")
    assert [s.section_type for s in list_sections(db, about.id)] == ["text_block", "image_text", "trust_badges"]
    cart = get_page_by_slug(db, store_id=store.id, slug="cart")
    assert list_sections(db, cart.id) == []


def test_initialize_is_idempotent(db: Session, store: Store):
    sections_before = db.scalar(select(func.count(Section.id)).where(Section.store_id == store.id))

    assert initialize_store_pages(db, store_id=store.id) == 0
    db.commit()

    assert _page_count(db, store.id) == 8
    assert db.scalar(select(func.count(Section.id)).where(Section.store_id == store.id)) == sections_before


def test_existing_slug_is_left_untouched(db: Session, bare_store: Store, templates):
    mine = create_page(db, store_id=bare_store.id, payload=PageCreate(title="About", slug="about"))
    db.commit()

    created = initialize_store_pages(db, store_id=bare_store.id)
    db.commit()

    assert created == 7
    assert list_sections(db, mine.id) == []
    assert _slugs(db, bare_store.id) == STANDARD_SLUGS


def test_malformed_template_is_skipped(db: Session, bare_store: Store, templates):
    db.add_all(
        [
            PageTemplate(
                business_type="ecommerce", page_type=PageType.custom, template_name="Broken sections",
                default_title="Lookbook", default_slug="lookbook",
                default_sections=[{"type": "marquee", "name": "Nope"}], sort_order=20,
            ),
            PageTemplate(
                business_type="ecommerce", page_type=PageType.custom, template_name="Bad entry",
                default_title="Stories", default_slug="stories", default_sections=["hero_banner"], sort_order=21,
            ),
            PageTemplate(
                business_type="ecommerce", page_type=PageType.policy, template_name="Shipping",
                default_title="Shipping Policy", default_slug="shipping",
                default_sections=[{"type": "text_block"}], sort_order=22,
            ),
        ]
    )
    db.commit()

    created = initialize_store_pages(db, store_id=bare_store.id)
    db.commit()

    assert created == 9
    slugs = _slugs(db, bare_store.id)
    assert "lookbook" not in slugs and "stories" not in slugs
    shipping = get_page_by_slug(db, store_id=bare_store.id, slug="shipping")
    # a section entry without a name falls back to the registry label
    assert [s.name for s in list_sections(db, shipping.id)] == ["Text Block"]


def test_resolve_templates_by_category(db: Session, templates):
    db.add(
        PageTemplate(
            business_type="ecommerce", business_category="fashion", page_type=PageType.custom,
            template_name="Lookbook", default_title="Lookbook", default_slug="lookbook", default_sections=[],
            sort_order=9,
        )
    )
    db.add(
        PageTemplate(
            business_type="ecommerce", page_type=PageType.policy, template_name="Retired",
            default_title="Old", default_slug="old", default_sections=[], is_active=False,
        )
    )
    db.commit()

    general = resolve_templates(db, business_type="ecommerce", business_category="general")
    fashion = resolve_templates(db, business_type="ecommerce", business_category="fashion")

    assert [t.default_slug for t in general] == [
        "home", "products", "categories", "cart", "checkout", "profile", "about", "contact",
    ]
    assert [t.default_slug for t in fashion][-1] == "lookbook"
    assert resolve_templates(db, business_type="restaurant") == []


def test_backfill_existing_stores(db: Session, templates):
    old = Store(slug="old-shop", name="Old Shop", business_category=None)
    db.add(old)
    db.commit()

    results = initialize_all_stores(db)
    db.commit()
    assert results[old.id] == 8
    assert initialize_all_stores(db)[old.id] == 0


def test_upsert_refreshes_default_sections(db: Session, templates):
    assert upsert_page_templates(db) == (0, 0)

    changed = [
        TemplateSpec(
            spec.business_type, spec.page_type, spec.template_name, spec.default_title, spec.default_slug,
            (("text_block", "Welcome"),) if spec.page_type == PageType.homepage else spec.default_sections,
            description=spec.description, sort_order=spec.sort_order,
        )
        for spec in DEFAULT_PAGE_TEMPLATES
    ]
    assert upsert_page_templates(db, changed) == (0, 1)
    db.commit()

    home = db.scalar(select(PageTemplate).where(PageTemplate.page_type == PageType.homepage))
    assert home.default_sections == [{"type": "text_block", "name": "Welcome"}]
    assert db.scalar(select(func.count(PageTemplate.id))) == 8


def test_load_templates_file(tmp_path):
    path = tmp_path / "templates.json"
    path.write_text(
        json.dumps(
            [
                {
                    "business_type": "restaurant",
                    "page_type": "homepage",
                    "template_name": "Restaurant Home",
                    "default_title": "Home",
                    "default_slug": "home",
                    "default_sections": [{"type": "hero_banner", "name": "Hero"}, {"type": "faq"}],
                }
            ]
        ),
        encoding="utf-8",
    )
    (spec,) = load_templates_file(str(path))
    assert spec.business_type == "restaurant"
    assert spec.page_type == PageType.homepage
    assert spec.default_sections == (("hero_banner", "Hero"), ("faq", "faq"))


def test_backfill_uses_configured_default_category(db: Session, templates, monkeypatch):
    from storebuilder.core.settings import settings

    db.add(
        PageTemplate(
            business_type="ecommerce", business_category="fashion", page_type=PageType.custom,
            template_name="Lookbook", default_title="Lookbook", default_slug="lookbook",
            default_sections=[{"type": "gallery"}], sort_order=30,
        )
    )
    old = Store(slug="old-shop", name="Old Shop", business_category=None)
    db.add(old)
    db.commit()

    monkeypatch.setattr(settings, "DEFAULT_BUSINESS_CATEGORY", "fashion")
    results = initialize_all_stores(db)
    db.commit()
    assert results[old.id] == 9
    assert "lookbook" in _slugs(db, old.id)
