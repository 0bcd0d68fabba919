# tests/test_page_service.py
from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from storebuilder.core.errors import DuplicateSlugError, NotFoundError, ProtectedPageError, ValidationError
from storebuilder.models.content import PageType
from storebuilder.models.store import Store
from storebuilder.schemas.page import PageCreate, PageUpdate
from storebuilder.services.page_service import (
    create_page, delete_page, get_page, get_page_by_slug, list_pages, slugify, update_page,
)


@pytest.mark.parametrize(
    "title, slug",
    [
        ("Summer Sale", "summer-sale"),
        ("  Hello   World  ", "hello-world"),
        ("Ofertas ¡Ya!", "ofertas-ya"),
        ("a -- b", "a-b"),
    ],
)
def test_slugify(title, slug):
    assert slugify(title) == slug


def test_create_derives_slug_from_title(db: Session, bare_store: Store):
    page = create_page(db, store_id=bare_store.id, payload=PageCreate(title="Summer Sale"))
    assert page.slug == "summer-sale"
    assert page.page_type == PageType.custom
    assert page.is_published is False
    assert page.published_at is None


def test_duplicate_slug_rejected_without_side_effect(db: Session, bare_store: Store):
    create_page(db, store_id=bare_store.id, payload=PageCreate(title="Lookbook"))
    db.commit()
    before = [p.id for p in list_pages(db, store_id=bare_store.id)]

    with pytest.raises(DuplicateSlugError):
        create_page(db, store_id=bare_store.id, payload=PageCreate(title="Another", slug="lookbook"))

    assert [p.id for p in list_pages(db, store_id=bare_store.id)] == before


def test_same_slug_allowed_in_another_store(db: Session, bare_store: Store, store: Store):
    assert get_page_by_slug(db, store_id=store.id, slug="about") is not None
    page = create_page(db, store_id=bare_store.id, payload=PageCreate(title="About"))
    assert page.slug == "about"


def test_invalid_slug_rejected(db: Session, bare_store: Store):
    with pytest.raises(ValidationError):
        create_page(db, store_id=bare_store.id, payload=PageCreate(title="X", slug="Not A Slug"))
    with pytest.raises(ValidationError):
        create_page(db, store_id=bare_store.id, payload=PageCreate(title="!!!"))


def test_system_page_uses_fixed_slug(db: Session, bare_store: Store):
    page = create_page(db, store_id=bare_store.id, payload=PageCreate(title="Tracking", page_type=PageType.order_tracking))
    assert page.slug == "order-tracking"
    with pytest.raises(ValidationError):
        create_page(db, store_id=bare_store.id, payload=PageCreate(title="Bag", slug="bag", page_type=PageType.cart))


def test_create_in_missing_store(db: Session):
    with pytest.raises(NotFoundError):
        create_page(db, store_id=4242, payload=PageCreate(title="Ghost"))


def test_publish_stamps_and_unpublish_clears(db: Session, bare_store: Store):
    page = create_page(db, store_id=bare_store.id, payload=PageCreate(title="Lookbook"))
    page = update_page(db, page.id, PageUpdate(is_published=True))
    assert page.is_published and page.published_at is not None

    page = update_page(db, page.id, PageUpdate(is_published=False))
    assert page.is_published is False and page.published_at is None


def test_update_slug_rules(db: Session, store: Store):
    home = get_page_by_slug(db, store_id=store.id, slug="home")
    with pytest.raises(ValidationError):
        update_page(db, home.id, PageUpdate(slug="start"))

    page = create_page(db, store_id=store.id, payload=PageCreate(title="Lookbook"))
    with pytest.raises(DuplicateSlugError):
        update_page(db, page.id, PageUpdate(slug="about"))
    assert get_page(db, page.id).slug == "lookbook"

    page = update_page(db, page.id, PageUpdate(slug="lookbook-2024", title="Lookbook 2024"))
    assert page.slug == "lookbook-2024"
    assert page.title == "Lookbook 2024"


def test_protected_pages_cannot_be_deleted(db: Session, store: Store):
    for slug in ("home", "products", "about", "contact", "cart", "checkout"):
        page = get_page_by_slug(db, store_id=store.id, slug=slug)
        with pytest.raises(ProtectedPageError):
            delete_page(db, page.id)

    custom = create_page(db, store_id=store.id, payload=PageCreate(title="Lookbook"))
    db.commit()
    delete_page(db, custom.id)
    db.commit()
    assert get_page_by_slug(db, store_id=store.id, slug="lookbook") is None


def test_list_pages_puts_standard_pages_first(db: Session, store: Store):
    create_page(db, store_id=store.id, payload=PageCreate(title="Blog"))
    slugs = [p.slug for p in list_pages(db, store_id=store.id)]
    assert slugs[:4] == ["home", "products", "about", "contact"]
    # then by title: Blog, Cart, Categories, Checkout, My Account
    assert slugs[4:] == ["blog", "cart", "categories", "checkout", "profile"]
