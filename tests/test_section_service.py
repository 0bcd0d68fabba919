# tests/test_section_service.py
from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from storebuilder.core.errors import NotFoundError, PayloadTooLargeError, ValidationError
from storebuilder.models.content import Page
from storebuilder.schemas.page import PageCreate
from storebuilder.section_registry import lookup
from storebuilder.services import section_service as svc
from storebuilder.services.page_service import create_page


def _order(db: Session, page_id: int) -> list[int]:
    return [s.id for s in svc.list_sections(db, page_id)]


def _sort_orders(db: Session, page_id: int) -> list[int]:
    return [s.sort_order for s in svc.list_sections(db, page_id)]


@pytest.fixture()
def three(db: Session, blank_page: Page) -> list[int]:
    ids = [
        svc.add_section(db, page_id=blank_page.id, section_type=t).id
        for t in ("hero_banner", "text_block", "newsletter")
    ]
    db.commit()
    return ids


def test_add_to_empty_page_uses_registry_default(db: Session, blank_page: Page):
    s = svc.add_section(db, page_id=blank_page.id, section_type="hero_banner")
    db.commit()

    sections = svc.list_sections(db, blank_page.id)
    assert len(sections) == 1
    assert s.sort_order == 0
    assert s.config == lookup("hero_banner").default_config()
    assert s.name == "Hero Banner"
    assert s.is_visible is True
    assert s.mobile_config is None


def test_add_appends_after_max(db: Session, blank_page: Page, three):
    s = svc.add_section(db, page_id=blank_page.id, section_type="spacer", name="Gap")
    assert s.sort_order == 3
    assert s.name == "Gap"
    assert _order(db, blank_page.id) == three + [s.id]


def test_add_unknown_type_has_no_side_effect(db: Session, blank_page: Page):
    with pytest.raises(ValidationError):
        svc.add_section(db, page_id=blank_page.id, section_type="marquee")
    assert svc.list_sections(db, blank_page.id) == []


def test_add_to_missing_page(db: Session):
    with pytest.raises(NotFoundError):
        svc.add_section(db, page_id=12345, section_type="hero_banner")


def test_reorder_assigns_positions(db: Session, blank_page: Page, three):
    a, b, c = three
    result = svc.reorder_sections(db, page_id=blank_page.id, ordered_ids=[c, a, b])
    db.commit()

    assert [s.id for s in result] == [c, a, b]
    assert [s.sort_order for s in result] == [0, 1, 2]
    assert _order(db, blank_page.id) == [c, a, b]


@pytest.mark.parametrize(
    "build, exc",
    [
        (lambda a, b, c: [a, b], ValidationError),            # missing one
        (lambda a, b, c: [a, b, c, c], ValidationError),      # duplicate
        (lambda a, b, c: [a, b, c, 98765], NotFoundError),    # id from nowhere
    ],
)
def test_reorder_rejects_mismatched_ids(db: Session, blank_page: Page, three, build, exc):
    with pytest.raises(exc):
        svc.reorder_sections(db, page_id=blank_page.id, ordered_ids=build(*three))
    assert _order(db, blank_page.id) == three
    assert _sort_orders(db, blank_page.id) == [0, 1, 2]


def test_reorder_rejects_section_of_another_page(db: Session, blank_page: Page, three):
    other = create_page(db, store_id=blank_page.store_id, payload=PageCreate(title="Other"))
    foreign = svc.add_section(db, page_id=other.id, section_type="faq")
    db.commit()
    with pytest.raises(NotFoundError):
        svc.reorder_sections(db, page_id=blank_page.id, ordered_ids=three + [foreign.id])


def test_move_boundaries_are_noops(db: Session, blank_page: Page, three):
    a, b, c = three
    svc.move_section(db, a, "up")
    svc.move_section(db, c, "down")
    assert _order(db, blank_page.id) == [a, b, c]
    assert _sort_orders(db, blank_page.id) == [0, 1, 2]


def test_move_swaps_with_neighbor(db: Session, blank_page: Page, three):
    a, b, c = three
    svc.move_section(db, c, "up")
    assert _order(db, blank_page.id) == [a, c, b]
    svc.move_section(db, a, "down")
    assert _order(db, blank_page.id) == [c, a, b]
    assert _sort_orders(db, blank_page.id) == [0, 1, 2]


def test_equal_sort_order_falls_back_to_creation(db: Session, blank_page: Page, three):
    a, b, c = three
    svc.get_section(db, b).sort_order = svc.get_section(db, a).sort_order
    db.commit()
    assert _order(db, blank_page.id) == [a, b, c]
    assert _sort_orders(db, blank_page.id) == [0, 0, 2]

    svc.move_section(db, b, "up")
    assert _order(db, blank_page.id) == [b, a, c]
    assert _sort_orders(db, blank_page.id) == [0, 1, 2]


def test_move_rejects_unknown_direction(db: Session, three):
    with pytest.raises(ValidationError):
        svc.move_section(db, three[0], "left")


def test_duplicate_inserts_copy_after_source(db: Session, blank_page: Page, three):
    a, b, c = three
    svc.update_section_config(db, b, {"content": "<p>Original</p>"})
    svc.update_mobile_config(db, b, {"alignment": "center"})
    source = svc.get_section(db, b)
    before_config = dict(source.config)

    clone = svc.duplicate_section(db, b)
    db.commit()

    assert clone.id != b
    assert clone.name == "Text Block (Copy)"
    assert clone.section_type == "text_block"
    assert clone.config == before_config
    assert clone.mobile_config == {"alignment": "center"}
    assert clone.config is not source.config
    assert _order(db, blank_page.id) == [a, b, clone.id, c]
    assert _sort_orders(db, blank_page.id) == [0, 1, 2, 3]

    # editing the copy leaves the source alone
    svc.update_section_config(db, clone.id, {"content": "<p>Changed</p>"})
    db.commit()
    assert svc.get_section(db, b).config == before_config


def test_duplicate_last_section(db: Session, blank_page: Page, three):
    a, b, c = three
    clone = svc.duplicate_section(db, c)
    assert _order(db, blank_page.id) == [a, b, c, clone.id]


def test_remove_does_not_renumber(db: Session, blank_page: Page, three):
    a, b, c = three
    svc.remove_section(db, b)
    db.commit()
    assert _order(db, blank_page.id) == [a, c]
    assert _sort_orders(db, blank_page.id) == [0, 2]
    with pytest.raises(NotFoundError):
        svc.remove_section(db, b)


def test_order_stays_total_after_mixed_operations(db: Session, blank_page: Page, three):
    a, b, c = three
    svc.remove_section(db, b)
    d = svc.add_section(db, page_id=blank_page.id, section_type="faq").id
    svc.duplicate_section(db, a)
    svc.move_section(db, d, "up")
    db.commit()

    orders = _sort_orders(db, blank_page.id)
    assert len(set(orders)) == len(orders)
    assert orders == sorted(orders)


def test_toggle_visibility_only_flips_flag(db: Session, blank_page: Page, three):
    a, b, c = three
    before = [(s.id, s.sort_order, dict(s.config)) for s in svc.list_sections(db, blank_page.id)]

    s = svc.toggle_visibility(db, b)
    assert s.is_visible is False
    after = [(s.id, s.sort_order, dict(s.config)) for s in svc.list_sections(db, blank_page.id)]
    assert after == before

    assert svc.toggle_visibility(db, b).is_visible is True


def test_rename(db: Session, three):
    assert svc.rename_section(db, three[0], "  Big banner ").name == "Big banner"
    with pytest.raises(ValidationError):
        svc.rename_section(db, three[0], "   ")


def test_config_patch_merges_and_removes(db: Session, three):
    a = three[0]
    s = svc.update_section_config(db, a, {"title": "Summer sale", "buttonText": None})
    assert s.config["title"] == "Summer sale"
    assert "buttonText" not in s.config
    assert s.config["height"] == "large"


def test_invalid_config_patch_has_no_side_effect(db: Session, three):
    a = three[0]
    before = dict(svc.get_section(db, a).config)
    with pytest.raises(ValidationError):
        svc.update_section_config(db, a, {"height": "gigantic"})
    assert svc.get_section(db, a).config == before


def test_oversized_config_rejected(db: Session, three, monkeypatch):
    from storebuilder.core.settings import settings

    monkeypatch.setattr(settings, "MAX_SECTION_CONFIG_KB", 1)
    with pytest.raises(PayloadTooLargeError):
        svc.update_section_config(db, three[1], {"content": "x" * 4096})


def test_mobile_config_lifecycle(db: Session, three):
    a = three[0]
    s = svc.update_mobile_config(db, a, {"height": "small"})
    assert s.mobile_config == {"height": "small"}

    s = svc.update_mobile_config(db, a, {"textAlignment": "left"})
    assert s.mobile_config == {"height": "small", "textAlignment": "left"}

    s = svc.update_mobile_config(db, a, {"height": None})
    assert s.mobile_config == {"textAlignment": "left"}

    s = svc.clear_mobile_config(db, a)
    db.commit()
    assert svc.get_section(db, a).mobile_config is None
