# storebuilder/services/section_service.py
# Ordered list of sections on a page + field-level config edits
from __future__ import annotations

import copy
import logging
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import case, func, select, update
from sqlalchemy.orm import Session

from storebuilder.core.errors import NotFoundError, ValidationError
from storebuilder.core.settings import settings
from storebuilder.models.content import Section
from storebuilder.section_registry import lookup, validate_config
from storebuilder.services.page_service import get_page
from storebuilder.utils.config_merge import changed_keys, merge_config
from storebuilder.utils.payload_guard import enforce_config_size

logger = logging.getLogger(__name__)

RENDER_ORDER = (Section.sort_order, Section.created_at, Section.id)
DIRECTIONS = ("up", "down")


def get_section(db: Session, section_id: int) -> Section:
    section = db.get(Section, section_id)
    if not section:
        raise NotFoundError("Section not found.")
    return section


def _ordered_ids(db: Session, page_id: int) -> list[int]:
    return list(db.scalars(select(Section.id).where(Section.page_id == page_id).order_by(*RENDER_ORDER)))


def _apply_order(db: Session, page_id: int, ordered_ids: Sequence[int]) -> None:
    """
    Position in `ordered_ids` becomes sort_order, in a single UPDATE ... CASE.
    Either every row moves or none does.
    """
    if not ordered_ids:
        return
    positions = {sid: pos for pos, sid in enumerate(ordered_ids)}
    db.execute(
        update(Section)
        .where(Section.page_id == page_id, Section.id.in_(list(positions)))
        .values(sort_order=case(positions, value=Section.id))
        .execution_options(synchronize_session=False)
    )


def list_sections(db: Session, page_id: int) -> Sequence[Section]:
    get_page(db, page_id)
    db.flush()
    stmt = (
        select(Section)
        .where(Section.page_id == page_id)
        .order_by(*RENDER_ORDER)
        .execution_options(populate_existing=True)
    )
    return db.scalars(stmt).all()


def add_section(db: Session, *, page_id: int, section_type: str, name: Optional[str] = None) -> Section:
    page = get_page(db, page_id)
    definition = lookup(section_type)

    current_max = db.scalar(select(func.max(Section.sort_order)).where(Section.page_id == page_id))
    section = Section(
        page_id=page.id,
        store_id=page.store_id,
        section_type=definition.type,
        name=(name or "").strip() or definition.label,
        config=definition.default_config(),
        mobile_config=None,
        is_visible=True,
        sort_order=0 if current_max is None else current_max + 1,
    )
    db.add(section)
    db.flush()
    logger.info(
        "section added page_id=%s section_id=%s type=%s sort_order=%s",
        page.id, section.id, section.section_type, section.sort_order,
    )
    return section


def reorder_sections(db: Session, *, page_id: int, ordered_ids: Sequence[int]) -> Sequence[Section]:
    """
    `ordered_ids` is the complete new order of the page. It must name every
    section of the page exactly once; ids from elsewhere are treated as gone.
    """
    get_page(db, page_id)
    db.flush()
    ids = list(ordered_ids)
    current = set(_ordered_ids(db, page_id))

    unknown = [sid for sid in ids if sid not in current]
    if unknown:
        raise NotFoundError(f"Sections not found on this page: {unknown}.")
    if len(set(ids)) != len(ids):
        raise ValidationError("Section order lists the same section more than once.")
    missing = sorted(current - set(ids))
    if missing:
        raise ValidationError(f"Section order is missing sections: {missing}.")

    _apply_order(db, page_id, ids)
    logger.info("sections reordered page_id=%s count=%s", page_id, len(ids))
    return list_sections(db, page_id)


def move_section(db: Session, section_id: int, direction: str) -> Sequence[Section]:
    if direction not in DIRECTIONS:
        raise ValidationError(f"Direction must be one of {DIRECTIONS}.")
    section = get_section(db, section_id)
    db.flush()
    ids = _ordered_ids(db, section.page_id)
    idx = ids.index(section.id)
    target = idx - 1 if direction == "up" else idx + 1
    if target < 0 or target >= len(ids):
        # already first/last
        return list_sections(db, section.page_id)
    ids[idx], ids[target] = ids[target], ids[idx]
    return reorder_sections(db, page_id=section.page_id, ordered_ids=ids)


def duplicate_section(db: Session, section_id: int) -> Section:
    source = get_section(db, section_id)
    name = f"{source.name}{settings.DUPLICATE_NAME_SUFFIX}"[:200]
    clone = Section(
        page_id=source.page_id,
        store_id=source.store_id,
        section_type=source.section_type,
        name=name,
        config=copy.deepcopy(source.config or {}),
        mobile_config=copy.deepcopy(source.mobile_config) if source.mobile_config is not None else None,
        is_visible=source.is_visible,
        sort_order=source.sort_order + 1,
    )
    db.add(clone)
    db.flush()

    # Slot the copy right after its source and renumber the page densely
    ids = [sid for sid in _ordered_ids(db, source.page_id) if sid != clone.id]
    ids.insert(ids.index(source.id) + 1, clone.id)
    _apply_order(db, source.page_id, ids)
    db.refresh(clone)
    db.refresh(source)

    logger.info("section duplicated source_id=%s copy_id=%s page_id=%s", source.id, clone.id, clone.page_id)
    return clone


def remove_section(db: Session, section_id: int) -> None:
    section = get_section(db, section_id)
    page_id = section.page_id
    db.delete(section)
    db.flush()
    logger.info("section removed page_id=%s section_id=%s", page_id, section_id)


def toggle_visibility(db: Session, section_id: int) -> Section:
    section = get_section(db, section_id)
    section.is_visible = not section.is_visible
    db.flush()
    return section


def rename_section(db: Session, section_id: int, name: str) -> Section:
    section = get_section(db, section_id)
    name = (name or "").strip()
    if not name:
        raise ValidationError("Section name cannot be empty.")
    section.name = name
    db.flush()
    return section


# -------- Config --------
def update_section_config(db: Session, section_id: int, patch: Mapping[str, Any]) -> Section:
    section = get_section(db, section_id)
    merged = merge_config(section.config, patch)
    validate_config(section.section_type, merged)
    enforce_config_size(merged)

    keys = changed_keys(section.config, merged)
    section.config = merged
    db.flush()
    logger.info("section config updated section_id=%s keys=%s", section.id, keys)
    return section


def update_mobile_config(db: Session, section_id: int, patch: Mapping[str, Any]) -> Section:
    section = get_section(db, section_id)
    merged = merge_config(section.mobile_config or {}, patch)
    validate_config(section.section_type, merged, field_name="mobile_config")
    enforce_config_size(merged, field_name="mobile_config")

    keys = changed_keys(section.mobile_config, merged)
    section.mobile_config = merged
    db.flush()
    logger.info("section mobile config updated section_id=%s keys=%s", section.id, keys)
    return section


def clear_mobile_config(db: Session, section_id: int) -> Section:
    """Mobile falls back to the desktop config again."""
    section = get_section(db, section_id)
    section.mobile_config = None
    db.flush()
    return section
