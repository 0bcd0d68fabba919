# storebuilder/api/v1/endpoints/sections.py
# Section list editing: add / reorder / move / duplicate / toggle / config patches
from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.orm import Session

from storebuilder.db.session import get_db
from storebuilder.deps.auth import ensure_store_access, get_current_user_id
from storebuilder.models.content import Section
from storebuilder.schemas.section import SectionCreate, SectionMove, SectionOut, SectionRename, SectionReorder
from storebuilder.services import section_service as svc
from storebuilder.services.page_service import get_page

router = APIRouter(tags=["sections"])


def _owned_section(db: Session, section_id: int, user_id: int) -> Section:
    section = svc.get_section(db, section_id)
    ensure_store_access(db, user_id=user_id, store_id=section.store_id)
    return section


def _commit_and_refresh(db: Session, section: Section) -> Section:
    db.commit()
    db.refresh(section)
    return section


# -------- Page-scoped --------
@router.get("/pages/{page_id}/sections", response_model=List[SectionOut])
def list_sections_endpoint(
    page_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    ensure_store_access(db, user_id=user_id, store_id=get_page(db, page_id).store_id)
    return svc.list_sections(db, page_id)


@router.post("/pages/{page_id}/sections", response_model=SectionOut, status_code=201)
def add_section_endpoint(
    page_id: int,
    payload: SectionCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    ensure_store_access(db, user_id=user_id, store_id=get_page(db, page_id).store_id)
    section = svc.add_section(db, page_id=page_id, section_type=payload.section_type, name=payload.name)
    return _commit_and_refresh(db, section)


@router.put("/pages/{page_id}/sections/order", response_model=List[SectionOut])
def reorder_sections_endpoint(
    page_id: int,
    payload: SectionReorder,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """Body is the page's complete section order after a drag-and-drop."""
    ensure_store_access(db, user_id=user_id, store_id=get_page(db, page_id).store_id)
    svc.reorder_sections(db, page_id=page_id, ordered_ids=payload.section_ids)
    db.commit()
    return svc.list_sections(db, page_id)


# -------- Section-scoped --------
@router.patch("/sections/{section_id}", response_model=SectionOut)
def rename_section_endpoint(
    section_id: int,
    payload: SectionRename,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    _owned_section(db, section_id, user_id)
    return _commit_and_refresh(db, svc.rename_section(db, section_id, payload.name))


@router.delete("/sections/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_section_endpoint(
    section_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    _owned_section(db, section_id, user_id)
    svc.remove_section(db, section_id)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/sections/{section_id}/move", response_model=List[SectionOut])
def move_section_endpoint(
    section_id: int,
    payload: SectionMove,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    section = _owned_section(db, section_id, user_id)
    page_id = section.page_id
    svc.move_section(db, section_id, payload.direction)
    db.commit()
    return svc.list_sections(db, page_id)


@router.post("/sections/{section_id}/duplicate", response_model=SectionOut, status_code=201)
def duplicate_section_endpoint(
    section_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    _owned_section(db, section_id, user_id)
    return _commit_and_refresh(db, svc.duplicate_section(db, section_id))


@router.post("/sections/{section_id}/toggle-visibility", response_model=SectionOut)
def toggle_visibility_endpoint(
    section_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    _owned_section(db, section_id, user_id)
    return _commit_and_refresh(db, svc.toggle_visibility(db, section_id))


@router.patch("/sections/{section_id}/config", response_model=SectionOut)
def update_config_endpoint(
    section_id: int,
    patch: Dict[str, Any] = Body(..., description="Changed keys only; null removes a key"),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    _owned_section(db, section_id, user_id)
    return _commit_and_refresh(db, svc.update_section_config(db, section_id, patch))


@router.patch("/sections/{section_id}/mobile-config", response_model=SectionOut)
def update_mobile_config_endpoint(
    section_id: int,
    patch: Dict[str, Any] = Body(..., description="Mobile overrides; null removes an override"),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    _owned_section(db, section_id, user_id)
    return _commit_and_refresh(db, svc.update_mobile_config(db, section_id, patch))


@router.delete("/sections/{section_id}/mobile-config", response_model=SectionOut)
def clear_mobile_config_endpoint(
    section_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    _owned_section(db, section_id, user_id)
    return _commit_and_refresh(db, svc.clear_mobile_config(db, section_id))
