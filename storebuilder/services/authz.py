# storebuilder/services/authz.py
# Store membership checks for editor endpoints
from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from storebuilder.models.store import MemberRole, StoreMember


def get_member_role(db: Session, *, user_id: int, store_id: int) -> Optional[MemberRole]:
    stmt = (
        select(StoreMember.role)
        .where(and_(StoreMember.user_id == user_id, StoreMember.store_id == store_id))
        .limit(1)
    )
    return db.scalar(stmt)


def can_access_store(
    db: Session,
    *,
    user_id: int,
    store_id: int,
    roles: Optional[Iterable[MemberRole]] = None,
) -> bool:
    """
    True if the user is a member of the store.
    With `roles`, the membership must also carry one of them (e.g. owner-only actions).
    """
    role = get_member_role(db, user_id=user_id, store_id=store_id)
    if role is None:
        return False
    return roles is None or role in set(roles)
