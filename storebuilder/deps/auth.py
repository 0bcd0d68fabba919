# storebuilder/deps/auth.py
from __future__ import annotations

from typing import Iterable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.orm import Session

from storebuilder.models.store import MemberRole
from storebuilder.security.jwt import decode_token
from storebuilder.services.authz import can_access_store

# Reusable HTTP bearer scheme (non-fatal if header is missing)
_bearer = HTTPBearer(auto_error=False)


def _user_id_from_token(token: str) -> int:
    try:
        payload = decode_token(token)
    except ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    if payload.get("type", "access") != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token type")
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token subject")


def get_current_user_id(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> int:
    if not creds or not creds.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return _user_id_from_token(creds.credentials)


def ensure_store_access(
    db: Session,
    *,
    user_id: int,
    store_id: int,
    roles: Optional[Iterable[MemberRole]] = None,
) -> None:
    """
    Raises 403 unless the user is a member of the store (with one of `roles`, if given).
    Called by endpoints once they know which store the target row belongs to.
    """
    if not can_access_store(db, user_id=user_id, store_id=store_id, roles=roles):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No access to this store")
