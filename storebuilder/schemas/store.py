# storebuilder/schemas/store.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from storebuilder.models.store import StoreStatus


class StoreCreate(BaseModel):
    slug: str = Field(..., min_length=1, max_length=80)
    name: str = Field(..., min_length=1, max_length=160)
    business_type: Optional[str] = Field(None, max_length=64)
    business_category: Optional[str] = Field(None, max_length=64)


class StoreOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    slug: str
    name: str
    status: StoreStatus
    business_type: str
    business_category: Optional[str] = None
    created_at: datetime


class InitializePagesIn(BaseModel):
    # Falls back to the store's own classification
    business_type: Optional[str] = None
    business_category: Optional[str] = None


class InitializePagesOut(BaseModel):
    store_id: int
    pages_created: int
