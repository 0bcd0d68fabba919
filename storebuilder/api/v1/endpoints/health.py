# storebuilder/api/v1/endpoints/health.py
from fastapi import APIRouter

from storebuilder.section_registry import SECTION_REGISTRY

router = APIRouter()


@router.get("/ping")
def ping():
    return {"status": "ok", "section_types": len(SECTION_REGISTRY)}
