# storebuilder/api/v1/router.py
from fastapi import APIRouter

from .endpoints import health
from storebuilder.api.v1.endpoints import header_footer as header_footer_endpoints
from storebuilder.api.v1.endpoints import navigation as navigation_endpoints
from storebuilder.api.v1.endpoints import page_templates as page_templates_endpoints
from storebuilder.api.v1.endpoints import pages as pages_endpoints
from storebuilder.api.v1.endpoints import section_types as section_types_endpoints
from storebuilder.api.v1.endpoints import sections as sections_endpoints
from storebuilder.api.v1.endpoints import stores as stores_endpoints
from storebuilder.api.v1.endpoints import themes as themes_endpoints

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])

# Catalogs (read-only)
api_router.include_router(section_types_endpoints.router)   # /section-types
api_router.include_router(page_templates_endpoints.router)  # /page-templates

# Store editing (JWT + store membership)
api_router.include_router(stores_endpoints.router)          # /stores
api_router.include_router(pages_endpoints.router)           # /stores/{id}/pages, /pages
api_router.include_router(sections_endpoints.router)        # /pages/{id}/sections, /sections
api_router.include_router(themes_endpoints.router)          # /stores/{id}/themes, /themes
api_router.include_router(navigation_endpoints.router)      # /stores/{id}/navigation, /navigation
api_router.include_router(header_footer_endpoints.router)   # /stores/{id}/header-footer
