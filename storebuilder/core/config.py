# storebuilder/core/config.py
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .settings import settings

DESCRIPTION = (
    "Editor API for store pages, sections, themes and navigation, "
    "plus the public delivery API read by the storefront renderer."
)

OPENAPI_TAGS = [
    {"name": "stores", "description": "Store lifecycle and standard page seeding"},
    {"name": "pages", "description": "Pages of a store"},
    {"name": "sections", "description": "Ordered sections of a page and their configuration"},
    {"name": "section-types", "description": "Section registry and editor palette"},
    {"name": "page-templates", "description": "Standard pages per business type"},
    {"name": "Delivery", "description": "Published storefront, no auth"},
]


def create_app(*, title: Optional[str] = None, version: Optional[str] = None) -> FastAPI:
    app = FastAPI(
        title=title or settings.APP_NAME,
        version=version or settings.APP_VERSION,
        description=DESCRIPTION,
        openapi_tags=OPENAPI_TAGS,
        debug=settings.DEBUG,
    )

    if settings.BACKEND_CORS_ORIGINS:
        origins = settings.CORS_ORIGINS
        # credentials never go with a wildcard origin
        allow_credentials = "*" not in origins
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"] if not allow_credentials else origins,
            allow_credentials=allow_credentials,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
            allow_headers=["Authorization", "Content-Type", "If-None-Match"],
            expose_headers=["ETag"],
        )
    return app
