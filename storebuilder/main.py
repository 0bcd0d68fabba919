from __future__ import annotations

import logging

from fastapi.openapi.utils import get_openapi
from fastapi.routing import APIRoute
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from storebuilder.api.delivery.router import router as delivery_router
from storebuilder.api.v1.router import api_router
from storebuilder.core.config import create_app
from storebuilder.core.errors import SectionRegistryError, register_error_handlers
from storebuilder.core.logging import configure_logging
from storebuilder.core.settings import settings
from storebuilder.section_registry import verify_registry

configure_logging()
logger = logging.getLogger("storebuilder")

# Every enum member must have a registry entry, or section writes would fail at runtime
_missing = verify_registry()
if _missing:
    raise SectionRegistryError(f"Section registry is missing definitions for: {', '.join(_missing)}")

app = create_app()
register_error_handlers(app)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")


def _inject_bearer_security(app):
    """
    Bearer JWT as the global OpenAPI security scheme; /delivery/* routes are
    blanked afterwards since they are public.
    """
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            tags=app.openapi_tags,
            routes=app.routes,
        )
        components = openapi_schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        security_schemes["bearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
        openapi_schema["security"] = [{"bearerAuth": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi


def _mark_public_routes(app):
    """Docs only: the real checks live in the endpoint dependencies."""
    for route in app.routes:
        if isinstance(route, APIRoute):
            path = route.path or ""
            if path.startswith("/delivery/") or path.startswith(f"{settings.API_V1_STR}/health"):
                extra = dict(route.openapi_extra or {})
                extra["security"] = []
                route.openapi_extra = extra


_inject_bearer_security(app)

# Editor API (JWT)
app.include_router(api_router, prefix=settings.API_V1_STR)

# Public storefront reads
app.include_router(delivery_router)

_mark_public_routes(app)

logger.info("%s started env=%s", settings.APP_NAME, settings.ENV)
