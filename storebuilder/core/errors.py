# storebuilder/core/errors.py
# Domain errors raised by the services and mapped to HTTP responses in one place.
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class StoreBuilderError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreBuilderError, ValueError):
    """Rejected at the boundary; the operation had no side effect."""
    status_code = 400


class DuplicateSlugError(ValidationError):
    pass


class ProtectedPageError(ValidationError):
    pass


class NotFoundError(StoreBuilderError, LookupError):
    """The entity is gone (e.g. deleted by another editor); refresh and retry."""
    status_code = 404


class ConflictError(StoreBuilderError):
    status_code = 409


class PayloadTooLargeError(StoreBuilderError):
    status_code = 413


class SectionRegistryError(StoreBuilderError):
    """A section type exists in the enumeration but has no registry entry."""
    status_code = 500


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StoreBuilderError)
    async def _handle_store_builder_error(request: Request, exc: StoreBuilderError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": type(exc).__name__, "detail": exc.message},
        )
