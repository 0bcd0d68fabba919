# storebuilder/utils/http_cache.py
# ETag + Cache-Control for public storefront reads
from __future__ import annotations

import hashlib
import json
from typing import Any, Optional

from fastapi import Response

from storebuilder.core.settings import settings


def compute_etag_from_bytes(body: bytes) -> str:
    """Quoted sha256 hex of the response body."""
    return '"' + hashlib.sha256(body).hexdigest() + '"'


def apply_delivery_cache_headers(resp: Response, *, etag: Optional[str]) -> None:
    if etag:
        resp.headers["ETag"] = etag
    resp.headers["Cache-Control"] = f"public, max-age={int(settings.DELIVERY_CACHE_SECONDS)}"


def cached_json_response(payload: Any, *, if_none_match: Optional[str]) -> Response:
    """
    Serializes once so the ETag matches the exact bytes sent.
    A matching If-None-Match short-circuits to 304 with the same headers.
    """
    body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    etag = compute_etag_from_bytes(body)
    if if_none_match and if_none_match == etag:
        resp = Response(status_code=304)
    else:
        resp = Response(content=body, media_type="application/json")
    apply_delivery_cache_headers(resp, etag=etag)
    return resp
