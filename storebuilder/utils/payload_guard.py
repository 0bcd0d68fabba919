from __future__ import annotations

import json
from typing import Any, Mapping

from storebuilder.core.errors import PayloadTooLargeError, ValidationError
from storebuilder.core.settings import settings


def enforce_config_size(config: Mapping[str, Any], *, field_name: str = "config") -> None:
    """
    Enforces a maximum serialized JSON size (in KB) for a section config.
    Raises PayloadTooLargeError on overflow, ValidationError when not serializable.
    """
    limit_kb = float(getattr(settings, "MAX_SECTION_CONFIG_KB", 0) or 0)
    if limit_kb <= 0:
        return
    try:
        # compact JSON to measure true wire-size
        b = json.dumps(config, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid JSON in {field_name}") from None
    kb = len(b) / 1024.0
    if kb > limit_kb:
        raise PayloadTooLargeError(
            f"Payload too large: {field_name} is {kb:.1f}KB, limit is {limit_kb:.0f}KB"
        )
