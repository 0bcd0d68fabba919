from __future__ import annotations

import copy
from typing import Any, Dict, Mapping, Optional

from storebuilder.core.errors import ValidationError

MOBILE = "mobile"
VIEWPORTS = ("desktop", "tablet", MOBILE)


def merge_config(current: Optional[Mapping[str, Any]], patch: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Shallow, key-level patch. Returns a new dict; neither argument is touched.

        merge_config({"a": 1, "b": 2}, {"b": 3})    -> {"a": 1, "b": 3}
        merge_config({"a": 1, "b": 2}, {"b": None}) -> {"a": 1}
        merge_config({"a": 1}, {})                  -> {"a": 1}
    """
    if not isinstance(patch, Mapping):
        raise ValidationError("Config patch must be a JSON object.")
    if current is not None and not isinstance(current, Mapping):
        raise ValidationError("Stored config is not a JSON object.")

    merged: Dict[str, Any] = copy.deepcopy(dict(current or {}))
    for key, value in patch.items():
        if not isinstance(key, str):
            raise ValidationError("Config keys must be strings.")
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def effective_config(
    config: Optional[Mapping[str, Any]],
    mobile_config: Optional[Mapping[str, Any]] = None,
    viewport: str = "desktop",
) -> Dict[str, Any]:
    """
    Config as the renderer should see it. At mobile viewport the keys present
    in mobile_config win; a null mobile_config inherits config entirely.
    """
    result = copy.deepcopy(dict(config or {}))
    if viewport == MOBILE and mobile_config:
        result.update(copy.deepcopy(dict(mobile_config)))
    return result


def changed_keys(before: Optional[Mapping[str, Any]], after: Optional[Mapping[str, Any]]) -> list[str]:
    b = before or {}
    a = after or {}
    keys = set(b.keys()) | set(a.keys())
    return sorted(k for k in keys if b.get(k) != a.get(k))
