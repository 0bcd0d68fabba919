# tests/test_config_merge.py
from __future__ import annotations

import pytest

from storebuilder.core.errors import ValidationError
from storebuilder.utils.config_merge import changed_keys, effective_config, merge_config


def test_patch_overwrites_and_keeps_absent_keys():
    assert merge_config({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}


def test_null_removes_key():
    assert merge_config({"a": 1, "b": 2}, {"b": None}) == {"a": 1}


def test_empty_patch_is_identity():
    assert merge_config({"a": 1}, {}) == {"a": 1}


def test_merge_is_pure():
    current = {"a": {"nested": [1, 2]}, "b": 2}
    patch = {"c": {"x": 1}}
    merged = merge_config(current, patch)

    merged["a"]["nested"].append(3)
    merged["c"]["x"] = 99

    assert current == {"a": {"nested": [1, 2]}, "b": 2}
    assert patch == {"c": {"x": 1}}


def test_merge_from_null_current():
    assert merge_config(None, {"a": 1}) == {"a": 1}


@pytest.mark.parametrize("patch", [None, [1, 2], "title=x", 3])
def test_non_mapping_patch_rejected(patch):
    with pytest.raises(ValidationError):
        merge_config({"a": 1}, patch)


def test_effective_config_per_viewport():
    config = {"title": "Hello", "height": "large"}
    mobile = {"height": "small"}

    assert effective_config(config, mobile, "desktop") == config
    assert effective_config(config, mobile, "tablet") == config
    assert effective_config(config, mobile, "mobile") == {"title": "Hello", "height": "small"}
    # no overrides: mobile inherits everything
    assert effective_config(config, None, "mobile") == config


def test_changed_keys():
    assert changed_keys({"a": 1, "b": 2}, {"a": 1, "b": 3, "c": 4}) == ["b", "c"]
    assert changed_keys({"a": 1}, {}) == ["a"]
    assert changed_keys(None, None) == []
