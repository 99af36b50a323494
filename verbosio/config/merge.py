"""Config merging helpers."""

from __future__ import annotations

from typing import Any, Dict


def merge_sections(base: Dict[str, Any], overrides: Dict[str, Any], *, nested: bool = False) -> Dict[str, Any]:
    """Recursively merge overrides into base.

    At the top level only dict values are sections; scalar entries there are
    dropped. Below it, override values replace base values unless both are
    dicts, which merge.
    """
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_sections(merged[key], value, nested=True)
        elif nested:
            merged[key] = value
        elif isinstance(value, dict):
            merged[key] = dict(value)
    return merged
