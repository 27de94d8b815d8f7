# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header utilities.

HTTP header field names are case-insensitive (RFC 9110). Client defaults and per-call
overrides are plain dicts supplied by callers, so merging must replace keys without
regard to casing or a request could carry both `accept` and `Accept`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Accepts plain dicts, httpx.Headers, and iterables of pairs.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        try:
            return dict(items())
        except (TypeError, ValueError):
            pass

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def normalize_headers(headers: Mapping[object, object] | None) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default

    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return default

    lower = str(name).lower()
    for key, value in coerced.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


def merge_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """
    Merge header layers left to right; later layers win.

    A key in a later layer replaces any earlier key with the same name in any casing,
    and the later layer's spelling is kept.
    """
    merged: dict[str, str] = {}
    index: dict[str, str] = {}
    for layer in layers:
        coerced = _coerce_headers_mapping(layer)
        if not coerced:
            continue
        for key, value in coerced.items():
            if key is None or value is None:
                continue
            name = str(key)
            lower = name.lower()
            previous = index.get(lower)
            if previous is not None and previous != name:
                del merged[previous]
            merged[name] = str(value)
            index[lower] = name
    return merged


__all__ = ["header_value", "merge_headers", "normalize_headers"]
