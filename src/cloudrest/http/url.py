# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for building endpoint URLs."""

from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import quote

from ..errors import EncodingError

_PLACEHOLDER_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def escape_path_segment(value: object) -> str:
    """
    Percent-encode a single path segment.

    `/` is encoded too, so an identifier can never introduce extra segments.
    Raises EncodingError for empty values and strings that are not valid UTF-8 text.
    """
    text = str(value) if not isinstance(value, str) else value
    if not text:
        raise EncodingError("path segment must not be empty")
    try:
        return quote(text, safe="-._~")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"path segment {text!r} cannot be percent-encoded: {exc}") from exc


def template_placeholders(template: str) -> list[str]:
    """Return placeholder names in a path template, in order."""
    return _PLACEHOLDER_RE.findall(template)


def expand_path(template: str, params: Mapping[str, object] | None = None) -> str:
    """
    Substitute `{name}` placeholders with escaped values.

    Example:
      expand_path("/v3/models/{model_id}", {"model_id": "en-es"}) -> "/v3/models/en-es"
    """
    values = params or {}

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values or values[name] is None:
            raise EncodingError(f"missing path parameter {name!r} for {template}")
        return escape_path_segment(values[name])

    path = _PLACEHOLDER_RE.sub(_substitute, template)
    return path if path.startswith("/") else f"/{path}"


def join_url(base_url: str, path: str) -> str:
    """Append an already-escaped path to a base service URL."""
    base = str(base_url or "").rstrip("/")
    if not base:
        raise EncodingError("service URL is not configured")
    return base + (path if path.startswith("/") else f"/{path}")


__all__ = ["escape_path_segment", "expand_path", "join_url", "template_placeholders"]
