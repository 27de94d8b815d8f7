# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across cloudrest."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import urlencode

from ..errors import ErrorCategory

Headers = dict[str, str]
QueryParams = tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class HttpRequest:
    """Normalized, immutable request consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    params: QueryParams = ()
    headers: Headers = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None

    @property
    def full_url(self) -> str:
        """URL with the query string rendered."""
        if not self.params:
            return self.url
        return f"{self.url}?{urlencode(self.params)}"

    def with_header(self, name: str, value: str) -> HttpRequest:
        """Return a copy with `name` set, replacing any existing key regardless of case."""
        headers = {k: v for k, v in self.headers.items() if k.lower() != name.lower()}
        headers[name] = value
        return replace(self, headers=headers)


@dataclass
class HttpResponse:
    """Normalized HTTP response; `ok` reports transport success, not HTTP status."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory | None = None

    @property
    def is_success(self) -> bool:
        return self.ok and self.status_code is not None and 200 <= self.status_code < 300

    def json(self) -> Any:
        """Parse the body as JSON; raises ValueError on malformed or empty content."""
        return json.loads(self.content or self.text)


__all__ = ["Headers", "HttpRequest", "HttpResponse", "QueryParams"]
