# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import categorize_exception
from .client import HttpClient
from .headers import header_value, normalize_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper, safe to share across worker threads."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers)
        if not header_value(headers, "User-Agent"):
            headers["User-Agent"] = self.settings.user_agent

        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        try:
            resp = self._client.request(
                request.method,
                request.url,
                params=list(request.params),
                headers=headers,
                content=request.body,
                timeout=timeout,
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("%s %s failed: %s", request.method, request.url, exc)
            return HttpResponse(
                ok=False,
                error_message=str(exc),
                error_type=type(exc).__name__,
                error_category=categorize_exception(exc),
            )

        content = resp.content
        encoding = resp.encoding or "utf-8"
        try:
            text = content.decode(encoding, errors="replace")
        except LookupError:
            text = content.decode("utf-8", errors="replace")

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=normalize_headers(resp.headers),
            text=text,
            content=content,
            url=str(resp.url),
        )

    def close(self) -> None:
        self._client.close()
