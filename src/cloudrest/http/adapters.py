# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

import threading
from collections.abc import Callable

from .client import HttpClient
from .models import HttpRequest, HttpResponse

StubResponse = HttpResponse | Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests and offline use.

    Responses are keyed by `(METHOD, url)` where `url` excludes the query string;
    a bare url key matches any method. Values may be callables receiving the request.
    """

    def __init__(self, responses: dict[object, StubResponse] | None = None):
        self._responses: dict[object, StubResponse] = dict(responses or {})
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: StubResponse, *, method: str | None = None) -> None:
        key: object = (method.upper(), url) if method else url
        self._responses[key] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
        stub = self._responses.get((request.method.upper(), request.url))
        if stub is None:
            stub = self._responses.get(request.url)
        if stub is None:
            return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")
        if callable(stub):
            return stub(request)
        return stub

    def close(self) -> None:
        self.closed = True
