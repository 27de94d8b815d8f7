# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import header_value, merge_headers, normalize_headers
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse, QueryParams
from .multipart import FormPart, MultipartFormData
from .url import escape_path_segment, expand_path, join_url

__all__ = [
    "FormPart",
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "MultipartFormData",
    "QueryParams",
    "StubHttpClient",
    "create_default_http_client",
    "escape_path_segment",
    "expand_path",
    "header_value",
    "join_url",
    "merge_headers",
    "normalize_headers",
]
