# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Endpoint descriptors: immutable descriptions of one logical REST operation."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass, field, is_dataclass
from enum import Enum
from typing import Any

from .errors import EncodingError
from .http.multipart import MultipartFormData
from .http.url import template_placeholders

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


def _jsonable(value: Any) -> Any:
    """Convert payload objects to plain JSON types; `to_dict()` wins over dataclass fields."""
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return _jsonable(to_dict())
    if is_dataclass(value) and not isinstance(value, type):
        return {k: _jsonable(v) for k, v in asdict(value).items() if v is not None}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


@dataclass(frozen=True)
class JsonBody:
    """A structured payload or single JSON scalar sent as application/json."""

    payload: Any
    content_type: str = "application/json"

    def encode(self) -> bytes:
        try:
            return json.dumps(_jsonable(self.payload), allow_nan=False, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError, UnicodeEncodeError) as exc:
            raise EncodingError(f"request body could not be serialized to JSON: {exc}") from exc


@dataclass(frozen=True)
class TextBody:
    text: str
    content_type: str = "text/plain"

    def encode(self) -> bytes:
        if not isinstance(self.text, str):
            raise EncodingError(f"text body must be str, got {type(self.text).__name__}")
        try:
            return self.text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodingError(f"text could not be encoded as UTF-8: {exc}") from exc


@dataclass(frozen=True)
class MultipartBody:
    form: MultipartFormData

    @property
    def content_type(self) -> str:
        return self.form.content_type

    def encode(self) -> bytes:
        return self.form.to_bytes()


Body = JsonBody | TextBody | MultipartBody


def _render_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_render_query_value(v) for v in value)
    return str(value)


@dataclass(frozen=True)
class EndpointDescriptor:
    """
    One logical REST operation.

    `path` is a template such as `/v1/models/{model_id}` filled from `path_params`.
    Query entries whose value is None are dropped. `decoder` maps the parsed JSON
    body of a 2xx response to a typed result; None means the body is ignored.
    """

    method: str
    path: str
    path_params: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Body | None = None
    accept: str | None = "application/json"
    decoder: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        method = str(self.method or "").upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"unsupported HTTP method {self.method!r}")
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "path_params", dict(self.path_params or {}))
        object.__setattr__(self, "query", dict(self.query or {}))
        object.__setattr__(self, "headers", dict(self.headers or {}))

    def query_items(self) -> list[tuple[str, str]]:
        """Rendered query pairs, excluding None values, in declaration order."""
        return [(name, _render_query_value(value)) for name, value in self.query.items() if value is not None]


@dataclass(frozen=True)
class EndpointTemplate:
    """
    A table entry describing an endpoint once; `bind` produces a descriptor per call.

    Keyword arguments to `bind` are routed by name: path placeholders fill the path,
    names listed in `query_names` become query parameters, anything else is rejected.
    """

    method: str
    path: str
    decoder: Callable[[Any], Any] | None = None
    query_names: tuple[str, ...] = ()
    accept: str | None = "application/json"

    def bind(
        self,
        *,
        body: Body | None = None,
        headers: Mapping[str, str] | None = None,
        **arguments: Any,
    ) -> EndpointDescriptor:
        placeholders = set(template_placeholders(self.path))
        unknown = set(arguments) - placeholders - set(self.query_names)
        if unknown:
            raise TypeError(f"unexpected arguments for {self.method} {self.path}: {sorted(unknown)}")
        return EndpointDescriptor(
            method=self.method,
            path=self.path,
            path_params={k: v for k, v in arguments.items() if k in placeholders},
            query={name: arguments.get(name) for name in self.query_names},
            headers=dict(headers or {}),
            body=body,
            accept=self.accept,
            decoder=self.decoder,
        )


__all__ = [
    "ALLOWED_METHODS",
    "Body",
    "EndpointDescriptor",
    "EndpointTemplate",
    "JsonBody",
    "MultipartBody",
    "TextBody",
]
