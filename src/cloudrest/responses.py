# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Map HttpResponse objects to typed results or typed errors."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from .errors import DecodingError, ErrorCategory, ServiceError, TransportError
from .http.models import HttpResponse

T = TypeVar("T")

Decoder = Callable[[Any], T]
ErrorDecoder = Callable[[HttpResponse], ServiceError]


def transport_error(response: HttpResponse) -> TransportError:
    return TransportError(
        response.error_message or "network request failed",
        category=response.error_category or ErrorCategory.UNKNOWN_ERROR,
        error_type=response.error_type,
    )


def decode_service_error(
    response: HttpResponse,
    *,
    domain: str = "",
    include_description: bool = True,
) -> ServiceError:
    """
    Build a ServiceError from a non-2xx response.

    Reads the `error` string field and, when `include_description` is set, the
    `description` string field. Anything unparseable yields a status-code-only error.
    """
    status = int(response.status_code or 0)
    try:
        payload = response.json()
    except ValueError:
        return ServiceError(status, domain=domain)
    if not isinstance(payload, dict):
        return ServiceError(status, domain=domain)

    message = payload.get("error")
    description = payload.get("description") if include_description else None
    return ServiceError(
        status,
        message if isinstance(message, str) else None,
        description if isinstance(description, str) else None,
        domain=domain,
    )


def decode_success(response: HttpResponse, decoder: Decoder[T] | None) -> T | None:
    """Decode a 2xx body; endpoints without a decoder ignore the body and yield None."""
    if decoder is None:
        return None
    try:
        payload = response.json()
    except ValueError as exc:
        raise DecodingError(
            f"response body is not valid JSON: {exc}",
            status_code=response.status_code,
            body=response.text,
        ) from exc
    try:
        return decoder(payload)
    except Exception as exc:  # noqa: BLE001
        raise DecodingError(
            f"response body did not match the expected shape: {type(exc).__name__}: {exc}",
            status_code=response.status_code,
            body=response.text,
        ) from exc


def interpret_response(
    response: HttpResponse,
    decoder: Decoder[T] | None,
    error_decoder: ErrorDecoder | None = None,
) -> T | None:
    """Return the decoded result or raise the matching CloudRestError subclass."""
    if not response.ok or response.status_code is None:
        raise transport_error(response)
    if response.is_success:
        return decode_success(response, decoder)
    if error_decoder is None:
        raise decode_service_error(response)
    try:
        error = error_decoder(response)
    except Exception:  # noqa: BLE001
        error = ServiceError(int(response.status_code))
    raise error


__all__ = [
    "Decoder",
    "ErrorDecoder",
    "decode_service_error",
    "decode_success",
    "interpret_response",
    "transport_error",
]
