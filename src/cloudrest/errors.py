# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    # httpx wraps the socket-level cause; look through it for DNS/TLS failures first.
    cause = exc.__cause__ or exc.__context__
    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)) or isinstance(
        cause, (ssl_module.SSLError, ssl_module.CertificateError)
    ):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)) or isinstance(cause, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


class CloudRestError(Exception):
    """Base class for every outcome delivered to a failure callback."""


class EncodingError(CloudRestError):
    """The request could not be built from the caller's data."""


class TransportError(CloudRestError):
    """Network-level failure before any HTTP response was received."""

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        error_type: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.error_type = error_type


class DecodingError(CloudRestError):
    """A 2xx response body did not match the expected shape."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class ServiceError(CloudRestError):
    """
    Non-2xx response from the service.

    `message` and `recovery_suggestion` come from the `error` and `description`
    fields of a JSON error body; both are None when no such body was returned.
    """

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        recovery_suggestion: str | None = None,
        *,
        domain: str = "",
    ):
        super().__init__(message or f"HTTP {status_code}")
        self.status_code = status_code
        self.message = message
        self.recovery_suggestion = recovery_suggestion
        self.domain = domain

    def __repr__(self) -> str:
        return (
            f"ServiceError(status_code={self.status_code!r}, message={self.message!r}, "
            f"recovery_suggestion={self.recovery_suggestion!r}, domain={self.domain!r})"
        )


__all__ = [
    "CloudRestError",
    "DecodingError",
    "EncodingError",
    "ErrorCategory",
    "ServiceError",
    "TransportError",
    "categorize_exception",
]
