# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Authentication methods.

Each method exposes a single `authenticate(request)` operation returning a copy of the
request with one `Authorization` header. Credentials never go into the body or query.
"""

from __future__ import annotations

import base64
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import urlencode

from .config import load_http_settings
from .errors import ServiceError
from .http.client import HttpClient, create_default_http_client
from .http.models import HttpRequest
from .responses import decode_service_error, interpret_response

logger = logging.getLogger(__name__)

APIKEY_USERNAME = "apikey"
API_KEY_GRANT = "urn:ibm:params:oauth:grant-type:apikey"
_IAM_CLIENT_CREDENTIALS = ("bx", "bx")


class AuthenticationMethod(Protocol):
    def authenticate(self, request: HttpRequest) -> HttpRequest: ...


def _basic_header(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
    return f"Basic {token}"


class BasicAuthentication:
    """HTTP Basic credentials."""

    def __init__(self, username: str, password: str):
        self.username = username
        self.password = password

    def authenticate(self, request: HttpRequest) -> HttpRequest:
        return request.with_header("Authorization", _basic_header(self.username, self.password))

    def __repr__(self) -> str:
        return f"BasicAuthentication(username={self.username!r})"


class IAMAccessToken:
    """A bearer token supplied directly by the application."""

    def __init__(self, access_token: str):
        self.access_token = access_token

    def authenticate(self, request: HttpRequest) -> HttpRequest:
        return request.with_header("Authorization", f"Bearer {self.access_token}")

    def __repr__(self) -> str:
        return "IAMAccessToken(access_token=<redacted>)"


@dataclass(frozen=True)
class IAMToken:
    access_token: str
    refresh_token: str | None
    token_type: str
    expires_at: float

    @classmethod
    def from_mapping(cls, data: dict[str, Any], *, now: float) -> IAMToken:
        access_token = data["access_token"]
        if not isinstance(access_token, str) or not access_token:
            raise ValueError("access_token missing from token response")
        expiration = data.get("expiration")
        if isinstance(expiration, (int, float)):
            expires_at = float(expiration)
        else:
            expires_at = now + float(data.get("expires_in") or 3600)
        refresh = data.get("refresh_token")
        return cls(
            access_token=access_token,
            refresh_token=refresh if isinstance(refresh, str) and refresh else None,
            token_type=str(data.get("token_type") or "Bearer"),
            expires_at=expires_at,
        )


class IAMAuthentication:
    """
    Bearer token obtained by exchanging an API key with the IAM token service.

    The token is cached and refreshed once it is within `refresh_margin` seconds of
    expiry. A rejected refresh token falls back to a fresh API-key exchange. A failed
    exchange raises TransportError, ServiceError or DecodingError.
    """

    def __init__(
        self,
        api_key: str,
        iam_url: str | None = None,
        *,
        http_client: HttpClient | None = None,
        refresh_margin: float | None = None,
        clock=time.time,
    ):
        settings = load_http_settings()
        self.api_key = api_key
        self.iam_url = iam_url or settings.iam_url
        self.refresh_margin = settings.token_refresh_margin if refresh_margin is None else refresh_margin
        self._http_client = http_client
        self._owns_client = http_client is None
        self._clock = clock
        self._token: IAMToken | None = None
        self._lock = threading.Lock()

    def authenticate(self, request: HttpRequest) -> HttpRequest:
        return request.with_header("Authorization", f"Bearer {self.get_token()}")

    def get_token(self) -> str:
        with self._lock:
            now = self._clock()
            token = self._token
            if token is None:
                token = self._exchange_api_key()
            elif token.expires_at - self.refresh_margin <= now:
                token = self._refresh(token)
            self._token = token
            return token.access_token

    def _exchange_api_key(self) -> IAMToken:
        return self._request_token({"grant_type": API_KEY_GRANT, "apikey": self.api_key})

    def _refresh(self, token: IAMToken) -> IAMToken:
        if not token.refresh_token:
            return self._exchange_api_key()
        try:
            return self._request_token({"grant_type": "refresh_token", "refresh_token": token.refresh_token})
        except ServiceError as exc:
            # Rejected refresh token; fall back to the API key.
            logger.debug("IAM refresh rejected (HTTP %s), exchanging API key", exc.status_code)
            self._token = None
            return self._exchange_api_key()

    def _client(self) -> HttpClient:
        if self._http_client is None:
            self._http_client = create_default_http_client()
        return self._http_client

    def _request_token(self, form: dict[str, str]) -> IAMToken:
        form = {**form, "response_type": "cloud_iam"}
        request = HttpRequest(
            url=self.iam_url,
            method="POST",
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Accept": "application/json",
                "Authorization": _basic_header(*_IAM_CLIENT_CREDENTIALS),
            },
            body=urlencode(form).encode("ascii"),
        )
        logger.debug("requesting IAM token (grant_type=%s) from %s", form["grant_type"], self.iam_url)
        response = self._client().request(request)
        now = self._clock()
        return interpret_response(
            response,
            lambda payload: IAMToken.from_mapping(payload, now=now),
            lambda resp: decode_service_error(resp, domain="iam"),
        )

    def close(self) -> None:
        if self._owns_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def __repr__(self) -> str:
        return f"IAMAuthentication(iam_url={self.iam_url!r})"


def get_auth_method(
    username: str,
    password: str,
    iam_url: str | None = None,
    *,
    http_client: HttpClient | None = None,
) -> AuthenticationMethod:
    """Basic credentials, unless the username is `apikey`, in which case the password is an IAM API key."""
    if username == APIKEY_USERNAME:
        return IAMAuthentication(password, iam_url, http_client=http_client)
    return BasicAuthentication(username, password)


__all__ = [
    "APIKEY_USERNAME",
    "API_KEY_GRANT",
    "AuthenticationMethod",
    "BasicAuthentication",
    "IAMAccessToken",
    "IAMAuthentication",
    "IAMToken",
    "get_auth_method",
]
