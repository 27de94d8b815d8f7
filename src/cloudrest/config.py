# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for cloudrest."""

from __future__ import annotations

import datetime
import os
import re
from dataclasses import dataclass, field

from .version import __version__

DEFAULT_USER_AGENT = f"cloudrest/{__version__} (+python-httpx)"
DEFAULT_IAM_URL = "https://iam.bluemix.net/identity/token"

_VERSION_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 60.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True
    max_workers: int = 8
    iam_url: str = DEFAULT_IAM_URL
    token_refresh_margin: float = 60.0

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        max_workers = _int_env("CLOUDREST_MAX_WORKERS", cls.max_workers)
        if max_workers <= 0:
            max_workers = cls.max_workers
        return cls(
            timeout=_float_env("CLOUDREST_HTTP_TIMEOUT", cls.timeout),
            user_agent=os.getenv("CLOUDREST_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("CLOUDREST_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("CLOUDREST_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_workers=max_workers,
            iam_url=os.getenv("CLOUDREST_IAM_URL", cls.iam_url),
            token_refresh_margin=_float_env("CLOUDREST_TOKEN_REFRESH_MARGIN", cls.token_refresh_margin),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


@dataclass
class ServiceConfig:
    """
    Per-client settings shared by every call.

    `service_url` and `default_headers` may be changed over the client's lifetime;
    `version` is fixed at construction and sent as the `version` query parameter.
    No locking is done here, callers must not mutate concurrently with request construction.
    """

    service_url: str
    version: str
    default_headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.version, str) or not _VERSION_RE.fullmatch(self.version):
            raise ValueError(f"version must be a YYYY-MM-DD date string, got {self.version!r}")
        try:
            datetime.date.fromisoformat(self.version)
        except ValueError as exc:
            raise ValueError(f"version is not a valid calendar date: {self.version!r}") from exc
        self.default_headers = dict(self.default_headers or {})


__all__ = [
    "DEFAULT_IAM_URL",
    "DEFAULT_USER_AGENT",
    "HttpSettings",
    "ServiceConfig",
    "load_http_settings",
]
