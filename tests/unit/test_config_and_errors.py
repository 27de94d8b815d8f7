# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import ssl

import httpx
import pytest

from cloudrest import config
from cloudrest.config import DEFAULT_USER_AGENT, HttpSettings, ServiceConfig
from cloudrest.errors import ErrorCategory, ServiceError, TransportError, categorize_exception


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("CLOUDREST_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("CLOUDREST_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("CLOUDREST_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("CLOUDREST_HTTP_VERIFY_SSL", "0")
    monkeypatch.setenv("CLOUDREST_MAX_WORKERS", "3")
    monkeypatch.setenv("CLOUDREST_IAM_URL", "https://iam.example.test/token")
    monkeypatch.setenv("CLOUDREST_TOKEN_REFRESH_MARGIN", "5")

    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.verify_ssl is False
    assert settings.max_workers == 3
    assert settings.iam_url == "https://iam.example.test/token"
    assert settings.token_refresh_margin == 5.0


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("CLOUDREST_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("CLOUDREST_MAX_WORKERS", "-2")
    monkeypatch.setenv("CLOUDREST_TOKEN_REFRESH_MARGIN", "")

    settings = config.load_http_settings()

    assert settings.timeout == HttpSettings.timeout
    assert settings.max_workers == HttpSettings.max_workers
    assert settings.token_refresh_margin == HttpSettings.token_refresh_margin
    assert DEFAULT_USER_AGENT in settings.user_agent


def test_load_http_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("CLOUDREST_HTTP_TIMEOUT", "7.7")
    assert config.load_http_settings().timeout == 7.7
    monkeypatch.setenv("CLOUDREST_HTTP_TIMEOUT", "8.8")
    assert config.load_http_settings().timeout == 8.8


def test_service_config_validates_version_and_copies_headers():
    headers = {"X-Team": "a"}
    cfg = ServiceConfig(service_url="https://example.test", version="2018-11-12", default_headers=headers)
    headers["X-Team"] = "changed"
    assert cfg.default_headers == {"X-Team": "a"}

    with pytest.raises(ValueError):
        ServiceConfig(service_url="https://example.test", version="12-11-2018")
    with pytest.raises(ValueError):
        ServiceConfig(service_url="https://example.test", version="")


def test_service_config_rejects_impossible_or_padded_dates():
    for version in ("2018-13-45", "2018-02-30", "2018-11-12\n", " 2018-11-12"):
        with pytest.raises(ValueError):
            ServiceConfig(service_url="https://example.test", version=version)


def test_categorize_exception_maps_common_failures():
    assert categorize_exception(httpx.ReadTimeout("slow")) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(socket.gaierror("no such host")) == ErrorCategory.DNS_ERROR
    assert categorize_exception(ssl.SSLError("bad cert")) == ErrorCategory.SSL_ERROR
    assert categorize_exception(ConnectionResetError()) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ValueError("other")) == ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception_looks_through_wrapped_cause():
    try:
        try:
            raise socket.gaierror("lookup failed")
        except socket.gaierror as inner:
            raise httpx.ConnectError("connect failed") from inner
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) == ErrorCategory.DNS_ERROR


def test_service_error_message_falls_back_to_status():
    bare = ServiceError(503)
    assert str(bare) == "HTTP 503"
    assert bare.message is None
    assert bare.recovery_suggestion is None

    full = ServiceError(400, "bad", "fix it", domain="svc")
    assert str(full) == "bad"
    assert "fix it" in repr(full)


def test_transport_error_carries_category():
    err = TransportError("boom", category=ErrorCategory.TIMEOUT, error_type="ReadTimeout")
    assert err.category == ErrorCategory.TIMEOUT
    assert err.error_type == "ReadTimeout"
    assert str(err) == "boom"
