# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Base class shared by every service client."""

from __future__ import annotations

from concurrent.futures import Future

from .auth import AuthenticationMethod, IAMAccessToken, IAMAuthentication, get_auth_method
from .config import ServiceConfig
from .dispatcher import DeliveryContext, FailureCallback, RestDispatcher, SuccessCallback
from .endpoints import EndpointDescriptor
from .errors import ServiceError
from .http.client import HttpClient
from .http.models import HttpResponse
from .responses import decode_service_error


class ServiceClient:
    """
    Convenience wrapper holding configuration, credentials and a dispatcher.

    Exactly one credential form is accepted: `username`/`password`, `api_key`, or
    `access_token`. A username of `apikey` turns the password into an IAM API key.
    """

    default_service_url = ""
    domain = "cloudrest"
    error_has_description = True

    def __init__(
        self,
        version: str,
        *,
        username: str | None = None,
        password: str | None = None,
        api_key: str | None = None,
        iam_url: str | None = None,
        access_token: str | None = None,
        service_url: str | None = None,
        http_client: HttpClient | None = None,
        delivery: DeliveryContext | None = None,
        dispatcher: RestDispatcher | None = None,
    ):
        forms = [
            username is not None or password is not None,
            api_key is not None,
            access_token is not None,
        ]
        if sum(forms) != 1:
            raise ValueError("provide exactly one of username/password, api_key, or access_token")

        auth: AuthenticationMethod
        if api_key is not None:
            auth = IAMAuthentication(api_key, iam_url, http_client=http_client)
        elif access_token is not None:
            auth = IAMAccessToken(access_token)
        else:
            if username is None or password is None:
                raise ValueError("username and password must be provided together")
            auth = get_auth_method(username, password, iam_url, http_client=http_client)

        self.auth_method: AuthenticationMethod = auth
        self.config = ServiceConfig(service_url=service_url or self.default_service_url, version=version)
        self._owns_dispatcher = dispatcher is None
        self.dispatcher = dispatcher or RestDispatcher(http_client, delivery=delivery)

    @property
    def service_url(self) -> str:
        return self.config.service_url

    @service_url.setter
    def service_url(self, value: str) -> None:
        self.config.service_url = value

    @property
    def default_headers(self) -> dict[str, str]:
        return self.config.default_headers

    @default_headers.setter
    def default_headers(self, value: dict[str, str]) -> None:
        self.config.default_headers = dict(value or {})

    @property
    def version(self) -> str:
        return self.config.version

    def access_token(self, new_token: str) -> None:
        """Replace the bearer token; a no-op unless the client was built with an access token."""
        if isinstance(self.auth_method, IAMAccessToken):
            self.auth_method = IAMAccessToken(new_token)

    def decode_error(self, response: HttpResponse) -> ServiceError:
        return decode_service_error(response, domain=self.domain, include_description=self.error_has_description)

    def call(
        self,
        descriptor: EndpointDescriptor,
        on_success: SuccessCallback | None = None,
        on_failure: FailureCallback | None = None,
        *,
        headers: dict[str, str] | None = None,
    ) -> Future:
        return self.dispatcher.dispatch(
            descriptor,
            self.config,
            self.auth_method,
            on_success,
            on_failure,
            headers=headers,
            error_decoder=self.decode_error,
        )

    def close(self) -> None:
        if self._owns_dispatcher:
            self.dispatcher.close()
        close_auth = getattr(self.auth_method, "close", None)
        if callable(close_auth):
            close_auth()

    def __enter__(self) -> ServiceClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["ServiceClient"]
