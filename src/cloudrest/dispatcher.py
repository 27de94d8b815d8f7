# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
REST request dispatcher.

`construct_request` turns an EndpointDescriptor, a ServiceConfig and an
AuthenticationMethod into an immutable PreparedRequest. `RestDispatcher.execute`
runs it on a pooled executor and routes exactly one outcome to the caller's
callbacks through a delivery context.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Protocol

from .auth import AuthenticationMethod
from .config import ServiceConfig, load_http_settings
from .endpoints import EndpointDescriptor
from .errors import CloudRestError, EncodingError
from .http.client import HttpClient, create_default_http_client
from .http.headers import merge_headers
from .http.models import HttpRequest
from .http.url import expand_path, join_url
from .responses import Decoder, ErrorDecoder, interpret_response

logger = logging.getLogger(__name__)

VERSION_PARAM = "version"

SuccessCallback = Callable[[Any], None]
FailureCallback = Callable[[CloudRestError], None]


@dataclass(frozen=True)
class PreparedRequest:
    """A request ready for transport; the auth method is applied when it is sent."""

    http_request: HttpRequest
    auth: AuthenticationMethod | None
    decoder: Decoder[Any] | None = None
    error_decoder: ErrorDecoder | None = None


def construct_request(
    descriptor: EndpointDescriptor,
    config: ServiceConfig,
    auth: AuthenticationMethod | None,
    *,
    headers: dict[str, str] | None = None,
    error_decoder: ErrorDecoder | None = None,
) -> PreparedRequest:
    """
    Build a PreparedRequest or raise EncodingError.

    Headers are layered as client defaults, descriptor overrides, per-call overrides,
    then `Accept` and the body `Content-Type`. `version` is always the first query
    parameter and appears exactly once.
    """
    body: bytes | None = None
    content_type: str | None = None
    if descriptor.body is not None:
        body = descriptor.body.encode()
        content_type = descriptor.body.content_type

    url = join_url(config.service_url, expand_path(descriptor.path, descriptor.path_params))

    fixed: dict[str, str] = {}
    if descriptor.accept:
        fixed["Accept"] = descriptor.accept
    if content_type:
        fixed["Content-Type"] = content_type
    merged = merge_headers(config.default_headers, descriptor.headers, headers, fixed)

    params = [(VERSION_PARAM, config.version)]
    params.extend((name, value) for name, value in descriptor.query_items() if name != VERSION_PARAM)

    request = HttpRequest(
        url=url,
        method=descriptor.method,
        params=tuple(params),
        headers=merged,
        body=body,
    )
    return PreparedRequest(
        http_request=request,
        auth=auth,
        decoder=descriptor.decoder,
        error_decoder=error_decoder,
    )


class DeliveryContext(Protocol):
    """Where completion callbacks run."""

    def deliver(self, callback: Callable[[], None]) -> None: ...


class ImmediateDelivery:
    """Run callbacks on the worker thread that completed the call."""

    def deliver(self, callback: Callable[[], None]) -> None:
        callback()


class SerialDelivery:
    """Run callbacks one at a time on a single dedicated thread, in completion order."""

    def __init__(self) -> None:
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="cloudrest-delivery")

    def deliver(self, callback: Callable[[], None]) -> None:
        self._executor.submit(callback)

    def close(self) -> None:
        self._executor.shutdown(wait=True)


class QueueDelivery:
    """Hold callbacks until the embedding application drains them on its own thread."""

    def __init__(self) -> None:
        self._pending: queue.Queue[Callable[[], None]] = queue.Queue()

    def deliver(self, callback: Callable[[], None]) -> None:
        self._pending.put(callback)

    def run_pending(self, *, block: bool = False, timeout: float | None = None) -> int:
        """Run queued callbacks on the calling thread; returns how many ran."""
        ran = 0
        if block:
            try:
                callback = self._pending.get(timeout=timeout)
            except queue.Empty:
                return 0
            callback()
            ran += 1
        while True:
            try:
                callback = self._pending.get_nowait()
            except queue.Empty:
                return ran
            callback()
            ran += 1


class _Completion:
    """Guards a single call so exactly one callback fires, exactly once."""

    def __init__(
        self,
        future: Future,
        delivery: DeliveryContext,
        on_success: SuccessCallback | None,
        on_failure: FailureCallback | None,
    ):
        self._future = future
        self._delivery = delivery
        self._on_success = on_success
        self._on_failure = on_failure
        self._done = False
        self._lock = threading.Lock()

    def _claim(self) -> bool:
        with self._lock:
            if self._done:
                return False
            self._done = True
            return True

    def succeed(self, value: Any) -> None:
        if not self._claim():
            return
        if self._on_success is not None:
            self._deliver(self._on_success, value)
        self._future.set_result(value)

    def fail(self, error: CloudRestError) -> None:
        if not self._claim():
            return
        if self._on_failure is None:
            logger.debug("no failure callback for %s: %s", type(error).__name__, error)
        else:
            self._deliver(self._on_failure, error)
        self._future.set_result(error)

    def _deliver(self, callback: Callable[[Any], None], outcome: Any) -> None:
        def _invoke() -> None:
            try:
                callback(outcome)
            except Exception:  # noqa: BLE001
                logger.exception("completion callback %r raised", callback)

        self._delivery.deliver(_invoke)


class RestDispatcher:
    """
    Executes prepared requests on a shared thread pool.

    Calls never block and are never retried. The returned Future resolves with the
    decoded value or the CloudRestError delivered to `on_failure`; it never raises.
    With ImmediateDelivery the future resolves after the callback has returned.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        delivery: DeliveryContext | None = None,
        max_workers: int | None = None,
    ):
        self._owns_client = http_client is None
        self.http_client = http_client or create_default_http_client()
        self.delivery: DeliveryContext = delivery or ImmediateDelivery()
        workers = max_workers or load_http_settings().max_workers
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="cloudrest")

    def execute(
        self,
        prepared: PreparedRequest,
        on_success: SuccessCallback | None = None,
        on_failure: FailureCallback | None = None,
    ) -> Future:
        future: Future = Future()
        completion = _Completion(future, self.delivery, on_success, on_failure)
        self._executor.submit(self._run, prepared, completion)
        return future

    def dispatch(
        self,
        descriptor: EndpointDescriptor,
        config: ServiceConfig,
        auth: AuthenticationMethod | None,
        on_success: SuccessCallback | None = None,
        on_failure: FailureCallback | None = None,
        *,
        headers: dict[str, str] | None = None,
        error_decoder: ErrorDecoder | None = None,
    ) -> Future:
        """Construct and execute; an EncodingError is delivered without touching the network."""
        try:
            prepared = construct_request(descriptor, config, auth, headers=headers, error_decoder=error_decoder)
        except EncodingError as exc:
            future: Future = Future()
            _Completion(future, self.delivery, on_success, on_failure).fail(exc)
            return future
        return self.execute(prepared, on_success, on_failure)

    def _run(self, prepared: PreparedRequest, completion: _Completion) -> None:
        request = prepared.http_request
        try:
            if prepared.auth is not None:
                request = prepared.auth.authenticate(request)
            logger.debug("%s %s", request.method, request.full_url)
            response = self.http_client.request(request)
            value = interpret_response(response, prepared.decoder, prepared.error_decoder)
        except CloudRestError as exc:
            completion.fail(exc)
            return
        except Exception as exc:  # noqa: BLE001
            logger.exception("unexpected failure dispatching %s %s", request.method, request.url)
            completion.fail(CloudRestError(f"{type(exc).__name__}: {exc}"))
            return
        completion.succeed(value)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        if self._owns_client:
            self.http_client.close()

    def __enter__(self) -> RestDispatcher:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = [
    "DeliveryContext",
    "ImmediateDelivery",
    "PreparedRequest",
    "QueueDelivery",
    "RestDispatcher",
    "SerialDelivery",
    "VERSION_PARAM",
    "construct_request",
]
