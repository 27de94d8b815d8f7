# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
cloudrest package entrypoint.

This package provides a typed, versioned REST request dispatcher with pluggable
authentication, and service clients built from declarative endpoint descriptors.
HTTP behavior is abstracted behind an injectable client interface, and payloads
are modeled with typed dataclasses.
"""

from .auth import BasicAuthentication, IAMAccessToken, IAMAuthentication, get_auth_method
from .config import HttpSettings, ServiceConfig, load_http_settings
from .dispatcher import (
    ImmediateDelivery,
    PreparedRequest,
    QueueDelivery,
    RestDispatcher,
    SerialDelivery,
    construct_request,
)
from .endpoints import EndpointDescriptor, EndpointTemplate, JsonBody, MultipartBody, TextBody
from .errors import CloudRestError, DecodingError, EncodingError, ErrorCategory, ServiceError, TransportError
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    MultipartFormData,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .service import ServiceClient
from .services import Discovery, LanguageTranslator, NaturalLanguageUnderstanding, VisualRecognition
from .version import __version__

__all__ = [
    "BasicAuthentication",
    "CloudRestError",
    "DecodingError",
    "Discovery",
    "EncodingError",
    "EndpointDescriptor",
    "EndpointTemplate",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "IAMAccessToken",
    "IAMAuthentication",
    "ImmediateDelivery",
    "JsonBody",
    "LanguageTranslator",
    "MultipartBody",
    "MultipartFormData",
    "NaturalLanguageUnderstanding",
    "PreparedRequest",
    "QueueDelivery",
    "RestDispatcher",
    "SerialDelivery",
    "ServiceClient",
    "ServiceConfig",
    "ServiceError",
    "StubHttpClient",
    "TextBody",
    "TransportError",
    "VisualRecognition",
    "construct_request",
    "create_default_http_client",
    "get_auth_method",
    "load_http_settings",
    "setup_logging",
    "__version__",
]
