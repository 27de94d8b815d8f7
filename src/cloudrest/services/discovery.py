# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Discovery v1 client (environments, collections and documents)."""

from __future__ import annotations

from concurrent.futures import Future
from pathlib import Path

from ..endpoints import EndpointTemplate, JsonBody, MultipartBody
from ..http.multipart import MultipartFormData
from ..models.discovery import (
    Collection,
    DeleteResponse,
    DocumentAccepted,
    DocumentStatus,
    Environment,
    EnvironmentRequest,
    ListCollectionsResponse,
    ListEnvironmentsResponse,
)
from ..service import ServiceClient

_ENVIRONMENT = "/v1/environments/{environment_id}"
_COLLECTION = _ENVIRONMENT + "/collections/{collection_id}"

ENDPOINTS: dict[str, EndpointTemplate] = {
    "create_environment": EndpointTemplate("POST", "/v1/environments", Environment.from_mapping),
    "list_environments": EndpointTemplate("GET", "/v1/environments", ListEnvironmentsResponse.from_mapping, ("name",)),
    "get_environment": EndpointTemplate("GET", _ENVIRONMENT, Environment.from_mapping),
    "update_environment": EndpointTemplate("PUT", _ENVIRONMENT, Environment.from_mapping),
    "delete_environment": EndpointTemplate("DELETE", _ENVIRONMENT, DeleteResponse.decoder("environment_id")),
    "list_collections": EndpointTemplate(
        "GET", _ENVIRONMENT + "/collections", ListCollectionsResponse.from_mapping, ("name",)
    ),
    "get_collection": EndpointTemplate("GET", _COLLECTION, Collection.from_mapping),
    "delete_collection": EndpointTemplate("DELETE", _COLLECTION, DeleteResponse.decoder("collection_id")),
    "add_document": EndpointTemplate("POST", _COLLECTION + "/documents", DocumentAccepted.from_mapping),
    "get_document_status": EndpointTemplate("GET", _COLLECTION + "/documents/{document_id}", DocumentStatus.from_mapping),
    "delete_document": EndpointTemplate(
        "DELETE", _COLLECTION + "/documents/{document_id}", DeleteResponse.decoder("document_id")
    ),
}


class Discovery(ServiceClient):
    default_service_url = "https://gateway.watsonplatform.net/discovery/api"
    domain = "com.ibm.watson.developer-cloud.DiscoveryV1"

    def _invoke(self, endpoint: str, /, *, body=None, on_success=None, on_failure=None, headers=None, **arguments) -> Future:
        descriptor = ENDPOINTS[endpoint].bind(body=body, **arguments)
        return self.call(descriptor, on_success, on_failure, headers=headers)

    def create_environment(self, name: str, *, description: str | None = None, size: str | None = None, **callbacks) -> Future:
        body = JsonBody(EnvironmentRequest(name=name, description=description, size=size))
        return self._invoke("create_environment", body=body, **callbacks)

    def list_environments(self, *, name: str | None = None, **callbacks) -> Future:
        return self._invoke("list_environments", name=name, **callbacks)

    def get_environment(self, environment_id: str, **callbacks) -> Future:
        return self._invoke("get_environment", environment_id=environment_id, **callbacks)

    def update_environment(
        self,
        environment_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        size: str | None = None,
        **callbacks,
    ) -> Future:
        body = JsonBody(EnvironmentRequest(name=name, description=description, size=size))
        return self._invoke("update_environment", environment_id=environment_id, body=body, **callbacks)

    def delete_environment(self, environment_id: str, **callbacks) -> Future:
        return self._invoke("delete_environment", environment_id=environment_id, **callbacks)

    def list_collections(self, environment_id: str, *, name: str | None = None, **callbacks) -> Future:
        return self._invoke("list_collections", environment_id=environment_id, name=name, **callbacks)

    def get_collection(self, environment_id: str, collection_id: str, **callbacks) -> Future:
        return self._invoke("get_collection", environment_id=environment_id, collection_id=collection_id, **callbacks)

    def delete_collection(self, environment_id: str, collection_id: str, **callbacks) -> Future:
        return self._invoke("delete_collection", environment_id=environment_id, collection_id=collection_id, **callbacks)

    def add_document(
        self,
        environment_id: str,
        collection_id: str,
        *,
        file: str | Path | None = None,
        metadata: str | None = None,
        file_content_type: str | None = None,
        **callbacks,
    ) -> Future:
        """Upload a document file and/or a JSON metadata string to a collection."""
        form = MultipartFormData()
        if file is not None:
            form.append_file(file, "file", content_type=file_content_type)
        if metadata is not None:
            form.append(metadata, "metadata")
        return self._invoke(
            "add_document",
            environment_id=environment_id,
            collection_id=collection_id,
            body=MultipartBody(form),
            **callbacks,
        )

    def get_document_status(self, environment_id: str, collection_id: str, document_id: str, **callbacks) -> Future:
        return self._invoke(
            "get_document_status",
            environment_id=environment_id,
            collection_id=collection_id,
            document_id=document_id,
            **callbacks,
        )

    def delete_document(self, environment_id: str, collection_id: str, document_id: str, **callbacks) -> Future:
        return self._invoke(
            "delete_document",
            environment_id=environment_id,
            collection_id=collection_id,
            document_id=document_id,
            **callbacks,
        )
