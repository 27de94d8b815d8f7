# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Visual Recognition v3 client."""

from __future__ import annotations

import json
from concurrent.futures import Future
from pathlib import Path

from ..endpoints import EndpointDescriptor, MultipartBody
from ..errors import ServiceError
from ..http.models import HttpResponse
from ..http.multipart import MultipartFormData
from ..models.visual_recognition import ClassifiedImages, Classifier, Classifiers
from ..responses import decode_service_error
from ..service import ServiceClient


class VisualRecognition(ServiceClient):
    default_service_url = "https://gateway.watsonplatform.net/visual-recognition/api"
    domain = "com.ibm.watson.developer-cloud.VisualRecognitionV3"

    def decode_error(self, response: HttpResponse) -> ServiceError:
        # Some errors nest the message as {"error": {"description": ..., "code": ...}}.
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            nested = payload["error"]
            message = nested.get("description") or nested.get("message")
            return ServiceError(
                int(response.status_code or 0),
                message if isinstance(message, str) else None,
                None,
                domain=self.domain,
            )
        return decode_service_error(response, domain=self.domain)

    def classify(
        self,
        *,
        images_file: str | Path | bytes | None = None,
        images_filename: str | None = None,
        url: str | None = None,
        threshold: float | None = None,
        owners: list[str] | None = None,
        classifier_ids: list[str] | None = None,
        accept_language: str | None = None,
        on_success=None,
        on_failure=None,
        headers: dict[str, str] | None = None,
    ) -> Future:
        """
        Classify an image file, an in-memory image, or a public image URL.

        `images_file` may be a path or raw bytes; raw bytes are uploaded as
        `images_filename` (default `image.jpg`).
        """
        form = MultipartFormData()
        if images_file is not None:
            if isinstance(images_file, (bytes, bytearray)):
                form.append(
                    bytes(images_file),
                    "images_file",
                    filename=images_filename or "image.jpg",
                    content_type="image/jpeg",
                )
            else:
                form.append_file(images_file, "images_file")
        parameters = {
            "url": url,
            "threshold": threshold,
            "owners": owners,
            "classifier_ids": classifier_ids,
        }
        parameters = {k: v for k, v in parameters.items() if v is not None}
        if parameters:
            form.append(json.dumps(parameters), "parameters", content_type="application/json")
        descriptor = EndpointDescriptor(
            "POST",
            "/v3/classify",
            headers={"Accept-Language": accept_language} if accept_language else {},
            body=MultipartBody(form),
            decoder=ClassifiedImages.from_mapping,
        )
        return self.call(descriptor, on_success, on_failure, headers=headers)

    def list_classifiers(self, *, verbose: bool | None = None, on_success=None, on_failure=None, headers=None) -> Future:
        descriptor = EndpointDescriptor(
            "GET",
            "/v3/classifiers",
            query={"verbose": verbose},
            decoder=Classifiers.from_mapping,
        )
        return self.call(descriptor, on_success, on_failure, headers=headers)

    def get_classifier(self, classifier_id: str, *, on_success=None, on_failure=None, headers=None) -> Future:
        descriptor = EndpointDescriptor(
            "GET",
            "/v3/classifiers/{classifier_id}",
            path_params={"classifier_id": classifier_id},
            decoder=Classifier.from_mapping,
        )
        return self.call(descriptor, on_success, on_failure, headers=headers)

    def delete_classifier(self, classifier_id: str, *, on_success=None, on_failure=None, headers=None) -> Future:
        descriptor = EndpointDescriptor(
            "DELETE",
            "/v3/classifiers/{classifier_id}",
            path_params={"classifier_id": classifier_id},
        )
        return self.call(descriptor, on_success, on_failure, headers=headers)
