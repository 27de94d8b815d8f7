# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Natural Language Understanding v1 client."""

from __future__ import annotations

from concurrent.futures import Future

from ..endpoints import EndpointDescriptor, JsonBody
from ..models.natural_language import AnalysisResults, AnalyzeParameters, DeleteModelResults, ListModelsResults
from ..service import ServiceClient


class NaturalLanguageUnderstanding(ServiceClient):
    default_service_url = "https://gateway.watsonplatform.net/natural-language-understanding/api"
    domain = "com.ibm.watson.developer-cloud.NaturalLanguageUnderstandingV1"

    def analyze(self, parameters: AnalyzeParameters, *, on_success=None, on_failure=None, headers=None) -> Future:
        descriptor = EndpointDescriptor(
            "POST",
            "/v1/analyze",
            body=JsonBody(parameters),
            decoder=AnalysisResults.from_mapping,
        )
        return self.call(descriptor, on_success, on_failure, headers=headers)

    def list_models(self, *, on_success=None, on_failure=None, headers=None) -> Future:
        descriptor = EndpointDescriptor("GET", "/v1/models", decoder=ListModelsResults.from_mapping)
        return self.call(descriptor, on_success, on_failure, headers=headers)

    def delete_model(self, model_id: str, *, on_success=None, on_failure=None, headers=None) -> Future:
        descriptor = EndpointDescriptor(
            "DELETE",
            "/v1/models/{model_id}",
            path_params={"model_id": model_id},
            decoder=DeleteModelResults.from_mapping,
        )
        return self.call(descriptor, on_success, on_failure, headers=headers)
