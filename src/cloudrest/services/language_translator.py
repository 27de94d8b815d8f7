# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Language Translator v3 client."""

from __future__ import annotations

from concurrent.futures import Future
from pathlib import Path

from ..endpoints import EndpointDescriptor, JsonBody, MultipartBody, TextBody
from ..http.multipart import MultipartFormData
from ..models.translator import (
    DeleteModelResult,
    IdentifiableLanguages,
    IdentifiedLanguages,
    TranslateRequest,
    TranslationModel,
    TranslationModels,
    TranslationResult,
)
from ..service import ServiceClient


class LanguageTranslator(ServiceClient):
    default_service_url = "https://gateway.watsonplatform.net/language-translator/api"
    domain = "com.ibm.watson.developer-cloud.LanguageTranslatorV3"
    # Translator error bodies only carry `error`.
    error_has_description = False

    def translate(self, request: TranslateRequest, *, on_success=None, on_failure=None, headers=None) -> Future:
        descriptor = EndpointDescriptor(
            "POST",
            "/v3/translate",
            body=JsonBody(request),
            decoder=TranslationResult.from_mapping,
        )
        return self.call(descriptor, on_success, on_failure, headers=headers)

    def list_identifiable_languages(self, *, on_success=None, on_failure=None, headers=None) -> Future:
        descriptor = EndpointDescriptor("GET", "/v3/identifiable_languages", decoder=IdentifiableLanguages.from_mapping)
        return self.call(descriptor, on_success, on_failure, headers=headers)

    def identify(self, text: str, *, on_success=None, on_failure=None, headers=None) -> Future:
        descriptor = EndpointDescriptor(
            "POST",
            "/v3/identify",
            body=TextBody(text),
            decoder=IdentifiedLanguages.from_mapping,
        )
        return self.call(descriptor, on_success, on_failure, headers=headers)

    def list_models(
        self,
        *,
        source: str | None = None,
        target: str | None = None,
        default_models: bool | None = None,
        on_success=None,
        on_failure=None,
        headers=None,
    ) -> Future:
        descriptor = EndpointDescriptor(
            "GET",
            "/v3/models",
            query={"source": source, "target": target, "default": default_models},
            decoder=TranslationModels.from_mapping,
        )
        return self.call(descriptor, on_success, on_failure, headers=headers)

    def create_model(
        self,
        base_model_id: str,
        *,
        name: str | None = None,
        forced_glossary: str | Path | None = None,
        parallel_corpus: str | Path | None = None,
        on_success=None,
        on_failure=None,
        headers=None,
    ) -> Future:
        """Customize a base model with a TMX forced glossary and/or a parallel corpus."""
        form = MultipartFormData()
        if forced_glossary is not None:
            form.append_file(forced_glossary, "forced_glossary")
        if parallel_corpus is not None:
            form.append_file(parallel_corpus, "parallel_corpus")
        descriptor = EndpointDescriptor(
            "POST",
            "/v3/models",
            query={"base_model_id": base_model_id, "name": name},
            body=MultipartBody(form),
            decoder=TranslationModel.from_mapping,
        )
        return self.call(descriptor, on_success, on_failure, headers=headers)

    def delete_model(self, model_id: str, *, on_success=None, on_failure=None, headers=None) -> Future:
        descriptor = EndpointDescriptor(
            "DELETE",
            "/v3/models/{model_id}",
            path_params={"model_id": model_id},
            decoder=DeleteModelResult.from_mapping,
        )
        return self.call(descriptor, on_success, on_failure, headers=headers)

    def get_model(self, model_id: str, *, on_success=None, on_failure=None, headers=None) -> Future:
        descriptor = EndpointDescriptor(
            "GET",
            "/v3/models/{model_id}",
            path_params={"model_id": model_id},
            decoder=TranslationModel.from_mapping,
        )
        return self.call(descriptor, on_success, on_failure, headers=headers)
