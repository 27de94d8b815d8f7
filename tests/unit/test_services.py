# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from cloudrest.errors import EncodingError, ServiceError
from cloudrest.http.adapters import StubHttpClient
from cloudrest.http.models import HttpResponse
from cloudrest.models.natural_language import AnalyzeParameters, Features
from cloudrest.models.translator import TranslateRequest
from cloudrest.services import Discovery, LanguageTranslator, NaturalLanguageUnderstanding, VisualRecognition
from cloudrest.services.discovery import ENDPOINTS

VERSION = "2018-11-12"


def json_response(status: int, payload) -> HttpResponse:
    return HttpResponse(ok=True, status_code=status, content=json.dumps(payload).encode())


def build(service_cls, stub: StubHttpClient):
    return service_cls(VERSION, username="user", password="pass", http_client=stub)


CLASSIFY_RESPONSE = {
    "images_processed": 1,
    "custom_classes": 0,
    "images": [
        {
            "image": "image.jpg",
            "classifiers": [
                {
                    "name": "default",
                    "classifier_id": "default",
                    "classes": [
                        {"class": "banana", "score": 0.91, "type_hierarchy": "/fruit/banana"},
                        {"class": "yellow color", "score": 0.8},
                    ],
                }
            ],
        }
    ],
}


def test_visual_recognition_classify_uploads_bytes_with_parameters():
    stub = StubHttpClient()
    url = VisualRecognition.default_service_url + "/v3/classify"
    stub.add(url, json_response(200, CLASSIFY_RESPONSE), method="POST")

    with build(VisualRecognition, stub) as service:
        result = service.classify(images_file=b"\xff\xd8raw", threshold=0.6, accept_language="es").result(timeout=5)

    assert result.images_processed == 1
    assert result.top_class() == "banana"
    assert result.images[0].class_names() == ["banana", "yellow color"]
    assert result.images[0].classifiers[0].classes[0].type_hierarchy == "/fruit/banana"

    sent = stub.requests[0]
    assert sent.params == (("version", VERSION),)
    assert sent.headers["Accept-Language"] == "es"
    assert sent.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert b'name="images_file"; filename="image.jpg"' in sent.body
    assert b"\xff\xd8raw" in sent.body
    assert b'{"threshold": 0.6}' in sent.body


def test_visual_recognition_classify_url_sends_parameters_only():
    stub = StubHttpClient()
    stub.add(VisualRecognition.default_service_url + "/v3/classify", json_response(200, CLASSIFY_RESPONSE))

    with build(VisualRecognition, stub) as service:
        service.classify(url="https://example.test/fruit.jpg").result(timeout=5)

    body = stub.requests[0].body
    assert b"images_file" not in body
    assert b'"url": "https://example.test/fruit.jpg"' in body


def test_visual_recognition_missing_file_fails_without_request(tmp_path):
    stub = StubHttpClient()
    failures = []
    with build(VisualRecognition, stub) as service:
        outcome = service.classify(images_file=tmp_path / "nope.jpg", on_failure=failures.append).result(timeout=5)

    assert isinstance(outcome, EncodingError)
    assert failures == [outcome]
    assert stub.requests == []


def test_visual_recognition_nested_error_body():
    stub = StubHttpClient()
    stub.add(
        VisualRecognition.default_service_url + "/v3/classifiers/dogs_1",
        json_response(404, {"error": {"code": 404, "description": "Classifier not found"}}),
    )
    with build(VisualRecognition, stub) as service:
        error = service.get_classifier("dogs_1").result(timeout=5)

    assert isinstance(error, ServiceError)
    assert error.status_code == 404
    assert error.message == "Classifier not found"
    assert error.domain == VisualRecognition.domain


def test_visual_recognition_list_and_delete_classifiers():
    stub = StubHttpClient()
    base = VisualRecognition.default_service_url + "/v3/classifiers"
    stub.add(
        base,
        json_response(
            200,
            {"classifiers": [{"classifier_id": "dogs_1", "name": "dogs", "status": "ready", "classes": [{"class": "beagle"}]}]},
        ),
    )
    stub.add(base + "/dogs_1", HttpResponse(ok=True, status_code=200, content=b"{}"), method="DELETE")

    with build(VisualRecognition, stub) as service:
        listing = service.list_classifiers(verbose=True).result(timeout=5)
        deleted = service.delete_classifier("dogs_1").result(timeout=5)

    assert listing.classifiers[0].classes == ["beagle"]
    assert stub.requests[0].params == (("version", VERSION), ("verbose", "true"))
    assert deleted is None


def test_natural_language_analyze_posts_json():
    stub = StubHttpClient()
    url = NaturalLanguageUnderstanding.default_service_url + "/v1/analyze"
    stub.add(
        url,
        json_response(
            200,
            {
                "language": "en",
                "keywords": [{"text": "IBM", "relevance": 0.9, "count": 2}],
                "entities": [{"type": "Company", "text": "IBM"}],
                "usage": {"features": 2},
            },
        ),
        method="POST",
    )
    parameters = AnalyzeParameters(features=Features(keywords={"limit": 3}, entities={}), text="IBM is a company.")

    with build(NaturalLanguageUnderstanding, stub) as service:
        result = service.analyze(parameters).result(timeout=5)

    assert result.language == "en"
    assert result.keywords[0].text == "IBM"
    assert result.keywords[0].count == 2
    assert result.entities[0].type == "Company"
    assert result.raw["usage"] == {"features": 2}
    assert json.loads(stub.requests[0].body) == {
        "features": {"keywords": {"limit": 3}, "entities": {}},
        "text": "IBM is a company.",
    }


def test_natural_language_models_list_and_delete():
    stub = StubHttpClient()
    base = NaturalLanguageUnderstanding.default_service_url + "/v1/models"
    stub.add(base, json_response(200, {"models": [{"model_id": "m1", "status": "available"}]}))
    stub.add(base + "/m1", json_response(200, {"deleted": "m1"}), method="DELETE")

    with build(NaturalLanguageUnderstanding, stub) as service:
        models = service.list_models().result(timeout=5)
        deleted = service.delete_model("m1").result(timeout=5)

    assert models.models[0].model_id == "m1"
    assert deleted.deleted == "m1"


def test_analyze_parameters_require_one_source():
    with pytest.raises(ValueError):
        AnalyzeParameters(features=Features(), text="a", url="https://example.test")
    with pytest.raises(ValueError):
        AnalyzeParameters(features=Features())


def test_translator_translate_and_identify():
    stub = StubHttpClient()
    base = LanguageTranslator.default_service_url
    stub.add(
        base + "/v3/translate",
        json_response(200, {"word_count": 1, "character_count": 5, "translations": [{"translation": "Hola"}]}),
    )
    stub.add(
        base + "/v3/identify",
        json_response(200, {"languages": [{"language": "fr", "confidence": 0.1}, {"language": "en", "confidence": 0.9}]}),
    )

    with build(LanguageTranslator, stub) as service:
        translated = service.translate(TranslateRequest(text="Hello", source="en", target="es")).result(timeout=5)
        identified = service.identify("Hello").result(timeout=5)

    assert [t.translation for t in translated.translations] == ["Hola"]
    assert json.loads(stub.requests[0].body) == {"text": ["Hello"], "source": "en", "target": "es"}
    assert identified.best().language == "en"
    assert stub.requests[1].headers["Content-Type"] == "text/plain"
    assert stub.requests[1].body == b"Hello"


def test_translator_errors_carry_no_description():
    stub = StubHttpClient()
    stub.add(
        LanguageTranslator.default_service_url + "/v3/models/bogus",
        json_response(404, {"error": "Model not found", "description": "ignored"}),
    )
    with build(LanguageTranslator, stub) as service:
        error = service.get_model("bogus").result(timeout=5)

    assert isinstance(error, ServiceError)
    assert error.message == "Model not found"
    assert error.recovery_suggestion is None


def test_translator_list_and_create_models(tmp_path):
    glossary = tmp_path / "glossary.tmx"
    glossary.write_text("<tmx/>")
    stub = StubHttpClient()
    models_url = LanguageTranslator.default_service_url + "/v3/models"
    stub.add(models_url, json_response(200, {"models": [{"model_id": "en-es", "default_model": True}]}), method="GET")
    stub.add(models_url, json_response(200, {"model_id": "custom-1", "base_model_id": "en-es"}), method="POST")

    with build(LanguageTranslator, stub) as service:
        listing = service.list_models(source="en", default_models=False).result(timeout=5)
        created = service.create_model("en-es", name="mine", forced_glossary=glossary).result(timeout=5)

    assert listing.models[0].default_model is True
    assert stub.requests[0].params == (("version", VERSION), ("source", "en"), ("default", "false"))
    assert created.model_id == "custom-1"
    assert stub.requests[1].params == (("version", VERSION), ("base_model_id", "en-es"), ("name", "mine"))
    assert b'name="forced_glossary"; filename="glossary.tmx"' in stub.requests[1].body


def test_translate_request_needs_model_or_target():
    with pytest.raises(ValueError):
        TranslateRequest(text=["hi"])


def test_discovery_endpoints_table_binds_paths():
    descriptor = ENDPOINTS["get_document_status"].bind(environment_id="e1", collection_id="c1", document_id="d 1")
    assert descriptor.method == "GET"
    assert descriptor.path_params == {"environment_id": "e1", "collection_id": "c1", "document_id": "d 1"}
    with pytest.raises(TypeError):
        ENDPOINTS["get_environment"].bind(environment_id="e1", name="unexpected")


def test_discovery_environment_lifecycle():
    stub = StubHttpClient()
    base = Discovery.default_service_url + "/v1/environments"
    stub.add(base, json_response(201, {"environment_id": "e1", "name": "docs"}), method="POST")
    stub.add(base, json_response(200, {"environments": [{"environment_id": "e1"}]}), method="GET")
    stub.add(base + "/e1", json_response(200, {"environment_id": "e1", "size": "S"}), method="PUT")
    stub.add(base + "/e1", json_response(200, {"environment_id": "e1", "status": "deleted"}), method="DELETE")

    with build(Discovery, stub) as service:
        created = service.create_environment("docs", description="team docs").result(timeout=5)
        listing = service.list_environments(name="docs").result(timeout=5)
        updated = service.update_environment("e1", size="S").result(timeout=5)
        deleted = service.delete_environment("e1").result(timeout=5)

    assert created.environment_id == "e1"
    assert json.loads(stub.requests[0].body) == {"name": "docs", "description": "team docs"}
    assert stub.requests[1].params == (("version", VERSION), ("name", "docs"))
    assert [env.environment_id for env in listing.environments] == ["e1"]
    assert json.loads(stub.requests[2].body) == {"size": "S"}
    assert updated.size == "S"
    assert (deleted.resource_id, deleted.status) == ("e1", "deleted")


def test_discovery_add_document_and_status(tmp_path):
    document = tmp_path / "report.json"
    document.write_text('{"title": "Q3"}')
    stub = StubHttpClient()
    documents = Discovery.default_service_url + "/v1/environments/e1/collections/c1/documents"
    stub.add(documents, json_response(202, {"document_id": "d1", "status": "processing"}), method="POST")
    stub.add(
        documents + "/d1",
        json_response(200, {"document_id": "d1", "status": "available", "notices": [{"severity": "warning"}]}),
        method="GET",
    )
    successes = []

    with build(Discovery, stub) as service:
        accepted = service.add_document(
            "e1", "c1", file=document, metadata='{"owner": "ops"}', on_success=successes.append
        ).result(timeout=5)
        status = service.get_document_status("e1", "c1", "d1").result(timeout=5)

    assert successes == [accepted]
    assert accepted.document_id == "d1"
    body = stub.requests[0].body
    assert b'name="file"; filename="report.json"' in body
    assert b'name="metadata"' in body
    assert status.status == "available"
    assert status.notices[0].severity == "warning"


def test_discovery_lists_without_name_filter():
    stub = StubHttpClient()
    base = Discovery.default_service_url + "/v1/environments"
    stub.add(base, json_response(200, {"environments": [{"environment_id": "e1"}]}), method="GET")
    stub.add(base + "/e1/collections", json_response(200, {"collections": [{"collection_id": "c1"}]}), method="GET")
    failures = []

    with build(Discovery, stub) as service:
        environments = service.list_environments(on_failure=failures.append).result(timeout=5)
        collections = service.list_collections("e1", on_failure=failures.append).result(timeout=5)

    assert failures == []
    assert [env.environment_id for env in environments.environments] == ["e1"]
    assert [col.collection_id for col in collections.collections] == ["c1"]
    assert stub.requests[0].params == (("version", VERSION),)
    assert stub.requests[1].params == (("version", VERSION),)
