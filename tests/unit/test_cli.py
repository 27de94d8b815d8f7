# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from cloudrest.cli import main as cli_main
from cloudrest.http.adapters import StubHttpClient
from cloudrest.http.models import HttpResponse
from cloudrest.services import LanguageTranslator, VisualRecognition


def json_response(status: int, payload) -> HttpResponse:
    return HttpResponse(ok=True, status_code=status, content=json.dumps(payload).encode())


@pytest.fixture
def stub(monkeypatch):
    client = StubHttpClient()
    monkeypatch.setattr(cli_main, "create_default_http_client", lambda settings=None: client)
    monkeypatch.delenv("CLOUDREST_API_KEY", raising=False)
    monkeypatch.delenv("CLOUDREST_API_VERSION", raising=False)
    return client


def test_build_parser_defaults(monkeypatch):
    monkeypatch.delenv("CLOUDREST_API_VERSION", raising=False)
    args = cli_main.build_parser().parse_args(["translate", "hello", "--target", "es"])
    assert args.command == "translate"
    assert args.api_version == cli_main.DEFAULT_API_VERSION
    assert args.target == "es"
    assert args.source is None
    assert args.json is False


def test_identify_prints_best_language(stub, capsys):
    stub.add(
        LanguageTranslator.default_service_url + "/v3/identify",
        json_response(200, {"languages": [{"language": "en", "confidence": 0.95}, {"language": "de", "confidence": 0.01}]}),
    )
    code = cli_main.main(["--username", "u", "--password", "p", "identify", "hello there"])
    assert code == 0
    assert capsys.readouterr().out.strip() == "Language: en (0.95)"
    assert stub.closed is True


def test_translate_json_output(stub, capsys):
    stub.add(
        LanguageTranslator.default_service_url + "/v3/translate",
        json_response(200, {"word_count": 1, "character_count": 5, "translations": [{"translation": "Hola"}]}),
    )
    code = cli_main.main(["--access-token", "tok", "--json", "translate", "Hello", "--target", "es"])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["translations"] == [{"translation": "Hola"}]
    assert stub.requests[0].headers["Authorization"] == "Bearer tok"


def test_classify_url_prints_top_class(stub, capsys):
    stub.add(
        VisualRecognition.default_service_url + "/v3/classify",
        json_response(
            200,
            {"images": [{"classifiers": [{"name": "default", "classifier_id": "default", "classes": [{"class": "dog"}]}]}]},
        ),
    )
    code = cli_main.main(["--access-token", "tok", "classify", "https://example.test/dog.jpg", "--threshold", "0.5"])
    assert code == 0
    assert capsys.readouterr().out.strip() == "Top class: dog"


def test_service_error_returns_nonzero(stub, capsys):
    stub.add(
        LanguageTranslator.default_service_url + "/v3/identify",
        json_response(401, {"error": "Unauthorized"}),
    )
    code = cli_main.main(["--username", "u", "--password", "p", "identify", "hello"])
    captured = capsys.readouterr()
    assert code == 1
    assert "error: HTTP 401 Unauthorized" in captured.err


def test_missing_credentials_exits_before_opening_a_client(monkeypatch):
    opened = []
    monkeypatch.setattr(cli_main, "create_default_http_client", lambda settings=None: opened.append(settings))
    monkeypatch.delenv("CLOUDREST_API_KEY", raising=False)

    with pytest.raises(SystemExit):
        cli_main.main(["identify", "hello"])
    assert opened == []


def test_invalid_version_closes_client(stub):
    with pytest.raises(SystemExit):
        cli_main.main(["--access-token", "tok", "--version", "2018-13-45", "identify", "hello"])
    assert stub.closed is True
