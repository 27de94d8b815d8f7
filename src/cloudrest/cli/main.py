# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""cloudrest CLI."""

from __future__ import annotations

import argparse
import dataclasses
import json
import os
import sys
from pathlib import Path
from typing import Any

from ..config import HttpSettings, load_http_settings
from ..errors import CloudRestError, ServiceError
from ..http import create_default_http_client
from ..log import setup_logging
from ..models.translator import TranslateRequest
from ..service import ServiceClient
from ..services import LanguageTranslator, VisualRecognition

DEFAULT_API_VERSION = "2018-11-12"
WAIT_TIMEOUT = 300.0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Call cloud recognition/translation services from the command line")
    parser.add_argument("--api-key", default=os.getenv("CLOUDREST_API_KEY"), help="IAM API key (exchanged for a bearer token)")
    parser.add_argument("--username", help="Basic auth username (use 'apikey' to pass an API key as the password)")
    parser.add_argument("--password", help="Basic auth password")
    parser.add_argument("--access-token", help="Pre-issued bearer token")
    parser.add_argument(
        "--version",
        dest="api_version",
        default=os.getenv("CLOUDREST_API_VERSION", DEFAULT_API_VERSION),
        help="API version date (YYYY-MM-DD)",
    )
    parser.add_argument("--service-url", help="Override the service base URL")
    parser.add_argument("--json", action="store_true", help="Output JSON instead of a short summary")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed endpoints)",
    )
    parser.add_argument("--log-level", help="Logging level (default from CLOUDREST_LOG_LEVEL)")

    sub = parser.add_subparsers(dest="command", required=True)
    classify = sub.add_parser("classify", help="Classify an image file or image URL")
    classify.add_argument("image", help="Path to an image file, or an http(s) URL")
    classify.add_argument("--threshold", type=float)

    identify = sub.add_parser("identify", help="Identify the language of a text")
    identify.add_argument("text")

    translate = sub.add_parser("translate", help="Translate text")
    translate.add_argument("text")
    translate.add_argument("--target", required=True)
    translate.add_argument("--source")
    return parser


def _credentials(args: argparse.Namespace) -> dict[str, str]:
    if args.access_token:
        return {"access_token": args.access_token}
    if args.username or args.password:
        return {"username": args.username or "", "password": args.password or ""}
    if args.api_key:
        return {"api_key": args.api_key}
    raise SystemExit("error: provide --api-key, --username/--password, or --access-token")


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {k: _to_jsonable(v) for k, v in dataclasses.asdict(value).items() if k != "raw"}
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    return value


def _summary(command: str, result: Any) -> str:
    if command == "classify":
        label = result.top_class()
        return f"Top class: {label}" if label else "No classes returned"
    if command == "identify":
        best = result.best()
        return f"Language: {best.language} ({best.confidence:.2f})" if best else "Language: unknown"
    if command == "translate":
        return "\n".join(t.translation for t in result.translations)
    return str(result)


def _describe_error(error: CloudRestError) -> str:
    if isinstance(error, ServiceError):
        parts = [f"HTTP {error.status_code}"]
        if error.message:
            parts.append(error.message)
        if error.recovery_suggestion:
            parts.append(f"({error.recovery_suggestion})")
        return " ".join(parts)
    return f"{type(error).__name__}: {error}"


def _issue(client: ServiceClient, args: argparse.Namespace):
    if args.command == "classify":
        if args.image.startswith(("http://", "https://")):
            return client.classify(url=args.image, threshold=args.threshold)
        return client.classify(images_file=Path(args.image), threshold=args.threshold)
    if args.command == "identify":
        return client.identify(args.text)
    return client.translate(TranslateRequest(text=[args.text], source=args.source, target=args.target))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    credentials = _credentials(args)

    settings: HttpSettings = load_http_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    http_client = create_default_http_client(settings)

    service_cls = VisualRecognition if args.command == "classify" else LanguageTranslator
    try:
        client = service_cls(
            args.api_version,
            service_url=args.service_url,
            http_client=http_client,
            **credentials,
        )
    except ValueError as exc:
        http_client.close()
        parser.error(str(exc))

    try:
        with client:
            outcome = _issue(client, args).result(timeout=WAIT_TIMEOUT)
    finally:
        http_client.close()

    if isinstance(outcome, CloudRestError):
        print(f"error: {_describe_error(outcome)}", file=sys.stderr)
        return 1

    if args.json:
        json.dump(_to_jsonable(outcome), sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
    else:
        print(_summary(args.command, outcome))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
