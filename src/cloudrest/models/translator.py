# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Language Translator request and result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .common import drop_none, list_of, optional_str, require_mapping


@dataclass
class TranslateRequest:
    """Text to translate plus either a model ID or a source/target language pair."""

    text: list[str]
    model_id: str | None = None
    source: str | None = None
    target: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.text, str):
            self.text = [self.text]
        if self.model_id is None and self.target is None:
            raise ValueError("either model_id or target is required")

    def to_dict(self) -> dict[str, Any]:
        return drop_none({"text": list(self.text), "model_id": self.model_id, "source": self.source, "target": self.target})


@dataclass(frozen=True)
class Translation:
    translation: str

    @classmethod
    def from_mapping(cls, data: Any) -> Translation:
        data = require_mapping(data, "translation")
        return cls(translation=str(data["translation"]))


@dataclass(frozen=True)
class TranslationResult:
    word_count: int
    character_count: int
    translations: list[Translation] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> TranslationResult:
        data = require_mapping(data, "translation result")
        return cls(
            word_count=int(data["word_count"]),
            character_count=int(data["character_count"]),
            translations=list_of(Translation.from_mapping, data["translations"], "translations"),
        )


@dataclass(frozen=True)
class IdentifiableLanguage:
    language: str
    name: str

    @classmethod
    def from_mapping(cls, data: Any) -> IdentifiableLanguage:
        data = require_mapping(data, "identifiable language")
        return cls(language=str(data["language"]), name=str(data["name"]))


@dataclass(frozen=True)
class IdentifiableLanguages:
    languages: list[IdentifiableLanguage] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> IdentifiableLanguages:
        data = require_mapping(data, "identifiable languages")
        return cls(languages=list_of(IdentifiableLanguage.from_mapping, data["languages"], "languages"))


@dataclass(frozen=True)
class IdentifiedLanguage:
    language: str
    confidence: float

    @classmethod
    def from_mapping(cls, data: Any) -> IdentifiedLanguage:
        data = require_mapping(data, "identified language")
        return cls(language=str(data["language"]), confidence=float(data["confidence"]))


@dataclass(frozen=True)
class IdentifiedLanguages:
    languages: list[IdentifiedLanguage] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> IdentifiedLanguages:
        data = require_mapping(data, "identified languages")
        return cls(languages=list_of(IdentifiedLanguage.from_mapping, data["languages"], "languages"))

    def best(self) -> IdentifiedLanguage | None:
        return max(self.languages, key=lambda lang: lang.confidence, default=None)


@dataclass(frozen=True)
class TranslationModel:
    model_id: str
    name: str | None = None
    source: str | None = None
    target: str | None = None
    base_model_id: str | None = None
    domain: str | None = None
    customizable: bool | None = None
    default_model: bool | None = None
    owner: str | None = None
    status: str | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> TranslationModel:
        data = require_mapping(data, "translation model")
        customizable = data.get("customizable")
        default_model = data.get("default_model")
        return cls(
            model_id=str(data["model_id"]),
            name=optional_str(data, "name"),
            source=optional_str(data, "source"),
            target=optional_str(data, "target"),
            base_model_id=optional_str(data, "base_model_id"),
            domain=optional_str(data, "domain"),
            customizable=customizable if isinstance(customizable, bool) else None,
            default_model=default_model if isinstance(default_model, bool) else None,
            owner=optional_str(data, "owner"),
            status=optional_str(data, "status"),
        )


@dataclass(frozen=True)
class TranslationModels:
    models: list[TranslationModel] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> TranslationModels:
        data = require_mapping(data, "translation models")
        return cls(models=list_of(TranslationModel.from_mapping, data["models"], "models"))


@dataclass(frozen=True)
class DeleteModelResult:
    status: str

    @classmethod
    def from_mapping(cls, data: Any) -> DeleteModelResult:
        data = require_mapping(data, "delete result")
        return cls(status=str(data["status"]))


__all__ = [
    "DeleteModelResult",
    "IdentifiableLanguage",
    "IdentifiableLanguages",
    "IdentifiedLanguage",
    "IdentifiedLanguages",
    "TranslateRequest",
    "Translation",
    "TranslationModel",
    "TranslationModels",
    "TranslationResult",
]
