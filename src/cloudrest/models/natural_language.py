# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Natural Language Understanding request and result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .common import drop_none, list_of, optional_float, optional_int, optional_str, require_mapping


@dataclass
class Features:
    """
    Analysis features to request. Each value is the feature's options object;
    pass `{}` to enable a feature with service defaults.
    """

    categories: dict[str, Any] | None = None
    concepts: dict[str, Any] | None = None
    emotion: dict[str, Any] | None = None
    entities: dict[str, Any] | None = None
    keywords: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    relations: dict[str, Any] | None = None
    semantic_roles: dict[str, Any] | None = None
    sentiment: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return drop_none(
            {
                "categories": self.categories,
                "concepts": self.concepts,
                "emotion": self.emotion,
                "entities": self.entities,
                "keywords": self.keywords,
                "metadata": self.metadata,
                "relations": self.relations,
                "semantic_roles": self.semantic_roles,
                "sentiment": self.sentiment,
            }
        )


@dataclass
class AnalyzeParameters:
    """Body of an analyze call: `features` plus exactly one of `text`, `html` or `url`."""

    features: Features
    text: str | None = None
    html: str | None = None
    url: str | None = None
    clean: bool | None = None
    xpath: str | None = None
    fallback_to_raw: bool | None = None
    return_analyzed_text: bool | None = None
    language: str | None = None
    limit_text_characters: int | None = None

    def __post_init__(self) -> None:
        sources = [value for value in (self.text, self.html, self.url) if value is not None]
        if len(sources) != 1:
            raise ValueError("exactly one of text, html or url is required")

    def to_dict(self) -> dict[str, Any]:
        return drop_none(
            {
                "features": self.features.to_dict(),
                "text": self.text,
                "html": self.html,
                "url": self.url,
                "clean": self.clean,
                "xpath": self.xpath,
                "fallback_to_raw": self.fallback_to_raw,
                "return_analyzed_text": self.return_analyzed_text,
                "language": self.language,
                "limit_text_characters": self.limit_text_characters,
            }
        )


@dataclass(frozen=True)
class KeywordsResult:
    text: str
    relevance: float | None = None
    count: int | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> KeywordsResult:
        data = require_mapping(data, "keyword")
        return cls(text=str(data["text"]), relevance=optional_float(data, "relevance"), count=optional_int(data, "count"))


@dataclass(frozen=True)
class EntitiesResult:
    type: str
    text: str
    relevance: float | None = None
    count: int | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> EntitiesResult:
        data = require_mapping(data, "entity")
        return cls(
            type=str(data["type"]),
            text=str(data["text"]),
            relevance=optional_float(data, "relevance"),
            count=optional_int(data, "count"),
        )


@dataclass(frozen=True)
class CategoriesResult:
    label: str
    score: float | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> CategoriesResult:
        data = require_mapping(data, "category")
        return cls(label=str(data["label"]), score=optional_float(data, "score"))


@dataclass(frozen=True)
class AnalysisResults:
    language: str | None = None
    analyzed_text: str | None = None
    retrieved_url: str | None = None
    keywords: list[KeywordsResult] = field(default_factory=list)
    entities: list[EntitiesResult] = field(default_factory=list)
    categories: list[CategoriesResult] = field(default_factory=list)
    sentiment: dict[str, Any] | None = None
    emotion: dict[str, Any] | None = None
    usage: dict[str, Any] | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_mapping(cls, data: Any) -> AnalysisResults:
        data = require_mapping(data, "analysis results")
        sentiment = data.get("sentiment")
        emotion = data.get("emotion")
        usage = data.get("usage")
        return cls(
            language=optional_str(data, "language"),
            analyzed_text=optional_str(data, "analyzed_text"),
            retrieved_url=optional_str(data, "retrieved_url"),
            keywords=list_of(KeywordsResult.from_mapping, data.get("keywords"), "keywords"),
            entities=list_of(EntitiesResult.from_mapping, data.get("entities"), "entities"),
            categories=list_of(CategoriesResult.from_mapping, data.get("categories"), "categories"),
            sentiment=dict(sentiment) if isinstance(sentiment, dict) else None,
            emotion=dict(emotion) if isinstance(emotion, dict) else None,
            usage=dict(usage) if isinstance(usage, dict) else None,
            raw=dict(data),
        )


@dataclass(frozen=True)
class Model:
    model_id: str
    status: str | None = None
    language: str | None = None
    description: str | None = None
    workspace_id: str | None = None
    version: str | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> Model:
        data = require_mapping(data, "model")
        return cls(
            model_id=str(data["model_id"]),
            status=optional_str(data, "status"),
            language=optional_str(data, "language"),
            description=optional_str(data, "description"),
            workspace_id=optional_str(data, "workspace_id"),
            version=optional_str(data, "version"),
        )


@dataclass(frozen=True)
class ListModelsResults:
    models: list[Model] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> ListModelsResults:
        data = require_mapping(data, "model list")
        return cls(models=list_of(Model.from_mapping, data.get("models"), "models"))


@dataclass(frozen=True)
class DeleteModelResults:
    deleted: str | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> DeleteModelResults:
        data = require_mapping(data, "delete result")
        return cls(deleted=optional_str(data, "deleted"))
