# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Visual Recognition result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .common import list_of, optional_float, optional_str, require_mapping


@dataclass(frozen=True)
class ClassResult:
    class_name: str
    score: float | None = None
    type_hierarchy: str | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> ClassResult:
        data = require_mapping(data, "class result")
        return cls(
            class_name=str(data["class"]),
            score=optional_float(data, "score"),
            type_hierarchy=optional_str(data, "type_hierarchy"),
        )


@dataclass(frozen=True)
class ClassifierResult:
    name: str
    classifier_id: str
    classes: list[ClassResult] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> ClassifierResult:
        data = require_mapping(data, "classifier result")
        return cls(
            name=str(data["name"]),
            classifier_id=str(data["classifier_id"]),
            classes=list_of(ClassResult.from_mapping, data.get("classes"), "classes"),
        )


@dataclass(frozen=True)
class ClassifiedImage:
    classifiers: list[ClassifierResult] = field(default_factory=list)
    image: str | None = None
    source_url: str | None = None
    resolved_url: str | None = None
    error: dict[str, Any] | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> ClassifiedImage:
        data = require_mapping(data, "classified image")
        error = data.get("error")
        return cls(
            classifiers=list_of(ClassifierResult.from_mapping, data.get("classifiers"), "classifiers"),
            image=optional_str(data, "image"),
            source_url=optional_str(data, "source_url"),
            resolved_url=optional_str(data, "resolved_url"),
            error=dict(error) if isinstance(error, dict) else None,
        )

    def class_names(self) -> list[str]:
        """Class labels from every classifier, in response order."""
        return [result.class_name for classifier in self.classifiers for result in classifier.classes]


@dataclass(frozen=True)
class ClassifiedImages:
    images: list[ClassifiedImage] = field(default_factory=list)
    images_processed: int | None = None
    custom_classes: int | None = None
    warnings: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> ClassifiedImages:
        data = require_mapping(data, "classify response")
        processed = data.get("images_processed")
        custom = data.get("custom_classes")
        return cls(
            images=list_of(ClassifiedImage.from_mapping, data.get("images"), "images"),
            images_processed=None if processed is None else int(processed),
            custom_classes=None if custom is None else int(custom),
            warnings=list_of(lambda w: dict(require_mapping(w, "warning")), data.get("warnings"), "warnings"),
        )

    def top_class(self) -> str | None:
        """First class label of the first image, the label a caller usually displays."""
        for image in self.images:
            names = image.class_names()
            if names:
                return names[0]
        return None


@dataclass(frozen=True)
class Classifier:
    classifier_id: str
    name: str
    owner: str | None = None
    status: str | None = None
    explanation: str | None = None
    created: str | None = None
    classes: list[str] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> Classifier:
        data = require_mapping(data, "classifier")
        return cls(
            classifier_id=str(data["classifier_id"]),
            name=str(data["name"]),
            owner=optional_str(data, "owner"),
            status=optional_str(data, "status"),
            explanation=optional_str(data, "explanation"),
            created=optional_str(data, "created"),
            classes=list_of(lambda c: str(require_mapping(c, "class")["class"]), data.get("classes"), "classes"),
        )


@dataclass(frozen=True)
class Classifiers:
    classifiers: list[Classifier] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> Classifiers:
        data = require_mapping(data, "classifier list")
        return cls(classifiers=list_of(Classifier.from_mapping, data["classifiers"], "classifiers"))
