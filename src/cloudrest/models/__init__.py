# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for cloudrest service payloads."""

from .discovery import (
    Collection,
    DeleteResponse,
    DocumentAccepted,
    DocumentStatus,
    Environment,
    EnvironmentRequest,
    ListCollectionsResponse,
    ListEnvironmentsResponse,
    Notice,
)
from .natural_language import (
    AnalysisResults,
    AnalyzeParameters,
    DeleteModelResults,
    Features,
    ListModelsResults,
    Model,
)
from .translator import (
    DeleteModelResult,
    IdentifiableLanguages,
    IdentifiedLanguages,
    TranslateRequest,
    TranslationModel,
    TranslationModels,
    TranslationResult,
)
from .visual_recognition import ClassifiedImage, ClassifiedImages, Classifier, Classifiers

__all__ = [
    "AnalysisResults",
    "AnalyzeParameters",
    "ClassifiedImage",
    "ClassifiedImages",
    "Classifier",
    "Classifiers",
    "Collection",
    "DeleteModelResult",
    "DeleteModelResults",
    "DeleteResponse",
    "DocumentAccepted",
    "DocumentStatus",
    "Environment",
    "EnvironmentRequest",
    "Features",
    "IdentifiableLanguages",
    "IdentifiedLanguages",
    "ListCollectionsResponse",
    "ListEnvironmentsResponse",
    "ListModelsResults",
    "Model",
    "Notice",
    "TranslateRequest",
    "TranslationModel",
    "TranslationModels",
    "TranslationResult",
]
