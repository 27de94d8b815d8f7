# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Service clients built on the generic dispatcher."""

from .discovery import Discovery
from .language_translator import LanguageTranslator
from .natural_language_understanding import NaturalLanguageUnderstanding
from .visual_recognition import VisualRecognition

__all__ = [
    "Discovery",
    "LanguageTranslator",
    "NaturalLanguageUnderstanding",
    "VisualRecognition",
]
