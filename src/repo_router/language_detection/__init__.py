"""Language detection module for repo-router."""

from .models import (
    ClassificationResult,
    DetectionMethod,
    ExtensionCount,
    LanguageTag,
    MarkerFile,
)
from .classifier import RepositoryClassifier, classify

__all__ = [
    "RepositoryClassifier",
    "classify",
    "ClassificationResult",
    "DetectionMethod",
    "ExtensionCount",
    "LanguageTag",
    "MarkerFile",
]
