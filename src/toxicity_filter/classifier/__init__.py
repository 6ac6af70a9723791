"""
Toxicity classifier abstraction and implementations.

Components:
- BaseToxicityClassifier: Abstract base class consumed by the moderator
- HTTPToxicityClassifier: Client for a remote model server
- UnloadedClassifier: Stand-in when no model is configured
- prediction_from_probabilities: index-ordered vector -> ToxicityPrediction
- exceptions: classifier-specific exceptions
"""

from toxicity_filter.classifier.base_classifier import (
    BaseToxicityClassifier,
    prediction_from_probabilities,
)
from toxicity_filter.classifier.exceptions import (
    ClassifierConnectionError,
    ClassifierError,
    ClassifierInvalidOutputError,
    ClassifierTimeoutError,
    ClassifierUnavailableError,
)
from toxicity_filter.classifier.http_classifier import HTTPToxicityClassifier
from toxicity_filter.classifier.unloaded_classifier import UnloadedClassifier

__all__ = [
    "BaseToxicityClassifier",
    "HTTPToxicityClassifier",
    "UnloadedClassifier",
    "prediction_from_probabilities",
    "ClassifierError",
    "ClassifierUnavailableError",
    "ClassifierInvalidOutputError",
    "ClassifierConnectionError",
    "ClassifierTimeoutError",
]
