"""
Pydantic data models for the toxicity filter.

Includes:
- Enums (IssueType, AnalysisLayer, ModerationLevel, ReasonCategory, PipelineMode, ToxicityLabel)
- Result models (Issue, ModerationReason, ModerationResult)
- ModerationConfig with named presets
- Classifier models (EncodedInput, ToxicityPrediction)
"""

from toxicity_filter.models.enums import (
    AnalysisLayer,
    IssueType,
    ModerationLevel,
    PipelineMode,
    ReasonCategory,
    ToxicityLabel,
)
from toxicity_filter.models.moderation_models import (
    Issue,
    ModerationReason,
    ModerationResult,
)
from toxicity_filter.models.config_models import ModerationConfig
from toxicity_filter.models.classifier_models import EncodedInput, ToxicityPrediction

__all__ = [
    # Enums
    "AnalysisLayer",
    "IssueType",
    "ModerationLevel",
    "PipelineMode",
    "ReasonCategory",
    "ToxicityLabel",
    # Result models
    "Issue",
    "ModerationReason",
    "ModerationResult",
    # Configuration
    "ModerationConfig",
    # Classifier models
    "EncodedInput",
    "ToxicityPrediction",
]
