"""Data models for provider dispatch and analysis results."""

from text_analyzer.models.analysis import (
    AnalysisResult,
    ReadabilityScore,
    SemanticTerm,
    Suggestion,
)
from text_analyzer.models.provider import PROVIDER_KINDS, ProviderConfig, ProviderTuning

__all__ = [
    "AnalysisResult",
    "PROVIDER_KINDS",
    "ProviderConfig",
    "ProviderTuning",
    "ReadabilityScore",
    "SemanticTerm",
    "Suggestion",
]
