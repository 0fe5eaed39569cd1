"""Heuristic analysis used when the model's answer cannot be decoded."""

from __future__ import annotations

import math
import re
from typing import Callable

from text_analyzer.models.analysis import (
    AnalysisResult,
    ReadabilityLevel,
    ReadabilityScore,
    Suggestion,
)
from text_analyzer.utils.ids import new_id

SENTENCE_BREAK = re.compile(r"[.!?]+")

EXCERPT_CHARS = 50
SUMMARY_CHARS = 200


def count_words(text: str) -> int:
    return len(text.split())


def count_sentences(text: str) -> int:
    """Non-blank segments between runs of sentence punctuation, at least 1."""
    segments = [s for s in SENTENCE_BREAK.split(text) if s.strip()]
    return max(len(segments), 1)


def readability_level(avg_words: float) -> ReadabilityLevel:
    if avg_words < 15:
        return "easy"
    if avg_words < 25:
        return "medium"
    return "difficult"


def readability_score(avg_words: float) -> int:
    # Deliberately a different threshold from readability_level.
    return 80 if avg_words < 20 else 60


def truncate(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


class FallbackAnalyzer:
    """Builds an always-valid AnalysisResult from the source text alone."""

    def __init__(self, id_factory: Callable[[], str] = new_id):
        self.id_factory = id_factory

    def analyze(self, content: str, raw_text: str) -> AnalysisResult:
        avg_words = count_words(content) / count_sentences(content)

        return AnalysisResult(
            suggestions=[
                Suggestion(
                    id=self.id_factory(),
                    kind="style",
                    priority="medium",
                    message="AI analysis completed but response format was unexpected",
                    original_text=content[:EXCERPT_CHARS] + "...",
                    suggested_text="Please review the AI response manually",
                    reason="The AI provided feedback but in an unexpected format",
                )
            ],
            semantic_terms=[],
            readability_score=ReadabilityScore(
                score=readability_score(avg_words),
                level=readability_level(avg_words),
                factors=[f"Average sentence length: {math.floor(avg_words + 0.5)} words"],
            ),
            summary=truncate(raw_text or "", SUMMARY_CHARS),
        )
