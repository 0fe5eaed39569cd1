"""Pydantic models for the normalized analysis result.

Field names are snake_case; the JSON the models exchange with LLMs and the UI
uses camelCase (``originalText``, ``semanticTerms`` ...). Suggestion ``kind``
travels as ``type`` on the wire.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SuggestionKind = Literal["grammar", "style", "clarity", "structure"]
Priority = Literal["low", "medium", "high"]
ReadabilityLevel = Literal["easy", "medium", "difficult"]

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class Suggestion(BaseModel):
    id: str
    kind: SuggestionKind = Field(alias="type")
    priority: Priority = "medium"
    message: str = ""
    original_text: str = ""
    suggested_text: str = ""
    reason: str = ""

    model_config = _WIRE_CONFIG


class SemanticTerm(BaseModel):
    id: str
    term: str
    category: str = ""
    importance: float = 0.0
    context: list[str] = []

    model_config = _WIRE_CONFIG


class ReadabilityScore(BaseModel):
    score: float
    level: ReadabilityLevel
    factors: list[str] = []

    model_config = _WIRE_CONFIG


class AnalysisResult(BaseModel):
    suggestions: list[Suggestion] = []
    semantic_terms: list[SemanticTerm] = []
    readability_score: ReadabilityScore
    summary: str = ""

    model_config = _WIRE_CONFIG

    def to_wire(self) -> dict:
        """Dump with the camelCase names the UI layer consumes."""
        return self.model_dump(by_alias=True)
