"""Decode model output into an AnalysisResult, falling back when it won't."""

from __future__ import annotations

import logging
from typing import Callable

from pydantic import ValidationError

from text_analyzer.analysis.fallback import FallbackAnalyzer
from text_analyzer.errors import ResponseDecodeError
from text_analyzer.models.analysis import AnalysisResult
from text_analyzer.utils.ids import new_id
from text_analyzer.utils.json_parser import extract_json_object

logger = logging.getLogger(__name__)

# Lists whose items carry ids that must be unique and non-empty.
ID_LISTS = ("suggestions", "semanticTerms", "semantic_terms")


class ResultParser:
    def __init__(
        self,
        fallback: FallbackAnalyzer | None = None,
        id_factory: Callable[[], str] = new_id,
    ):
        self.id_factory = id_factory
        self.fallback = fallback or FallbackAnalyzer(id_factory=id_factory)

    def parse(self, content: str, raw_text: str) -> AnalysisResult:
        """Return the decoded result, or the fallback analysis of ``content``.

        Never raises.
        """
        try:
            return self.decode(raw_text)
        except ResponseDecodeError as exc:
            logger.warning("Unexpected AI response format, using fallback analysis: %s", exc)
            return self.fallback.analyze(content, raw_text)

    def decode(self, raw_text: str) -> AnalysisResult:
        data = _drop_nulls(extract_json_object(raw_text))
        self._assign_ids(data)
        try:
            return AnalysisResult.model_validate(data)
        except ValidationError as exc:
            raise ResponseDecodeError(
                f"Response does not match the analysis schema ({exc.error_count()} errors)"
            ) from exc

    def _assign_ids(self, data: dict) -> None:
        items = [
            item
            for key in ID_LISTS
            if isinstance(data.get(key), list)
            for item in data[key]
            if isinstance(item, dict)
        ]

        taken: set[str] = set()
        missing: list[dict] = []
        for item in items:
            item_id = _normalize_id(item.get("id"))
            if item_id is None or item_id in taken:
                missing.append(item)
                continue
            item["id"] = item_id
            taken.add(item_id)

        for item in missing:
            item_id = self.id_factory()
            while item_id in taken:
                item_id = self.id_factory()
            item["id"] = item_id
            taken.add(item_id)

        if missing:
            logger.debug("Assigned %d missing ids", len(missing))


def _normalize_id(value: object) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value
    return None


def _drop_nulls(data: dict) -> dict:
    """Remove null-valued keys so model defaults apply.

    Required fields stay required: a null ``type`` or ``term`` becomes a
    missing field and still fails validation.
    """
    cleaned = {key: value for key, value in data.items() if value is not None}
    for key in (*ID_LISTS, "readabilityScore", "readability_score"):
        value = cleaned.get(key)
        if isinstance(value, dict):
            cleaned[key] = _drop_nulls(value)
        elif isinstance(value, list):
            cleaned[key] = [
                {k: v for k, v in item.items() if v is not None} if isinstance(item, dict) else item
                for item in value
            ]
    return cleaned
