"""Pull a JSON object out of free-form LLM output."""

from __future__ import annotations

import json

from text_analyzer.errors import ResponseDecodeError


def extract_json_object(text: str) -> dict:
    """Decode the first JSON object in ``text``.

    Tries in order:
    1. Direct json.loads on the full text
    2. Strip Markdown code fence markers and parse
    3. First '{' to last '}'

    Raises ResponseDecodeError if none of these yields a JSON object.
    """
    text = (text or "").strip()
    if not text:
        raise ResponseDecodeError("Model returned empty output")

    candidates = [text]
    stripped = _strip_code_fences(text)
    if stripped != text:
        candidates.append(stripped)
    braces = _brace_span(stripped)
    if braces is not None:
        candidates.append(braces)

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    raise ResponseDecodeError(f"Could not extract a JSON object from text: {text[:200]}")


def _strip_code_fences(text: str) -> str:
    lines = text.split("\n")

    # Leading prose before the fence ("Here is the analysis:")
    for idx, line in enumerate(lines):
        if line.strip().startswith("```"):
            lines = lines[idx + 1 :]
            break
    else:
        return text

    for idx, line in enumerate(lines):
        if line.strip().startswith("```"):
            lines = lines[:idx]
            break

    return "\n".join(lines).strip()


def _brace_span(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start : end + 1]
    return None
