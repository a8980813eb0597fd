"""Utility to extract a JSON object from LLM responses."""

from __future__ import annotations

import json

from elevate_cv.errors import MalformedResponse


def extract_json(text: str) -> dict:
    """Extract a JSON object from an LLM response, handling ```json blocks.

    Tries in order:
    1. Direct json.loads on the full text
    2. Strip fenced code block markers and parse
    3. Find first '{' to last '}' and parse

    Truncated JSON is never repaired: a partial object would be mistaken for
    a complete answer.

    Raises:
        MalformedResponse: no JSON object could be parsed.
    """
    if not isinstance(text, str) or not text.strip():
        raise MalformedResponse("Empty response from the AI service")
    text = text.strip()

    candidates = [text]
    stripped = _strip_code_fences(text)
    if stripped != text:
        candidates.append(stripped)
    braced = _slice_braces(stripped)
    if braced is not None:
        candidates.append(braced)

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
        raise MalformedResponse(
            f"Expected a JSON object, got {type(data).__name__}"
        )

    raise MalformedResponse(f"Could not extract JSON from text: {text[:200]}...")


def _strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers from text."""
    lines = text.split("\n")

    if lines and lines[0].strip().startswith("```"):
        lines = lines[1:]

    while lines and lines[-1].strip() in ("```", ""):
        lines = lines[:-1]

    return "\n".join(lines).strip()


def _slice_braces(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start : end + 1]
    return None
