"""
Helpers for pulling structured data out of free-text model replies.

The model is asked for JSON but often wraps it in a markdown fence, adds a
sentence before or after it, or ignores the instruction entirely. Callers try
the layered extractors here and decide for themselves what to do when all of
them fail (placeholder object, heuristic extraction, or an error).
"""
from __future__ import annotations

import json
import re
from typing import Any, List, Optional

FENCED_JSON_RE = re.compile(r"```json([\s\S]*?)```")
OBJECT_RE = re.compile(r"\{[\s\S]*\}")
ARRAY_RE = re.compile(r"\[[\s\S]*\]")
FENCE_MARKERS_RE = re.compile(r"```json|```")

BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
ITALIC_RE = re.compile(r"\*(.*?)\*")
STEP_RE = re.compile(r"^\d+\.")
STEP_PREFIX_RE = re.compile(r"^\d+\.\s*")


class ResponseParseError(ValueError):
    """No usable JSON could be extracted from a model reply."""


def find_json_block(text: str) -> Optional[str]:
    """
    Return the most likely JSON span in `text`, or None.

    Order: fenced ```json block, greedy {...}, greedy [...].
    """
    if not text:
        return None
    for pattern in (FENCED_JSON_RE, OBJECT_RE, ARRAY_RE):
        match = pattern.search(text)
        if match:
            return FENCE_MARKERS_RE.sub("", match.group(0)).strip()
    return None


def parse_json_block(text: str, allow_whole_text: bool = False) -> Any:
    block = find_json_block(text)
    if block is None:
        if not allow_whole_text:
            raise ResponseParseError("No JSON block found in model response")
        block = (text or "").strip()
    try:
        return json.loads(block)
    except (json.JSONDecodeError, TypeError) as e:
        raise ResponseParseError(f"Invalid JSON in model response: {e}") from e


def slice_json_object(text: str) -> Any:
    """Parse the substring between the first '{' and the last '}'."""
    text = text or ""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise ResponseParseError("Could not find valid JSON in the response")
    try:
        return json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Invalid JSON in model response: {e}") from e


def beautify_plain_text(text: str) -> str:
    # bold before italic
    clean = BOLD_RE.sub(r"\1", text or "")
    return ITALIC_RE.sub(r"\1", clean)


def numbered_steps(text: str) -> List[str]:
    steps = []
    for line in (text or "").split("\n"):
        stripped = line.strip()
        if STEP_RE.match(stripped):
            steps.append(STEP_PREFIX_RE.sub("", stripped).strip())
    return steps
