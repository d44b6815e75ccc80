"""'Is it legal?': classify a described situation as VALID, VOID or VOIDABLE."""
from __future__ import annotations

import logging
from typing import Any, Dict

from .config import ANALYSIS_GOOGLE_MODEL
from .errors import INVALID_INPUT, MODEL_UNAVAILABLE, failure
from .models import ModelCallError, call_model_system_then_user
from .parsing import ResponseParseError, parse_json_block
from .prompts import LEGALITY_SYSTEM_PROMPT, build_legality_prompt

logger = logging.getLogger(__name__)

GENERIC_SUMMARY = "This assessment requires further legal analysis."

STATUS_SUMMARIES = {
    "VALID": "This situation appears to be legally valid according to Indian law.",
    "VOID": "This situation appears to be legally void according to Indian law.",
    "VOIDABLE": "This situation appears to be voidable under certain conditions according to Indian law.",
}


def placeholder_assessment(text: str) -> Dict[str, Any]:
    return {
        "status": "Unknown",
        "explanation": text,
        "simpleSummary": GENERIC_SUMMARY,
        "legalBasis": "Based on relevant Indian legal provisions",
        "examples": ["Similar case example would be shown here"],
        "nextSteps": ["Consult with a legal professional"],
    }


def parse_assessment(text: str) -> Dict[str, Any]:
    try:
        assessment = parse_json_block(text)
    except ResponseParseError as e:
        logger.warning("--- [Legality] could not parse model JSON: %s ---", e)
        return placeholder_assessment(text)
    if not isinstance(assessment, dict):
        return placeholder_assessment(text)

    if not assessment.get("simpleSummary"):
        status = str(assessment.get("status") or "").upper()
        assessment["simpleSummary"] = STATUS_SUMMARIES.get(status, GENERIC_SUMMARY)
    return assessment


def assess_legality(description: str) -> Dict[str, Any]:
    if not (description or "").strip():
        return failure(INVALID_INPUT, "Please describe the incident or situation")

    try:
        text = call_model_system_then_user(
            LEGALITY_SYSTEM_PROMPT,
            build_legality_prompt(description),
            model_name=ANALYSIS_GOOGLE_MODEL,
        )
    except ModelCallError:
        return failure(MODEL_UNAVAILABLE, "Failed to generate assessment. Please try again.")

    return {"success": True, "assessment": parse_assessment(text)}
