from __future__ import annotations

import logging
import re
from typing import Any, Dict

from .config import ANALYSIS_GOOGLE_MODEL
from .errors import INVALID_INPUT, MODEL_UNAVAILABLE, failure
from .models import ModelCallError, call_model_system_then_user
from .parsing import ResponseParseError, parse_json_block
from .prompts import DRAFT_SYSTEM_PROMPT, build_draft_prompt

logger = logging.getLogger(__name__)

DOCUMENT_TYPES = [
    "Legal Notice",
    "Rent Agreement",
    "Employment Contract",
    "Non-Disclosure Agreement",
    "Partnership Deed",
    "Will",
    "Affidavit",
    "Power of Attorney",
    "Service Agreement",
    "Sale Deed",
]


def default_explanations() -> Dict[str, Any]:
    return {
        "legalBasis": "Based on relevant Indian legal provisions",
        "keyPoints": ["Generated based on your requirements"],
        "nextSteps": ["Review the draft", "Consult with a legal professional before finalizing"],
    }


def draft_file_name(document_type: str) -> str:
    # Content-Disposition must stay latin-1; keep the slug ASCII
    slug = re.sub(r"[^a-z0-9]+", "-", document_type.lower()).strip("-") or "legal"
    return f"{slug}-draft.txt"


def parse_draft(text: str) -> Dict[str, Any]:
    """Split a model reply into the draft text and its explanations."""
    try:
        parsed = parse_json_block(text)
    except ResponseParseError as e:
        logger.warning("--- [Drafting] using raw text as draft: %s ---", e)
        return {"draft": text, "explanations": default_explanations()}

    if not isinstance(parsed, dict) or not parsed.get("draft"):
        return {"draft": text, "explanations": default_explanations()}

    explanations = parsed.get("explanations")
    if not isinstance(explanations, dict):
        explanations = default_explanations()
    return {"draft": parsed["draft"], "explanations": explanations}


def generate_legal_draft(document_type: str, description: str) -> Dict[str, Any]:
    if not (document_type or "").strip() or not (description or "").strip():
        return failure(INVALID_INPUT, "Please select a document type and provide requirements")

    logger.info("--- [Drafting] generating '%s' ---", document_type)
    try:
        text = call_model_system_then_user(
            DRAFT_SYSTEM_PROMPT,
            build_draft_prompt(document_type, description),
            model_name=ANALYSIS_GOOGLE_MODEL,
        )
    except ModelCallError:
        return failure(MODEL_UNAVAILABLE, "Failed to generate draft. Please try again.")

    result = parse_draft(text)
    return {
        "success": True,
        "document_type": document_type,
        "draft": result["draft"],
        "explanations": result["explanations"],
        "file_name": draft_file_name(document_type),
    }
