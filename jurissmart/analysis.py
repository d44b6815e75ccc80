from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

from .config import ANALYSIS_GOOGLE_MODEL
from .errors import INVALID_INPUT, MODEL_UNAVAILABLE, failure
from .models import ModelCallError, call_model_system_then_user
from .parsing import ResponseParseError, parse_json_block
from .prompts import DOCUMENT_ANALYSIS_SYSTEM_PROMPT, build_document_analysis_prompt

logger = logging.getLogger(__name__)

DOCUMENT_TYPES = ("fir", "judgment", "petition", "contract", "other")

DOCUMENT_TYPE_LABELS = {
    "fir": "First Information Report (FIR)",
    "judgment": "Court Judgment",
    "petition": "Legal Petition",
    "contract": "Legal Contract",
}

# Heuristic keywords
_PARTIES_RE = re.compile(r"party|parties|complainant|accused|petitioner|respondent", re.I)
_DATES_RE = re.compile(r"date|dates|filing|hearing", re.I)
_PROVISIONS_RE = re.compile(r"provision|section|act", re.I)
_KEY_POINTS_RE = re.compile(r"key point|main point|finding", re.I)
_EXPLANATION_RE = re.compile(r"simple explanation|layman|simplified", re.I)
_PRECEDENTS_RE = re.compile(r"precedent|similar case|case law", re.I)
_ACTIONS_RE = re.compile(r"action item|next step|recommendation", re.I)
_SUBJECT_RE = re.compile(r"subject|matter|dispute|issue", re.I)
_STATUS_RE = re.compile(r"status|stage|phase", re.I)

_DATE_TOKEN_RE = re.compile(r"(\d{1,2}[-/]\d{1,2}[-/]\d{2,4})")
_BULLET_RE = re.compile(r"^\s*[-•*]\s+")
_CASE_NAME_RE = re.compile(r"v\.|vs\.|versus", re.I)
_SECTION_OR_ACT_RE = re.compile(r"section|act", re.I)
_NAME_RE = re.compile(r":\s*([^,\n]+)")


def extract_name(line: str) -> str:
    m = _NAME_RE.search(line)
    return m.group(1).strip() if m else "Unknown"


def _bullets(section: str) -> List[str]:
    return [_BULLET_RE.sub("", line).strip() for line in section.split("\n") if _BULLET_RE.match(line)]


def _empty_result(document_type: str) -> Dict[str, Any]:
    return {
        "documentType": DOCUMENT_TYPE_LABELS.get(document_type, "Legal Document"),
        "parties": {},
        "dates": [],
        "provisions": [],
        "keyPoints": [],
        "subject": "",
        "status": "",
        "simpleExplanation": "",
        "historicalPrecedents": [],
        "actionItems": [],
    }


def extract_structured_data(text: str, document_type: str) -> Dict[str, Any]:
    """
    Best-effort extraction from a free-text reply when no JSON could be parsed.

    The reply is split into blank-line separated sections; the first keyword
    family a section matches decides which field it fills.
    """
    result = _empty_result(document_type)
    parties = result["parties"]

    for section in re.split(r"\n\n|\r\n\r\n", text or ""):
        if _PARTIES_RE.search(section):
            for line in section.split("\n"):
                if re.search(r"complainant", line, re.I):
                    parties["complainant"] = {"name": extract_name(line)}
                elif re.search(r"accused", line, re.I):
                    parties.setdefault("accused", []).append({"name": extract_name(line)})
                elif re.search(r"petitioner", line, re.I):
                    parties.setdefault("petitioners", []).append({"name": extract_name(line)})
                elif re.search(r"respondent", line, re.I):
                    parties.setdefault("respondents", []).append({"name": extract_name(line)})
        elif _DATES_RE.search(section):
            for line in section.split("\n"):
                m = _DATE_TOKEN_RE.search(line)
                if m:
                    result["dates"].append({
                        "date": m.group(1),
                        "description": line.replace(m.group(1), "", 1).strip(),
                    })
        elif _PROVISIONS_RE.search(section):
            result["provisions"].extend(
                line.strip() for line in section.split("\n") if _SECTION_OR_ACT_RE.search(line)
            )
        elif _KEY_POINTS_RE.search(section):
            result["keyPoints"].extend(_bullets(section))
        elif _EXPLANATION_RE.search(section):
            result["simpleExplanation"] = _EXPLANATION_RE.sub("", section, count=1).strip()
        elif _PRECEDENTS_RE.search(section):
            result["historicalPrecedents"].extend(
                {"case": line.strip(), "outcome": "Referenced in document"}
                for line in section.split("\n")
                if _CASE_NAME_RE.search(line)
            )
        elif _ACTIONS_RE.search(section):
            result["actionItems"].extend(_bullets(section))
        elif _SUBJECT_RE.search(section):
            result["subject"] = _SUBJECT_RE.sub("", section, count=1).strip()
        elif _STATUS_RE.search(section):
            result["status"] = _STATUS_RE.sub("", section, count=1).strip()

    return result


def classify_status(status: Any) -> str:
    low = str(status or "").lower()
    if not low:
        return "unknown"
    if "pending" in low or "in progress" in low:
        return "pending"
    if any(w in low for w in ("resolved", "completed", "granted", "approved")):
        return "resolved"
    if any(w in low for w in ("rejected", "denied", "dismissed")):
        return "rejected"
    if "appeal" in low or "review" in low:
        return "appeal"
    return "unknown"


def parse_analysis(text: str, document_type: str) -> Dict[str, Any]:
    try:
        parsed = parse_json_block(text, allow_whole_text=True)
        if not isinstance(parsed, dict):
            raise ResponseParseError("Expected a JSON object")
        return parsed
    except ResponseParseError as e:
        logger.warning("--- [Document Analyzer] JSON parse failed, using heuristic extraction: %s ---", e)
        return extract_structured_data(text, document_type)


def analyze_document(document_type: str, content: str) -> Dict[str, Any]:
    document_type = (document_type or "").strip().lower()
    if not document_type or not (content or "").strip():
        return failure(INVALID_INPUT, "Please select a document and document type")
    if document_type not in DOCUMENT_TYPES:
        return failure(INVALID_INPUT, f"Unsupported document type '{document_type}'", allowed=list(DOCUMENT_TYPES))

    logger.info("--- [Document Analyzer] analysing %s (%d words) ---", document_type, len(content.split()))
    try:
        text = call_model_system_then_user(
            DOCUMENT_ANALYSIS_SYSTEM_PROMPT,
            build_document_analysis_prompt(document_type, content),
            model_name=ANALYSIS_GOOGLE_MODEL,
        )
    except ModelCallError:
        return failure(MODEL_UNAVAILABLE, "Failed to analyze document with Gemini API. Please try again.")

    analysis = parse_analysis(text, document_type)
    return {
        "success": True,
        "document_type": document_type,
        "analysis": analysis,
        "status_category": classify_status(analysis.get("status")),
    }
