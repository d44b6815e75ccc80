from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .config import ANALYSIS_GOOGLE_MODEL
from .errors import INVALID_INPUT, MODEL_UNAVAILABLE, UNPARSEABLE, failure
from .models import ModelCallError, call_model_system_then_user
from .parsing import ResponseParseError, parse_json_block
from .prompts import JUDGMENT_SYSTEM_PROMPT, build_judgment_prompt

logger = logging.getLogger(__name__)

COURT_TYPES = [
    "Supreme Court",
    "High Court",
    "District Court",
    "Sessions Court",
    "Civil Court",
    "Criminal Court",
    "Family Court",
    "Consumer Court",
    "Labour Court",
    "Tax Tribunal",
    "Other Specialized Tribunal",
]

CASE_TYPES = [
    "Civil",
    "Criminal",
    "Constitutional",
    "Corporate",
    "Family",
    "Intellectual Property",
    "Tax",
    "Labour",
    "Real Estate",
    "Consumer Protection",
    "Environmental",
    "Other",
]

GREEN = "#22c55e"
AMBER = "#f59e0b"
RED = "#ef4444"
GRAY = "#64748b"
FAILURE_GRAY = "#94a3b8"


def _number(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def outcome_color(probability: Any) -> str:
    p = _number(probability)
    if p >= 70:
        return GREEN
    if p >= 40:
        return AMBER
    return RED


def severity_color(severity: str) -> str:
    return {"high": RED, "medium": AMBER, "low": GREEN}.get(severity, GRAY)


def strength_color(strength: str) -> str:
    return {"high": GREEN, "medium": AMBER, "low": RED}.get(strength, GRAY)


def probability_chart(prediction: Dict[str, Any]) -> List[Dict[str, Any]]:
    success = _number(prediction.get("successProbability"))
    return [
        {"name": "Success", "value": success, "fill": outcome_color(success)},
        {"name": "Failure", "value": 100 - success, "fill": FAILURE_GRAY},
    ]


def alternatives_chart(prediction: Dict[str, Any]) -> List[Dict[str, Any]]:
    alternatives = prediction.get("alternativeOutcomes")
    if not isinstance(alternatives, list):
        return []
    success = _number(prediction.get("successProbability"))
    rows = [{"name": "Primary", "probability": success, "scenario": "Primary Outcome", "fill": outcome_color(success)}]
    for outcome in alternatives:
        if not isinstance(outcome, dict):
            continue
        scenario = str(outcome.get("scenario", ""))
        probability = _number(outcome.get("probability"))
        rows.append({
            "name": " ".join(scenario.split(" ")[:2]),
            "probability": probability,
            "scenario": scenario,
            "fill": outcome_color(probability),
        })
    return rows


def section_chart(prediction: Dict[str, Any]) -> List[Dict[str, Any]]:
    sections = prediction.get("sectionAnalysis")
    if not isinstance(sections, list):
        return []
    return [
        {"name": s.get("section"), "relevance": _number(s.get("relevance"))}
        for s in sections
        if isinstance(s, dict)
    ]


def timeline_chart(prediction: Dict[str, Any]) -> List[Dict[str, Any]]:
    estimate = prediction.get("timelineEstimate")
    if not isinstance(estimate, dict):
        return []
    lo = _number(estimate.get("minMonths"))
    hi = _number(estimate.get("maxMonths"))
    return [
        {"name": "Minimum", "months": lo},
        {"name": "Maximum", "months": hi},
        {"name": "Average", "months": (lo + hi) / 2},
    ]


def _annotate_factors(prediction: Dict[str, Any]) -> None:
    for risk in prediction.get("riskFactors") or []:
        if isinstance(risk, dict):
            risk["color"] = severity_color(risk.get("severity"))
    for factor in prediction.get("successFactors") or []:
        if isinstance(factor, dict):
            factor["color"] = strength_color(factor.get("strength"))


def predict_judgment(
    case_description: str,
    involved_sections: Optional[str] = None,
    plaintiff: Optional[str] = None,
    defendant: Optional[str] = None,
    court_type: Optional[str] = None,
    case_type: Optional[str] = None,
    include_precedents: bool = True,
    include_alternatives: bool = True,
) -> Dict[str, Any]:
    """
    Predict the likely outcome of a case and shape it for the dashboard.

    There is no placeholder prediction: a reply without parseable JSON is
    reported as a failure so the caller can ask the user to retry.
    """
    if not (case_description or "").strip():
        return failure(INVALID_INPUT, "Please describe the case details")

    prompt = build_judgment_prompt(
        case_description,
        involved_sections=involved_sections,
        plaintiff=plaintiff,
        defendant=defendant,
        court_type=court_type,
        case_type=case_type,
        include_precedents=include_precedents,
        include_alternatives=include_alternatives,
    )
    logger.info("--- [Judgment] predicting outcome (court=%s, type=%s) ---", court_type, case_type)
    try:
        text = call_model_system_then_user(JUDGMENT_SYSTEM_PROMPT, prompt, model_name=ANALYSIS_GOOGLE_MODEL)
    except ModelCallError:
        return failure(MODEL_UNAVAILABLE, "Failed to generate prediction. Please try again.")

    try:
        prediction = parse_json_block(text)
    except ResponseParseError as e:
        logger.warning("--- [Judgment] failed to parse JSON from model response: %s ---", e)
        return failure(UNPARSEABLE, "Failed to analyze response. Please try again.")
    if not isinstance(prediction, dict):
        return failure(UNPARSEABLE, "Failed to analyze response. Please try again.")

    _annotate_factors(prediction)
    return {
        "success": True,
        "prediction": prediction,
        "outcome_color": outcome_color(prediction.get("successProbability")),
        "probability_chart": probability_chart(prediction),
        "alternatives_chart": alternatives_chart(prediction),
        "section_chart": section_chart(prediction),
        "timeline_chart": timeline_chart(prediction),
    }
