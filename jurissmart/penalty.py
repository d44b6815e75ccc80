"""
Penalty predictor.

Asks the model for a strictly-JSON penalty estimate for an offense in a given
jurisdiction and turns it into the data the dashboard needs: a fine-range
chart, a severity colour and a readable markdown summary. Unlike the other
tools there is no placeholder fallback; an unparseable reply is an error.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from .errors import INVALID_INPUT, MODEL_UNAVAILABLE, UNPARSEABLE, failure
from .models import ModelCallError, call_model_system_then_user
from .parsing import ResponseParseError, slice_json_object
from .prompts import PENALTY_SYSTEM_PROMPT, build_penalty_prompt

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY = "United States"

GREEN = "#10b981"
AMBER = "#f59e0b"
RED = "#ef4444"


def severity_color(score: Any) -> str:
    try:
        score = float(score)
    except (TypeError, ValueError):
        return AMBER
    if score <= 3:
        return GREEN
    if score <= 6:
        return AMBER
    return RED


def fine_chart(penalty: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [
        {"name": "Minimum Fine", "value": penalty.get("minFine"), "fill": GREEN},
        {"name": "Recommended Fine", "value": penalty.get("recommendedFine"), "fill": AMBER},
        {"name": "Maximum Fine", "value": penalty.get("maxFine"), "fill": RED},
    ]


def _bullets(items: Any) -> str:
    if not items:
        return "None specified"
    if not isinstance(items, list):
        items = [items]
    return "\n".join(f"- {item}" for item in items)


def _jurisdiction(country: str, region: Optional[str]) -> str:
    return f"{country}, {region}" if region else country


def format_penalty_summary(offense: str, penalty: Dict[str, Any]) -> str:
    if penalty.get("imprisonmentPossible"):
        imprisonment = f"**Imprisonment:** {penalty.get('imprisonmentDuration') or 'Duration not specified'}"
    else:
        imprisonment = "**Imprisonment:** Not applicable"
    lines = [
        f"**Penalty Analysis for: {offense}**",
        "",
        f"**Offense Level:** {penalty.get('offenseLevel', '')}",
        f"**Severity:** {penalty.get('severityScore', '')}/10",
        f"**Fine Range:** {penalty.get('minFine', '')} - {penalty.get('maxFine', '')} "
        f"(Recommended: {penalty.get('recommendedFine', '')})",
        imprisonment,
        "",
        "**Additional Penalties:**",
        _bullets(penalty.get("additionalPenalties")),
        "",
        "**Legal References:**",
        _bullets(penalty.get("legalReferences")),
        "",
        "**Region-Specific Information:**",
        str(penalty.get("countrySpecific", "")),
        "",
        f"**Risk Level:** {str(penalty.get('riskLevel', '')).upper()}",
    ]
    if penalty.get("consultRecommended"):
        lines.append("**IMPORTANT:** Consultation with a legal professional is strongly recommended.")
    return "\n".join(lines)


def build_penalty_report(
    offense: str,
    country: str,
    region: Optional[str],
    penalty: Dict[str, Any],
    generated_at: Optional[datetime] = None,
) -> str:
    generated_at = generated_at or datetime.now()
    lines = [
        "# Penalty Analysis Report",
        "",
        "## Offense Information",
        f"- **Offense:** {offense}",
        f"- **Jurisdiction:** {_jurisdiction(country, region)}",
        f"- **Generated:** {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        "",
        "## Penalty Details",
        f"- **Offense Level:** {penalty.get('offenseLevel', '')}",
        f"- **Severity Score:** {penalty.get('severityScore', '')}/10",
        f"- **Fine Range:** {penalty.get('minFine', '')} - {penalty.get('maxFine', '')}",
        f"- **Recommended Fine:** {penalty.get('recommendedFine', '')}",
        f"- **Imprisonment Possible:** {'Yes' if penalty.get('imprisonmentPossible') else 'No'}",
    ]
    if penalty.get("imprisonmentPossible"):
        lines.append(f"- **Imprisonment Duration:** {penalty.get('imprisonmentDuration', '')}")
    lines += [
        "",
        "## Additional Penalties",
        _bullets(penalty.get("additionalPenalties")),
        "",
        "## Legal References",
        _bullets(penalty.get("legalReferences")),
        "",
        "## Jurisdiction-Specific Information",
        str(penalty.get("countrySpecific", "")),
        "",
        "## Risk Assessment",
        f"- **Risk Level:** {str(penalty.get('riskLevel', '')).upper()}",
        f"- **Legal Consultation Recommended:** {'Yes' if penalty.get('consultRecommended') else 'Not necessary'}",
        "",
        "## Disclaimer",
        "This analysis is provided for informational purposes only and does not constitute legal advice.",
        "Laws and penalties vary by jurisdiction and may change over time.",
        "Please consult with a qualified legal professional for specific guidance.",
    ]
    return "\n".join(lines)


def predict_penalty(offense: str, country: Optional[str] = None, region: Optional[str] = None) -> Dict[str, Any]:
    if not (offense or "").strip():
        return failure(INVALID_INPUT, "Please describe the offense")
    country = (country or "").strip() or DEFAULT_COUNTRY
    region = (region or "").strip()

    logger.info("--- [Penalty] analysing offense for %s ---", _jurisdiction(country, region))
    try:
        text = call_model_system_then_user(PENALTY_SYSTEM_PROMPT, build_penalty_prompt(offense, country, region))
    except ModelCallError:
        return failure(MODEL_UNAVAILABLE, "Failed to analyze penalty information. Please try again.")

    try:
        penalty = slice_json_object(text)
    except ResponseParseError as e:
        logger.warning("--- [Penalty] failed to parse penalty data: %s ---", e)
        return failure(UNPARSEABLE, "Invalid data format received from AI")
    if not isinstance(penalty, dict):
        return failure(UNPARSEABLE, "Invalid data format received from AI")

    return {
        "success": True,
        "offense": offense,
        "jurisdiction": _jurisdiction(country, region),
        "penalty": penalty,
        "fine_chart": fine_chart(penalty),
        "severity_color": severity_color(penalty.get("severityScore")),
        "summary": format_penalty_summary(offense, penalty),
    }
