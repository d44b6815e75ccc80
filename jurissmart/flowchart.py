from __future__ import annotations

import logging
from typing import Any, Dict, List

from .errors import INVALID_INPUT, MODEL_UNAVAILABLE, UNPARSEABLE, failure
from .models import ModelCallError, call_model_system_then_user
from .parsing import beautify_plain_text, numbered_steps
from .prompts import FLOWCHART_SYSTEM_PROMPT, build_flowchart_prompt

logger = logging.getLogger(__name__)

NODE_X = 250
NODE_SPACING = 100


def build_nodes(steps: List[str]) -> List[Dict[str, Any]]:
    return [
        {"id": f"node-{i}", "data": {"label": step}, "position": {"x": NODE_X, "y": i * NODE_SPACING}}
        for i, step in enumerate(steps)
    ]


def build_edges(steps: List[str]) -> List[Dict[str, Any]]:
    # one edge between each consecutive pair
    return [
        {"id": f"edge-{i}-{i + 1}", "source": f"node-{i}", "target": f"node-{i + 1}"}
        for i in range(len(steps) - 1)
    ]


def generate_flowchart(process: str) -> Dict[str, Any]:
    """
    Turn a legal process description into a linear flowchart.
    Output: { "success": true, "text": "...", "steps": [...], "nodes": [...], "edges": [...] }
    """
    if not (process or "").strip():
        return failure(INVALID_INPUT, "Please describe the legal process")

    logger.info("--- [Flowchart] generating steps ---")
    try:
        text = call_model_system_then_user(FLOWCHART_SYSTEM_PROMPT, build_flowchart_prompt(process))
    except ModelCallError:
        return failure(MODEL_UNAVAILABLE, "Could not generate flowchart.")

    text = beautify_plain_text(text)
    steps = numbered_steps(text)
    if not steps:
        logger.warning("--- [Flowchart] model reply contained no numbered steps ---")
        return failure(UNPARSEABLE, "Could not generate flowchart.", text=text)

    return {
        "success": True,
        "text": text,
        "steps": steps,
        "nodes": build_nodes(steps),
        "edges": build_edges(steps),
    }
