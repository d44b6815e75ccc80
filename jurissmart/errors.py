from __future__ import annotations

from typing import Any, Dict

# Error kinds carried in failed tool results; api_server maps them to HTTP codes
INVALID_INPUT = "invalid_input"
UNPARSEABLE = "unparseable"
MODEL_UNAVAILABLE = "model_unavailable"


def failure(kind: str, message: str, **extra: Any) -> Dict[str, Any]:
    out = {"success": False, "error": kind, "message": message}
    out.update(extra)
    return out
