from __future__ import annotations

# Public API re-exports

from .analysis import analyze_document, classify_status, extract_structured_data
from .chat import chat_history, chat_reply, chatbot, stream_chat
from .drafting import generate_legal_draft
from .flowchart import generate_flowchart
from .judgment import CASE_TYPES, COURT_TYPES, predict_judgment
from .legality import assess_legality
from .penalty import build_penalty_report, predict_penalty
from .users import authenticate_user, register_user

__all__ = [
    # Chatbot graph
    "chatbot",
    "chat_reply",
    "chat_history",
    "stream_chat",
    # Tools
    "analyze_document",
    "classify_status",
    "extract_structured_data",
    "generate_legal_draft",
    "assess_legality",
    "predict_penalty",
    "build_penalty_report",
    "predict_judgment",
    "COURT_TYPES",
    "CASE_TYPES",
    "generate_flowchart",
    # Users
    "register_user",
    "authenticate_user",
]
