"""
Tests for document analysis: JSON path, heuristic fallback and status badges
"""

import json

import pytest

from jurissmart import analysis
from jurissmart.analysis import classify_status, extract_name, extract_structured_data

FREE_TEXT_REPLY = (
    "Parties involved:\n"
    "Complainant: Ravi Kumar\n"
    "Accused: Suresh, resident of Delhi\n"
    "\n"
    "Important dates:\n"
    "Filed on 12-03-2023 at the police station\n"
    "\n"
    "Key points:\n"
    "- Theft of a motorcycle\n"
    "- CCTV footage available\n"
    "\n"
    "Precedents:\n"
    "State v. Ramesh\n"
    "Not a case name\n"
    "\n"
    "Case status: Under investigation, pending"
)


def test_json_reply_is_used_directly(fake_llm, sample_fir):
    reply = json.dumps({"documentType": "FIR", "status": "Pending investigation", "keyPoints": ["theft"]})
    calls = fake_llm(analysis, reply=reply)

    out = analysis.analyze_document("fir", sample_fir)

    assert out["success"] is True
    assert out["analysis"]["keyPoints"] == ["theft"]
    assert out["status_category"] == "pending"
    assert sample_fir in calls[0]["user"]


def test_free_text_reply_falls_back_to_heuristic(fake_llm, sample_fir):
    fake_llm(analysis, reply=FREE_TEXT_REPLY)

    out = analysis.analyze_document("FIR", sample_fir)
    data = out["analysis"]

    assert data["documentType"] == "First Information Report (FIR)"
    assert data["parties"]["complainant"] == {"name": "Ravi Kumar"}
    assert data["parties"]["accused"] == [{"name": "Suresh"}]
    assert data["dates"][0]["date"] == "12-03-2023"
    assert data["keyPoints"] == ["Theft of a motorcycle", "CCTV footage available"]
    assert data["historicalPrecedents"] == [{"case": "State v. Ramesh", "outcome": "Referenced in document"}]
    assert out["status_category"] == "pending"


def test_missing_input_is_rejected(fake_llm):
    calls = fake_llm(analysis, reply="{}")
    out = analysis.analyze_document("", "text")
    assert out["message"] == "Please select a document and document type"
    out = analysis.analyze_document("contract", "  ")
    assert out["error"] == "invalid_input"
    assert calls == []


def test_model_failure(fake_llm):
    fake_llm(analysis, error="timeout")
    out = analysis.analyze_document("judgment", "The appeal is dismissed.")
    assert out["error"] == "model_unavailable"
    assert out["message"] == "Failed to analyze document with Gemini API. Please try again."


def test_unknown_type_gets_generic_label():
    data = extract_structured_data("", "other")
    assert data["documentType"] == "Legal Document"
    assert data["parties"] == {}


def test_petition_parties_and_action_items():
    text = (
        "Parties:\nPetitioner: Anita Sharma\nRespondent: Union of India\n\n"
        "Next steps:\n* File rejoinder\n* Attend the next listing"
    )
    data = extract_structured_data(text, "petition")
    assert data["parties"]["petitioners"] == [{"name": "Anita Sharma"}]
    assert data["parties"]["respondents"] == [{"name": "Union of India"}]
    assert data["actionItems"] == ["File rejoinder", "Attend the next listing"]


def test_extract_name_without_colon():
    assert extract_name("The complainant is unnamed") == "Unknown"


@pytest.mark.parametrize("status,category", [
    ("Pending before the court", "pending"),
    ("In progress", "pending"),
    ("Bail granted", "resolved"),
    ("Petition dismissed", "rejected"),
    ("Under appeal", "appeal"),
    ("Listed for review", "appeal"),
    ("Adjourned", "unknown"),
    (None, "unknown"),
])
def test_classify_status(status, category):
    assert classify_status(status) == category
