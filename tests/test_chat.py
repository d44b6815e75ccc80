"""
Tests for the Juggernaut chat graph and its endpoints
"""

import uuid

from langchain_core.messages import AIMessage, SystemMessage

from jurissmart import chat
from jurissmart.models import ModelCallError
from jurissmart.prompts import JUGGERNAUT_SYSTEM_PROMPT


def _thread():
    return f"test-{uuid.uuid4()}"


def test_reply_is_beautified_and_history_kept(monkeypatch):
    seen = []

    def fake_call(messages, temperature=None, model_name=None):
        seen.append(messages)
        return AIMessage(content=f"**Answer {len(seen)}**")

    monkeypatch.setattr(chat, "call_model_with_messages", fake_call)
    thread_id = _thread()

    first = chat.chat_reply("What is an FIR?", thread_id)
    second = chat.chat_reply("And a chargesheet?", thread_id)

    assert first == {"success": True, "thread_id": thread_id, "reply": "Answer 1"}
    assert second["reply"] == "Answer 2"
    # persona first, then the stored human/ai/human turns
    assert isinstance(seen[1][0], SystemMessage)
    assert seen[1][0].content == JUGGERNAUT_SYSTEM_PROMPT
    assert [m.content for m in seen[1][1:]] == ["What is an FIR?", "**Answer 1**", "And a chargesheet?"]

    assert chat.chat_history(thread_id) == [
        {"sender": "user", "text": "What is an FIR?"},
        {"sender": "ai", "text": "Answer 1"},
        {"sender": "user", "text": "And a chargesheet?"},
        {"sender": "ai", "text": "Answer 2"},
    ]


def test_new_thread_id_when_missing(monkeypatch):
    monkeypatch.setattr(chat, "call_model_with_messages", lambda messages, **kw: AIMessage(content="Hello"))
    out = chat.chat_reply("Hi")
    assert out["success"] is True
    assert uuid.UUID(out["thread_id"])


def test_model_failure_is_reported(monkeypatch):
    def boom(messages, **kw):
        raise ModelCallError("unavailable")

    monkeypatch.setattr(chat, "call_model_with_messages", boom)
    out = chat.chat_reply("Hi", _thread())
    assert out["error"] == "model_unavailable"
    assert out["message"] == "Sorry, I encountered an error processing your request."


def test_blank_message_rejected():
    assert chat.chat_reply("   ")["error"] == "invalid_input"


def test_unknown_thread_has_empty_history():
    assert chat.chat_history(_thread()) == []


def test_chat_endpoints(client, monkeypatch):
    monkeypatch.setattr(chat, "call_model_with_messages", lambda messages, **kw: AIMessage(content="*Noted*"))
    thread_id = _thread()

    resp = client.post("/api/chat", json={"message": "Is bail a right?", "thread_id": thread_id})
    assert resp.status_code == 200
    assert resp.json()["reply"] == "Noted"

    resp = client.get(f"/api/chat/{thread_id}/history")
    assert [m["sender"] for m in resp.json()["messages"]] == ["user", "ai"]

    resp = client.post("/api/chat", json={"message": " "})
    assert resp.status_code == 400


def test_chat_endpoint_model_failure(client, monkeypatch):
    def boom(messages, **kw):
        raise ModelCallError("unavailable")

    monkeypatch.setattr(chat, "call_model_with_messages", boom)
    resp = client.post("/api/chat", json={"message": "Hello", "thread_id": _thread()})
    assert resp.status_code == 502
    assert resp.json()["detail"]["message"] == "Sorry, I encountered an error processing your request."


def test_stream_beautifies_chunks(client, monkeypatch):
    def fake_stream(system_prompt, user_prompt, **kw):
        yield "**Section 138**"
        yield " covers cheque bounce"

    monkeypatch.setattr(chat, "stream_model_text", fake_stream)
    resp = client.post("/api/chat/stream", json={"message": "Cheque bounce?"})
    assert resp.status_code == 200
    assert resp.text == "Section 138 covers cheque bounce"


def test_stream_ends_with_error_line(monkeypatch):
    def failing_stream(system_prompt, user_prompt, **kw):
        yield "Partial"
        raise ModelCallError("connection reset")

    monkeypatch.setattr(chat, "stream_model_text", failing_stream)
    assert list(chat.stream_chat("Hi")) == ["Partial", "Error: Could not process your request."]
