from __future__ import annotations

import logging
import uuid
from typing import Annotated, Any, Dict, Iterator, List, Optional, TypedDict

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, START, StateGraph
from langgraph.graph.message import add_messages

from .errors import INVALID_INPUT, MODEL_UNAVAILABLE, failure
from .models import ModelCallError, call_model_with_messages, stream_model_text
from .parsing import beautify_plain_text
from .prompts import JUGGERNAUT_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

CHAT_ERROR_MESSAGE = "Sorry, I encountered an error processing your request."
STREAM_ERROR_MESSAGE = "Error: Could not process your request."


class ChatState(TypedDict):
    # LangGraph message store annotation
    messages: Annotated[List[BaseMessage], add_messages]


def chat_node(state: ChatState):
    messages = state.get("messages", [])
    if not messages or not isinstance(messages[-1], HumanMessage):
        return {"messages": []}
    # persona goes in front of every call but is never stored in the thread
    resp = call_model_with_messages([SystemMessage(content=JUGGERNAUT_SYSTEM_PROMPT)] + list(messages))
    return {"messages": [resp]}


# Compile the graph and expose chatbot
graph = StateGraph(ChatState)
graph.add_node("chat_node", chat_node)
graph.add_edge(START, "chat_node")
graph.add_edge("chat_node", END)
# process-local and unbounded: threads live until restart
chatbot = graph.compile(checkpointer=MemorySaver())


def _thread_config(thread_id: str) -> Dict[str, Any]:
    return {"configurable": {"thread_id": thread_id}}


def _message_text(message: BaseMessage) -> str:
    content = message.content
    if isinstance(content, list):
        return "".join(p if isinstance(p, str) else p.get("text", "") for p in content if isinstance(p, (str, dict)))
    return str(content)


def chat_reply(message: str, thread_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Send one user message to the Juggernaut assistant.
    Output: { "success": true, "thread_id": "...", "reply": "..." }
    """
    if not (message or "").strip():
        return failure(INVALID_INPUT, "Please enter a message")
    thread_id = thread_id or str(uuid.uuid4())

    logger.info("--- [Chat] message on thread %s ---", thread_id)
    try:
        state = chatbot.invoke({"messages": [HumanMessage(content=message)]}, config=_thread_config(thread_id))
    except ModelCallError:
        return failure(MODEL_UNAVAILABLE, CHAT_ERROR_MESSAGE, thread_id=thread_id)

    last = state["messages"][-1]
    if not isinstance(last, AIMessage):
        return failure(MODEL_UNAVAILABLE, CHAT_ERROR_MESSAGE, thread_id=thread_id)
    return {"success": True, "thread_id": thread_id, "reply": beautify_plain_text(_message_text(last))}


def chat_history(thread_id: str) -> List[Dict[str, str]]:
    snapshot = chatbot.get_state(_thread_config(thread_id))
    history = []
    for m in (snapshot.values or {}).get("messages", []):
        if isinstance(m, HumanMessage):
            history.append({"sender": "user", "text": _message_text(m)})
        elif isinstance(m, AIMessage):
            history.append({"sender": "ai", "text": beautify_plain_text(_message_text(m))})
    return history


def stream_chat(message: str) -> Iterator[str]:
    """Yield beautified reply chunks; a failed call ends the stream with an error line."""
    try:
        for chunk in stream_model_text(JUGGERNAUT_SYSTEM_PROMPT, message):
            yield beautify_plain_text(chunk)
    except ModelCallError:
        yield STREAM_ERROR_MESSAGE
