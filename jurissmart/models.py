# jurissmart/models.py
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterator, List, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from .config import DEFAULT_GOOGLE_MODEL, DEFAULT_MODEL_TEMPERATURE, GOOGLE_API_KEY

logger = logging.getLogger(__name__)


class ModelCallError(RuntimeError):
    """The hosted model could not be reached or returned an error."""


@lru_cache(maxsize=8)
def get_model(model_name: str = DEFAULT_GOOGLE_MODEL, temperature: float = DEFAULT_MODEL_TEMPERATURE) -> ChatGoogleGenerativeAI:
    """
    Shared chat model (Gemini via LangChain wrapper), one per (name, temperature).
    Built on first use so importing the package never needs an API key.
    """
    return ChatGoogleGenerativeAI(
        model=model_name,
        convert_system_message_to_human=True,
        temperature=temperature,
        google_api_key=GOOGLE_API_KEY or None,
    )


def _content_text(resp) -> str:
    content = getattr(resp, "content", resp)
    if isinstance(content, list):
        # Gemini can return a list of parts; keep the text ones
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return content if isinstance(content, str) else str(content)


def _resolve(model_name: Optional[str], temperature: Optional[float]) -> ChatGoogleGenerativeAI:
    name = model_name or DEFAULT_GOOGLE_MODEL
    temp = DEFAULT_MODEL_TEMPERATURE if temperature is None else float(temperature)
    return get_model(name, temp)


def call_model_system_then_user(
    system_prompt: str,
    user_prompt: str,
    temperature: Optional[float] = None,
    model_name: Optional[str] = None,
) -> str:
    """
    Invoke the shared LLM with [System, Human] messages.
    Returns the content string. Raises ModelCallError on failure.
    """
    sys = SystemMessage(content=system_prompt)
    hum = HumanMessage(content=user_prompt)
    try:
        resp = _resolve(model_name, temperature).invoke([sys, hum])
    except Exception as e:
        logger.error("--- [Model] call failed (%s): %s ---", model_name or DEFAULT_GOOGLE_MODEL, e)
        raise ModelCallError(str(e)) from e
    return _content_text(resp)


def call_model_with_messages(
    messages: List[BaseMessage],
    temperature: Optional[float] = None,
    model_name: Optional[str] = None,
) -> AIMessage:
    """
    Invoke the shared LLM with an arbitrary message list.
    Returns the LC message response. Raises ModelCallError on failure.
    """
    try:
        resp = _resolve(model_name, temperature).invoke(messages)
    except Exception as e:
        logger.error("--- [Model] chat call failed: %s ---", e)
        raise ModelCallError(str(e)) from e
    if isinstance(resp, AIMessage):
        return resp
    return AIMessage(content=_content_text(resp))


def stream_model_text(
    system_prompt: str,
    user_prompt: str,
    temperature: Optional[float] = None,
    model_name: Optional[str] = None,
) -> Iterator[str]:
    """Yield text chunks as the model produces them."""
    sys = SystemMessage(content=system_prompt)
    hum = HumanMessage(content=user_prompt)
    try:
        for chunk in _resolve(model_name, temperature).stream([sys, hum]):
            text = _content_text(chunk)
            if text:
                yield text
    except Exception as e:
        logger.error("--- [Model] stream failed: %s ---", e)
        raise ModelCallError(str(e)) from e
