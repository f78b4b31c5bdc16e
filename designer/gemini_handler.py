# designer/gemini_handler.py
import json
import logging
import os
import re
import time
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

import google.generativeai as genai
import streamlit as st
from pydantic import BaseModel, ValidationError

from designer.component_registry import validate_props
from designer.errors import UnknownComponentError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = 'gemini-2.0-flash-lite-001'

GENERATION_CONFIG = {
    "response_mime_type": "application/json",
    "temperature": 0.7,
}


@dataclass(frozen=True)
class RenderedComponent:
    name: str
    props: BaseModel


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: Union[str, List[Any]]
    rendered_components: List[RenderedComponent] = field(default_factory=list)

    @property
    def is_renderable(self) -> bool:
        return self.role == "assistant" and bool(self.rendered_components)

    def message_text(self) -> str:
        """Flatten string or list-of-parts content into display text."""
        if isinstance(self.content, str):
            return self.content
        parts = []
        for part in self.content:
            if isinstance(part, dict):
                parts.append(str(part.get('text', '')))
            else:
                parts.append(str(part))
        return ''.join(parts)


def get_config_value(name, default=None):
    """Read a setting from Streamlit secrets, falling back to the environment."""
    try:
        if name in st.secrets:
            return st.secrets[name]
    except (FileNotFoundError, KeyError):
        logger.debug(f"No Streamlit secrets available for {name}")
    return os.environ.get(name, default)


@st.cache_resource(show_spinner=False)
def _configure_model(api_key, model_name, system_instruction):
    genai.configure(api_key=api_key)
    return genai.GenerativeModel(model_name, system_instruction=system_instruction)


def setup_gemini(system_instruction):
    """Configure the Gemini API and return the model, or None if unavailable."""
    api_key = get_config_value("GEMINI_API_KEY")
    if not api_key:
        logger.error("GEMINI_API_KEY not found in Streamlit secrets or environment")
        return None
    model_name = get_config_value("GEMINI_MODEL", DEFAULT_MODEL)
    try:
        model = _configure_model(api_key, model_name, system_instruction)
        logger.info(f"Gemini model configured: {model_name}")
        return model
    except Exception as e:
        logger.error(f"Gemini API configuration failed: {e}", exc_info=True)
        return None


def extract_text_from_response(response):
    """
    Helper function to extract text from Gemini response object.
    Handles multiple response formats gracefully.
    """
    if response is None:
        return None

    if isinstance(response, str):
        return response

    try:
        text = response.text
        if text:
            return str(text).strip()
    except (AttributeError, ValueError):
        # .text raises ValueError when the candidate has no parts
        pass

    candidates = getattr(response, 'candidates', None)
    if candidates:
        try:
            text = candidates[0].content.parts[0].text
            if text:
                return str(text).strip()
        except (AttributeError, IndexError):
            return None

    return None


def generate_with_retry(chat, message, max_retries=3, base_delay=1.0):
    """Send a chat message with retry logic. Returns the reply text or None."""
    for attempt in range(max_retries):
        try:
            response = chat.send_message(message, generation_config=GENERATION_CONFIG)
            text = extract_text_from_response(response)
            if text:
                return text
            logger.warning(f"Empty Gemini response (attempt {attempt + 1}/{max_retries})")
        except Exception as e:
            if attempt == max_retries - 1:
                logger.error(f"AI generation failed after {max_retries} attempts: {e}", exc_info=True)
                return None
            logger.warning(f"Gemini call failed (attempt {attempt + 1}/{max_retries}): {e}")
        if attempt < max_retries - 1:
            time.sleep(base_delay * 2 ** attempt)

    return None


_FENCE_OPEN = re.compile(r"^```[a-zA-Z]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


def _strip_code_fences(text):
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text))
    return text


def parse_model_reply(text, registry: Mapping) -> ChatMessage:
    """
    Turn the model's reply into an assistant ChatMessage.

    The reply is expected to be JSON with a `message` string and a
    `components` list of {name, props}. Anything that is not such an object
    becomes plain text. Components whose name is not in the registry, or whose
    props fail validation, are dropped with a warning.
    """
    cleaned = _strip_code_fences(text or "")
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        return ChatMessage(role="assistant", content=cleaned)
    if not isinstance(data, dict):
        return ChatMessage(role="assistant", content=cleaned)

    content = data.get("message") or ""
    raw_components = data.get("components") or []
    if not isinstance(raw_components, list):
        logger.warning(f"Ignoring non-list 'components' in model reply: {type(raw_components).__name__}")
        raw_components = []

    rendered = []
    for item in raw_components:
        if not isinstance(item, dict) or not isinstance(item.get("name"), str) or not item["name"]:
            logger.warning(f"Skipping malformed component entry: {item!r}")
            continue
        name = item["name"]
        try:
            props = validate_props(name, item.get("props"), registry)
        except UnknownComponentError:
            logger.warning(f"Skipping unknown component '{name}'")
            continue
        except ValidationError as e:
            logger.warning(f"Skipping component '{name}' with invalid props: {e.error_count()} error(s)")
            continue
        rendered.append(RenderedComponent(name=name, props=props))

    return ChatMessage(role="assistant", content=content, rendered_components=rendered)


class DesignThread:
    """Ordered conversation with the model plus the loading flag the UI reads."""

    def __init__(self, model, registry: Mapping):
        self.model = model
        self.registry = registry
        self.messages: List[ChatMessage] = []
        self.is_loading = False
        self.last_error: Optional[str] = None
        self._chat = model.start_chat() if model is not None else None

    def send_message(self, text) -> Optional[ChatMessage]:
        """Append the user's text verbatim, ask the model, append its reply."""
        self.messages.append(ChatMessage(role="user", content=text))
        self.last_error = None
        if self._chat is None:
            self.last_error = "The AI model is not configured."
            logger.error("send_message called without a configured model")
            return None

        self.is_loading = True
        logger.info(f"Sending message to Gemini ({len(text)} chars)")
        try:
            reply = generate_with_retry(self._chat, text)
            if reply is None:
                self.last_error = "The AI model did not respond. Please try again."
                return None
            message = parse_model_reply(reply, self.registry)
            self.messages.append(message)
            logger.info(f"Received reply with {len(message.rendered_components)} component(s)")
            return message
        finally:
            self.is_loading = False
