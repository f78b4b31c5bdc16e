import json
import logging

import pytest

from designer.component_registry import COMPONENT_REGISTRY
from designer.gemini_handler import (
    ChatMessage, DesignThread, extract_text_from_response, generate_with_retry, parse_model_reply,
)
from designer.schemas import BudgetBreakdownProps, Room3DLuxuryProps


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeChat:
    """Plays back scripted replies; an Exception instance in the script is raised."""

    def __init__(self, script):
        self.script = list(script)
        self.sent = []

    def send_message(self, message, generation_config=None):
        self.sent.append((message, generation_config))
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        return FakeResponse(item)


class FakeModel:
    def __init__(self, script):
        self.chat = FakeChat(script)

    def start_chat(self):
        return self.chat


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr("designer.gemini_handler.time.sleep", lambda seconds: None)


def _reply(message, components=()):
    return json.dumps({"message": message, "components": list(components)})


# ---------- reply parsing ----------

def test_parse_valid_components():
    text = _reply("Here is your room", [
        {"name": "Room3DLuxury", "props": {"sofaColor": "#112233"}},
        {"name": "BudgetBreakdown", "props": {"totalBudget": 5000, "spent": 1000}},
    ])
    message = parse_model_reply(text, COMPONENT_REGISTRY)
    assert message.role == "assistant"
    assert message.content == "Here is your room"
    assert [c.name for c in message.rendered_components] == ["Room3DLuxury", "BudgetBreakdown"]
    assert isinstance(message.rendered_components[0].props, Room3DLuxuryProps)
    assert message.rendered_components[0].props.sofa_color == "#112233"
    assert isinstance(message.rendered_components[1].props, BudgetBreakdownProps)
    assert message.is_renderable


def test_parse_strips_code_fences():
    text = "```json\n" + _reply("ok", [{"name": "ColorPalette", "props": {}}]) + "\n```"
    message = parse_model_reply(text, COMPONENT_REGISTRY)
    assert [c.name for c in message.rendered_components] == ["ColorPalette"]


def test_parse_plain_text_reply():
    message = parse_model_reply("Sure, tell me more about the room.", COMPONENT_REGISTRY)
    assert message.content == "Sure, tell me more about the room."
    assert message.rendered_components == []
    assert not message.is_renderable


def test_parse_skips_unknown_and_invalid_components(caplog):
    text = _reply("Mixed bag", [
        {"name": "HologramRoom", "props": {}},
        {"name": "ColorPalette", "props": {"primary": "not-a-color"}},
        {"props": {}},
        {"name": "FurnitureGrid", "props": {"columns": 2}},
    ])
    with caplog.at_level(logging.WARNING, logger="designer.gemini_handler"):
        message = parse_model_reply(text, COMPONENT_REGISTRY)
    assert message.content == "Mixed bag"
    assert [c.name for c in message.rendered_components] == ["FurnitureGrid"]
    assert "HologramRoom" in caplog.text
    assert "ColorPalette" in caplog.text


def test_parse_ignores_non_list_components():
    message = parse_model_reply(json.dumps({"message": "hi", "components": "Room3DLuxury"}), COMPONENT_REGISTRY)
    assert message.content == "hi"
    assert message.rendered_components == []


def test_parse_only_accepts_components_in_the_given_registry():
    registry = {"ColorPalette": COMPONENT_REGISTRY["ColorPalette"]}
    text = _reply("Two things", [
        {"name": "Room3DLuxury", "props": {}},
        {"name": "ColorPalette", "props": {"paletteName": "Dusk"}},
        {"name": ["ColorPalette"], "props": {}},
    ])
    message = parse_model_reply(text, registry)
    assert [c.name for c in message.rendered_components] == ["ColorPalette"]
    assert message.rendered_components[0].props.palette_name == "Dusk"


def test_message_text_flattens_parts():
    message = ChatMessage(role="assistant", content=[{"type": "text", "text": "Hello "}, "world"])
    assert message.message_text() == "Hello world"


def test_extract_text_from_candidates():
    class Part:
        text = "from parts"

    class Content:
        parts = [Part()]

    class Candidate:
        content = Content()

    class Response:
        candidates = [Candidate()]

        @property
        def text(self):
            raise ValueError("no quick accessor")

    assert extract_text_from_response(Response()) == "from parts"
    assert extract_text_from_response(None) is None


# ---------- retry ----------

def test_generate_with_retry_recovers_after_failures():
    chat = FakeChat([RuntimeError("503"), RuntimeError("503"), "finally"])
    assert generate_with_retry(chat, "hello") == "finally"
    assert len(chat.sent) == 3
    assert chat.sent[0][1]["response_mime_type"] == "application/json"


def test_generate_with_retry_gives_up():
    chat = FakeChat([RuntimeError("down")] * 3)
    assert generate_with_retry(chat, "hello", max_retries=3) is None


# ---------- thread ----------

def test_thread_appends_user_text_verbatim_and_reply():
    model = FakeModel([_reply("A cozy room", [{"name": "Room3DMinimalist", "props": {}}])])
    thread = DesignThread(model, COMPONENT_REGISTRY)

    reply = thread.send_message("  cozy bedroom  ")

    assert [m.role for m in thread.messages] == ["user", "assistant"]
    assert thread.messages[0].content == "  cozy bedroom  "
    assert model.chat.sent[0][0] == "  cozy bedroom  "
    assert reply is thread.messages[1]
    assert not thread.is_loading


def test_thread_failure_keeps_history_and_clears_loading():
    model = FakeModel([RuntimeError("boom")] * 3)
    thread = DesignThread(model, COMPONENT_REGISTRY)

    assert thread.send_message("hello") is None
    assert [m.role for m in thread.messages] == ["user"]
    assert thread.last_error
    assert not thread.is_loading


def test_thread_clears_loading_when_parsing_raises(monkeypatch):
    def explode(text, registry):
        raise RuntimeError("parser bug")

    monkeypatch.setattr("designer.gemini_handler.parse_model_reply", explode)
    thread = DesignThread(FakeModel(["{}"]), COMPONENT_REGISTRY)
    with pytest.raises(RuntimeError):
        thread.send_message("hi")
    assert not thread.is_loading


def test_thread_without_model():
    thread = DesignThread(None, COMPONENT_REGISTRY)
    assert thread.send_message("hi") is None
    assert thread.last_error
