import json

import google.generativeai as genai
import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

APP_PATH = "../app.py"


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeChat:
    def __init__(self, reply):
        self.reply = reply

    def send_message(self, message, generation_config=None):
        return FakeResponse(self.reply)


class FakeModel:
    def __init__(self, reply):
        self.reply = reply

    def start_chat(self):
        return FakeChat(self.reply)


@pytest.fixture(autouse=True)
def no_env_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_MODEL", raising=False)
    # each test configures its own fake model
    st.cache_resource.clear()


def _use_fake_model(monkeypatch, reply):
    monkeypatch.setattr(genai, "configure", lambda **kwargs: None)
    monkeypatch.setattr(genai, "GenerativeModel", lambda *args, **kwargs: FakeModel(reply))


def test_brief_screen_without_api_key():
    at = AppTest.from_file(APP_PATH, default_timeout=30).run()
    assert not at.exception
    assert any("GEMINI_API_KEY" in error.value for error in at.error)
    quick_buttons = [button for button in at.button if button.key and button.key.startswith("brief_quick_")]
    assert quick_buttons
    assert all(button.disabled for button in quick_buttons)


def test_quick_prompt_renders_palette(monkeypatch):
    reply = json.dumps({
        "message": "Here is a calm palette.",
        "components": [{"name": "ColorPalette", "props": {"paletteName": "Calm"}}],
    })
    _use_fake_model(monkeypatch, reply)

    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.secrets["GEMINI_API_KEY"] = "test-key"
    at.run()
    assert not at.error

    at.button(key="brief_quick_3").click().run()

    assert not at.exception
    assert any(caption.value == "Components loaded" for caption in at.caption)
    assert any("Calm" in header.value for header in at.subheader)
    assert not at.text_input(key="chat_input").disabled
    assert all(caption.value != "Generating..." for caption in at.caption)


def test_only_the_latest_reply_keeps_room_state(monkeypatch):
    reply = json.dumps({
        "message": "Here is a luxury room.",
        "components": [{"name": "Room3DLuxury", "props": {}}],
    })
    _use_fake_model(monkeypatch, reply)

    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.secrets["GEMINI_API_KEY"] = "test-key"
    at.run()
    at.button(key="brief_quick_0").click().run()
    assert "room_scene::msg1_0_Room3DLuxury" in at.session_state

    at.button(key="chat_quick_1").click().run()
    at.button(key="chat_quick_2").click().run()

    assert not at.exception
    assert "room_scene::msg5_0_Room3DLuxury" in at.session_state
    for stale in ("room_scene::msg1_0_Room3DLuxury", "room_scene::msg3_0_Room3DLuxury"):
        assert stale not in at.session_state
