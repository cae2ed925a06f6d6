from __future__ import annotations

import json

import pytest

from application.icon_service import find_previous_icon, icon_name, select_icon
from config.settings import settings
from conftest import FakeClient
from domain.models import ProviderKind
from domain.ports import ChatMessage
from infra.providers.base import ModelHandle

CDN = "https://cdn.activepieces.com/pieces/ai/code"


@pytest.fixture(autouse=True)
def _offline(offline_token_counter, monkeypatch) -> None:
    monkeypatch.setattr(settings, "ICON_CDN_BASE", CDN)


def _handle(*replies: str, error: Exception = None) -> ModelHandle:
    return ModelHandle(provider=ProviderKind.OPENAI, model="gpt-4o", client=FakeClient(*replies, error=error))


def _reply(icon: str, is_new_request: bool = True) -> str:
    return json.dumps({"icon": icon, "explanation": "fits", "isNewRequest": is_new_request})


def test_new_request_returns_cdn_url() -> None:
    handle = _handle(_reply("mail"))

    assert select_icon(handle, "Send an email when a form is submitted") == f"{CDN}/mail.svg"

    call = handle.client.calls[0]
    assert call["json_mode"] is True
    assert call["temperature"] == 0
    system, user = call["messages"]
    assert "AVAILABLE ICONS:" in system.content and " mail " in system.content
    assert "PREVIOUS ICON: none" in system.content
    assert "Send an email when a form is submitted" in user.content


def test_unknown_icon_returns_none() -> None:
    assert select_icon(_handle(_reply("not-a-real-icon")), "Do something") is None


def test_modification_reuses_previous_icon() -> None:
    history = [
        ChatMessage("user", "Sync new rows to a database"),
        ChatMessage("assistant", '{"icon": "database", "explanation": "rows"}'),
    ]
    handle = _handle(_reply("mail", is_new_request=False))

    assert select_icon(handle, "Also skip empty rows", history) == f"{CDN}/database.svg"
    system = handle.client.calls[0]["messages"][0].content
    assert "PREVIOUS ICON: database" in system
    assert "ASSISTANT: " in system


def test_modification_without_previous_icon_uses_selection() -> None:
    assert select_icon(_handle(_reply("calendar", is_new_request=False)), "Book a meeting") == f"{CDN}/calendar.svg"


def test_missing_is_new_request_defaults_to_new() -> None:
    history = [ChatMessage("assistant", '"icon": "database"')]
    handle = _handle(json.dumps({"icon": "mail", "explanation": "email"}))

    assert select_icon(handle, "Email me a report", history) == f"{CDN}/mail.svg"


def test_invalid_reply_returns_none() -> None:
    assert select_icon(_handle("I think the mail icon."), "Email me") is None


def test_client_failure_returns_none() -> None:
    assert select_icon(_handle(error=RuntimeError("rate limited")), "Email me") is None


def test_previous_icon_comes_from_latest_assistant_message() -> None:
    history = [
        ChatMessage("assistant", '{"icon": "mail"}'),
        ChatMessage("user", "change it"),
        ChatMessage("assistant", "no icon here"),
    ]

    assert find_previous_icon(history) is None
    assert find_previous_icon(history[:2]) == "mail"
    assert find_previous_icon([]) is None


def test_history_is_trimmed_to_recent_turns(monkeypatch) -> None:
    monkeypatch.setattr(settings, "ICON_HISTORY_MAX_TURNS", 2)
    history = [ChatMessage("user", f"message-{i}") for i in range(5)]
    handle = _handle(_reply("zap"))

    select_icon(handle, "Trigger on webhook", history)

    system = handle.client.calls[0]["messages"][0].content
    assert "message-4" in system and "message-3" in system
    assert "message-2" not in system


def test_history_is_trimmed_to_token_budget(monkeypatch) -> None:
    monkeypatch.setattr(settings, "ICON_HISTORY_MAX_TOKENS", 30)
    history = [ChatMessage("user", "x" * 40), ChatMessage("user", "recent-turn")]
    handle = _handle(_reply("zap"))

    select_icon(handle, "Trigger on webhook", history)

    system = handle.client.calls[0]["messages"][0].content
    assert "recent-turn" in system
    assert "x" * 40 not in system


def test_icon_name_from_url() -> None:
    assert icon_name(f"{CDN}/trash-2.svg") == "trash-2"
    assert icon_name("mail") == "mail"


def test_token_counting_failure_keeps_recent_turns(monkeypatch) -> None:
    def _offline_encoding(messages, model):
        raise ConnectionError("encoding download failed")

    monkeypatch.setattr("application.icon_service.count_tokens_tiktoken", _offline_encoding)
    monkeypatch.setattr(settings, "ICON_HISTORY_MAX_TURNS", 2)
    history = [ChatMessage("user", f"message-{i}") for i in range(4)]
    handle = _handle(_reply("zap"))

    assert select_icon(handle, "Trigger on webhook", history) == f"{CDN}/zap.svg"
    system = handle.client.calls[0]["messages"][0].content
    assert "message-3" in system and "message-2" in system
    assert "message-1" not in system


def test_empty_history_skips_token_counting(monkeypatch) -> None:
    def _must_not_count(messages, model):
        raise AssertionError("token counter called for empty history")

    monkeypatch.setattr("application.icon_service.count_tokens_tiktoken", _must_not_count)

    assert select_icon(_handle(_reply("mail")), "Email me a report") == f"{CDN}/mail.svg"
