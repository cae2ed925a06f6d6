from typing import Any, Dict, List, Sequence

import pytest

from domain.models import (
    AzureOpenAIProviderSettings,
    CopilotSettings,
    OpenAIProviderSettings,
    Platform,
    ProviderKind,
)
from domain.ports import ChatMessage
from infra.db.platform_repo import InMemoryPlatformRepository


class FakeClient:
    """LLM client returning canned replies and recording every call."""

    def __init__(self, *replies: str, error: Exception = None) -> None:
        self.replies = list(replies)
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def chat_completion(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        temperature: float = 0.0,
        json_mode: bool = False,
    ) -> str:
        self.calls.append({
            "model": model,
            "messages": list(messages),
            "temperature": temperature,
            "json_mode": json_mode,
        })
        if self.error is not None:
            raise self.error
        return self.replies.pop(0)


class CountingPlatformRepository(InMemoryPlatformRepository):
    def __init__(self, platforms=()) -> None:
        super().__init__(platforms)
        self.lookups = 0

    def get_one_or_throw(self, platform_id: str) -> Platform:
        self.lookups += 1
        return super().get_one_or_throw(platform_id)


def make_platform(
    platform_id: str = "platform-1",
    openai_key: str = "",
    azure_key: str = "",
    resource_name: str = "acme",
    deployment_name: str = "gpt-4o-deploy",
) -> Platform:
    return Platform(
        id=platform_id,
        name="Acme",
        copilot_settings=CopilotSettings(providers={
            ProviderKind.OPENAI: OpenAIProviderSettings(api_key=openai_key),
            ProviderKind.AZURE_OPENAI: AzureOpenAIProviderSettings(
                api_key=azure_key,
                resource_name=resource_name,
                deployment_name=deployment_name,
            ),
        }),
    )


@pytest.fixture
def offline_token_counter(monkeypatch):
    """tiktoken downloads its encodings on first use; count characters instead."""
    monkeypatch.setattr(
        "application.icon_service.count_tokens_tiktoken",
        lambda messages, model: sum(len(m.role) + len(m.content) for m in messages),
    )


@pytest.fixture
def fake_sdk_clients(monkeypatch):
    """Replace the SDK-backed clients with recorders of the ProviderConfig they were built from."""
    built: List[Any] = []

    class _Recorder(FakeClient):
        def __init__(self, cfg) -> None:
            super().__init__()
            self.cfg = cfg
            built.append(self)

    monkeypatch.setattr("infra.factories.model_factory.OpenAIClient", _Recorder)
    monkeypatch.setattr("infra.factories.model_factory.AzureOpenAIClient", _Recorder)
    return built
