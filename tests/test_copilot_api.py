from __future__ import annotations

import json
import threading

import pytest
from fastapi.testclient import TestClient

from api.deps import get_model_service
from api.server import app
from application.model_service import ModelService
from config.settings import settings
from conftest import FakeClient, make_platform
from domain.models import Platform
from infra.db.platform_repo import InMemoryPlatformRepository


@pytest.fixture
def client(offline_token_counter, monkeypatch):
    repo = InMemoryPlatformRepository([
        make_platform("configured", openai_key="sk-openai"),
        Platform(id="bare", name="Bare"),
        make_platform("empty"),
    ])
    app.dependency_overrides[get_model_service] = lambda: ModelService(repo)
    monkeypatch.setattr(settings, "ICON_CDN_BASE", "https://cdn.example.com/icons")
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_select_icon_for_configured_platform(client, monkeypatch) -> None:
    fake = FakeClient(json.dumps({"icon": "webhook", "explanation": "hook", "isNewRequest": True}))
    monkeypatch.setattr("infra.factories.model_factory.OpenAIClient", lambda cfg: fake)

    r = client.post("/v1/platforms/configured/copilot/icon", json={
        "requirement": "Call a webhook on new orders",
        "conversationHistory": [{"role": "user", "content": "hello"}],
    })

    assert r.status_code == 200
    assert r.json() == {"icon": "https://cdn.example.com/icons/webhook.svg"}
    assert "USER: hello" in fake.calls[0]["messages"][0].content


@pytest.mark.parametrize(
    "platform_id, message",
    [
        ("bare", "No copilot settings found"),
        ("empty", "No default provider found"),
        ("unknown", "Platform unknown not found"),
    ],
)
def test_configuration_errors_map_to_copilot_failed(client, platform_id, message) -> None:
    r = client.post(f"/v1/platforms/{platform_id}/copilot/icon", json={"requirement": "Email me"})

    assert r.status_code == 400
    assert r.json() == {"code": "COPILOT_FAILED", "params": {"message": message}}


def test_platform_lookup_runs_off_the_event_loop(client, monkeypatch) -> None:
    loop_threads = []
    lookup_threads = []

    class _ThreadRecordingRepository(InMemoryPlatformRepository):
        def get_one_or_throw(self, platform_id: str) -> Platform:
            lookup_threads.append(threading.get_ident())
            return super().get_one_or_throw(platform_id)

    repo = _ThreadRecordingRepository([make_platform("configured", openai_key="sk-openai")])

    async def _service_on_loop() -> ModelService:
        loop_threads.append(threading.get_ident())
        return ModelService(repo)

    app.dependency_overrides[get_model_service] = _service_on_loop
    fake = FakeClient(json.dumps({"icon": "mail", "explanation": "email", "isNewRequest": True}))
    monkeypatch.setattr("infra.factories.model_factory.OpenAIClient", lambda cfg: fake)

    r = client.post("/v1/platforms/configured/copilot/icon", json={"requirement": "Email me"})

    assert r.status_code == 200
    assert r.json() == {"icon": "https://cdn.example.com/icons/mail.svg"}
    assert lookup_threads and loop_threads
    assert lookup_threads[0] != loop_threads[0]
