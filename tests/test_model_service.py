from __future__ import annotations

import pytest

from application.model_service import PROVIDER_PRIORITY, ModelService, get_default_provider
from conftest import CountingPlatformRepository, make_platform
from domain.models import CopilotSettings, OpenAIProviderSettings, Platform, ProviderKind
from infra.providers.azure_client import AzureOpenAIClient
from infra.providers.base import ProviderConfigError
from infra.providers.openai_client import OpenAIClient


def _service(*platforms: Platform) -> ModelService:
    return ModelService(CountingPlatformRepository(platforms))


def test_openai_only_selects_openai(fake_sdk_clients) -> None:
    handle = _service(make_platform(openai_key="sk-openai")).resolve("platform-1")

    assert handle.provider == ProviderKind.OPENAI
    assert handle.model == "gpt-4o"
    assert fake_sdk_clients[0].cfg.api_key == "sk-openai"


def test_both_providers_configured_prefers_openai_every_time(fake_sdk_clients) -> None:
    service = _service(make_platform(openai_key="sk-openai", azure_key="az-key"))

    kinds = [service.resolve("platform-1").provider for _ in range(5)]

    assert kinds == [ProviderKind.OPENAI] * 5


def test_azure_only_binds_deployment_name(fake_sdk_clients) -> None:
    platform = make_platform(azure_key="az-key", resource_name="contoso", deployment_name="copilot-4o")

    handle = _service(platform).resolve("platform-1")

    assert handle.provider == ProviderKind.AZURE_OPENAI
    assert handle.model == "copilot-4o"
    cfg = fake_sdk_clients[0].cfg
    assert cfg.api_key == "az-key"
    assert cfg.azure_api_base == "https://contoso.openai.azure.com"
    assert cfg.azure_api_version


def test_missing_copilot_settings_raises_config_error() -> None:
    service = _service(Platform(id="platform-1", name="Acme"))

    with pytest.raises(ProviderConfigError, match="No copilot settings found") as exc_info:
        service.resolve("platform-1")

    assert exc_info.value.platform_id == "platform-1"
    assert exc_info.value.code == "COPILOT_FAILED"


def test_all_keys_empty_raises_no_default_provider() -> None:
    with pytest.raises(ProviderConfigError, match="No default provider found"):
        _service(make_platform()).resolve("platform-1")


def test_unknown_platform_is_wrapped_with_cause() -> None:
    with pytest.raises(ProviderConfigError, match="Platform missing not found") as exc_info:
        _service().resolve("missing")

    assert isinstance(exc_info.value.__cause__, LookupError)
    assert exc_info.value.platform_id == "missing"


def test_unexpected_lookup_failure_is_normalized() -> None:
    class BrokenRepository:
        def get_one_or_throw(self, platform_id: str) -> Platform:
            raise OSError("disk unavailable")

    with pytest.raises(ProviderConfigError, match="disk unavailable") as exc_info:
        ModelService(BrokenRepository()).resolve("platform-1")

    assert isinstance(exc_info.value.__cause__, OSError)


def test_azure_without_deployment_name_fails() -> None:
    platform = make_platform(azure_key="az-key", deployment_name="")

    with pytest.raises(ProviderConfigError, match="deployment name is missing"):
        _service(platform).resolve("platform-1")


def test_every_call_reads_configuration_again(fake_sdk_clients) -> None:
    repo = CountingPlatformRepository([make_platform(openai_key="sk-openai")])
    service = ModelService(repo)

    first = service.resolve("platform-1")
    second = service.resolve("platform-1")

    assert repo.lookups == 2
    assert first is not second
    assert first.client is not second.client


def test_config_changes_are_seen_on_next_resolution(fake_sdk_clients) -> None:
    repo = CountingPlatformRepository([make_platform(openai_key="sk-openai")])
    service = ModelService(repo)
    assert service.resolve("platform-1").provider == ProviderKind.OPENAI

    repo.save(make_platform(azure_key="az-key"))

    assert service.resolve("platform-1").provider == ProviderKind.AZURE_OPENAI


def test_real_sdk_clients_are_built_without_network() -> None:
    openai_handle = _service(make_platform(openai_key="sk-test")).resolve("platform-1")
    azure_handle = _service(make_platform(azure_key="az-test")).resolve("platform-1")

    assert isinstance(openai_handle.client, OpenAIClient)
    assert isinstance(azure_handle.client, AzureOpenAIClient)


def test_default_provider_skips_absent_provider_entries() -> None:
    settings = CopilotSettings(providers={ProviderKind.OPENAI: OpenAIProviderSettings(api_key="")})

    with pytest.raises(ProviderConfigError):
        get_default_provider(settings)
    assert PROVIDER_PRIORITY == (ProviderKind.OPENAI, ProviderKind.AZURE_OPENAI)
