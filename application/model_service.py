from typing import Tuple

from config.logging import logger
from domain.models import CopilotSettings, ProviderKind
from domain.ports import PlatformRepositoryPort
from infra.factories.model_factory import azure_openai_config, build_model_handle, openai_config
from infra.providers.base import ModelHandle, ProviderConfig, ProviderConfigError

# Checked in order; the first provider with an API key wins.
PROVIDER_PRIORITY: Tuple[ProviderKind, ...] = (ProviderKind.OPENAI, ProviderKind.AZURE_OPENAI)


def get_default_provider(copilot_settings: CopilotSettings) -> ProviderKind:
    for kind in PROVIDER_PRIORITY:
        provider = copilot_settings.providers.get(kind)
        if provider is not None and provider.api_key:
            return kind
    raise ProviderConfigError("No default provider found")


def _provider_config(kind: ProviderKind, copilot_settings: CopilotSettings) -> ProviderConfig:
    provider = copilot_settings.providers[kind]
    if kind == ProviderKind.OPENAI:
        return openai_config(provider)
    return azure_openai_config(provider)


class ModelService:
    """Resolves a platform's copilot configuration into a model handle."""

    def __init__(self, platforms: PlatformRepositoryPort):
        self.platforms = platforms

    def resolve(self, platform_id: str) -> ModelHandle:
        try:
            platform = self.platforms.get_one_or_throw(platform_id)
            copilot_settings = platform.copilot_settings
            if copilot_settings is None:
                raise ProviderConfigError("No copilot settings found")
            kind = get_default_provider(copilot_settings)
            handle = build_model_handle(_provider_config(kind, copilot_settings))
        except ProviderConfigError as e:
            logger.error(f"[ModelService] Failed to initialize AI model platform_id={platform_id}: {e.message}")
            e.platform_id = platform_id
            raise
        except Exception as e:
            logger.exception(f"[ModelService] Failed to initialize AI model platform_id={platform_id}: {e}")
            raise ProviderConfigError(str(e) or "Failed to initialize AI model", platform_id=platform_id) from e

        logger.info(f"[ModelService] platform_id={platform_id} provider={handle.provider.value} model={handle.model}")
        return handle
