from config.settings import settings
from domain.models import AzureOpenAIProviderSettings, OpenAIProviderSettings, ProviderKind
from infra.providers.base import ModelHandle, ProviderConfig, ProviderConfigError
from infra.providers.openai_client import OpenAIClient
from infra.providers.azure_client import AzureOpenAIClient


def openai_config(provider: OpenAIProviderSettings) -> ProviderConfig:
    return ProviderConfig(
        provider=ProviderKind.OPENAI,
        api_key=provider.api_key,
        model=settings.OPENAI_MODEL,
    )


def azure_openai_config(provider: AzureOpenAIProviderSettings) -> ProviderConfig:
    if not provider.resource_name:
        raise ProviderConfigError("Azure OpenAI resource name is missing")
    if not provider.deployment_name:
        raise ProviderConfigError("Azure OpenAI deployment name is missing")
    return ProviderConfig(
        provider=ProviderKind.AZURE_OPENAI,
        api_key=provider.api_key,
        model=provider.deployment_name,
        azure_api_base=settings.AZURE_OPENAI_ENDPOINT_TEMPLATE.format(resource_name=provider.resource_name),
        azure_api_version=settings.AZURE_OPENAI_API_VERSION,
    )


def build_model_handle(cfg: ProviderConfig) -> ModelHandle:
    if cfg.provider == ProviderKind.OPENAI:
        client = OpenAIClient(cfg)
    else:
        client = AzureOpenAIClient(cfg)
    return ModelHandle(provider=cfg.provider, model=cfg.model, client=client)
