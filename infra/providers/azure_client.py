from typing import Any, Dict, Sequence
from openai import AzureOpenAI
from domain.ports import LLMClientPort, ChatMessage
from infra.providers.base import ProviderConfig, ProviderConfigError

class AzureOpenAIClient(LLMClientPort):
    def __init__(self, cfg: ProviderConfig):
        if not cfg.api_key:
            raise ProviderConfigError("Azure OpenAI API key is missing")
        if not cfg.azure_api_base:
            raise ProviderConfigError("Azure OpenAI resource name is missing")
        self._client = AzureOpenAI(
            api_key=cfg.api_key,
            azure_endpoint=cfg.azure_api_base,
            api_version=cfg.azure_api_version,
        )

    def chat_completion(self, model: str, messages: Sequence[ChatMessage], temperature: float = 0.0,
                        json_mode: bool = False) -> str:
        kwargs: Dict[str, Any] = {
            "model": model,  # deployment name
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        resp = self._client.chat.completions.create(**kwargs)
        return resp.choices[0].message.content or ""
