from typing import Any, Dict, Sequence
from openai import OpenAI
from domain.ports import LLMClientPort, ChatMessage
from infra.providers.base import ProviderConfig, ProviderConfigError

class OpenAIClient(LLMClientPort):
    def __init__(self, cfg: ProviderConfig):
        if not cfg.api_key:
            raise ProviderConfigError("OpenAI API key is missing")
        self._client = OpenAI(api_key=cfg.api_key)

    def chat_completion(self, model: str, messages: Sequence[ChatMessage], temperature: float = 0.0,
                        json_mode: bool = False) -> str:
        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        resp = self._client.chat.completions.create(**kwargs)
        return resp.choices[0].message.content or ""
