from dataclasses import dataclass
from typing import Optional, Sequence

from config.constant import ERROR_CODE_COPILOT_FAILED
from domain.models import ProviderKind
from domain.ports import ChatMessage, LLMClientPort


class ProviderConfigError(RuntimeError):
    """Raised when a platform's copilot provider cannot be turned into a model."""

    code = ERROR_CODE_COPILOT_FAILED

    def __init__(self, message: str, platform_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.platform_id = platform_id


@dataclass
class ProviderConfig:
    provider: ProviderKind
    api_key: str = ""
    model: str = ""              # OpenAI model or Azure deployment name
    azure_api_base: str = ""
    azure_api_version: str = ""


@dataclass(frozen=True)
class ModelHandle:
    provider: ProviderKind
    model: str
    client: LLMClientPort

    def __call__(self, messages: Sequence[ChatMessage], temperature: float = 0.0, json_mode: bool = False) -> str:
        return self.client.chat_completion(
            model=self.model,
            messages=messages,
            temperature=temperature,
            json_mode=json_mode,
        )
