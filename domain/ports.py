from __future__ import annotations
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from domain.models import Field, Platform


@dataclass
class ChatMessage:
    role: str
    content: str


class PlatformNotFoundError(LookupError):
    def __init__(self, platform_id: str):
        super().__init__(f"Platform {platform_id} not found")
        self.platform_id = platform_id


class FieldNotFoundError(LookupError):
    def __init__(self, field_id: str):
        super().__init__(f"Field {field_id} not found")
        self.field_id = field_id


class LLMClientPort(Protocol):
    def chat_completion(
        self,
        model: str,
        messages: Sequence[ChatMessage],
        temperature: float = 0.0,
        json_mode: bool = False,
    ) -> str: ...


class PlatformRepositoryPort(Protocol):
    def get_one_or_throw(self, platform_id: str) -> Platform: ...

    def save(self, platform: Platform) -> Platform: ...

    def list(self) -> List[Platform]: ...


class FieldRepositoryPort(Protocol):
    def add(self, field: Field) -> Field: ...

    def get(self, table_id: str, field_id: str) -> Field: ...

    def delete(self, table_id: str, field_id: str) -> Field: ...

    def list(self, table_id: str) -> List[Field]: ...
