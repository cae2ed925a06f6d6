from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional, Union


class ProviderKind(str, Enum):
    OPENAI = "OPENAI"
    AZURE_OPENAI = "AZURE_OPENAI"


@dataclass
class OpenAIProviderSettings:
    api_key: str = ""


@dataclass
class AzureOpenAIProviderSettings:
    api_key: str = ""
    resource_name: str = ""
    deployment_name: str = ""


ProviderSettings = Union[OpenAIProviderSettings, AzureOpenAIProviderSettings]


@dataclass
class CopilotSettings:
    providers: Dict[ProviderKind, ProviderSettings] = field(default_factory=dict)


@dataclass
class Platform:
    id: str
    name: str = ""
    copilot_settings: Optional[CopilotSettings] = None


class FieldType(str, Enum):
    TEXT = "TEXT"
    NUMBER = "NUMBER"
    DATE = "DATE"


@dataclass
class Field:
    id: str
    table_id: str
    name: str
    type: FieldType
    created: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
