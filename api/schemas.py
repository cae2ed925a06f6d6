from datetime import datetime
from typing import Annotated, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from domain.models import Field as FieldEntity, FieldType


class CreateFieldRequest(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
    type: FieldType


class FieldResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    table_id: str = Field(alias="tableId")
    name: str
    type: FieldType
    created: datetime

    @classmethod
    def from_entity(cls, field: FieldEntity) -> "FieldResponse":
        return cls(id=field.id, table_id=field.table_id, name=field.name, type=field.type, created=field.created)


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class SelectIconRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    requirement: str = Field(min_length=1)
    conversation_history: List[ChatMessage] = Field(default_factory=list, alias="conversationHistory")


class SelectIconResponse(BaseModel):
    icon: Optional[str] = None
