import uuid
from typing import List

from config.logging import logger
from domain.models import Field, FieldType
from domain.ports import FieldRepositoryPort


class FieldService:
    def __init__(self, repo: FieldRepositoryPort):
        self.repo = repo

    def create(self, table_id: str, name: str, field_type: FieldType) -> Field:
        field = Field(id=uuid.uuid4().hex, table_id=table_id, name=name, type=FieldType(field_type))
        self.repo.add(field)
        logger.info(f"[fields] Created field {field.id} ({field.type.value}) in table {table_id}")
        return field

    def get(self, table_id: str, field_id: str) -> Field:
        return self.repo.get(table_id, field_id)

    def delete(self, table_id: str, field_id: str) -> Field:
        field = self.repo.delete(table_id, field_id)
        logger.info(f"[fields] Deleted field {field_id} from table {table_id}")
        return field

    def list(self, table_id: str) -> List[Field]:
        return self.repo.list(table_id)
