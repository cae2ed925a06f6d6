import threading
from typing import Dict, List

from domain.models import Field
from domain.ports import FieldNotFoundError, FieldRepositoryPort


class InMemoryFieldRepository(FieldRepositoryPort):
    def __init__(self):
        self._lock = threading.Lock()
        self._fields: Dict[str, Field] = {}

    def add(self, field: Field) -> Field:
        with self._lock:
            self._fields[field.id] = field
        return field

    def get(self, table_id: str, field_id: str) -> Field:
        with self._lock:
            field = self._fields.get(field_id)
        if field is None or field.table_id != table_id:
            raise FieldNotFoundError(field_id)
        return field

    def delete(self, table_id: str, field_id: str) -> Field:
        with self._lock:
            field = self._fields.get(field_id)
            if field is None or field.table_id != table_id:
                raise FieldNotFoundError(field_id)
            del self._fields[field_id]
        return field

    def list(self, table_id: str) -> List[Field]:
        with self._lock:
            fields = [f for f in self._fields.values() if f.table_id == table_id]
        return sorted(fields, key=lambda f: f.created)
