from functools import lru_cache

from application.field_service import FieldService
from application.model_service import ModelService
from config.settings import settings
from infra.db.field_repo import InMemoryFieldRepository
from infra.db.platform_repo import JsonPlatformRepository


@lru_cache
def get_model_service() -> ModelService:
    return ModelService(JsonPlatformRepository(settings.PLATFORMS_FILE))


@lru_cache
def get_field_service() -> FieldService:
    return FieldService(InMemoryFieldRepository())
