from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from config.logging import logger
from domain.ports import ChatMessage
from infra.providers.base import ModelHandle
from utils.markdown import extract_json_object

T = TypeVar("T", bound=BaseModel)


class GenerationError(RuntimeError):
    pass


def generate_object(
    handle: ModelHandle,
    *,
    system: str,
    prompt: str,
    schema: Type[T],
    temperature: float = 0.0,
) -> T:
    """Ask the model for a JSON object and validate it against `schema`."""
    messages = [ChatMessage("system", system), ChatMessage("user", prompt)]
    reply = handle(messages, temperature=temperature, json_mode=True)

    raw = extract_json_object(reply)
    if not raw:
        raise GenerationError(f"Model {handle.model} returned no JSON object")
    try:
        return schema.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"[generation] Invalid {schema.__name__} from {handle.model}: {e}")
        raise GenerationError(f"Model {handle.model} returned an invalid {schema.__name__}") from e
