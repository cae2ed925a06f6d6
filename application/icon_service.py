import re
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from application.generation import generate_object
from application.prompts import icon_system_prompt, icon_user_prompt
from config.icons import ICONS, ICON_SET
from config.logging import logger
from config.settings import settings
from domain.ports import ChatMessage
from infra.providers.base import ModelHandle
from utils.tokens import count_tokens_tiktoken

_PREVIOUS_ICON_RE = re.compile(r'"icon":\s*"([^"]+)"')


class IconSelection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    icon: str
    explanation: str
    is_new_request: bool = Field(default=True, alias="isNewRequest")


def icon_url(name: str) -> str:
    return f"{settings.ICON_CDN_BASE.rstrip('/')}/{name}.svg"


def icon_name(url: str) -> str:
    name = url.rsplit("/", 1)[-1]
    return name[:-len(".svg")] if name.endswith(".svg") else name


def find_previous_icon(conversation_history: Sequence[ChatMessage]) -> Optional[str]:
    """Icon named in the most recent assistant message, if any."""
    for msg in reversed(conversation_history):
        if msg.role == "assistant":
            match = _PREVIOUS_ICON_RE.search(msg.content or "")
            return match.group(1) if match else None
    return None


def _trim_history(
    conversation_history: Sequence[ChatMessage],
    *,
    model: str,
    max_turns: int,
    max_tokens: int,
) -> List[ChatMessage]:
    """
    Keep the most recent `max_turns` messages, dropping older ones until the
    history fits in `max_tokens`. If tokens cannot be counted, the last
    `max_turns` messages are kept as they are.
    """
    history = list(conversation_history)[-max_turns:] if max_turns > 0 else []
    if not history:
        return []
    try:
        for keep in range(len(history), 0, -1):
            trial = history[-keep:]
            if count_tokens_tiktoken(trial, model) <= max_tokens:
                return trial
    except Exception as e:
        logger.warning(f"[icon] Token counting failed, keeping last {len(history)} messages: {e}")
        return history
    return []


def select_icon(
    handle: ModelHandle,
    requirement: str,
    conversation_history: Sequence[ChatMessage] = (),
) -> Optional[str]:
    """
    Pick an icon for an automation flow and return its CDN URL.

    A follow-up that only modifies the previous requirement keeps the icon
    from the last assistant message. Returns None when the model picks an
    unknown icon or anything goes wrong.
    """
    try:
        previous_icon = find_previous_icon(conversation_history)
        history = _trim_history(
            conversation_history,
            model=handle.model,
            max_turns=settings.ICON_HISTORY_MAX_TURNS,
            max_tokens=settings.ICON_HISTORY_MAX_TOKENS,
        )

        selection = generate_object(
            handle,
            system=icon_system_prompt(conversation_history=history, previous_icon=previous_icon, icons=ICONS),
            prompt=icon_user_prompt(requirement=requirement, previous_icon=previous_icon),
            schema=IconSelection,
            temperature=0,
        )

        logger.debug(
            f"[icon] requirement={requirement!r} selected={selection.icon} "
            f"is_new_request={selection.is_new_request} previous={previous_icon} "
            f"explanation={selection.explanation!r}"
        )

        if not selection.is_new_request and previous_icon in ICON_SET:
            return icon_url(previous_icon)

        if not selection.icon or selection.icon not in ICON_SET:
            return None

        return icon_url(selection.icon)
    except Exception as e:
        logger.exception(f"[icon] Icon selection failed: {e}")
        return None
