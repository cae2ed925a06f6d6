from typing import Sequence
import tiktoken

from domain.ports import ChatMessage


def count_tokens_tiktoken(messages: Sequence[ChatMessage], model: str) -> int:
    """
    Count chat tokens with tiktoken, following the OpenAI chat message layout.
    Azure deployment names are not model names, so unknown models fall back to o200k_base.
    """
    try:
        enc = tiktoken.encoding_for_model(model)
    except KeyError:
        enc = tiktoken.get_encoding("o200k_base")

    tokens = 0
    for msg in messages:
        tokens += 4  # per-message overhead
        tokens += len(enc.encode(msg.role))
        tokens += len(enc.encode(msg.content or ""))

    tokens += 3  # assistant reply priming
    return tokens
