import re

_FENCE_RE = re.compile(r"```[A-Za-z0-9_.+\-]*\s*\n(.*?)```", re.DOTALL)


def extract_json_object(text: str) -> str:
    """
    Return the JSON object text in a model reply.
    Accepts a bare object, an object wrapped in a ``` fence, or an object surrounded by prose.
    Returns "" when no object is found.
    """
    if not text:
        return ""

    match = _FENCE_RE.search(text)
    if match:
        text = match.group(1)

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return ""
    return text[start:end + 1]
