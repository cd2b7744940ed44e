from __future__ import annotations
from enum import Enum
from typing import Any, List

from ..domain.models import NormalizedAnswer, ReplyPayload


class ReplyShape(str, Enum):
    FLAT = "flat"               # {"output_text": "..."}
    OUTPUT_LIST = "output"      # {"output": [{"content": [{"text": ...}]}, ...]}
    CHOICES = "choices"         # {"choices": [{"message": {"content": ...}}, ...]}
    UNRECOGNIZED = "unrecognized"


def _text_of(obj: Any, key: str = "text") -> str:
    if isinstance(obj, dict):
        value = obj.get(key)
        if isinstance(value, str):
            return value
    return ""


def classify_reply(payload: ReplyPayload) -> ReplyShape:
    """Pick the reply shape; checked in fixed priority order."""
    if not isinstance(payload, dict):
        return ReplyShape.UNRECOGNIZED
    if _text_of(payload, "output_text"):
        return ReplyShape.FLAT
    if isinstance(payload.get("output"), list):
        return ReplyShape.OUTPUT_LIST
    if isinstance(payload.get("choices"), list):
        return ReplyShape.CHOICES
    return ReplyShape.UNRECOGNIZED


def _from_output_list(items: List[Any]) -> str:
    texts: List[str] = []
    for item in items:
        content = item.get("content") if isinstance(item, dict) else None
        if isinstance(content, list):
            texts.append("\n".join(_text_of(part) for part in content))
        else:
            texts.append(_text_of(item))
    return "\n".join(texts)


def _from_choices(choices: List[Any]) -> str:
    texts: List[str] = []
    for choice in choices:
        message = choice.get("message") if isinstance(choice, dict) else None
        texts.append(_text_of(message, "content") or _text_of(choice))
    return "\n".join(texts)


def normalize_reply(payload: ReplyPayload) -> NormalizedAnswer:
    """
    Extract flat answer text from a success payload.

    Total: unknown shapes, `{}` and `None` all give an empty string.
    """
    shape = classify_reply(payload)
    if shape is ReplyShape.FLAT:
        return NormalizedAnswer(text=payload["output_text"])
    if shape is ReplyShape.OUTPUT_LIST:
        return NormalizedAnswer(text=_from_output_list(payload["output"]))
    if shape is ReplyShape.CHOICES:
        return NormalizedAnswer(text=_from_choices(payload["choices"]))
    return NormalizedAnswer(text="")
