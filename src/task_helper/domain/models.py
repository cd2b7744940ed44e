from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

FileContent = Union[str, bytes, None]
ReplyPayload = Any   # decoded JSON body, None when unreadable


class MediaClass(str, Enum):
    TEXT = "text"
    BINARY = "binary"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class UploadedFile:
    name: str = ""
    media_type: str = ""
    size: int = 0
    content: FileContent = None   # text, data URL / base64 string, or raw bytes


@dataclass(frozen=True)
class FilePreview:
    name: str
    media_type: str
    media_class: MediaClass
    text: str
    truncated: bool = False
    snippet: Optional[str] = None   # encoded payload excerpt (binary only)


@dataclass(frozen=True)
class AssembledPrompt:
    task: str
    previews: Tuple[FilePreview, ...]
    rendered: str


@dataclass(frozen=True)
class InvocationRequest:
    model: str
    input: Union[str, List[Dict[str, str]]]
    temperature: float
    max_output_tokens: int
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model,
            "input": self.input,
            "temperature": self.temperature,
            "max_output_tokens": self.max_output_tokens,
        }
        payload.update(self.extensions)
        return payload


@dataclass(frozen=True)
class InvocationResult:
    ok: bool
    status: int
    payload: ReplyPayload = None
    model: str = ""


@dataclass(frozen=True)
class NormalizedAnswer:
    text: str = ""


@dataclass
class TaskResult:
    answer: NormalizedAnswer
    model: str                      # model that produced the answer
    prompt: AssembledPrompt
