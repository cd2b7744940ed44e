from __future__ import annotations
from typing import Any, Optional


class LLMError(Exception):
    pass


class ConfigurationError(LLMError):
    pass


class ValidationError(LLMError):
    pass


class TransportError(LLMError):
    """No response was received from the endpoint."""

    def __init__(self, message: str, model: str = ""):
        super().__init__(message)
        self.model = model


class ModelError(LLMError):
    """The endpoint answered with a non-2xx status; payload is forwarded unmodified."""

    def __init__(self, status: int, payload: Optional[Any] = None, model: str = ""):
        super().__init__(f"HTTP {status} from model {model!r}")
        self.status = status
        self.payload = payload
        self.model = model


class DocumentReadError(Exception):
    pass
