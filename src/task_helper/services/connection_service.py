from __future__ import annotations
from typing import Tuple

from ..config.settings import Settings
from ..infrastructure.llm.base import LLMProvider
from .invoker import ModelInvoker
from .normalizer import normalize_reply
from .prompts import build_probe_prompt


class ConnectionService:
    def __init__(self, provider: LLMProvider, settings: Settings):
        self.provider = provider
        self.settings = settings

    def test(self) -> Tuple[str, str]:
        """Send a probe through the normal invoker; returns (model that answered, reply text)."""
        result = ModelInvoker(self.provider, self.settings).invoke(build_probe_prompt())
        return result.model, normalize_reply(result.payload).text
