from __future__ import annotations
import logging
from enum import Enum
from typing import List, Optional

from ..config.settings import Settings
from ..domain.models import AssembledPrompt, InvocationRequest, InvocationResult
from ..infrastructure.llm.base import LLMProvider
from ..infrastructure.llm.capabilities import extension_params
from ..infrastructure.llm.exceptions import ModelError, TransportError
from .prompts import build_messages

logger = logging.getLogger(__name__)


class InvokerState(str, Enum):
    ATTEMPT_PRIMARY = "attempt_primary"
    ATTEMPT_FALLBACK = "attempt_fallback"
    DONE = "done"
    FAILED = "failed"


def is_client_error(status: int) -> bool:
    return 400 <= status <= 499


class ModelInvoker:
    """
    Sends a prompt to the primary model and, on a 4xx answer, once more to
    the fallback model. At most two attempts per `invoke` call.

    One invoker serves one invocation; TaskService builds a fresh one per run.
    """

    def __init__(self, provider: LLMProvider, settings: Settings):
        self.provider = provider
        self.settings = settings
        self.state = InvokerState.ATTEMPT_PRIMARY
        self.attempts: List[str] = []
        self.last_result: Optional[InvocationResult] = None

    @property
    def has_distinct_fallback(self) -> bool:
        return bool(self.fallback_model) and self.fallback_model != self.primary_model

    @property
    def primary_model(self) -> str:
        return (self.settings.primary_model or "").strip()

    @property
    def fallback_model(self) -> str:
        return (self.settings.fallback_model or "").strip()

    def build_request(self, model: str, prompt: AssembledPrompt) -> InvocationRequest:
        if self.settings.input_format == "messages":
            model_input = build_messages(prompt)
        else:
            model_input = prompt.rendered
        return InvocationRequest(
            model=model,
            input=model_input,
            temperature=self.settings.temperature,
            max_output_tokens=self.settings.max_output_tokens,
            extensions=extension_params(model, self.settings),
        )

    def _attempt(self, model: str, prompt: AssembledPrompt) -> InvocationResult:
        self.attempts.append(model)
        result = self.provider.send(self.build_request(model, prompt))
        self.last_result = result
        return result

    def invoke(self, prompt: AssembledPrompt) -> InvocationResult:
        """
        Run the attempt state machine to DONE or FAILED.

        Returns the successful InvocationResult; raises ModelError or
        TransportError describing the final attempt otherwise.
        """
        if self.state is not InvokerState.ATTEMPT_PRIMARY:
            raise RuntimeError("ModelInvoker instances are single-use")

        primary = self.primary_model
        try:
            result = self._attempt(primary, prompt)
        except TransportError:
            self.state = InvokerState.FAILED
            logger.error("Transport failure on primary model %s", primary)
            raise

        if result.ok:
            self.state = InvokerState.DONE
            return result

        if not (is_client_error(result.status) and self.has_distinct_fallback):
            self.state = InvokerState.FAILED
            logger.error("Model %s failed with HTTP %s", primary, result.status)
            raise ModelError(result.status, result.payload, model=primary)

        self.state = InvokerState.ATTEMPT_FALLBACK
        fallback = self.fallback_model
        logger.warning(
            "Model %s rejected request (HTTP %s); retrying once with %s",
            primary,
            result.status,
            fallback,
        )

        try:
            result = self._attempt(fallback, prompt)
        except TransportError:
            self.state = InvokerState.FAILED
            logger.error("Transport failure on fallback model %s", fallback)
            raise

        if result.ok:
            self.state = InvokerState.DONE
            return result

        self.state = InvokerState.FAILED
        logger.error("Fallback model %s failed with HTTP %s", fallback, result.status)
        raise ModelError(result.status, result.payload, model=fallback)
