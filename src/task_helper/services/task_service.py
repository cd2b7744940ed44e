from __future__ import annotations
import asyncio
import logging
from typing import Sequence

from ..config.settings import Settings
from ..domain.models import TaskResult
from ..infrastructure.llm.base import LLMProvider
from ..infrastructure.llm.exceptions import ValidationError
from .invoker import ModelInvoker
from .normalizer import normalize_reply
from .previews import UploadSource, collect_previews
from .prompts import build_task_prompt

logger = logging.getLogger(__name__)


def validate_task_input(task: str, files: Sequence[UploadSource]) -> None:
    if not (task or "").strip() and not files:
        raise ValidationError("Please enter a task and/or upload files.")


class TaskService:
    def __init__(self, provider: LLMProvider, settings: Settings):
        self.provider = provider
        self.settings = settings

    async def run(self, task: str, files: Sequence[UploadSource]) -> TaskResult:
        """
        files -> previews -> prompt -> invocation -> normalized text.

        Raises ValidationError before any work when both inputs are empty,
        ModelError / TransportError when the final attempt failed.
        """
        validate_task_input(task, files)

        previews = await collect_previews(files, self.settings)
        prompt = build_task_prompt(task, previews)
        logger.info("Prompt assembled: %d file(s), %d chars", len(previews), len(prompt.rendered))

        invoker = ModelInvoker(self.provider, self.settings)
        result = await asyncio.to_thread(invoker.invoke, prompt)

        answer = normalize_reply(result.payload)
        return TaskResult(answer=answer, model=result.model, prompt=prompt)

    def run_sync(self, task: str, files: Sequence[UploadSource]) -> TaskResult:
        return asyncio.run(self.run(task, files))
