from __future__ import annotations
import logging
import os
from typing import Any, Dict, Optional

import requests

from ...domain.models import InvocationRequest, InvocationResult
from .base import LLMProvider
from .exceptions import ConfigurationError, TransportError

logger = logging.getLogger(__name__)


class OpenAIResponsesProvider(LLMProvider):
    """
    OpenAI provider using the Responses API.

    - POST {base_url}/v1/responses

    One call to `send` is one attempt: no retry loop lives here, the
    ModelInvoker decides whether a second (fallback) attempt happens.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = "https://api.openai.com",
        timeout_sec: int = 120,
    ):
        if api_key is None:
            api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ConfigurationError(
                "Missing OpenAI API key. Pass api_key=... or set OPENAI_API_KEY."
            )
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_sec = timeout_sec

    @property
    def url(self) -> str:
        return f"{self.base_url}/v1/responses"

    def _headers_json(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def send(self, request: InvocationRequest) -> InvocationResult:
        try:
            r = requests.post(
                self.url,
                headers=self._headers_json(),
                json=request.to_payload(),
                timeout=self.timeout_sec,
            )
        except requests.Timeout as e:
            raise TransportError(f"Timeout calling {self.url}", model=request.model) from e
        except requests.RequestException as e:
            raise TransportError(
                f"Network error calling {self.url}: {e}", model=request.model
            ) from e

        ok = 200 <= r.status_code < 300
        payload = self._parse_body(r, ok)
        logger.info("POST %s model=%s -> %s", self.url, request.model, r.status_code)
        return InvocationResult(ok=ok, status=r.status_code, payload=payload, model=request.model)

    def _parse_body(self, r: requests.Response, ok: bool) -> Any:
        try:
            return r.json()
        except ValueError:
            if ok:
                # 2xx with an unreadable body still counts as success
                logger.warning("Unparseable 2xx body from %s; treating payload as empty", self.url)
                return None
            return {"error": {"message": r.text[:1200]}}
