from __future__ import annotations
from abc import ABC, abstractmethod

from ...domain.models import InvocationRequest, InvocationResult


class LLMProvider(ABC):
    @abstractmethod
    def send(self, request: InvocationRequest) -> InvocationResult:
        """
        Perform exactly one network attempt.

        Returns an InvocationResult for any HTTP response (ok or not);
        raises TransportError when no response was received.
        """
        raise NotImplementedError
