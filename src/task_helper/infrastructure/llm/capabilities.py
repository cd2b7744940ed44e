from __future__ import annotations
from typing import Any, Dict, FrozenSet

from ...config.settings import Settings

VERBOSITY = "verbosity"
REASONING_EFFORT = "reasoning_effort"

# Model id -> extension parameters it accepts on /v1/responses.
# Models missing from this table get the plain request body.
MODEL_CAPABILITIES: Dict[str, FrozenSet[str]] = {
    "gpt-5": frozenset({VERBOSITY, REASONING_EFFORT}),
    "gpt-5-mini": frozenset({VERBOSITY, REASONING_EFFORT}),
    "gpt-5-nano": frozenset({VERBOSITY, REASONING_EFFORT}),
    "gpt-5-chat-latest": frozenset({VERBOSITY}),
}


def capabilities_for(model: str) -> FrozenSet[str]:
    return MODEL_CAPABILITIES.get((model or "").strip(), frozenset())


def extension_params(model: str, settings: Settings) -> Dict[str, Any]:
    """
    Resolve the extra request fields for `model`.

    verbosity        -> {"text": {"verbosity": ...}}
    reasoning_effort -> {"reasoning": {"effort": ...}}
    """
    caps = capabilities_for(model)
    params: Dict[str, Any] = {}
    if VERBOSITY in caps:
        params["text"] = {"verbosity": settings.verbosity}
    if REASONING_EFFORT in caps:
        params["reasoning"] = {"effort": settings.reasoning_effort}
    return params
