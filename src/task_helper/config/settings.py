from __future__ import annotations
import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    primary_model: str = "gpt-4.1"
    fallback_model: str = "gpt-4.1"

    base_url: str = "https://api.openai.com"
    timeout_sec: int = 120

    temperature: float = 0.5
    max_output_tokens: int = 2000

    text_preview_chars: int = 200_000
    binary_snippet_chars: int = 200

    # only sent to models listed in the capability table
    verbosity: str = "medium"
    reasoning_effort: str = "medium"

    input_format: str = "text"  # "text" | "messages"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """
        Build settings from the process environment (and a .env file if present).
        Unset variables keep the dataclass defaults.
        """
        if dotenv:
            load_dotenv()

        defaults = cls()
        primary = (os.getenv("OPENAI_MODEL") or "").strip() or defaults.primary_model
        return cls(
            primary_model=primary,
            fallback_model=(os.getenv("OPENAI_FALLBACK_MODEL") or "").strip() or defaults.fallback_model,
            base_url=os.getenv("OPENAI_BASE_URL") or defaults.base_url,
            timeout_sec=int(os.getenv("OPENAI_TIMEOUT_SEC") or defaults.timeout_sec),
        )
