from __future__ import annotations
import mimetypes
from pathlib import Path
from typing import Optional

from .models import MediaClass

TEXT_MARKERS = ("text", "csv", "json", "xml")
BINARY_MARKERS = ("pdf", "image")


def classify_media_type(media_type: Optional[str]) -> MediaClass:
    """
    Case-insensitive substring match, text markers first.
    An empty type is treated as binary.
    """
    t = (media_type or "").lower()
    if any(m in t for m in TEXT_MARKERS):
        return MediaClass.TEXT
    if not t or any(m in t for m in BINARY_MARKERS):
        return MediaClass.BINARY
    return MediaClass.UNSUPPORTED


def guess_media_type(path: str | Path) -> str:
    # empty string when the extension is unknown, like a browser upload
    guessed, _ = mimetypes.guess_type(str(path))
    return guessed or ""
