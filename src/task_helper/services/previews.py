from __future__ import annotations
import asyncio
import base64
import binascii
import inspect
import logging
import re
from typing import Awaitable, List, Optional, Sequence, Tuple, Union

from ..config.settings import Settings
from ..domain.media_types import classify_media_type
from ..domain.models import FileContent, FilePreview, MediaClass, UploadedFile

logger = logging.getLogger(__name__)

NO_SNIPPET = "<no snippet>"

UploadSource = Union[UploadedFile, Awaitable[UploadedFile]]

# "data:<type>[;param=value]*;base64,"
BASE64_DATA_URL = re.compile(r"^data:[^,;]*(;[^,;]*)*;base64,", re.IGNORECASE)


def _data_url_payload(value: str) -> str:
    # "data:<type>;base64,<payload>" -> "<payload>"
    _, sep, rest = value.partition(",")
    return rest if sep else ""


def _as_text(content: FileContent) -> str:
    if content is None:
        return ""
    if isinstance(content, (bytes, bytearray)):
        return content.decode("utf-8", errors="replace")
    if not isinstance(content, str):
        return str(content)
    match = BASE64_DATA_URL.match(content)
    if match:
        try:
            raw = base64.b64decode(content[match.end():], validate=False)
        except (binascii.Error, ValueError):
            return content
        return raw.decode("utf-8", errors="replace")
    return content


def _as_encoded(content: FileContent) -> str:
    if content is None:
        return ""
    if isinstance(content, (bytes, bytearray)):
        return base64.b64encode(content).decode("ascii")
    if not isinstance(content, str):
        return ""
    if content.startswith("data:"):
        return _data_url_payload(content)
    return content


def extract_preview(upload: UploadedFile, settings: Optional[Settings] = None) -> FilePreview:
    """
    Turn one uploaded file into a bounded preview.

    Never raises: unknown types become a placeholder, binary content becomes
    a short base64 snippet, text is truncated silently.
    """
    settings = settings or Settings()
    name = upload.name or ""
    media_type = upload.media_type or ""
    media_class = classify_media_type(media_type)
    logger.debug("Preview %r (%s) classified as %s", name, media_type, media_class.value)

    if media_class is MediaClass.TEXT:
        text = _as_text(upload.content)
        cap = settings.text_preview_chars
        return FilePreview(
            name=name,
            media_type=media_type,
            media_class=media_class,
            text=text[:cap],
            truncated=len(text) > cap,
        )

    if media_class is MediaClass.BINARY:
        encoded = _as_encoded(upload.content)
        snippet = encoded[: settings.binary_snippet_chars]
        label = media_type or "binary"
        body = f"{snippet}..." if snippet else NO_SNIPPET
        return FilePreview(
            name=name,
            media_type=media_type,
            media_class=media_class,
            text=f"[Base64 {label} snippet: {body}]",
            truncated=len(encoded) > len(snippet),
            snippet=snippet,
        )

    return FilePreview(
        name=name,
        media_type=media_type,
        media_class=media_class,
        text=f"[Unsupported preview of {name} ({media_type})]",
    )


async def _extract_at(
    index: int, source: UploadSource, settings: Optional[Settings]
) -> Tuple[int, FilePreview]:
    upload = await source if inspect.isawaitable(source) else source
    return index, extract_preview(upload, settings)


async def collect_previews(
    sources: Sequence[UploadSource], settings: Optional[Settings] = None
) -> List[FilePreview]:
    """
    Extract previews for all sources concurrently.

    Sources may be ready UploadedFile objects or awaitables (e.g. disk reads).
    Results are put back into input order by index, never by completion order.
    """
    tasks = [
        asyncio.ensure_future(_extract_at(i, src, settings))
        for i, src in enumerate(sources)
    ]
    slots: List[Optional[FilePreview]] = [None] * len(tasks)
    try:
        for fut in asyncio.as_completed(tasks):
            index, preview = await fut
            slots[index] = preview
    finally:
        # a failed source must not leave its siblings running unobserved
        pending = [t for t in tasks if not t.done()]
        for t in pending:
            t.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        for t in tasks:
            if not t.cancelled():
                t.exception()
    return [p for p in slots if p is not None]
