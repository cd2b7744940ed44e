from __future__ import annotations

import base64
from pathlib import Path

from ....domain.media_types import classify_media_type
from ....domain.models import MediaClass, UploadedFile
from ...llm.exceptions import DocumentReadError
from .base import ReadUpload


def to_data_url(raw: bytes, media_type: str) -> str:
    encoded = base64.b64encode(raw).decode("ascii")
    return f"data:{media_type or 'application/octet-stream'};base64,{encoded}"


class DataUrlReader(ReadUpload):
    @classmethod
    def supports(cls, media_type: str) -> bool:
        return classify_media_type(media_type) is not MediaClass.TEXT

    def read(self, path: str | Path, media_type: str) -> UploadedFile:
        p = Path(path)
        try:
            raw = p.read_bytes()
        except OSError as e:
            raise DocumentReadError(f"Failed to read file {p}: {e}") from e
        return UploadedFile(
            name=p.name,
            media_type=media_type,
            size=len(raw),
            content=to_data_url(raw, media_type),
        )
