from __future__ import annotations

from pathlib import Path

from ....domain.media_types import classify_media_type
from ....domain.models import MediaClass, UploadedFile
from ...llm.exceptions import DocumentReadError
from .base import ReadUpload


class TextReader(ReadUpload):
    @classmethod
    def supports(cls, media_type: str) -> bool:
        return classify_media_type(media_type) is MediaClass.TEXT

    def read(self, path: str | Path, media_type: str) -> UploadedFile:
        p = Path(path)
        try:
            text = p.read_text(encoding="utf-8", errors="ignore")
            size = p.stat().st_size
        except OSError as e:
            raise DocumentReadError(f"Failed to read text file {p}: {e}") from e
        return UploadedFile(name=p.name, media_type=media_type, size=size, content=text)
