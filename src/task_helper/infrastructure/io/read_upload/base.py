from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ....domain.media_types import guess_media_type
from ....domain.models import UploadedFile


class ReadUpload(ABC):
    """
    Abstract reader turning a file on disk into an UploadedFile.
    """

    @abstractmethod
    def read(self, path: str | Path, media_type: str) -> UploadedFile:
        """Read the file and return it with its declared media type."""
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def supports(cls, media_type: str) -> bool:
        """Return True if this reader handles the given media type."""
        raise NotImplementedError

    @classmethod
    def for_media_type(cls, media_type: str) -> "ReadUpload":
        """
        Text-like types are read as text, everything else as a data URL.
        """
        from .data_url_reader import DataUrlReader
        from .text_reader import TextReader

        readers = [TextReader, DataUrlReader]

        for reader_cls in readers:
            if reader_cls.supports(media_type):
                return reader_cls()

        raise ValueError(f"No upload reader for media type: {media_type!r}")


def read_upload_file(path: str | Path, media_type: Optional[str] = None) -> UploadedFile:
    p = Path(path)
    declared = guess_media_type(p) if media_type is None else media_type
    return ReadUpload.for_media_type(declared).read(p, declared)


async def read_upload(path: str | Path, media_type: Optional[str] = None) -> UploadedFile:
    return await asyncio.to_thread(read_upload_file, path, media_type)
