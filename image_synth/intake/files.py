"""File handles accepted by the image intake.

A file handle only needs a filename, a declared media type, and an async
``read()`` returning the full content. Local files are read in a worker
thread; uploaded files already hold their bytes in memory.
"""

from __future__ import annotations

import asyncio
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

DEFAULT_MEDIA_TYPE = "application/octet-stream"


def guess_media_type(filename: str) -> str:
    """Guess a media type from a filename extension.

    Args:
        filename: File name or path.

    Returns:
        Guessed media type, or application/octet-stream if unknown.
    """
    media_type, _ = mimetypes.guess_type(filename)
    return media_type or DEFAULT_MEDIA_TYPE


@runtime_checkable
class ImageFile(Protocol):
    """Anything the intake can hold and encode."""

    @property
    def filename(self) -> str: ...

    @property
    def media_type(self) -> str: ...

    async def read(self) -> bytes: ...


@dataclass(frozen=True)
class LocalImageFile:
    """Image file on the local filesystem.

    Attributes:
        path: Path to the file.
        declared_type: Media type override; guessed from the suffix if None.
    """

    path: Path
    declared_type: str | None = None

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def media_type(self) -> str:
        return self.declared_type or guess_media_type(self.path.name)

    async def read(self) -> bytes:
        """Read the whole file.

        Raises:
            OSError: If the file cannot be read.
        """
        return await asyncio.to_thread(self.path.read_bytes)


@dataclass(frozen=True)
class MemoryImageFile:
    """Image content already held in memory, e.g. from a browser upload."""

    filename: str
    content: bytes
    declared_type: str | None = None

    @property
    def media_type(self) -> str:
        return self.declared_type or guess_media_type(self.filename)

    async def read(self) -> bytes:
        return self.content


__all__ = [
    "DEFAULT_MEDIA_TYPE",
    "ImageFile",
    "LocalImageFile",
    "MemoryImageFile",
    "guess_media_type",
]
