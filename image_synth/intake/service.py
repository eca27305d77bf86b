"""Image intake: the ordered list of files picked for a submission.

Each entry owns exactly one preview reference. The reference is released
when the entry is removed, when the list is cleared, or when the intake is
closed, so no preview outlives its entry.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import TracebackType

from image_synth.errors import EncodingFailure
from image_synth.intake.files import ImageFile
from image_synth.intake.preview import PreviewReference, PreviewRegistry
from image_synth.types import EncodedImage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageEntry:
    """A selected file and its preview reference."""

    file: ImageFile
    preview: PreviewReference


async def encode(entry: ImageEntry) -> EncodedImage:
    """Encode an entry's file content as base64 text.

    Args:
        entry: Entry to encode.

    Returns:
        EncodedImage with the file's declared media type.

    Raises:
        EncodingFailure: If the file cannot be read.
    """
    try:
        content = await entry.file.read()
    except (OSError, ValueError) as e:
        raise EncodingFailure(entry.file.filename, str(e) or type(e).__name__) from e

    data = base64.b64encode(content).decode("ascii")

    return EncodedImage(mime_type=entry.file.media_type, data=data)


class ImageIntake:
    """Ordered collection of image entries."""

    def __init__(self, registry: PreviewRegistry | None = None) -> None:
        self.registry = registry if registry is not None else PreviewRegistry()
        self._entries: list[ImageEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ImageEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> ImageEntry:
        return self._entries[index]

    def __enter__(self) -> ImageIntake:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def entries(self) -> list[ImageEntry]:
        """Snapshot of the current entries in selection order."""
        return list(self._entries)

    def add(self, files: Iterable[ImageFile]) -> list[ImageEntry]:
        """Append one entry per file, preserving order.

        Args:
            files: Selected files.

        Returns:
            The newly created entries.
        """
        added = [ImageEntry(file=f, preview=self.registry.create(f)) for f in files]
        self._entries.extend(added)
        logger.debug("Added %d image(s), %d total", len(added), len(self._entries))
        return added

    def remove(self, index: int) -> ImageEntry:
        """Release and remove the entry at index.

        Later entries shift down by one.

        Raises:
            IndexError: If index is out of range.
        """
        if not 0 <= index < len(self._entries):
            raise IndexError(f"image index out of range: {index}")
        entry = self._entries[index]
        self.registry.release(entry.preview)
        del self._entries[index]
        return entry

    def clear(self) -> None:
        """Release every preview and empty the collection."""
        for entry in self._entries:
            self.registry.release(entry.preview)
        self._entries.clear()

    def close(self) -> None:
        """Release all resources held by the intake."""
        if self._entries:
            logger.debug("Closing intake with %d image(s)", len(self._entries))
        self.clear()

    async def encode_all(self) -> list[EncodedImage]:
        """Encode every entry concurrently.

        Returns:
            Encoded images in entry order.

        Raises:
            EncodingFailure: If any file fails; nothing is returned then.
        """
        return list(await asyncio.gather(*(encode(e) for e in self._entries)))


__all__ = ["ImageEntry", "ImageIntake", "encode"]
