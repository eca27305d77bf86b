"""Preview references for intake entries.

A preview reference is an opaque token that lets the GUI show a thumbnail
of a file before it is submitted. The registry keeps token -> file until
the token is released; a released token resolves to nothing and cannot be
released again.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass

from image_synth.errors import PreviewReleasedError
from image_synth.intake.files import ImageFile

logger = logging.getLogger(__name__)

PREVIEW_URL_PREFIX = "/ui/previews/"


@dataclass(frozen=True)
class PreviewReference:
    """Handle to a live preview."""

    token: str

    @property
    def url(self) -> str:
        return f"{PREVIEW_URL_PREFIX}{self.token}"


class PreviewRegistry:
    """Process-local store of live preview references."""

    def __init__(self) -> None:
        self._files: dict[str, ImageFile] = {}

    def __len__(self) -> int:
        return len(self._files)

    def __contains__(self, ref: object) -> bool:
        return isinstance(ref, PreviewReference) and ref.token in self._files

    def create(self, file: ImageFile) -> PreviewReference:
        """Mint a new preview reference for a file."""
        token = secrets.token_urlsafe(16)
        self._files[token] = file
        logger.debug("Created preview %s for %s", token, file.filename)
        return PreviewReference(token)

    def resolve(self, token: str) -> ImageFile | None:
        """Return the file behind a live token, or None once released."""
        return self._files.get(token)

    def release(self, ref: PreviewReference) -> None:
        """Release a preview reference.

        Raises:
            PreviewReleasedError: If the reference was already released.
        """
        try:
            file = self._files.pop(ref.token)
        except KeyError:
            raise PreviewReleasedError(ref.token) from None
        logger.debug("Released preview %s for %s", ref.token, file.filename)


__all__ = ["PREVIEW_URL_PREFIX", "PreviewReference", "PreviewRegistry"]
