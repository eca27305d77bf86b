"""Request dependencies for FastAPI.

The app holds one synthesis session for its lifetime; route handlers get
it, or its client and settings, through dependency injection.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request, UploadFile

from image_synth.config import Settings
from image_synth.intake import MemoryImageFile
from image_synth.synthesis import SynthesisSession
from image_synth.synthesis.session import Synthesizer


def get_session(request: Request) -> SynthesisSession:
    """Get the synthesis session from app state.

    Args:
        request: FastAPI request object.

    Returns:
        The app's synthesis session.
    """
    session: Any = request.app.state.session
    return session  # type: ignore[no-any-return]


def get_client(
    session: SynthesisSession = Depends(get_session),
) -> Synthesizer:
    """Get the synthesis client shared with the GUI session."""
    return session.client


def get_app_settings(request: Request) -> Settings:
    """Get the settings the app was created with."""
    settings: Any = request.app.state.settings
    return settings  # type: ignore[no-any-return]


# Type aliases for dependencies
AppSession = Annotated[SynthesisSession, Depends(get_session)]
AppClient = Annotated[Synthesizer, Depends(get_client)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]


async def read_uploads(uploads: list[UploadFile]) -> list[MemoryImageFile]:
    """Read uploaded files into memory-backed image files.

    Empty parts without a filename are skipped; browsers send one when the
    file picker is submitted with nothing selected.
    """
    files: list[MemoryImageFile] = []
    for upload in uploads:
        content = await upload.read()
        if not upload.filename and not content:
            continue
        files.append(
            MemoryImageFile(
                filename=upload.filename or "upload",
                content=content,
                declared_type=upload.content_type,
            )
        )
    return files
