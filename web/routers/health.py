"""Liveness and service info endpoints."""

from typing import Any

from fastapi import APIRouter

from image_synth import __version__
from web.deps import AppSession, AppSettings

router = APIRouter()


@router.get("/health")
def health(session: AppSession, settings: AppSettings) -> dict[str, Any]:
    """Report liveness along with the GUI session's submission state.

    Returns:
        Status, version, configured model, and whether a submission is running.
    """
    return {
        "status": "ok",
        "version": __version__,
        "model": settings.model,
        "state": session.state.value,
        "busy": session.busy,
    }


@router.get("/")
def root() -> dict[str, str]:
    """Name the service and point at the GUI."""
    return {"name": "Image Synth API", "version": __version__, "gui": "/ui/"}
