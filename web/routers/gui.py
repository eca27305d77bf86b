"""Web GUI router for server-rendered HTML pages.

This module provides the /ui routes for the web GUI, using Jinja2 templates
for server-side rendering. It drives the app's synthesis session directly
(not through the HTTP API):

- GET  /ui/                      - Upload, preview, prompt, and result page
- POST /ui/images                - Add uploaded images
- POST /ui/images/{index}/remove - Remove one image
- POST /ui/images/clear          - Remove all images
- POST /ui/submit                - Run a synthesis with the given prompt
- GET  /ui/previews/{token}      - Serve a live preview thumbnail
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile
from fastapi import status as http_status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from image_synth import __version__
from image_synth.errors import SubmissionInProgressError
from image_synth.synthesis import SynthesisSession
from image_synth.types import SubmissionState
from web.deps import AppSession, AppSettings, read_uploads

router = APIRouter()

templates = Jinja2Templates(directory=Path(__file__).parent.parent / "templates")


def _redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/ui/", status_code=http_status.HTTP_303_SEE_OTHER)


def _render_page(
    request: Request,
    session: SynthesisSession,
    model: str,
    status_code: int = http_status.HTTP_200_OK,
) -> HTMLResponse:
    """Render the main page for the current session state."""
    return templates.TemplateResponse(
        request=request,
        name="index.html",
        context={
            "version": __version__,
            "model": model,
            "entries": list(enumerate(session.intake.entries)),
            "prompt": session.prompt,
            "result": session.result,
            "error": session.error,
            "busy": session.busy,
            "can_submit": session.can_submit,
        },
        status_code=status_code,
    )


@router.get("/", response_class=HTMLResponse, name="gui_index")
def index(
    request: Request,
    session: AppSession,
    settings: AppSettings,
) -> HTMLResponse:
    """Render the synthesis page."""
    return _render_page(request, session, settings.model)


@router.post("/images", name="gui_images_add")
async def images_add(
    session: AppSession,
    images: Annotated[list[UploadFile] | None, File()] = None,
) -> RedirectResponse:
    """Add uploaded images to the selection."""
    files = await read_uploads(images or [])
    session.intake.add(files)
    return _redirect_home()


@router.post("/images/clear", name="gui_images_clear")
def images_clear(session: AppSession) -> RedirectResponse:
    """Remove every image from the selection."""
    session.intake.clear()
    return _redirect_home()


@router.post("/images/{index}/remove", name="gui_images_remove")
def images_remove(index: int, session: AppSession) -> RedirectResponse:
    """Remove one image from the selection."""
    try:
        session.intake.remove(index)
    except IndexError:
        raise HTTPException(
            status_code=http_status.HTTP_404_NOT_FOUND,
            detail=f"Image not found: {index}",
        ) from None
    return _redirect_home()


@router.post("/submit", response_class=HTMLResponse, name="gui_submit")
async def submit(
    request: Request,
    session: AppSession,
    settings: AppSettings,
    prompt: Annotated[str, Form()] = "",
) -> HTMLResponse:
    """Run a synthesis and render the page with the result or error."""
    try:
        await session.submit(prompt)
    except SubmissionInProgressError as e:
        raise HTTPException(
            status_code=http_status.HTTP_409_CONFLICT,
            detail=e.to_dict(),
        ) from None

    status_code = http_status.HTTP_200_OK
    if session.last_outcome is SubmissionState.FAILED:
        status_code = http_status.HTTP_502_BAD_GATEWAY
    elif session.error is not None:
        status_code = http_status.HTTP_400_BAD_REQUEST
    return _render_page(request, session, settings.model, status_code=status_code)


@router.get("/previews/{token}", name="gui_preview")
async def preview(token: str, session: AppSession) -> Response:
    """Serve the image behind a live preview reference."""
    file = session.intake.registry.resolve(token)
    if file is None:
        raise HTTPException(
            status_code=http_status.HTTP_404_NOT_FOUND,
            detail="Preview not found",
        )
    return Response(content=await file.read(), media_type=file.media_type)
