"""Synthesis endpoint.

- POST /synthesize - Multipart form with ``prompt`` and one or more
  ``images``; returns the generated image data URL and/or text.

Each request uses its own intake, so it never touches the GUI's selection.
"""

from typing import Annotated, Any

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi import status as http_status

from image_synth.errors import (
    EncodingFailure,
    ImageSynthError,
    SubmissionValidationError,
    SynthesisError,
)
from image_synth.intake import ImageIntake
from image_synth.synthesis.client import validate_request
from web.deps import AppClient, read_uploads

router = APIRouter()


def _error_status(error: ImageSynthError) -> int:
    """Map an error to an HTTP status code."""
    if isinstance(error, SubmissionValidationError):
        return http_status.HTTP_400_BAD_REQUEST
    if isinstance(error, EncodingFailure):
        return 422
    if isinstance(error, SynthesisError):
        return http_status.HTTP_502_BAD_GATEWAY
    return http_status.HTTP_500_INTERNAL_SERVER_ERROR


@router.post("")
async def synthesize_endpoint(
    client: AppClient,
    prompt: Annotated[str, Form()] = "",
    images: Annotated[list[UploadFile] | None, File()] = None,
) -> dict[str, Any]:
    """Synthesize a new image from the uploaded images and prompt.

    Args:
        client: Synthesis client.
        prompt: Text prompt.
        images: Source images in order.

    Returns:
        ``{"image_url": ..., "text": ...}``.
    """
    files = await read_uploads(images or [])
    with ImageIntake() as intake:
        intake.add(files)
        try:
            validate_request(prompt, intake.entries)
            encoded = await intake.encode_all()
            result = await client.synthesize(prompt, encoded)
        except ImageSynthError as e:
            raise HTTPException(
                status_code=_error_status(e),
                detail=e.to_dict(),
            ) from None

    return {"image_url": result.image_url, "text": result.text}
