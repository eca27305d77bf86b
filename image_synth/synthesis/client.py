"""Synthesis client for the hosted multimodal generation model.

This module handles:
- Building one request from the prompt and the encoded images
- Calling the generation endpoint once through google-genai
- Parsing the first candidate into a SynthesisResult

Transport failures and empty responses raise distinct errors so callers
can tell "the call failed" apart from "the call returned nothing usable".
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Sequence, Sized
from typing import Any

from google import genai
from google.genai import types

from image_synth.config import DEFAULT_MODEL, Settings
from image_synth.errors import (
    VALIDATION_MESSAGE,
    EmptyResponseError,
    MissingCredentialError,
    SubmissionValidationError,
    SynthesisTransportError,
)
from image_synth.types import (
    EncodedImage,
    Modality,
    SynthesisRequest,
    SynthesisResult,
    build_data_url,
)

logger = logging.getLogger(__name__)

# The image model only answers when both modalities are requested
RESPONSE_MODALITIES = [Modality.IMAGE.value, Modality.TEXT.value]


def validate_request(prompt: str, images: Sized) -> None:
    """Check that a submission has at least one image and a prompt.

    Raises:
        SubmissionValidationError: If images are missing or the prompt is blank.
    """
    if len(images) == 0 or not prompt.strip():
        raise SubmissionValidationError(VALIDATION_MESSAGE)


def build_contents(request: SynthesisRequest) -> types.Content:
    """Build the request content: image parts in order, then the prompt.

    Args:
        request: Synthesis request.

    Returns:
        A single user Content with one part per image and one text part.
    """
    parts = [
        types.Part.from_bytes(data=image.decode(), mime_type=image.mime_type)
        for image in request.images
    ]
    parts.append(types.Part.from_text(text=request.prompt))
    return types.Content(role="user", parts=parts)


def build_config() -> types.GenerateContentConfig:
    """Build the generation config asking for image and text output."""
    return types.GenerateContentConfig(response_modalities=RESPONSE_MODALITIES)


def parse_response(response: types.GenerateContentResponse) -> SynthesisResult:
    """Extract the generated image and text from the first candidate.

    The first part with inline data becomes the image and the first part
    with text becomes the text; later parts of the same kind are ignored.

    Args:
        response: Response from generate_content.

    Returns:
        SynthesisResult, possibly empty.
    """
    if not response.candidates:
        return SynthesisResult()

    content = response.candidates[0].content
    if content is None or not content.parts:
        return SynthesisResult()

    image_url: str | None = None
    text: str | None = None
    for part in content.parts:
        if part.inline_data is not None and part.inline_data.data:
            if image_url is None:
                payload = base64.b64encode(part.inline_data.data).decode("ascii")
                image_url = build_data_url(part.inline_data.mime_type or "", payload)
        elif part.text:
            if text is None:
                text = part.text

    return SynthesisResult(image_url=image_url, text=text)


def _empty_reason(response: types.GenerateContentResponse) -> str:
    """Describe why a response carried no content, for the logs."""
    feedback = response.prompt_feedback
    if feedback is not None and feedback.block_reason:
        return f"prompt blocked: {feedback.block_reason}"
    if not response.candidates:
        return "no candidates"
    finish_reason = response.candidates[0].finish_reason
    if finish_reason:
        return f"finish reason: {finish_reason}"
    return "no usable parts"


class SynthesisClient:
    """Client for one-shot image synthesis.

    Args:
        client: Configured google-genai client.
        model: Model name.
    """

    def __init__(self, client: Any, model: str = DEFAULT_MODEL) -> None:
        self._client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> SynthesisClient:
        """Build a client from settings.

        Raises:
            MissingCredentialError: If no API key is configured.
        """
        if settings.api_key is None or not settings.api_key.get_secret_value():
            raise MissingCredentialError()
        client = genai.Client(api_key=settings.api_key.get_secret_value())
        return cls(client, model=settings.model)

    async def synthesize(
        self, prompt: str, images: Sequence[EncodedImage]
    ) -> SynthesisResult:
        """Send the images and prompt, returning the generated image and/or text.

        Args:
            prompt: Text prompt, sent verbatim.
            images: Encoded images, sent in order before the prompt.

        Returns:
            SynthesisResult with at least one field set.

        Raises:
            SubmissionValidationError: If images are empty or the prompt is blank.
            SynthesisTransportError: If the remote call fails.
            EmptyResponseError: If the response has no image and no text.
        """
        validate_request(prompt, images)
        request = SynthesisRequest(prompt=prompt, images=tuple(images))
        contents = build_contents(request)

        logger.info(
            "Requesting synthesis from %s with %d image(s)",
            self.model,
            len(request.images),
        )
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=contents,
                config=build_config(),
            )
        except Exception as e:
            logger.exception("Error calling generation API")
            raise SynthesisTransportError() from e

        result = parse_response(response)
        if result.is_empty:
            logger.warning(
                "Generation API returned no content (%s)", _empty_reason(response)
            )
            raise EmptyResponseError()

        logger.info(
            "Synthesis returned image=%s text=%s",
            result.image_url is not None,
            result.text is not None,
        )
        return result


__all__ = [
    "RESPONSE_MODALITIES",
    "SynthesisClient",
    "build_config",
    "build_contents",
    "parse_response",
    "validate_request",
]
