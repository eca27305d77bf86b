"""Shared fixtures for image_synth tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types

from image_synth.intake import MemoryImageFile

# Smallest valid PNG signature plus a few bytes; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR" + bytes(range(32))
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + bytes(range(200, 256))
GENERATED_BYTES = b"\x89PNG\r\n\x1a\ngenerated-image"


def make_response(*parts: types.Part) -> types.GenerateContentResponse:
    """Build a response with one candidate holding the given parts."""
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(content=types.Content(role="model", parts=list(parts)))
        ]
    )


def image_part(data: bytes = GENERATED_BYTES, mime_type: str = "image/png") -> types.Part:
    """Build an inline-data response part."""
    return types.Part(inline_data=types.Blob(mime_type=mime_type, data=data))


def text_part(text: str) -> types.Part:
    """Build a text response part."""
    return types.Part(text=text)


def make_genai_client(
    response: types.GenerateContentResponse | None = None,
    side_effect: BaseException | None = None,
) -> MagicMock:
    """Build a stand-in for google.genai.Client with an async generate_content."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=response, side_effect=side_effect
    )
    return client


@pytest.fixture
def png_file() -> MemoryImageFile:
    """An in-memory PNG upload."""
    return MemoryImageFile(filename="cat.png", content=PNG_BYTES, declared_type="image/png")


@pytest.fixture
def jpeg_file() -> MemoryImageFile:
    """An in-memory JPEG upload."""
    return MemoryImageFile(
        filename="space.jpg", content=JPEG_BYTES, declared_type="image/jpeg"
    )


@pytest.fixture
def image_and_text_response() -> types.GenerateContentResponse:
    """A response with one image part and one text part."""
    return make_response(image_part(), text_part("Here is your cat in space."))
