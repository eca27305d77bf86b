"""Shared type definitions for image_synth.

This module contains dataclasses, enums, and type aliases shared across
subpackages to avoid circular imports.
"""

import base64
import binascii
from dataclasses import dataclass
from enum import Enum

DATA_URL_PREFIX = "data:"
BASE64_MARKER = ";base64,"


class SubmissionState(str, Enum):
    """State of a synthesis submission."""

    IDLE = "idle"
    ENCODING = "encoding"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class Modality(str, Enum):
    """Output kinds requested from the generation endpoint."""

    IMAGE = "IMAGE"
    TEXT = "TEXT"


@dataclass(frozen=True)
class EncodedImage:
    """Binary image content represented as base64 text.

    Attributes:
        mime_type: Declared media type of the source file.
        data: Standard base64 payload without any data URL prefix.
    """

    mime_type: str
    data: str

    def decode(self) -> bytes:
        """Return the original bytes."""
        return base64.b64decode(self.data)


@dataclass(frozen=True)
class SynthesisRequest:
    """Prompt plus the ordered images sent in one submission."""

    prompt: str
    images: tuple[EncodedImage, ...]


@dataclass(frozen=True)
class SynthesisResult:
    """Image and/or text returned by the generation endpoint.

    Attributes:
        image_url: Generated image as ``data:<mimeType>;base64,<payload>``.
        text: Generated text.
    """

    image_url: str | None = None
    text: str | None = None

    @property
    def is_empty(self) -> bool:
        """True when neither an image nor text was returned."""
        return not self.image_url and not self.text

    def image_bytes(self) -> tuple[str, bytes] | None:
        """Decode the image data URL.

        Returns:
            Tuple of (mime_type, raw bytes), or None if there is no image.

        Raises:
            ValueError: If the image URL is not a base64 data URL.
        """
        if not self.image_url:
            return None
        return parse_data_url(self.image_url)


def build_data_url(mime_type: str, payload: str) -> str:
    """Build a data URL from a media type and a base64 payload."""
    return f"{DATA_URL_PREFIX}{mime_type}{BASE64_MARKER}{payload}"


def parse_data_url(url: str) -> tuple[str, bytes]:
    """Split a base64 data URL into (mime_type, bytes).

    Raises:
        ValueError: If the URL is not a base64 data URL.
    """
    if not url.startswith(DATA_URL_PREFIX) or BASE64_MARKER not in url:
        raise ValueError("not a base64 data URL")
    header, payload = url[len(DATA_URL_PREFIX) :].split(BASE64_MARKER, 1)
    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64 payload: {e}") from e
    return header, data


__all__ = [
    "EncodedImage",
    "Modality",
    "SubmissionState",
    "SynthesisRequest",
    "SynthesisResult",
    "build_data_url",
    "parse_data_url",
]
