"""Error definitions for image_synth.

Every error carries a stable code that surfaces unchanged in JSON
responses and CLI output, so callers can branch on it programmatically.
"""

from typing import Any

# Error code constants
MISSING_CREDENTIAL = "missing_credential"
VALIDATION_ERROR = "validation"
ENCODING_FAILED = "encoding_failed"
TRANSPORT_FAILED = "transport_failed"
EMPTY_RESPONSE = "empty_response"
IN_PROGRESS = "in_progress"
PREVIEW_RELEASED = "preview_released"

TRANSPORT_FAILED_MESSAGE = (
    "Failed to synthesize image. Check the server logs for more details."
)
EMPTY_RESPONSE_MESSAGE = "API returned no content. The prompt might have been blocked."
VALIDATION_MESSAGE = "Please provide both images and a prompt."


class ImageSynthError(Exception):
    """Base class for all image_synth errors."""

    default_code = "internal_error"

    def __init__(self, message: str, code: str | None = None) -> None:
        """Initialize ImageSynthError.

        Args:
            message: Human-readable error description.
            code: Error code for structured error handling.
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"code": self.code, "message": self.message}


class MissingCredentialError(ImageSynthError):
    """Raised when the API key is not configured."""

    default_code = MISSING_CREDENTIAL

    def __init__(self, env_var: str = "IMAGE_SYNTH_API_KEY") -> None:
        self.env_var = env_var
        super().__init__(f"{env_var} is not set in environment variables.")


class SubmissionValidationError(ImageSynthError):
    """Raised when a submission lacks images or a prompt."""

    default_code = VALIDATION_ERROR


class EncodingFailure(ImageSynthError):
    """Raised when an image file cannot be read or encoded."""

    default_code = ENCODING_FAILED

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"Could not read {filename}: {reason}")


class SynthesisError(ImageSynthError):
    """Base class for failures of the remote synthesis call."""


class SynthesisTransportError(SynthesisError):
    """Raised when the remote call itself fails."""

    default_code = TRANSPORT_FAILED

    def __init__(self, message: str = TRANSPORT_FAILED_MESSAGE) -> None:
        super().__init__(message)


class EmptyResponseError(SynthesisError):
    """Raised when the call succeeds but returns no image and no text."""

    default_code = EMPTY_RESPONSE

    def __init__(self, message: str = EMPTY_RESPONSE_MESSAGE) -> None:
        super().__init__(message)


class SubmissionInProgressError(ImageSynthError):
    """Raised when a submission is attempted while one is in flight."""

    default_code = IN_PROGRESS

    def __init__(self) -> None:
        super().__init__("A synthesis request is already in progress.")


class PreviewReleasedError(ImageSynthError):
    """Raised when a preview reference is used after release."""

    default_code = PREVIEW_RELEASED

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Preview reference already released: {token}")


__all__ = [
    "EMPTY_RESPONSE",
    "EMPTY_RESPONSE_MESSAGE",
    "ENCODING_FAILED",
    "IN_PROGRESS",
    "MISSING_CREDENTIAL",
    "PREVIEW_RELEASED",
    "TRANSPORT_FAILED",
    "TRANSPORT_FAILED_MESSAGE",
    "VALIDATION_ERROR",
    "VALIDATION_MESSAGE",
    "EmptyResponseError",
    "EncodingFailure",
    "ImageSynthError",
    "MissingCredentialError",
    "PreviewReleasedError",
    "SubmissionInProgressError",
    "SubmissionValidationError",
    "SynthesisError",
    "SynthesisTransportError",
]
