"""Submission state machine.

One session owns an image intake and a synthesis client and runs one
submission at a time:

    IDLE -> ENCODING -> REQUESTING -> (SUCCEEDED | FAILED) -> IDLE

Non-fatal errors are recovered here: the previous result is cleared, the
session becomes available again, and a single human-readable message is
kept in ``error`` for display.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from image_synth.errors import (
    VALIDATION_MESSAGE,
    ImageSynthError,
    SubmissionInProgressError,
)
from image_synth.intake.service import ImageIntake
from image_synth.types import EncodedImage, SubmissionState, SynthesisResult

logger = logging.getLogger(__name__)

ERROR_MESSAGE_PREFIX = "An error occurred while generating the image"

_ALLOWED_TRANSITIONS: dict[SubmissionState, frozenset[SubmissionState]] = {
    SubmissionState.IDLE: frozenset({SubmissionState.ENCODING}),
    SubmissionState.ENCODING: frozenset(
        {SubmissionState.REQUESTING, SubmissionState.FAILED}
    ),
    SubmissionState.REQUESTING: frozenset(
        {SubmissionState.SUCCEEDED, SubmissionState.FAILED}
    ),
    SubmissionState.SUCCEEDED: frozenset({SubmissionState.IDLE}),
    SubmissionState.FAILED: frozenset({SubmissionState.IDLE}),
}


class Synthesizer(Protocol):
    """What a session needs from a synthesis client."""

    async def synthesize(
        self, prompt: str, images: list[EncodedImage]
    ) -> SynthesisResult: ...


class SynthesisSession:
    """Runs submissions for one user's intake."""

    def __init__(self, client: Synthesizer, intake: ImageIntake | None = None) -> None:
        self.client = client
        self.intake = intake if intake is not None else ImageIntake()
        self.prompt = ""
        self.result: SynthesisResult | None = None
        self.error: str | None = None
        self.state = SubmissionState.IDLE
        self.last_outcome: SubmissionState | None = None
        self.transitions: list[tuple[SubmissionState, SubmissionState]] = []

    @property
    def busy(self) -> bool:
        """True while a submission is in flight."""
        return self.state in (SubmissionState.ENCODING, SubmissionState.REQUESTING)

    @property
    def can_submit(self) -> bool:
        """True when images are selected and no submission is running.

        The prompt arrives with the submit form, so it is checked in submit().
        """
        return not self.busy and len(self.intake) > 0

    def _transition(self, new_state: SubmissionState) -> None:
        if new_state not in _ALLOWED_TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Invalid submission transition: {self.state.value} -> {new_state.value}"
            )
        self.transitions.append((self.state, new_state))
        self.state = new_state

    async def submit(self, prompt: str | None = None) -> SynthesisResult | None:
        """Encode the intake, call the client, and record the outcome.

        Args:
            prompt: Prompt to use; keeps the current prompt if None.

        Returns:
            The result on success, None on any recovered failure.

        Raises:
            SubmissionInProgressError: If a submission is already running.
        """
        if self.busy:
            raise SubmissionInProgressError()
        if prompt is not None:
            self.prompt = prompt

        self.result = None
        self.error = None
        self.last_outcome = None

        if len(self.intake) == 0 or not self.prompt.strip():
            self.error = VALIDATION_MESSAGE
            return None

        self._transition(SubmissionState.ENCODING)
        try:
            images = await self.intake.encode_all()
            self._transition(SubmissionState.REQUESTING)
            result = await self.client.synthesize(self.prompt, images)
        except ImageSynthError as e:
            self._fail(f"{ERROR_MESSAGE_PREFIX}: {e.message}")
        except asyncio.CancelledError:
            self._fail(f"{ERROR_MESSAGE_PREFIX}: submission cancelled")
            raise
        except Exception:
            self._fail(f"{ERROR_MESSAGE_PREFIX}: unexpected error")
            raise
        else:
            self.result = result
            self._transition(SubmissionState.SUCCEEDED)
            logger.info("Submission succeeded")
        finally:
            self.last_outcome = self.state
            self._transition(SubmissionState.IDLE)

        return self.result

    def _fail(self, message: str) -> None:
        self.result = None
        self.error = message
        self._transition(SubmissionState.FAILED)
        logger.warning("Submission failed: %s", message)

    def close(self) -> None:
        """Release the intake's previews."""
        self.intake.close()


__all__ = [
    "ERROR_MESSAGE_PREFIX",
    "SynthesisSession",
    "Synthesizer",
]
