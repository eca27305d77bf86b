"""Synthesis module.

This module handles:
- Request construction and response parsing for the generation model
- The per-submission state machine used by the GUI and CLI
"""

from image_synth.synthesis.client import SynthesisClient
from image_synth.synthesis.session import SynthesisSession

__all__ = ["SynthesisClient", "SynthesisSession"]
