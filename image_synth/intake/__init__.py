"""Image intake module.

This module handles:
- File handles for local and uploaded images
- Preview references and their release
- The ordered entry collection and base64 encoding
"""

from image_synth.intake.files import ImageFile, LocalImageFile, MemoryImageFile
from image_synth.intake.preview import PreviewReference, PreviewRegistry
from image_synth.intake.service import ImageEntry, ImageIntake, encode

__all__ = [
    "ImageEntry",
    "ImageFile",
    "ImageIntake",
    "LocalImageFile",
    "MemoryImageFile",
    "PreviewReference",
    "PreviewRegistry",
    "encode",
]
