"""Image Synth - combine several images and a prompt into a new image.

This package collects local images, encodes them, and sends them with a
text prompt to a hosted multimodal generation model, returning the
generated image and/or text.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
