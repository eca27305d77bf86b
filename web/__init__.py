"""FastAPI web application for Image Synth.

This module provides the browser GUI and the HTTP API that mirror the
core services. All business logic is delegated to core modules in
image_synth/.
"""

from web.app import app, create_app

__all__ = ["app", "create_app"]
