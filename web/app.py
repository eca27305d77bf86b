"""FastAPI application factory and main app.

This module creates the FastAPI application with all routers and
the synthesis session configured.

Web routes are thin proxies to the core image_synth modules.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from image_synth import __version__
from image_synth.config import Settings, get_settings
from image_synth.synthesis import SynthesisClient, SynthesisSession
from web.routers import config, gui, health, synthesize

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager.

    Builds the synthesis session on startup unless one was injected, and
    releases its previews on shutdown. A missing API key aborts startup.
    """
    if getattr(app.state, "session", None) is None:
        settings: Settings = app.state.settings
        app.state.session = SynthesisSession(SynthesisClient.from_settings(settings))
    try:
        yield
    finally:
        app.state.session.close()


def create_app(
    session: SynthesisSession | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        session: Pre-built session; built from settings at startup if None.
        settings: Settings; loaded from the environment if None.

    Returns:
        Configured FastAPI application.
    """
    application = FastAPI(
        title="Image Synth API",
        description="HTTP API and web GUI for synthesizing a new image "
        "from several source images and a prompt",
        version=__version__,
        lifespan=lifespan,
    )
    application.state.settings = settings or get_settings()
    application.state.session = session

    application.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    # Include routers
    application.include_router(health.router, tags=["health"])
    application.include_router(config.router, prefix="/config", tags=["config"])
    application.include_router(
        synthesize.router, prefix="/synthesize", tags=["synthesize"]
    )
    application.include_router(gui.router, prefix="/ui", tags=["gui"])

    return application


# Create the default application instance
app = create_app()
