"""Router modules for FastAPI web API."""

from web.routers import config, gui, health, synthesize

__all__ = ["config", "gui", "health", "synthesize"]
