"""Configuration endpoints."""

from typing import Any

from fastapi import APIRouter

from web.deps import AppSettings

router = APIRouter()


@router.get("")
def get_config(settings: AppSettings) -> dict[str, Any]:
    """Get effective configuration.

    Returns:
        Current configuration as JSON, with the API key masked.
    """
    return settings.public_dict()
