"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..services.config_manager import ConfigManager

router = APIRouter()

# Smallest accepted stream.accumulatedLimit, in characters
MIN_ACCUMULATED_LIMIT = 1000


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    agent: dict | None = None
    stream: dict | None = None
    logging: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    agent: dict
    stream: dict
    logging: dict


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()
    return ConfigResponse(
        agent=config.get("agent", {}),
        stream=config.get("stream", {}),
        logging=config.get("logging", {}),
    )


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    updates = request.model_dump(exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No configuration values provided")

    manager = ConfigManager.get_instance()
    stream = updates.get("stream", {})
    for key in ("accumulatedLimit", "accumulatedKeep"):
        if key in stream and (not isinstance(stream[key], int) or isinstance(stream[key], bool) or stream[key] < 0):
            raise HTTPException(status_code=400, detail=f"stream.{key} must be a non-negative integer")

    if stream:
        # validate the limits as they will be after merging with the stored ones
        merged = {**manager.get_config().get("stream", {}), **stream}
        limit = merged.get("accumulatedLimit", 0)
        keep = merged.get("accumulatedKeep", 0)
        if limit < MIN_ACCUMULATED_LIMIT:
            raise HTTPException(
                status_code=400,
                detail=f"stream.accumulatedLimit must be at least {MIN_ACCUMULATED_LIMIT}",
            )
        if keep > limit:
            raise HTTPException(
                status_code=400,
                detail="stream.accumulatedKeep must not exceed stream.accumulatedLimit",
            )

    try:
        manager.save_config(updates)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "success", "message": "Configuration updated"}
