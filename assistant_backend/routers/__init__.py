"""Routers module - FastAPI route handlers"""

from . import agent, config, stream

__all__ = ["agent", "config", "stream"]
