"""Streaming data models"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel


class FileBlock(BaseModel):
    """A completed <file path="..."> block recovered from streamed text"""

    path: str
    content: str


class FileStatus(str, Enum):
    WRITING = "writing"
    DONE = "done"
    ERROR = "error"


class FileProgress(BaseModel):
    """Progress of one file announced through file.* events"""

    path: str
    kind: str | None = None
    status: FileStatus
    bytes: int | None = None
    message: str | None = None
    updated_at: float | None = None


class ApplyStreamRequest(BaseModel):
    """Request to run the upstream agent and stream its output"""

    project_id: str
    goal: str | None = None
    options: dict[str, Any] = {}


class StreamEvent(BaseModel):
    """SSE stream event sent to the browser"""

    type: str  # start, plan, stream, file, file-progress, file-status, meta, complete, error
    message: str | None = None
    text: str | None = None
    raw: bool | None = None
    path: str | None = None
    content: str | None = None
    current: int | None = None
    total: int | None = None
    payload: Any = None
    detail: str | None = None
