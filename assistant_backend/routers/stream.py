"""Streaming apply endpoint - relays the agent stream and materializes files"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from sse_starlette.sse import EventSourceResponse

from ..models.stream import ApplyStreamRequest, FileProgress, StreamEvent
from ..services.agent_client import AgentClient
from ..services.config_manager import ConfigManager
from ..services.file_blocks import FileBlockTracker
from ..services.file_events import file_progress_reducer, is_file_event
from ..services.intent_parser import classify

logger = logging.getLogger(__name__)

router = APIRouter()

DONE_TYPES = ("done", "end")


def _message(event: StreamEvent) -> dict[str, str]:
    return {"event": "message", "data": event.model_dump_json(exclude_none=True)}


def _text_from_event(event: Any) -> tuple[str | None, bool]:
    """Pull streamed text out of a token event or an OpenAI-style delta chunk"""
    if not isinstance(event, dict):
        return None, False
    if event.get("type") == "token" and isinstance(event.get("text"), str):
        return event["text"], True
    # plain-text upstream lines
    if event.get("type") == "text" and isinstance(event.get("text"), str):
        return event["text"], False
    choices = event.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        delta = choices[0].get("delta") or {}
        content = delta.get("content") if isinstance(delta, dict) else None
        if isinstance(content, str) and content:
            return content, False
    return None, False


@router.post("/apply")
async def apply_stream(request: ApplyStreamRequest):
    """Run the agent for a goal and stream text, completed files and status (SSE)"""
    if not request.project_id.strip():
        raise HTTPException(status_code=400, detail="project_id required")

    config = ConfigManager.get_instance().get_config()
    stream_cfg = config.get("stream", {})
    client = AgentClient(config)

    intent = classify(request.goal) if request.goal else None
    payload = client.build_payload(request.project_id, request.goal, intent, request.options)

    async def event_generator():
        tracker = FileBlockTracker(
            accumulated_limit=stream_cfg.get("accumulatedLimit", 20000),
            accumulated_keep=stream_cfg.get("accumulatedKeep", 15000),
        )
        progress: dict[str, FileProgress] = {}

        yield _message(StreamEvent(type="start", message="Starting AI stream"))
        if intent is not None:
            yield _message(StreamEvent(type="plan", payload=intent.model_dump(mode="json")))

        try:
            async for event in client.stream_events(payload):
                text, raw = _text_from_event(event)
                if text is not None:
                    yield _message(StreamEvent(type="stream", raw=raw, text=text))
                    for block in tracker.update(text):
                        yield _message(StreamEvent(type="file", path=block.path, content=block.content))
                        yield _message(
                            StreamEvent(type="file-progress", current=1, total=1, path=block.path)
                        )
                elif is_file_event(event):
                    try:
                        progress = file_progress_reducer(progress, event)
                    except (TypeError, ValueError) as e:
                        logger.warning(f"Skipping malformed file event: {e}")
                        continue
                    file_payload = event.get("payload")
                    path = file_payload.get("path") if isinstance(file_payload, dict) else None
                    if path in progress:
                        yield _message(
                            StreamEvent(type="file-status", path=path, payload=progress[path].model_dump(mode="json"))
                        )
                elif isinstance(event, dict) and event.get("type") in DONE_TYPES:
                    yield _message(StreamEvent(type="complete", message="Upstream signaled done"))
                else:
                    yield _message(StreamEvent(type="meta", payload=event))

            yield _message(StreamEvent(type="complete", message="Stream finished"))

        except Exception as e:
            logger.error(f"Apply stream failed: {e}")
            yield _message(StreamEvent(type="error", message="stream_failed", detail=str(e)))

    return EventSourceResponse(event_generator())
