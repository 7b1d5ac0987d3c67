"""
Agent Client - Calls the upstream coding agent and decodes its event stream
"""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import aiohttp

from ..models.intent import ParsedIntent
from .ndjson import iter_lines

logger = logging.getLogger(__name__)

SSE_DONE = "[DONE]"


class AgentStreamError(RuntimeError):
    """Upstream agent refused the request"""

    def __init__(self, status: int, detail: str):
        super().__init__(f"Agent upstream error ({status}): {detail}")
        self.status = status
        self.detail = detail


def decode_upstream_line(line: str) -> Any:
    """Decode one upstream line, NDJSON or SSE framed.

    An SSE ``data:`` prefix is stripped and ``[DONE]`` becomes a done event.
    Lines that are not JSON come back as ``{"type": "text", "text": ...}``.
    Returns ``None`` for an empty SSE data line.
    """
    data = line[len("data:") :].strip() if line.startswith("data:") else line
    if not data:
        return None
    if data == SSE_DONE:
        return {"type": "done"}
    try:
        return json.loads(data)
    except ValueError:
        return {"type": "text", "text": data}


class AgentClient:
    """Client for the upstream agent endpoint"""

    def __init__(self, config: dict[str, Any]):
        self.config = config
        cfg = config.get("agent", {})
        self.endpoint = cfg.get("endpoint", "http://localhost:3000/api/ai")
        self.timeout_seconds = cfg.get("timeoutSeconds", 300)

    def build_payload(
        self,
        project_id: str,
        goal: str | None,
        intent: ParsedIntent | None = None,
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Build the upstream request body, attaching the tool plan when known"""
        payload: dict[str, Any] = {"projectId": project_id, **(options or {})}
        if goal is not None:
            payload["goal"] = goal
        if intent is not None:
            payload["intent"] = {
                "type": intent.intent_type.value,
                "toolPlan": [
                    {"name": step.name.value, **({"args": step.args} if step.args else {})}
                    for step in intent.tool_plan
                ],
            }
        return payload

    @asynccontextmanager
    async def _request(self, payload: dict[str, Any]):
        """POST to the agent and yield the open response"""
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(self.endpoint, json=payload) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error(f"Agent upstream error {response.status}: {error_text[:200]}")
                    raise AgentStreamError(response.status, error_text or str(response.status))
                yield response

    async def stream_events(
        self,
        payload: dict[str, Any],
        cancel: asyncio.Event | None = None,
    ) -> AsyncIterator[Any]:
        """Yield decoded events from the agent's NDJSON or SSE response body"""
        logger.info(f"Calling agent at {self.endpoint}")
        async with self._request(payload) as response:
            async for line in iter_lines(response.content.iter_any(), cancel):
                event = decode_upstream_line(line)
                if event is not None:
                    yield event
