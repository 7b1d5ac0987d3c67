"""
File Events - fold file.* stream events into per-file progress state
"""

from __future__ import annotations

import time
from typing import Any

from ..models.stream import FileProgress, FileStatus

FILE_EVENT_TYPES = ("file.start", "file.chunk", "file.done", "file.error")


def is_file_event(obj: Any) -> bool:
    """Check whether a decoded event is one of the file.* progress events"""
    return isinstance(obj, dict) and obj.get("type") in FILE_EVENT_TYPES


def _int_field(payload: dict[str, Any], key: str) -> int | None:
    value = payload.get(key)
    # bool is an int subclass but never a byte count
    return value if isinstance(value, int) and not isinstance(value, bool) else None


def _str_field(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    return value if isinstance(value, str) else None


def file_progress_reducer(
    state: dict[str, FileProgress],
    event: dict[str, Any],
) -> dict[str, FileProgress]:
    """Return a new progress map with the event applied; ``state`` is left untouched"""
    if not is_file_event(event):
        return state

    payload = event.get("payload")
    path = payload.get("path") if isinstance(payload, dict) else None
    if not isinstance(path, str):
        return state

    next_state = dict(state)
    now = time.time()
    current = next_state.get(path)
    event_type = event["type"]

    if event_type == "file.start":
        next_state[path] = FileProgress(
            path=path,
            kind=_str_field(payload, "kind"),
            status=FileStatus.WRITING,
            bytes=0,
            updated_at=now,
        )
    elif event_type == "file.chunk":
        if current is None:
            current = FileProgress(path=path, status=FileStatus.WRITING, bytes=0)
        next_state[path] = current.model_copy(
            update={"bytes": (current.bytes or 0) + (_int_field(payload, "bytes") or 0), "updated_at": now}
        )
    elif event_type == "file.done":
        if current is None:
            current = FileProgress(path=path, status=FileStatus.DONE)
        final_bytes = _int_field(payload, "bytes")
        next_state[path] = current.model_copy(
            update={
                "status": FileStatus.DONE,
                "bytes": final_bytes if final_bytes is not None else current.bytes,
                "updated_at": now,
            }
        )
    else:  # file.error
        if current is None:
            current = FileProgress(path=path, status=FileStatus.ERROR)
        next_state[path] = current.model_copy(
            update={"status": FileStatus.ERROR, "message": _str_field(payload, "message"), "updated_at": now}
        )

    return next_state
