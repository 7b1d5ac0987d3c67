"""
NDJSON stream decoding - turns a chunked byte stream into JSON events
"""

from __future__ import annotations

import asyncio
import codecs
import json
import logging
from typing import Any, AsyncIterable, AsyncIterator, Callable, Iterator

logger = logging.getLogger(__name__)


class LineFramer:
    """Split a chunked UTF-8 byte stream into complete, trimmed text lines.

    One framer belongs to one decode session. The internal buffer only ever
    holds the unconsumed tail of the decoded text.
    """

    def __init__(self, encoding: str = "utf-8"):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received after the last line terminator"""
        return self._buffer

    def push(self, chunk: bytes) -> Iterator[str]:
        """Decode a chunk and yield every line it completes"""
        self._buffer += self._decoder.decode(chunk)
        yield from self._drain()

    def flush(self) -> str | None:
        """End the session and return the trimmed unterminated tail, if any"""
        self._buffer += self._decoder.decode(b"", final=True)
        tail = self._buffer.strip()
        self._buffer = ""
        return tail or None

    def _drain(self) -> Iterator[str]:
        while True:
            # "\r\n" ends in "\n", so the first "\n" is always the earliest terminator
            idx = self._buffer.find("\n")
            if idx < 0:
                return
            line = self._buffer[:idx].strip()
            self._buffer = self._buffer[idx + 1 :]
            if line:
                yield line


def _parse_line(line: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(line)
    except ValueError:
        logger.debug("Skipping non-JSON line: %.80s", line)
        return False, None


class NDJSONDecoder:
    """Synchronous NDJSON decoder: bytes in, JSON values out"""

    def __init__(self):
        self._framer = LineFramer()

    def feed(self, chunk: bytes) -> Iterator[Any]:
        for line in self._framer.push(chunk):
            ok, value = _parse_line(line)
            if ok:
                yield value

    def flush(self) -> Iterator[Any]:
        tail = self._framer.flush()
        if tail is None:
            return
        ok, value = _parse_line(tail)
        if ok:
            yield value


async def iter_lines(
    body: AsyncIterable[bytes] | None,
    cancel: asyncio.Event | None = None,
) -> AsyncIterator[str]:
    """Yield the trimmed, non-blank text lines of an async byte stream.

    The cancel event is checked before every read; once set no further chunk
    is read, but the unterminated tail is still yielded. Transport errors end
    the stream quietly and drop the tail.
    """
    if body is None:
        return

    framer = LineFramer()
    chunks = aiter(body)
    try:
        while True:
            if cancel is not None and cancel.is_set():
                break
            try:
                chunk = await anext(chunks)
            except StopAsyncIteration:
                break
            for line in framer.push(chunk):
                yield line
    except Exception as e:
        logger.warning(f"Stream read failed, stopping: {e}")
        return

    tail = framer.flush()
    if tail is not None:
        yield tail


async def iter_ndjson(
    body: AsyncIterable[bytes] | None,
    cancel: asyncio.Event | None = None,
) -> AsyncIterator[Any]:
    """Yield one decoded JSON value per line of an async byte stream.

    Malformed lines are dropped. Cancellation and transport errors behave as
    in ``iter_lines``.
    """
    async for line in iter_lines(body, cancel):
        ok, value = _parse_line(line)
        if ok:
            yield value


async def parse_ndjson(
    body: AsyncIterable[bytes] | None,
    on_event: Callable[[Any], None],
    cancel: asyncio.Event | None = None,
) -> None:
    """Decode an NDJSON byte stream and call ``on_event`` once per event.

    Never raises: a failing callback is logged and decoding continues.
    """
    async for event in iter_ndjson(body, cancel):
        try:
            on_event(event)
        except Exception as e:
            logger.warning(f"NDJSON event handler failed: {e}")
