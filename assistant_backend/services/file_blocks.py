"""
File Block Extraction - recover <file path="..."> artifacts from streamed text
"""

from __future__ import annotations

import logging
import re

from ..models.stream import FileBlock

logger = logging.getLogger(__name__)

# Shortest content span; a literal "</file>" inside content ends the block early
FILE_BLOCK_RE = re.compile(r'<file path="([^"]+)">(.*?)</file>', re.DOTALL)


def extract_files(text: str) -> list[FileBlock]:
    """Extract complete file blocks from text, in order of appearance"""
    return [FileBlock(path=path, content=content) for path, content in FILE_BLOCK_RE.findall(text)]


class FileBlockTracker:
    """Track file blocks across a growing stream of text.

    Each ``update`` rescans the accumulated snapshot and returns only the
    blocks that are new or whose content changed since they were last seen.
    """

    def __init__(self, accumulated_limit: int = 20000, accumulated_keep: int = 15000):
        self.accumulated_limit = accumulated_limit
        self.accumulated_keep = min(accumulated_keep, accumulated_limit)
        self._accumulated = ""
        self._seen: dict[str, str] = {}

    @property
    def text(self) -> str:
        return self._accumulated

    @property
    def files(self) -> dict[str, str]:
        """All file blocks reported so far (path -> latest content)"""
        return dict(self._seen)

    def update(self, text: str) -> list[FileBlock]:
        """Append text and return file blocks completed or changed by it"""
        self._accumulated += text
        # a path written twice in one snapshot counts once, with its last content
        latest = {block.path: block.content for block in extract_files(self._accumulated)}
        changed = []
        for path, content in latest.items():
            if self._seen.get(path) != content:
                self._seen[path] = content
                changed.append(FileBlock(path=path, content=content))

        if len(self._accumulated) > self.accumulated_limit:
            logger.debug(
                f"Trimming accumulated stream text from {len(self._accumulated)} "
                f"to {self.accumulated_keep} chars"
            )
            self._accumulated = self._accumulated[len(self._accumulated) - self.accumulated_keep :]
        return changed
