"""
Tool Registry - read/search/grep project files and execute planned tool calls
"""

from __future__ import annotations

import logging
import re
from typing import Protocol

from ..models.intent import ToolInvocation, ToolName
from ..models.tools import GrepHit, ProjectFile, SearchFileHit, ToolResult

logger = logging.getLogger(__name__)


class FileSource(Protocol):
    """Where project files come from (a database table, a bucket, memory...)"""

    async def list_files(self, project_id: str) -> list[ProjectFile]: ...


class InMemoryFileSource:
    """File source backed by a dict of project_id -> files"""

    def __init__(self, projects: dict[str, list[ProjectFile]] | None = None):
        self.projects = projects or {}

    async def list_files(self, project_id: str) -> list[ProjectFile]:
        return list(self.projects.get(project_id, []))


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def build_excerpt(content: str, query: str, max_len: int = 180) -> str | None:
    """Whitespace-collapsed window of ``content`` around the first match of ``query``"""
    if not content:
        return None
    q = query[:80].lower()
    idx = content.lower().find(q)
    start = max(0, idx - max_len // 2)
    end = min(len(content), start + max_len)
    excerpt = re.sub(r"\s+", " ", content[start:end]).strip()
    return excerpt or None


async def read_file(source: FileSource, project_id: str, path: str) -> ProjectFile | None:
    """Return a single file by exact path"""
    p = (path or "").strip()
    pid = (project_id or "").strip()
    if not p or not pid:
        return None
    for f in await source.list_files(pid):
        if f.path == p:
            return ProjectFile(path=f.path, content=f.content or "")
    return None


async def search_file(
    source: FileSource,
    project_id: str,
    query: str,
    limit: int = 100,
) -> list[SearchFileHit]:
    """Case-insensitive substring search over paths and contents.

    ``|`` separates alternative terms; a file matches if any term occurs.
    """
    q = (query or "").strip()
    if not q:
        return []
    terms = [t.strip().lower() for t in q.split("|") if t.strip()]
    limit = _clamp(limit, 1, 500)

    hits = []
    for f in await source.list_files(project_id):
        path_l = f.path.lower()
        content_l = (f.content or "").lower()
        term = next((t for t in terms if t in path_l or t in content_l), None)
        if term is None:
            continue
        hits.append(SearchFileHit(path=f.path, excerpt=build_excerpt(f.content or "", term)))
        if len(hits) >= limit:
            break
    return hits


def _make_regex(pattern: str | re.Pattern) -> re.Pattern | None:
    if isinstance(pattern, re.Pattern):
        return pattern
    p = (pattern or "").strip()
    if not p:
        return None
    return re.compile(re.escape(p), re.IGNORECASE)


async def grep_project(
    source: FileSource,
    project_id: str,
    pattern: str | re.Pattern,
    limit_files: int = 120,
    limit_hits_per_file: int = 3,
) -> list[GrepHit]:
    """Line-based search with one line of context before and after each hit.

    Plain string patterns are matched literally and case-insensitively.
    """
    regex = _make_regex(pattern)
    if regex is None:
        return []
    limit_files = _clamp(limit_files, 1, 500)
    limit_hits = _clamp(limit_hits_per_file, 1, 20)

    hits = []
    files = (await source.list_files(project_id))[:limit_files]
    for f in files:
        if not f.content:
            continue
        lines = re.split(r"\r?\n", f.content)
        found = 0
        for i, line in enumerate(lines):
            if not regex.search(line):
                continue
            hits.append(
                GrepHit(
                    path=f.path,
                    line=i + 1,
                    match=line,
                    before=lines[i - 1] if i > 0 else None,
                    after=lines[i + 1] if i + 1 < len(lines) else None,
                )
            )
            found += 1
            if found >= limit_hits:
                break
    return hits


async def _run_tool(source: FileSource, project_id: str, invocation: ToolInvocation) -> list:
    args = invocation.args or {}
    if invocation.name == ToolName.SEARCH_FILE:
        return await search_file(source, project_id, args.get("query", ""))
    if invocation.name == ToolName.GREP_PROJECT:
        return await grep_project(source, project_id, args.get("pattern", ""))
    if invocation.name == ToolName.READ_FILE:
        file = await read_file(source, project_id, args.get("path", ""))
        return [file] if file else []
    raise ValueError(f"Unsupported tool: {invocation.name}")


async def execute_plan(
    source: FileSource,
    project_id: str,
    plan: list[ToolInvocation],
) -> list[ToolResult]:
    """Run each planned tool in order; a failing tool does not stop the rest"""
    results = []
    for invocation in plan:
        if invocation.name == ToolName.NONE:
            continue
        try:
            hits = await _run_tool(source, project_id, invocation)
            results.append(ToolResult(name=invocation.name, ok=True, hits=hits))
        except Exception as e:
            logger.warning(f"Tool {invocation.name.value} failed: {e}")
            results.append(ToolResult(name=invocation.name, ok=False, error=str(e)))
    return results
