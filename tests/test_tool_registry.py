import re

import pytest

from assistant_backend.models.intent import ToolInvocation, ToolName
from assistant_backend.models.tools import GrepHit, ProjectFile
from assistant_backend.services import tool_registry
from assistant_backend.services.intent_parser import classify
from assistant_backend.services.tool_registry import (
    InMemoryFileSource,
    build_excerpt,
    execute_plan,
    grep_project,
    read_file,
    search_file,
)


@pytest.fixture
def source():
    return InMemoryFileSource(
        {
            "proj-1": [
                ProjectFile(path="src/app/page.tsx", content="This renders the landing page layout"),
                ProjectFile(path="src/components/Header.tsx", content="Header component with sticky behavior"),
                ProjectFile(path="src/a.ts", content="line1\nhello world\nline3"),
                ProjectFile(path="src/b.ts", content="test\r\nHeader component\r\nfooter"),
                ProjectFile(path="README.md", content="# Title\nSome content"),
            ]
        }
    )


async def test_search_file_returns_hits_with_excerpts(source):
    hits = await search_file(source, "proj-1", "landing")
    assert [h.path for h in hits] == ["src/app/page.tsx"]
    assert "landing page" in hits[0].excerpt


async def test_search_file_matches_path_and_alternatives(source):
    hits = await search_file(source, "proj-1", "readme|sticky")
    assert {h.path for h in hits} == {"src/components/Header.tsx", "README.md"}


async def test_search_file_blank_query_and_limit(source):
    assert await search_file(source, "proj-1", "   ") == []
    assert len(await search_file(source, "proj-1", "src", limit=0)) == 1


async def test_grep_project_finds_matches_with_line_numbers(source):
    hits = await grep_project(source, "proj-1", re.compile("header|hello", re.I), limit_hits_per_file=2)
    assert any(h.path.endswith("a.ts") and h.line == 2 for h in hits)
    b_hit = next(h for h in hits if h.path.endswith("b.ts"))
    assert b_hit == GrepHit(path="src/b.ts", line=2, match="Header component", before="test", after="footer")


async def test_grep_project_treats_strings_literally(source):
    assert await grep_project(source, "proj-1", "header|hello") == []
    hits = await grep_project(source, "proj-1", "HELLO WORLD")
    assert [(h.path, h.line) for h in hits] == [("src/a.ts", 2)]


async def test_grep_project_limits_hits_per_file():
    src = InMemoryFileSource({"p": [ProjectFile(path="x.txt", content="a\na\na\na\na")]})
    hits = await grep_project(src, "p", "a", limit_hits_per_file=2)
    assert [h.line for h in hits] == [1, 2]


async def test_read_file(source):
    file = await read_file(source, "proj-1", "README.md")
    assert file.path == "README.md"
    assert "Title" in file.content
    assert await read_file(source, "proj-1", "missing.md") is None
    assert await read_file(source, "", "README.md") is None


def test_build_excerpt_collapses_whitespace():
    assert build_excerpt("a\n\n  b   c", "b") == "a b c"
    assert build_excerpt("", "x") is None


async def test_execute_plan_runs_tools_in_order(source):
    plan = classify("Fix hello world").tool_plan
    results = await execute_plan(source, "proj-1", plan)
    assert [r.name for r in results] == [ToolName.GREP_PROJECT, ToolName.SEARCH_FILE]
    assert all(r.ok for r in results)
    assert results[0].hits == []


async def test_execute_plan_for_integration_intent(source):
    plan = classify("Connect Supabase storage").tool_plan
    results = await execute_plan(source, "proj-1", plan)
    assert len(results) == 1
    assert results[0].name == ToolName.SEARCH_FILE
    assert results[0].ok is True


async def test_execute_plan_skips_none_and_reads_files(source):
    plan = [
        ToolInvocation(name=ToolName.NONE),
        ToolInvocation(name=ToolName.READ_FILE, args={"path": "README.md"}),
    ]
    results = await execute_plan(source, "proj-1", plan)
    assert len(results) == 1
    assert results[0].hits[0].path == "README.md"


async def test_execute_plan_continues_after_failing_tool(source, monkeypatch):
    async def broken(*args, **kwargs):
        raise RuntimeError("index unavailable")

    monkeypatch.setattr(tool_registry, "grep_project", broken)
    plan = [
        ToolInvocation(name=ToolName.GREP_PROJECT, args={"pattern": "x"}),
        ToolInvocation(name=ToolName.SEARCH_FILE, args={"query": "landing"}),
    ]
    results = await execute_plan(source, "proj-1", plan)
    assert results[0].ok is False
    assert results[0].error == "index unavailable"
    assert results[1].ok is True
