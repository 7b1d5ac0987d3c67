"""Tool registry data models"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .intent import ToolInvocation, ToolName


class ProjectFile(BaseModel):
    """A single stored project file"""

    kind: Literal["file"] = "file"
    path: str
    content: str = ""


class SearchFileHit(BaseModel):
    kind: Literal["search"] = "search"
    path: str
    excerpt: str | None = None


class GrepHit(BaseModel):
    kind: Literal["grep"] = "grep"
    path: str
    line: int  # 1-indexed
    match: str
    before: str | None = None
    after: str | None = None


ToolHit = Annotated[Union[SearchFileHit, GrepHit, ProjectFile], Field(discriminator="kind")]


class ToolResult(BaseModel):
    """Outcome of one executed tool invocation"""

    name: ToolName
    ok: bool
    hits: list[ToolHit] = []
    error: str | None = None


class ExecuteToolsRequest(BaseModel):
    """Request to run a tool plan against a set of project files"""

    project_id: str
    files: list[ProjectFile]
    tool_plan: list[ToolInvocation]


class ExecuteToolsResponse(BaseModel):
    results: list[ToolResult]
