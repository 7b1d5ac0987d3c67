"""Models module - Pydantic data models"""

from .intent import (
    ComplexityResult,
    IntentRequest,
    IntentType,
    ParsedIntent,
    PlanResponse,
    PlanStep,
    ToolInvocation,
    ToolName,
)
from .stream import ApplyStreamRequest, FileBlock, FileProgress, FileStatus, StreamEvent
from .tools import (
    ExecuteToolsRequest,
    ExecuteToolsResponse,
    GrepHit,
    ProjectFile,
    SearchFileHit,
    ToolResult,
)

__all__ = [
    # Intent models
    "ComplexityResult",
    "IntentRequest",
    "IntentType",
    "ParsedIntent",
    "PlanResponse",
    "PlanStep",
    "ToolInvocation",
    "ToolName",
    # Stream models
    "ApplyStreamRequest",
    "FileBlock",
    "FileProgress",
    "FileStatus",
    "StreamEvent",
    # Tool models
    "ExecuteToolsRequest",
    "ExecuteToolsResponse",
    "GrepHit",
    "ProjectFile",
    "SearchFileHit",
    "ToolResult",
]
