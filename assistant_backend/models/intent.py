"""Intent classification and planning data models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ToolName(str, Enum):
    """Tools the agent can plan for and the tool registry can execute"""

    SEARCH_FILE = "search_file"
    GREP_PROJECT = "grep_project"
    READ_FILE = "read_file"
    NONE = "none"


class IntentType(str, Enum):
    """Coarse category of a user request"""

    DESIGN = "design"
    EDIT = "edit"
    INTEGRATION = "integration"
    KNOWLEDGE = "knowledge"
    UNKNOWN = "unknown"


class ToolInvocation(BaseModel):
    """A single planned tool call"""

    name: ToolName
    args: dict[str, str] | None = None


class ParsedIntent(BaseModel):
    """Result of classifying a user utterance"""

    intent_type: IntentType
    confidence: float = Field(ge=0.0, le=1.0)
    tool_plan: list[ToolInvocation]
    rationale: str


class PlanStep(BaseModel):
    """Human-readable checklist entry for a complex goal"""

    title: str


class ComplexityResult(BaseModel):
    """Outcome of the complexity heuristic"""

    is_complex: bool
    steps: list[PlanStep] = []


class IntentRequest(BaseModel):
    """Request carrying a raw user goal"""

    goal: str


class PlanResponse(BaseModel):
    """Intent and checklist for a goal"""

    intent: ParsedIntent
    complexity: ComplexityResult
