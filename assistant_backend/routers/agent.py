"""Agent planning API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ..models.intent import IntentRequest, ParsedIntent, PlanResponse
from ..models.tools import ExecuteToolsRequest, ExecuteToolsResponse
from ..services.intent_parser import classify
from ..services.plan_heuristics import detect_complexity_and_steps
from ..services.tool_registry import InMemoryFileSource, execute_plan

router = APIRouter()


@router.post("/intent", response_model=ParsedIntent)
async def classify_intent(request: IntentRequest) -> ParsedIntent:
    """Classify a goal and return the planned tool calls"""
    return classify(request.goal)


@router.post("/plan", response_model=PlanResponse)
async def plan_goal(request: IntentRequest) -> PlanResponse:
    """Classify a goal and add the checklist for complex goals"""
    return PlanResponse(
        intent=classify(request.goal),
        complexity=detect_complexity_and_steps(request.goal),
    )


@router.post("/tools/execute", response_model=ExecuteToolsResponse)
async def execute_tools(request: ExecuteToolsRequest) -> ExecuteToolsResponse:
    """Run a tool plan against the files sent with the request"""
    project_id = request.project_id.strip()
    if not project_id:
        raise HTTPException(status_code=400, detail="project_id required")

    source = InMemoryFileSource({project_id: request.files})
    results = await execute_plan(source, project_id, request.tool_plan)
    return ExecuteToolsResponse(results=results)
