"""
Intent Parser - rule-based classification of user goals into an intent and a tool plan
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from ..models.intent import IntentType, ParsedIntent, ToolInvocation, ToolName

PlanBuilder = Callable[[str], list[ToolInvocation]]


@dataclass(frozen=True)
class IntentRule:
    """Patterns that map a goal to one intent category"""

    intent: IntentType
    patterns: tuple[re.Pattern, ...]
    confidence: float
    rationale: str
    build_plan: PlanBuilder

    def matches(self, goal: str) -> bool:
        return any(p.search(goal) for p in self.patterns)


def _compile(*patterns: str) -> tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def _search(query: str) -> ToolInvocation:
    return ToolInvocation(name=ToolName.SEARCH_FILE, args={"query": query})


def _grep(pattern: str) -> ToolInvocation:
    return ToolInvocation(name=ToolName.GREP_PROJECT, args={"pattern": pattern})


# Evaluated top to bottom; the first matching rule wins.
INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        intent=IntentType.INTEGRATION,
        patterns=_compile(
            r"\b(add|integrate|setup|set\s+up|enable|connect)\b.*\b(supabase|auth|database|db|storage|realtime)\b",
        ),
        confidence=0.9,
        rationale="Integration keywords (supabase/auth/db) detected.",
        build_plan=lambda goal: [_search("supabase|auth|db|storage")],
    ),
    IntentRule(
        intent=IntentType.EDIT,
        patterns=_compile(
            r"\b(fix|edit|update|modify|refactor|change|rename|rework|adjust)\b",
            r"\b(ändere|ändern|korrigiere|behebe|anpassen)\b",
        ),
        confidence=0.85,
        rationale="Edit/fix/refactor intent detected.",
        build_plan=lambda goal: [_grep(goal), _search(goal)],
    ),
    IntentRule(
        intent=IntentType.KNOWLEDGE,
        patterns=_compile(
            r"\b(how\s+does|wie\s+funktioniert|erkläre|explain|what\s+is|warum)\b",
            r"\b(how|warum|wieso|why)\b\?*$",
        ),
        confidence=0.75,
        rationale="Question/knowledge phrasing detected.",
        build_plan=lambda goal: [_grep(goal)],
    ),
    IntentRule(
        intent=IntentType.DESIGN,
        patterns=_compile(
            r"\b(build|create|make|design)\b.*\b(landing|homepage|page|ui|component)\b",
            r"\b(landing\s*page|hero|layout)\b",
        ),
        confidence=0.8,
        rationale="Design keywords detected (build/design page/ui).",
        build_plan=lambda goal: [_search("components|ui|page|layout")],
    ),
)


def classify(utterance: str) -> ParsedIntent:
    """Classify a user goal and plan the tools the agent should use first.

    Deterministic: the same utterance always gives the same intent and plan.
    Goals without any strong signal default to a low-confidence design intent
    with a broad file search.
    """
    goal = (utterance or "").strip()
    if not goal:
        return ParsedIntent(
            intent_type=IntentType.UNKNOWN,
            confidence=0.0,
            tool_plan=[ToolInvocation(name=ToolName.NONE)],
            rationale="Empty goal",
        )

    for rule in INTENT_RULES:
        if rule.matches(goal):
            return ParsedIntent(
                intent_type=rule.intent,
                confidence=rule.confidence,
                tool_plan=rule.build_plan(goal),
                rationale=rule.rationale,
            )

    return ParsedIntent(
        intent_type=IntentType.DESIGN,
        confidence=0.3,
        tool_plan=[_search(goal[:60])],
        rationale="No strong signal; start with broad file search.",
    )
