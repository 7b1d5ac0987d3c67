"""
Plan Heuristics - decide whether a goal needs a multi-step checklist
"""

from __future__ import annotations

import logging
import re

from ..models.intent import ComplexityResult, PlanStep

logger = logging.getLogger(__name__)

LONG_GOAL_THRESHOLD = 220

ARCHITECTURE_KEYWORDS_RE = re.compile(
    r"\b(refactor|architecture|migrate|integrate|auth|deploy|database|schema|stream|queue|context)\b",
    re.IGNORECASE,
)
MULTI_TARGET_RE = re.compile(r"\b(and|sowie|sowohl|mehrere|multiple)\b", re.IGNORECASE)

STEP_TEMPLATE = (
    "Analyze & clarify requirements",
    "Review files & architecture",
    "Plan implementation",
    "Apply code changes",
    "Tests & validation",
)
MAX_STEPS = 5


def detect_complexity_and_steps(goal: str) -> ComplexityResult:
    """Return a fixed checklist when the goal looks complex, otherwise no steps"""
    try:
        text = str(goal or "").strip()
        if not text:
            return ComplexityResult(is_complex=False)

        is_long = len(text) > LONG_GOAL_THRESHOLD
        has_keywords = ARCHITECTURE_KEYWORDS_RE.search(text) is not None
        has_multi_targets = MULTI_TARGET_RE.search(text) is not None
        if not (is_long or has_keywords or has_multi_targets):
            return ComplexityResult(is_complex=False)

        steps = [PlanStep(title=title) for title in STEP_TEMPLATE[:MAX_STEPS]]
        return ComplexityResult(is_complex=True, steps=steps)
    except Exception as e:
        logger.warning(f"Complexity detection failed, assuming simple goal: {e}")
        return ComplexityResult(is_complex=False)
