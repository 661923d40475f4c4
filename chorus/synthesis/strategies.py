"""One synthesis function per SynthesisStrategy.

Selection strategies score every candidate and keep the best one verbatim.
Merge strategies combine all candidates into new text attributed to
``synthesized``. ``STRATEGIES`` must cover every member of the enum; that is
checked when this module is imported.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from chorus.reasoning.models import SynthesisStrategy
from chorus.synthesis import scoring
from chorus.synthesis.models import CandidateResponse, SynthesizedResult

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    StrategyFn = Callable[[Sequence[CandidateResponse]], SynthesizedResult]

SYNTHESIZED_SOURCE = "synthesized"
MULTI_PROVIDER_STAGE = "multi-provider"

_GOAL = re.compile(r"(?:goal|objective|aim|target)(?:s)?\s*:?\s*([^.!?]+)", re.IGNORECASE)
_STEP = re.compile(r"(?:step|stage|phase)\s*\d+[:.]\s*([^.!?]+)", re.IGNORECASE)
_CONSIDERATION = re.compile(
    r"(?:consider|important|note|remember)\w*\s*:?\s*([^.!?]+)", re.IGNORECASE
)
_LIST_ITEM = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+(.+)$")


def pick_best(
    candidates: Sequence[CandidateResponse], score: Callable[[str], float]
) -> tuple[CandidateResponse, float]:
    """Highest-scoring candidate; the earliest one wins ties."""
    best = candidates[0]
    best_score = score(best.text)
    for candidate in candidates[1:]:
        current = score(candidate.text)
        if current > best_score:
            best, best_score = candidate, current
    return best, best_score


def _select(
    candidates: Sequence[CandidateResponse],
    strategy: SynthesisStrategy,
    score: Callable[[str], float],
    *,
    confidence: float,
    stage: str,
    reasoning: str,
) -> SynthesizedResult:
    winner, _ = pick_best(candidates, score)
    return SynthesizedResult(
        text=winner.text,
        strategy=strategy,
        confidence=confidence,
        tokens=winner.tokens,
        stages=[MULTI_PROVIDER_STAGE, stage],
        source=winner.source,
        reasoning=reasoning,
    )


def _merged(
    candidates: Sequence[CandidateResponse],
    strategy: SynthesisStrategy,
    text: str,
    *,
    confidence: float,
    stage: str,
    reasoning: str,
) -> SynthesizedResult:
    return SynthesizedResult(
        text=text,
        strategy=strategy,
        confidence=confidence,
        tokens=sum(c.tokens for c in candidates),
        stages=[MULTI_PROVIDER_STAGE, stage],
        source=SYNTHESIZED_SOURCE,
        reasoning=reasoning,
    )


def _unique(items: list[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for item in items:
        key = item.lower()
        if item and key not in seen:
            seen.add(key)
            result.append(item)
    return result


# -- Selection -----------------------------------------------------------------


def analytical(candidates: Sequence[CandidateResponse]) -> SynthesizedResult:
    return _select(
        candidates,
        SynthesisStrategy.ANALYTICAL,
        scoring.analytical_score,
        confidence=0.85,
        stage="analytical-synthesis",
        reasoning="Selected based on analytical assessment of clarity, accuracy, and completeness",
    )


def logical(candidates: Sequence[CandidateResponse]) -> SynthesizedResult:
    return _select(
        candidates,
        SynthesisStrategy.LOGICAL,
        scoring.logical_score,
        confidence=0.90,
        stage="logical-validation",
        reasoning="Selected based on logical soundness and reasoning quality",
    )


def causal(candidates: Sequence[CandidateResponse]) -> SynthesizedResult:
    return _select(
        candidates,
        SynthesisStrategy.CAUSAL,
        scoring.causal_score,
        confidence=0.84,
        stage="causal-analysis",
        reasoning="Selected for the clearest account of causes and mechanisms",
    )


def probabilistic(candidates: Sequence[CandidateResponse]) -> SynthesizedResult:
    return _select(
        candidates,
        SynthesisStrategy.PROBABILISTIC,
        scoring.probabilistic_score,
        confidence=0.80,
        stage="probabilistic-weighting",
        reasoning="Selected for explicit treatment of uncertainty and likelihood",
    )


def scientific(candidates: Sequence[CandidateResponse]) -> SynthesizedResult:
    return _select(
        candidates,
        SynthesisStrategy.SCIENTIFIC,
        scoring.scientific_score,
        confidence=0.87,
        stage="scientific-review",
        reasoning="Selected for use of evidence, method, and reproducibility",
    )


def philosophical(candidates: Sequence[CandidateResponse]) -> SynthesizedResult:
    return _select(
        candidates,
        SynthesisStrategy.PHILOSOPHICAL,
        scoring.philosophical_score,
        confidence=0.78,
        stage="philosophical-analysis",
        reasoning="Selected for depth on ethics, metaphysics, and epistemology",
    )


def empathetic(candidates: Sequence[CandidateResponse]) -> SynthesizedResult:
    return _select(
        candidates,
        SynthesisStrategy.EMPATHETIC,
        scoring.empathy_score,
        confidence=0.82,
        stage="empathetic-selection",
        reasoning="Selected for highest empathy and emotional intelligence",
    )


# -- Merge ---------------------------------------------------------------------


def creative(candidates: Sequence[CandidateResponse]) -> SynthesizedResult:
    combined = "\n\n---\n\n".join(c.text for c in candidates)
    return _merged(
        candidates,
        SynthesisStrategy.CREATIVE,
        f"Here are multiple creative perspectives:\n\n{combined}",
        confidence=0.80,
        stage="creative-synthesis",
        reasoning="Combined multiple creative perspectives for richer output",
    )


def key_points(text: str) -> list[str]:
    """List items from *text*, or its first non-empty line when it has none."""
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    points = [m.group(1).strip() for line in lines if (m := _LIST_ITEM.match(line))]
    if points:
        return points
    return lines[:1]


def collaborative(candidates: Sequence[CandidateResponse]) -> SynthesizedResult:
    seen: set[str] = set()
    sections = []
    for candidate in candidates:
        points = []
        for point in key_points(candidate.text):
            if point.lower() not in seen:
                seen.add(point.lower())
                points.append(point)
        if points:
            sections.append(
                f"From {candidate.source}:\n" + "\n".join(f"• {p}" for p in points)
            )
    text = "Combined insights:\n\n" + "\n\n".join(sections)
    return _merged(
        candidates,
        SynthesisStrategy.COLLABORATIVE,
        text,
        confidence=0.83,
        stage="collaborative-synthesis",
        reasoning="Recombined the distinct points made by each provider",
    )


def extract_strategic_elements(text: str) -> dict[str, list[str]]:
    return {
        "goals": [m.group(1).strip() for m in _GOAL.finditer(text)],
        "steps": [m.group(1).strip() for m in _STEP.finditer(text)],
        "considerations": [m.group(1).strip() for m in _CONSIDERATION.finditer(text)],
    }


def render_strategic(goals: list[str], steps: list[str], considerations: list[str]) -> str:
    goal_lines = "\n".join(f"{i}. {goal}" for i, goal in enumerate(goals, 1))
    step_lines = "\n".join(f"{i}. {step}" for i, step in enumerate(steps, 1))
    consideration_lines = "\n".join(f"• {item}" for item in considerations)
    return (
        "Strategic Analysis:\n\n"
        f"Goals:\n{goal_lines}\n\n"
        f"Implementation Steps:\n{step_lines}\n\n"
        f"Key Considerations:\n{consideration_lines}"
    )


def strategic(candidates: Sequence[CandidateResponse]) -> SynthesizedResult:
    elements = [extract_strategic_elements(c.text) for c in candidates]
    goals = _unique([g for e in elements for g in e["goals"]])
    steps = _unique([s for e in elements for s in e["steps"]])
    considerations = _unique([c for e in elements for c in e["considerations"]])
    if not (goals or steps or considerations):
        # Nothing to restructure; keep one answer intact
        return _select(
            candidates,
            SynthesisStrategy.STRATEGIC,
            scoring.analytical_score,
            confidence=0.88,
            stage="strategic-synthesis",
            reasoning="No goals, steps or considerations found; selected by analytical assessment",
        )
    return _merged(
        candidates,
        SynthesisStrategy.STRATEGIC,
        render_strategic(goals, steps, considerations),
        confidence=0.88,
        stage="strategic-synthesis",
        reasoning="Synthesized strategic elements from multiple AI perspectives",
    )


STRATEGIES: dict[SynthesisStrategy, StrategyFn] = {
    SynthesisStrategy.ANALYTICAL: analytical,
    SynthesisStrategy.LOGICAL: logical,
    SynthesisStrategy.CAUSAL: causal,
    SynthesisStrategy.PROBABILISTIC: probabilistic,
    SynthesisStrategy.SCIENTIFIC: scientific,
    SynthesisStrategy.PHILOSOPHICAL: philosophical,
    SynthesisStrategy.EMPATHETIC: empathetic,
    SynthesisStrategy.CREATIVE: creative,
    SynthesisStrategy.COLLABORATIVE: collaborative,
    SynthesisStrategy.STRATEGIC: strategic,
}

_missing = set(SynthesisStrategy) - set(STRATEGIES)
if _missing:
    msg = f"No synthesis function for: {', '.join(sorted(s.value for s in _missing))}"
    raise RuntimeError(msg)
