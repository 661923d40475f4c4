"""Keyword-driven request classification.

Everything here is deterministic and free of I/O. Scores are
case-insensitive, overlapping substring counts against the fixed tables in
``chorus.reasoning.keywords``.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from chorus.reasoning import keywords
from chorus.reasoning.models import (
    ClassificationRecord,
    Complexity,
    InformationGap,
    ReasoningCategory,
    ReasoningPlan,
    SynthesisStrategy,
    TopicDomain,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_WORD = re.compile(r"\b\w+\b")

BASE_PLAN_SECONDS = 30
SECONDS_PER_TOOL = 10


def count_occurrences(haystack: str, needle: str) -> int:
    """Count overlapping occurrences of *needle* in *haystack*."""
    if not needle:
        return 0
    count = 0
    start = haystack.find(needle)
    while start != -1:
        count += 1
        start = haystack.find(needle, start + 1)
    return count


def _score(text: str, phrases: Iterable[str]) -> int:
    return sum(count_occurrences(text, phrase) for phrase in phrases)


def _best(text: str, table: Mapping, default):
    """Highest nonzero scorer in table order, else *default*."""
    best, best_score = default, 0
    for key, phrases in table.items():
        score = _score(text, phrases)
        if score > best_score:
            best, best_score = key, score
    return best


def _word_count(text: str) -> int:
    return len(text.split())


def _sentence_count(text: str) -> int:
    return sum(1 for fragment in _SENTENCE_SPLIT.split(text) if fragment.strip())


# -- Steps ---------------------------------------------------------------------


def categorize(text: str) -> ReasoningCategory:
    return _best(text.lower(), keywords.CATEGORY_KEYWORDS, ReasoningCategory.GENERAL)


def detect_domain(text: str) -> TopicDomain:
    return _best(text.lower(), keywords.DOMAIN_KEYWORDS, TopicDomain.GENERAL)


def assess_complexity(text: str) -> Complexity:
    lowered = text.lower()
    words = _word_count(text)

    score = 0
    if words > 50:
        score += 2
    elif words > 20:
        score += 1
    if _sentence_count(text) > 3:
        score += 1
    for tier, phrases in keywords.COMPLEXITY_KEYWORDS.items():
        weight = keywords.COMPLEXITY_WEIGHTS[tier]
        score += weight * sum(1 for phrase in phrases if phrase in lowered)

    if score >= 4:
        return Complexity.HIGH
    if score >= 2:
        return Complexity.MEDIUM
    return Complexity.LOW


def suggest_tools(text: str, domain: TopicDomain) -> tuple[str, ...]:
    """Tools whose keywords appear in *text*, best first."""
    lowered = text.lower()
    priorities = keywords.TOOL_PRIORITIES.get(domain, {})
    ranked: list[tuple[str, float]] = []
    for tool, phrases in keywords.TOOL_KEYWORDS.items():
        matched = sum(1 for phrase in phrases if phrase in lowered)
        if not matched:
            continue
        confidence = matched / len(phrases)
        priority = priorities.get(tool, keywords.DEFAULT_TOOL_PRIORITY)
        ranked.append((tool, priority + confidence))
    ranked.sort(key=lambda item: item[1], reverse=True)
    return tuple(tool for tool, _ in ranked)


def find_information_gaps(
    text: str, domain: TopicDomain, context_length: int = 0
) -> tuple[InformationGap, ...]:
    lowered = text.lower()
    words = set(_WORD.findall(lowered))
    gaps: list[InformationGap] = []

    if words & keywords.VAGUE_PRONOUNS and context_length == 0:
        gaps.append(
            InformationGap(
                type="reference",
                description="Query contains vague references that need context",
                severity="medium",
            )
        )

    if _word_count(text) < 10 and any(
        opener in lowered for opener in keywords.UNDERSPECIFIED_OPENERS
    ):
        gaps.append(
            InformationGap(
                type="specification",
                description="Query may need more specific details",
                severity="low",
            )
        )

    if domain is TopicDomain.PROGRAMMING and "code" in lowered and "language" not in lowered:
        gaps.append(
            InformationGap(
                type="programming_language",
                description="Programming language not specified",
                severity="medium",
            )
        )

    if domain is TopicDomain.SCIENCE and "solve" in lowered and "equation" not in lowered:
        gaps.append(
            InformationGap(
                type="problem_type",
                description="Type of problem not specified",
                severity="medium",
            )
        )

    return tuple(gaps)


def estimate_confidence(text: str, context_length: int = 0) -> float:
    lowered = text.lower()
    words = _word_count(text)

    confidence = 0.5
    confidence += min(0.3, context_length * 0.05)
    if 10 <= words <= 50:
        confidence += 0.2
    confidence -= 0.1 * sum(1 for marker in keywords.VAGUE_MARKERS if marker in lowered)
    return max(0.1, min(1.0, confidence))


def detect_message_types(text: str) -> tuple[str, ...]:
    lowered = text.lower()
    found = tuple(
        kind
        for kind, phrases in keywords.MESSAGE_TYPE_KEYWORDS.items()
        if any(phrase in lowered for phrase in phrases)
    )
    return found or ("general",)


def select_strategy(
    category: ReasoningCategory,
    message_types: Iterable[str] = (),
    mode: str | None = None,
) -> SynthesisStrategy:
    """Pick the synthesis strategy for a request.

    An explicit *mode* naming a strategy wins. Otherwise the category maps
    to a fixed strategy; ``general`` falls through to the message types and
    finally to analytical.
    """
    if mode:
        try:
            return SynthesisStrategy(mode.lower())
        except ValueError:
            logger.warning("Ignoring unknown reasoning mode %r", mode)

    strategy = keywords.CATEGORY_STRATEGIES.get(category)
    if strategy is not None:
        return strategy

    types = set(message_types)
    for kind, mapped in keywords.MESSAGE_TYPE_STRATEGIES.items():
        if kind in types:
            return mapped
    return SynthesisStrategy.ANALYTICAL


def processing_strategy(category: ReasoningCategory, complexity: Complexity) -> str:
    return keywords.PROCESSING_STRATEGIES[complexity].get(category, "standard_processing")


def build_plan(
    category: ReasoningCategory,
    domain: TopicDomain,
    complexity: Complexity,
    tools: tuple[str, ...],
) -> ReasoningPlan:
    """Assemble the reasoning plan handed to the backends."""
    steps = list(
        keywords.REASONING_STEPS.get(
            category, keywords.REASONING_STEPS[ReasoningCategory.ABDUCTIVE]
        )
    )
    if complexity is Complexity.HIGH:
        steps.insert(0, "Break down into sub-problems")
        steps.append("Synthesize partial solutions")

    resources: list[str] = []
    if domain in keywords.DOMAIN_VALIDATION:
        steps.insert(1, f"Apply {domain.value} domain knowledge")
        resources.append(f"{domain.value} knowledge base")

    if tools:
        steps.append(f"Use tools: {', '.join(tools)}")
        resources.extend(tools)

    validation = [
        *keywords.CATEGORY_VALIDATION.get(category, ()),
        *keywords.DOMAIN_VALIDATION.get(domain, ()),
    ]
    return ReasoningPlan(
        steps=tuple(steps),
        resources=tuple(resources),
        validation_methods=tuple(validation),
        estimated_seconds=BASE_PLAN_SECONDS * len(steps) + SECONDS_PER_TOOL * len(tools),
    )


# -- Entry point ---------------------------------------------------------------


def classify(text: str, context_length: int = 0, mode: str | None = None) -> ClassificationRecord:
    """Classify one query.

    Args:
        text: The raw query text.
        context_length: Number of prior conversation turns available.
        mode: Optional ``reasoning_mode`` preference forcing a strategy.
    """
    category = categorize(text)
    domain = detect_domain(text)
    complexity = assess_complexity(text)
    tools = suggest_tools(text, domain)
    message_types = detect_message_types(text)

    record = ClassificationRecord(
        category=category,
        domain=domain,
        complexity=complexity,
        suggested_tools=tools,
        information_gaps=find_information_gaps(text, domain, context_length),
        confidence=estimate_confidence(text, context_length),
        message_types=message_types,
        strategy=select_strategy(category, message_types, mode),
        processing_strategy=processing_strategy(category, complexity),
        plan=build_plan(category, domain, complexity, tools),
    )
    logger.debug(
        "Classified query: category=%s domain=%s complexity=%s strategy=%s tools=%s",
        record.category.value,
        record.domain.value,
        record.complexity.value,
        record.strategy.value,
        ",".join(tools) or "-",
    )
    return record
