"""System prompt assembly from classification, knowledge and memory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chorus.reasoning.models import SynthesisStrategy

if TYPE_CHECKING:
    from chorus.knowledge.models import KnowledgeEntry
    from chorus.memory.models import RelevantTurn, UserProfile
    from chorus.reasoning.models import ClassificationRecord

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n---\n\n"
KNOWLEDGE_EXCERPT_CHARS = 600
MEMORY_EXCERPT_CHARS = 300
DEFAULT_TEMPERATURE = 0.4

BASE_PROMPT = (
    "You are an advanced AI assistant with deep reasoning capabilities.\n"
    "Your current reasoning mode is: {strategy}.\n"
    "Provide intelligent, helpful, and contextually appropriate responses."
)

STRATEGY_INSTRUCTIONS: dict[SynthesisStrategy, str] = {
    SynthesisStrategy.ANALYTICAL: (
        "Provide thorough analysis, break down complex problems, use evidence-based "
        "reasoning, and present clear conclusions."
    ),
    SynthesisStrategy.CREATIVE: (
        "Think outside the box, generate innovative ideas, use imaginative approaches, "
        "and explore unconventional solutions."
    ),
    SynthesisStrategy.LOGICAL: (
        "Use strict logical reasoning, provide step-by-step deductions, validate "
        "conclusions, and ensure consistency."
    ),
    SynthesisStrategy.STRATEGIC: (
        "Think strategically, consider long-term implications, analyze trade-offs, "
        "and provide actionable plans with explicit goals and numbered steps."
    ),
    SynthesisStrategy.EMPATHETIC: (
        "Show understanding and empathy, consider emotional aspects, and provide "
        "supportive responses."
    ),
    SynthesisStrategy.CAUSAL: (
        "Identify causes and effects, explain the mechanisms that connect them, and "
        "call out confounding factors."
    ),
    SynthesisStrategy.PROBABILISTIC: (
        "Reason about likelihoods explicitly, quantify uncertainty where possible, "
        "and state your assumptions."
    ),
    SynthesisStrategy.SCIENTIFIC: (
        "Ground claims in evidence, describe how they could be tested, and note "
        "what would be needed to reproduce them."
    ),
    SynthesisStrategy.PHILOSOPHICAL: (
        "Clarify the key concepts, present competing positions fairly, and weigh "
        "the arguments for each."
    ),
    SynthesisStrategy.COLLABORATIVE: (
        "Generalize from examples and patterns. Present your main points as a "
        "short bulleted list."
    ),
}

STRATEGY_TEMPERATURES: dict[SynthesisStrategy, float] = {
    SynthesisStrategy.ANALYTICAL: 0.3,
    SynthesisStrategy.CREATIVE: 0.8,
    SynthesisStrategy.LOGICAL: 0.2,
    SynthesisStrategy.STRATEGIC: 0.4,
    SynthesisStrategy.EMPATHETIC: 0.6,
    SynthesisStrategy.CAUSAL: 0.3,
    SynthesisStrategy.PROBABILISTIC: 0.3,
    SynthesisStrategy.SCIENTIFIC: 0.2,
    SynthesisStrategy.PHILOSOPHICAL: 0.6,
    SynthesisStrategy.COLLABORATIVE: 0.5,
}


def temperature_for(strategy: SynthesisStrategy) -> float:
    return STRATEGY_TEMPERATURES.get(strategy, DEFAULT_TEMPERATURE)


def _excerpt(text: str, limit: int) -> str:
    text = text.strip()
    return text if len(text) <= limit else text[: limit - 3].rstrip() + "..."


def _format_plan(classification: ClassificationRecord) -> str:
    lines = [
        "# Request Analysis\n",
        f"- Reasoning: {classification.category.value}",
        f"- Domain: {classification.domain.value}",
        f"- Complexity: {classification.complexity.value}",
    ]
    if classification.plan.steps:
        lines.append("\nSuggested approach:")
        lines.extend(f"{i}. {step}" for i, step in enumerate(classification.plan.steps, 1))
    if classification.information_gaps:
        lines.append("\nThe request may be missing details:")
        lines.extend(f"- {gap.description}" for gap in classification.information_gaps)
    return "\n".join(lines)


def _format_knowledge(entries: list[KnowledgeEntry]) -> str:
    if not entries:
        return ""
    lines = ["# Background Knowledge\n"]
    for entry in entries:
        lines.append(f"## {entry.title}\n{_excerpt(entry.body, KNOWLEDGE_EXCERPT_CHARS)}")
    return "\n\n".join(lines)


def _format_memories(memories: list[RelevantTurn]) -> str:
    """Format recalled turns for injection into the system prompt."""
    relevant = [m for m in memories if m.relevance > 0]
    if not relevant:
        return ""
    lines = ["# Recalled Conversation\n"]
    for memory in relevant:
        excerpt = _excerpt(memory.turn.content, MEMORY_EXCERPT_CHARS)
        lines.append(f"- [{memory.turn.role}] {excerpt}")
    return "\n".join(lines)


def _format_profile(profile: UserProfile | None) -> str:
    if profile is None or profile.interaction_count == 0:
        return ""
    lines = [
        "# User Profile\n",
        f"- Expertise: {profile.expertise}",
        f"- Communication style: {profile.communication_style}",
    ]
    if topics := profile.top_topics():
        lines.append(f"- Frequent topics: {', '.join(topics)}")
    return "\n".join(lines)


def build_system_prompt(
    strategy: SynthesisStrategy,
    classification: ClassificationRecord | None = None,
    *,
    knowledge: list[KnowledgeEntry] | None = None,
    memories: list[RelevantTurn] | None = None,
    profile: UserProfile | None = None,
) -> str:
    """Assemble the system prompt sent to every capability.

    Sections with nothing to say are left out. The strategy instructions
    always come first.
    """
    header = BASE_PROMPT.format(strategy=strategy.value)
    instructions = STRATEGY_INSTRUCTIONS.get(
        strategy, STRATEGY_INSTRUCTIONS[SynthesisStrategy.ANALYTICAL]
    )
    sections = [f"{header}\n\n{instructions}"]

    if classification is not None:
        sections.append(_format_plan(classification))
    for section in (
        _format_profile(profile),
        _format_knowledge(knowledge or []),
        _format_memories(memories or []),
    ):
        if section:
            sections.append(section)

    prompt = SECTION_SEPARATOR.join(sections)
    logger.debug("System prompt: %d sections, %d chars", len(sections), len(prompt))
    return prompt
