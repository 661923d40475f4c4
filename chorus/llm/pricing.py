"""Token cost estimates per model.

Backends report a single total token count, so every estimate assumes the
total splits evenly between input and output tokens.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chorus.llm.models import resolve

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chorus.synthesis.models import CandidateResponse

logger = logging.getLogger(__name__)

DEFAULT_PRICING_MODEL = "gpt-4o"

# USD per million tokens: (input, output)
PRICING: dict[str, tuple[float, float]] = {
    "gpt-4o": (2.50, 10.00),
    "gpt-4o-mini": (0.15, 0.60),
    "gpt-4-turbo": (10.00, 30.00),
    "claude-sonnet-4-5-20250929": (3.00, 15.00),
    "claude-haiku-4-5-20251001": (1.00, 5.00),
    "claude-opus-4-1-20250805": (15.00, 75.00),
    "gemini-1.5-pro": (1.25, 5.00),
    "gemini-2.0-flash": (0.10, 0.40),
}


@dataclass
class UsageSummary:
    """Token and cost totals across the candidates of one request."""

    total_tokens: int = 0
    total_cost: float = 0.0
    by_source: dict[str, float] = field(default_factory=dict)


def price_for(model: str) -> tuple[float, float]:
    """Per-million (input, output) prices, falling back to the default model."""
    prices = PRICING.get(resolve(model))
    if prices is None:
        logger.debug("No pricing for %s, using %s", model, DEFAULT_PRICING_MODEL)
        return PRICING[DEFAULT_PRICING_MODEL]
    return prices


def estimate_cost(tokens: int, model: str) -> float:
    """Estimated USD cost of *tokens* total tokens on *model*."""
    if tokens <= 0:
        return 0.0
    input_price, output_price = price_for(model)
    half = tokens / 2
    return (half * input_price + half * output_price) / 1_000_000


def summarize_usage(candidates: Iterable[CandidateResponse]) -> UsageSummary:
    """Aggregate token counts and costs per candidate source."""
    summary = UsageSummary()
    for candidate in candidates:
        cost = estimate_cost(candidate.tokens, candidate.model)
        summary.total_tokens += candidate.tokens
        summary.total_cost += cost
        summary.by_source[candidate.source] = summary.by_source.get(candidate.source, 0.0) + cost
    return summary


def format_cost(cost: float) -> str:
    """Human-readable cost string."""
    return "< $0.01" if cost < 0.01 else f"${cost:.4f}"
