"""Reduce candidate answers to a single SynthesizedResult."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chorus.synthesis.models import SynthesizedResult
from chorus.synthesis.strategies import STRATEGIES

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chorus.reasoning.models import SynthesisStrategy
    from chorus.synthesis.models import CandidateResponse

logger = logging.getLogger(__name__)

PASS_THROUGH_STAGES = ("single-provider", "pass-through")


class Synthesizer:
    """Dispatches to the synthesis function registered for a strategy."""

    def __init__(self, strategies: dict | None = None) -> None:
        self._strategies = strategies or STRATEGIES

    def synthesize(
        self, candidates: Sequence[CandidateResponse], strategy: SynthesisStrategy
    ) -> SynthesizedResult:
        """Combine *candidates* using *strategy*.

        A single candidate passes through untouched. Candidate order is the
        tie-break order, so callers must pass them in a stable order.

        Raises:
            ValueError: If *candidates* is empty.
        """
        if not candidates:
            msg = "Cannot synthesize zero candidates"
            raise ValueError(msg)

        if len(candidates) == 1:
            only = candidates[0]
            logger.debug("Single candidate from %s, passing through", only.source)
            return SynthesizedResult(
                text=only.text,
                strategy=strategy,
                confidence=only.confidence,
                tokens=only.tokens,
                stages=list(PASS_THROUGH_STAGES),
                source=only.source,
                reasoning=f"Single response from {only.source}",
            )

        result = self._strategies[strategy](candidates)
        logger.info(
            "Synthesized %d candidates with %s: source=%s stages=%s",
            len(candidates),
            strategy.value,
            result.source,
            ",".join(result.stages),
        )
        return result
