"""Concurrent fan-out of one prompt to every configured capability."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from chorus.errors import ConfigurationError
from chorus.synthesis.models import CandidateResponse

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chorus.llm.base import TextGenerationCapability

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CapabilityFailure:
    """Why one capability produced no candidate.

    ``reason`` is one of ``timeout``, ``unavailable`` or ``error``.
    """

    source: str
    reason: str
    detail: str = ""


@dataclass
class FanOutResult:
    """Successful candidates and failures, both in capability order."""

    candidates: list[CandidateResponse] = field(default_factory=list)
    failures: list[CapabilityFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return bool(self.candidates)


class Orchestrator:
    """Sends each request to all capabilities at once.

    A failing or slow capability never cancels or delays its siblings
    beyond its own timeout.
    """

    def __init__(self, capabilities: Sequence[TextGenerationCapability]) -> None:
        self._capabilities = list(capabilities)

    @property
    def capabilities(self) -> list[TextGenerationCapability]:
        return list(self._capabilities)

    def __len__(self) -> int:
        return len(self._capabilities)

    async def fan_out(
        self,
        prompt: str,
        context: list[dict[str, Any]],
        *,
        system: str = "",
        temperature: float = 0.4,
    ) -> FanOutResult:
        """Call every capability concurrently and collect the outcomes.

        Raises:
            ConfigurationError: If no capabilities are configured. Raised
                before any call is made.
        """
        if not self._capabilities:
            msg = "No text-generation capabilities configured"
            raise ConfigurationError(msg)

        # One slot per capability, filled in configured order.
        outcomes = await asyncio.gather(
            *(
                self._call(capability, prompt, context, system=system, temperature=temperature)
                for capability in self._capabilities
            )
        )

        result = FanOutResult()
        for outcome in outcomes:
            if isinstance(outcome, CapabilityFailure):
                result.failures.append(outcome)
            else:
                result.candidates.append(outcome)

        logger.info(
            "Fan-out finished: %d succeeded, %d failed",
            len(result.candidates),
            len(result.failures),
        )
        return result

    async def _call(
        self,
        capability: TextGenerationCapability,
        prompt: str,
        context: list[dict[str, Any]],
        *,
        system: str,
        temperature: float,
    ) -> CandidateResponse | CapabilityFailure:
        name = capability.name
        if not capability.available:
            logger.warning("Capability %s is unavailable, skipping", name)
            return CapabilityFailure(source=name, reason="unavailable", detail="not configured")

        start = time.monotonic()
        try:
            generation = await asyncio.wait_for(
                capability.generate(prompt, context, system=system, temperature=temperature),
                timeout=capability.timeout,
            )
        except TimeoutError:
            logger.warning("Capability %s timed out after %.1fs", name, capability.timeout)
            return CapabilityFailure(
                source=name, reason="timeout", detail=f"no answer within {capability.timeout}s"
            )
        except Exception as exc:
            logger.exception("Capability %s failed", name)
            detail = str(exc) or type(exc).__name__
            return CapabilityFailure(source=name, reason="error", detail=detail)

        latency_ms = (time.monotonic() - start) * 1000
        logger.debug(
            "Capability %s answered in %.0fms (%d tokens)", name, latency_ms, generation.tokens
        )
        return CandidateResponse(
            source=name,
            text=generation.text,
            tokens=generation.tokens,
            latency_ms=latency_ms,
            confidence=capability.confidence,
            model=generation.model or capability.model,
        )
