"""Candidate and result records passed between fan-out and synthesis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chorus.orchestrator import CapabilityFailure
    from chorus.reasoning.models import ClassificationRecord, SynthesisStrategy
    from chorus.tools.base import ToolResult


@dataclass(frozen=True)
class CandidateResponse:
    """One backend's answer before synthesis."""

    source: str
    text: str
    tokens: int
    latency_ms: float
    confidence: float
    model: str = ""


@dataclass
class SynthesizedResult:
    """The single answer returned to the caller.

    The synthesizer fills the first block of fields. The engine adds the
    accounting and context fields afterwards.
    """

    text: str
    strategy: SynthesisStrategy
    confidence: float
    tokens: int
    stages: list[str]
    source: str
    reasoning: str

    cost: float = 0.0
    providers_used: list[str] = field(default_factory=list)
    failures: list[CapabilityFailure] = field(default_factory=list)
    classification: ClassificationRecord | None = None
    knowledge: list[str] = field(default_factory=list)
    tool_results: dict[str, ToolResult] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Flatten for logging or JSON output."""
        return {
            "text": self.text,
            "strategy": self.strategy.value,
            "confidence": self.confidence,
            "tokens": self.tokens,
            "stages": list(self.stages),
            "source": self.source,
            "reasoning": self.reasoning,
            "cost": self.cost,
            "providers_used": list(self.providers_used),
            "failures": [
                {"source": f.source, "reason": f.reason, "detail": f.detail}
                for f in self.failures
            ],
            "knowledge": list(self.knowledge),
            "tools": {name: r.summary for name, r in self.tool_results.items()},
        }
