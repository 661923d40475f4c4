"""Classification data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ReasoningCategory(str, Enum):
    """Kind of reasoning a query calls for. Order is the tie-break order."""

    DEDUCTIVE = "deductive"
    INDUCTIVE = "inductive"
    ABDUCTIVE = "abductive"
    ANALOGICAL = "analogical"
    CAUSAL = "causal"
    PROBABILISTIC = "probabilistic"
    SCIENTIFIC = "scientific"
    PHILOSOPHICAL = "philosophical"
    GENERAL = "general"


class TopicDomain(str, Enum):
    PROGRAMMING = "programming"
    SCIENCE = "science"
    BUSINESS = "business"
    CREATIVE = "creative"
    TECHNICAL = "technical"
    PHILOSOPHY = "philosophy"
    PSYCHOLOGY = "psychology"
    MEDICINE = "medicine"
    LAW = "law"
    EDUCATION = "education"
    GENERAL = "general"


class Complexity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SynthesisStrategy(str, Enum):
    """How several candidate answers are reconciled into one."""

    ANALYTICAL = "analytical"
    LOGICAL = "logical"
    CAUSAL = "causal"
    PROBABILISTIC = "probabilistic"
    SCIENTIFIC = "scientific"
    PHILOSOPHICAL = "philosophical"
    EMPATHETIC = "empathetic"
    CREATIVE = "creative"
    COLLABORATIVE = "collaborative"
    STRATEGIC = "strategic"


@dataclass(frozen=True)
class InformationGap:
    type: str
    description: str
    severity: str


@dataclass(frozen=True)
class ReasoningPlan:
    """Ordered steps the backends are asked to follow."""

    steps: tuple[str, ...] = ()
    resources: tuple[str, ...] = ()
    validation_methods: tuple[str, ...] = ()
    estimated_seconds: int = 0


@dataclass(frozen=True)
class ClassificationRecord:
    """Everything the classifier derives from one query.

    Attributes:
        category: Winning reasoning category.
        domain: Winning topic domain.
        complexity: Complexity tier.
        suggested_tools: Tool names, highest priority first.
        information_gaps: Missing details detected in the query.
        confidence: Classifier confidence in [0.1, 1.0].
        message_types: Coarse message types (creative, analytical, ...).
        strategy: Synthesis strategy selected for this request.
        processing_strategy: Label from the complexity × category table.
        plan: Reasoning plan handed to the backends.
    """

    category: ReasoningCategory
    domain: TopicDomain
    complexity: Complexity
    suggested_tools: tuple[str, ...]
    information_gaps: tuple[InformationGap, ...]
    confidence: float
    message_types: tuple[str, ...] = ("general",)
    strategy: SynthesisStrategy = SynthesisStrategy.ANALYTICAL
    processing_strategy: str = "standard_processing"
    plan: ReasoningPlan = field(default_factory=ReasoningPlan)

    @property
    def requires_tools(self) -> bool:
        return bool(self.suggested_tools)
