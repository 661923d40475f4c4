"""Data models for the knowledge index."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(UTC)


class KnowledgeEntry(BaseModel):
    """A document the index can return as background context."""

    id: str
    title: str
    body: str
    domain: str = "general"
    tags: list[str] = Field(default_factory=list)
    quality: float = Field(default=0.5, ge=0.0, le=1.0)
    vector: list[int] = Field(default_factory=list)
    source: str = "system"  # "system", "user" or "import"
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    # Usage counters, bumped by search
    access_count: int = 0
    last_accessed: datetime | None = None

    def export(self) -> dict:
        return self.model_dump(
            mode="json", exclude={"vector", "access_count", "last_accessed"}
        )


@dataclass(frozen=True)
class DomainHint:
    domain: str
    matches: tuple[str, ...]

    @property
    def score(self) -> int:
        return len(self.matches)


@dataclass(frozen=True)
class QueryAnalysis:
    """What the index inferred about a search query."""

    query: str
    words: tuple[str, ...]
    query_type: str
    domain_hints: tuple[DomainHint, ...]
    complexity: str

    @property
    def top_domain(self) -> str | None:
        return self.domain_hints[0].domain if self.domain_hints else None


@dataclass(frozen=True)
class KnowledgeHit:
    entry: KnowledgeEntry
    score: float


@dataclass
class SearchResults:
    """Ranked hits plus the number of candidates considered."""

    items: list[KnowledgeHit] = field(default_factory=list)
    total: int = 0
    query_time_ms: float = 0.0
    analysis: QueryAnalysis | None = None

    @property
    def entries(self) -> list[KnowledgeEntry]:
        return [hit.entry for hit in self.items]

    @property
    def scores(self) -> list[float]:
        return [hit.score for hit in self.items]
