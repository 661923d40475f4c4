"""Data models for conversation memory and user profiles."""

from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class ConversationTurn:
    """A single conversation turn."""

    role: str  # "user" or "assistant"
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_api_message(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class RelevantTurn:
    """A remembered turn with its word-overlap relevance to a query."""

    turn: ConversationTurn
    relevance: float


@dataclass
class UserProfile:
    user_id: str
    expertise: str = "general"
    communication_style: str = "balanced"
    interaction_count: int = 0
    topics_of_interest: dict[str, int] = field(default_factory=dict)

    def top_topics(self, n: int = 3) -> list[str]:
        ranked = sorted(self.topics_of_interest.items(), key=lambda kv: kv[1], reverse=True)
        return [topic for topic, _ in ranked[:n]]
