"""Per-user profile tracking: expertise, style and topics of interest."""

from __future__ import annotations

import logging
import re
from dataclasses import replace

from chorus.locks import KeyedLock
from chorus.memory.models import UserProfile

logger = logging.getLogger(__name__)

TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "programming": ("code", "programming", "software", "development"),
    "ai": ("ai", "artificial intelligence", "machine learning", "neural"),
    "business": ("business", "marketing", "strategy", "management"),
    "science": ("science", "research", "experiment", "study"),
}

_TOPIC_PATTERNS = {
    topic: re.compile(r"\b(?:" + "|".join(re.escape(k) for k in keywords) + r")\b")
    for topic, keywords in TOPIC_KEYWORDS.items()
}


def extract_topics(message: str) -> list[str]:
    """Topics whose keywords appear as whole words in *message*."""
    lowered = message.lower()
    return [topic for topic, pattern in _TOPIC_PATTERNS.items() if pattern.search(lowered)]


class ProfileStore:
    """In-process user profiles keyed by user id."""

    def __init__(self) -> None:
        self._profiles: dict[str, UserProfile] = {}
        self._locks = KeyedLock()

    def __len__(self) -> int:
        return len(self._profiles)

    def get(self, user_id: str) -> UserProfile:
        """Return a snapshot of the profile, or a default one for unknown users."""
        profile = self._profiles.get(user_id)
        if profile is None:
            return UserProfile(user_id=user_id)
        return replace(profile, topics_of_interest=dict(profile.topics_of_interest))

    async def record_interaction(
        self,
        user_id: str,
        message: str,
        *,
        expertise: str | None = None,
        communication_style: str | None = None,
    ) -> UserProfile:
        """Count one interaction and the topics *message* touches."""
        async with self._locks.hold(user_id):
            profile = self._profiles.setdefault(user_id, UserProfile(user_id=user_id))
            profile.interaction_count += 1
            if expertise:
                profile.expertise = expertise
            if communication_style:
                profile.communication_style = communication_style
            for topic in extract_topics(message):
                profile.topics_of_interest[topic] = profile.topics_of_interest.get(topic, 0) + 1
            snapshot = self.get(user_id)
        logger.debug(
            "Profile %s: %d interactions, topics=%s",
            user_id,
            snapshot.interaction_count,
            snapshot.topics_of_interest,
        )
        return snapshot
