"""Per-user conversation log with a fixed turn cap."""

from __future__ import annotations

import logging
import re

from chorus.locks import KeyedLock
from chorus.memory.models import ConversationTurn, RelevantTurn

logger = logging.getLogger(__name__)

_WORD = re.compile(r"\w+")


def _word_set(text: str) -> set[str]:
    return set(_WORD.findall(text.lower()))


def overlap_ratio(a: str, b: str) -> float:
    """|A ∩ B| / max(|A|, |B|) over lowercased word sets."""
    words_a, words_b = _word_set(a), _word_set(b)
    denominator = max(len(words_a), len(words_b))
    if denominator == 0:
        return 0.0
    return len(words_a & words_b) / denominator


class ConversationMemory:
    """Conversation history for every user, each capped at ``max_turns``.

    Once a log exceeds the cap, the oldest turns are dropped. Appends for one
    user are serialised; different users never wait on each other.
    """

    def __init__(self, max_turns: int = 40) -> None:
        if max_turns < 1:
            msg = f"max_turns must be at least 1, got {max_turns}"
            raise ValueError(msg)
        self.max_turns = max_turns
        self._logs: dict[str, list[ConversationTurn]] = {}
        self._locks = KeyedLock()

    def __len__(self) -> int:
        """Number of users with history."""
        return len(self._logs)

    def turn_count(self, user_id: str) -> int:
        return len(self._logs.get(user_id, ()))

    # -- Write ---------------------------------------------------------------

    def _append(self, user_id: str, turns: list[ConversationTurn]) -> None:
        log = self._logs.setdefault(user_id, [])
        log.extend(turns)
        if len(log) > self.max_turns:
            del log[: len(log) - self.max_turns]

    async def append(self, user_id: str, role: str, content: str) -> ConversationTurn:
        """Add one turn to a user's log."""
        turn = ConversationTurn(role=role, content=content)
        async with self._locks.hold(user_id):
            self._append(user_id, [turn])
        return turn

    async def record_exchange(self, user_id: str, query: str, answer: str) -> None:
        """Add a user turn and the assistant's reply as one write."""
        async with self._locks.hold(user_id):
            self._append(
                user_id,
                [
                    ConversationTurn(role="user", content=query),
                    ConversationTurn(role="assistant", content=answer),
                ],
            )
        logger.debug("User %s now has %d turns", user_id, self.turn_count(user_id))

    def clear(self, user_id: str) -> int:
        """Forget a user's history. Returns the count of cleared turns."""
        return len(self._logs.pop(user_id, []))

    # -- Read ----------------------------------------------------------------

    def recent(self, user_id: str, n: int = 5) -> list[ConversationTurn]:
        if n <= 0:
            return []
        return list(self._logs.get(user_id, [])[-n:])

    def relevant(self, user_id: str, query: str, k: int = 5) -> list[RelevantTurn]:
        """Top *k* turns by word overlap with *query*, most relevant first.

        Equal scores keep chronological order.
        """
        if k <= 0:
            return []
        scored = [
            RelevantTurn(turn=turn, relevance=overlap_ratio(turn.content, query))
            for turn in self._logs.get(user_id, [])
        ]
        scored.sort(key=lambda r: r.relevance, reverse=True)
        return scored[:k]

    def to_api_messages(self, user_id: str, n: int | None = None) -> list[dict[str, str]]:
        """Format a user's latest turns as provider chat messages."""
        turns = self._logs.get(user_id, [])
        if n is not None:
            turns = turns[-n:] if n > 0 else []
        return [t.to_api_message() for t in turns]
