"""In-process knowledge index with keyword and vocabulary-vector search.

Search is synchronous and never blocks. Mutations take a per-entry lock so
concurrent writers to the same id apply one at a time; each mutation is
visible to the very next search.
"""

from __future__ import annotations

import logging
import math
import re
import time
import uuid
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from chorus.errors import InvalidKnowledgeError, KnowledgeNotFoundError
from chorus.knowledge.models import (
    DomainHint,
    KnowledgeEntry,
    KnowledgeHit,
    QueryAnalysis,
    SearchResults,
)
from chorus.locks import KeyedLock

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"\W+")
_SPECIFIC_TERMS = re.compile(r"\b(specific|detailed|comprehensive|advanced)\b", re.IGNORECASE)

MIN_TERM_LENGTH = 3
SIMILARITY_FLOOR = 0.1
SIMILARITY_TOP_K = 20
RECENT_DAYS = 30
NEW_ENTRY_DAYS = 7

VOCABULARY = (
    "programming", "code", "function", "data", "algorithm", "science",
    "research", "experiment", "business", "strategy", "market", "customer",
)

# First match wins
QUERY_TYPES: dict[str, tuple[str, ...]] = {
    "definition": ("what is", "define", "meaning of", "explain"),
    "how_to": ("how to", "how do", "steps to", "guide"),
    "comparison": ("vs", "versus", "compare", "difference"),
    "troubleshooting": ("error", "problem", "issue", "fix", "debug"),
    "best_practice": ("best practice", "recommended", "should", "better way"),
}

DOMAIN_HINT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "programming": ("code", "function", "variable", "algorithm", "debug", "test"),
    "science": ("hypothesis", "experiment", "data", "analysis", "theory"),
    "business": ("strategy", "market", "customer", "revenue", "profit"),
}


def tokenize(text: str) -> list[str]:
    """Lowercased words of at least three characters."""
    return [w for w in _NON_WORD.split(text.lower()) if len(w) >= MIN_TERM_LENGTH]


def vocabulary_vector(text: str) -> list[int]:
    words = tokenize(text)
    return [words.count(term) for term in VOCABULARY]


def cosine_similarity(a: list[int], b: list[int]) -> float:
    dot = sum(x * y for x, y in zip(a, b, strict=True))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


def analyze_query(query: str) -> QueryAnalysis:
    lowered = query.lower()

    query_type = "general"
    for kind, patterns in QUERY_TYPES.items():
        if any(p in lowered for p in patterns):
            query_type = kind
            break

    hints = [
        DomainHint(domain=domain, matches=matches)
        for domain, keywords in DOMAIN_HINT_KEYWORDS.items()
        if (matches := tuple(k for k in keywords if k in lowered))
    ]
    hints.sort(key=lambda h: h.score, reverse=True)

    word_count = len(query.split())
    if word_count > 10 or " and " in query or " or " in query or _SPECIFIC_TERMS.search(query):
        complexity = "high"
    elif word_count > 5:
        complexity = "medium"
    else:
        complexity = "low"

    return QueryAnalysis(
        query=query,
        words=tuple(tokenize(query)),
        query_type=query_type,
        domain_hints=tuple(hints),
        complexity=complexity,
    )


class KnowledgeIndex:
    """Knowledge entries plus the inverted index over their terms."""

    def __init__(self, max_results: int = 5) -> None:
        self.max_results = max_results
        self._entries: dict[str, KnowledgeEntry] = {}
        self._terms: dict[str, set[str]] = {}
        self._locks = KeyedLock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    @property
    def term_count(self) -> int:
        return len(self._terms)

    def get(self, entry_id: str) -> KnowledgeEntry:
        try:
            return self._entries[entry_id]
        except KeyError:
            msg = f"Knowledge entry {entry_id} not found"
            raise KnowledgeNotFoundError(msg) from None

    # -- Indexing ------------------------------------------------------------

    @staticmethod
    def _entry_terms(entry: KnowledgeEntry) -> set[str]:
        terms = set(tokenize(entry.title)) | set(tokenize(entry.body))
        terms.update(t.lower() for t in entry.tags if len(t) >= MIN_TERM_LENGTH)
        return terms

    def _index_entry(self, entry: KnowledgeEntry) -> None:
        for term in self._entry_terms(entry):
            self._terms.setdefault(term, set()).add(entry.id)

    def _unindex_entry(self, entry: KnowledgeEntry) -> None:
        for term in self._entry_terms(entry):
            ids = self._terms.get(term)
            if ids is None:
                continue
            ids.discard(entry.id)
            if not ids:
                del self._terms[term]

    def rebuild(self) -> None:
        """Recreate the inverted index from scratch."""
        self._terms.clear()
        for entry in self._entries.values():
            self._index_entry(entry)
        logger.info("Rebuilt knowledge index with %d terms", len(self._terms))

    @staticmethod
    def _validate(fields: dict[str, Any]) -> KnowledgeEntry:
        title, body = fields.get("title"), fields.get("body")
        if not isinstance(title, str) or not isinstance(body, str):
            msg = "Knowledge title and body must be text"
            raise InvalidKnowledgeError(msg)
        if not title.strip() or not body.strip():
            msg = "Knowledge entries need a non-empty title and body"
            raise InvalidKnowledgeError(msg)
        fields["vector"] = vocabulary_vector(body)
        try:
            return KnowledgeEntry(**fields)
        except ValidationError as exc:
            msg = f"Invalid knowledge entry: {exc.error_count()} field error(s)"
            raise InvalidKnowledgeError(msg) from exc

    # -- Write ---------------------------------------------------------------

    async def add(
        self,
        title: str,
        body: str,
        *,
        domain: str = "general",
        tags: Iterable[str] = (),
        quality: float = 0.5,
        source: str = "user",
        entry_id: str | None = None,
        created_at: datetime | str | None = None,
        updated_at: datetime | str | None = None,
    ) -> KnowledgeEntry:
        """Add an entry, replacing any existing entry with the same id.

        ``created_at`` and ``updated_at`` default to now; pass them to keep
        the history of an entry brought in from elsewhere.

        Raises:
            InvalidKnowledgeError: If the title or body is empty, or a field
                fails validation.
        """
        entry_id = entry_id or str(uuid.uuid4())
        fields: dict[str, Any] = {
            "id": entry_id,
            "title": title,
            "body": body,
            "domain": domain,
            "tags": list(tags),
            "quality": quality,
            "source": source,
        }
        if created_at is not None:
            fields["created_at"] = created_at
        if updated_at is not None:
            fields["updated_at"] = updated_at
        async with self._locks.hold(entry_id):
            entry = self._validate(fields)
            previous = self._entries.get(entry_id)
            if previous is not None:
                self._unindex_entry(previous)
            self._entries[entry_id] = entry
            self._index_entry(entry)
        logger.info("Added knowledge %s to domain %s", entry_id, domain)
        return entry

    async def update(self, entry_id: str, **changes: Any) -> KnowledgeEntry:
        """Apply *changes* to an entry and re-index it.

        Raises:
            KnowledgeNotFoundError: If *entry_id* does not exist.
            InvalidKnowledgeError: If the result would be invalid.
        """
        async with self._locks.hold(entry_id):
            existing = self.get(entry_id)
            fields = existing.model_dump(exclude={"vector"})
            fields.update({k: v for k, v in changes.items() if k not in ("id", "vector")})
            fields["updated_at"] = datetime.now(UTC)
            updated = self._validate(fields)

            self._unindex_entry(existing)
            self._entries[entry_id] = updated
            self._index_entry(updated)
        logger.info("Updated knowledge %s", entry_id)
        return updated

    async def delete(self, entry_id: str) -> None:
        """Remove an entry and rebuild the whole term index.

        Raises:
            KnowledgeNotFoundError: If *entry_id* does not exist.
        """
        async with self._locks.hold(entry_id):
            self.get(entry_id)
            del self._entries[entry_id]
            self.rebuild()
        logger.info("Deleted knowledge %s", entry_id)

    # -- Search --------------------------------------------------------------

    def _keyword_candidates(self, words: Iterable[str]) -> set[str]:
        ids: set[str] = set()
        for word in words:
            ids |= self._terms.get(word, set())
        return ids

    def _similarity_candidates(self, query: str) -> list[str]:
        query_vector = vocabulary_vector(query)
        scored = []
        for entry in self._entries.values():
            similarity = cosine_similarity(query_vector, entry.vector)
            if similarity > SIMILARITY_FLOOR:
                scored.append((entry.id, similarity))
        scored.sort(key=lambda item: item[1], reverse=True)
        return [entry_id for entry_id, _ in scored[:SIMILARITY_TOP_K]]

    def score(
        self, entry: KnowledgeEntry, analysis: QueryAnalysis, expertise: str | None = None
    ) -> float:
        """Composite relevance of *entry* for an analyzed query."""
        title = entry.title.lower()
        body = entry.body.lower()
        words = analysis.words

        score = 3.0 * sum(title.count(w) for w in words)
        score += sum(body.count(w) for w in words)
        score += 2.0 * sum(1 for tag in entry.tags if any(w in tag.lower() for w in words))
        if analysis.top_domain and entry.domain == analysis.top_domain:
            score += 2.0
        score += entry.quality
        if datetime.now(UTC) - entry.updated_at < timedelta(days=RECENT_DAYS):
            score += 0.5
        if expertise and expertise in entry.tags:
            score += 1.0
        return score

    def search(
        self,
        query: str,
        *,
        domain: str | None = None,
        max_results: int | None = None,
        expertise: str | None = None,
    ) -> SearchResults:
        """Rank entries for *query*.

        Args:
            query: Free-text query.
            domain: When set, only entries from this domain are returned.
            max_results: Result cap; defaults to the index's ``max_results``.
            expertise: User expertise tag that boosts matching entries.
        """
        start = time.monotonic()
        analysis = analyze_query(query)

        candidate_ids = self._keyword_candidates(analysis.words)
        candidate_ids.update(self._similarity_candidates(query))
        if domain:
            candidate_ids.update(e.id for e in self._entries.values() if e.domain == domain)

        candidates = [self._entries[i] for i in candidate_ids if i in self._entries]
        # Id order first so equal scores rank the same way every time
        candidates.sort(key=lambda e: e.id)
        hits = [KnowledgeHit(entry=e, score=self.score(e, analysis, expertise)) for e in candidates]
        hits.sort(key=lambda h: h.score, reverse=True)
        if domain:
            hits = [h for h in hits if h.entry.domain == domain]

        limit = self.max_results if max_results is None else max_results
        hits = hits[: max(0, limit)]

        now = datetime.now(UTC)
        for hit in hits:
            hit.entry.access_count += 1
            hit.entry.last_accessed = now

        elapsed_ms = (time.monotonic() - start) * 1000
        logger.debug(
            "Knowledge search %r: %d candidates, %d returned in %.1fms",
            query[:60],
            len(candidates),
            len(hits),
            elapsed_ms,
        )
        return SearchResults(
            items=hits, total=len(candidates), query_time_ms=elapsed_ms, analysis=analysis
        )

    # -- Maintenance ---------------------------------------------------------

    def stats(self) -> dict[str, Any]:
        """Entry counts by domain and quality, plus the most used entries."""
        domains: dict[str, int] = {}
        quality = {"high": 0, "medium": 0, "low": 0}
        week_ago = datetime.now(UTC) - timedelta(days=NEW_ENTRY_DAYS)
        recently_added = 0

        for entry in self._entries.values():
            domains[entry.domain] = domains.get(entry.domain, 0) + 1
            if entry.quality >= 0.8:
                quality["high"] += 1
            elif entry.quality >= 0.5:
                quality["medium"] += 1
            else:
                quality["low"] += 1
            if entry.created_at > week_ago:
                recently_added += 1

        most_accessed = sorted(self._entries.values(), key=lambda e: e.access_count, reverse=True)
        return {
            "total_items": len(self._entries),
            "terms": len(self._terms),
            "domain_distribution": domains,
            "quality_distribution": quality,
            "recently_added": recently_added,
            "most_accessed": [
                {"id": e.id, "access_count": e.access_count} for e in most_accessed[:10]
            ],
        }

    def export(self, domain: str | None = None) -> dict[str, Any]:
        entries = [e for e in self._entries.values() if domain is None or e.domain == domain]
        return {
            "export_date": datetime.now(UTC).isoformat(),
            "domain": domain,
            "item_count": len(entries),
            "items": [e.export() for e in entries],
        }

    async def import_entries(self, data: dict[str, Any]) -> dict[str, Any]:
        """Add every item of an ``export()`` payload. Bad items are reported, not raised."""
        items = data.get("items", [])
        imported = 0
        errors: list[dict[str, str]] = []
        for item in items:
            try:
                await self.add(
                    item.get("title", ""),
                    item.get("body", ""),
                    domain=item.get("domain") or "general",
                    tags=item.get("tags") or (),
                    quality=item.get("quality", 0.5),
                    source="import",
                    entry_id=item.get("id"),
                    created_at=item.get("created_at"),
                    updated_at=item.get("updated_at"),
                )
                imported += 1
            except InvalidKnowledgeError as exc:
                label = item.get("id") or item.get("title", "")
                errors.append({"item": label, "error": exc.message})
        if errors:
            logger.warning("Knowledge import skipped %d of %d items", len(errors), len(items))
        return {"imported": imported, "errors": errors, "total": len(items)}
