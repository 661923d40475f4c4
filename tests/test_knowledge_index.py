"""Tests for the knowledge index: mutations, search and maintenance."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from chorus.errors import InvalidKnowledgeError, KnowledgeNotFoundError
from chorus.knowledge.index import (
    KnowledgeIndex,
    analyze_query,
    cosine_similarity,
    tokenize,
    vocabulary_vector,
)
from chorus.knowledge.seed import SEED_ENTRIES, seed_index


@pytest.fixture
def index() -> KnowledgeIndex:
    return KnowledgeIndex(max_results=5)


# -- Helpers -------------------------------------------------------------------


def test_tokenize_drops_short_terms() -> None:
    assert tokenize("An API is a contract, OK?") == ["api", "contract"]


def test_vocabulary_vector_counts_fixed_words() -> None:
    vector = vocabulary_vector("code code data market")
    assert len(vector) == 12
    assert vector[1] == 2  # code
    assert vector[3] == 1  # data
    assert vector[10] == 1  # market


def test_cosine_similarity() -> None:
    assert cosine_similarity([1, 0, 2], [1, 0, 2]) == pytest.approx(1.0)
    assert cosine_similarity([1, 0], [0, 1]) == 0.0
    assert cosine_similarity([0, 0], [1, 1]) == 0.0


def test_analyze_query_type_and_complexity() -> None:
    analysis = analyze_query("how to fix this error")
    assert analysis.query_type == "how_to"
    assert analysis.complexity == "low"
    assert analyze_query("compare python vs java").query_type == "comparison"
    assert analyze_query("caching and sharding").complexity == "high"


def test_analyze_query_domain_hints_sorted() -> None:
    analysis = analyze_query("market strategy for customer data")
    assert analysis.top_domain == "business"
    assert [h.domain for h in analysis.domain_hints] == ["business", "science"]


# -- Mutations -----------------------------------------------------------------


async def test_add_then_search_exact_title(index: KnowledgeIndex) -> None:
    entry = await index.add(
        "Quantum Entanglement Basics", "Particles share state across distance.", domain="science"
    )

    results = index.search("Quantum Entanglement Basics")

    assert entry.id in [e.id for e in results.entries]
    hit = next(h for h in results.items if h.entry.id == entry.id)
    assert hit.score > 0


async def test_add_rejects_missing_title_or_body(index: KnowledgeIndex) -> None:
    with pytest.raises(InvalidKnowledgeError):
        await index.add("", "body")
    with pytest.raises(InvalidKnowledgeError):
        await index.add("Title", "   ")
    assert len(index) == 0


async def test_add_rejects_non_text_body(index: KnowledgeIndex) -> None:
    with pytest.raises(InvalidKnowledgeError, match="must be text"):
        await index.add("Numbers", 42)
    assert len(index) == 0


async def test_add_rejects_out_of_range_quality(index: KnowledgeIndex) -> None:
    with pytest.raises(InvalidKnowledgeError):
        await index.add("Title", "Body", quality=2.0)


async def test_update_reindexes_terms(index: KnowledgeIndex) -> None:
    entry = await index.add("Phonetic notes", "alpha bravo")

    updated = await index.update(entry.id, body="charlie delta")

    assert updated.body == "charlie delta"
    assert updated.updated_at >= entry.updated_at
    assert index.search("bravo").items == []
    assert [e.id for e in index.search("charlie").entries] == [entry.id]


async def test_update_unknown_entry(index: KnowledgeIndex) -> None:
    with pytest.raises(KnowledgeNotFoundError) as exc_info:
        await index.update("missing", body="x")
    assert exc_info.value.reason == "knowledge_not_found"


async def test_update_cannot_blank_the_body(index: KnowledgeIndex) -> None:
    entry = await index.add("Title", "Body text")
    with pytest.raises(InvalidKnowledgeError):
        await index.update(entry.id, body="")
    assert index.get(entry.id).body == "Body text"


async def test_delete_removes_from_every_search(index: KnowledgeIndex) -> None:
    entry = await index.add("Caching Patterns", "Read-through cache for code and data")
    keep = await index.add("Queue Patterns", "Backpressure for data pipelines")

    await index.delete(entry.id)

    assert entry.id not in index
    for query in ("Caching Patterns", "code data", "read-through"):
        assert entry.id not in [e.id for e in index.search(query).entries]
    assert keep.id in [e.id for e in index.search("Queue Patterns").entries]
    with pytest.raises(KnowledgeNotFoundError):
        index.get(entry.id)


async def test_delete_unknown_entry(index: KnowledgeIndex) -> None:
    with pytest.raises(KnowledgeNotFoundError):
        await index.delete("missing")


async def test_concurrent_updates_to_one_entry(index: KnowledgeIndex) -> None:
    entry = await index.add("Counter", "start")

    await asyncio.gather(*(index.update(entry.id, body=f"version {i}") for i in range(10)))

    final = index.get(entry.id).body
    assert final.startswith("version ")
    # Only the surviving body's terms remain indexed
    assert index.search("start").items == []


# -- Ranking -------------------------------------------------------------------


async def test_composite_score(index: KnowledgeIndex) -> None:
    entry = await index.add(
        "Cache Design",
        "cache invalidation strategies",
        domain="programming",
        tags=["cache-layer"],
        quality=0.5,
    )
    analysis = analyze_query("cache")

    # title 3 + body 1 + tag 2 + quality 0.5 + recency 0.5
    assert index.score(entry, analysis) == pytest.approx(7.0)
    assert index.score(entry, analysis, expertise="cache-layer") == pytest.approx(8.0)


async def test_stale_entries_lose_recency_bonus(index: KnowledgeIndex) -> None:
    entry = await index.add("Cache Design", "cache", quality=0.0)
    entry.updated_at = datetime.now(UTC) - timedelta(days=45)

    assert index.score(entry, analyze_query("cache")) == pytest.approx(4.0)


async def test_top_domain_hint_bonus(index: KnowledgeIndex) -> None:
    programming = await index.add("Loops", "iteration", domain="programming", quality=0.0)
    other = await index.add("Loops", "iteration", domain="general", quality=0.0)
    analysis = analyze_query("loops in code")

    assert index.score(programming, analysis) - index.score(other, analysis) == pytest.approx(2.0)


async def test_domain_filter(index: KnowledgeIndex) -> None:
    await index.add("Market sizing", "customer counts", domain="business")
    await index.add("Market data pipelines", "code for market data", domain="programming")

    results = index.search("market", domain="business")

    assert [e.domain for e in results.entries] == ["business"]
    assert results.total == 2


async def test_results_truncated_and_counted(index: KnowledgeIndex) -> None:
    for i in range(4):
        await index.add(f"Sorting note {i}", "sorting algorithms")

    results = index.search("sorting", max_results=2)

    assert len(results.items) == 2
    assert results.total == 4
    assert results.scores == sorted(results.scores, reverse=True)
    assert results.analysis is not None


async def test_negative_limit_returns_nothing(index: KnowledgeIndex) -> None:
    for i in range(3):
        await index.add(f"Sorting note {i}", "sorting algorithms")

    results = index.search("sorting", max_results=-1)

    assert results.items == []
    assert results.total == 3


async def test_search_bumps_usage_counters(index: KnowledgeIndex) -> None:
    entry = await index.add("Indexing", "B-tree indexing")

    index.search("indexing")
    index.search("indexing")

    assert index.get(entry.id).access_count == 2
    assert index.get(entry.id).last_accessed is not None


async def test_unrelated_query_finds_nothing(index: KnowledgeIndex) -> None:
    await index.add("Growth", "strategy strategy market")

    results = index.search("zebra")

    assert results.items == []
    assert results.total == 0


# -- Seed and maintenance ------------------------------------------------------


async def test_seed_corpus(index: KnowledgeIndex) -> None:
    assert await seed_index(index) == len(SEED_ENTRIES) == 5

    results = index.search("business strategy")

    assert results.entries[0].id == "business-strategy-basics"


async def test_stats(index: KnowledgeIndex) -> None:
    await seed_index(index)
    index.search("scientific method")

    stats = index.stats()

    assert stats["total_items"] == 5
    assert stats["domain_distribution"]["programming"] == 2
    assert stats["quality_distribution"] == {"high": 5, "medium": 0, "low": 0}
    assert stats["recently_added"] == 5
    assert stats["most_accessed"][0]["access_count"] >= 1


async def test_export_import_round_trip(index: KnowledgeIndex) -> None:
    await seed_index(index)
    exported = index.export(domain="programming")
    assert exported["item_count"] == 2

    fresh = KnowledgeIndex()
    report = await fresh.import_entries(exported)

    assert report == {"imported": 2, "errors": [], "total": 2}
    assert "javascript-best-practices" in fresh
    assert fresh.get("javascript-best-practices").source == "import"


async def test_import_keeps_timestamps(index: KnowledgeIndex) -> None:
    created = datetime.now(UTC) - timedelta(days=500)
    updated = datetime.now(UTC) - timedelta(days=400)
    await index.add(
        "Old notes", "Legacy text", entry_id="old", created_at=created, updated_at=updated
    )

    fresh = KnowledgeIndex()
    await fresh.import_entries(index.export())

    restored = fresh.get("old")
    assert restored.created_at == created
    assert restored.updated_at == updated


async def test_import_reports_non_text_body(index: KnowledgeIndex) -> None:
    report = await index.import_entries(
        {
            "items": [
                {"id": "n", "title": "Numbers", "body": 42},
                {"id": "ok", "title": "Fine", "body": "text"},
            ]
        }
    )
    assert report["imported"] == 1
    assert report["errors"][0]["item"] == "n"
    assert "n" not in index


async def test_import_reports_bad_items(index: KnowledgeIndex) -> None:
    report = await index.import_entries(
        {"items": [{"id": "ok", "title": "Fine", "body": "text"}, {"id": "bad", "title": ""}]}
    )
    assert report["imported"] == 1
    assert report["errors"][0]["item"] == "bad"
