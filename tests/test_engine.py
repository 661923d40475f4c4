"""Tests for the end-to-end request pipeline."""

from unittest.mock import AsyncMock, patch

import pytest

from chorus.config import Settings
from chorus.engine import Engine, Query, build_engine
from chorus.errors import AllCapabilitiesFailedError, ConfigurationError, InvalidInputError
from chorus.knowledge.index import KnowledgeIndex
from chorus.knowledge.seed import seed_index
from chorus.memory.conversation import ConversationMemory
from chorus.reasoning.models import SynthesisStrategy
from chorus.tools.base import ToolResult
from chorus.tools.registry import ToolRegistry

# -- Rejections ----------------------------------------------------------------


async def test_empty_capability_set_raises_before_any_call() -> None:
    engine = Engine([])
    with patch("chorus.orchestrator.Orchestrator._call", new_callable=AsyncMock) as mock_call:
        with pytest.raises(ConfigurationError):
            await engine.handle(Query(text="hello"))
    assert mock_call.call_count == 0


@pytest.mark.parametrize("text", ["", "   \n\t"])
async def test_blank_query_rejected(make_capability, text: str) -> None:
    cap = make_capability("openai")
    with pytest.raises(InvalidInputError) as exc_info:
        await Engine([cap]).handle(Query(text=text))
    assert exc_info.value.reason == "invalid_input"
    assert cap.calls == []


async def test_oversized_query_rejected(make_capability) -> None:
    cap = make_capability("openai")
    with pytest.raises(InvalidInputError):
        await Engine([cap], max_query_chars=10).handle(Query(text="x" * 11))
    assert cap.calls == []


async def test_all_capabilities_failed(make_capability) -> None:
    memory = ConversationMemory()
    engine = Engine(
        [
            make_capability("openai", error=RuntimeError("down")),
            make_capability("anthropic", delay=1.0, timeout=0.01),
        ],
        memory=memory,
    )

    with pytest.raises(AllCapabilitiesFailedError) as exc_info:
        await engine.handle(Query(text="hello", user_id="u1"))

    error = exc_info.value
    assert [f.reason for f in error.failures] == ["error", "timeout"]
    assert error.to_dict() == {
        "reason": "all_capabilities_failed",
        "message": "All 2 capabilities failed",
        "failures": "openai:error, anthropic:timeout",
    }
    assert memory.turn_count("u1") == 0
    assert len(engine.profiles) == 0


# -- Synthesis paths -----------------------------------------------------------


async def test_single_capability_passes_text_through(make_capability) -> None:
    raw = "raw answer  \n  with spacing"
    result = await Engine([make_capability("openai", raw)]).handle(Query(text="hello"))

    assert result.text == raw
    assert result.source == "openai"
    assert result.stages == ["single-provider", "pass-through"]


async def test_why_question_uses_causal_synthesis(make_capability) -> None:
    engine = Engine(
        [make_capability("openai", "It is slow."), make_capability("anthropic", "Nested loops.")]
    )

    result = await engine.handle(Query(text="Why does this algorithm run slowly?"))

    assert result.stages == ["multi-provider", "causal-analysis"]
    assert result.strategy is SynthesisStrategy.CAUSAL
    assert result.classification is not None
    assert result.classification.category.value == "causal"


async def test_reasoning_mode_preference_forces_strategy(make_capability) -> None:
    engine = Engine([make_capability("openai", "a"), make_capability("google", "b")])

    result = await engine.handle(
        Query(text="Why is the sky blue?", preferences={"reasoning_mode": "strategic"})
    )

    assert result.stages == ["multi-provider", "strategic-synthesis"]
    assert result.source == "synthesized"


async def test_partial_failure_is_reported(make_capability) -> None:
    engine = Engine(
        [make_capability("openai", error=RuntimeError("down")), make_capability("google", "ok")]
    )

    result = await engine.handle(Query(text="hello"))

    assert result.text == "ok"
    assert result.providers_used == ["google"]
    assert [(f.source, f.reason) for f in result.failures] == [("openai", "error")]


# -- Context, tools and post-processing ----------------------------------------


async def test_tool_summaries_appended(make_capability) -> None:
    tools = ToolRegistry()

    @tools.tool(name="imageGeneration", description="Render an image")
    async def render(query: str, domain: str) -> ToolResult:
        return ToolResult(text="rendered sunset.png")

    engine = Engine([make_capability("openai", "Here is your sunset.")], tools=tools)

    result = await engine.handle(Query(text="create an image of a sunset"))

    assert result.text == (
        "Here is your sunset.\n\nTool Results:\n• imageGeneration: rendered sunset.png"
    )
    assert result.tool_results["imageGeneration"].success


async def test_response_style_applied(make_capability) -> None:
    engine = Engine([make_capability("openai", "Answer")])
    result = await engine.handle(
        Query(text="hello", preferences={"response_style": "technical"})
    )
    assert result.text == "[Technical Analysis] Answer"


async def test_knowledge_titles_reported_and_prompted(make_capability) -> None:
    index = KnowledgeIndex()
    await seed_index(index)
    cap = make_capability("openai")
    engine = Engine([cap], index=index)

    result = await engine.handle(Query(text="What is the scientific method for an experiment?"))

    assert "The Scientific Method" in result.knowledge
    assert "## The Scientific Method" in cap.calls[0]["system"]


async def test_cost_uses_candidate_models(make_capability) -> None:
    engine = Engine([make_capability("openai", tokens=1000, model="gpt-4o")])
    result = await engine.handle(Query(text="hello"))
    assert result.cost == pytest.approx(0.00625)
    assert result.tokens == 1000


async def test_exchange_persisted_and_used_as_context(make_capability) -> None:
    cap = make_capability("openai", "Use a heap.")
    engine = Engine([cap])

    await engine.handle(Query(text="How do I sort?", user_id="u1"))
    await engine.handle(Query(text="And for huge lists?", user_id="u1"))

    assert engine.memory.turn_count("u1") == 4
    assert cap.calls[1]["context"] == [
        {"role": "user", "content": "How do I sort?"},
        {"role": "assistant", "content": "Use a heap."},
    ]
    assert engine.profiles.get("u1").interaction_count == 2


async def test_explicit_context_is_forwarded(make_capability) -> None:
    cap = make_capability("openai")
    context = ({"role": "user", "content": "earlier question"},)

    await Engine([cap]).handle(Query(text="hello", context=context))

    assert cap.calls[0]["context"] == list(context)


async def test_users_are_isolated(make_capability) -> None:
    engine = Engine([make_capability("openai")])
    await engine.handle(Query(text="hello", user_id="alice"))
    assert engine.memory.turn_count("alice") == 2
    assert engine.memory.turn_count("bob") == 0


async def test_anonymous_queries_are_not_remembered(make_capability) -> None:
    cap = make_capability("openai")
    engine = Engine([cap])

    await engine.handle(Query(text="my bank pin is 1234"))
    await engine.handle(Query(text="what did I just say?"))

    assert cap.calls[1]["context"] == []
    assert "1234" not in cap.calls[1]["system"]
    assert len(engine.memory) == 0
    assert len(engine.profiles) == 0


# -- Health and wiring ---------------------------------------------------------


def test_health_reports_providers_and_stores(make_capability) -> None:
    engine = Engine([make_capability("openai"), make_capability("google", available=False)])
    health = engine.health()
    assert health["status"] == "healthy"
    assert health["providers"] == {"openai": True, "google": False}
    assert health["knowledge_entries"] == 0
    assert health["conversations"] == 0


def test_health_degraded_without_providers() -> None:
    assert Engine([]).health()["status"] == "degraded"


async def test_build_engine_from_settings() -> None:
    config = Settings(openai_api_key="sk-test", memory_max_turns=6, knowledge_max_results=2)

    engine = await build_engine(config)

    assert [c.name for c in engine.orchestrator.capabilities] == ["openai"]
    assert len(engine.index) == 5
    assert engine.memory.max_turns == 6
    assert engine.knowledge_results == 2


async def test_build_engine_without_seed() -> None:
    engine = await build_engine(Settings(seed_knowledge=False))
    assert len(engine.index) == 0
    assert len(engine.orchestrator) == 0
