"""Tests for concurrent capability fan-out."""

import pytest

from chorus.errors import ConfigurationError
from chorus.orchestrator import CapabilityFailure, Orchestrator


async def test_empty_capability_set_fails_fast() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        await Orchestrator([]).fan_out("hi", [])
    assert exc_info.value.reason == "configuration"


async def test_candidates_follow_configured_order(make_capability) -> None:
    slow = make_capability("openai", "slow answer", delay=0.05)
    fast = make_capability("anthropic", "fast answer")

    result = await Orchestrator([slow, fast]).fan_out("hi", [])

    assert [c.source for c in result.candidates] == ["openai", "anthropic"]
    assert result.failures == []
    assert result.succeeded


async def test_timeout_is_isolated(make_capability) -> None:
    stuck = make_capability("openai", delay=1.0, timeout=0.05)
    ok = make_capability("anthropic", "fine")

    result = await Orchestrator([stuck, ok]).fan_out("hi", [])

    assert [c.text for c in result.candidates] == ["fine"]
    assert len(result.failures) == 1
    assert result.failures[0].source == "openai"
    assert result.failures[0].reason == "timeout"


async def test_exception_is_recorded(make_capability) -> None:
    broken = make_capability("google", error=RuntimeError("boom"))
    ok = make_capability("openai", "fine", delay=0.02)

    result = await Orchestrator([broken, ok]).fan_out("hi", [])

    assert result.failures == [CapabilityFailure(source="google", reason="error", detail="boom")]
    assert [c.source for c in result.candidates] == ["openai"]


async def test_unavailable_capability_is_not_called(make_capability) -> None:
    offline = make_capability("anthropic", available=False)

    result = await Orchestrator([offline]).fan_out("hi", [])

    assert offline.calls == []
    assert result.failures[0].reason == "unavailable"
    assert not result.succeeded


async def test_candidate_fields(make_capability) -> None:
    cap = make_capability("openai", "text", tokens=33, model="gpt-4o-mini", confidence=0.9)

    result = await Orchestrator([cap]).fan_out("hi", [])

    candidate = result.candidates[0]
    assert candidate.text == "text"
    assert candidate.tokens == 33
    assert candidate.model == "gpt-4o-mini"
    assert candidate.confidence == 0.9
    assert candidate.latency_ms >= 0


async def test_prompt_system_and_temperature_forwarded(make_capability) -> None:
    cap = make_capability("openai")
    context = [{"role": "user", "content": "earlier"}]

    await Orchestrator([cap]).fan_out("question", context, system="be brief", temperature=0.2)

    assert cap.calls == [
        {"prompt": "question", "context": context, "system": "be brief", "temperature": 0.2}
    ]


async def test_every_capability_failing_yields_no_candidates(make_capability) -> None:
    caps = [
        make_capability("openai", error=ValueError("bad")),
        make_capability("anthropic", delay=1.0, timeout=0.01),
    ]

    result = await Orchestrator(caps).fan_out("hi", [])

    assert result.candidates == []
    assert [f.reason for f in result.failures] == ["error", "timeout"]
