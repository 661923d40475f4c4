"""Tests for the tool registry."""

import asyncio
from typing import Any

import pytest

from chorus.tools.base import BaseTool, ToolParams, ToolResult
from chorus.tools.registry import ToolRegistry


class EchoParams(ToolParams):
    message: str


@pytest.fixture
def registry() -> ToolRegistry:
    reg = ToolRegistry(timeout=0.1)

    @reg.tool(name="webSearch", description="Search the web")
    async def web_search(query: str, domain: str) -> ToolResult:
        return ToolResult(data={"query": query, "domain": domain})

    @reg.tool(name="echo", description="Echo a message", params_model=EchoParams)
    async def echo(message: str) -> ToolResult:
        return ToolResult(text=message)

    @reg.tool(name="broken", description="Always raises")
    async def broken(query: str, domain: str) -> ToolResult:
        raise RuntimeError("kaput")

    @reg.tool(name="slow", description="Never finishes in time")
    async def slow(query: str, domain: str) -> ToolResult:
        await asyncio.sleep(1)
        return ToolResult(text="late")

    return reg


def test_registration(registry: ToolRegistry) -> None:
    assert len(registry) == 4
    assert "webSearch" in registry
    assert registry.tool_names == ["webSearch", "echo", "broken", "slow"]
    assert registry.get("echo").description == "Echo a message"
    assert registry.get("missing") is None


def test_sync_handler_rejected() -> None:
    reg = ToolRegistry()
    with pytest.raises(TypeError, match="coroutine"):

        @reg.tool(name="sync", description="Not async")
        def sync_tool(query: str, domain: str) -> ToolResult:
            return ToolResult()


async def test_invoke_validates_params(registry: ToolRegistry) -> None:
    result = await registry.invoke("webSearch", {"query": "rust"})

    assert result.success
    assert result.data == {"query": "rust", "domain": "general"}


async def test_invoke_unknown_tool(registry: ToolRegistry) -> None:
    result = await registry.invoke("teleport", {"query": "x"})
    assert result.error == "Unknown tool: teleport"


async def test_invoke_invalid_params(registry: ToolRegistry) -> None:
    result = await registry.invoke("echo", {"query": "no message field"})
    assert result.error == "invalid parameters"


async def test_invoke_handler_exception(registry: ToolRegistry) -> None:
    result = await registry.invoke("broken", {"query": "x"})
    assert not result.success
    assert result.error == "tool raised an exception"


async def test_invoke_timeout(registry: ToolRegistry) -> None:
    result = await registry.invoke("slow", {"query": "x"})
    assert result.error == "timed out"


async def test_invoke_many_skips_unregistered(registry: ToolRegistry) -> None:
    results = await registry.invoke_many(
        ["calculation", "webSearch", "broken"], {"query": "q", "domain": "science"}
    )

    assert list(results) == ["webSearch", "broken"]
    assert results["webSearch"].data == {"query": "q", "domain": "science"}
    assert results["broken"].error == "tool raised an exception"


async def test_invoke_many_nothing_registered() -> None:
    assert await ToolRegistry().invoke_many(["webSearch"], {"query": "q"}) == {}


async def test_register_class_based_tool() -> None:
    class Calculator(BaseTool):
        name = "calculation"
        description = "Evaluate arithmetic"

        async def execute(self, **kwargs: Any) -> ToolResult:
            return ToolResult(text=f"looked at {kwargs['query']}")

    reg = ToolRegistry()
    reg.register(Calculator())

    result = await reg.invoke("calculation", {"query": "2+2"})

    assert result.text == "looked at 2+2"


class TestToolResultSummary:
    def test_error(self):
        assert ToolResult(error="boom").summary == "failed (boom)"

    def test_text_preferred_over_data(self):
        assert ToolResult(data={"a": 1}, text=" done ").summary == "done"

    def test_data_pairs(self):
        assert ToolResult(data={"a": 1, "b": "x"}).summary == "a=1, b=x"

    def test_empty(self):
        assert ToolResult().summary == "completed"

    def test_truncated(self):
        summary = ToolResult(text="y" * 500).summary
        assert len(summary) == 200
        assert summary.endswith("...")
