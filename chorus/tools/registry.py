"""Tool registry: the catalog the engine consults for suggested tools."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from chorus.tools.base import BaseTool, QueryToolParams, ToolParams, ToolResult

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    ToolHandler = Callable[..., Awaitable[ToolResult]]

logger = logging.getLogger(__name__)


@dataclass
class RegisteredTool:
    name: str
    description: str
    handler: ToolHandler
    params_model: type[ToolParams] | None = None

    def bind(self, params: dict[str, Any]) -> dict[str, Any]:
        """Validate *params* into handler kwargs. Raises ValidationError."""
        if self.params_model is None:
            return dict(params)
        return self.params_model(**params).model_dump()


class ToolRegistry:
    """Registry of invokable tools.

    Tool names match the classifier's suggestions (``codeExecution``,
    ``webSearch`` ...). No tools are registered by default; callers plug in
    their own, either with the decorator::

        @registry.tool(name="webSearch", description="Search the web")
        async def web_search(query: str, domain: str) -> ToolResult:
            return ToolResult(text="3 results")

    or by registering a ``BaseTool`` instance.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self._catalog: dict[str, RegisteredTool] = {}
        self.timeout = timeout

    def __contains__(self, name: object) -> bool:
        return name in self._catalog

    def __len__(self) -> int:
        return len(self._catalog)

    def tool(
        self,
        *,
        name: str,
        description: str,
        params_model: type[ToolParams] | None = QueryToolParams,
    ) -> Callable[[ToolHandler], ToolHandler]:
        """Register the decorated coroutine function under *name*."""

        def wrap(handler: ToolHandler) -> ToolHandler:
            if not inspect.iscoroutinefunction(handler):
                msg = f"Handler for tool {name!r} is not a coroutine function"
                raise TypeError(msg)
            self._catalog[name] = RegisteredTool(name, description, handler, params_model)
            return handler

        return wrap

    def register(self, tool: BaseTool) -> None:
        self._catalog[tool.name] = RegisteredTool(
            tool.name, tool.description, tool.execute, tool.params_model
        )

    def get(self, name: str) -> RegisteredTool | None:
        return self._catalog.get(name)

    @property
    def tool_names(self) -> list[str]:
        return list(self._catalog)

    async def invoke(self, name: str, params: dict[str, Any]) -> ToolResult:
        """Run a tool by name. Never raises; failures come back as errors."""
        entry = self._catalog.get(name)
        if entry is None:
            return ToolResult(error=f"Unknown tool: {name}")

        try:
            kwargs = entry.bind(params)
        except ValidationError as exc:
            logger.warning("Rejected parameters for tool %s: %s", name, exc)
            return ToolResult(error="invalid parameters")

        logger.info("Invoking tool %s", name)
        started = time.monotonic()
        try:
            result = await asyncio.wait_for(entry.handler(**kwargs), timeout=self.timeout)
        except TimeoutError:
            logger.warning("Tool %s gave up after %.1fs", name, self.timeout)
            return ToolResult(error="timed out")
        except Exception:
            logger.exception("Tool %s raised after %.2fs", name, time.monotonic() - started)
            return ToolResult(error="tool raised an exception")

        took = time.monotonic() - started
        if result.error:
            logger.warning("Tool %s reported an error after %.2fs: %s", name, took, result.error)
        else:
            logger.info("Tool %s finished in %.2fs", name, took)
        return result

    async def invoke_many(self, names: list[str], params: dict[str, Any]) -> dict[str, ToolResult]:
        """Invoke every registered tool in *names* concurrently, keeping order."""
        runnable = [name for name in names if name in self._catalog]
        if not runnable:
            return {}
        results = await asyncio.gather(*(self.invoke(name, params) for name in runnable))
        return dict(zip(runnable, results, strict=True))
