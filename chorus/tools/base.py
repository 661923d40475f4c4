"""Base types for tools the engine can invoke alongside generation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

SUMMARY_MAX_CHARS = 200


@dataclass
class ToolResult:
    """Outcome of one tool call.

    Every tool returns one of these. ``summary`` is what gets appended to
    the answer text; ``data`` carries the structured result.
    """

    data: dict[str, Any] | None = None
    error: str | None = None
    text: str = ""

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def summary(self) -> str:
        if self.error:
            return f"failed ({self.error})"
        if self.text:
            summary = self.text.strip()
        elif self.data:
            summary = ", ".join(f"{k}={v}" for k, v in self.data.items())
        else:
            summary = "completed"
        if len(summary) > SUMMARY_MAX_CHARS:
            summary = summary[: SUMMARY_MAX_CHARS - 3] + "..."
        return summary


class ToolParams(BaseModel):
    """Parameters a tool accepts; validated before its handler runs."""


class QueryToolParams(ToolParams):
    """Parameters the engine passes to suggested tools."""

    query: str = Field(description="The user's request text")
    domain: str = Field(default="general", description="Detected topic domain")


class BaseTool(ABC):
    """A tool that keeps state between calls, such as a client or sandbox.

    Stateless tools are simpler to write as decorated coroutines; see
    ``ToolRegistry.tool``.
    """

    name: str = ""
    description: str = ""
    params_model: type[ToolParams] | None = QueryToolParams

    @abstractmethod
    async def execute(self, **kwargs: Any) -> ToolResult: ...
