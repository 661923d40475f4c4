"""Final touches applied to a synthesized answer before it is returned."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from chorus.tools.base import ToolResult

logger = logging.getLogger(__name__)

RESPONSE_STYLES = ("concise", "detailed", "technical", "casual")

CONCISE_LINES = 3
CONDENSED_NOTE = "[Response condensed for brevity]"
DETAILED_NOTE = (
    "[Additional context and detailed explanations would be provided "
    "based on the specific topic]"
)
TECHNICAL_PREFIX = "[Technical Analysis] "


def append_tool_results(text: str, results: Mapping[str, ToolResult]) -> str:
    """Append a ``Tool Results:`` block with one bullet per tool."""
    if not results:
        return text
    bullets = "\n".join(f"• {name}: {result.summary}" for name, result in results.items())
    return f"{text}\n\nTool Results:\n{bullets}"


def adapt_style(text: str, style: str | None) -> str:
    """Rewrite *text* for a response style. Unknown styles leave it alone."""
    if not style:
        return text
    style = style.lower()
    if style == "concise":
        return "\n".join(text.split("\n")[:CONCISE_LINES]) + f"\n\n{CONDENSED_NOTE}"
    if style == "detailed":
        return f"{text}\n\n{DETAILED_NOTE}"
    if style == "technical":
        return TECHNICAL_PREFIX + text
    if style == "casual":
        return text.replace(". ", ". 😊 ").replace("!", "! 👍")
    logger.debug("Unknown response style %r, leaving text unchanged", style)
    return text


def postprocess(
    text: str, tool_results: Mapping[str, ToolResult], style: str | None = None
) -> str:
    return adapt_style(append_tool_results(text, tool_results), style)
