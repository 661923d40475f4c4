"""Request pipeline: classify, gather context, fan out, synthesize, remember."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from chorus.errors import AllCapabilitiesFailedError, ConfigurationError, InvalidInputError
from chorus.knowledge.index import KnowledgeIndex
from chorus.knowledge.seed import seed_index
from chorus.llm.pricing import format_cost, summarize_usage
from chorus.llm.prompt import build_system_prompt, temperature_for
from chorus.llm.providers import build_capabilities
from chorus.memory.conversation import ConversationMemory
from chorus.memory.profiles import ProfileStore
from chorus.orchestrator import Orchestrator
from chorus.reasoning.classifier import classify
from chorus.synthesis.postprocess import postprocess
from chorus.synthesis.synthesizer import Synthesizer
from chorus.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from chorus.config import Settings
    from chorus.llm.base import TextGenerationCapability
    from chorus.synthesis.models import SynthesizedResult

logger = logging.getLogger(__name__)

ANONYMOUS_USER = "anonymous"
HISTORY_TURNS = 10


@dataclass(frozen=True)
class Query:
    """One user request.

    Recognised ``preferences`` keys: ``reasoning_mode`` (forces a synthesis
    strategy), ``response_style`` (concise, detailed, technical, casual) and
    ``expertise`` (boosts knowledge tagged with it).
    """

    text: str
    context: tuple[dict[str, Any], ...] = ()
    user_id: str | None = None
    preferences: Mapping[str, Any] = field(default_factory=dict)

    @property
    def reasoning_mode(self) -> str | None:
        return self.preferences.get("reasoning_mode")

    @property
    def response_style(self) -> str | None:
        return self.preferences.get("response_style")

    @property
    def expertise(self) -> str | None:
        return self.preferences.get("expertise")


class Engine:
    """Runs queries through the full pipeline.

    All shared state (knowledge, memory, profiles, tools) is passed in, so
    tests and embedders can build as many independent engines as they like.
    """

    def __init__(
        self,
        capabilities: Sequence[TextGenerationCapability],
        *,
        index: KnowledgeIndex | None = None,
        memory: ConversationMemory | None = None,
        profiles: ProfileStore | None = None,
        tools: ToolRegistry | None = None,
        synthesizer: Synthesizer | None = None,
        max_query_chars: int = 8000,
        recall_limit: int = 5,
        knowledge_results: int = 5,
    ) -> None:
        self.orchestrator = Orchestrator(capabilities)
        self.index = index if index is not None else KnowledgeIndex(max_results=knowledge_results)
        self.memory = memory if memory is not None else ConversationMemory()
        self.profiles = profiles if profiles is not None else ProfileStore()
        self.tools = tools if tools is not None else ToolRegistry()
        self.synthesizer = synthesizer or Synthesizer()
        self.max_query_chars = max_query_chars
        self.recall_limit = recall_limit
        self.knowledge_results = knowledge_results

    def _validate(self, query: Query) -> str:
        text = query.text.strip() if isinstance(query.text, str) else ""
        if not text:
            msg = "Query text is empty"
            raise InvalidInputError(msg)
        if len(text) > self.max_query_chars:
            msg = f"Query is {len(text)} characters; the limit is {self.max_query_chars}"
            raise InvalidInputError(msg)
        return text

    async def handle(self, query: Query) -> SynthesizedResult:
        """Answer one query.

        Raises:
            InvalidInputError: Empty, whitespace-only or oversized text.
            ConfigurationError: No capabilities are configured.
            AllCapabilitiesFailedError: Every capability failed or timed out.
                Nothing is written to memory in that case.
        """
        text = self._validate(query)
        if not len(self.orchestrator):
            msg = "No text-generation capabilities configured"
            raise ConfigurationError(msg)

        # Anonymous queries neither read nor write memory
        user_id = query.user_id
        remembered = self.memory.turn_count(user_id) if user_id else 0
        context_length = len(query.context) + remembered
        classification = classify(text, context_length=context_length, mode=query.reasoning_mode)

        knowledge = self.index.search(
            text, max_results=self.knowledge_results, expertise=query.expertise
        ).entries
        memories = self.memory.relevant(user_id, text, k=self.recall_limit) if user_id else []
        profile = self.profiles.get(user_id) if user_id else None

        system = build_system_prompt(
            classification.strategy,
            classification,
            knowledge=knowledge,
            memories=memories,
            profile=profile,
        )
        if query.context:
            context = list(query.context)
        elif user_id:
            context = self.memory.to_api_messages(user_id, n=HISTORY_TURNS)
        else:
            context = []

        fan_out, tool_results = await asyncio.gather(
            self.orchestrator.fan_out(
                text,
                context,
                system=system,
                temperature=temperature_for(classification.strategy),
            ),
            self.tools.invoke_many(
                list(classification.suggested_tools),
                {"query": text, "domain": classification.domain.value},
            ),
        )

        if not fan_out.succeeded:
            msg = f"All {len(fan_out.failures)} capabilities failed"
            raise AllCapabilitiesFailedError(msg, fan_out.failures)

        result = self.synthesizer.synthesize(fan_out.candidates, classification.strategy)
        result.text = postprocess(result.text, tool_results, query.response_style)

        usage = summarize_usage(fan_out.candidates)
        result.cost = usage.total_cost
        result.providers_used = [c.source for c in fan_out.candidates]
        result.failures = list(fan_out.failures)
        result.classification = classification
        result.knowledge = [entry.title for entry in knowledge]
        result.tool_results = tool_results

        if user_id:
            await self.memory.record_exchange(user_id, text, result.text)
            await self.profiles.record_interaction(
                user_id,
                text,
                expertise=query.expertise,
                communication_style=query.response_style,
            )

        logger.info(
            "Handled query for %s: strategy=%s source=%s tokens=%d cost=%s",
            user_id or ANONYMOUS_USER,
            result.strategy.value,
            result.source,
            result.tokens,
            format_cost(result.cost),
        )
        return result

    def health(self) -> dict[str, Any]:
        """Configured providers and the size of each in-process store."""
        providers = {c.name: c.available for c in self.orchestrator.capabilities}
        return {
            "status": "healthy" if any(providers.values()) else "degraded",
            "providers": providers,
            "knowledge_entries": len(self.index),
            "knowledge_terms": self.index.term_count,
            "conversations": len(self.memory),
            "profiles": len(self.profiles),
            "tools": self.tools.tool_names,
        }


async def build_engine(config: Settings) -> Engine:
    """Create an engine wired from settings, seeding knowledge if enabled."""
    index = KnowledgeIndex(max_results=config.knowledge_max_results)
    if config.seed_knowledge:
        await seed_index(index)
    return Engine(
        build_capabilities(config),
        index=index,
        memory=ConversationMemory(max_turns=config.memory_max_turns),
        tools=ToolRegistry(timeout=config.capability_timeout_seconds),
        max_query_chars=config.max_query_chars,
        recall_limit=config.memory_recall_limit,
        knowledge_results=config.knowledge_max_results,
    )
