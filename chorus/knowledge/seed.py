"""Starter documents loaded into a fresh knowledge index."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chorus.knowledge.index import KnowledgeIndex

logger = logging.getLogger(__name__)

SEED_ENTRIES: list[dict[str, Any]] = [
    {
        "entry_id": "programming-fundamentals",
        "title": "Programming Fundamentals",
        "body": (
            "Programming is the process of creating instructions for computers to execute.\n"
            "Key concepts include:\n"
            "- Variables: Store data values\n"
            "- Functions: Reusable blocks of code\n"
            "- Control structures: if/else, loops, switches\n"
            "- Data structures: Arrays, objects, lists\n"
            "- Algorithms: Step-by-step problem-solving procedures\n"
            "- Debugging: Finding and fixing errors in code\n"
            "- Testing: Verifying code works as expected"
        ),
        "domain": "programming",
        "tags": ["basics", "fundamentals", "concepts"],
        "quality": 0.95,
    },
    {
        "entry_id": "javascript-best-practices",
        "title": "JavaScript Best Practices",
        "body": (
            "JavaScript best practices for clean, maintainable code:\n"
            "- Use const/let instead of var\n"
            "- Write descriptive variable names\n"
            "- Keep functions small and focused\n"
            "- Use async/await for asynchronous operations\n"
            "- Handle errors properly with try/catch\n"
            "- Use strict mode\n"
            "- Avoid global variables\n"
            "- Use meaningful comments\n"
            "- Follow consistent code formatting\n"
            "- Use ESLint for code quality"
        ),
        "domain": "programming",
        "tags": ["javascript", "best-practices", "clean-code"],
        "quality": 0.92,
    },
    {
        "entry_id": "scientific-method",
        "title": "The Scientific Method",
        "body": (
            "The scientific method is a systematic approach to understanding the natural world:\n"
            "1. Observation: Notice phenomena in the world\n"
            "2. Question: Ask specific questions about observations\n"
            "3. Hypothesis: Propose testable explanations\n"
            "4. Prediction: Make specific predictions based on hypothesis\n"
            "5. Experiment: Design and conduct controlled tests\n"
            "6. Analysis: Examine data and draw conclusions\n"
            "7. Peer Review: Share findings with scientific community\n"
            "8. Replication: Verify results through repeated experiments"
        ),
        "domain": "science",
        "tags": ["methodology", "research", "experiments"],
        "quality": 0.98,
    },
    {
        "entry_id": "business-strategy-basics",
        "title": "Business Strategy Fundamentals",
        "body": (
            "Business strategy involves planning and decision-making for competitive advantage:\n"
            "- Market Analysis: Understanding customers, competitors, and trends\n"
            "- Value Proposition: Unique benefits offered to customers\n"
            "- Competitive Advantage: Sustainable differentiation from competitors\n"
            "- Resource Allocation: Optimizing use of time, money, and talent\n"
            "- Risk Management: Identifying and mitigating potential threats\n"
            "- Performance Metrics: KPIs to measure success and progress\n"
            "- Strategic Planning: Long-term vision and roadmap\n"
            "- Innovation: Continuous improvement and adaptation"
        ),
        "domain": "business",
        "tags": ["strategy", "planning", "competitive-advantage"],
        "quality": 0.89,
    },
    {
        "entry_id": "ai-fundamentals",
        "title": "Artificial Intelligence Fundamentals",
        "body": (
            "Artificial Intelligence encompasses various approaches to creating intelligent "
            "systems:\n"
            "- Machine Learning: Algorithms that learn from data\n"
            "- Deep Learning: Neural networks with multiple layers\n"
            "- Natural Language Processing: Understanding and generating human language\n"
            "- Computer Vision: Interpreting and analyzing visual information\n"
            "- Reinforcement Learning: Learning through interaction and feedback\n"
            "- Expert Systems: Rule-based decision-making systems\n"
            "- Robotics: Physical AI systems that interact with the world\n"
            "- Ethics: Responsible development and deployment of AI systems"
        ),
        "domain": "technology",
        "tags": ["ai", "machine-learning", "technology"],
        "quality": 0.94,
    },
]


async def seed_index(index: KnowledgeIndex) -> int:
    """Load the starter documents. Returns how many were added."""
    for item in SEED_ENTRIES:
        await index.add(source="system", **item)
    logger.info("Seeded knowledge index with %d entries", len(SEED_ENTRIES))
    return len(SEED_ENTRIES)
