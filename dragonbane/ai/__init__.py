"""
AI integration for the Dragonbane character generator.

Provides the LLM provider layer and the narrative enricher that fills in a
character's name, appearance and background.
"""

from dragonbane.ai.llm_provider import (
    AnthropicClient,
    BaseLLMClient,
    LLMConfig,
    LLMManager,
    LLMMessage,
    LLMProvider,
    LLMResponse,
    LLMRole,
    MockLLMClient,
    OpenAIClient,
)
from dragonbane.ai.narrative import (
    CharacterSummary,
    NarrativeEnricher,
    NarrativeEnrichmentError,
    build_prompt,
    parse_summary,
)

__all__ = [
    # LLM Provider
    "AnthropicClient",
    "BaseLLMClient",
    "LLMConfig",
    "LLMManager",
    "LLMMessage",
    "LLMProvider",
    "LLMResponse",
    "LLMRole",
    "MockLLMClient",
    "OpenAIClient",
    # Narrative
    "CharacterSummary",
    "NarrativeEnricher",
    "NarrativeEnrichmentError",
    "build_prompt",
    "parse_summary",
]
