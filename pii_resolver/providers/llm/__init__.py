"""
LLM Provider Implementations

Modules:
    openai: OpenAI provider (gpt-4o, gpt-4o-mini)

Each provider implements the LLMProvider interface with:
    - generate(): Text completion
    - generate_structured(): Structured output (pydantic schema)

Example:
    >>> from pii_resolver.providers.llm import OpenAILLMProvider
    >>> provider = OpenAILLMProvider(model="gpt-4o")
    >>> response = await provider.generate("Hello!")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pii_resolver.providers.llm.openai import OpenAILLMProvider


def __getattr__(name: str):
    """Lazy import of providers to avoid requiring all dependencies."""
    if name == "OpenAILLMProvider":
        from pii_resolver.providers.llm.openai import OpenAILLMProvider
        return OpenAILLMProvider
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["OpenAILLMProvider"]
