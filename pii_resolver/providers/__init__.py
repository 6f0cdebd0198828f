"""
LLM Providers

Provider-agnostic interface for the extraction oracle.

Modules:
    base: Abstract provider interface
    llm/: LLM provider implementations

Supported LLM Providers:
    - OpenAI (gpt-4o, gpt-4o-mini) via LangChain

Design:
    - All providers implement LLMProvider
    - Lazy import to avoid requiring all dependencies
    - Structured output via LangChain's with_structured_output

Example:
    >>> from pii_resolver.providers import LLMProvider
    >>> from pii_resolver.providers.llm import OpenAILLMProvider
"""

from pii_resolver.providers.base import LLMProvider

__all__ = ["LLMProvider"]
