"""
OpenAI LLM Provider (LangChain-based)

Implements LLMProvider interface using LangChain's ChatOpenAI.

Supports:
    - Text generation (generate)
    - Structured output with Pydantic schemas (generate_structured)

Example:
    >>> provider = OpenAILLMProvider(api_key="sk-...", model="gpt-4o")
    >>> from pii_resolver.types import PIIExtractionResult
    >>> result = await provider.generate_structured(text, PIIExtractionResult)
    >>> print(len(result.pii_candidates))
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

from pii_resolver.providers.base import LLMProvider

if TYPE_CHECKING:
    from langchain_openai import ChatOpenAI
    from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseModel")


def _get_chat_openai(
    api_key: str | None = None,
    model: str = "gpt-4o",
    temperature: float = 0.0,
) -> "ChatOpenAI":
    """
    Get a ChatOpenAI instance.

    Uses lazy import to avoid requiring langchain-openai unless actually used.

    Args:
        api_key: Optional API key. If not provided, uses OPENAI_API_KEY env var.
        model: Model name to use.
        temperature: Sampling temperature.

    Raises:
        ImportError: If langchain-openai package is not installed
    """
    try:
        from langchain_openai import ChatOpenAI
    except ImportError:
        raise ImportError(
            "OpenAI provider requires the 'langchain-openai' package. "
            "Install with: pip install langchain-openai"
        )

    kwargs: dict[str, Any] = {"model": model, "temperature": temperature}
    if api_key:
        kwargs["api_key"] = api_key

    return ChatOpenAI(**kwargs)


def _build_messages(prompt: str, system: str | None) -> list[Any]:
    from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

    messages: list[BaseMessage] = []
    if system:
        messages.append(SystemMessage(content=system))
    messages.append(HumanMessage(content=prompt))
    return messages


class OpenAILLMProvider(LLMProvider):
    """
    OpenAI LLM provider implementation using LangChain.

    Args:
        api_key: OpenAI API key. If None, uses OPENAI_API_KEY environment variable.
        model: Model to use (default: "gpt-4o")
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o",
    ) -> None:
        self._api_key = api_key
        self._model = model
        # Lazy initialization - create client on first use
        self._client: ChatOpenAI | None = None

    def _get_client(self, temperature: float = 0.0) -> "ChatOpenAI":
        """Get or create the ChatOpenAI client."""
        if self._client is None or self._client.temperature != temperature:
            self._client = _get_chat_openai(
                api_key=self._api_key,
                model=self._model,
                temperature=temperature,
            )
        return self._client

    @property
    def model_name(self) -> str:
        """Current model name."""
        return self._model

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 4096,
    ) -> str:
        """
        Generate a text completion.

        Args:
            prompt: User prompt/question
            system: Optional system message for context
            temperature: Sampling temperature (0.0 = deterministic)
            max_tokens: Maximum tokens in response

        Returns:
            Generated text response
        """
        start = time.perf_counter_ns()

        client = self._get_client(temperature).bind(max_tokens=max_tokens)
        response = await client.ainvoke(_build_messages(prompt, system))

        elapsed_ms = (time.perf_counter_ns() - start) // 1_000_000
        logger.debug(f"generate ({self._model}) completed in {elapsed_ms}ms")
        return str(response.content)

    async def generate_structured(
        self,
        prompt: str,
        schema: type[T],
        *,
        system: str | None = None,
    ) -> T:
        """
        Generate a structured response matching a Pydantic schema.

        Uses LangChain's with_structured_output so the response is parsed
        into the schema class. Parsing failures surface as pydantic
        ValidationError.

        Args:
            prompt: User prompt/question
            schema: Pydantic model class defining expected structure
            system: Optional system message

        Returns:
            Instance of schema class populated with generated values
        """
        start = time.perf_counter_ns()

        # Deterministic for structured output
        structured_client = self._get_client(0.0).with_structured_output(schema)
        result = await structured_client.ainvoke(_build_messages(prompt, system))

        elapsed_ms = (time.perf_counter_ns() - start) // 1_000_000
        logger.debug(
            f"generate_structured ({self._model}, {schema.__name__}) completed in {elapsed_ms}ms"
        )

        if isinstance(result, dict):
            return schema.model_validate(result)
        return result  # type: ignore[return-value]

    def with_model(self, model: str) -> "OpenAILLMProvider":
        """
        Return a new provider instance with a different model.

        Args:
            model: New model name to use

        Returns:
            New OpenAILLMProvider with the specified model
        """
        return OpenAILLMProvider(api_key=self._api_key, model=model)
