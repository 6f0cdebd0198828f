"""
Provider Configurations

Default oracle models for each LLM provider.

When a provider is selected without an explicit model, its default applies:
    >>> model_for_provider("openai")
    'gpt-4o'
"""

# Provider default models
PROVIDER_DEFAULTS = {
    "openai": {
        "llm_model": "gpt-4o",
    },
}


def model_for_provider(provider: str) -> str:
    """Return the default extraction model for a provider."""
    try:
        return PROVIDER_DEFAULTS[provider.lower()]["llm_model"]
    except KeyError:
        raise ValueError(f"Unknown LLM provider: {provider}") from None
