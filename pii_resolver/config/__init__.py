"""
Configuration System

Manages configuration for pii_resolver with a layered approach.

Configuration Priority (highest to lowest):
    1. Programmatic (passed to ResolverConfig())
    2. Config file (ResolverConfig.from_file)
    3. Environment variables (PII_RESOLVER_* prefix)
    4. Built-in defaults

Modules:
    settings: ResolverConfig class
    providers: Provider-specific defaults
"""

from pii_resolver.config.providers import PROVIDER_DEFAULTS, model_for_provider
from pii_resolver.config.settings import ResolverConfig

__all__ = ["ResolverConfig", "PROVIDER_DEFAULTS", "model_for_provider"]
