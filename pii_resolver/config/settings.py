"""
ResolverConfig - Configuration Management

Sensible defaults with full override capability.

Example:
    >>> # Use defaults (reads from environment)
    >>> scanner = PIIScanner()

    >>> # Explicit configuration
    >>> config = ResolverConfig(chunk_size=1500, overlap_percentage=20)
    >>> scanner = PIIScanner(config=config)

    >>> # From config file
    >>> config = ResolverConfig.from_file("./pii_resolver.toml")

Environment Variables:
    PII_RESOLVER_LLM_PROVIDER - LLM provider name
    PII_RESOLVER_LLM_MODEL - Model used as the extraction oracle
    PII_RESOLVER_CHUNK_SIZE - Characters per chunk
    PII_RESOLVER_OVERLAP_PERCENTAGE - Overlap between consecutive chunks
    PII_RESOLVER_EXTRACTION_CONCURRENCY - Max concurrent oracle calls per document
    PII_RESOLVER_OUTPUT_DIR - Where scan results are written
    OPENAI_API_KEY - OpenAI API key (standard name)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

from pii_resolver.config.providers import PROVIDER_DEFAULTS, model_for_provider

if TYPE_CHECKING:
    from pii_resolver.types.results import ResolutionOptions

# TOML support: tomllib is built-in for Python 3.11+, use tomli for 3.10
try:
    import tomllib

    def _load_toml(path: Path) -> dict[str, Any]:
        with open(path, "rb") as f:
            return cast(dict[str, Any], tomllib.load(f))

except ImportError:
    import tomli

    def _load_toml(path: Path) -> dict[str, Any]:
        with open(path, "rb") as f:
            return cast(dict[str, Any], tomli.load(f))


class ResolverConfig:
    """Configuration for pii_resolver."""

    # === LLM Configuration ===

    llm_provider: str = "openai"
    """LLM provider used as the extraction oracle: "openai" """

    llm_model: str | None = None
    """Model for PII extraction (default: the provider's default model)"""

    openai_api_key: str | None = None

    # === Chunking Configuration ===

    chunk_size: int = 2000
    """Characters per chunk"""

    overlap_percentage: float = 30
    """Percentage of each chunk repeated at the start of the next (0 <= p < 100)"""

    # === Processing Configuration ===

    extraction_concurrency: int = 1
    """Max concurrent oracle calls per document (1 = sequential)"""

    file_pattern: str = "*.txt"
    """Glob pattern for directory scans"""

    output_dir: str = "data"
    """Directory where scan results are written"""

    # === Resolution Defaults ===

    ambiguous_only: bool = False
    """Only group medium/low confidence candidates"""

    min_confidence: str | None = None
    """Minimum confidence to include: "low", "medium", "high" """

    include_high_confidence_in_conflicts: bool = True
    """Recorded with each resolution result for reviewers"""

    normalize_values: bool = True
    """Trim + lowercase values before grouping"""

    transitive_canonical: bool = False
    """Merge type labels across multi-hop co-occurrence chains"""

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize configuration.

        Args:
            **kwargs: Override any configuration option
        """
        self._load_from_env()

        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")

        if self.llm_model is None and self.llm_provider.lower() in PROVIDER_DEFAULTS:
            self.llm_model = model_for_provider(self.llm_provider)

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        self.openai_api_key = os.getenv("OPENAI_API_KEY")

        if provider := os.getenv("PII_RESOLVER_LLM_PROVIDER"):
            self.llm_provider = provider
        if model := os.getenv("PII_RESOLVER_LLM_MODEL"):
            self.llm_model = model
        if chunk_size := os.getenv("PII_RESOLVER_CHUNK_SIZE"):
            self.chunk_size = int(chunk_size)
        if overlap := os.getenv("PII_RESOLVER_OVERLAP_PERCENTAGE"):
            self.overlap_percentage = float(overlap)
        if concurrency := os.getenv("PII_RESOLVER_EXTRACTION_CONCURRENCY"):
            self.extraction_concurrency = int(concurrency)
        if output_dir := os.getenv("PII_RESOLVER_OUTPUT_DIR"):
            self.output_dir = output_dir

    @classmethod
    def from_file(cls, path: str | Path) -> "ResolverConfig":
        """
        Load configuration from TOML file.

        Nested sections are flattened with a per-section prefix.

        Example TOML:
            [llm]
            provider = "openai"
            model = "gpt-4o"

            [chunking]
            chunk_size = 2000
            overlap_percentage = 30

            [resolution]
            normalize_values = true

        Args:
            path: Path to TOML configuration file

        Returns:
            ResolverConfig instance with values from file

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = _load_toml(path)

        flat_config: dict[str, Any] = {}

        section_mapping = {
            "llm": "llm_",
            "api_keys": "",  # api_keys.openai -> openai_api_key
            "chunking": "",
            "processing": "",
            "resolution": "",
        }

        for section, prefix in section_mapping.items():
            if section in data:
                for key, value in data[section].items():
                    if section == "api_keys":
                        flat_config[f"{key}_api_key"] = value
                    else:
                        flat_config[f"{prefix}{key}"] = value

        # Also support flat top-level keys
        for key, value in data.items():
            if key not in section_mapping and not isinstance(value, dict):
                flat_config[key] = value

        return cls(**flat_config)

    @classmethod
    def from_env(cls) -> "ResolverConfig":
        """Load configuration from environment variables only."""
        return cls()

    def to_file(self, path: str | Path) -> None:
        """
        Save configuration to TOML file.

        API keys are never written.

        Args:
            path: Path to write TOML configuration file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        sections: dict[str, dict[str, str | int | float | bool | None]] = {
            "llm": {
                "provider": self.llm_provider,
                "model": self.llm_model,
            },
            "chunking": {
                "chunk_size": self.chunk_size,
                "overlap_percentage": self.overlap_percentage,
            },
            "processing": {
                "extraction_concurrency": self.extraction_concurrency,
                "file_pattern": self.file_pattern,
                "output_dir": self.output_dir,
            },
            "resolution": {
                "ambiguous_only": self.ambiguous_only,
                "min_confidence": self.min_confidence,
                "include_high_confidence_in_conflicts": self.include_high_confidence_in_conflicts,
                "normalize_values": self.normalize_values,
                "transitive_canonical": self.transitive_canonical,
            },
        }

        lines = ["# pii-resolver configuration", ""]

        for section_name, section_values in sections.items():
            lines.append(f"[{section_name}]")
            for key, value in section_values.items():
                # bool before int: bool is an int subclass
                if isinstance(value, str):
                    lines.append(f'{key} = "{value}"')
                elif isinstance(value, bool):
                    lines.append(f"{key} = {str(value).lower()}")
                elif isinstance(value, (int, float)):
                    lines.append(f"{key} = {value}")
            lines.append("")

        lines.extend([
            "# API keys should be set via environment variables:",
            "# OPENAI_API_KEY",
            "",
        ])

        path.write_text("\n".join(lines))

    def with_overrides(self, **kwargs: Any) -> "ResolverConfig":
        """Return new config with specified overrides."""
        new_config = ResolverConfig.__new__(ResolverConfig)
        for key in dir(self):
            if not key.startswith("_") and not callable(getattr(self, key)):
                setattr(new_config, key, getattr(self, key))
        for key, value in kwargs.items():
            if not hasattr(new_config, key):
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(new_config, key, value)
        return new_config

    def resolution_options(self, **overrides: Any) -> "ResolutionOptions":
        """Build ResolutionOptions from the resolution defaults."""
        from pii_resolver.types.results import ResolutionOptions

        values: dict[str, Any] = {
            "ambiguous_only": self.ambiguous_only,
            "min_confidence": self.min_confidence,
            "include_high_confidence_in_conflicts": self.include_high_confidence_in_conflicts,
            "normalize_values": self.normalize_values,
            "transitive_canonical": self.transitive_canonical,
        }
        values.update(overrides)
        return ResolutionOptions(**values)
