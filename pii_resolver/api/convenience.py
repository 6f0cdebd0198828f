"""
Convenience Functions

Top-level functions for common operations without explicit PIIScanner or
PIIResolutionEngine instantiation. Designed for quick scripts and REPL usage.

Example:
    >>> from pii_resolver import scan_directory, resolve_results
    >>> results = scan_directory("./documents", output_dir="data")
    >>> resolution = resolve_results(results)
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pii_resolver.config.settings import ResolverConfig
    from pii_resolver.types import ExtractionResults, ResolutionOptions, ResolutionResult


def scan_directory(
    path: str | Path,
    *,
    output_dir: str | Path | None = None,
    config: "ResolverConfig | None" = None,
    **kwargs: Any,
) -> "ExtractionResults":
    """
    Scan a directory and optionally persist the corpus.

    Args:
        path: Directory of text documents
        output_dir: If given, results are saved there as JSON
        config: Optional configuration
        **kwargs: Additional arguments passed to PIIScanner.scan_directory()
    """
    from pii_resolver.api.scanner import PIIScanner
    from pii_resolver.storage import save_extraction_results

    results = PIIScanner(config).scan_directory_sync(path, **kwargs)
    if output_dir is not None:
        save_extraction_results(results, output_dir)
    return results


def resolve_results(
    results: "ExtractionResults",
    options: "ResolutionOptions | None" = None,
) -> "ResolutionResult":
    """Load a corpus into a fresh engine and resolve it."""
    from pii_resolver.ingestion.resolution import PIIResolutionEngine

    engine = PIIResolutionEngine(options)
    engine.load(results)
    return engine.resolve()


def resolve_file(
    path: str | Path,
    options: "ResolutionOptions | None" = None,
) -> "ResolutionResult":
    """Resolve a persisted corpus file."""
    from pii_resolver.storage import load_extraction_results

    return resolve_results(load_extraction_results(path), options)
