"""
pii-resolver - PII Candidate Resolution

Finds personally identifiable information in text documents through an
LLM extraction oracle, then reconciles the candidates across overlapping
chunks and across a whole corpus into a conflict-aware view.

Example:
    >>> from pii_resolver import PIIScanner, PIIResolutionEngine
    >>> results = PIIScanner().scan_directory_sync("./documents")
    >>> engine = PIIResolutionEngine()
    >>> engine.load(results)
    >>> resolution = engine.resolve()
    >>> print(resolution.summary.total_conflicts)

Main Classes:
    PIIScanner: Chunk, extract and deduplicate documents
    PIIResolutionEngine: Cross-document grouping, canonical schema, conflicts
    ExtractionReader: Queries over a persisted corpus
    ResolverConfig: Configuration management
"""

__version__ = "0.1.0"

# Public API - lazy imports to avoid loading the LLM stack until needed
def __getattr__(name: str):
    """Lazy import public API components."""

    if name == "PIIScanner":
        from pii_resolver.api.scanner import PIIScanner
        return PIIScanner

    if name == "PIIResolutionEngine":
        from pii_resolver.ingestion.resolution.engine import PIIResolutionEngine
        return PIIResolutionEngine

    if name == "ExtractionReader":
        from pii_resolver.storage.reader import ExtractionReader
        return ExtractionReader

    if name == "ResolverConfig":
        from pii_resolver.config.settings import ResolverConfig
        return ResolverConfig

    # Convenience functions
    if name in ("scan_directory", "resolve_results", "resolve_file"):
        from pii_resolver.api import convenience
        return getattr(convenience, name)

    if name in ("save_extraction_results", "load_extraction_results"):
        from pii_resolver.storage import json_store
        return getattr(json_store, name)

    # Types
    if name in (
        "PIICandidate",
        "IndividualRecord",
        "ExtractionResults",
        "ResolutionOptions",
        "ResolutionResult",
    ):
        from pii_resolver import types
        return getattr(types, name)

    raise AttributeError(f"module 'pii_resolver' has no attribute {name!r}")


__all__ = [
    # Main classes
    "PIIScanner",
    "PIIResolutionEngine",
    "ExtractionReader",
    "ResolverConfig",

    # Convenience functions
    "scan_directory",
    "resolve_results",
    "resolve_file",
    "save_extraction_results",
    "load_extraction_results",

    # Types
    "PIICandidate",
    "IndividualRecord",
    "ExtractionResults",
    "ResolutionOptions",
    "ResolutionResult",

    # Version
    "__version__",
]
