"""
LLM-Based Extraction

Per-chunk PII extraction through the oracle.

Modules:
    extractor: System prompt, single-chunk call, batch call with concurrency

Failure Policy:
    - A failed chunk is logged at WARNING and kept as an error slot
    - Siblings always run to completion
    - Results come back in chunk-index order
"""

from pii_resolver.ingestion.extraction.extractor import (
    PII_SCANNER_SYSTEM_PROMPT,
    extract_pii_from_chunk,
    extract_pii_from_chunks,
)

__all__ = [
    "PII_SCANNER_SYSTEM_PROMPT",
    "extract_pii_from_chunk",
    "extract_pii_from_chunks",
]
