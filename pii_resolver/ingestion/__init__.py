"""
Ingestion Pipeline

Document processing from raw text to a resolved, conflict-aware view.

Phases:
    Phase 1 - Chunking & Extraction (LLM-heavy):
        - Text -> overlapping character windows
        - One structured oracle call per window, failures skipped

    Phase 2 - In-Document Deduplication:
        - Fold overlapping chunk results into one record per document

    Phase 3 - Cross-Document Resolution:
        - Value, type and identity groups
        - Canonical type schema
        - Conflict detection

Modules:
    chunking/: Text windows
    extraction/: Oracle calls
    resolution/: Deduplication and the resolution engine
"""

from pii_resolver.ingestion.chunking import chunk_file, chunk_text
from pii_resolver.ingestion.extraction import extract_pii_from_chunk, extract_pii_from_chunks
from pii_resolver.ingestion.resolution import PIIResolutionEngine, deduplicate_chunk_results

__all__ = [
    "chunk_text",
    "chunk_file",
    "extract_pii_from_chunk",
    "extract_pii_from_chunks",
    "deduplicate_chunk_results",
    "PIIResolutionEngine",
]
