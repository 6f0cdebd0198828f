"""
Document Chunking

Transforms raw document text into overlapping windows for the oracle.

Modules:
    text: Fixed-size character windows with percentage overlap
"""

from pii_resolver.ingestion.chunking.text import chunk_file, chunk_text, overlap_size

__all__ = ["chunk_text", "chunk_file", "overlap_size"]
