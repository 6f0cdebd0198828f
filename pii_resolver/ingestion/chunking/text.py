"""
Plain Text Chunker

Fixed-size character windows with percentage overlap.

Algorithm:
    overlap = floor(chunk_size * overlap_percentage / 100)
    step = chunk_size - overlap
    Windows start at 0, step, 2*step, ... and span
    [start, min(start + chunk_size, len(text))). Chunking stops at the
    first window that reaches the end of the text.

Overlap lets a value that straddles one window boundary appear whole in
the next window; the chunk deduplicator folds the resulting repeats.
"""

from __future__ import annotations

import logging
from math import floor
from pathlib import Path

from pii_resolver.errors import InvalidArgumentError
from pii_resolver.types import TextChunk

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 2000
DEFAULT_OVERLAP_PERCENTAGE = 30


def overlap_size(chunk_size: int, overlap_percentage: float) -> int:
    """Characters shared by two consecutive windows."""
    return floor(chunk_size * overlap_percentage / 100)


def _validate(chunk_size: int, overlap_percentage: float) -> None:
    if chunk_size <= 0:
        raise InvalidArgumentError("Chunk size must be greater than 0")
    if overlap_percentage < 0 or overlap_percentage >= 100:
        raise InvalidArgumentError("Overlap percentage must be between 0 and 100")


def chunk_text(
    content: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap_percentage: float = DEFAULT_OVERLAP_PERCENTAGE,
) -> list[TextChunk]:
    """
    Split text into overlapping windows.

    Args:
        content: Document text
        chunk_size: Characters per window (> 0)
        overlap_percentage: Share of each window repeated in the next (0 <= p < 100)

    Returns:
        Windows in order; empty list for empty text

    Raises:
        InvalidArgumentError: If chunk_size or overlap_percentage is out of range
    """
    _validate(chunk_size, overlap_percentage)

    # A tiny chunk_size with high overlap floors overlap to chunk_size - 1 at most,
    # so step is always >= 1.
    step = chunk_size - overlap_size(chunk_size, overlap_percentage)
    length = len(content)

    chunks: list[TextChunk] = []
    start = 0
    index = 0

    while start < length:
        end = min(start + chunk_size, length)
        chunks.append(
            TextChunk(
                index=index,
                content=content[start:end],
                start_index=start,
                end_index=end,
            )
        )
        if end == length:
            break
        start += step
        index += 1

    return chunks


def chunk_file(
    path: str | Path,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap_percentage: float = DEFAULT_OVERLAP_PERCENTAGE,
    *,
    encoding: str = "utf-8",
) -> list[TextChunk]:
    """
    Read a text file and split it into overlapping windows.

    Raises:
        InvalidArgumentError: If chunk_size or overlap_percentage is out of range
        OSError: If the file cannot be read
    """
    _validate(chunk_size, overlap_percentage)
    path = Path(path)
    content = path.read_text(encoding=encoding)
    chunks = chunk_text(content, chunk_size, overlap_percentage)
    logger.debug(f"Chunked {path.name}: {len(content)} chars -> {len(chunks)} chunks")
    return chunks
