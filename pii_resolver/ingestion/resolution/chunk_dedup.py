"""
In-Document Chunk Deduplication

Overlapping windows make the oracle report the same value more than once
per document. This module folds a document's per-chunk results into one
combined result.

Rules:
    - Candidates are keyed by lowercase(value) + "_" + pii_type
    - A repeated key is replaced only by a "high" confidence candidate
    - name/address/phone come from the first chunk that reported each

Example:
    >>> combined = deduplicate_chunk_results([chunk0_result, chunk1_result])
    >>> print(f"{len(combined.pii_candidates)} unique candidates")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pii_resolver.types import PIICandidate, PIIExtractionResult

logger = logging.getLogger(__name__)


def candidate_key(candidate: PIICandidate) -> str:
    """Dedup key: value is case-folded, pii_type is kept verbatim."""
    return f"{candidate.value.lower()}_{candidate.pii_type}"


def deduplicate_candidates(candidates: Iterable[PIICandidate]) -> list[PIICandidate]:
    """
    Collapse repeated candidates, letting high confidence win.

    Output keeps the first-seen position of each key, holding whichever
    candidate won for it.
    """
    unique: dict[str, PIICandidate] = {}
    for candidate in candidates:
        key = candidate_key(candidate)
        if key not in unique or candidate.confidence == "high":
            unique[key] = candidate
    return list(unique.values())


def deduplicate_chunk_results(
    results: Iterable[PIIExtractionResult],
) -> PIIExtractionResult:
    """
    Merge one document's chunk results into a single result.

    Args:
        results: Successful chunk results in chunk-index order

    Returns:
        PIIExtractionResult with deduplicated candidates and first-reported
        identity fields
    """
    results = list(results)

    identity: dict[str, str | None] = {"name": None, "address": None, "phone": None}
    for result in results:
        for field in identity:
            if identity[field] is None and getattr(result, field):
                identity[field] = getattr(result, field)

    raw = [c for result in results for c in result.pii_candidates]
    combined = deduplicate_candidates(raw)

    logger.debug(
        f"Chunk dedup: {len(raw)} candidates from {len(results)} chunks -> {len(combined)}"
    )

    return PIIExtractionResult(
        name=identity["name"],
        address=identity["address"],
        phone=identity["phone"],
        pii_candidates=combined,
    )
