"""
PII Resolution

Two levels of reconciliation:

Modules:
    chunk_dedup: In-document merge of overlapping chunk results
    grouping: Cross-document value groups and type groups
    identity: Documents sharing a name, address or phone
    canonical: Type-label synonymy from shared values
    conflicts: Disagreements flagged for review
    engine: PIIResolutionEngine tying the stages together

In-Document (per scan):
    - Key = lowercase(value) + "_" + pii_type
    - High confidence replaces an earlier entry; nothing downgrades it
    - Identity fields from the first chunk that reports them

Cross-Document (per resolve()):
    - Identity-typed candidates and a record's own identity values are excluded
    - Groups, schema and conflicts are rebuilt from scratch every run
"""

from pii_resolver.ingestion.resolution.canonical import build_canonical_schema
from pii_resolver.ingestion.resolution.chunk_dedup import (
    deduplicate_candidates,
    deduplicate_chunk_results,
)
from pii_resolver.ingestion.resolution.conflicts import detect_conflicts
from pii_resolver.ingestion.resolution.engine import PIIResolutionEngine
from pii_resolver.ingestion.resolution.grouping import group_occurrences
from pii_resolver.ingestion.resolution.identity import group_by_identity

__all__ = [
    "PIIResolutionEngine",
    "build_canonical_schema",
    "deduplicate_candidates",
    "deduplicate_chunk_results",
    "detect_conflicts",
    "group_by_identity",
    "group_occurrences",
]
