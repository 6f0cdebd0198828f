"""
Type Definitions

Pydantic models for all data structures.

Extraction Models (oracle output):
    - PIICandidate, PIIExtractionResult - Raw per-chunk output
    - TextChunk, ChunkExtraction - Chunker windows and their oracle outcome

Corpus Models (persisted as JSON):
    - IndividualRecord - One scanned document
    - ExtractionResults - A whole corpus

Resolution Models (derived per run, never persisted):
    - PIIOccurrence - Candidate tagged with its source document
    - ValueGroup, TypeGroup, IdentityGroup(s) - Cross-document clusters
    - CanonicalType - Merged type label
    - PIIConflict - Flagged disagreement
    - ResolutionOptions, ResolutionSummary, ResolutionResult

All types are:
    - Pydantic BaseModel subclasses
    - Serializable to/from JSON
"""

from pii_resolver.types.candidates import (
    CONFIDENCE_ORDER,
    Confidence,
    ExtractionResults,
    IndividualRecord,
    PIICandidate,
    PIIExtractionResult,
    PIIOccurrence,
)
from pii_resolver.types.chunks import ChunkExtraction, TextChunk
from pii_resolver.types.results import (
    AggregatedPIIType,
    CanonicalType,
    ConfidenceBreakdown,
    ConflictType,
    DocumentScanResult,
    ExtractionStats,
    FileRef,
    FileSummary,
    IdentityField,
    IdentityGroup,
    IdentityGroups,
    PIIAggregation,
    PIIConflict,
    ResolutionOptions,
    ResolutionResult,
    ResolutionSummary,
    Severity,
    TypeGroup,
    ValueGroup,
)

__all__ = [
    # Extraction Models
    "Confidence",
    "CONFIDENCE_ORDER",
    "PIICandidate",
    "PIIExtractionResult",
    "TextChunk",
    "ChunkExtraction",
    # Corpus Models
    "IndividualRecord",
    "ExtractionResults",
    "DocumentScanResult",
    # Resolution Models
    "PIIOccurrence",
    "ResolutionOptions",
    "ValueGroup",
    "TypeGroup",
    "FileRef",
    "IdentityField",
    "IdentityGroup",
    "IdentityGroups",
    "CanonicalType",
    "ConflictType",
    "Severity",
    "PIIConflict",
    "ResolutionSummary",
    "ResolutionResult",
    # Reader Models
    "ConfidenceBreakdown",
    "FileSummary",
    "ExtractionStats",
    "AggregatedPIIType",
    "PIIAggregation",
]
