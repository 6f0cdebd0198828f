"""
Result Types

Types produced by scanning, resolution, and the extraction reader.

Scan Result Models:
    - DocumentScanResult: Chunk-level results and deduplicated candidates for one document

Resolution Models (rebuilt on every resolve() call, never persisted):
    - ResolutionOptions: Filters and grouping switches
    - ValueGroup: Occurrences sharing one value, any type
    - TypeGroup: Occurrences sharing one type, any value
    - IdentityGroup / IdentityGroups: Documents sharing a name, address or phone
    - CanonicalType: A type label merged with its observed synonyms
    - PIIConflict: A flagged disagreement for downstream review
    - ResolutionSummary / ResolutionResult: Output of one resolution run

Reader Models:
    - ConfidenceBreakdown: high/medium/low tally
    - ExtractionStats, FileSummary: Corpus statistics
    - AggregatedPIIType, PIIAggregation: Per-type context aggregation
"""

from typing import Literal

from pydantic import BaseModel, Field

from pii_resolver.types.candidates import (
    Confidence,
    IndividualRecord,
    PIICandidate,
    PIIExtractionResult,
    PIIOccurrence,
)

IdentityField = Literal["name", "address", "phone"]
ConflictType = Literal["value_type_mismatch", "type_value_mismatch", "confidence_issue"]
Severity = Literal["high", "medium", "low"]


class ConfidenceBreakdown(BaseModel):
    """Count of occurrences per confidence level."""

    high: int = 0
    medium: int = 0
    low: int = 0

    @property
    def total(self) -> int:
        return self.high + self.medium + self.low

    def add(self, confidence: Confidence) -> None:
        """Increment the tally for one confidence level."""
        setattr(self, confidence, getattr(self, confidence) + 1)


# -----------------------------------------------------------------------------
# Scan Result Models
# -----------------------------------------------------------------------------


class DocumentScanResult(BaseModel):
    """
    Result of scanning one document chunk by chunk.

    Attributes:
        file_name: Base name of the scanned document
        file_path: Full path of the scanned document
        chunks_scanned: Number of chunks produced by the chunker
        chunks_failed: Number of chunks whose oracle call failed
        total_pii_found: Number of candidates after deduplication
        results: Raw oracle output of every successful chunk, in chunk order
        combined_pii: Deduplicated candidates across all chunks
        name: Identity name from the first chunk that reported one
        address: Identity address from the first chunk that reported one
        phone: Identity phone from the first chunk that reported one
        errors: Per-chunk failure messages (non-fatal)
    """

    file_name: str
    file_path: str
    chunks_scanned: int = 0
    chunks_failed: int = 0
    total_pii_found: int = 0
    results: list[PIIExtractionResult] = Field(default_factory=list)
    combined_pii: list[PIICandidate] = Field(default_factory=list)
    name: str | None = None
    address: str | None = None
    phone: str | None = None
    errors: list[str] = Field(default_factory=list)

    def to_record(self) -> IndividualRecord:
        """Convert to the persisted per-document record."""
        return IndividualRecord(
            file_name=self.file_name,
            file_path=self.file_path,
            name=self.name,
            address=self.address,
            phone=self.phone,
            pii_candidates=list(self.combined_pii),
        )


# -----------------------------------------------------------------------------
# Resolution Models
# -----------------------------------------------------------------------------


class ResolutionOptions(BaseModel):
    """
    Options for one resolution run.

    Attributes:
        ambiguous_only: Drop high-confidence candidates before grouping
        min_confidence: Drop candidates below this level (low < medium < high)
        include_high_confidence_in_conflicts: Recorded with the result for
            downstream reviewers; conflict emission rules do not read it
        normalize_values: Trim + lowercase values to build grouping keys
        transitive_canonical: Merge type labels across multi-hop chains
            instead of only directly co-occurring labels
    """

    ambiguous_only: bool = False
    min_confidence: Confidence | None = None
    include_high_confidence_in_conflicts: bool = True
    normalize_values: bool = True
    transitive_canonical: bool = False


class ValueGroup(BaseModel):
    """
    All occurrences sharing one (normalized) value, regardless of type.

    value keeps the first-seen original spelling for display.
    """

    value: str
    pii_types: list[str] = Field(default_factory=list)
    contexts: list[str] = Field(default_factory=list)
    all_contexts: list[str] = Field(default_factory=list)
    confidence_breakdown: ConfidenceBreakdown = Field(default_factory=ConfidenceBreakdown)
    files: list[str] = Field(default_factory=list)
    occurrences: list[PIIOccurrence] = Field(default_factory=list)
    is_ambiguous: bool = False
    has_type_conflict: bool = False

    @property
    def occurrence_count(self) -> int:
        return len(self.occurrences)


class TypeGroup(BaseModel):
    """
    All occurrences sharing one pii_type, regardless of value.

    values holds the distinct original values in first-seen order;
    distinctness honours the run's normalize_values option.
    """

    pii_type: str
    values: list[str] = Field(default_factory=list)
    unique_value_count: int = 0
    contexts: list[str] = Field(default_factory=list)
    all_contexts: list[str] = Field(default_factory=list)
    confidence_breakdown: ConfidenceBreakdown = Field(default_factory=ConfidenceBreakdown)
    files: list[str] = Field(default_factory=list)
    occurrences: list[PIIOccurrence] = Field(default_factory=list)
    is_ambiguous: bool = False
    has_value_conflict: bool = False

    @property
    def occurrence_count(self) -> int:
        return len(self.occurrences)


class FileRef(BaseModel):
    """Reference to a source document."""

    file_name: str
    file_path: str


class IdentityGroup(BaseModel):
    """Documents that share one primary identity value."""

    value: str
    field: IdentityField
    files: list[FileRef] = Field(default_factory=list)
    count: int = 0


class IdentityGroups(BaseModel):
    """Identity groups keyed by (optionally normalized) value, per field."""

    name: dict[str, IdentityGroup] = Field(default_factory=dict)
    address: dict[str, IdentityGroup] = Field(default_factory=dict)
    phone: dict[str, IdentityGroup] = Field(default_factory=dict)

    def by_field(self, field: IdentityField) -> dict[str, IdentityGroup]:
        return getattr(self, field)

    def shared(self) -> list[IdentityGroup]:
        """Groups that link more than one document."""
        return [
            group
            for groups in (self.name, self.address, self.phone)
            for group in groups.values()
            if group.count > 1
        ]

    @property
    def total(self) -> int:
        return len(self.name) + len(self.address) + len(self.phone)


class CanonicalType(BaseModel):
    """
    A pii_type merged with the labels observed on the same values.

    Attributes:
        canonical_type: The type label this entry is keyed by
        all_type_names: Sorted labels merged into this entry (includes canonical_type)
        total_occurrences: Occurrences of canonical_type in the run
        unique_values_count: Distinct values of canonical_type
        confidence_breakdown: Confidence tally of canonical_type
        files: Files where canonical_type appears
        value_match_count: Distinct values that linked this type to another label
    """

    canonical_type: str
    all_type_names: list[str] = Field(default_factory=list)
    total_occurrences: int = 0
    unique_values_count: int = 0
    confidence_breakdown: ConfidenceBreakdown = Field(default_factory=ConfidenceBreakdown)
    files: list[str] = Field(default_factory=list)
    value_match_count: int = 0

    @property
    def is_merged(self) -> bool:
        return len(self.all_type_names) > 1


class PIIConflict(BaseModel):
    """
    A disagreement between grouped occurrences.

    Conflicts are never deduplicated against each other: one value can
    produce a value_type_mismatch and several confidence_issue records.
    """

    conflict_type: ConflictType
    description: str
    value: str | None = None
    pii_type: str | None = None
    files: list[str] = Field(default_factory=list)
    severity: Severity
    occurrences: list[PIIOccurrence] = Field(default_factory=list)


class ResolutionSummary(BaseModel):
    """Headline counts for one resolution run."""

    total_ambiguous_candidates: int = 0
    total_value_groups: int = 0
    total_type_groups: int = 0
    value_conflicts_count: int = 0
    type_conflicts_count: int = 0
    total_conflicts: int = 0
    total_canonical_types: int = 0
    total_identity_groups: int = 0


class ResolutionResult(BaseModel):
    """
    Output of PIIResolutionEngine.resolve().

    Dict-valued fields keep insertion order (first-seen order in the corpus).
    Callers that need another display order should sort the values.
    """

    value_groups: dict[str, ValueGroup] = Field(default_factory=dict)
    type_groups: dict[str, TypeGroup] = Field(default_factory=dict)
    identity_groups: IdentityGroups = Field(default_factory=IdentityGroups)
    canonical_schema: dict[str, CanonicalType] = Field(default_factory=dict)
    conflicts: list[PIIConflict] = Field(default_factory=list)
    summary: ResolutionSummary = Field(default_factory=ResolutionSummary)
    options: ResolutionOptions = Field(default_factory=ResolutionOptions)

    def conflicts_of(self, conflict_type: ConflictType) -> list[PIIConflict]:
        return [c for c in self.conflicts if c.conflict_type == conflict_type]


# -----------------------------------------------------------------------------
# Reader Models
# -----------------------------------------------------------------------------


class FileSummary(BaseModel):
    """Candidate counts for one document."""

    file_name: str
    total_pii: int
    confidence_breakdown: ConfidenceBreakdown


class ExtractionStats(BaseModel):
    """Statistics over a loaded corpus."""

    total_files: int
    total_pii_candidates: int
    pii_by_confidence: ConfidenceBreakdown
    pii_by_type: dict[str, int] = Field(default_factory=dict)
    files_summary: list[FileSummary] = Field(default_factory=list)


class AggregatedPIIType(BaseModel):
    """All candidates of one pii_type with their contexts."""

    pii_type: str
    count: int
    contexts: list[str] = Field(default_factory=list)
    unique_contexts: list[str] = Field(default_factory=list)
    confidence_breakdown: ConfidenceBreakdown = Field(default_factory=ConfidenceBreakdown)


class PIIAggregation(BaseModel):
    """Per-type aggregation plus corpus-wide contexts."""

    pii_types: list[AggregatedPIIType] = Field(default_factory=list)
    all_contexts: list[str] = Field(default_factory=list)
    unique_contexts: list[str] = Field(default_factory=list)
