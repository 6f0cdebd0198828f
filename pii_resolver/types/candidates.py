"""
Candidate and Corpus Types

PII candidates as reported by the extraction oracle, and the per-document
records that carry them.

Extraction Models (oracle output, one per chunk):
    - PIICandidate: A single reported PII value with type and confidence
    - PIIExtractionResult: Structured output schema for one chunk

Corpus Models (persisted as JSON):
    - IndividualRecord: One scanned document with its identity fields
    - ExtractionResults: A whole corpus of IndividualRecords

Resolution Models:
    - PIIOccurrence: A candidate tagged with its source document
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Confidence labels reported by the oracle, ordered low < medium < high
Confidence = Literal["high", "medium", "low"]

CONFIDENCE_ORDER: dict[str, int] = {"low": 0, "medium": 1, "high": 2}


class PIICandidate(BaseModel):
    """
    A single piece of PII reported by the extraction oracle.

    pii_type is a free-form label chosen by the oracle, not a fixed enum.
    Two chunks can therefore describe the same value with different labels.
    """

    value: str = Field(..., description="The actual PII value found in the document")
    pii_type: str = Field(..., description="The type or category of PII detected")
    confidence: Confidence = Field(
        ..., description="Confidence level that this is actually PII"
    )
    context: str | None = Field(
        default=None, description="Brief context where this PII was found"
    )

    model_config = ConfigDict(frozen=True)


class PIIExtractionResult(BaseModel):
    """
    Structured oracle output for one chunk of text.

    name/address/phone are the primary identity of the individual the
    document is about; pii_candidates holds everything else.
    """

    name: str | None = Field(default=None, description="Full name of the individual")
    address: str | None = Field(
        default=None, description="Complete address of the individual"
    )
    phone: str | None = Field(default=None, description="Phone number of the individual")
    pii_candidates: list[PIICandidate] = Field(
        default_factory=list, description="Array of detected PII candidates"
    )


class IndividualRecord(BaseModel):
    """
    One scanned document.

    Attributes:
        file_name: Base name of the source file
        file_path: Full path of the source file
        name: Primary identity name (first chunk that reported one)
        address: Primary identity address
        phone: Primary identity phone
        pii_candidates: Deduplicated candidates for the whole document
    """

    file_name: str
    file_path: str
    name: str | None = None
    address: str | None = None
    phone: str | None = None
    pii_candidates: list[PIICandidate] = Field(default_factory=list)

    def identity_fields(self) -> dict[str, str]:
        """Return the non-empty identity fields keyed by field name."""
        fields = {"name": self.name, "address": self.address, "phone": self.phone}
        return {key: value for key, value in fields.items() if value}


class ExtractionResults(BaseModel):
    """
    A persisted corpus of scanned documents.

    This is the JSON document written by the scan workflow and consumed
    by the resolution engine and the reader.
    """

    timestamp: str
    total_files_processed: int
    total_pii_found: int
    files: list[IndividualRecord] = Field(default_factory=list)


class PIIOccurrence(BaseModel):
    """A candidate tagged with the document it was found in."""

    candidate: PIICandidate
    file_name: str
    file_path: str

    model_config = ConfigDict(frozen=True)
