"""
Chunk Types

Chunks are overlapping character windows over a document's text.

Models:
    - TextChunk: One window produced by the chunker
    - ChunkExtraction: Outcome of the oracle call for one chunk
"""

from pydantic import BaseModel, Field

from pii_resolver.types.candidates import PIIExtractionResult


class TextChunk(BaseModel):
    """
    A window of document text.

    Attributes:
        index: Order within document (0-indexed)
        content: The text content of the window
        start_index: Offset of the first character (inclusive)
        end_index: Offset after the last character (exclusive)
    """

    index: int
    content: str
    start_index: int
    end_index: int

    @property
    def length(self) -> int:
        """Number of characters in the window."""
        return self.end_index - self.start_index


class ChunkExtraction(BaseModel):
    """
    Result of running the oracle on one chunk.

    Exactly one of result/error is set. A failed chunk keeps its slot so
    callers can restore chunk-index order after concurrent extraction.
    """

    index: int = Field(..., description="Index of the chunk this result belongs to")
    result: PIIExtractionResult | None = Field(
        default=None, description="Validated oracle output (None on failure)"
    )
    error: str | None = Field(default=None, description="Failure message (None on success)")

    @property
    def ok(self) -> bool:
        """True if the oracle call succeeded."""
        return self.result is not None
