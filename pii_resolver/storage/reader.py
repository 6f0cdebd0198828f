"""
Extraction Reader

Read-only queries over a persisted corpus.

Example:
    >>> reader = ExtractionReader()
    >>> reader.load_from_file("data/pii-extraction-results-1700000000000.json")
    >>> ssns = reader.query(pii_type="ssn", confidence="high")
    >>> stats = reader.get_statistics()
    >>> print(stats.total_pii_candidates, stats.pii_by_type)
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path

from pii_resolver.errors import InvalidArgumentError, NotLoadedError
from pii_resolver.storage.json_store import load_extraction_results
from pii_resolver.types import (
    AggregatedPIIType,
    Confidence,
    ConfidenceBreakdown,
    ExtractionResults,
    ExtractionStats,
    FileSummary,
    IndividualRecord,
    PIIAggregation,
    PIICandidate,
)

logger = logging.getLogger(__name__)


def _breakdown(candidates: list[PIICandidate]) -> ConfidenceBreakdown:
    breakdown = ConfidenceBreakdown()
    for candidate in candidates:
        breakdown.add(candidate.confidence)
    return breakdown


def _contexts(candidates: list[PIICandidate]) -> list[str]:
    return [c.context for c in candidates if c.context is not None]


class ExtractionReader:
    """Query helper over one loaded ExtractionResults corpus."""

    def __init__(self, results: ExtractionResults | None = None) -> None:
        self._data: ExtractionResults | None = results

    def load_from_file(self, path: str | Path) -> ExtractionResults:
        """Load and validate a corpus file, replacing any loaded data."""
        self._data = load_extraction_results(path)
        logger.debug(f"Loaded {len(self._data.files)} documents from {path}")
        return self._data

    def load(self, results: ExtractionResults) -> None:
        self._data = results

    @property
    def is_loaded(self) -> bool:
        return self._data is not None

    def _require(self) -> ExtractionResults:
        if self._data is None:
            raise NotLoadedError("No data loaded. Call load_from_file() first.")
        return self._data

    # === Documents ===

    def get_all_results(self) -> ExtractionResults:
        return self._require()

    def get_by_file_name(self, file_name: str) -> list[PIICandidate]:
        """Candidates of the document with exactly this name ([] if absent)."""
        for record in self._require().files:
            if record.file_name == file_name:
                return list(record.pii_candidates)
        return []

    def get_by_file_index(self, file_index: int) -> IndividualRecord:
        files = self._require().files
        if file_index < 0 or file_index >= len(files):
            raise InvalidArgumentError(
                f"File index {file_index} out of bounds (0-{len(files) - 1})"
            )
        return files[file_index]

    # === Candidates ===

    def get_all_candidates(self) -> list[PIICandidate]:
        return [c for record in self._require().files for c in record.pii_candidates]

    def query(
        self,
        *,
        confidence: Confidence | None = None,
        pii_type: str | None = None,
        file_name: str | None = None,
        search_value: str | None = None,
    ) -> list[PIICandidate]:
        """
        Filter candidates. All given filters must match.

        Args:
            confidence: Exact confidence level
            pii_type: Case-insensitive substring of pii_type
            file_name: Substring of a file name; only the first matching
                document is searched
            search_value: Case-insensitive substring of value
        """
        data = self._require()

        if file_name:
            record = next((f for f in data.files if file_name in f.file_name), None)
            candidates = list(record.pii_candidates) if record else []
        else:
            candidates = self.get_all_candidates()

        if confidence:
            candidates = [c for c in candidates if c.confidence == confidence]
        if pii_type:
            needle = pii_type.lower()
            candidates = [c for c in candidates if needle in c.pii_type.lower()]
        if search_value:
            needle = search_value.lower()
            candidates = [c for c in candidates if needle in c.value.lower()]

        return candidates

    def get_unique_types(self) -> list[str]:
        return sorted({c.pii_type for c in self.get_all_candidates()})

    def get_by_type(self, pii_type: str) -> list[PIICandidate]:
        """Candidates whose pii_type equals pii_type exactly."""
        return [c for c in self.get_all_candidates() if c.pii_type == pii_type]

    def get_by_confidence(self, confidence: Confidence) -> list[PIICandidate]:
        return [c for c in self.get_all_candidates() if c.confidence == confidence]

    # === Statistics ===

    def get_statistics(self) -> ExtractionStats:
        data = self._require()
        candidates = self.get_all_candidates()

        return ExtractionStats(
            total_files=len(data.files),
            total_pii_candidates=len(candidates),
            pii_by_confidence=_breakdown(candidates),
            pii_by_type=dict(Counter(c.pii_type for c in candidates)),
            files_summary=[
                FileSummary(
                    file_name=record.file_name,
                    total_pii=len(record.pii_candidates),
                    confidence_breakdown=_breakdown(record.pii_candidates),
                )
                for record in data.files
            ],
        )

    # === Contexts ===

    def get_all_contexts(self) -> list[str]:
        return _contexts(self.get_all_candidates())

    def get_unique_contexts(self) -> list[str]:
        return sorted(set(self.get_all_contexts()))

    def _aggregate(self, pii_type: str, candidates: list[PIICandidate]) -> AggregatedPIIType:
        contexts = _contexts(candidates)
        return AggregatedPIIType(
            pii_type=pii_type,
            count=len(candidates),
            contexts=contexts,
            unique_contexts=list(dict.fromkeys(contexts)),
            confidence_breakdown=_breakdown(candidates),
        )

    def aggregate_types(self) -> PIIAggregation:
        """Per-type aggregation, most frequent type first."""
        by_type: dict[str, list[PIICandidate]] = {}
        for candidate in self.get_all_candidates():
            by_type.setdefault(candidate.pii_type, []).append(candidate)

        aggregated = [self._aggregate(t, cs) for t, cs in by_type.items()]
        aggregated.sort(key=lambda a: a.count, reverse=True)

        return PIIAggregation(
            pii_types=aggregated,
            all_contexts=self.get_all_contexts(),
            unique_contexts=self.get_unique_contexts(),
        )

    def get_aggregated_type(self, pii_type: str) -> AggregatedPIIType | None:
        candidates = self.get_by_type(pii_type)
        if not candidates:
            return None
        return self._aggregate(pii_type, candidates)
