"""
PII Resolution Engine

Cross-document resolution of PII candidates.

Pipeline (one resolve() call):
    1. Identity grouping over raw records
    2. Value/type grouping over filtered occurrences
    3. Canonical schema from value groups with several labels
    4. Conflict detection

Everything derived is rebuilt on each call and owned by the returned
ResolutionResult; nothing is carried between runs. load() resets the
engine, so one instance must not be shared by concurrent runs.

Example:
    >>> engine = PIIResolutionEngine()
    >>> engine.load(results)
    >>> resolution = engine.resolve()
    >>> for conflict in resolution.conflicts:
    ...     print(conflict.severity, conflict.description)
"""

from __future__ import annotations

import logging

from pii_resolver.errors import NotLoadedError
from pii_resolver.ingestion.resolution.canonical import build_canonical_schema
from pii_resolver.ingestion.resolution.conflicts import detect_conflicts
from pii_resolver.ingestion.resolution.grouping import group_occurrences
from pii_resolver.ingestion.resolution.identity import group_by_identity
from pii_resolver.types import (
    CONFIDENCE_ORDER,
    ExtractionResults,
    IndividualRecord,
    PIICandidate,
    PIIOccurrence,
    ResolutionOptions,
    ResolutionResult,
    ResolutionSummary,
)
from pii_resolver.utils.text import grouping_key, is_identity_type

logger = logging.getLogger(__name__)


class PIIResolutionEngine:
    """
    Groups, merges and flags PII candidates across a corpus.

    Args:
        options: Default options for load() and resolve()
    """

    def __init__(self, options: ResolutionOptions | None = None) -> None:
        self.options = options or ResolutionOptions()
        self._records: list[IndividualRecord] = []
        self._occurrences: list[PIIOccurrence] = []
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def records(self) -> list[IndividualRecord]:
        return list(self._records)

    @property
    def occurrences(self) -> list[PIIOccurrence]:
        return list(self._occurrences)

    # -------------------------------------------------------------------------
    # Ingestion
    # -------------------------------------------------------------------------

    def load(
        self,
        results: ExtractionResults,
        options: ResolutionOptions | None = None,
    ) -> int:
        """
        Load a corpus, replacing anything loaded before.

        Args:
            results: Extraction results for the whole corpus
            options: Filters to apply (defaults to the engine's options)

        Returns:
            Number of occurrences kept after filtering

        Raises:
            NotLoadedError: If the corpus has no documents
        """
        options = options or self.options

        self._records = []
        self._occurrences = []
        self._loaded = False

        if not results.files:
            raise NotLoadedError("Extraction results contain no documents")

        self._records = list(results.files)
        self.options = options
        self._occurrences = self._filter(options)
        self._loaded = True

        total = sum(len(r.pii_candidates) for r in self._records)
        logger.debug(
            f"Loaded {len(self._records)} records: "
            f"{len(self._occurrences)} occurrences kept, {total - len(self._occurrences)} filtered"
        )
        return len(self._occurrences)

    def _filter(self, options: ResolutionOptions) -> list[PIIOccurrence]:
        return [
            PIIOccurrence(
                candidate=candidate,
                file_name=record.file_name,
                file_path=record.file_path,
            )
            for record in self._records
            for candidate in record.pii_candidates
            if self._keep(candidate, record, options)
        ]

    @staticmethod
    def _keep(
        candidate: PIICandidate,
        record: IndividualRecord,
        options: ResolutionOptions,
    ) -> bool:
        if is_identity_type(candidate.pii_type):
            return False

        # Only this record's own identity, never another document's
        key = grouping_key(candidate.value, options.normalize_values)
        own_identity = {
            grouping_key(value, options.normalize_values)
            for value in record.identity_fields().values()
        }
        if key in own_identity:
            return False

        if options.ambiguous_only and candidate.confidence == "high":
            return False

        if options.min_confidence is not None and (
            CONFIDENCE_ORDER[candidate.confidence] < CONFIDENCE_ORDER[options.min_confidence]
        ):
            return False

        return True

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve(self, options: ResolutionOptions | None = None) -> ResolutionResult:
        """
        Run a full resolution over the loaded occurrences.

        Filters and grouping switches both come from the options given
        here (default: those used at load()).

        Raises:
            NotLoadedError: If nothing is loaded or every candidate was filtered out
        """
        if not self._loaded:
            raise NotLoadedError("No records loaded. Call load() first.")

        options = options or self.options
        occurrences = self._occurrences if options == self.options else self._filter(options)
        if not occurrences:
            raise NotLoadedError("No PII occurrences left to resolve after filtering")
        normalize = options.normalize_values

        identity_groups = group_by_identity(self._records, normalize_values=normalize)
        value_groups, type_groups = group_occurrences(
            occurrences, normalize_values=normalize
        )
        canonical_schema = build_canonical_schema(
            type_groups, value_groups, transitive=options.transitive_canonical
        )
        conflicts = detect_conflicts(value_groups, type_groups, occurrences)

        summary = ResolutionSummary(
            total_ambiguous_candidates=len(occurrences),
            total_value_groups=len(value_groups),
            total_type_groups=len(type_groups),
            value_conflicts_count=sum(1 for g in value_groups.values() if g.has_type_conflict),
            type_conflicts_count=sum(1 for g in type_groups.values() if g.has_value_conflict),
            total_conflicts=len(conflicts),
            total_canonical_types=len(canonical_schema),
            total_identity_groups=identity_groups.total,
        )

        logger.info(
            f"Resolved {summary.total_ambiguous_candidates} occurrences: "
            f"{summary.total_conflicts} conflicts, "
            f"{summary.total_canonical_types} canonical types"
        )

        return ResolutionResult(
            value_groups=value_groups,
            type_groups=type_groups,
            identity_groups=identity_groups,
            canonical_schema=canonical_schema,
            conflicts=conflicts,
            summary=summary,
            options=options,
        )

    def ambiguous_occurrences(self) -> list[PIIOccurrence]:
        """Loaded occurrences with medium or low confidence."""
        if not self._loaded:
            raise NotLoadedError("No records loaded. Call load() first.")
        return [o for o in self._occurrences if o.candidate.confidence != "high"]
